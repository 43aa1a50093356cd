"""Device authorization (pin code) polling."""

import asyncio
import logging
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Callable

from vimeo_client.client.exceptions import AuthenticationError, PinCodeExpiredError
from vimeo_client.errors import ErrorDomain, ErrorKind, HTTPStatusCode
from vimeo_client.types.auth_session import AuthSession
from vimeo_client.types.pin_code import PinCodeSession, PinCodeState

if TYPE_CHECKING:
    from vimeo_client.auth.controller import AuthenticationController

logger = logging.getLogger(__name__)

AUTHORIZATION_PENDING = "authorization_pending"


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def is_authorization_pending(kind: ErrorKind) -> bool:
    """The user has not entered the code yet; the server answers 401 meanwhile."""
    if kind.domain is ErrorDomain.SERVER_REPORTED:
        return False
    payload = kind.underlying
    if isinstance(payload, dict) and payload.get("error") == AUTHORIZATION_PENDING:
        return True
    return (
        kind.domain is ErrorDomain.HTTP_STATUS
        and kind.code == HTTPStatusCode.UNAUTHORIZED
    )


class PinCodePoller:
    """Polls a pending pin code until it is authorized, expires or is cancelled.

    State moves from PENDING to exactly one of AUTHORIZED, EXPIRED, CANCELLED
    or FAILED. Expiry is checked before every wait and again before every
    poll, so an expired code never reaches the network.
    """

    def __init__(
        self,
        controller: "AuthenticationController",
        pin_code: PinCodeSession,
        *,
        clock: Callable[[], datetime] = utc_now,
        min_interval: float = 0.0,
    ):
        self.controller = controller
        self.pin_code = pin_code
        self.clock = clock
        self.interval = max(pin_code.poll_interval_seconds, min_interval)
        self.state = PinCodeState.PENDING
        self.attempts = 0
        self._cancelled = asyncio.Event()

    def cancel(self) -> None:
        """Request cancellation; a pending wait returns immediately."""
        self._cancelled.set()

    @property
    def is_cancelled(self) -> bool:
        return self._cancelled.is_set()

    async def run(self) -> AuthSession | None:
        if self.state.is_terminal:
            raise RuntimeError(f"Pin code poller already finished ({self.state.value})")

        try:
            while True:
                self._raise_if_expired()
                if await self._wait():
                    return self._finish_cancelled()
                self._raise_if_expired()

                self.attempts += 1
                logger.debug(f"Polling pin code authorization, attempt {self.attempts}")
                try:
                    session = await self.controller.exchange_pin_code(self.pin_code)
                except AuthenticationError as e:
                    if self.is_cancelled:
                        return self._finish_cancelled()
                    if is_authorization_pending(e.kind):
                        continue
                    self.state = PinCodeState.FAILED
                    raise

                if self.is_cancelled:
                    return self._finish_cancelled()
                self.state = PinCodeState.AUTHORIZED
                self.controller.install(session)
                return session
        except asyncio.CancelledError:
            self.state = PinCodeState.CANCELLED
            raise

    async def _wait(self) -> bool:
        """Sleep one poll interval; True when cancelled meanwhile."""
        if self.is_cancelled:
            return True
        # Never sleep past the expiry
        timeout = min(self.interval, self.pin_code.seconds_remaining(self.clock()))
        try:
            await asyncio.wait_for(self._cancelled.wait(), timeout=timeout)
        except asyncio.TimeoutError:
            return False
        return True

    def _raise_if_expired(self) -> None:
        if self.pin_code.is_expired(self.clock()):
            self.state = PinCodeState.EXPIRED
            logger.info("Pin code expired before it was authorized")
            raise PinCodeExpiredError()

    def _finish_cancelled(self) -> AuthSession | None:
        self.state = PinCodeState.CANCELLED
        logger.debug("Pin code polling cancelled")
        return None
