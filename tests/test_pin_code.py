"""Tests for the pin code (device authorization) flow."""

import asyncio
from datetime import datetime, timedelta, timezone

import pytest
from fakes import FakeTransport, json_response, make_controller

from vimeo_client.auth.pin_code import PinCodePoller, is_authorization_pending
from vimeo_client.client.exceptions import AuthenticationError, PinCodeExpiredError
from vimeo_client.errors import LocalErrorCode, classify
from vimeo_client.types.pin_code import PinCodeSession, PinCodeState
from vimeo_client.types.scope import Scope

PIN_CODE_INFO = {
    "user_code": "ABCD12",
    "device_code": "device-xyz",
    "activate_link": "https://vimeo.com/activate",
    "expires_in": 600,
    "interval": 0,
}
TOKEN = {"access_token": "device-token", "scope": "public"}
PENDING = json_response(401, {"error": "authorization_pending"})


def pin_code(expires_in: float = 600, interval: float = 0) -> PinCodeSession:
    return PinCodeSession(
        user_code="ABCD12",
        device_code="device-xyz",
        activate_url="https://vimeo.com/activate",
        expires_at=datetime.now(timezone.utc) + timedelta(seconds=expires_in),
        poll_interval_seconds=interval,
    )


class TestInitiate:
    """Tests for initiate_pin_code()."""

    @pytest.mark.asyncio
    async def test_initiate(self):
        """The initiate response becomes a pending pin code session."""
        transport = FakeTransport(json_response(200, PIN_CODE_INFO))
        controller = make_controller(transport)

        session = await controller.initiate_pin_code([Scope.PUBLIC])

        assert session.user_code == "ABCD12"
        assert session.device_code == "device-xyz"
        assert session.activate_url == "https://vimeo.com/activate"
        assert 590 < session.seconds_remaining() <= 600
        assert transport.calls[0]["url"] == "oauth/device"
        assert transport.calls[0]["body"] == {
            "grant_type": "device_grant",
            "scope": "public",
        }

    @pytest.mark.asyncio
    async def test_missing_field(self):
        """A response without an activate link is a PinCodeInfo error."""
        info = {k: v for k, v in PIN_CODE_INFO.items() if k != "activate_link"}
        controller = make_controller(FakeTransport(json_response(200, info)))

        with pytest.raises(AuthenticationError) as exc_info:
            await controller.initiate_pin_code([Scope.PUBLIC])

        assert exc_info.value.kind.is_local(LocalErrorCode.PIN_CODE_INFO)


class TestPoller:
    """Tests for PinCodePoller."""

    @pytest.mark.asyncio
    async def test_pending_then_authorized(self, session_handle):
        """Pending answers keep polling until the token arrives."""
        transport = FakeTransport(PENDING, PENDING, json_response(200, TOKEN))
        controller = make_controller(transport, session_handle)
        poller = controller.pin_code_poller(pin_code())

        session = await poller.run()

        assert session.access_token == "device-token"
        assert poller.state is PinCodeState.AUTHORIZED
        assert poller.attempts == 3
        assert session_handle.current is session
        assert transport.calls[0]["url"] == "oauth/device/authorize"
        assert transport.calls[0]["body"] == {
            "user_code": "ABCD12",
            "device_code": "device-xyz",
        }

    @pytest.mark.asyncio
    async def test_expired_never_polls(self):
        """An already expired code fails as PinCodeExpired without network."""
        transport = FakeTransport(json_response(200, TOKEN))
        controller = make_controller(transport)
        poller = controller.pin_code_poller(pin_code(expires_in=-1))

        with pytest.raises(PinCodeExpiredError) as exc_info:
            await poller.run()

        assert exc_info.value.kind.is_pin_code_expired
        assert poller.state is PinCodeState.EXPIRED
        assert transport.calls == []

    @pytest.mark.asyncio
    async def test_expires_while_pending(self):
        """Expiry reached between polls stops the loop."""
        transport = FakeTransport(PENDING)
        controller = make_controller(transport)
        start = datetime.now(timezone.utc)
        ticks = iter(range(100))

        def clock():
            # Each check advances a minute; the code lives five minutes
            return start + timedelta(minutes=next(ticks))

        code = PinCodeSession(
            user_code="A",
            device_code="D",
            activate_url="https://vimeo.com/activate",
            expires_at=start + timedelta(minutes=5),
            poll_interval_seconds=0,
        )
        poller = controller.pin_code_poller(code, clock=clock)

        with pytest.raises(PinCodeExpiredError):
            await poller.run()

        assert poller.state is PinCodeState.EXPIRED
        assert 0 < len(transport.calls) < 5

    @pytest.mark.asyncio
    async def test_expiry_cuts_wait_short(self):
        """A code expiring during a long interval fails at expiry, not after it."""
        transport = FakeTransport(PENDING)
        controller = make_controller(transport)
        poller = controller.pin_code_poller(pin_code(expires_in=0.05, interval=60))

        with pytest.raises(PinCodeExpiredError):
            await asyncio.wait_for(poller.run(), timeout=1)

        assert poller.state is PinCodeState.EXPIRED
        assert transport.calls == []

    @pytest.mark.asyncio
    async def test_cancel_before_run(self):
        """A cancelled poller stops without error and without polling."""
        transport = FakeTransport(json_response(200, TOKEN))
        controller = make_controller(transport)
        poller = controller.pin_code_poller(pin_code())
        poller.cancel()

        assert await poller.run() is None
        assert poller.state is PinCodeState.CANCELLED
        assert transport.calls == []

    @pytest.mark.asyncio
    async def test_cancel_interrupts_wait(self, session_handle):
        """Cancelling during a long poll interval returns promptly."""
        transport = FakeTransport(json_response(200, TOKEN))
        controller = make_controller(transport, session_handle)
        poller = controller.pin_code_poller(pin_code(interval=60))

        task = asyncio.create_task(poller.run())
        await asyncio.sleep(0.01)
        controller.cancel_pin_code()

        assert await asyncio.wait_for(task, timeout=1) is None
        assert poller.state is PinCodeState.CANCELLED
        assert transport.calls == []
        assert session_handle.current is None

    @pytest.mark.asyncio
    async def test_task_cancellation(self):
        """Cancelling the task marks the poller cancelled and propagates."""
        controller = make_controller(FakeTransport(PENDING))
        poller = controller.pin_code_poller(pin_code(interval=60))

        task = asyncio.create_task(poller.run())
        await asyncio.sleep(0.01)
        task.cancel()

        with pytest.raises(asyncio.CancelledError):
            await task
        assert poller.state is PinCodeState.CANCELLED

    @pytest.mark.asyncio
    async def test_other_failure_is_terminal(self):
        """Anything but pending stops polling and is raised."""
        transport = FakeTransport(PENDING, json_response(400, {"error_code": 2204}))
        controller = make_controller(transport)
        poller = controller.pin_code_poller(pin_code())

        with pytest.raises(AuthenticationError) as exc_info:
            await poller.run()

        assert exc_info.value.kind.code == 2204
        assert poller.state is PinCodeState.FAILED
        assert len(transport.calls) == 2

    @pytest.mark.asyncio
    async def test_success_without_token(self):
        """An authorize success lacking a token is an AuthToken failure."""
        controller = make_controller(FakeTransport(json_response(200, {})))
        poller = controller.pin_code_poller(pin_code())

        with pytest.raises(AuthenticationError) as exc_info:
            await poller.run()

        assert exc_info.value.kind.is_local(LocalErrorCode.AUTH_TOKEN)

    @pytest.mark.asyncio
    async def test_cannot_run_twice(self):
        """A finished poller refuses to run again."""
        controller = make_controller(FakeTransport(json_response(200, TOKEN)))
        poller = controller.pin_code_poller(pin_code())
        await poller.run()

        with pytest.raises(RuntimeError):
            await poller.run()

    def test_min_interval(self):
        """The effective interval is never below the configured floor."""
        controller = make_controller(FakeTransport())
        poller = PinCodePoller(controller, pin_code(interval=1), min_interval=5)
        assert poller.interval == 5


class TestAuthenticatePinCode:
    """Tests for authenticate_pin_code()."""

    @pytest.mark.asyncio
    async def test_full_flow(self, session_handle):
        """Initiate, report the code, poll, install."""
        transport = FakeTransport(
            json_response(200, PIN_CODE_INFO), PENDING, json_response(200, TOKEN)
        )
        controller = make_controller(transport, session_handle)
        shown = []

        async def show(code: PinCodeSession) -> None:
            shown.append(code.user_code)

        session = await controller.authenticate_pin_code([Scope.PUBLIC], on_code=show)

        assert shown == ["ABCD12"]
        assert session_handle.current is session
        assert controller.active_pin_code is None


class TestAuthorizationPending:
    """Tests for is_authorization_pending()."""

    def test_pending_payload(self):
        """The pending error string is recognized on any status."""
        kind = classify(http_status=400, payload={"error": "authorization_pending"})
        assert is_authorization_pending(kind) is True

    def test_unauthorized(self):
        """A bare 401 means the user has not authorized yet."""
        assert is_authorization_pending(classify(http_status=401)) is True

    def test_server_code_overrides_pending(self):
        """A server error code wins over the pending error string."""
        kind = classify(
            http_status=400,
            payload={"error": "authorization_pending", "error_code": 2204},
        )
        assert is_authorization_pending(kind) is False

    def test_other(self):
        """Other failures are not pending."""
        assert is_authorization_pending(classify(http_status=403)) is False
        assert (
            is_authorization_pending(
                classify(http_status=401, payload={"error_code": 5001})
            )
            is False
        )
