import pytest

from vimeo_client.auth.session import AuthSessionHandle
from vimeo_client.client.cache import MemoryCacheStore
from vimeo_client.client.exceptions import TransportError


@pytest.fixture
def transport_failure():
    return TransportError("connection refused")


@pytest.fixture
def cache():
    return MemoryCacheStore()


@pytest.fixture
def session_handle():
    return AuthSessionHandle()
