# -*- coding: utf-8 -*-
import pytest

from fakes import BASE_URL, FakeClock, FakeHTTP
from twstock_tracker.data.proxy_session import ProxySession


@pytest.fixture
def fake_http() -> FakeHTTP:
    return FakeHTTP()


@pytest.fixture
def session(fake_http) -> ProxySession:
    return ProxySession(BASE_URL, timeout=5, http=fake_http)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()
