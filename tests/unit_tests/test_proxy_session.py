# -*- coding: utf-8 -*-
"""
會話上下文測試
"""

import pytest

from fakes import BASE_URL, FakeHTTP
from twstock_tracker.data.proxy_session import ConnectionState, ProxySession, build_http_session
from twstock_tracker.exceptions import PreconditionError


def test_initial_state():
    session = ProxySession(BASE_URL + "/", http=FakeHTTP())
    assert session.base_url == BASE_URL
    assert session.state == ConnectionState.DISCONNECTED
    assert not session.is_ready()
    assert session.loading is False


def test_manual_override():
    session = ProxySession(BASE_URL, http=FakeHTTP())
    session.use_manual()
    assert session.state == ConnectionState.MANUAL
    assert session.is_ready()
    session.require_ready()


def test_manual_override_requires_url():
    session = ProxySession("", http=FakeHTTP())
    with pytest.raises(PreconditionError):
        session.use_manual()
    assert session.state == ConnectionState.DISCONNECTED


def test_set_base_url_resets_state():
    session = ProxySession(BASE_URL, http=FakeHTTP())
    session.use_manual()
    session.set_base_url("https://other.example.com/")
    assert session.base_url == "https://other.example.com"
    assert session.state == ConnectionState.DISCONNECTED


def test_require_ready_messages():
    with pytest.raises(PreconditionError, match="後端服務器地址"):
        ProxySession("", http=FakeHTTP()).require_ready()
    with pytest.raises(PreconditionError, match="測試連接"):
        ProxySession(BASE_URL, http=FakeHTTP()).require_ready()


def test_build_http_session_headers():
    http = build_http_session()
    try:
        assert http.headers["Accept"] == "application/json"
        assert "Mozilla" in http.headers["User-Agent"]
    finally:
        http.close()
