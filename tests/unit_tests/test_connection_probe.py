# -*- coding: utf-8 -*-
"""
後端連線測試
"""

import pytest
import requests

from fakes import BASE_URL, make_response
from twstock_tracker.data.connection_probe import ConnectionProbe, strip_health_suffix
from twstock_tracker.data.proxy_session import ConnectionState, ProxySession
from twstock_tracker.exceptions import ConnectionProbeError, PreconditionError

HEALTH = f"{BASE_URL}/health"
API_HEALTH = f"{BASE_URL}/api/health"
ROOT = f"{BASE_URL}/"


@pytest.mark.parametrize("url", [
    BASE_URL, BASE_URL + "/", BASE_URL + "/health", BASE_URL + "/health/",
])
def test_strip_health_suffix(url):
    assert strip_health_suffix(url) == BASE_URL


def test_candidate_order(session):
    probe = ConnectionProbe(session)
    assert probe.candidate_urls(BASE_URL + "/health") == [HEALTH, API_HEALTH, ROOT]


def test_first_endpoint_success(session, fake_http):
    fake_http.add(HEALTH, make_response(200, {"status": "ok"}))

    assert ConnectionProbe(session).probe() is True
    assert session.state == ConnectionState.CONNECTED
    assert fake_http.urls() == [HEALTH]


def test_falls_back_to_third_endpoint(session, fake_http):
    fake_http.add(HEALTH, make_response(500, {"error": "boom"}))
    fake_http.add(API_HEALTH, requests.ConnectionError("connection refused"))
    fake_http.add(ROOT, make_response(200, {"name": "proxy"}))

    assert ConnectionProbe(session).probe() is True
    assert session.state == ConnectionState.CONNECTED
    assert session.last_error == ""
    assert fake_http.urls() == [HEALTH, API_HEALTH, ROOT]


def test_non_json_body_counts_as_failure(session, fake_http):
    fake_http.add(HEALTH, make_response(200, text="<html>ok</html>"))
    fake_http.add(API_HEALTH, make_response(200, {"ok": True}))

    assert ConnectionProbe(session).probe() is True
    assert fake_http.urls() == [HEALTH, API_HEALTH]


def test_all_endpoints_fail_with_http_errors(session, fake_http):
    fake_http.add(HEALTH, make_response(404))
    fake_http.add(API_HEALTH, make_response(503))
    fake_http.add(ROOT, make_response(301))

    probe = ConnectionProbe(session)
    assert probe.probe() is False
    assert session.state == ConnectionState.FAILED
    assert len(fake_http.calls) == 3
    assert probe.last_exception.network_failure is False
    assert "解決方案" not in session.last_error


def test_network_failure_carries_remediation(session, fake_http):
    for url in (HEALTH, API_HEALTH, ROOT):
        fake_http.add(url, requests.ConnectionError("Failed to fetch"))

    probe = ConnectionProbe(session)
    with pytest.raises(ConnectionProbeError) as exc_info:
        probe.probe_or_raise()

    assert session.state == ConnectionState.FAILED
    assert exc_info.value.network_failure is True
    assert "CORS" in exc_info.value.message
    assert f"{BASE_URL}/health" in exc_info.value.message


def test_probe_with_explicit_url_updates_session(fake_http):
    session = ProxySession("", http=fake_http)
    fake_http.add(HEALTH, make_response(200, {}))

    assert ConnectionProbe(session).probe(BASE_URL + "/health/") is True
    assert session.base_url == BASE_URL


def test_probe_requires_url(fake_http):
    session = ProxySession("", http=fake_http)
    with pytest.raises(PreconditionError):
        ConnectionProbe(session).probe()
    assert fake_http.calls == []
