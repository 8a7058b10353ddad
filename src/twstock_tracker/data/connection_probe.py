#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
後端代理連線測試 - 依序嘗試多個健康檢查端點
"""

import logging
from typing import List, Optional

import requests

from ..config.settings import get_proxy_config
from ..exceptions import ConnectionProbeError
from .proxy_session import ConnectionState, ProxySession, normalize_base_url

logger = logging.getLogger(__name__)


def strip_health_suffix(url: str) -> str:
    """移除結尾斜線與 /health，避免組出 /health/health"""
    clean = normalize_base_url(url)
    if clean.endswith('/health'):
        clean = clean[:-len('/health')]
    return clean


class ConnectionProbe:
    """測試代理服務器是否可連線"""

    def __init__(self, session: ProxySession, health_paths: Optional[List[str]] = None):
        self.session = session
        self.health_paths = health_paths or get_proxy_config()['health_paths']
        self.last_exception: Optional[ConnectionProbeError] = None

    def candidate_urls(self, base_url: str) -> List[str]:
        clean = strip_health_suffix(base_url)
        return [f"{clean}{path}" for path in self.health_paths]

    def probe(self, base_url: Optional[str] = None) -> bool:
        """
        測試後端連接，成功時狀態變為 connected，全部失敗時為 failed

        任一端點回傳 2xx JSON 即視為成功；非 2xx 或網路錯誤 (含 CORS 類拒絕)
        則繼續嘗試下一個端點，不提前中止。
        """
        if base_url is not None:
            self.session.base_url = strip_health_suffix(base_url)
        self.session.require_base_url()
        url = self.session.base_url

        logger.info(f"🔄 測試後端連接: {url}")
        self.session.state = ConnectionState.TESTING

        network_errors = []
        http_errors = []

        for i, test_url in enumerate(self.candidate_urls(url), start=1):
            logger.info(f"📡 嘗試端點 {i}: {test_url}")
            try:
                response = self.session.get(test_url)
                if not 200 <= response.status_code < 300:
                    logger.info(f"❌ 端點 {test_url} 失敗: {response.status_code}")
                    http_errors.append(f"{test_url}: HTTP {response.status_code}")
                    continue
                data = response.json()
            except ValueError as e:
                logger.info(f"❌ 端點 {test_url} 回應非JSON: {e}")
                http_errors.append(f"{test_url}: 回應非JSON")
                continue
            except requests.RequestException as e:
                logger.info(f"❌ 端點 {test_url} 錯誤: {e}")
                network_errors.append(f"{test_url}: {e}")
                continue

            logger.info(f"✅ 後端連接成功: {data}")
            self.session.state = ConnectionState.CONNECTED
            self.session.last_error = ''
            return True

        error = self._build_error(url, network_errors, http_errors)
        logger.error(f"❌ 後端連接失敗: {error.message}")
        self.session.state = ConnectionState.FAILED
        self.session.last_error = error.message
        self.last_exception = error
        return False

    def probe_or_raise(self, base_url: Optional[str] = None):
        """連接失敗時拋出 ConnectionProbeError"""
        if not self.probe(base_url):
            raise self.last_exception

    def _build_error(self, url: str, network_errors: List[str], http_errors: List[str]) -> ConnectionProbeError:
        message = '後端連接失敗: 所有健康檢查端點都無法連接'
        details = network_errors + http_errors
        if details:
            message += ' (' + '; '.join(details) + ')'

        if network_errors:
            remediation = (
                "💡 可能的解決方案:\n"
                "• 確認 API 服務器正在運行\n"
                "• 檢查 CORS 設置\n"
                f"• 在瀏覽器中直接訪問: {strip_health_suffix(url)}/health"
            )
            return ConnectionProbeError(message, network_failure=True, remediation=remediation)
        return ConnectionProbeError(message)
