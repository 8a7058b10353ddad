#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
代理服務器連線狀態 - 每個使用者會話一個實例
"""

import logging
from enum import Enum
from typing import Optional

import requests
from requests.adapters import HTTPAdapter

from ..config.settings import HTTP_HEADERS, get_proxy_config
from ..exceptions import PreconditionError

logger = logging.getLogger(__name__)


class ConnectionState(Enum):
    DISCONNECTED = 'disconnected'
    TESTING = 'testing'
    CONNECTED = 'connected'
    FAILED = 'failed'
    MANUAL = 'manual'


READY_STATES = (ConnectionState.CONNECTED, ConnectionState.MANUAL)


def build_http_session(pool_size: int = 4) -> requests.Session:
    """建立共用連線池的 requests Session (不自動重試)"""
    session = requests.Session()
    adapter = HTTPAdapter(pool_connections=pool_size, pool_maxsize=pool_size, max_retries=0)
    session.mount("https://", adapter)
    session.mount("http://", adapter)
    session.headers.update(HTTP_HEADERS)
    return session


def normalize_base_url(url: Optional[str]) -> str:
    return (url or '').strip().rstrip('/')


class ProxySession:
    """
    單一會話的代理服務器上下文

    保存代理地址、連線狀態、最近一次錯誤與查詢中旗標。
    多會話部署時每個會話各自持有一個實例，不需共用鎖。
    """

    def __init__(self, base_url: Optional[str] = None, timeout: Optional[float] = None,
                 http: Optional[requests.Session] = None):
        config = get_proxy_config()
        self.base_url = normalize_base_url(base_url if base_url is not None else config['base_url'])
        self.timeout = timeout if timeout is not None else config['timeout']
        self.http = http if http is not None else build_http_session()
        self.state = ConnectionState.DISCONNECTED
        self.last_error = ''
        self.loading = False

    def set_base_url(self, url: str):
        """變更代理地址後需重新測試連接"""
        self.base_url = normalize_base_url(url)
        self.state = ConnectionState.DISCONNECTED
        self.last_error = ''

    def use_manual(self, url: Optional[str] = None):
        """跳過連接測試，直接使用代理地址"""
        if url is not None:
            self.base_url = normalize_base_url(url)
        if not self.base_url:
            raise PreconditionError('請先輸入後端服務器地址')
        self.state = ConnectionState.MANUAL
        self.last_error = ''
        logger.info(f"🔧 手動設定後端地址: {self.base_url}")

    def is_ready(self) -> bool:
        return self.state in READY_STATES

    def require_base_url(self):
        if not self.base_url:
            raise PreconditionError('請先設定並測試後端服務器地址')

    def require_ready(self):
        self.require_base_url()
        if not self.is_ready():
            raise PreconditionError('請先點擊「測試連接」或「直接使用」來設定後端連接')

    def url(self, path: str) -> str:
        return f"{self.base_url}{path}"

    def get(self, url: str, params: Optional[dict] = None) -> requests.Response:
        return self.http.get(url, params=params, timeout=self.timeout)

    def close(self):
        self.http.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
