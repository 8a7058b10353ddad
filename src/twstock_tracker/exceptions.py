# -*- coding: utf-8 -*-
"""
錯誤分類
"""


class TrackerError(Exception):
    """追蹤器錯誤基底類別"""

    def __init__(self, message: str, code: str = "TRACKER_ERROR"):
        self.message = message
        self.code = code
        super().__init__(message)


class PreconditionError(TrackerError):
    """前置條件不符：未設定代理地址、尚未連接、輸入格式錯誤"""

    def __init__(self, message: str):
        super().__init__(message, code="PRECONDITION")


class ConnectionProbeError(TrackerError):
    """所有健康檢查端點都無法連接"""

    def __init__(self, message: str, network_failure: bool = False, remediation: str = ""):
        self.network_failure = network_failure
        self.remediation = remediation
        full_message = f"{message}\n\n{remediation}" if remediation else message
        super().__init__(full_message, code="CONNECTIVITY")


class StockNotFoundError(TrackerError):
    """上市與上櫃都找不到此股票"""

    def __init__(self, symbol: str):
        self.symbol = symbol
        super().__init__(f'找不到股票代號 "{symbol}" 的數據，請確認代號是否正確', code="NOT_FOUND")


class NoDataError(TrackerError):
    """彙整後沒有任何有效資料點"""

    def __init__(self, message: str = "無法獲取任何股票數據，請稍後再試"):
        super().__init__(message, code="NO_DATA")


class OperationCancelledError(TrackerError):
    """呼叫端取消查詢"""

    def __init__(self, message: str = "查詢已取消"):
        super().__init__(message, code="CANCELLED")
