#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
單日歷史資料查詢
"""

import logging
from typing import Any, List, Optional, Sequence

import requests

from ..config.settings import SOURCE_TAGS, get_proxy_config
from ..utils.data_validation import parse_float, parse_int, to_yyyymmdd
from .models import HistoryPoint
from .proxy_session import ProxySession

logger = logging.getLogger(__name__)

# 每日收盤行情列的欄位位置
# [代號, 名稱, 成交股數, 開盤價, 最高價, 最低價, 成交金額, 漲跌, 收盤價, ...]
MIN_ROW_COLUMNS = 9
COL_SYMBOL = 0
COL_VOLUME = 2
COL_OPEN = 3
COL_HIGH = 4
COL_LOW = 5
COL_CLOSE = 8


def find_symbol_row(rows: Sequence[Any], symbol: str) -> Optional[List[Any]]:
    for row in rows:
        if isinstance(row, (list, tuple)) and row and str(row[COL_SYMBOL]).strip() == symbol:
            return list(row)
    return None


def history_point_from_row(row: Sequence[Any], date: str) -> HistoryPoint:
    """欄位解析失敗時該欄為 0，不中止整列"""
    return HistoryPoint(
        date=date,
        price=parse_float(row[COL_CLOSE]),
        volume=parse_int(row[COL_VOLUME]),
        open=parse_float(row[COL_OPEN]),
        high=parse_float(row[COL_HIGH]),
        low=parse_float(row[COL_LOW]),
        source=SOURCE_TAGS['history'],
    )


class HistoryFetcher:
    """從代理服務器取得單日歷史收盤資料"""

    def __init__(self, session: ProxySession):
        self.session = session
        self.daily_path = get_proxy_config()['daily_path']

    def fetch_day(self, symbol: str, date: str) -> Optional[HistoryPoint]:
        """
        取得指定日期的歷史資料

        Args:
            symbol: 股票代碼
            date: YYYY-MM-DD

        Returns:
            HistoryPoint；非 2xx、找不到股票列、欄位不足或網路錯誤時回傳 None
        """
        url = self.session.url(self.daily_path.format(symbol=symbol))
        try:
            response = self.session.get(url, params={'date': to_yyyymmdd(date)})
            if not 200 <= response.status_code < 300:
                logger.warning(f"歷史資料API回應失敗: {symbol} {date} HTTP {response.status_code}")
                return None
            payload = response.json()
        except (requests.RequestException, ValueError) as e:
            logger.warning(f"獲取歷史資料失敗 {symbol} {date}: {e}")
            return None

        if not isinstance(payload, dict) or not payload.get('success'):
            logger.debug(f"歷史資料非成功狀態: {symbol} {date}")
            return None

        rows = payload.get('data')
        if not isinstance(rows, list) or not rows:
            logger.debug(f"無數據: {symbol} {date}")
            return None

        row = find_symbol_row(rows, symbol)
        if row is None:
            logger.debug(f"找不到股票列: {symbol} {date}")
            return None
        if len(row) < MIN_ROW_COLUMNS:
            logger.warning(f"欄位不足 ({len(row)}): {symbol} {date}")
            return None

        return history_point_from_row(row, date)
