# -*- coding: utf-8 -*-
"""
台股價格追蹤器 - 透過後端代理服務器取得台灣證交所即時與歷史資料
"""

from .data.business_calendar import BusinessDayCalendar
from .data.connection_probe import ConnectionProbe
from .data.history_fetcher import HistoryFetcher
from .data.models import HistoryPoint, Quote, Series, SeriesPoint
from .data.proxy_session import ConnectionState, ProxySession
from .data.quote_fetcher import QuoteFetcher
from .data.series_aggregator import SeriesAggregator

__version__ = "0.1.0"

__all__ = [
    "BusinessDayCalendar",
    "ConnectionProbe",
    "ConnectionState",
    "HistoryFetcher",
    "HistoryPoint",
    "ProxySession",
    "Quote",
    "QuoteFetcher",
    "Series",
    "SeriesAggregator",
    "SeriesPoint",
]
