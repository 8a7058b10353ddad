#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
價格序列彙整 - 即時報價 + 營業日 + 逐日歷史資料 → 分析完成的序列
"""

import logging
import threading
from datetime import date, datetime
from typing import Callable, List, Optional, Union

from dateutil import tz

from ..config.settings import SERIES_CONFIG, SERIES_LABELS
from ..exceptions import NoDataError, OperationCancelledError, StockNotFoundError
from ..utils.data_validation import parse_iso_date, sanitize_stock_id, to_display_date
from ..utils.rate_limiter import RateLimiter
from .business_calendar import BusinessDayCalendar
from .history_fetcher import HistoryFetcher
from .models import (
    POINT_ANCHOR, POINT_BUSINESS_DAY, POINT_CURRENT,
    HistoryPoint, Quote, Series, SeriesPoint,
)
from .proxy_session import ProxySession
from .quote_fetcher import QuoteFetcher

logger = logging.getLogger(__name__)

TAIPEI_TZ = tz.gettz(SERIES_CONFIG['timezone'])


def today_taipei() -> date:
    return datetime.now(TAIPEI_TZ).date()


def label_for(index: int) -> str:
    if index == 0:
        return SERIES_LABELS['anchor']
    return SERIES_LABELS['business_day'].format(n=index)


def series_point_from_history(point: HistoryPoint, index: int) -> SeriesPoint:
    return SeriesPoint(
        date=point.date,
        price=point.price,
        volume=point.volume,
        open=point.open,
        high=point.high,
        low=point.low,
        source=point.source,
        kind=POINT_ANCHOR if index == 0 else POINT_BUSINESS_DAY,
        label=label_for(index),
        display_date=to_display_date(point.date),
        index=index,
    )


def current_point(quote: Quote, today: str, index: int) -> SeriesPoint:
    return SeriesPoint(
        date=today,
        price=quote.price,
        volume=quote.volume,
        open=quote.open,
        high=quote.high,
        low=quote.low,
        source=quote.source,
        kind=POINT_CURRENT,
        label=SERIES_LABELS['current'],
        display_date=to_display_date(today),
        index=index,
    )


def analyze(symbol: str, quote: Quote, points: List[SeriesPoint]) -> Series:
    """以第一個與最後一個有效資料點 (價格 > 0) 計算漲跌"""
    valid_points = [p for p in points if p.is_valid]
    if not valid_points:
        raise NoDataError()

    first_valid = valid_points[0]
    last_valid = valid_points[-1]
    change = last_valid.price - first_valid.price
    change_percent = change / first_valid.price * 100

    return Series(
        symbol=symbol,
        name=quote.name,
        market=quote.market,
        source=quote.source,
        update_time=quote.update_time,
        points=list(points),
        valid_count=len(valid_points),
        start_price=first_valid.price,
        end_price=last_valid.price,
        change=change,
        change_percent=change_percent,
        start_date=first_valid.display_date,
        end_date=last_valid.display_date,
        quote=quote,
    )


class SeriesAggregator:
    """
    價格序列彙整器

    歷史資料一次只查一天，且由 RateLimiter 控制兩次查詢間隔，
    符合上游資料源每秒請求上限；不可改為並行查詢。
    """

    def __init__(self, session: ProxySession,
                 quote_fetcher: Optional[QuoteFetcher] = None,
                 history_fetcher: Optional[HistoryFetcher] = None,
                 calendar: Optional[BusinessDayCalendar] = None,
                 rate_limiter: Optional[RateLimiter] = None,
                 today: Callable[[], date] = today_taipei,
                 candidate_days: int = SERIES_CONFIG['candidate_days'],
                 fetch_days: int = SERIES_CONFIG['fetch_days']):
        self.session = session
        self.quote_fetcher = quote_fetcher or QuoteFetcher(session)
        self.history_fetcher = history_fetcher or HistoryFetcher(session)
        self.calendar = calendar or BusinessDayCalendar()
        self.rate_limiter = rate_limiter or RateLimiter(
            max_requests=1, window_seconds=SERIES_CONFIG['request_interval'])
        self.today = today
        self.candidate_days = candidate_days
        self.fetch_days = fetch_days

    def build_series(self, symbol: str, anchor_date: Union[str, date],
                     cancel_event: Optional[threading.Event] = None) -> Series:
        """
        建立從指定日起的價格序列

        Raises:
            PreconditionError: 尚未設定或測試後端連接、代號或日期格式錯誤
            StockNotFoundError: 上市與上櫃都找不到此股票
            NoDataError: 沒有任何有效資料點
            OperationCancelledError: cancel_event 被設定
            requests.RequestException: 即時報價查詢失敗
        """
        self.session.require_ready()
        symbol = sanitize_stock_id(symbol)
        anchor = parse_iso_date(anchor_date)

        logger.info(f"🚀 開始搜尋股票: {symbol}, 起始日期: {anchor.isoformat()}")
        self.session.loading = True
        self.session.last_error = ''
        try:
            series = self._build(symbol, anchor, cancel_event)
        except Exception as e:
            self.session.last_error = str(e)
            raise
        finally:
            self.session.loading = False

        logger.info("🎉 搜尋完成！")
        return series

    def _build(self, symbol: str, anchor: date, cancel_event: Optional[threading.Event]) -> Series:
        self._check_cancelled(cancel_event)
        quote = self.quote_fetcher.fetch_quote(symbol)
        if quote is None:
            raise StockNotFoundError(symbol)
        logger.info(f"✅ 成功獲取即時數據: {quote.name} {quote.price}")

        business_days = self.calendar.generate(anchor, self.candidate_days)
        points = self._collect_history(symbol, business_days[:self.fetch_days], cancel_event)

        # 確保有當前價格數據點
        today = self.today().isoformat()
        if not any(p.date == today for p in points):
            points.append(current_point(quote, today, len(points)))

        if not points:
            raise NoDataError()

        logger.info(f"📈 最終數據點數量: {len(points)}")
        series = analyze(symbol, quote, points)
        logger.info(f"💹 分析結果: 起始價 {series.start_price}, 結束價 {series.end_price}, "
                    f"漲跌 {series.change:+.2f} ({series.change_percent:+.2f}%)")
        return series

    def _collect_history(self, symbol: str, dates: List[str],
                         cancel_event: Optional[threading.Event]) -> List[SeriesPoint]:
        points = []
        for i, day in enumerate(dates):
            self._check_cancelled(cancel_event)
            self.rate_limiter.acquire(cancel_event)

            logger.info(f"🔄 獲取 {day} 的歷史數據...")
            history = self.history_fetcher.fetch_day(symbol, day)

            if history is not None and history.price > 0:
                logger.info(f"✅ 成功獲取 {day} 的數據: 收盤 {history.price}")
                points.append(series_point_from_history(history, i))
            else:
                logger.info(f"❌ 無法獲取 {day} 的歷史數據")
        return points

    @staticmethod
    def _check_cancelled(cancel_event: Optional[threading.Event]):
        if cancel_event is not None and cancel_event.is_set():
            logger.info("⏹ 查詢已取消")
            raise OperationCancelledError()
