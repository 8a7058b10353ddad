#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
資料結構 - 即時報價、歷史資料點、價格序列
"""

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Optional

from ..config.settings import MARKET_LABELS

MARKET_LISTED = 'listed'
MARKET_OTC = 'otc'

POINT_ANCHOR = 'anchor'
POINT_BUSINESS_DAY = 'business_day'
POINT_CURRENT = 'current'


@dataclass(frozen=True)
class Quote:
    """即時報價"""
    symbol: str
    name: str
    price: float             # 最新成交價，尚無成交時為昨收
    open: float
    high: float
    low: float
    volume: int
    previous_close: float
    change: float
    change_percent: float
    market: str              # listed / otc
    source: str
    update_time: Optional[str] = None

    @property
    def market_label(self) -> str:
        return MARKET_LABELS.get(self.market, self.market)


@dataclass(frozen=True)
class HistoryPoint:
    """單日歷史資料"""
    date: str                # YYYY-MM-DD
    price: float             # 收盤價
    volume: int
    open: float
    high: float
    low: float
    source: str


@dataclass(frozen=True)
class SeriesPoint:
    """序列中的資料點"""
    date: str
    price: float
    volume: int
    open: float
    high: float
    low: float
    source: str

    kind: str                # anchor / business_day / current
    label: str               # 指定日 / 第N個營業日 / 當前
    display_date: str
    index: int               # 從 0 起算的序號

    @property
    def is_valid(self) -> bool:
        return self.price > 0


@dataclass(frozen=True)
class Series:
    """分析完成的價格序列"""
    symbol: str
    name: str
    market: str
    source: str
    update_time: Optional[str]
    points: List[SeriesPoint] = field(default_factory=list)

    # 分析結果
    valid_count: int = 0
    start_price: float = 0.0
    end_price: float = 0.0
    change: float = 0.0
    change_percent: float = 0.0
    start_date: str = ''
    end_date: str = ''

    quote: Optional[Quote] = None

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
