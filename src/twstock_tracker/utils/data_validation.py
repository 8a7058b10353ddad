#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
數據驗證與數值清洗
代理服務器回傳的數值可能帶有千分位逗號或以 "-" 表示無資料
"""

import math
import re
from datetime import date, datetime
from typing import Any, Optional, Union

from ..exceptions import PreconditionError

# 證交所以這些字串表示無資料
MISSING_MARKERS = {"", "-", "--", "—", "nan", "None", "null"}


def clean_number_text(value: Any) -> Optional[str]:
    """去除千分位逗號與空白；無資料時回傳 None"""
    if value is None:
        return None
    s = str(value).replace(",", "").strip()
    if s in MISSING_MARKERS:
        return None
    return s


def parse_float(value: Any, default: float = 0.0) -> float:
    """解析浮點數，失敗時回傳預設值"""
    s = clean_number_text(value)
    if s is None:
        return default
    try:
        number = float(s)
    except ValueError:
        return default
    # inf / nan 視同無法解析
    return number if math.isfinite(number) else default


def parse_int(value: Any, default: int = 0) -> int:
    """解析整數 (容許 "1234.0" 這類字串)，失敗時回傳預設值"""
    s = clean_number_text(value)
    if s is None:
        return default
    try:
        return int(s)
    except ValueError:
        try:
            return int(float(s))
        except (ValueError, OverflowError):
            return default


def first_present(*values: Any) -> Any:
    """回傳第一個非空值 (用於 z 無成交時改用 y 昨收)"""
    for value in values:
        if clean_number_text(value) is not None:
            return value
    return None


def sanitize_stock_id(stock_id: str) -> str:
    """校驗股票代碼格式，回傳大寫代碼"""
    symbol = str(stock_id or "").strip().upper()
    if not re.fullmatch(r"[0-9A-Z]{4,6}", symbol):
        raise PreconditionError(f"股票代號格式錯誤: {stock_id!r}")
    return symbol


def parse_iso_date(value: Union[str, date, datetime]) -> date:
    """解析 YYYY-MM-DD 日期"""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return datetime.strptime(str(value).strip(), "%Y-%m-%d").date()
    except ValueError:
        raise PreconditionError(f"日期格式錯誤，應為 YYYY-MM-DD: {value!r}") from None


def to_yyyymmdd(iso_date: str) -> str:
    """YYYY-MM-DD 轉為歷史資料端點需要的 YYYYMMDD"""
    return iso_date.replace("-", "")


def to_display_date(iso_date: str) -> str:
    """轉為 zh-TW 顯示格式，例如 2024/1/5"""
    d = parse_iso_date(iso_date)
    return f"{d.year}/{d.month}/{d.day}"
