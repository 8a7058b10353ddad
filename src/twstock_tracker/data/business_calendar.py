#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
營業日計算 (僅排除週六、週日)
"""

from datetime import date, datetime, timedelta
from typing import List, Union

from ..config.settings import SERIES_CONFIG
from ..utils.data_validation import parse_iso_date


class BusinessDayCalendar:
    """從指定日期往後產生營業日清單"""

    def __init__(self, scan_cap_days: int = SERIES_CONFIG['scan_cap_days']):
        self.scan_cap_days = scan_cap_days

    def generate(self, start_date: Union[str, date, datetime], count: int) -> List[str]:
        """
        產生營業日列表

        Args:
            start_date: 起始日期 (含當日)
            count: 需要的營業日數

        Returns:
            YYYY-MM-DD 字串列表；掃描超過 scan_cap_days 個日曆天就停止，
            所以可能少於 count 筆
        """
        current = parse_iso_date(start_date)
        business_days = []

        for _ in range(self.scan_cap_days):  # 最多掃描30天防止無窮迴圈
            if len(business_days) >= count:
                break
            if current.weekday() < 5:  # 週一到週五
                business_days.append(current.isoformat())
            current += timedelta(days=1)

        return business_days
