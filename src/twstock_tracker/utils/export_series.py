#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
匯出價格序列
"""

import logging
import os

import pandas as pd

from ..data.models import Series

logger = logging.getLogger(__name__)

EXPORT_COLUMNS = [
    'index', 'kind', 'label', 'date', 'display_date',
    'price', 'open', 'high', 'low', 'volume', 'source',
]


def series_to_dataframe(series: Series) -> pd.DataFrame:
    """將序列轉為 DataFrame，每個資料點一列"""
    rows = [
        {
            'index': p.index,
            'kind': p.kind,
            'label': p.label,
            'date': p.date,
            'display_date': p.display_date,
            'price': p.price,
            'open': p.open,
            'high': p.high,
            'low': p.low,
            'volume': p.volume,
            'source': p.source,
        }
        for p in series.points
    ]
    df = pd.DataFrame(rows, columns=EXPORT_COLUMNS)
    df['symbol'] = series.symbol
    df['market'] = series.market
    return df


def export_series_csv(series: Series, output_path: str) -> str:
    """匯出 CSV (UTF-8 BOM，試算表軟體可正確顯示中文)"""
    directory = os.path.dirname(output_path)
    if directory:
        os.makedirs(directory, exist_ok=True)

    df = series_to_dataframe(series)
    df.to_csv(output_path, index=False, encoding='utf-8-sig')
    logger.info(f"📄 已匯出 {len(df)} 筆資料點至: {output_path}")
    return output_path
