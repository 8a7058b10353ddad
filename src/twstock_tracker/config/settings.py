#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
系統配置管理
"""

import os

# 代理服務器API配置
API_CONFIG = {
    'proxy': {
        'base_url': os.environ.get('TWSTOCK_PROXY_URL', ''),
        'example_url': 'https://twstockapi.vercel.app',  # 公開部署的代理服務器
        'timeout': float(os.environ.get('TWSTOCK_TIMEOUT', '15')),
        'health_paths': ['/health', '/api/health', '/'],
        'realtime_path': '/api/twse/stock/realtime/{symbol}',
        'daily_path': '/api/twse/stock/daily/{symbol}',
        'markets': ['tse', 'otc'],  # 先上市、後上櫃
    }
}

# HTTP 請求標頭
HTTP_HEADERS = {
    'User-Agent': 'Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/91.0.4472.124 Safari/537.36',
    'Accept': 'application/json',
    'Content-Type': 'application/json',
}

# 歷史序列配置
SERIES_CONFIG = {
    'candidate_days': 21,   # 產生的候選營業日數
    'fetch_days': 5,        # 實際查詢的營業日數
    'scan_cap_days': 30,    # 最多掃描的日曆天數
    'request_interval': float(os.environ.get('TWSTOCK_REQUEST_INTERVAL', '1.0')),  # 歷史查詢間隔(秒)
    'timezone': 'Asia/Taipei',
}

# 資料點標籤
SERIES_LABELS = {
    'anchor': '指定日',
    'business_day': '第{n}個營業日',
    'current': '當前',
}

# 市場與來源標記
MARKET_LABELS = {
    'listed': '上市',
    'otc': '上櫃',
}

SOURCE_TAGS = {
    'listed': 'TSE-即時',
    'otc': 'OTC-即時',
    'history': 'TWSE-歷史',
}

# 日誌配置
LOG_CONFIG = {
    'level': os.environ.get('TWSTOCK_LOG_LEVEL', 'INFO'),
    'format': '%(asctime)s - %(levelname)s - %(message)s',
}

def get_proxy_config() -> dict:
    """取得代理服務器配置"""
    return API_CONFIG['proxy']
