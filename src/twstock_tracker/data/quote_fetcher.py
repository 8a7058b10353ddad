#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
即時報價查詢 - 先查上市，找不到再查上櫃
"""

import logging
from typing import Any, Dict, Optional

from ..config.settings import SOURCE_TAGS, get_proxy_config
from ..utils.data_validation import first_present, parse_float, parse_int, sanitize_stock_id
from .models import MARKET_LISTED, MARKET_OTC, Quote
from .proxy_session import ProxySession

logger = logging.getLogger(__name__)

# 代理的 market 參數對應到內部市場標記
MARKET_PARAMS = {
    'tse': MARKET_LISTED,
    'otc': MARKET_OTC,
}


def quote_from_msg(msg: Dict[str, Any], market: str) -> Quote:
    """
    將 msgArray 的縮寫欄位轉為 Quote

    c=代號 n=名稱 z=成交價 y=昨收 o=開盤 h=最高 l=最低 v=成交量
    tv=漲跌 pz=漲跌幅 t=時間
    """
    update_time = msg.get('t')
    return Quote(
        symbol=str(msg.get('c', '')),
        name=str(msg.get('n', '')),
        price=parse_float(first_present(msg.get('z'), msg.get('y'))),  # 尚未成交時用昨收
        open=parse_float(msg.get('o')),
        high=parse_float(msg.get('h')),
        low=parse_float(msg.get('l')),
        volume=parse_int(msg.get('v')),
        previous_close=parse_float(msg.get('y')),
        change=parse_float(msg.get('tv')),
        change_percent=parse_float(msg.get('pz')),
        market=market,
        source=SOURCE_TAGS[market],
        update_time=str(update_time) if update_time else None,
    )


def first_message(payload: Any) -> Optional[Dict[str, Any]]:
    """回應成功且 msgArray 非空時回傳第一筆，否則 None"""
    if not isinstance(payload, dict) or not payload.get('success'):
        return None
    data = payload.get('data') or {}
    messages = data.get('msgArray') if isinstance(data, dict) else None
    if not messages:
        return None
    return messages[0]


class QuoteFetcher:
    """從代理服務器取得單一股票即時報價"""

    def __init__(self, session: ProxySession, markets=None):
        config = get_proxy_config()
        self.session = session
        self.markets = markets or config['markets']
        self.realtime_path = config['realtime_path']

    def fetch_quote(self, symbol: str) -> Optional[Quote]:
        """
        取得即時報價

        Returns:
            Quote；上市與上櫃都沒有資料時回傳 None

        Raises:
            PreconditionError: 未設定代理地址
            requests.HTTPError: 任一市場查詢回傳非 2xx
        """
        self.session.require_base_url()
        symbol = sanitize_stock_id(symbol)
        logger.info(f"🔄 從代理服務器獲取股票資料: {symbol}")

        for i, market_param in enumerate(self.markets):
            if i > 0:
                logger.info(f"🔄 上一市場查無資料，改查 market={market_param}")
            msg = self._fetch_market(symbol, market_param)
            if msg is not None:
                quote = quote_from_msg(msg, MARKET_PARAMS[market_param])
                logger.info(f"✅ 找到{quote.market_label}股票: {quote.symbol} {quote.name} {quote.price}")
                return quote

        logger.info(f"❌ 在上市和上櫃都找不到股票: {symbol}")
        return None

    def _fetch_market(self, symbol: str, market_param: str) -> Optional[Dict[str, Any]]:
        url = self.session.url(self.realtime_path.format(symbol=symbol))
        response = self.session.get(url, params={'market': market_param})
        response.raise_for_status()
        payload = response.json()
        logger.debug(f"📊 API回應 ({market_param}): {payload}")
        return first_message(payload)
