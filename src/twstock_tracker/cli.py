#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
台股價格追蹤器 - 命令列介面
"""

import argparse
import logging
import sys
from typing import List, Optional

import requests

from .config.settings import LOG_CONFIG, get_proxy_config
from .data.connection_probe import ConnectionProbe
from .data.models import Quote, Series
from .data.proxy_session import ProxySession
from .data.quote_fetcher import QuoteFetcher
from .data.series_aggregator import SeriesAggregator
from .exceptions import TrackerError
from .utils.export_series import export_series_csv

logger = logging.getLogger(__name__)


def setup_logging(verbose: bool = False):
    level = logging.DEBUG if verbose else LOG_CONFIG['level']
    logging.basicConfig(level=level, format=LOG_CONFIG['format'])


def connect(session: ProxySession, manual: bool) -> None:
    """測試連接或直接使用；失敗時拋出例外"""
    if manual:
        session.use_manual()
    else:
        ConnectionProbe(session).probe_or_raise()


def print_quote(quote: Quote):
    print(f"📊 {quote.symbol} {quote.name} ({quote.market_label})")
    print(f"   現價: NT${quote.price}  昨收: {quote.previous_close}")
    print(f"   開盤: {quote.open}  最高: {quote.high}  最低: {quote.low}")
    print(f"   成交量: {quote.volume:,}  漲跌: {quote.change} ({quote.change_percent}%)")
    print(f"   來源: {quote.source}  更新時間: {quote.update_time or '-'}")


def print_series(series: Series):
    print(f"📈 {series.symbol} {series.name} ({series.market}) 來源: {series.source}")
    print("-" * 50)
    for p in series.points:
        price = f"NT${p.price}" if p.price > 0 else "無數據"
        print(f"   {p.display_date:<12} {p.label:<10} {price}")
    print("-" * 50)
    print(f"   起始: {series.start_date} NT${series.start_price}")
    print(f"   結束: {series.end_date} NT${series.end_price}")
    print(f"   漲跌: {series.change:+.2f} ({series.change_percent:+.2f}%)")
    print(f"   有效數據點: {series.valid_count}")


def cmd_probe(session: ProxySession, args) -> int:
    if ConnectionProbe(session).probe():
        print(f"✅ 已連接: {session.base_url}")
        return 0
    print(f"❌ {session.last_error}")
    return 1


def cmd_quote(session: ProxySession, args) -> int:
    connect(session, args.manual)
    quote = QuoteFetcher(session).fetch_quote(args.symbol)
    if quote is None:
        print(f'❌ 找不到股票代號 "{args.symbol}" 的數據，請確認代號是否正確')
        return 1
    print_quote(quote)
    return 0


def cmd_track(session: ProxySession, args) -> int:
    connect(session, args.manual)
    series = SeriesAggregator(session).build_series(args.symbol, args.date)
    print_series(series)
    if args.export:
        export_series_csv(series, args.export)
        print(f"📄 已匯出至：{args.export}")
    return 0


COMMANDS = {
    'probe': cmd_probe,
    'quote': cmd_quote,
    'track': cmd_track,
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description='台股價格追蹤器 (透過後端代理服務器)')
    parser.add_argument('--url', default=get_proxy_config()['base_url'],
                        help=f"後端服務器地址 (例如: {get_proxy_config()['example_url']})")
    parser.add_argument('-v', '--verbose', action='store_true', help='顯示除錯日誌')

    # 子命令也接受 --url，例如: probe --url URL
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument('--url', default=argparse.SUPPRESS, help='後端服務器地址')

    sub = parser.add_subparsers(dest='command', required=True)
    sub.add_parser('probe', parents=[common], help='測試後端連接')

    quote = sub.add_parser('quote', parents=[common], help='查詢即時報價')
    quote.add_argument('symbol', help='股票代號')
    quote.add_argument('--manual', action='store_true', help='跳過連接測試直接使用')

    track = sub.add_parser('track', parents=[common], help='追蹤指定日起的價格變化')
    track.add_argument('symbol', help='股票代號')
    track.add_argument('--date', required=True, help='指定日期 YYYY-MM-DD')
    track.add_argument('--manual', action='store_true', help='跳過連接測試直接使用')
    track.add_argument('--export', help='匯出CSV路徑')
    return parser


def main(argv: Optional[List[str]] = None, http: Optional[requests.Session] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(args.verbose)

    with ProxySession(args.url, http=http) as session:
        try:
            return COMMANDS[args.command](session, args)
        except TrackerError as e:
            print(f"❌ {e.message}")
            return 1
        except requests.RequestException as e:
            logger.error(f"獲取股票數據時發生錯誤: {e}")
            print(f"❌ 獲取股票數據時發生錯誤: {e}")
            return 1


if __name__ == "__main__":
    sys.exit(main())
