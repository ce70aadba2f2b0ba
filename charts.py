# charts.py
"""
Resolve a chart image URL for a coin against a USD-pegged quote.
CHART_IMG_BASE / CHART_IMG_API_KEY configure the chart renderer.
"""

import os
from typing import Callable, Iterable, List, Optional
from urllib.parse import urlencode

import jinx_api
from coin_models import CoinSnapshot

CHART_BASE = os.getenv("CHART_IMG_BASE", "https://api.chart-img.com/v1/tradingview/advanced-chart")
CHART_API_KEY = os.getenv("CHART_IMG_API_KEY", "").strip()

# preference order
USD_PEGGED_QUOTES = ("USDT", "USD", "USDC", "BUSD")


def pick_usd_pegged_market(markets: Iterable[dict]) -> Optional[dict]:
    by_quote = {}
    for m in markets:
        quote = str(m.get("quote") or "").upper()
        if quote in USD_PEGGED_QUOTES and m.get("exchange") and m.get("base"):
            by_quote.setdefault(quote, m)
    for quote in USD_PEGGED_QUOTES:
        if quote in by_quote:
            return by_quote[quote]
    return None


def chart_url_for_market(market: dict, interval: str = "1D", api_key: str = None) -> str:
    pair = f"{market['exchange']}:{market['base']}{market['quote']}".upper()
    params = {"symbol": pair, "interval": interval, "theme": "dark"}
    key = CHART_API_KEY if api_key is None else api_key
    if key:
        params["key"] = key
    return f"{CHART_BASE}?{urlencode(params)}"


def find_usd_pegged_chart(coin: CoinSnapshot,
                          get_markets: Callable[[str], List[dict]] = jinx_api.get_markets) -> Optional[str]:
    """Chart URL for the coin's preferred USD-pegged pair, None when it has none."""
    market = pick_usd_pegged_market(get_markets(coin.id))
    if not market:
        return None
    return chart_url_for_market(market)
