# jinx_api.py
"""
Jinx coin data API client.
JINX_API_KEY is optional (sent as bearer token when set).
get_coin returns a CoinSnapshot, or None when the id is unknown.
"""

import os
from typing import List, Optional

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from coin_models import CoinSnapshot

API_KEY = os.getenv("JINX_API_KEY", "").strip()
BASE = os.getenv("JINX_API_BASE", "https://api.jinx.capital")
HEADERS = {
    "Accept": "application/json",
    "User-Agent": "coin-alerts-slack/1.0",
}
if API_KEY:
    HEADERS["Authorization"] = f"Bearer {API_KEY}"


class JinxApiError(RuntimeError):
    pass


# Session with retries
_session = requests.Session()
retries = Retry(
    total=4,
    backoff_factor=0.5,
    status_forcelist=[429, 500, 502, 503, 504],
    allowed_methods=["GET"],
)
_session.mount("https://", HTTPAdapter(max_retries=retries))


def _get(path: str, params: dict = None, timeout: int = 15):
    url = BASE.rstrip("/") + path
    try:
        resp = _session.get(url, headers=HEADERS, params=params or {}, timeout=timeout)
        if resp.status_code == 404:
            return None
        resp.raise_for_status()
        return resp.json()
    except requests.RequestException as e:
        raise JinxApiError(f"Jinx API request failed: {e} (url={url}, params={params})") from e


def get_coin(coin_id: str) -> Optional[CoinSnapshot]:
    data = _get(f"/coins/{coin_id}")
    if not data:
        return None
    # some deployments wrap the coin in {"data": {...}}
    if isinstance(data, dict) and isinstance(data.get("data"), dict):
        data = data["data"]
    return CoinSnapshot.from_api(data)


def get_markets(coin_id: str) -> List[dict]:
    """Trading pairs for a coin: [{"exchange": "binance", "base": "BTC", "quote": "USDT"}, ...]"""
    data = _get(f"/coins/{coin_id}/markets")
    if isinstance(data, dict):
        data = data.get("data")
    return data or []
