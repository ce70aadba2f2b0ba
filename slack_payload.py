# slack_payload.py
"""
Build the Slack message for a coin: summary text, a section block with
price/market cap/change/ATH/pullback fields and the coin logo, plus an
optional chart image block when one can be resolved and re-hosted.
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Callable, List, Optional

import charts
import imgur_upload
import jinx_api
from coin_models import CoinSnapshot, MessagePayload
from formatting import (
    PLACEHOLDER,
    PriceFormatter,
    format_change,
    format_distance_strict,
    format_market_cap,
    format_percentage,
)

log = logging.getLogger(__name__)

IMAGE_HOST = "https://api.jinx.capital"
ATH_MARKER = " 🚀"
MAX_CHART_RANK = 1000


@dataclass(frozen=True)
class ChartAttempt:
    url: Optional[str] = None
    error: Optional[Exception] = None

    @property
    def ok(self) -> bool:
        return self.error is None and bool(self.url)


def _field(label: str, value: str) -> dict:
    return {"type": "mrkdwn", "text": f"*{label}*\n{value}"}


def summary_text(coin: CoinSnapshot, price_fmt: PriceFormatter) -> str:
    direction = "up" if coin.percentage_change_24h > 0 else "down"
    return (
        f"{coin.name} went {direction} with {format_percentage(coin.percentage_change_24h)} "
        f"in the last 24h, 1 {coin.symbol.upper()} = {price_fmt.format(coin.price)}."
    )


def build_fields(coin: CoinSnapshot, price_fmt: PriceFormatter, now: datetime) -> List[dict]:
    if coin.is_at_ath:
        ath = price_fmt.format(coin.price)
        pullback = PLACEHOLDER
    else:
        ago = format_distance_strict(datetime.fromtimestamp(coin.ath_date, tz=timezone.utc), now)
        ath = f"{price_fmt.format(coin.ath)} ({ago} ago)"
        pullback = (f"{price_fmt.format(-coin.pullback)} "
                    f"({format_percentage(-coin.pullback_percentage)})")

    return [
        _field("Price", price_fmt.format(coin.price)),
        _field("Market cap", format_market_cap(coin.market_cap, coin.quote_currency)),
        _field("Change (24h)", format_change(coin.percentage_change_24h)),
        _field("Change (7d)", format_change(coin.percentage_change_7d)),
        _field("ATH", ath),
        _field("Pullback", pullback),
    ]


def build_title(coin: CoinSnapshot) -> str:
    label = f"{coin.name} ({coin.symbol.upper()})"
    if coin.website:
        label = f"<{coin.website}|{label}>"
    marker = ATH_MARKER if coin.is_at_ath else ""
    return f"*{label}{marker}*"


def wants_chart(coin: CoinSnapshot) -> bool:
    return bool(coin.rank) and coin.rank <= MAX_CHART_RANK and not coin.is_stablecoin


def attempt_chart(coin: CoinSnapshot,
                  find_chart: Callable[[CoinSnapshot], Optional[str]],
                  upload_image: Callable[[str], Optional[str]]) -> ChartAttempt:
    try:
        return ChartAttempt(url=upload_image(find_chart(coin) or ""))
    except Exception as e:
        return ChartAttempt(error=e)


def chart_block(symbol: str, image_url: str) -> dict:
    filename = f"{symbol.lower()}-chart.jpg"
    return {
        "type": "image",
        "title": {"type": "plain_text", "text": filename},
        "image_url": image_url,
        "alt_text": filename,
    }


def build_slack_payload(
    coin_id: str,
    get_coin: Callable[[str], Optional[CoinSnapshot]] = jinx_api.get_coin,
    find_chart: Callable[[CoinSnapshot], Optional[str]] = charts.find_usd_pegged_chart,
    upload_image: Callable[[str], Optional[str]] = imgur_upload.upload_image_from_url,
    now: Optional[datetime] = None,
) -> Optional[MessagePayload]:
    """
    Render the Slack payload for coin_id, or None when the coin is unknown.

    The chart block is best effort: resolver or upload failures leave the
    payload with the section block only.
    """
    coin = get_coin(coin_id)
    if not coin:
        return None

    now = now or datetime.now(timezone.utc)
    price_fmt = PriceFormatter(coin.price, coin.quote_currency)
    text = summary_text(coin, price_fmt)

    section = {
        "type": "section",
        "text": {"type": "mrkdwn", "text": f"{build_title(coin)}\n{text}"},
        "fields": build_fields(coin, price_fmt, now),
        "accessory": {
            "type": "image",
            "image_url": f"{IMAGE_HOST}{coin.image_url}",
            "alt_text": f"{coin.symbol} logo",
        },
    }
    payload = MessagePayload(text=text, blocks=(section,), unfurl_links=False)

    if not wants_chart(coin):
        return payload

    chart = attempt_chart(coin, find_chart, upload_image)
    if chart.error is not None:
        log.debug("chart skipped for %s: %r", coin.symbol, chart.error)
    if chart.ok:
        payload = payload.with_block(chart_block(coin.symbol, chart.url))
    return payload
