# coin_models.py
"""
Value types shared by the payload builder and its collaborators.
CoinSnapshot is read-only input, MessagePayload is the rendered output.
"""

from dataclasses import dataclass, field, replace
from typing import Optional, Tuple

# Stable-value tickers never get a chart attached.
STABLECOINS = frozenset({
    "usdt", "usdc", "busd", "dai", "tusd", "usdp", "gusd", "ust", "ustc",
    "frax", "lusd", "usdd", "fdusd", "pyusd", "susd", "eurs", "eurt",
    "xaut", "paxg",
})


def _opt_float(v) -> Optional[float]:
    return None if v is None else float(v)


@dataclass(frozen=True)
class CoinSnapshot:
    id: str
    symbol: str
    name: str
    price: float
    quote_currency: str = "USD"
    website: Optional[str] = None
    image_url: str = ""
    market_cap: Optional[float] = None
    percentage_change_24h: float = 0.0
    percentage_change_7d: float = 0.0
    rank: Optional[int] = None
    ath: float = 0.0
    ath_date: int = 0
    is_at_ath: bool = False
    pullback: float = 0.0
    pullback_percentage: float = 0.0

    @property
    def is_stablecoin(self) -> bool:
        return self.symbol.lower() in STABLECOINS

    @classmethod
    def from_api(cls, data: dict) -> "CoinSnapshot":
        """Map the provider's camelCase JSON onto a snapshot."""
        rank = data.get("rank")
        return cls(
            id=str(data.get("id") or data.get("symbol", "")),
            symbol=data["symbol"],
            name=data["name"],
            price=float(data["price"]),
            quote_currency=data.get("quoteCurrency") or "USD",
            website=data.get("website") or None,
            image_url=data.get("imageUrl") or "",
            market_cap=_opt_float(data.get("marketCap")),
            percentage_change_24h=float(data.get("percentageChange24h") or 0),
            percentage_change_7d=float(data.get("percentageChange7d") or 0),
            rank=int(rank) if rank else None,
            ath=float(data.get("ath") or 0),
            ath_date=int(data.get("athDate") or 0),
            is_at_ath=bool(data.get("isAtAth")),
            pullback=float(data.get("pullback") or 0),
            pullback_percentage=float(data.get("pullbackPercentage") or 0),
        )


@dataclass(frozen=True)
class MessagePayload:
    text: str
    blocks: Tuple[dict, ...] = field(default_factory=tuple)
    unfurl_links: bool = False

    def with_block(self, block: dict) -> "MessagePayload":
        return replace(self, blocks=self.blocks + (block,))

    def to_dict(self) -> dict:
        return {
            "text": self.text,
            "blocks": list(self.blocks),
            "unfurl_links": self.unfurl_links,
        }
