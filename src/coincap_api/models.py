from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Dict, Union

PriceValue = Union[str, float, int, Decimal, None]

@dataclass(frozen=True)
class PriceSample:
    price: PriceValue  # decimal string as delivered by the API, or a number
    timestamp: int     # milliseconds since epoch

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PriceSample":
        """Build a sample from a history entry ({"priceUsd": "...", "time": ...})"""
        return cls(price=data["priceUsd"], timestamp=int(data["time"]))

@dataclass(frozen=True)
class Asset:
    id: str
    rank: int
    symbol: str
    name: str

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Asset":
        return cls(
            id=data["id"],
            rank=int(data["rank"]),
            symbol=data["symbol"],
            name=data["name"]
        )
