"""
Reduction of a price series to all-time high, all-time low and current price.
"""

from dataclasses import dataclass
from typing import List, Sequence, Union
import math
import re
import sys
import numpy as np

from ..coincap_api.models import PriceSample, PriceValue

# Extremes used when no sample in the series has a usable price
NO_DATA_HIGH = -sys.float_info.max
NO_DATA_LOW = math.inf

# Plain decimal or exponent literal, or inf/infinity/nan; no whitespace or digit separators
PRICE_LITERAL = re.compile(r"[+-]?(\d+\.?\d*([eE][+-]?\d+)?|\.\d+([eE][+-]?\d+)?|inf(inity)?|nan)", re.IGNORECASE)

class AggregationError(Exception):
    """Base class for failures while reducing a price series"""
    pass

class UnparsablePriceError(AggregationError):
    """Raised when the most recent sample's price cannot be read as a number"""

    def __init__(self, asset_name: str, raw_price: PriceValue):
        self.asset_name = asset_name
        self.raw_price = raw_price
        super().__init__(f"Failed to parse priceUsd {raw_price!r} for {asset_name}")

@dataclass(frozen=True)
class ParsedPrice:
    value: float

class _Skipped:
    def __repr__(self):
        return "SKIPPED"

SKIPPED = _Skipped()

SampleParse = Union[ParsedPrice, _Skipped]

@dataclass(frozen=True)
class Statistics:
    asset_name: str
    high: float
    low: float
    current: float

    @property
    def has_data(self) -> bool:
        """False when no price parsed and high/low still hold the no-data sentinels"""
        return self.high >= self.low

def parse_price(raw: PriceValue) -> SampleParse:
    """
    Read one sample's price.

    Strings must be a plain float literal (surrounding whitespace and
    digit separators are rejected); "inf" and "nan" are accepted.
    Numeric types are converted directly.

    Returns:
        ParsedPrice on success, SKIPPED otherwise
    """
    if raw is None or isinstance(raw, bool):
        return SKIPPED
    if isinstance(raw, str) and not PRICE_LITERAL.fullmatch(raw):
        return SKIPPED
    try:
        value = float(raw)
    except (TypeError, ValueError):
        return SKIPPED
    return ParsedPrice(value)

def compute_statistics(series: Sequence[PriceSample], asset_name: str) -> Statistics:
    """
    Reduce a chronological series to high/low/current.

    Samples with unreadable prices are dropped from high/low, and NaN
    prices never win either extreme. The last sample is the current
    price and must be readable.

    Args:
        series: Samples in the order delivered by the data source
        asset_name: Label carried into the result

    Returns:
        Statistics for the series

    Raises:
        UnparsablePriceError: The last sample's price is unreadable
    """
    parsed: List[float] = [
        p.value for p in (parse_price(sample.price) for sample in series)
        if isinstance(p, ParsedPrice)
    ]

    prices = np.asarray(parsed, dtype=np.float64)
    prices = prices[~np.isnan(prices)]
    if prices.size:
        high = float(np.max(prices))
        low = float(np.min(prices))
    else:
        high, low = NO_DATA_HIGH, NO_DATA_LOW

    if series:
        last = parse_price(series[-1].price)
        if not isinstance(last, ParsedPrice):
            raise UnparsablePriceError(asset_name, series[-1].price)
        current = last.value
    else:
        current = 0.0

    return Statistics(asset_name=asset_name, high=high, low=low, current=current)
