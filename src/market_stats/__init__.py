"""
Price series statistics.
"""

from .aggregator import (
    AggregationError,
    UnparsablePriceError,
    Statistics,
    ParsedPrice,
    SKIPPED,
    parse_price,
    compute_statistics,
)

__all__ = ['AggregationError', 'UnparsablePriceError', 'Statistics', 'ParsedPrice',
           'SKIPPED', 'parse_price', 'compute_statistics']
