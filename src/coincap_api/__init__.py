"""
CoinCap REST API access.
"""

from .client import CoincapClient, CoincapAPIError, AssetNotFoundError
from .intervals import Interval
from .models import Asset, PriceSample

__all__ = ['CoincapClient', 'CoincapAPIError', 'AssetNotFoundError', 'Interval', 'Asset', 'PriceSample']
