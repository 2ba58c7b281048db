from typing import TYPE_CHECKING, Any, Dict, List, Optional
import logging
from datetime import datetime

import pytz
import requests

if TYPE_CHECKING:
    from src.config import MarketDataConfig
from .intervals import Interval
from .models import Asset, PriceSample

logger = logging.getLogger(__name__)

utc_tz = pytz.UTC

class CoincapAPIError(Exception):
    """Raised when a CoinCap request fails or returns an unexpected payload"""
    pass

class AssetNotFoundError(CoincapAPIError):
    """Raised when the API has no asset with the requested id (404)"""
    pass

def format_window(start_ms: int, end_ms: int) -> str:
    """Human-readable UTC dates for a millisecond window"""
    start = datetime.fromtimestamp(start_ms / 1000, tz=utc_tz)
    end = datetime.fromtimestamp(end_ms / 1000, tz=utc_tz)
    return f"{start.strftime('%Y-%m-%d')} to {end.strftime('%Y-%m-%d')} (UTC)"

class CoincapClient:
    """Thin wrapper around the CoinCap REST API (v2)"""

    def __init__(self, config: "MarketDataConfig", session: Optional[requests.Session] = None):
        """
        Initialize the client

        Args:
            config: Endpoint, window and timeout settings
            session: Optional pre-built session (a new one is created otherwise)
        """
        self.config = config
        self.session = session or requests.Session()
        self.session.headers.update({"Accept": "application/json"})
        if config.api_key:
            self.session.headers.update({"Authorization": f"Bearer {config.api_key}"})

    def _get(self, path: str, params: Optional[Dict[str, Any]] = None) -> List[Dict[str, Any]]:
        url = f"{self.config.base_url}{path}"
        logger.debug(f"GET {url} params={params}")
        try:
            response = self.session.get(url, params=params, timeout=self.config.timeout)
        except requests.RequestException as e:
            raise CoincapAPIError(f"Request to {url} failed: {e}") from e

        if response.status_code == 404:
            raise AssetNotFoundError(f"Not found (404): {url}")
        if response.status_code != 200:
            raise CoincapAPIError(f"API request failed with status {response.status_code}: {url}")

        try:
            payload = response.json()
        except ValueError as e:
            raise CoincapAPIError(f"Invalid JSON from {url}: {e}") from e

        data = payload.get('data') if isinstance(payload, dict) else None
        if not isinstance(data, list):
            raise CoincapAPIError(f"Response from {url} has no 'data' list")
        return data

    def fetch_asset_list(self, limit: Optional[int] = None) -> List[Asset]:
        """
        Get the assets known to CoinCap, ordered by rank

        Args:
            limit: Optional maximum number of assets to request
        """
        params = {"limit": limit} if limit else None
        data = self._get("/assets", params=params)
        try:
            assets = [Asset.from_dict(entry) for entry in data]
        except (KeyError, TypeError, ValueError) as e:
            raise CoincapAPIError(f"Malformed asset entry: {e}") from e

        logger.info(f"Retrieved {len(assets)} assets")
        return assets

    def fetch_price_history(self,
                            asset_id: str,
                            interval: Optional[Interval] = None,
                            start_ms: Optional[int] = None,
                            end_ms: Optional[int] = None) -> List[PriceSample]:
        """
        Get the historical price series of one asset

        Args:
            asset_id: CoinCap asset id (e.g. 'bitcoin')
            interval: Sampling interval (defaults to the configured one)
            start_ms: Window start in epoch milliseconds (defaults to config)
            end_ms: Window end in epoch milliseconds (defaults to config)

        Returns:
            Samples in the order delivered by the API
        """
        interval = interval or self.config.interval
        start_ms = self.config.start_ms if start_ms is None else start_ms
        end_ms = self.config.end_ms if end_ms is None else end_ms

        logger.debug(f"Fetching {asset_id} {interval.value} history from {format_window(start_ms, end_ms)}")
        data = self._get(
            f"/assets/{asset_id}/history",
            params={"interval": interval.value, "start": start_ms, "end": end_ms}
        )
        try:
            samples = [PriceSample.from_dict(entry) for entry in data]
        except (KeyError, TypeError, ValueError) as e:
            raise CoincapAPIError(f"Malformed history entry for {asset_id}: {e}") from e

        logger.info(f"Retrieved {len(samples)} {interval.value} samples for {asset_id}")
        return samples
