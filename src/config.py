import os
import math
import logging
from dataclasses import dataclass, field
from typing import List, Optional

from dotenv import load_dotenv

from src.coincap_api.intervals import Interval

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://api.coincap.io/v2"
DEFAULT_START_MS = 1406931594000
DEFAULT_END_MS = 1675817253000

class ConfigError(ValueError):
    """Raised when an environment setting cannot be used"""
    pass

@dataclass
class MarketDataConfig:
    """Endpoint and time window used by the CoinCap client"""
    base_url: str = DEFAULT_BASE_URL
    api_key: Optional[str] = None
    interval: Interval = Interval.ONE_DAY
    start_ms: int = DEFAULT_START_MS
    end_ms: int = DEFAULT_END_MS
    timeout: float = 10.0
    assets: List[str] = field(default_factory=lambda: ["bitcoin"])

    def __post_init__(self):
        if self.start_ms >= self.end_ms:
            raise ConfigError(f"Start of window ({self.start_ms}) must be before end ({self.end_ms})")
        if not math.isfinite(self.timeout) or self.timeout <= 0:
            raise ConfigError(f"Timeout must be positive, got {self.timeout}")
        self.base_url = self.base_url.rstrip('/')

    @classmethod
    def from_env(cls, env_file: Optional[str] = None) -> "MarketDataConfig":
        """
        Build a config from COINCAP_* environment variables.

        Values from a .env file are loaded first without overriding
        variables that are already set.
        """
        load_dotenv(env_file)

        interval_code = os.getenv('COINCAP_INTERVAL') or Interval.ONE_DAY.value
        try:
            interval = Interval.from_code(interval_code)
        except ValueError as e:
            raise ConfigError(str(e)) from e

        assets = [a.strip() for a in os.getenv('COINCAP_ASSETS', 'bitcoin').split(',') if a.strip()]

        config = cls(
            base_url=os.getenv('COINCAP_BASE_URL') or DEFAULT_BASE_URL,
            api_key=os.getenv('COINCAP_API_KEY') or None,
            interval=interval,
            start_ms=_int_env('COINCAP_START_MS', DEFAULT_START_MS),
            end_ms=_int_env('COINCAP_END_MS', DEFAULT_END_MS),
            timeout=_float_env('COINCAP_TIMEOUT', 10.0),
            assets=assets or ["bitcoin"]
        )
        logger.debug(f"Loaded config: base_url={config.base_url}, interval={config.interval.value}, "
                     f"window={config.start_ms}..{config.end_ms}, assets={config.assets}")
        return config

def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw == '':
        return default
    try:
        return int(raw)
    except ValueError:
        raise ConfigError(f"{name} must be an integer number of milliseconds, got {raw!r}")

def _float_env(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw == '':
        return default
    try:
        return float(raw)
    except ValueError:
        raise ConfigError(f"{name} must be a number, got {raw!r}")
