import sys
import logging
import argparse
from dataclasses import replace
from typing import List, Optional, Sequence

from src.config import MarketDataConfig, ConfigError
from src.coincap_api.client import CoincapClient, CoincapAPIError, format_window
from src.coincap_api.intervals import Interval
from src.coincap_api.models import Asset
from src.market_stats.aggregator import compute_statistics, AggregationError
from src.utils.chart import print_gauge, GaugeOutcome

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

logger = logging.getLogger(__name__)

def positive_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected a positive integer, got {value!r}")
    if number <= 0:
        raise argparse.ArgumentTypeError(f"expected a positive integer, got {value!r}")
    return number

def parse_arguments(argv: Optional[Sequence[str]] = None):
    """Parse command line arguments"""
    parser = argparse.ArgumentParser(description='Crypto-asset all-time range gauges from CoinCap')
    parser.add_argument('--asset', action='append', dest='assets', metavar='ID',
                        help='CoinCap asset id (repeatable, e.g. bitcoin). Defaults to COINCAP_ASSETS')
    parser.add_argument('--top', type=positive_int, default=None, metavar='N',
                        help='Draw the N highest-ranked assets instead of --asset')
    parser.add_argument('--interval', type=str, default=None,
                        choices=[i.value for i in Interval],
                        help='Sampling interval (defaults to COINCAP_INTERVAL)')
    parser.add_argument('--start', type=int, default=None, help='Window start, epoch milliseconds')
    parser.add_argument('--end', type=int, default=None, help='Window end, epoch milliseconds')
    parser.add_argument('--verbose', action='store_true', help='Enable debug logging')
    return parser.parse_args(argv)

def configure_logging(verbose: bool = False):
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format=LOG_FORMAT,
        datefmt='%Y-%m-%d %H:%M:%S',
        stream=sys.stdout
    )

def process_asset(client: CoincapClient, asset: Asset, interval: Interval) -> Optional[GaugeOutcome]:
    """Fetch, reduce and draw one asset. Returns None if the asset failed."""
    try:
        series = client.fetch_price_history(asset.id, interval)
        stats = compute_statistics(series, asset.name)
    except (CoincapAPIError, AggregationError) as e:
        logger.error(f"Error: {e}")
        return None

    logger.debug(f"{stats.asset_name}: high={stats.high} low={stats.low} current={stats.current}")
    if not stats.has_data:
        logger.warning(f"{stats.asset_name}: no usable prices in the series")
    return print_gauge(stats.high, stats.low, stats.current, stats.asset_name)

def run_dashboard(client: CoincapClient, assets: Sequence[Asset], interval: Interval) -> List[GaugeOutcome]:
    """Draw a gauge per asset, moving on to the next asset when one fails"""
    outcomes = []
    for asset in assets:
        outcome = process_asset(client, asset, interval)
        if outcome is not None:
            outcomes.append(outcome)
    return outcomes

def resolve_assets(client: CoincapClient, args, config: MarketDataConfig) -> List[Asset]:
    """Assets to draw: the top of the asset list, or ids named on the command line / in config"""
    if args.top is not None:
        assets = sorted(client.fetch_asset_list(limit=args.top), key=lambda a: a.rank)
        return assets[:args.top]
    ids = args.assets or config.assets
    # No listing call for explicit ids; the id doubles as the label
    return [Asset(id=asset_id, rank=0, symbol=asset_id.upper(), name=asset_id) for asset_id in ids]

def main(argv: Optional[Sequence[str]] = None) -> int:
    args = parse_arguments(argv)
    configure_logging(args.verbose)

    try:
        config = MarketDataConfig.from_env()
        if args.start is not None or args.end is not None:
            config = replace(
                config,
                start_ms=config.start_ms if args.start is None else args.start,
                end_ms=config.end_ms if args.end is None else args.end
            )
    except ConfigError as e:
        logger.error(f"Invalid configuration: {e}")
        return 2

    interval = Interval.from_code(args.interval) if args.interval else config.interval
    logger.info(f"Using {interval.value} interval ({interval.minutes} minutes), "
                f"window {format_window(config.start_ms, config.end_ms)}")

    client = CoincapClient(config)
    try:
        assets = resolve_assets(client, args, config)
    except CoincapAPIError as e:
        logger.error(f"Failed to fetch asset list: {e}")
        return 1

    outcomes = run_dashboard(client, assets, interval)
    logger.info(f"Processed {len(outcomes)}/{len(assets)} assets")
    return 0

if __name__ == "__main__":
    sys.exit(main())
