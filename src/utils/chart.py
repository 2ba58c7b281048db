from dataclasses import dataclass
from enum import Enum
from typing import Optional

BAR_WIDTH = 50
FILLED_CHAR = "█"
EMPTY_CHAR = "░"

DEGENERATE_RANGE_MESSAGE = "Upper and lower value are the same."
OUT_OF_BOUNDS_MESSAGE = "Current value is not within the specified range."

class GaugeStatus(Enum):
    RENDERED = "rendered"
    DEGENERATE_RANGE = "degenerate_range"
    OUT_OF_BOUNDS = "out_of_bounds"

@dataclass(frozen=True)
class GaugeOutcome:
    status: GaugeStatus
    text: str  # the bar line, or the advisory message when no bar was drawn
    percentage: Optional[float] = None
    filled: int = 0
    empty: int = 0

    @property
    def bar(self) -> Optional[str]:
        return self.text if self.status is GaugeStatus.RENDERED else None

def render_gauge(high: float, low: float, current: float, label: str) -> GaugeOutcome:
    """Render where current sits between low and high as a fixed-width bar

    The percentage is rounded to two decimals before the bound check and the
    bar length is taken from the rounded value, so the label and bar agree.
    """
    price_range = high - low
    if price_range == 0.0:
        return GaugeOutcome(GaugeStatus.DEGENERATE_RANGE, DEGENERATE_RANGE_MESSAGE)

    percentage = (current - low) * 100.0 / price_range
    rounded = float(f"{percentage:.2f}")
    if not 0.0 <= rounded <= 100.0:
        return GaugeOutcome(GaugeStatus.OUT_OF_BOUNDS, OUT_OF_BOUNDS_MESSAGE, percentage=rounded)

    filled = int(rounded) // 2
    empty = BAR_WIDTH - filled
    line = f"{rounded:.2f}%|{FILLED_CHAR * filled}{EMPTY_CHAR * empty}|{label}"
    return GaugeOutcome(GaugeStatus.RENDERED, line, percentage=rounded, filled=filled, empty=empty)

def print_gauge(high: float, low: float, current: float, label: str) -> GaugeOutcome:
    """Print a gauge line (or the advisory message) for one asset"""
    outcome = render_gauge(high, low, current, label)
    print(outcome.text)
    return outcome
