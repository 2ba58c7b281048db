from enum import Enum

class Interval(Enum):
    # Sampling intervals accepted by the CoinCap history endpoint
    ONE_MINUTE = "m1"
    FIVE_MINUTE = "m5"
    FIFTEEN_MINUTE = "m15"
    THIRTY_MINUTE = "m30"
    ONE_HOUR = "h1"
    TWO_HOUR = "h2"
    SIX_HOUR = "h6"
    TWELVE_HOUR = "h12"
    ONE_DAY = "d1"

    @property
    def minutes(self) -> int:
        return {
            "m1": 1,
            "m5": 5,
            "m15": 15,
            "m30": 30,
            "h1": 60,
            "h2": 120,
            "h6": 360,
            "h12": 720,
            "d1": 1440
        }[self.value]

    @classmethod
    def from_code(cls, code: str) -> "Interval":
        """Look up an interval by its API code (e.g. 'd1') or enum name"""
        for interval in cls:
            if code == interval.value or code.upper() == interval.name:
                return interval
        raise ValueError(f"Unknown interval: {code}")
