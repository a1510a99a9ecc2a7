from dataclasses import dataclass
from datetime import datetime, timedelta

DEFAULT_RETURN_WINDOW_DAYS = 30


@dataclass(frozen=True)
class ReturnWindow:
    """Fixed span after purchase during which a buyer may request a return."""

    duration: timedelta = timedelta(days=DEFAULT_RETURN_WINDOW_DAYS)

    def __post_init__(self) -> None:
        if self.duration <= timedelta(0):
            raise ValueError("Return window must be a positive duration.")

    @classmethod
    def of_days(cls, days: int) -> "ReturnWindow":
        return cls(duration=timedelta(days=days))

    def closes_at(self, purchased_at: datetime) -> datetime:
        return purchased_at + self.duration

    def is_open(self, purchased_at: datetime, now: datetime) -> bool:
        return now <= self.closes_at(purchased_at)
