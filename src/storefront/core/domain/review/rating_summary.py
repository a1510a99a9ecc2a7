from collections.abc import Iterable
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal

_ONE_DECIMAL = Decimal("0.1")


@dataclass(frozen=True)
class RatingSummary:
    """Aggregate rating of a product (or a seller's catalog).

    ``average`` is ``None`` when there are no reviews so the caller can show
    a "no reviews" state instead of a zero score.
    """

    count: int = 0
    total: int = 0

    @classmethod
    def from_ratings(cls, ratings: Iterable[int]) -> "RatingSummary":
        values = [int(r) for r in ratings]
        return cls(count=len(values), total=sum(values))

    @property
    def average(self) -> float | None:
        if self.count <= 0:
            return None
        mean = Decimal(self.total) / Decimal(self.count)
        return float(mean.quantize(_ONE_DECIMAL, rounding=ROUND_HALF_UP))

    def add(self, rating: int) -> "RatingSummary":
        return RatingSummary(count=self.count + 1, total=self.total + rating)
