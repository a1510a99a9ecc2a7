from decimal import Decimal
from enum import StrEnum


class PriceBand(StrEnum):
    """Fixed price filters offered on category pages."""

    UP_TO_50K = "0-50"
    FROM_50K_TO_150K = "50-150"
    FROM_150K = "150+"

    @property
    def bounds(self) -> tuple[Decimal | None, Decimal | None]:
        """Inclusive (min, max) bounds; ``None`` means unbounded."""
        match self:
            case PriceBand.UP_TO_50K:
                return None, Decimal("50000")
            case PriceBand.FROM_50K_TO_150K:
                return Decimal("50000"), Decimal("150000")
            case PriceBand.FROM_150K:
                return Decimal("150000"), None

    def contains(self, price: Decimal) -> bool:
        low, high = self.bounds
        if low is not None and price < low:
            return False
        if high is not None and price > high:
            return False
        return True
