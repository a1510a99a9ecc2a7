from storefront.core.domain.shared.money import ZERO, to_money
from storefront.core.domain.shared.row_values import parse_datetime, utc_now

__all__ = ["ZERO", "parse_datetime", "to_money", "utc_now"]
