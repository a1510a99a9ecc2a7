from storefront.core.domain.review.rating_summary import RatingSummary
from storefront.core.domain.review.review import MAX_RATING, MIN_RATING, Review

__all__ = ["MAX_RATING", "MIN_RATING", "RatingSummary", "Review"]
