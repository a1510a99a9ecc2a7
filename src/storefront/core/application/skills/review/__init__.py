from storefront.core.application.skills.review.product_rating_skill import ProductRatingSkill

__all__ = ["ProductRatingSkill"]
