from storefront.core.application.policies.access_policy import AccessPolicy, Capability, capabilities_of
from storefront.core.application.policies.review_eligibility_policy import (
    ReviewEligibilityPolicy,
    ReviewPolicy,
)

__all__ = [
    "AccessPolicy",
    "Capability",
    "ReviewEligibilityPolicy",
    "ReviewPolicy",
    "capabilities_of",
]
