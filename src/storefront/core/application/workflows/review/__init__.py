from storefront.core.application.workflows.review.submit_review_workflow import (
    DEFAULT_MIN_COMMENT_LENGTH,
    SubmitReviewInput,
    SubmitReviewWorkflow,
)

__all__ = ["DEFAULT_MIN_COMMENT_LENGTH", "SubmitReviewInput", "SubmitReviewWorkflow"]
