"""Review submission: validate, insert under the (user, product) constraint, update the cached aggregate."""

from dataclasses import dataclass
from typing import Any

import structlog
from structlog.contextvars import bind_contextvars

from storefront.core.application.exceptions import (
    AuthorizationError,
    ConflictError,
    NotFoundError,
    ValidationError,
)
from storefront.core.application.policies import AccessPolicy, Capability, ReviewEligibilityPolicy
from storefront.core.application.ports import DataStorePort, Filter, Query, Table
from storefront.core.application.workflows.base_workflow import BaseWorkflow
from storefront.core.application.workflows.compensation import Compensations
from storefront.core.domain.identity import Principal
from storefront.core.domain.review import MAX_RATING, MIN_RATING, Review
from storefront.core.domain.shared import utc_now
from storefront.core.exceptions import UniqueViolationError
from storefront.infrastructure.common.retry import RetryPolicy
from storefront.infrastructure.observability.tracing_setup import trace_operation

logger = structlog.get_logger()

DEFAULT_MIN_COMMENT_LENGTH = 10


@dataclass(frozen=True)
class SubmitReviewInput:
    principal: Principal | None
    product_id: str
    rating: int
    comment: str


class SubmitReviewWorkflow(BaseWorkflow[SubmitReviewInput, Review]):
    name = "review_submission"

    def __init__(
        self,
        data_store: DataStorePort,
        eligibility: ReviewEligibilityPolicy,
        retry_policy: RetryPolicy,
        min_comment_length: int = DEFAULT_MIN_COMMENT_LENGTH,
    ) -> None:
        super().__init__(data_store, retry_policy)
        self._eligibility = eligibility
        self._min_comment_length = min_comment_length

    @trace_operation("workflow.review_submission")
    async def execute(self, input_data: SubmitReviewInput) -> Review:
        principal = AccessPolicy.require(input_data.principal, Capability.SHOP)
        bind_contextvars(user_id=principal.user_id, event_type="workflow.review_submission")
        comment = self._validate(input_data)
        context: dict[str, Any] = {"product_id": input_data.product_id}

        async def steps(saga: Compensations) -> Review:
            await self._step_1_check_product(input_data.product_id)
            await self._step_2_check_eligibility(principal, input_data.product_id)
            review = await self._step_3_insert(saga, principal, input_data, comment)
            await self._step_4_update_aggregate(review)
            return review

        review = await self._run(steps, context=context)
        logger.info("Review stored", review_id=review.id, rating=review.rating, **context)
        return review

    def _validate(self, data: SubmitReviewInput) -> str:
        rating = data.rating
        if isinstance(rating, bool) or not isinstance(rating, int) or not MIN_RATING <= rating <= MAX_RATING:
            raise ValidationError(
                f"Rating must be a whole number between {MIN_RATING} and {MAX_RATING}.",
                context={"rating": rating},
            )
        comment = data.comment.strip()
        if len(comment) < self._min_comment_length:
            raise ValidationError(
                f"Comment must be at least {self._min_comment_length} characters.",
                context={"length": len(comment)},
            )
        return comment

    # ── Step Methods ─────────────────────────────────────────────────

    async def _step_1_check_product(self, product_id: str) -> None:
        rows = await self._io(
            lambda: self._store.select(Table.PRODUCTS, Query.where(Filter.eq("id", product_id), limit=1))
        )
        if not rows:
            raise NotFoundError("Product not found.", context={"product_id": product_id})

    async def _step_2_check_eligibility(self, principal: Principal, product_id: str) -> None:
        if not await self._io(lambda: self._eligibility.is_eligible(principal, product_id)):
            raise AuthorizationError(
                "Only customers with a paid order can review this product.",
                context={"review_policy": self._eligibility.policy.value},
            )
        existing = await self._io(
            lambda: self._store.select(
                Table.REVIEWS,
                Query.where(Filter.eq("user_id", principal.user_id), Filter.eq("product_id", product_id), limit=1),
            )
        )
        if existing:
            raise ConflictError("You have already reviewed this product.")

    async def _step_3_insert(
        self, saga: Compensations, principal: Principal, data: SubmitReviewInput, comment: str
    ) -> Review:
        try:
            row = await self._insert(
                Table.REVIEWS,
                {
                    "product_id": data.product_id,
                    "user_id": principal.user_id,
                    "rating": data.rating,
                    "comment": comment,
                    "created_at": utc_now().isoformat(),
                },
            )
        except UniqueViolationError as exc:
            raise ConflictError("You have already reviewed this product.") from exc
        review = Review.from_row(row)
        saga.push("delete review", lambda: self._store.delete(Table.REVIEWS, (Filter.eq("id", review.id),)))
        return review

    async def _step_4_update_aggregate(self, review: Review) -> None:
        await self._io(
            lambda: self._store.increment(
                Table.PRODUCTS,
                (Filter.eq("id", review.product_id),),
                {"rating_sum": review.rating, "rating_count": 1},
                floor=None,
                request_key=f"{review.id}:rating",
            )
        )
