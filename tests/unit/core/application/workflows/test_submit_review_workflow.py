import asyncio
from unittest.mock import AsyncMock

import pytest

from storefront.core.application.exceptions import (
    AuthorizationError,
    ConflictError,
    NotFoundError,
    ValidationError,
)
from storefront.core.application.policies import ReviewEligibilityPolicy, ReviewPolicy
from storefront.core.application.ports import DataStorePort, Table
from storefront.core.application.workflows.review import SubmitReviewInput, SubmitReviewWorkflow

COMMENT = "Excelente calidad, llegó a tiempo"


def _product(data_store, product_id: str) -> dict:
    return next(r for r in data_store.rows(Table.PRODUCTS) if r["id"] == product_id)


@pytest.fixture()
def bought(data_store, order_row, order_line_row):
    data_store.load(Table.ORDERS, [order_row("o-1", status="paid")])
    data_store.load(Table.ORDER_LINES, [order_line_row("o-1", "prod-1")])
    return data_store


@pytest.fixture()
def workflow(bought, retry_policy) -> SubmitReviewWorkflow:
    eligibility = ReviewEligibilityPolicy(bought, ReviewPolicy.PURCHASED_PRODUCT)
    return SubmitReviewWorkflow(bought, eligibility, retry_policy)


class TestSubmitReview:
    async def test_stores_review_and_updates_aggregate(self, workflow, bought, customer):
        review = await workflow.execute(SubmitReviewInput(customer, "prod-1", 4, f"  {COMMENT}  "))

        assert review.comment == COMMENT
        product = _product(bought, "prod-1")
        assert (product["rating_sum"], product["rating_count"]) == (4, 1)

    async def test_concurrent_submissions_store_one_review(self, workflow, bought, customer):
        results = await asyncio.gather(
            workflow.execute(SubmitReviewInput(customer, "prod-1", 5, COMMENT)),
            workflow.execute(SubmitReviewInput(customer, "prod-1", 3, COMMENT)),
            return_exceptions=True,
        )

        assert sum(isinstance(r, ConflictError) for r in results) == 1
        assert len(bought.rows(Table.REVIEWS)) == 1
        assert _product(bought, "prod-1")["rating_count"] == 1

    async def test_second_review_conflicts(self, workflow, customer):
        await workflow.execute(SubmitReviewInput(customer, "prod-1", 5, COMMENT))

        with pytest.raises(ConflictError):
            await workflow.execute(SubmitReviewInput(customer, "prod-1", 1, COMMENT))

    @pytest.mark.parametrize("method", ["insert", "increment"])
    async def test_lost_response_is_not_counted_twice(
        self, workflow, bought, customer, monkeypatch, lose_first_response, method
    ):
        monkeypatch.setattr(bought, method, lose_first_response(getattr(bought, method)))

        review = await workflow.execute(SubmitReviewInput(customer, "prod-1", 4, COMMENT))

        assert [r["id"] for r in bought.rows(Table.REVIEWS)] == [review.id]
        product = _product(bought, "prod-1")
        assert (product["rating_sum"], product["rating_count"]) == (4, 1)

    async def test_product_not_bought(self, workflow, bought, customer):
        with pytest.raises(AuthorizationError):
            await workflow.execute(SubmitReviewInput(customer, "prod-2", 5, COMMENT))

        assert bought.rows(Table.REVIEWS) == []

    async def test_unknown_product(self, workflow, customer):
        with pytest.raises(NotFoundError):
            await workflow.execute(SubmitReviewInput(customer, "prod-404", 5, COMMENT))


class TestReviewValidation:
    @pytest.fixture()
    def mock_store(self) -> AsyncMock:
        return AsyncMock(spec=DataStorePort)

    @pytest.mark.parametrize(
        "rating, comment",
        [
            (0, COMMENT),
            (6, COMMENT),
            (True, COMMENT),
            (4, "corto"),
            (4, "   muy bien   "),
        ],
    )
    async def test_rejected_before_any_io(self, mock_store, retry_policy, customer, rating, comment):
        eligibility = ReviewEligibilityPolicy(mock_store, ReviewPolicy.ANY_PAID_ORDER)
        workflow = SubmitReviewWorkflow(mock_store, eligibility, retry_policy)

        with pytest.raises(ValidationError):
            await workflow.execute(SubmitReviewInput(customer, "prod-1", rating, comment))

        mock_store.select.assert_not_awaited()
        mock_store.insert.assert_not_awaited()
