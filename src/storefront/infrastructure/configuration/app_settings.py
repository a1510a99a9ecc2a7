from decimal import Decimal
from enum import StrEnum
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from storefront.core.application.policies.review_eligibility_policy import ReviewPolicy


class DataBackend(StrEnum):
    MEMORY = "memory"
    POSTGREST = "postgrest"


class AppSettings(BaseSettings):
    """Business and runtime settings for the storefront."""

    app_name: str = "Storefront Service"
    env: str = "local"
    log_level: str = "INFO"
    log_format: Literal["json", "console"] | None = None
    data_backend: DataBackend = DataBackend.MEMORY

    tax_rate: Decimal = Field(default=Decimal("0.10"), ge=0, le=1)
    flat_shipping: Decimal = Field(default=Decimal("0"), ge=0)
    return_window_days: int = Field(default=30, gt=0, description="Days after purchase a return is accepted")
    review_policy: ReviewPolicy = ReviewPolicy.ANY_PAID_ORDER
    review_min_comment_length: int = Field(default=10, ge=1)
    retry_max_attempts: int = Field(default=3, ge=1, le=10)

    model_config = SettingsConfigDict(
        env_prefix="STOREFRONT_",
        case_sensitive=False,
        extra="ignore",
    )
