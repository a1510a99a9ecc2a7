from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field


class CategoryDTO(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    description: str = ""


class CreateCategoryDTO(BaseModel):
    name: str = Field(min_length=1, max_length=120)
    description: str = ""


class RatingDTO(BaseModel):
    average: float | None = None
    count: int = 0


class ProductDTO(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    title: str
    description: str
    price: Decimal
    stock: int
    state: str
    seller_id: str
    category_id: str | None = None
    image_url: str | None = None
    created_at: datetime | None = None


class CatalogEntryDTO(ProductDTO):
    seller_name: str | None = None
    rating: RatingDTO


class ReviewDTO(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    rating: int
    comment: str
    reviewer_name: str | None = None
    created_at: datetime | None = None


class ProductDetailDTO(BaseModel):
    product: ProductDTO
    category: CategoryDTO | None = None
    seller_name: str | None = None
    rating: RatingDTO
    reviews: list[ReviewDTO] = []


class SubmitReviewDTO(BaseModel):
    rating: int
    comment: str


class StoreDTO(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    seller_id: str
    name: str
    description: str = ""
    logo_url: str | None = None


class StorePageDTO(BaseModel):
    store: StoreDTO
    seller_name: str | None = None
    products: list[CatalogEntryDTO] = []
