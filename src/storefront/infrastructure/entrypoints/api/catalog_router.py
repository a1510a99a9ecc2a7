from fastapi import APIRouter, Depends, Query, status

from storefront.core.application.skills.catalog import CreateCategoryInput
from storefront.core.application.skills.seller import CreateProductInput, DeleteProductInput, UpdateProductInput
from storefront.core.application.workflows.review import SubmitReviewInput
from storefront.core.domain.catalog import CatalogQuery, CatalogSort, PriceBand
from storefront.core.domain.identity import Principal
from storefront.infrastructure.entrypoints.api.dtos.catalog_dtos import (
    CatalogEntryDTO,
    CategoryDTO,
    CreateCategoryDTO,
    ProductDetailDTO,
    ProductDTO,
    RatingDTO,
    ReviewDTO,
    SubmitReviewDTO,
)
from storefront.infrastructure.entrypoints.api.dtos.seller_dtos import CreateProductDTO, UpdateProductDTO
from storefront.infrastructure.entrypoints.api.mappers import response_mapper
from storefront.infrastructure.entrypoints.api.security import current_principal, get_container
from storefront.infrastructure.resolution.container import StorefrontContainer

router = APIRouter(tags=["catalog"])


@router.get("/categories", response_model=list[CategoryDTO])
async def list_categories(container: StorefrontContainer = Depends(get_container)):
    categories = await container.list_categories.execute()
    return [CategoryDTO.model_validate(c) for c in categories]


@router.post("/categories", response_model=CategoryDTO, status_code=status.HTTP_201_CREATED)
async def create_category(
    body: CreateCategoryDTO,
    principal: Principal | None = Depends(current_principal),
    container: StorefrontContainer = Depends(get_container),
):
    category = await container.create_category.execute(
        CreateCategoryInput(principal=principal, name=body.name, description=body.description)
    )
    return CategoryDTO.model_validate(category)


@router.get("/products", response_model=list[CatalogEntryDTO])
async def search_products(
    category_id: str | None = None,
    price_band: PriceBand | None = None,
    q: str | None = Query(default=None, max_length=200),
    sort: CatalogSort = CatalogSort.NEWEST,
    include_inactive: bool = False,
    limit: int | None = Query(default=None, ge=1, le=200),
    container: StorefrontContainer = Depends(get_container),
):
    entries = await container.search_catalog.execute(
        CatalogQuery(
            category_id=category_id,
            price_band=price_band,
            text=q,
            sort=sort,
            include_inactive=include_inactive,
            limit=limit,
        )
    )
    return [response_mapper.catalog_entry_dto(e) for e in entries]


@router.post("/products", response_model=ProductDTO, status_code=status.HTTP_201_CREATED)
async def create_product(
    body: CreateProductDTO,
    principal: Principal | None = Depends(current_principal),
    container: StorefrontContainer = Depends(get_container),
):
    product = await container.create_product.execute(CreateProductInput(principal=principal, **body.model_dump()))
    return response_mapper.product_dto(product)


@router.get("/products/{product_id}", response_model=ProductDetailDTO)
async def get_product(product_id: str, container: StorefrontContainer = Depends(get_container)):
    detail = await container.product_detail.execute(product_id)
    return response_mapper.product_detail_dto(detail)


@router.patch("/products/{product_id}", response_model=ProductDTO)
async def update_product(
    product_id: str,
    body: UpdateProductDTO,
    principal: Principal | None = Depends(current_principal),
    container: StorefrontContainer = Depends(get_container),
):
    product = await container.update_product.execute(
        UpdateProductInput(principal=principal, product_id=product_id, **body.model_dump(exclude_unset=True))
    )
    return response_mapper.product_dto(product)


@router.delete("/products/{product_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_product(
    product_id: str,
    principal: Principal | None = Depends(current_principal),
    container: StorefrontContainer = Depends(get_container),
) -> None:
    await container.delete_product.execute(DeleteProductInput(principal=principal, product_id=product_id))


@router.get("/products/{product_id}/rating", response_model=RatingDTO)
async def product_rating(product_id: str, container: StorefrontContainer = Depends(get_container)):
    return response_mapper.rating_dto(await container.product_rating.execute(product_id))


@router.post("/products/{product_id}/reviews", response_model=ReviewDTO, status_code=status.HTTP_201_CREATED)
async def submit_review(
    product_id: str,
    body: SubmitReviewDTO,
    principal: Principal | None = Depends(current_principal),
    container: StorefrontContainer = Depends(get_container),
):
    review = await container.submit_review.execute(
        SubmitReviewInput(principal=principal, product_id=product_id, rating=body.rating, comment=body.comment)
    )
    return ReviewDTO(
        id=review.id,
        rating=review.rating,
        comment=review.comment,
        reviewer_name=principal.display_name if principal else None,
        created_at=review.created_at,
    )
