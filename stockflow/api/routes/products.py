"""Product endpoints."""

from fastapi import APIRouter, Depends, Query, status

from stockflow.api.dependencies import (
    get_alert_service,
    get_create_product_use_case,
    get_products,
    get_update_product_use_case,
)
from stockflow.application.dto.requests import CreateProductRequest, UpdateProductRequest
from stockflow.application.dto.responses import (
    ErrorResponse,
    EvaluationResponse,
    ProductListResponse,
    ProductResponse,
    StockAlertResponse,
)
from stockflow.application.use_cases import CreateProductUseCase, UpdateProductUseCase
from stockflow.core.entities import ProductFilter
from stockflow.core.exceptions import ProductNotFoundError
from stockflow.core.interfaces import IProductStore
from stockflow.core.services import StockAlertService

router = APIRouter(prefix="/api/products", tags=["products"])


@router.post(
    "",
    response_model=ProductResponse,
    status_code=status.HTTP_201_CREATED,
    responses={409: {"model": ErrorResponse}},
)
async def create_product(
    request: CreateProductRequest,
    use_case: CreateProductUseCase = Depends(get_create_product_use_case),
) -> ProductResponse:
    """Create a product; a positive quantity is booked as a purchase."""
    product = await use_case.execute(request)
    return ProductResponse.from_entity(product)


@router.get("", response_model=ProductListResponse)
async def list_products(
    category_id: int | None = None,
    search: str | None = None,
    low_stock: bool = False,
    limit: int = Query(default=100, ge=1, le=1000),
    offset: int = Query(default=0, ge=0),
    store: IProductStore = Depends(get_products),
) -> ProductListResponse:
    """List products with optional filters."""
    products = await store.list_products(
        ProductFilter(category_id=category_id, search=search, low_stock=low_stock),
        limit=limit,
        offset=offset,
    )
    return ProductListResponse(
        products=[ProductResponse.from_entity(p) for p in products],
        limit=limit,
        offset=offset,
    )


@router.get("/low-stock", response_model=ProductListResponse)
async def list_low_stock(
    limit: int = Query(default=100, ge=1, le=1000),
    offset: int = Query(default=0, ge=0),
    store: IProductStore = Depends(get_products),
) -> ProductListResponse:
    """List products at or below their minimum stock level."""
    products = await store.list_low_stock(limit=limit, offset=offset)
    return ProductListResponse(
        products=[ProductResponse.from_entity(p) for p in products],
        limit=limit,
        offset=offset,
    )


@router.get(
    "/{product_id}",
    response_model=ProductResponse,
    responses={404: {"model": ErrorResponse}},
)
async def get_product(
    product_id: int,
    store: IProductStore = Depends(get_products),
) -> ProductResponse:
    """Get a product by ID."""
    product = await store.get_product(product_id)
    if product is None:
        raise ProductNotFoundError(product_id)
    return ProductResponse.from_entity(product)


@router.patch(
    "/{product_id}",
    response_model=ProductResponse,
    responses={
        400: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        409: {"model": ErrorResponse},
    },
)
async def update_product(
    product_id: int,
    request: UpdateProductRequest,
    use_case: UpdateProductUseCase = Depends(get_update_product_use_case),
) -> ProductResponse:
    """Update product details. Quantity changes are refused."""
    product = await use_case.execute(product_id, request)
    return ProductResponse.from_entity(product)


@router.post(
    "/{product_id}/evaluate",
    response_model=EvaluationResponse,
    responses={404: {"model": ErrorResponse}},
)
async def evaluate_product(
    product_id: int,
    store: IProductStore = Depends(get_products),
    alert_service: StockAlertService = Depends(get_alert_service),
) -> EvaluationResponse:
    """Check a product against its threshold and dispatch any alert."""
    if await store.get_product(product_id) is None:
        raise ProductNotFoundError(product_id)
    alert = await alert_service.evaluate_and_alert(product_id)
    return EvaluationResponse(
        product_id=product_id,
        alert=StockAlertResponse.from_alert(alert) if alert else None,
    )
