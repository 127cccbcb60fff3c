"""Stock movement endpoints."""

from datetime import datetime, timezone

from fastapi import APIRouter, Depends, Query, status

from stockflow.api.dependencies import get_engine, get_products, get_record_movement_use_case
from stockflow.application.dto.requests import RecordMovementRequest
from stockflow.application.dto.responses import (
    ErrorResponse,
    MovementListResponse,
    MovementSummaryResponse,
    MovementTotalsResponse,
    StockMovementResponse,
)
from stockflow.application.use_cases import RecordMovementUseCase
from stockflow.core.exceptions import ProductNotFoundError
from stockflow.core.interfaces import IProductStore
from stockflow.core.services import MovementEngine

router = APIRouter(prefix="/api/movements", tags=["movements"])


def _naive_utc(value: datetime | None) -> datetime | None:
    if value is None or value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


async def _require_product(store: IProductStore, product_id: int) -> None:
    if await store.get_product(product_id) is None:
        raise ProductNotFoundError(product_id)


@router.post(
    "",
    response_model=StockMovementResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        409: {"model": ErrorResponse},
    },
)
async def record_movement(
    request: RecordMovementRequest,
    use_case: RecordMovementUseCase = Depends(get_record_movement_use_case),
) -> StockMovementResponse:
    """Record a stock movement and update the product quantity."""
    movement = await use_case.execute(request)
    return StockMovementResponse.from_entity(movement)


@router.get(
    "",
    response_model=MovementListResponse,
    responses={400: {"model": ErrorResponse}},
)
async def list_movements(
    start: datetime | None = None,
    end: datetime | None = None,
    limit: int = Query(default=100, ge=1, le=1000),
    offset: int = Query(default=0, ge=0),
    engine: MovementEngine = Depends(get_engine),
) -> MovementListResponse:
    """
    List movements, newest first.

    With ``start`` and/or ``end`` the inclusive date range is returned
    instead of a page; a missing bound is open.
    """
    start, end = _naive_utc(start), _naive_utc(end)
    if start is None and end is None:
        movements = await engine.list_movements(limit=limit, offset=offset)
    else:
        movements = await engine.list_movements_between(
            start or datetime.min,
            end or datetime.utcnow(),
        )
    return MovementListResponse(
        movements=[StockMovementResponse.from_entity(m) for m in movements],
        total=len(movements),
    )


@router.get(
    "/product/{product_id}",
    response_model=MovementListResponse,
    responses={404: {"model": ErrorResponse}},
)
async def list_product_movements(
    product_id: int,
    engine: MovementEngine = Depends(get_engine),
    store: IProductStore = Depends(get_products),
) -> MovementListResponse:
    """Movement history for a product, newest first."""
    await _require_product(store, product_id)
    movements = await engine.list_product_movements(product_id)
    return MovementListResponse(
        movements=[StockMovementResponse.from_entity(m) for m in movements],
        total=len(movements),
    )


@router.get(
    "/product/{product_id}/summary",
    response_model=MovementSummaryResponse,
    responses={404: {"model": ErrorResponse}},
)
async def movement_summary(
    product_id: int,
    engine: MovementEngine = Depends(get_engine),
    store: IProductStore = Depends(get_products),
) -> MovementSummaryResponse:
    """Number of movements per type for a product."""
    await _require_product(store, product_id)
    summary = await engine.summarize_movements(product_id)
    return MovementSummaryResponse.from_summary(product_id, summary)


@router.get(
    "/product/{product_id}/totals",
    response_model=MovementTotalsResponse,
    responses={404: {"model": ErrorResponse}},
)
async def movement_totals(
    product_id: int,
    engine: MovementEngine = Depends(get_engine),
    store: IProductStore = Depends(get_products),
) -> MovementTotalsResponse:
    """Inbound and outbound totals for a product."""
    await _require_product(store, product_id)
    totals = await engine.movement_totals(product_id)
    return MovementTotalsResponse.from_totals(product_id, totals)
