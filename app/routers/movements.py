from typing import Optional

from fastapi import APIRouter, Depends, Query, status

from app.dependencies import (
    get_catalog_repository,
    get_current_account_id,
    get_record_service,
    http_error,
)
from app.repositories.catalog import CatalogRepository
from app.schemas.catalog import MovementCreate, MovementResponse
from app.schemas.records import CreatedResponse
from app.schemas.stats import MovementStatsResponse, PercentRow, PercentTableResponse
from app.services.errors import ServiceError
from app.services.records import RecordService

router = APIRouter(tags=["movements"])


@router.get("/movements", response_model=list[MovementResponse])
def list_movements(
    account_id: int = Depends(get_current_account_id),
    catalog: CatalogRepository = Depends(get_catalog_repository),
) -> list[MovementResponse]:
    return [MovementResponse.model_validate(m) for m in catalog.list_movements(account_id)]


@router.post(
    "/movements", response_model=CreatedResponse, status_code=status.HTTP_201_CREATED
)
def create_movement(
    payload: MovementCreate,
    account_id: int = Depends(get_current_account_id),
    catalog: CatalogRepository = Depends(get_catalog_repository),
) -> CreatedResponse:
    entry = catalog.add_movement(account_id, payload)
    return CreatedResponse(id=entry.id, message="Movement created")


@router.get("/movements/{movement_id}/stats", response_model=MovementStatsResponse)
def movement_stats(
    movement_id: int,
    account_id: int = Depends(get_current_account_id),
    service: RecordService = Depends(get_record_service),
) -> MovementStatsResponse:
    try:
        result = service.movement_stats(account_id, movement_id)
    except ServiceError as exc:
        raise http_error(exc) from exc
    return MovementStatsResponse(
        movement_id=movement_id,
        best_1rm=result.best,
        first_1rm=result.first,
        last_1rm=result.last,
        delta_percent=result.delta_percent,
        total_records=result.total_records,
    )


@router.get("/percent-calculator/{movement_id}", response_model=PercentTableResponse)
def percent_calculator(
    movement_id: int,
    base_1rm: Optional[float] = Query(default=None),
    account_id: int = Depends(get_current_account_id),
    service: RecordService = Depends(get_record_service),
) -> PercentTableResponse:
    try:
        one_rep_max, table = service.percent_table(account_id, movement_id, base_1rm)
    except ServiceError as exc:
        raise http_error(exc) from exc
    return PercentTableResponse(
        movement_id=movement_id,
        base_1rm=one_rep_max,
        table=[PercentRow(percent=row.percent, weight=row.weight) for row in table],
    )
