from fastapi import APIRouter, Depends, status

from app.dependencies import (
    get_catalog_repository,
    get_current_account_id,
    get_record_service,
    http_error,
)
from app.repositories.catalog import CatalogRepository
from app.schemas.catalog import WodCreate, WodResponse
from app.schemas.records import CreatedResponse
from app.schemas.stats import WodStatsResponse
from app.services.errors import ServiceError
from app.services.records import RecordService
from app.services.stats import AMRAP, FOR_TIME

router = APIRouter(prefix="/wods", tags=["wods"])


@router.get("", response_model=list[WodResponse])
def list_wods(
    account_id: int = Depends(get_current_account_id),
    catalog: CatalogRepository = Depends(get_catalog_repository),
) -> list[WodResponse]:
    return [WodResponse.model_validate(w) for w in catalog.list_wods(account_id)]


@router.post("", response_model=CreatedResponse, status_code=status.HTTP_201_CREATED)
def create_wod(
    payload: WodCreate,
    account_id: int = Depends(get_current_account_id),
    catalog: CatalogRepository = Depends(get_catalog_repository),
) -> CreatedResponse:
    entry = catalog.add_wod(account_id, payload)
    return CreatedResponse(id=entry.id, message="WOD created")


@router.get(
    "/{wod_id}/stats", response_model=WodStatsResponse, response_model_exclude_none=True
)
def wod_stats(
    wod_id: int,
    account_id: int = Depends(get_current_account_id),
    service: RecordService = Depends(get_record_service),
) -> WodStatsResponse:
    try:
        result = service.wod_stats(account_id, wod_id)
    except ServiceError as exc:
        raise http_error(exc) from exc
    response = WodStatsResponse(
        wod_id=wod_id, format=result.format, total_attempts=result.total_attempts
    )
    if result.format == FOR_TIME:
        response.best_time = result.best_time
        response.first_time = result.first_time
        response.last_time = result.last_time
    elif result.format == AMRAP and result.best_score is not None:
        response.best_score = result.best_score.composite
        response.first_score = result.first_score.composite
        response.last_score = result.last_score.composite
        response.best_rounds = result.best_score.rounds
        response.best_extra_reps = result.best_score.extra_reps
    return response
