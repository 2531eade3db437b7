from typing import Optional

from fastapi import APIRouter, Depends, Query, status

from app.dependencies import get_current_account_id, get_record_service, http_error
from app.schemas.records import (
    CreatedResponse,
    WodResultCreate,
    WodResultResponse,
    WodResultUpdate,
)
from app.services.errors import ServiceError
from app.services.records import RecordService

router = APIRouter(prefix="/wod-results", tags=["wod-results"])


@router.get("", response_model=list[WodResultResponse])
def list_wod_results(
    wod_id: Optional[int] = Query(default=None),
    account_id: int = Depends(get_current_account_id),
    service: RecordService = Depends(get_record_service),
) -> list[WodResultResponse]:
    return [
        WodResultResponse.model_validate(result)
        for result in service.list_wod_results(account_id, wod_id)
    ]


@router.post("", response_model=CreatedResponse, status_code=status.HTTP_201_CREATED)
def create_wod_result(
    payload: WodResultCreate,
    account_id: int = Depends(get_current_account_id),
    service: RecordService = Depends(get_record_service),
) -> CreatedResponse:
    try:
        entry = service.create_wod_result(account_id, payload)
    except ServiceError as exc:
        raise http_error(exc) from exc
    return CreatedResponse(id=entry.id, message="WOD result saved")


@router.put("/{result_id}")
def update_wod_result(
    result_id: int,
    payload: WodResultUpdate,
    account_id: int = Depends(get_current_account_id),
    service: RecordService = Depends(get_record_service),
) -> dict:
    try:
        service.update_wod_result(account_id, result_id, payload)
    except ServiceError as exc:
        raise http_error(exc) from exc
    return {"message": "WOD result updated"}


@router.delete("/{result_id}")
def delete_wod_result(
    result_id: int,
    account_id: int = Depends(get_current_account_id),
    service: RecordService = Depends(get_record_service),
) -> dict:
    try:
        service.delete_wod_result(account_id, result_id)
    except ServiceError as exc:
        raise http_error(exc) from exc
    return {"message": "WOD result deleted"}
