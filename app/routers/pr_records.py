from typing import Optional

from fastapi import APIRouter, Depends, Query, status

from app.dependencies import get_current_account_id, get_record_service, http_error
from app.schemas.records import (
    PrRecordCreate,
    PrRecordCreated,
    PrRecordResponse,
    PrRecordUpdate,
)
from app.services.errors import ServiceError
from app.services.records import RecordService

router = APIRouter(prefix="/pr-records", tags=["pr-records"])


@router.get("", response_model=list[PrRecordResponse])
def list_pr_records(
    movement_id: Optional[int] = Query(default=None),
    account_id: int = Depends(get_current_account_id),
    service: RecordService = Depends(get_record_service),
) -> list[PrRecordResponse]:
    return [
        PrRecordResponse.model_validate(record)
        for record in service.list_pr_records(account_id, movement_id)
    ]


@router.post("", response_model=PrRecordCreated, status_code=status.HTTP_201_CREATED)
def create_pr_record(
    payload: PrRecordCreate,
    account_id: int = Depends(get_current_account_id),
    service: RecordService = Depends(get_record_service),
) -> PrRecordCreated:
    try:
        entry = service.create_pr_record(account_id, payload)
    except ServiceError as exc:
        raise http_error(exc) from exc
    return PrRecordCreated(id=entry.id, message="PR record created", est_1rm=entry.est_1rm)


@router.put("/{record_id}", response_model=PrRecordCreated)
def update_pr_record(
    record_id: int,
    payload: PrRecordUpdate,
    account_id: int = Depends(get_current_account_id),
    service: RecordService = Depends(get_record_service),
) -> PrRecordCreated:
    try:
        est_1rm = service.update_pr_record(account_id, record_id, payload)
    except ServiceError as exc:
        raise http_error(exc) from exc
    return PrRecordCreated(id=record_id, message="PR record updated", est_1rm=est_1rm)


@router.delete("/{record_id}")
def delete_pr_record(
    record_id: int,
    account_id: int = Depends(get_current_account_id),
    service: RecordService = Depends(get_record_service),
) -> dict:
    try:
        service.delete_pr_record(account_id, record_id)
    except ServiceError as exc:
        raise http_error(exc) from exc
    return {"message": "PR record deleted"}
