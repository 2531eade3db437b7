from fastapi import Depends, Header, HTTPException, status

from app.config import settings
from app.repositories.accounts import AccountRepository
from app.repositories.catalog import CatalogRepository
from app.repositories.otp import OtpRepository
from app.repositories.records import RecordRepository
from app.services.auth import Authenticator
from app.services.clock import RandomCodeGenerator
from app.services.errors import RateLimited, ServiceError
from app.services.records import RecordService

account_repository = AccountRepository()
catalog_repository = CatalogRepository()
record_repository = RecordRepository()

authenticator = Authenticator(
    OtpRepository(),
    account_repository,
    code_generator=RandomCodeGenerator(settings.otp_length),
    code_ttl_seconds=settings.otp_ttl_seconds,
    rate_limit_count=settings.otp_rate_limit_count,
    rate_limit_window_seconds=settings.otp_rate_limit_window_seconds,
)
record_service = RecordService(record_repository, catalog_repository)


def get_authenticator() -> Authenticator:
    return authenticator


def get_record_service() -> RecordService:
    return record_service


def get_account_repository() -> AccountRepository:
    return account_repository


def get_catalog_repository() -> CatalogRepository:
    return catalog_repository


def http_error(exc: ServiceError) -> HTTPException:
    headers = None
    if isinstance(exc, RateLimited) and exc.retry_after_seconds:
        headers = {"Retry-After": str(exc.retry_after_seconds)}
    elif exc.status_code == status.HTTP_401_UNAUTHORIZED:
        headers = {"WWW-Authenticate": "Bearer"}
    return HTTPException(status_code=exc.status_code, detail=str(exc), headers=headers)


def get_current_account_id(
    authorization: str | None = Header(default=None),
    auth: Authenticator = Depends(get_authenticator),
) -> int:
    try:
        return auth.validate_authorization_header(authorization)
    except ServiceError as exc:
        raise http_error(exc) from exc
