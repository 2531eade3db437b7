from fastapi import APIRouter, Depends, HTTPException, status

from app.config import settings
from app.dependencies import get_authenticator, http_error
from app.schemas.accounts import AccountSummary
from app.schemas.otp import OtpRequest, OtpResponse, OtpVerifyRequest, OtpVerifyResponse
from app.services.auth import Authenticator
from app.services.errors import ServiceError
from app.services.tokens import TokenError

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/request-otp", response_model=OtpResponse, response_model_exclude_none=True)
def request_otp(
    payload: OtpRequest, auth: Authenticator = Depends(get_authenticator)
) -> OtpResponse:
    try:
        issued = auth.request_challenge(payload.email, payload.phone)
    except ServiceError as exc:
        raise http_error(exc) from exc
    return OtpResponse(
        accepted=True,
        message="OTP sent",
        expires_in_seconds=auth.code_ttl_seconds,
        dev_code=issued.code if settings.echo_otp_codes else None,
    )


@router.post("/verify-otp", response_model=OtpVerifyResponse)
def verify_otp(
    payload: OtpVerifyRequest, auth: Authenticator = Depends(get_authenticator)
) -> OtpVerifyResponse:
    try:
        login = auth.verify_challenge(payload.email, payload.phone, payload.code)
    except ServiceError as exc:
        raise http_error(exc) from exc
    try:
        token = auth.issue_token(login.account.id)
    except TokenError as exc:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=str(exc),
        ) from exc
    account = login.account
    return OtpVerifyResponse(
        token=token,
        token_type="bearer",
        expires_in_seconds=settings.access_token_expire_days * 86400,
        user=AccountSummary(
            id=account.id,
            email=account.email,
            phone=account.phone,
            name=account.name,
            unit_system=account.unit_system,
            timezone=account.timezone,
            needs_onboarding=login.needs_onboarding,
        ),
    )
