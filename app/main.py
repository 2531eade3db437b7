import asyncio
import contextlib
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.config import settings
from app.database import init_db
from app.dependencies import authenticator
from app.routers import auth, health, movements, pr_records, search, users, wod_results, wods
from app.services.sweeper import run_sweeper

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
)
LOGGER = logging.getLogger(__name__)

app = FastAPI(title="CrossFit Tracker API")

app.add_middleware(
    CORSMiddleware,
    allow_origins=list(settings.cors_origins),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router, prefix="/api")
app.include_router(auth.router, prefix="/api")
app.include_router(users.router, prefix="/api")
app.include_router(movements.router, prefix="/api")
app.include_router(pr_records.router, prefix="/api")
app.include_router(wods.router, prefix="/api")
app.include_router(wod_results.router, prefix="/api")
app.include_router(search.router, prefix="/api")


@app.on_event("startup")
async def startup() -> None:
    init_db()
    app.state.sweeper = asyncio.create_task(
        run_sweeper(authenticator, settings.otp_sweep_interval_seconds)
    )
    LOGGER.info(
        "Started (env=%s, OTP sweep every %ds)",
        settings.app_env,
        settings.otp_sweep_interval_seconds,
    )


@app.on_event("shutdown")
async def shutdown() -> None:
    sweeper = getattr(app.state, "sweeper", None)
    if sweeper is None:
        return
    sweeper.cancel()
    with contextlib.suppress(asyncio.CancelledError):
        await sweeper


@app.get("/")
def root():
    return {"status": "Backend running"}
