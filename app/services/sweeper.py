import asyncio
import logging

from app.services.auth import Authenticator

LOGGER = logging.getLogger(__name__)


async def sweep_once(authenticator: Authenticator) -> int | None:
    try:
        removed = await asyncio.to_thread(authenticator.sweep)
    except Exception:
        # The sweep only reclaims space; a failed run must not stop the schedule.
        LOGGER.exception("Expired OTP sweep failed, will retry next interval")
        return None
    if removed:
        LOGGER.info("Swept %d expired OTP challenge(s)", removed)
    return removed


async def run_sweeper(authenticator: Authenticator, interval_seconds: int) -> None:
    while True:
        await asyncio.sleep(interval_seconds)
        await sweep_once(authenticator)
