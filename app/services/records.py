from typing import Optional

from app.models.catalog import MovementEntry, WodEntry
from app.repositories.catalog import CatalogRepository
from app.repositories.records import RecordRepository
from app.schemas.records import (
    PrRecordCreate,
    PrRecordUpdate,
    WodResultCreate,
    WodResultUpdate,
)
from app.services import stats
from app.services.clock import SystemClock
from app.services.errors import RecordNotFound


class RecordService:
    """Record CRUD plus the statistics derived from a user's history."""

    def __init__(
        self,
        records: RecordRepository,
        catalog: CatalogRepository,
        clock: Optional[SystemClock] = None,
    ) -> None:
        self._records = records
        self._catalog = catalog
        self._clock = clock or SystemClock()

    def _require_movement(self, movement_id: int, account_id: int) -> MovementEntry:
        movement = self._catalog.get_movement(movement_id, account_id)
        if movement is None:
            raise RecordNotFound("Movement not found")
        return movement

    def _require_wod(self, wod_id: int, account_id: int) -> WodEntry:
        wod = self._catalog.get_wod(wod_id, account_id)
        if wod is None:
            raise RecordNotFound("WOD not found")
        return wod

    def list_pr_records(self, account_id: int, movement_id: Optional[int] = None):
        return self._records.list_pr_records(account_id, movement_id)

    def create_pr_record(self, account_id: int, payload: PrRecordCreate):
        self._require_movement(payload.movement_id, account_id)
        est_1rm = stats.estimate_one_rep_max(payload.weight, payload.reps, payload.rep_scheme)
        return self._records.add_pr_record(account_id, payload, est_1rm, self._clock.now())

    def update_pr_record(
        self, account_id: int, record_id: int, payload: PrRecordUpdate
    ) -> Optional[float]:
        est_1rm = stats.estimate_one_rep_max(payload.weight, payload.reps, payload.rep_scheme)
        if not self._records.update_pr_record(record_id, account_id, payload, est_1rm):
            raise RecordNotFound()
        return est_1rm

    def delete_pr_record(self, account_id: int, record_id: int) -> None:
        if not self._records.delete_pr_record(record_id, account_id):
            raise RecordNotFound()

    def list_wod_results(self, account_id: int, wod_id: Optional[int] = None):
        return self._records.list_wod_results(account_id, wod_id)

    def create_wod_result(self, account_id: int, payload: WodResultCreate):
        wod = self._require_wod(payload.wod_id, account_id)
        return self._records.add_wod_result(
            account_id, payload, payload.format or wod.format, self._clock.now()
        )

    def update_wod_result(
        self, account_id: int, result_id: int, payload: WodResultUpdate
    ) -> None:
        if not self._records.update_wod_result(result_id, account_id, payload):
            raise RecordNotFound("Result not found")

    def delete_wod_result(self, account_id: int, result_id: int) -> None:
        if not self._records.delete_wod_result(result_id, account_id):
            raise RecordNotFound("Result not found")

    def movement_stats(self, account_id: int, movement_id: int) -> stats.MovementStats:
        self._require_movement(movement_id, account_id)
        return stats.movement_stats(self._records.list_pr_records(account_id, movement_id))

    def wod_stats(self, account_id: int, wod_id: int) -> stats.WodStats:
        wod = self._require_wod(wod_id, account_id)
        return stats.wod_stats(self._records.list_wod_results(account_id, wod_id), wod.format)

    def percent_table(
        self, account_id: int, movement_id: int, base_1rm: Optional[float] = None
    ) -> tuple[float, list[stats.PercentOfMax]]:
        records = []
        if base_1rm is None or base_1rm <= 0:
            records = self._records.list_pr_records(account_id, movement_id)
        one_rep_max = stats.resolve_one_rep_max(base_1rm, records)
        table = stats.percent_of_max_table(one_rep_max)
        return round(one_rep_max, 1), table
