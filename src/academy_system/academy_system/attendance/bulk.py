"""Optimistic "mark all present".

Every student of the current class filter without a log on the target date
gets one, in a single batch:

1. snapshot the cached log list of the date query,
2. append synthetic logs (negative temporary ids) so readers see the
   students as present right away,
3. create the real logs concurrently and wait for all of them,
4. on any failure restore the snapshot for the whole batch and raise,
5. always invalidate the date query afterwards so the next read comes
   from the store.

Records created before a failure are not deleted; the re-read after
invalidation shows them.
"""
from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Optional, Sequence

from ..cache import keys
from ..cache.queries import AcademyQueries
from ..common.datetime_utils import now_local
from ..core.constants import DEFAULT_BULK_MAX_WORKERS
from ..core.enums import BulkMutationState
from ..core.exceptions import BulkAttendanceError
from ..daily_logs.model import DailyLog
from ..daily_logs.service import DailyLogService
from ..students.model import Student

logger = logging.getLogger(__name__)


class MarkAllPresentRun:
    """State of one mark-all-present call. Each call gets its own run."""

    def __init__(self, target_date: date):
        self.target_date = target_date
        self.state = BulkMutationState.IDLE
        self.transitions: list[BulkMutationState] = [self.state]

    def move_to(self, state: BulkMutationState) -> None:
        logger.debug("mark-all-present %s: %s -> %s", self.target_date, self.state.value, state.value)
        self.state = state
        self.transitions.append(state)


@dataclass(frozen=True)
class BulkAttendanceResult:
    target_date: date
    created: tuple[DailyLog, ...] = ()
    already_present: tuple[int, ...] = field(default_factory=tuple)
    transitions: tuple[BulkMutationState, ...] = (BulkMutationState.IDLE,)

    @property
    def is_noop(self) -> bool:
        return not self.created


class MarkAllPresentService:
    def __init__(
        self,
        queries: AcademyQueries,
        logs: DailyLogService,
        *,
        max_workers: int = DEFAULT_BULK_MAX_WORKERS,
    ):
        self._queries = queries
        self._logs = logs
        self._max_workers = max(1, int(max_workers))

    def _scope(self, class_id: Optional[str]) -> list[Student]:
        students = self._queries.students()
        if class_id:
            students = [s for s in students if s.class_id == class_id]
        return students

    def missing_students(self, target_date: date, *, class_id: Optional[str] = None) -> list[Student]:
        present = {log.student_id for log in self._queries.logs_by_date(target_date)}
        return [s for s in self._scope(class_id) if s.student_id not in present]

    def present_count(self, target_date: date, *, class_id: Optional[str] = None) -> tuple[int, int]:
        """``(present, total)`` for the filter; the UI disables the action when equal."""
        scope = self._scope(class_id)
        return len(scope) - len(self.missing_students(target_date, class_id=class_id)), len(scope)

    def mark_all_present(
        self,
        target_date: Optional[date] = None,
        *,
        class_id: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> BulkAttendanceResult:
        now = now or now_local()
        target_date = target_date or now.date()
        log_time = datetime.combine(target_date, now.time())

        scope_ids = [s.student_id for s in self._scope(class_id)]
        missing = self.missing_students(target_date, class_id=class_id)
        missing_ids = {s.student_id for s in missing}
        already_present = tuple(i for i in scope_ids if i not in missing_ids)
        if not missing:
            return BulkAttendanceResult(target_date=target_date, already_present=already_present)

        run = MarkAllPresentRun(target_date)
        cache = self._queries.cache
        key = keys.logs_by_date_key(target_date)
        snap = cache.snapshot(key)
        synthetic = [
            DailyLog(log_id=-(i + 1), student_id=s.student_id, date=log_time, attended=True)
            for i, s in enumerate(missing)
        ]
        cache.update(key, lambda logs: [*(logs or []), *synthetic])
        run.move_to(BulkMutationState.OPTIMISTIC)

        try:
            created, failed, first_error = self._create_all(missing, log_time)
            if failed:
                cache.restore(snap)
                run.move_to(BulkMutationState.ROLLED_BACK)
                logger.warning(
                    "mark-all-present for %s rolled back: %d of %d creates failed",
                    target_date,
                    len(failed),
                    len(missing),
                )
            else:
                run.move_to(BulkMutationState.SETTLED)
                logger.info("Marked %d students present on %s", len(created), target_date)
        finally:
            for student in missing:
                self._queries.invalidate_logs(student.student_id, target_date)
            run.move_to(BulkMutationState.IDLE)

        if failed:
            raise BulkAttendanceError(
                f"Could not mark {len(failed)} of {len(missing)} students present",
                failed_student_ids=failed,
                transitions=run.transitions,
            ) from first_error
        return BulkAttendanceResult(
            target_date=target_date,
            created=tuple(created),
            already_present=already_present,
            transitions=tuple(run.transitions),
        )

    def _create_all(self, students: Sequence[Student], log_time: datetime):
        order = {s.student_id: i for i, s in enumerate(students)}
        created: list[DailyLog] = []
        failed: list[int] = []
        first_error: Optional[BaseException] = None

        with ThreadPoolExecutor(max_workers=min(self._max_workers, len(students))) as pool:
            futures = {
                pool.submit(self._logs.record_attendance, s.student_id, log_date=log_time, attended=True): s.student_id
                for s in students
            }
            for future in as_completed(futures):
                student_id = futures[future]
                try:
                    created.append(future.result())
                except Exception as exc:
                    logger.error("Could not record attendance for student %s: %s", student_id, exc)
                    failed.append(student_id)
                    first_error = first_error or exc

        created.sort(key=lambda log: order[log.student_id])
        failed.sort(key=order.__getitem__)
        return created, failed, first_error
