from __future__ import annotations

import threading
from concurrent.futures import ThreadPoolExecutor
from datetime import date, datetime, timedelta

import pytest

from src.academy_system.academy_system.achievements.memory_achievement_repository import InMemoryAchievementRepository
from src.academy_system.academy_system.achievements.service import AchievementService
from src.academy_system.academy_system.attendance.bulk import MarkAllPresentService
from src.academy_system.academy_system.cache import keys
from src.academy_system.academy_system.cache.queries import AcademyQueries
from src.academy_system.academy_system.cache.query_cache import QueryCache
from src.academy_system.academy_system.core.enums import BulkMutationState
from src.academy_system.academy_system.core.exceptions import BulkAttendanceError, StoreError
from src.academy_system.academy_system.daily_logs.memory_daily_log_repository import InMemoryDailyLogRepository
from src.academy_system.academy_system.daily_logs.service import DailyLogService
from src.academy_system.academy_system.students.memory_student_repository import InMemoryStudentRepository
from src.academy_system.academy_system.students.service import StudentService

DAY = date(2024, 6, 5)


class FailingLogRepository(InMemoryDailyLogRepository):
    def __init__(self, fail_for):
        super().__init__()
        self.fail_for = set(fail_for)

    def create(self, *, student_id, **kwargs):
        if student_id in self.fail_for:
            raise StoreError("Database operation failed")
        return super().create(student_id=student_id, **kwargs)


def _wire(logs_repo):
    students_repo = InMemoryStudentRepository()
    student_service = StudentService(students_repo)
    log_service = DailyLogService(logs_repo, students_repo)
    achievement_service = AchievementService(InMemoryAchievementRepository(), students_repo)
    queries = AcademyQueries(QueryCache(), student_service, log_service, achievement_service)
    return student_service, log_service, queries, MarkAllPresentService(queries, log_service, max_workers=4)


def _add(student_service, name, class_id="Class 1"):
    return student_service.create_student({"name": name, "currentLesson": "Sword", "status": "Active", "classId": class_id})


def test_marks_only_students_missing_a_log(make_student, container, fixed_now):
    alice = make_student("Alice")
    bob = make_student("Bob")
    cara = make_student("Cara")
    container.daily_log_service.record_attendance(bob.student_id, log_date=datetime(2024, 6, 5, 9, 0))

    result = container.mark_all_service.mark_all_present(DAY, now=fixed_now)

    assert [log.student_id for log in result.created] == [alice.student_id, cara.student_id]
    assert all(log.attended and log.log_id > 0 for log in result.created)
    assert result.already_present == (bob.student_id,)
    assert len(container.daily_log_service.list_by_date(DAY)) == 3
    assert not container.query_cache.contains(keys.logs_by_date_key(DAY))
    assert result.transitions == (
        BulkMutationState.IDLE,
        BulkMutationState.OPTIMISTIC,
        BulkMutationState.SETTLED,
        BulkMutationState.IDLE,
    )


def test_respects_class_filter(make_student, container, fixed_now):
    alice = make_student("Alice", "Class 1")
    make_student("Bob", "Class 2")

    result = container.mark_all_service.mark_all_present(DAY, class_id="Class 1", now=fixed_now)

    assert [log.student_id for log in result.created] == [alice.student_id]
    assert container.mark_all_service.present_count(DAY, class_id="Class 2") == (0, 1)
    assert container.mark_all_service.present_count(DAY, class_id="Class 1") == (1, 1)


def test_noop_when_everyone_is_present(make_student, container, fixed_now):
    alice = make_student("Alice")
    container.daily_log_service.record_attendance(alice.student_id, log_date=fixed_now)

    result = container.mark_all_service.mark_all_present(DAY, now=fixed_now)

    assert result.is_noop
    assert result.already_present == (alice.student_id,)
    assert result.transitions == (BulkMutationState.IDLE,)
    assert len(container.daily_log_service.list_by_date(DAY)) == 1


def test_optimistic_logs_are_visible_before_settle(fixed_now):
    student_service, log_service, queries, bulk = _wire(InMemoryDailyLogRepository())
    a = _add(student_service, "Alice")
    b = _add(student_service, "Bob")
    queries.logs_by_date(DAY)
    key = keys.logs_by_date_key(DAY)
    seen = []
    queries.cache.subscribe(lambda k, value: seen.append(value) if k == key else None)

    bulk.mark_all_present(DAY, now=fixed_now)

    optimistic = seen[0]
    assert [log.student_id for log in optimistic] == [a.student_id, b.student_id]
    assert all(log.log_id < 0 and log.attended for log in optimistic)
    assert seen[-1] is None


def test_failure_rolls_back_whole_batch_then_refetch_matches_store(fixed_now):
    logs_repo = FailingLogRepository(fail_for=set())
    student_service, log_service, queries, bulk = _wire(logs_repo)
    alice = _add(student_service, "Alice")
    bob = _add(student_service, "Bob")
    cara = _add(student_service, "Cara")
    log_service.record_attendance(cara.student_id, log_date=datetime(2024, 6, 5, 8, 0))
    logs_repo.fail_for = {bob.student_id}

    key = keys.logs_by_date_key(DAY)
    before = queries.logs_by_date(DAY)
    seen = []
    queries.cache.subscribe(lambda k, value: seen.append(value) if k == key else None)

    with pytest.raises(BulkAttendanceError) as exc:
        bulk.mark_all_present(DAY, now=fixed_now)

    assert exc.value.failed_student_ids == [bob.student_id]
    optimistic, restored, invalidated = seen
    assert len(optimistic) == len(before) + 2
    assert restored == before
    assert invalidated is None
    assert exc.value.transitions == (
        BulkMutationState.IDLE,
        BulkMutationState.OPTIMISTIC,
        BulkMutationState.ROLLED_BACK,
        BulkMutationState.IDLE,
    )

    # Alice's create went through; the forced re-read reflects the store, not the rollback.
    refetched = queries.logs_by_date(DAY)
    assert refetched == list(log_service.list_by_date(DAY))
    assert sorted(log.student_id for log in refetched) == [alice.student_id, cara.student_id]


class BarrierLogRepository(FailingLogRepository):
    """Holds every create until ``parties`` creates are in flight."""

    def __init__(self, fail_for, parties):
        super().__init__(fail_for)
        self.barrier = threading.Barrier(parties, timeout=5)

    def create(self, *, student_id, **kwargs):
        self.barrier.wait()
        return super().create(student_id=student_id, **kwargs)


def test_concurrent_calls_keep_their_own_state(fixed_now):
    logs_repo = BarrierLogRepository(fail_for=set(), parties=2)
    student_service, log_service, queries, bulk = _wire(logs_repo)
    alice = _add(student_service, "Alice", "Class 1")
    bob = _add(student_service, "Bob", "Class 2")
    logs_repo.fail_for = {bob.student_id}

    def run(day, class_id):
        try:
            return bulk.mark_all_present(day, class_id=class_id, now=fixed_now)
        except BulkAttendanceError as exc:
            return exc

    with ThreadPoolExecutor(max_workers=2) as pool:
        ok = pool.submit(run, DAY, "Class 1")
        failed = pool.submit(run, DAY + timedelta(days=1), "Class 2")
        ok, failed = ok.result(), failed.result()

    assert [log.student_id for log in ok.created] == [alice.student_id]
    assert BulkMutationState.ROLLED_BACK not in ok.transitions
    assert isinstance(failed, BulkAttendanceError)
    assert failed.failed_student_ids == [bob.student_id]
    assert BulkMutationState.SETTLED not in failed.transitions
