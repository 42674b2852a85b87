from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .achievements.memory_achievement_repository import InMemoryAchievementRepository
from .achievements.mysql_achievement_repository import MySQLAchievementRepository
from .achievements.repository import AchievementRepository
from .achievements.service import AchievementService
from .attendance.bulk import MarkAllPresentService
from .attendance.service import AttendanceHistoryService
from .cache.queries import AcademyQueries
from .cache.query_cache import QueryCache
from .core.constants import (
    DEFAULT_BULK_MAX_WORKERS,
    DEFAULT_QUERY_CACHE_MAXSIZE,
    DEFAULT_QUERY_CACHE_TTL_SECONDS,
)
from .core.enums import StorageBackend
from .daily_logs.memory_daily_log_repository import InMemoryDailyLogRepository
from .daily_logs.mysql_daily_log_repository import MySQLDailyLogRepository
from .daily_logs.repository import DailyLogRepository
from .daily_logs.service import DailyLogService
from .database.connection import DatabaseConnection, DBConfig
from .students.memory_student_repository import InMemoryStudentRepository
from .students.mysql_student_repository import MySQLStudentRepository
from .students.repository import StudentRepository
from .students.service import StudentService


@dataclass(frozen=True)
class Container:
    backend: StorageBackend
    conn: Optional[DatabaseConnection]

    students_repo: StudentRepository
    logs_repo: DailyLogRepository
    achievements_repo: AchievementRepository

    query_cache: QueryCache

    student_service: StudentService
    daily_log_service: DailyLogService
    achievement_service: AchievementService
    queries: AcademyQueries
    history_service: AttendanceHistoryService
    mark_all_service: MarkAllPresentService


def build_container(
    *,
    db_config: Optional[dict] = None,
    backend: str | StorageBackend = StorageBackend.MYSQL,
    bulk_max_workers: int = DEFAULT_BULK_MAX_WORKERS,
    cache_maxsize: int = DEFAULT_QUERY_CACHE_MAXSIZE,
    cache_ttl: float = DEFAULT_QUERY_CACHE_TTL_SECONDS,
) -> Container:
    backend = StorageBackend(backend)
    conn: Optional[DatabaseConnection] = None

    if backend == StorageBackend.MYSQL:
        if not db_config:
            raise ValueError("db_config is required for the mysql backend")
        conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))
        students_repo: StudentRepository = MySQLStudentRepository(conn)
        logs_repo: DailyLogRepository = MySQLDailyLogRepository(conn)
        achievements_repo: AchievementRepository = MySQLAchievementRepository(conn)
    else:
        students_repo = InMemoryStudentRepository()
        logs_repo = InMemoryDailyLogRepository()
        achievements_repo = InMemoryAchievementRepository()

    query_cache = QueryCache(maxsize=cache_maxsize, ttl=cache_ttl)

    student_service = StudentService(students_repo)
    daily_log_service = DailyLogService(logs_repo, students_repo)
    achievement_service = AchievementService(achievements_repo, students_repo)
    queries = AcademyQueries(query_cache, student_service, daily_log_service, achievement_service)
    history_service = AttendanceHistoryService(queries)
    mark_all_service = MarkAllPresentService(queries, daily_log_service, max_workers=bulk_max_workers)

    return Container(
        backend=backend,
        conn=conn,
        students_repo=students_repo,
        logs_repo=logs_repo,
        achievements_repo=achievements_repo,
        query_cache=query_cache,
        student_service=student_service,
        daily_log_service=daily_log_service,
        achievement_service=achievement_service,
        queries=queries,
        history_service=history_service,
        mark_all_service=mark_all_service,
    )
