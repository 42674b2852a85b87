from __future__ import annotations

from enum import Enum


class StudentStatus(str, Enum):
    """Enrollment status shown on the student card."""

    ACTIVE = "Active"
    PROBATION = "Probation"
    GRADUATED = "Graduated"
    PAUSED = "Paused"


class AchievementLevel(str, Enum):
    """Competition tier an achievement was won at."""

    DISTRICT = "District"
    STATE = "State"
    NATIONAL = "National"


class Medal(str, Enum):
    GOLD = "Gold"
    SILVER = "Silver"
    BRONZE = "Bronze"


class StorageBackend(str, Enum):
    MYSQL = "mysql"
    MEMORY = "memory"


class BulkMutationState(str, Enum):
    """Lifecycle of the optimistic "mark all present" mutation."""

    IDLE = "IDLE"
    OPTIMISTIC = "OPTIMISTIC"
    SETTLED = "SETTLED"
    ROLLED_BACK = "ROLLED_BACK"
