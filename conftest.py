from __future__ import annotations

from datetime import datetime

import pytest

from src.academy_system.academy_system.container import build_container
from src.academy_system.academy_system.main import create_app


@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2024, 6, 5, 17, 30, 0)


@pytest.fixture
def container():
    return build_container(backend="memory")


@pytest.fixture
def app():
    return create_app("config.testing")


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def make_student(container):
    def _make(name: str, class_id: str = "Class 1", **extra):
        payload = {"name": name, "currentLesson": "Long Stick", "status": "Active", "classId": class_id}
        payload.update(extra)
        return container.student_service.create_student(payload)

    return _make
