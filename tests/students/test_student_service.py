from __future__ import annotations

import pytest

from src.academy_system.academy_system.core.enums import StudentStatus
from src.academy_system.academy_system.core.exceptions import NotFoundError, ValidationError


def test_create_student_is_retrievable_with_input_fields(container):
    svc = container.student_service

    created = svc.create_student(
        {"name": "Alice", "currentLesson": "Sword", "status": "Probation", "feesPaid": True, "classId": "Class 3"}
    )

    assert created.name == "Alice"
    assert created.current_lesson == "Sword"
    assert created.status == StudentStatus.PROBATION
    assert created.fees_paid is True
    assert created.class_id == "Class 3"
    assert svc.get_student(created.student_id) == created


def test_create_student_defaults_fees_and_class(container):
    created = container.student_service.create_student({"name": "Bob", "currentLesson": "Ball", "status": "Active"})

    assert created.fees_paid is False
    assert created.class_id == "Class 1"


@pytest.mark.parametrize("payload", [{}, {"name": None}, {"name": "   "}])
def test_create_student_without_name_reports_name_field(container, payload):
    payload = {"currentLesson": "Ball", "status": "Active", **payload}

    with pytest.raises(ValidationError) as exc:
        container.student_service.create_student(payload)

    assert exc.value.field == "name"


@pytest.mark.parametrize(
    "field, value",
    [("status", "Retired"), ("classId", "Class 9"), ("feesPaid", "yes"), ("currentLesson", "")],
)
def test_create_student_rejects_bad_values(container, field, value):
    payload = {"name": "Cara", "currentLesson": "Ball", "status": "Active", field: value}

    with pytest.raises(ValidationError) as exc:
        container.student_service.create_student(payload)

    assert exc.value.field == field


def test_create_student_rejects_non_object_body(container):
    with pytest.raises(ValidationError) as exc:
        container.student_service.create_student(["Alice"])

    assert exc.value.field == "body"


def test_list_students_search_is_case_insensitive_substring(make_student, container):
    make_student("Alice Johnson")
    make_student("Bob Smith")
    make_student("Malik")

    names = [s.name for s in container.student_service.list_students("ALI")]

    assert names == ["Alice Johnson", "Malik"]
    assert len(container.student_service.list_students()) == 3
    assert container.student_service.list_students("  ") == []
    assert [s.name for s in container.student_service.list_students("Johnson ")] == []
    assert [s.name for s in container.student_service.list_students("e J")] == ["Alice Johnson"]


def test_update_student_changes_only_given_fields(make_student, container):
    student = make_student("Alice", fees_paid=False)

    updated = container.student_service.update_student(student.student_id, {"feesPaid": True})

    assert updated.fees_paid is True
    assert updated.name == "Alice"
    assert updated.class_id == student.class_id


def test_update_student_validates_partial_input(make_student, container):
    student = make_student("Alice")

    with pytest.raises(ValidationError) as exc:
        container.student_service.update_student(student.student_id, {"name": ""})

    assert exc.value.field == "name"


def test_update_unknown_student_raises_not_found(container):
    with pytest.raises(NotFoundError):
        container.student_service.update_student(404, {"name": "Ghost"})


def test_deleted_student_is_absent_not_an_error(make_student, container):
    student = make_student("Alice")

    container.student_service.delete_student(student.student_id)

    assert container.student_service.get_student(student.student_id) is None
    with pytest.raises(NotFoundError):
        container.student_service.delete_student(student.student_id)
