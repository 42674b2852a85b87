"""Example: drive the service layer without Flask.

Uses the in-memory backend, so no database is needed.
"""

from src.academy_system.academy_system.container import build_container
from src.academy_system.academy_system.database.bootstrap import seed_demo_students


def main():
    container = build_container(backend="memory")
    seed_demo_students(container.student_service)

    result = container.mark_all_service.mark_all_present(class_id="Class 1")
    print(f"{result.target_date}: marked {len(result.created)} present, {len(result.already_present)} already were")

    history = container.history_service.month_history(result.target_date)
    for group in history.matrix.groups:
        for row in group.rows:
            print(group.class_id, row.student.name, f"{row.percentage}%")


if __name__ == "__main__":
    main()
