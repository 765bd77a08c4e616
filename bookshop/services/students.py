# bookshop/services/students.py

import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from bookshop.core.constants import CLASS_LEVELS
from bookshop.core.errors import NotFound, StorageError, ValidationError
from bookshop.models.students import Student

logger = logging.getLogger("bookshop.students")


def validate_student_fields(name: str | None, class_level: str | None) -> tuple[str, str]:
    name = (name or "").strip()

    if not name:
        raise ValidationError("Student name is required")

    if not class_level:
        raise ValidationError("Student class is required")

    if class_level not in CLASS_LEVELS:
        raise ValidationError(
            f"Invalid class level '{class_level}'. Expected one of: {', '.join(CLASS_LEVELS)}"
        )

    return name, class_level


def get_student(db: Session, student_id: int) -> Student:
    student = db.query(Student).filter(Student.id == student_id).first()

    if student is None:
        raise NotFound(f"Student with ID {student_id} not found")

    return student


def find_student(db: Session, name: str, class_level: str) -> Student | None:
    return (
        db.query(Student)
        .filter(Student.name == name, Student.class_level == class_level)
        .order_by(Student.id.asc())
        .first()
    )


def list_students(db: Session) -> list[Student]:
    return (
        db.query(Student)
        .order_by(Student.created_at.desc(), Student.id.desc())
        .all()
    )


def create_student(db: Session, name: str, class_level: str) -> Student:
    name, class_level = validate_student_fields(name, class_level)

    student = Student(name=name, class_level=class_level)
    db.add(student)

    try:
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Failed to create student %s", name)
        raise StorageError("Unable to create student")

    db.refresh(student)
    return student


def update_student(
    db: Session,
    student_id: int,
    name: str | None = None,
    class_level: str | None = None,
) -> Student:
    student = get_student(db, student_id)

    new_name, new_class = validate_student_fields(
        name if name is not None else student.name,
        class_level if class_level is not None else student.class_level,
    )

    student.name = new_name
    student.class_level = new_class

    try:
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Failed to update student %s", student_id)
        raise StorageError("Unable to update student")

    db.refresh(student)
    return student
