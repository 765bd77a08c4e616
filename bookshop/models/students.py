# bookshop/models/students.py

from sqlalchemy import CheckConstraint, Column, Index, Integer, String, DateTime
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship

from bookshop.database import Base


class Student(Base):
    __tablename__ = "students"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    class_level = Column(String, nullable=False)

    created_at = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )

    sales = relationship("Sale", back_populates="student")

    # Summaries and the optional dedup lookup both key on (name, class_level)
    __table_args__ = (
        Index("ix_students_name_class", "name", "class_level"),
        CheckConstraint(
            "class_level IN ('Basic 1', 'Basic 2', 'Basic 3', 'Basic 4', 'Basic 5', 'Basic 6')",
            name="ck_student_class_level_valid",
        ),
    )
