"""
Student record model: people being discipled or taught in ongoing lessons.
"""
from datetime import datetime
from sqlalchemy import String, Boolean, ForeignKey, DateTime, Text
from sqlalchemy.orm import Mapped, mapped_column

from app.core.database.base import Base, TimestampMixin, generate_id
from app.features.authorization.records import RecordKind


class StudentRecord(Base, TimestampMixin):
    """
    A student tracked by a user (the tracker owns the record).
    """
    __tablename__ = "student_records"

    id: Mapped[str] = mapped_column(String(26), primary_key=True, default=generate_id)
    student_name: Mapped[str] = mapped_column(String(255), nullable=False)
    last_lesson: Mapped[str | None] = mapped_column(String(255), nullable=True)
    last_lesson_date: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    next_lesson_date: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)

    tracker_id: Mapped[str] = mapped_column(
        String(26),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )

    def __repr__(self) -> str:
        return f"<StudentRecord(id={self.id}, name={self.student_name!r}, tracker_id={self.tracker_id})>"


STUDENT_RECORDS = RecordKind(
    label="Student record",
    model=StudentRecord,
    owner_field="tracker_id",
    order_field="updated_at",
)
