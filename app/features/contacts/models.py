"""
Evangelism contact model: people contacted during street evangelism.
"""
from datetime import datetime
from sqlalchemy import String, Boolean, ForeignKey, DateTime, Text
from sqlalchemy.orm import Mapped, mapped_column

from app.core.database.base import Base, TimestampMixin, generate_id
from app.features.authorization.records import RecordKind


class EvangelismContact(Base, TimestampMixin):
    """
    A contact made by a user. The creator owns the record for its whole life.

    Attributes:
        contact_name: Person's name
        contact_info: Phone, email or address
        location: Where they were contacted
        notes: Conversation notes, prayer requests
        follow_up_date: When to follow up
        contacted: Whether the follow-up has been completed
        created_by_id: Owning user
    """
    __tablename__ = "evangelism_contacts"

    id: Mapped[str] = mapped_column(String(26), primary_key=True, default=generate_id)
    contact_name: Mapped[str] = mapped_column(String(255), nullable=False)
    contact_info: Mapped[str | None] = mapped_column(String(255), nullable=True)
    location: Mapped[str | None] = mapped_column(String(255), nullable=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    follow_up_date: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    contacted: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)

    created_by_id: Mapped[str] = mapped_column(
        String(26),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )

    def __repr__(self) -> str:
        return f"<EvangelismContact(id={self.id}, name={self.contact_name!r}, created_by_id={self.created_by_id})>"


CONTACT_RECORDS = RecordKind(
    label="Contact",
    model=EvangelismContact,
    owner_field="created_by_id",
    order_field="created_at",
)
