"""
Region and Group models.

Regions are the top-level organizational units. Each group belongs to
exactly one region; that is the only edge of the hierarchy.
"""
from sqlalchemy import String, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.core.database.base import Base, TimestampMixin, generate_id


class Region(Base, TimestampMixin):
    """
    Region model (e.g. "North District", "Downtown Area").
    """
    __tablename__ = "regions"

    id: Mapped[str] = mapped_column(String(26), primary_key=True, default=generate_id)
    name: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    description: Mapped[str | None] = mapped_column(String(1000), nullable=True)

    groups: Mapped[list["Group"]] = relationship(
        "Group",
        back_populates="region",
        cascade="all, delete-orphan",
        lazy="selectin",
        order_by="Group.name"
    )

    def __repr__(self) -> str:
        return f"<Region(id={self.id}, name={self.name!r})>"


class Group(Base, TimestampMixin):
    """
    Group model: a team inside a region where the evangelism work is organized.
    """
    __tablename__ = "groups"

    id: Mapped[str] = mapped_column(String(26), primary_key=True, default=generate_id)
    name: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    description: Mapped[str | None] = mapped_column(String(1000), nullable=True)
    region_id: Mapped[str] = mapped_column(
        String(26),
        ForeignKey("regions.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )

    region: Mapped["Region"] = relationship("Region", back_populates="groups")

    def __repr__(self) -> str:
        return f"<Group(id={self.id}, name={self.name!r}, region_id={self.region_id})>"
