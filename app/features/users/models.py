"""
User and role profile models.

Every user holds one of four ordered roles. Leaders and members carry a
profile row that places them in the hierarchy: region leaders reference a
region, group leaders and group members reference a group.
"""
import enum
from sqlalchemy import String, Boolean, ForeignKey, Enum as SQLEnum
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.core.database.base import Base, TimestampMixin, generate_id


class Role(str, enum.Enum):
    """Organizational tiers, highest first."""
    DIRECTOR = "DIRECTOR"
    REGION_LEADER = "REGION_LEADER"
    GROUP_LEADER = "GROUP_LEADER"
    GROUP_MEMBER = "GROUP_MEMBER"


class User(Base, TimestampMixin):
    """
    User model representing authenticated members of the organization.
    """
    __tablename__ = "users"

    id: Mapped[str] = mapped_column(String(26), primary_key=True, default=generate_id)

    # User information
    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False, index=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    role: Mapped[Role] = mapped_column(SQLEnum(Role), default=Role.GROUP_MEMBER, nullable=False, index=True)

    # Status flags
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)

    # Profile relationships (at most one is populated, matching the role)
    director_profile: Mapped["DirectorProfile"] = relationship(
        "DirectorProfile",
        back_populates="user",
        uselist=False,
        lazy="selectin"
    )
    region_leader_profile: Mapped["RegionLeaderProfile"] = relationship(
        "RegionLeaderProfile",
        back_populates="user",
        uselist=False,
        lazy="selectin"
    )
    group_leader_profile: Mapped["GroupLeaderProfile"] = relationship(
        "GroupLeaderProfile",
        back_populates="user",
        uselist=False,
        lazy="selectin"
    )
    group_member_profile: Mapped["GroupMemberProfile"] = relationship(
        "GroupMemberProfile",
        back_populates="user",
        uselist=False,
        lazy="selectin"
    )

    @property
    def region_id(self) -> str | None:
        if self.region_leader_profile is not None:
            return self.region_leader_profile.region_id
        return None

    @property
    def group_id(self) -> str | None:
        if self.group_leader_profile is not None:
            return self.group_leader_profile.group_id
        if self.group_member_profile is not None:
            return self.group_member_profile.group_id
        return None

    def __repr__(self) -> str:
        return f"<User(id={self.id}, email={self.email!r}, role={self.role})>"


class DirectorProfile(Base, TimestampMixin):
    """Profile for directors; carries no scope attributes."""
    __tablename__ = "director_profiles"

    id: Mapped[str] = mapped_column(String(26), primary_key=True, default=generate_id)
    user_id: Mapped[str] = mapped_column(
        String(26), ForeignKey("users.id", ondelete="CASCADE"), unique=True, nullable=False, index=True
    )

    user: Mapped["User"] = relationship("User", back_populates="director_profile")


class RegionLeaderProfile(Base, TimestampMixin):
    """Places a region leader over exactly one region."""
    __tablename__ = "region_leader_profiles"

    id: Mapped[str] = mapped_column(String(26), primary_key=True, default=generate_id)
    user_id: Mapped[str] = mapped_column(
        String(26), ForeignKey("users.id", ondelete="CASCADE"), unique=True, nullable=False, index=True
    )
    region_id: Mapped[str] = mapped_column(
        String(26), ForeignKey("regions.id", ondelete="CASCADE"), nullable=False, index=True
    )

    user: Mapped["User"] = relationship("User", back_populates="region_leader_profile")

    def __repr__(self) -> str:
        return f"<RegionLeaderProfile(user_id={self.user_id}, region_id={self.region_id})>"


class GroupLeaderProfile(Base, TimestampMixin):
    """Places a group leader over exactly one group."""
    __tablename__ = "group_leader_profiles"

    id: Mapped[str] = mapped_column(String(26), primary_key=True, default=generate_id)
    user_id: Mapped[str] = mapped_column(
        String(26), ForeignKey("users.id", ondelete="CASCADE"), unique=True, nullable=False, index=True
    )
    group_id: Mapped[str] = mapped_column(
        String(26), ForeignKey("groups.id", ondelete="CASCADE"), nullable=False, index=True
    )

    user: Mapped["User"] = relationship("User", back_populates="group_leader_profile")

    def __repr__(self) -> str:
        return f"<GroupLeaderProfile(user_id={self.user_id}, group_id={self.group_id})>"


class GroupMemberProfile(Base, TimestampMixin):
    """Places a group member in exactly one group."""
    __tablename__ = "group_member_profiles"

    id: Mapped[str] = mapped_column(String(26), primary_key=True, default=generate_id)
    user_id: Mapped[str] = mapped_column(
        String(26), ForeignKey("users.id", ondelete="CASCADE"), unique=True, nullable=False, index=True
    )
    group_id: Mapped[str] = mapped_column(
        String(26), ForeignKey("groups.id", ondelete="CASCADE"), nullable=False, index=True
    )

    user: Mapped["User"] = relationship("User", back_populates="group_member_profile")

    def __repr__(self) -> str:
        return f"<GroupMemberProfile(user_id={self.user_id}, group_id={self.group_id})>"


# Profile model expected for each role
PROFILE_MODELS: dict[Role, type[Base]] = {
    Role.DIRECTOR: DirectorProfile,
    Role.REGION_LEADER: RegionLeaderProfile,
    Role.GROUP_LEADER: GroupLeaderProfile,
    Role.GROUP_MEMBER: GroupMemberProfile,
}
