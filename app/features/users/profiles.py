"""
Profile attachment keeping a user's role and profile variant in agreement.
"""
from app.features.users.models import (
    DirectorProfile,
    GroupLeaderProfile,
    GroupMemberProfile,
    RegionLeaderProfile,
    Role,
    User,
)


def attach_profile(user: User, region_id: str | None = None, group_id: str | None = None):
    """
    Create the profile matching ``user.role`` and attach it to the user.

    Region leaders need ``region_id``; group leaders and members need
    ``group_id``; directors take neither.

    Raises:
        ValueError: If the scope arguments do not fit the role
    """
    if user.role == Role.DIRECTOR:
        if region_id or group_id:
            raise ValueError("Directors are not attached to a region or group")
        user.director_profile = DirectorProfile()
        return user.director_profile

    if user.role == Role.REGION_LEADER:
        if not region_id or group_id:
            raise ValueError("Region leaders must reference exactly one region")
        user.region_leader_profile = RegionLeaderProfile(region_id=region_id)
        return user.region_leader_profile

    if user.role == Role.GROUP_LEADER:
        if not group_id or region_id:
            raise ValueError("Group leaders must reference exactly one group")
        user.group_leader_profile = GroupLeaderProfile(group_id=group_id)
        return user.group_leader_profile

    if user.role == Role.GROUP_MEMBER:
        if not group_id or region_id:
            raise ValueError("Group members must reference exactly one group")
        user.group_member_profile = GroupMemberProfile(group_id=group_id)
        return user.group_member_profile

    raise ValueError(f"Unknown role: {user.role!r}")
