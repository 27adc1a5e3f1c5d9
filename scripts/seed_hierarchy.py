"""
Seed script to populate a demo organization hierarchy.

Creates a director, two regions with their groups, and a leader and members
for every group. Existing users (matched by email) and regions (matched by
name) are left alone, so the script can be re-run safely.

User IDs are logged at the end; in development any of them can be sent as
the Bearer token.

Usage:
    uv run python -m scripts.seed_hierarchy
"""
import asyncio
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database.engine import get_db, init_db
from app.features.regions.models import Group, Region
from app.features.users.models import Role, User
from app.features.users.profiles import attach_profile
from app.utils import get_logger


log = get_logger(__name__)


DEFAULT_REGIONS = {
    "North": ["Alpha", "Beta"],
    "South": ["Gamma"],
}

# (email, name, role, region name, group name)
DEFAULT_USERS = [
    ("director@example.org", "Dana Director", Role.DIRECTOR, None, None),
    ("north.leader@example.org", "Noel North", Role.REGION_LEADER, "North", None),
    ("south.leader@example.org", "Sam South", Role.REGION_LEADER, "South", None),
    ("alpha.leader@example.org", "Avery Alpha", Role.GROUP_LEADER, None, "Alpha"),
    ("alpha.member@example.org", "Morgan Alpha", Role.GROUP_MEMBER, None, "Alpha"),
    ("beta.leader@example.org", "Blair Beta", Role.GROUP_LEADER, None, "Beta"),
    ("beta.member@example.org", "Casey Beta", Role.GROUP_MEMBER, None, "Beta"),
    ("gamma.leader@example.org", "Gale Gamma", Role.GROUP_LEADER, None, "Gamma"),
    ("gamma.member@example.org", "Jordan Gamma", Role.GROUP_MEMBER, None, "Gamma"),
]


async def seed_regions(db: AsyncSession) -> tuple[dict[str, Region], dict[str, Group]]:
    """
    Create default regions and groups.

    Returns:
        Maps of region name -> Region and group name -> Group
    """
    log.info("Creating default regions...")
    regions: dict[str, Region] = {}
    groups: dict[str, Group] = {}

    for region_name, group_names in DEFAULT_REGIONS.items():
        region = await db.scalar(select(Region).where(Region.name == region_name))
        if region is None:
            region = Region(name=region_name)
            db.add(region)
            await db.flush()
            log.info(f"Created region: {region_name}")
        else:
            log.debug(f"Region '{region_name}' already exists, skipping")
        regions[region_name] = region

        for group_name in group_names:
            group = await db.scalar(
                select(Group).where(Group.name == group_name, Group.region_id == region.id)
            )
            if group is None:
                group = Group(name=group_name, region_id=region.id)
                db.add(group)
                await db.flush()
                log.info(f"Created group: {group_name} in {region_name}")
            groups[group_name] = group

    await db.commit()
    return regions, groups


async def seed_users(db: AsyncSession, regions: dict[str, Region], groups: dict[str, Group]) -> list[User]:
    """Create default users with profiles matching their roles."""
    log.info("Creating default users...")
    users = []

    for email, name, role, region_name, group_name in DEFAULT_USERS:
        existing = await db.scalar(select(User).where(User.email == email))
        if existing:
            log.debug(f"User '{email}' already exists, skipping")
            users.append(existing)
            continue

        user = User(email=email, name=name, role=role)
        attach_profile(
            user,
            region_id=regions[region_name].id if region_name else None,
            group_id=groups[group_name].id if group_name else None,
        )
        db.add(user)
        users.append(user)
        log.info(f"Created user: {email} ({role.value})")

    await db.commit()
    return users


async def main():
    """Main function to seed the demo hierarchy."""
    log.info("Starting hierarchy seeding...")

    # Initialize database tables first
    log.info("Initializing database tables...")
    await init_db()

    # Get database session
    async for db in get_db():
        try:
            regions, groups = await seed_regions(db)
            users = await seed_users(db, regions, groups)

            log.info("Hierarchy seeding completed successfully!")
            log.info("")
            log.info("Users (ID usable as a development Bearer token):")
            for user in users:
                log.info(f"  - {user.id}  {user.role.value:<13} {user.email}")

        except Exception as e:
            log.error(f"Error seeding hierarchy: {e}", exc_info=True)
            await db.rollback()
            raise

        break  # Only use first session


if __name__ == "__main__":
    asyncio.run(main())
