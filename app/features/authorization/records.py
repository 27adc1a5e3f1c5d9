"""
Record kinds handled by the generic authorization engine.
"""
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class RecordKind:
    """
    Describes one owned record type.

    Attributes:
        label: Human-readable name used in error messages ("Contact")
        model: SQLAlchemy model class
        owner_field: Column holding the owning user's ID; immutable after creation
        order_field: Timestamp column the read path sorts on, newest first
    """
    label: str
    model: type
    owner_field: str
    order_field: str

    def owner_of(self, record: Any) -> str:
        return getattr(record, self.owner_field)

    def sort_key(self, record: Any):
        return getattr(record, self.order_field)

    @property
    def required_fields(self) -> frozenset[str]:
        """Columns that cannot hold NULL; a patch may not clear them."""
        return frozenset(column.name for column in self.model.__table__.columns if not column.nullable)
