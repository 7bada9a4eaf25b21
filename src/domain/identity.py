"""
Request identity resolved by authentication.

Either a concrete user (with permissions loaded) or the anonymous sentinel.
"""

from typing import FrozenSet, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict


class UserIdentity(BaseModel):
    """Identity attached to a request"""

    model_config = ConfigDict(frozen=True)

    id: Optional[UUID] = None
    name: str = ""
    email: str = ""
    activated: bool = False
    permissions: FrozenSet[str] = frozenset()

    @property
    def is_anonymous(self) -> bool:
        return self.id is None

    def has_permission(self, code: str) -> bool:
        return code in self.permissions


# No id, never activated, no permissions.
ANONYMOUS_USER = UserIdentity()
