from typing import FrozenSet
from uuid import UUID

from sqlmodel import select

from src.adapter.repositories.base import BoundedRepository
from src.app.repositories.permission_repository import IPermissionRepository
from src.domain.entities import Permission, UserPermission


class PermissionRepository(BoundedRepository, IPermissionRepository):
    """Permission repository implementation using SQLModel"""

    async def get_all_for_user(self, user_id: UUID) -> FrozenSet[str]:
        """Get the permission codes granted to a user"""
        stmt = (
            select(Permission.code)
            .join(UserPermission, UserPermission.permission_id == Permission.id)
            .where(UserPermission.user_id == user_id)
        )
        result = await self._run(self.session.exec(stmt))
        return frozenset(result.all())

    async def add_for_user(self, user_id: UUID, *codes: str) -> None:
        """Grant permission codes to a user, creating unknown codes"""
        codes = tuple(dict.fromkeys(codes))
        if not codes:
            return

        stmt = select(Permission).where(Permission.code.in_(codes))
        result = await self._run(self.session.exec(stmt))
        existing = {permission.code: permission for permission in result.all()}

        for code in codes:
            if code not in existing:
                permission = Permission(code=code)
                self.session.add(permission)
                existing[code] = permission
        await self._run(self.session.flush())

        for code in codes:
            self.session.add(
                UserPermission(user_id=user_id, permission_id=existing[code].id)
            )
        await self._run(self.session.flush())
