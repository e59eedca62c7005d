from typing import List, Optional

from sqlalchemy import delete
from sqlmodel import select, update
from sqlmodel.ext.asyncio.session import AsyncSession

from src.adapter.repositories.integrity import flush_unique
from src.app.repositories.role_repository import IRoleRepository
from src.domain.base import utcnow
from src.domain.entities import Permission, Role, RolePermission


class RoleRepository(IRoleRepository):
    """Role repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_all(self) -> List[Role]:
        """Get all active roles ordered by name"""
        stmt = select(Role).where(Role.is_active == True).order_by(Role.name)
        result = await self.session.exec(stmt)
        return list(result.all())

    async def get_by_id(self, role_id: int) -> Optional[Role]:
        """Get role by ID"""
        stmt = select(Role).where(Role.id == role_id)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def get_by_name(self, name: str) -> Optional[Role]:
        """Get role by unique name"""
        stmt = select(Role).where(Role.name == name)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def create(self, role: Role, permission_ids: Optional[List[int]] = None) -> Role:
        """Create a role, optionally linking it to permissions"""
        self.session.add(role)
        await flush_unique(self.session)
        await self.session.refresh(role)
        if permission_ids:
            self.session.add_all(
                [RolePermission(role_id=role.id, permission_id=pid) for pid in set(permission_ids)]
            )
            await self.session.flush()
        return role

    async def update(self, role: Role) -> Role:
        """Update existing role"""
        role.updated_at = utcnow()
        self.session.add(role)
        await flush_unique(self.session)
        await self.session.refresh(role)
        return role

    async def replace_permissions(self, role_id: int, permission_ids: List[int]) -> None:
        """Wholesale replacement: delete every link, then recreate"""
        await self.session.execute(
            delete(RolePermission).where(RolePermission.role_id == role_id)
        )
        if permission_ids:
            self.session.add_all(
                [RolePermission(role_id=role_id, permission_id=pid) for pid in set(permission_ids)]
            )
        await self.session.flush()

    async def get_permissions(self, role_id: int) -> List[Permission]:
        """Get permissions linked to the role"""
        stmt = (
            select(Permission)
            .join(RolePermission, RolePermission.permission_id == Permission.id)
            .where(RolePermission.role_id == role_id)
            .order_by(Permission.name)
        )
        result = await self.session.exec(stmt)
        return list(result.all())

    async def has_permission(self, role_id: int, permission_name: str) -> bool:
        """Check the role links to an active permission with this exact name"""
        stmt = (
            select(RolePermission.permission_id)
            .join(Permission, Permission.id == RolePermission.permission_id)
            .where(
                RolePermission.role_id == role_id,
                Permission.name == permission_name,
                Permission.is_active == True,
            )
            .limit(1)
        )
        result = await self.session.exec(stmt)
        return result.first() is not None

    async def delete(self, role_id: int) -> None:
        """Soft-delete the role"""
        stmt = (
            update(Role)
            .where(Role.id == role_id)
            .values(is_active=False, updated_at=utcnow())
        )
        await self.session.execute(stmt)
        await self.session.flush()
