from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ...persistence.models import RoleModel, UserModel


class PostgresUserRoleReader:
    """Resolves a user's role description for admin authorization."""

    def __init__(self, session: AsyncSession):
        self._session = session

    async def get_role(self, user_id: str) -> str | None:
        stmt = (
            select(RoleModel.role_desc)
            .join(UserModel, UserModel.role_id == RoleModel.role_id)
            .where(UserModel.user_id == user_id)
        )
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()
