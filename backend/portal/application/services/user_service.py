"""Application services for portal users and admin users.

Both tables hold the same record shape; only the table differs.
"""

from portal.application.schemas import UserCreate, UserResponse, UserUpdate
from portal.domain.entities import EntityName

from .entity_service import EntityService


class UserService(EntityService[UserCreate, UserUpdate, UserResponse]):
    entity = EntityName.USERS
    label = "User"
    create_schema = UserCreate
    update_schema = UserUpdate
    response_schema = UserResponse

    async def find_by_email(self, email: str) -> UserResponse | None:
        page = await self.query_by("EmailIndex", email.strip(), limit=1)
        return page.items[0] if page.items else None


class AdminUserService(UserService):
    entity = EntityName.ADMIN_USERS
    label = "AdminUser"

    async def find_by_email(self, email: str) -> UserResponse | None:
        # The admin table has no email index.
        page = await self.list(filters={"email": email.strip()}, limit=100)
        return page.items[0] if page.items else None
