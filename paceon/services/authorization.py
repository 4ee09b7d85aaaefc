from paceon.schemas import AuthorizationResult
from paceon.services.roles import RoleResolver


class Authorizer:
    """Owner-or-admin access decisions."""

    def __init__(self, roles: RoleResolver, admin_role: str = "admin"):
        self.roles = roles
        self.admin_role = admin_role

    async def check(self, requester_id: str, owner_id: str) -> AuthorizationResult:
        # owners never need a role lookup
        if requester_id == owner_id:
            return AuthorizationResult(authorized=True, is_admin=False)

        role = await self.roles.resolve(requester_id)
        is_admin = role == self.admin_role
        return AuthorizationResult(authorized=is_admin, is_admin=is_admin)
