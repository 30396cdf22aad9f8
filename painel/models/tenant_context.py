"""Request-scoped identity and tenant visibility."""

from dataclasses import dataclass

from painel.core.exceptions import TenantRequiredException
from painel.models.role import UserRole


@dataclass(frozen=True)
class Principal:
    """
    The authenticated actor for one request.

    Built by the token codec from a verified credential and passed
    explicitly from the route down into services. Never persisted.

    Attributes:
        id: User ID
        email: User email (informational)
        role: Staff role
        tenant_id: Company the user belongs to; None only for admins
        display_name: User display name (informational)
    """

    id: int
    email: str
    role: UserRole
    tenant_id: int | None
    display_name: str = ""

    def is_admin(self) -> bool:
        """Check if principal is a platform admin."""
        return self.role == UserRole.ADMIN

    def __repr__(self) -> str:
        return f"<Principal(id={self.id}, role={self.role.value}, tenant_id={self.tenant_id})>"


@dataclass(frozen=True)
class TenantScope:
    """
    Tenant visibility filter computed for a request.

    tenant_id=None means unrestricted (admin without an explicit company).
    """

    tenant_id: int | None

    @property
    def is_unrestricted(self) -> bool:
        return self.tenant_id is None

    def require_tenant(self) -> int:
        """
        Return the concrete tenant ID for operations that need one.

        Raises:
            TenantRequiredException: If the scope is unrestricted
        """
        if self.tenant_id is None:
            raise TenantRequiredException("empresa_id is required for admin users")
        return self.tenant_id
