"""
Tenant scoping and resource authorization.

Every domain service goes through these functions; no other module compares
roles or tenant IDs. Two steps gate each request:

1. resolve_scope() turns the principal plus an optional caller-supplied
   empresa_id into the TenantScope used for list/create queries.
2. The guard (authorize_* / ensure_*) compares the principal against the
   owning tenant of a loaded resource, or the tenant a new resource will be
   written into.

Callers load a resource by ID without a tenant filter first and raise
NotFoundException when it does not exist anywhere; only then is the guard
applied, so a resource in another company yields 403, not 404.
"""

from painel.core.exceptions import ForbiddenException
from painel.models.tenant_context import Principal, TenantScope


def resolve_scope(principal: Principal, explicit_tenant_id: int | None = None) -> TenantScope:
    """
    Compute the tenant visibility for a request.

    Admins see everything unless they pick a company explicitly. Everyone
    else is pinned to their own company and any empresa_id they send is
    ignored.

    Args:
        principal: Authenticated actor
        explicit_tenant_id: empresa_id from query string or body, if any

    Returns:
        TenantScope (unrestricted only for admins without explicit_tenant_id)
    """
    if principal.is_admin():
        return TenantScope(tenant_id=explicit_tenant_id)
    return TenantScope(tenant_id=principal.tenant_id)


def _owns(principal: Principal, tenant_id: int | None) -> bool:
    return principal.is_admin() or (
        principal.tenant_id is not None and principal.tenant_id == tenant_id
    )


def authorize_read(principal: Principal, resource_tenant_id: int | None) -> bool:
    """True if principal may read a resource owned by resource_tenant_id."""
    return _owns(principal, resource_tenant_id)


def authorize_mutate(principal: Principal, resource_tenant_id: int | None) -> bool:
    """True if principal may modify or delete a resource owned by resource_tenant_id."""
    return _owns(principal, resource_tenant_id)


def authorize_create(principal: Principal, target_tenant_id: int | None) -> bool:
    """True if principal may write a new resource into target_tenant_id."""
    return _owns(principal, target_tenant_id)


def ensure_read(principal: Principal, resource_tenant_id: int | None) -> None:
    """
    Raises:
        ForbiddenException: If the resource belongs to another company
    """
    if not authorize_read(principal, resource_tenant_id):
        raise ForbiddenException("Access denied. You do not have permission to access this resource.")


def ensure_mutate(principal: Principal, resource_tenant_id: int | None) -> None:
    """
    Raises:
        ForbiddenException: If the resource belongs to another company
    """
    if not authorize_mutate(principal, resource_tenant_id):
        raise ForbiddenException("Access denied. You do not have permission to modify this resource.")


def ensure_create(principal: Principal, target_tenant_id: int | None) -> None:
    """
    Raises:
        ForbiddenException: If the target company is not the principal's
    """
    if not authorize_create(principal, target_tenant_id):
        raise ForbiddenException("Access denied. You cannot create resources for this company.")


def resolve_target_tenant(principal: Principal, explicit_tenant_id: int | None) -> int:
    """
    Pick the company a new resource is written into and check it.

    Raises:
        TenantRequiredException: If an admin did not supply empresa_id
        ForbiddenException: If the principal may not write into that company
    """
    tenant_id = resolve_scope(principal, explicit_tenant_id).require_tenant()
    ensure_create(principal, tenant_id)
    return tenant_id
