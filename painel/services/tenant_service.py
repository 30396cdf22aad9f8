from sqlalchemy.orm import Session
from painel.models.tenant_context import Principal, TenantScope
from painel.repositories.company_repository import CompanyRepository
from painel.services.access_control import resolve_scope, resolve_target_tenant
from painel.core.exceptions import NotFoundException


class TenantService:
    """Resolves which company a request reads from or writes into"""

    def __init__(self, db: Session):
        self.db = db
        self.company_repo = CompanyRepository(db)

    def read_scope(self, principal: Principal, explicit_tenant_id: int | None) -> int:
        """
        Concrete company for a tenant-scoped listing.

        Raises:
            TenantRequiredException: If an admin did not supply empresa_id
        """
        scope: TenantScope = resolve_scope(principal, explicit_tenant_id)
        return scope.require_tenant()

    def write_target(self, principal: Principal, explicit_tenant_id: int | None) -> int:
        """
        Company a new resource will be written into.

        Raises:
            TenantRequiredException: If an admin did not supply empresa_id
            ForbiddenException: If the principal may not write there
            NotFoundException: If the company does not exist
        """
        tenant_id = resolve_target_tenant(principal, explicit_tenant_id)
        if not self.company_repo.get_by_id(tenant_id):
            raise NotFoundException(f"Company {tenant_id} not found")
        return tenant_id
