from loguru import logger
from sqlalchemy.orm import Session

from painel.models.category import Category
from painel.models.tenant_context import Principal
from painel.repositories.category_repository import CategoryRepository
from painel.schemas.category_schemas import CategoryCreate, CategoryUpdate
from painel.services.access_control import ensure_read, ensure_mutate
from painel.services.tenant_service import TenantService
from painel.core.exceptions import NotFoundException, ValidationException


class CategoryService:
    """Service for menu category business logic"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = CategoryRepository(db)
        self.tenants = TenantService(db)

    def list_categories(self, principal: Principal, explicit_tenant_id: int | None) -> list[Category]:
        """List categories of the company in scope"""
        tenant_id = self.tenants.read_scope(principal, explicit_tenant_id)
        return self.repo.get_by_tenant(tenant_id)

    def get_category(self, category_id: int, principal: Principal) -> Category:
        """
        Get specific category ensuring company ownership.

        Raises:
            NotFoundException: If category does not exist
            ForbiddenException: If category belongs to another company
        """
        category = self.repo.get_by_id(category_id)
        if not category:
            raise NotFoundException("Category not found")
        ensure_read(principal, category.tenant_id)
        return category

    def create_category(self, data: CategoryCreate, principal: Principal) -> Category:
        """Create new category in the target company"""
        tenant_id = self.tenants.write_target(principal, data.tenant_id)
        category = Category(
            tenant_id=tenant_id,
            name=data.name,
            description=data.description,
            position=data.position,
        )
        category = self.repo.create(category)
        logger.info("Category {} created for company {}", category.id, tenant_id)
        return category

    def update_category(
        self, category_id: int, data: CategoryUpdate, principal: Principal
    ) -> Category:
        """Update category details (only provided fields)"""
        category = self._get_for_mutation(category_id, principal)

        for field, value in data.model_dump(exclude_unset=True).items():
            if value is None and field != "description":
                continue
            setattr(category, field, value)

        return self.repo.update(category)

    def delete_category(self, category_id: int, principal: Principal) -> None:
        """
        Delete a category.

        Raises:
            ValidationException: If products still reference the category
        """
        category = self._get_for_mutation(category_id, principal)

        if self.repo.count_products(category.id) > 0:
            raise ValidationException("Cannot delete a category that still has products")

        self.repo.delete(category)
        logger.info("Category {} deleted by user {}", category_id, principal.id)

    def _get_for_mutation(self, category_id: int, principal: Principal) -> Category:
        category = self.repo.get_by_id(category_id)
        if not category:
            raise NotFoundException("Category not found")
        ensure_mutate(principal, category.tenant_id)
        return category
