from loguru import logger
from sqlalchemy.orm import Session

from painel.models.product import Product
from painel.models.tenant_context import Principal
from painel.repositories.product_repository import ProductRepository
from painel.repositories.category_repository import CategoryRepository
from painel.schemas.product_schemas import ProductCreate, ProductUpdate
from painel.services.access_control import ensure_read, ensure_mutate
from painel.services.tenant_service import TenantService
from painel.core.exceptions import NotFoundException, ValidationException

# Fields that may be cleared by sending null
NULLABLE_FIELDS = {"category_id", "description"}


class ProductService:
    """Service for menu product business logic"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = ProductRepository(db)
        self.category_repo = CategoryRepository(db)
        self.tenants = TenantService(db)

    def list_products(self, principal: Principal, explicit_tenant_id: int | None) -> list[Product]:
        """List the menu of the company in scope"""
        tenant_id = self.tenants.read_scope(principal, explicit_tenant_id)
        return self.repo.get_by_tenant(tenant_id)

    def get_product(self, product_id: int, principal: Principal) -> Product:
        """
        Get specific product ensuring company ownership.

        Raises:
            NotFoundException: If product does not exist
            ForbiddenException: If product belongs to another company
        """
        product = self.repo.get_by_id(product_id)
        if not product:
            raise NotFoundException("Product not found")
        ensure_read(principal, product.tenant_id)
        return product

    def create_product(self, data: ProductCreate, principal: Principal) -> Product:
        """Create new product in the target company"""
        tenant_id = self.tenants.write_target(principal, data.tenant_id)

        if data.category_id is not None:
            self._check_category(data.category_id, tenant_id)

        product = Product(
            tenant_id=tenant_id,
            category_id=data.category_id,
            name=data.name,
            description=data.description,
            price=data.price,
            available=data.available,
            position=data.position,
        )
        product = self.repo.create(product)
        logger.info("Product {} created for company {}", product.id, tenant_id)
        return product

    def update_product(self, product_id: int, data: ProductUpdate, principal: Principal) -> Product:
        """Update product details (only provided fields)"""
        product = self._get_for_mutation(product_id, principal)

        changes = data.model_dump(exclude_unset=True)
        if changes.get("category_id") is not None:
            self._check_category(changes["category_id"], product.tenant_id)

        for field, value in changes.items():
            if value is None and field not in NULLABLE_FIELDS:
                continue
            setattr(product, field, value)

        return self.repo.update(product)

    def toggle_availability(self, product_id: int, principal: Principal) -> Product:
        """Flip a product between available and unavailable"""
        product = self._get_for_mutation(product_id, principal)
        product.available = not product.available
        return self.repo.update(product)

    def delete_product(self, product_id: int, principal: Principal) -> None:
        """Delete a product"""
        product = self._get_for_mutation(product_id, principal)
        self.repo.delete(product)
        logger.info("Product {} deleted by user {}", product_id, principal.id)

    def _get_for_mutation(self, product_id: int, principal: Principal) -> Product:
        product = self.repo.get_by_id(product_id)
        if not product:
            raise NotFoundException("Product not found")
        ensure_mutate(principal, product.tenant_id)
        return product

    def _check_category(self, category_id: int, tenant_id: int) -> None:
        """A product may only be filed under a category of its own company"""
        category = self.category_repo.get_by_id(category_id)
        if not category or category.tenant_id != tenant_id:
            raise ValidationException(f"Category {category_id} does not exist in this company")
