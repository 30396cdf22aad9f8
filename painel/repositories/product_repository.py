from sqlalchemy.orm import Session, joinedload
from painel.models.product import Product
from painel.models.category import Category


class ProductRepository:
    """Repository for Product model operations with multi-tenant support"""

    def __init__(self, db: Session):
        self.db = db

    def get_by_id(self, product_id: int) -> Product | None:
        """
        Get product by ID across all companies.

        Ownership is checked by the caller so that an unknown ID and a
        foreign ID can be told apart.
        """
        return self.db.query(Product).filter(Product.id == product_id).first()

    def get_by_tenant(self, tenant_id: int) -> list[Product]:
        """
        Get the menu of a company.

        Ordered by category position, then product position. Products
        without a category come last.
        """
        return (
            self.db.query(Product)
            .outerjoin(Category, Product.category_id == Category.id)
            .options(joinedload(Product.category))
            .filter(Product.tenant_id == tenant_id)
            .order_by(Category.position.is_(None), Category.position, Product.position, Product.id)
            .all()
        )

    def create(self, product: Product) -> Product:
        """Create new product"""
        self.db.add(product)
        self.db.commit()
        self.db.refresh(product)
        return product

    def update(self, product: Product) -> Product:
        """Update existing product"""
        self.db.commit()
        self.db.refresh(product)
        return product

    def delete(self, product: Product) -> None:
        """Delete product"""
        self.db.delete(product)
        self.db.commit()
