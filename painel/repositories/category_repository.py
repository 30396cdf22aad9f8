from sqlalchemy import func
from sqlalchemy.orm import Session
from painel.models.category import Category
from painel.models.product import Product


class CategoryRepository:
    """Repository for Category model operations with multi-tenant support"""

    def __init__(self, db: Session):
        self.db = db

    def get_by_id(self, category_id: int) -> Category | None:
        """
        Get category by ID across all companies.

        Ownership is checked by the caller so that an unknown ID and a
        foreign ID can be told apart.
        """
        return self.db.query(Category).filter(Category.id == category_id).first()

    def get_by_tenant(self, tenant_id: int) -> list[Category]:
        """Get all categories for a company ordered by position"""
        return (
            self.db.query(Category)
            .filter(Category.tenant_id == tenant_id)
            .order_by(Category.position, Category.id)
            .all()
        )

    def count_products(self, category_id: int) -> int:
        """Count products still linked to a category"""
        return (
            self.db.query(func.count(Product.id))
            .filter(Product.category_id == category_id)
            .scalar()
        )

    def create(self, category: Category) -> Category:
        """Create new category"""
        self.db.add(category)
        self.db.commit()
        self.db.refresh(category)
        return category

    def update(self, category: Category) -> Category:
        """Update existing category"""
        self.db.commit()
        self.db.refresh(category)
        return category

    def delete(self, category: Category) -> None:
        """Delete category"""
        self.db.delete(category)
        self.db.commit()
