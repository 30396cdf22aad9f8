"""Staff role enum for company-scoped access control."""

from enum import Enum as PyEnum


class UserRole(str, PyEnum):
    """
    Staff roles.

    - ADMIN: platform operator, not tied to a company, sees every company
    - MANAGER: company staff, sees only their own company's data
    """

    ADMIN = "admin"
    MANAGER = "manager"
