from pydantic import AliasChoices, BaseModel, Field


class TenantSelection(BaseModel):
    """
    Body mixin for operations that write into a company.

    Admins pick the company with empresa_id; it is ignored for managers.
    """

    tenant_id: int | None = Field(
        None,
        gt=0,
        validation_alias=AliasChoices("empresa_id", "tenant_id"),
        description="Target company (admins only)",
    )
