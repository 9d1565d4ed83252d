"""Inbound forms for creating and editing products."""

from pydantic import BaseModel, Field


class AttrInput(BaseModel):
    """One attribute/value pair selected for a SKU."""

    attr_id: int
    attr_name: str = ""
    attr_value_id: int
    attr_value_name: str = ""


class SkuInput(BaseModel):
    cover: str | None = None
    price: int = Field(default=0, ge=0, description="Price in minor currency units")
    show_price: int = Field(default=0, ge=0, description="Display price in minor currency units")
    attrs: list[AttrInput] = Field(
        default_factory=list,
        description="Attribute values in selection order; the order defines the SKU signature",
    )


class ProductForm(BaseModel):
    """Back-office product form: product fields plus tag ids and SKU inputs."""

    category_id: int | None = None
    merchant_id: int | None = None
    name: str = ""
    brief: str | None = None
    cover: str | None = None
    status: int = 0
    type: int = 0
    tag_ids: list[int] = Field(default_factory=list)
    skus: list[SkuInput] = Field(default_factory=list)
