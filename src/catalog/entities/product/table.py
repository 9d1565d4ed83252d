"""Product catalog database table models.

These represent how the product aggregate is stored. They are kept apart
from the domain entity so the entity can carry pending, not-yet-persisted
state without it leaking into the schema.
"""

from sqlmodel import Field, SQLModel

from src.catalog.entities.core._base import EntityTable


class ProductTable(EntityTable, table=True):
    __tablename__ = "product"

    category_id: int | None = Field(default=None, index=True)
    merchant_id: int | None = Field(default=None, index=True)
    name: str = ""
    brief: str | None = None
    cover: str | None = None
    status: int = 0
    type: int = 0


class ProductCategoryTable(EntityTable, table=True):
    __tablename__ = "product_category"

    merchant_id: int | None = Field(default=None, index=True)
    name: str
    sort: int = 0


class ProductTagTable(EntityTable, table=True):
    __tablename__ = "product_tag"

    merchant_id: int | None = Field(default=None, index=True)
    name: str


class RProductTagTable(SQLModel, table=True):
    """Product <-> tag link. Only meaningful as part of its product."""

    __tablename__ = "r_product_tag"

    id: int | None = Field(default=None, primary_key=True)
    product_id: int | None = Field(default=None, foreign_key="product.id", index=True)
    tag_id: int = Field(foreign_key="product_tag.id")
    create_at: int = 0


class ProductSkuTable(EntityTable, table=True):
    __tablename__ = "product_sku"

    merchant_id: int | None = Field(default=None, index=True)
    product_id: int | None = Field(default=None, foreign_key="product.id", index=True)
    cover: str | None = None
    price: int = Field(default=0, description="Price in minor currency units")
    show_price: int = Field(default=0, description="Display (list) price in minor currency units")
    attr_value_ids: str = Field(default="", description="Comma-joined attribute value ids, in binding order")
    deleted: bool = Field(default=False, index=True)


class ProductSkuAttrMapTable(EntityTable, table=True):
    """One attribute/value binding of a SKU."""

    __tablename__ = "product_sku_attr_map"

    merchant_id: int | None = Field(default=None, index=True)
    product_id: int | None = Field(default=None, foreign_key="product.id", index=True)
    sku_id: int | None = Field(default=None, foreign_key="product_sku.id", index=True)
    attr_id: int
    attr_name: str = ""
    attr_value_id: int
    attr_value_name: str = ""
    deleted: bool = Field(default=False, index=True)
