"""Read-optimised view objects returned to callers."""

from pydantic import BaseModel


class ProductView(BaseModel):
    id: int | None = None
    category_id: int | None = None
    merchant_id: int | None = None
    name: str = ""
    brief: str | None = None
    cover: str | None = None
    status: int = 0
    type: int = 0
    create_at: int = 0
    update_at: int = 0


class ProductSkuView(BaseModel):
    id: int | None = None
    cover: str | None = None
    price: int = 0
    show_price: int = 0
    attr_value_ids: str = ""
