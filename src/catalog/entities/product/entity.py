"""Entity: Product aggregate.

A ``ProductEntity`` accumulates pending changes (tag links, new SKUs with
their attribute bindings) in memory. Nothing here touches storage: writes
go through ``ProductRepository``, and the read-through accessors use the
``ProductReader`` injected at construction.
"""

from collections.abc import Iterable
from enum import Enum, IntEnum
from typing import Any, Protocol

from pydantic import BaseModel, Field, PrivateAttr

from src.catalog.core.errors import RepositoryNotAttached
from src.catalog.core.utils.clock import now_millis
from src.catalog.core.utils.copying import copy_matching_fields
from src.catalog.entities.core._base import Entity
from src.catalog.entities.product.forms import AttrInput, ProductForm, SkuInput
from src.catalog.entities.product.table import (
    ProductCategoryTable,
    ProductSkuTable,
    ProductTagTable,
)
from src.catalog.entities.product.views import ProductSkuView, ProductView


class ProductStatus(IntEnum):
    NOT_LISTED = 0
    LISTED = 2


class ProductType(IntEnum):
    NORMAL = 0


class PersistenceState(str, Enum):
    """Whether an entity has been written yet; decides insert vs. update on save."""

    DRAFT = "draft"
    PERSISTED = "persisted"


class ProductReader(Protocol):
    """Read access an entity needs for its lazy accessors."""

    def find_tags_by_product_id(self, product_id: int | None) -> list[ProductTagTable]: ...

    def find_category_by_cate_id(self, category_id: int | None) -> ProductCategoryTable | None: ...

    def find_skus_by_id(self, product_id: int | None) -> list[ProductSkuTable]: ...


class ProductTagLink(BaseModel):
    """Pending product <-> tag association."""

    product_id: int | None = None
    tag_id: int
    create_at: int = 0


class SkuAttrMap(Entity):
    """Pending attribute/value binding of a SKU; ``sku_id`` is filled in after the SKU is stored."""

    merchant_id: int | None = None
    product_id: int | None = None
    sku_id: int | None = None
    attr_id: int
    attr_name: str = ""
    attr_value_id: int
    attr_value_name: str = ""
    deleted: bool = False


class SkuEntity(Entity):
    """One purchasable variant of a product, with its pending attribute bindings."""

    merchant_id: int | None = None
    product_id: int | None = None
    cover: str | None = None
    price: int = 0
    show_price: int = 0
    attr_value_ids: str = ""
    deleted: bool = False

    _attr_maps: list[SkuAttrMap] = PrivateAttr(default_factory=list)

    @classmethod
    def from_input(cls, product: "ProductEntity", sku_input: SkuInput) -> "SkuEntity":
        now = now_millis()
        return cls(
            merchant_id=product.merchant_id,
            product_id=product.id,
            cover=sku_input.cover,
            price=sku_input.price,
            show_price=sku_input.show_price,
            attr_value_ids="",
            deleted=False,
            create_at=now,
            update_at=now,
        )

    @property
    def attr_maps(self) -> list[SkuAttrMap]:
        return self._attr_maps

    @property
    def bind_attr_value_ids(self) -> str:
        """Signature of the current bindings: attribute value ids joined by commas, in binding order."""
        return ",".join(str(attr_map.attr_value_id) for attr_map in self._attr_maps)

    def add_attr_maps(self, attrs: Iterable[AttrInput]) -> None:
        """Bind attribute values to this SKU and refresh its signature.

        The binding order is kept as given; it must match the order in which
        the signature was computed when the SKU is later matched by signature.
        """
        for attr in attrs:
            self._attr_maps.append(
                SkuAttrMap(
                    merchant_id=self.merchant_id,
                    product_id=self.product_id,
                    attr_id=attr.attr_id,
                    attr_name=attr.attr_name,
                    attr_value_id=attr.attr_value_id,
                    attr_value_name=attr.attr_value_name,
                    deleted=False,
                    create_at=now_millis(),
                    update_at=0,
                )
            )
        self.attr_value_ids = self.bind_attr_value_ids

    def to_view(self) -> ProductSkuView:
        # TODO: project price, cover and attribute bindings once the storefront SKU view is agreed
        return ProductSkuView()


class ProductEntity(Entity):
    """Product aggregate root.

    Build one with ``ProductEntity(repository=...)`` or ``from_form``; entities
    returned by ``ProductRepository.by_id`` are already persisted and carry
    the repository as their reader.
    """

    category_id: int | None = Field(default=None, description="Owning category")
    merchant_id: int | None = Field(default=None, description="Owning merchant")
    name: str = Field(default="", description="Display name")
    brief: str | None = Field(default=None, description="Short description")
    cover: str | None = Field(default=None, description="Cover image URL")
    status: ProductStatus = Field(default=ProductStatus.NOT_LISTED)
    type: ProductType = Field(default=ProductType.NORMAL)

    _reader: ProductReader | None = PrivateAttr(default=None)
    _state: PersistenceState = PrivateAttr(default=PersistenceState.DRAFT)
    _tag_inputs: list[ProductTagLink] = PrivateAttr(default_factory=list)
    _sku_inputs: list[SkuEntity] = PrivateAttr(default_factory=list)

    def __init__(self, repository: ProductReader | None = None, **data: Any) -> None:
        super().__init__(**data)
        self._reader = repository

    @classmethod
    def from_form(
        cls, form: ProductForm, repository: ProductReader | None = None
    ) -> "ProductEntity":
        """Build a draft product from a back-office form."""
        return cls(repository=repository).apply_form(form)

    def apply_form(self, form: ProductForm) -> "ProductEntity":
        """Copy the form's product fields onto this entity and queue its tags and SKUs."""
        copy_matching_fields(form, self, exclude={"id", "create_at", "update_at"})
        self.attach_tags(form.tag_ids)
        self.add_skus(form.skus)
        return self

    @property
    def state(self) -> PersistenceState:
        return self._state

    @property
    def tag_inputs(self) -> list[ProductTagLink]:
        return self._tag_inputs

    @property
    def sku_inputs(self) -> list[SkuEntity]:
        return self._sku_inputs

    def attach_repository(self, repository: ProductReader) -> None:
        self._reader = repository

    def mark_persisted(self, product_id: int) -> None:
        self.id = product_id
        self._state = PersistenceState.PERSISTED

    def attach_tags(self, tag_ids: Iterable[int] | None) -> None:
        """Queue one tag association per id. Duplicates are not collapsed."""
        if not tag_ids:
            return
        now = now_millis()
        self._tag_inputs.extend(
            ProductTagLink(product_id=self.id, tag_id=tag_id, create_at=now)
            for tag_id in tag_ids
        )

    def add_skus(self, sku_inputs: Iterable[SkuInput] | None) -> None:
        for sku_input in sku_inputs or ():
            sku = SkuEntity.from_input(self, sku_input)
            sku.add_attr_maps(sku_input.attrs)
            self._sku_inputs.append(sku)

    def _require_reader(self, accessor: str) -> ProductReader:
        if self._reader is None:
            raise RepositoryNotAttached(accessor)
        return self._reader

    def get_tags(self) -> list[ProductTagTable]:
        return self._require_reader("get_tags").find_tags_by_product_id(self.id)

    def get_category(self) -> ProductCategoryTable | None:
        return self._require_reader("get_category").find_category_by_cate_id(self.category_id)

    def get_product_skus(self) -> list[ProductSkuTable]:
        return self._require_reader("get_product_skus").find_skus_by_id(self.id)

    def get_product_sku_views(self) -> list[ProductSkuView]:
        """SKU views are not projected yet; always empty."""
        return []

    def to_view(self) -> ProductView:
        return ProductView.model_validate(self, from_attributes=True)

    def __eq__(self, other: Any) -> bool:
        """Compare products by business attributes, ignoring timestamps and pending state."""
        if not isinstance(other, ProductEntity):
            return False

        return (
            self.id == other.id
            and self.category_id == other.category_id
            and self.merchant_id == other.merchant_id
            and self.name == other.name
            and self.brief == other.brief
            and self.cover == other.cover
            and self.status == other.status
            and self.type == other.type
        )

    def __hash__(self) -> int:
        return hash((self.id, self.merchant_id, self.name))
