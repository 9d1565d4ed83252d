"""Per-table mappers for the product aggregate.

Every query that returns "current" SKUs or attribute bindings filters on
``deleted`` explicitly; there is no implicit default scope.
"""

from collections.abc import Sequence

from sqlmodel import col, select

from src.catalog.core.services.database.mapper import TableMapper
from src.catalog.entities.product.table import (
    ProductCategoryTable,
    ProductSkuAttrMapTable,
    ProductSkuTable,
    ProductTable,
    ProductTagTable,
    RProductTagTable,
)


class ProductMapper(TableMapper[ProductTable]):
    row_type = ProductTable


class ProductCategoryMapper(TableMapper[ProductCategoryTable]):
    row_type = ProductCategoryTable


class ProductTagMapper(TableMapper[ProductTagTable]):
    row_type = ProductTagTable

    def find_by_id_in(self, tag_ids: Sequence[int]) -> list[ProductTagTable]:
        if not tag_ids:
            return []
        statement = (
            select(ProductTagTable)
            .where(col(ProductTagTable.id).in_(tag_ids))
            .order_by(col(ProductTagTable.id))
        )
        return list(self._session.exec(statement).all())


class RProductTagMapper(TableMapper[RProductTagTable]):
    row_type = RProductTagTable

    def find_by_product_id(self, product_id: int) -> list[RProductTagTable]:
        statement = (
            select(RProductTagTable)
            .where(RProductTagTable.product_id == product_id)
            .order_by(col(RProductTagTable.id))
        )
        return list(self._session.exec(statement).all())

    def delete_by_product_id(self, product_id: int) -> int:
        rows = self.find_by_product_id(product_id)
        for row in rows:
            self._session.delete(row)
        self._session.flush()
        return len(rows)


class ProductSkuMapper(TableMapper[ProductSkuTable]):
    row_type = ProductSkuTable

    def find_by_product_id(self, product_id: int) -> list[ProductSkuTable]:
        """Active SKUs of a product, oldest first."""
        statement = (
            select(ProductSkuTable)
            .where(ProductSkuTable.product_id == product_id)
            .where(col(ProductSkuTable.deleted) == False)  # noqa: E712
            .order_by(col(ProductSkuTable.id))
        )
        return list(self._session.exec(statement).all())

    def update_deleted_by_product_id(self, deleted: bool, product_id: int) -> int:
        statement = (
            select(ProductSkuTable)
            .where(ProductSkuTable.product_id == product_id)
            .where(col(ProductSkuTable.deleted) == (not deleted))
        )
        rows = self._session.exec(statement).all()
        for row in rows:
            row.deleted = deleted
            self._session.add(row)
        self._session.flush()
        return len(rows)


class ProductSkuAttrMapMapper(TableMapper[ProductSkuAttrMapTable]):
    row_type = ProductSkuAttrMapTable

    def find_by_sku_id(self, sku_id: int) -> list[ProductSkuAttrMapTable]:
        statement = (
            select(ProductSkuAttrMapTable)
            .where(ProductSkuAttrMapTable.sku_id == sku_id)
            .where(col(ProductSkuAttrMapTable.deleted) == False)  # noqa: E712
            .order_by(col(ProductSkuAttrMapTable.id))
        )
        return list(self._session.exec(statement).all())

    def find_by_product_id(self, product_id: int) -> list[ProductSkuAttrMapTable]:
        statement = (
            select(ProductSkuAttrMapTable)
            .where(ProductSkuAttrMapTable.product_id == product_id)
            .where(col(ProductSkuAttrMapTable.deleted) == False)  # noqa: E712
            .order_by(col(ProductSkuAttrMapTable.id))
        )
        return list(self._session.exec(statement).all())

    def update_deleted_by_product_id(self, deleted: bool, product_id: int) -> int:
        statement = (
            select(ProductSkuAttrMapTable)
            .where(ProductSkuAttrMapTable.product_id == product_id)
            .where(col(ProductSkuAttrMapTable.deleted) == (not deleted))
        )
        rows = self._session.exec(statement).all()
        for row in rows:
            row.deleted = deleted
            self._session.add(row)
        self._session.flush()
        return len(rows)
