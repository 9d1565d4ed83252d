"""Product repository: the only component that writes the product aggregate."""

from loguru import logger
from sqlmodel import Session

from src.catalog.core.errors import ProductNotFound
from src.catalog.core.utils.clock import now_millis
from src.catalog.entities.product.entity import (
    PersistenceState,
    ProductEntity,
    SkuAttrMap,
    SkuEntity,
)
from src.catalog.entities.product.mappers import (
    ProductCategoryMapper,
    ProductMapper,
    ProductSkuAttrMapMapper,
    ProductSkuMapper,
    ProductTagMapper,
    RProductTagMapper,
)
from src.catalog.entities.product.table import (
    ProductCategoryTable,
    ProductSkuAttrMapTable,
    ProductSkuTable,
    ProductTable,
    ProductTagTable,
    RProductTagTable,
)


class ProductRepository:
    """Data-access layer for products, their tags and SKUs.

    All methods run inside the caller's transaction: rows are flushed so
    generated ids are available, but nothing is committed here.
    """

    def __init__(self, session: Session) -> None:
        self._session = session
        self._products = ProductMapper(session)
        self._categories = ProductCategoryMapper(session)
        self._tags = ProductTagMapper(session)
        self._product_tags = RProductTagMapper(session)
        self._skus = ProductSkuMapper(session)
        self._sku_attr_maps = ProductSkuAttrMapMapper(session)

    def save(self, entity: ProductEntity) -> ProductEntity:
        """Insert a draft product or update a persisted one, then replace its tag links.

        Tag links are never merged: every save removes the product's previous
        links and inserts the entity's pending ones.
        """
        if entity.state is PersistenceState.PERSISTED:
            self._update_product(entity)
            removed = self._product_tags.delete_by_product_id(entity.id)
            logger.debug("Removed {} tag links of product {}", removed, entity.id)
        else:
            self._insert_product(entity)

        # The generated id must reach every pending link, whichever branch ran
        links = [
            RProductTagTable(product_id=entity.id, tag_id=link.tag_id, create_at=link.create_at)
            for link in entity.tag_inputs
        ]
        for link in entity.tag_inputs:
            link.product_id = entity.id
        self._product_tags.batch_insert(links)

        logger.info("Saved product {} with {} tag links", entity.id, len(links))
        return entity

    def _insert_product(self, entity: ProductEntity) -> None:
        now = now_millis()
        entity.create_at = entity.create_at or now
        entity.update_at = entity.update_at or now
        row = ProductTable.model_validate(entity.model_dump(exclude={"id"}))
        self._products.insert(row)
        entity.mark_persisted(row.id)
        entity.attach_repository(self)

    def _update_product(self, entity: ProductEntity) -> None:
        row = self._products.select_by_primary_key(entity.id)
        if row is None:
            raise ProductNotFound(entity.id)
        entity.update_at = now_millis()
        row.sqlmodel_update(entity.model_dump(exclude={"id", "create_at"}))
        self._products.update_by_primary_key(row)

    def by_id(self, product_id: int) -> ProductEntity:
        """Load a persisted product.

        Raises:
            ProductNotFound: If no product has this id.
            pydantic.ValidationError: If the stored row holds values the entity rejects
                (e.g. an unknown status); the row is left untouched.
        """
        row = self._products.select_by_primary_key(product_id)
        if row is None:
            raise ProductNotFound(product_id)
        return self._wrap(row)

    def _wrap(self, row: ProductTable) -> ProductEntity:
        entity = ProductEntity.model_validate(row, from_attributes=True)
        entity.attach_repository(self)
        entity.mark_persisted(row.id)
        return entity

    def save_skus(self, entity: ProductEntity) -> None:
        """Replace the product's SKUs with the entity's pending ones.

        Current SKUs (and their attribute bindings) are soft-deleted, the
        pending SKUs inserted, and each pending SKU's bindings are matched
        to the new row through the ``attr_value_ids`` signature. Bindings
        whose signature finds no row are dropped; two pending SKUs with the
        same signature both resolve to the last inserted row.
        """
        if entity.state is not PersistenceState.PERSISTED:
            raise ValueError("Product must be saved before its SKUs")

        retired = self._skus.update_deleted_by_product_id(True, entity.id)
        self._sku_attr_maps.update_deleted_by_product_id(True, entity.id)
        logger.debug("Soft-deleted {} SKUs of product {}", retired, entity.id)

        sku_inputs = entity.sku_inputs
        if not sku_inputs:
            logger.info("Product {} now has no active SKUs", entity.id)
            return

        self._skus.batch_insert(
            [
                ProductSkuTable.model_validate(
                    sku.model_dump(exclude={"id"}) | {"product_id": entity.id}
                )
                for sku in sku_inputs
            ]
        )

        by_signature = {sku.attr_value_ids: sku for sku in self.find_skus_by_id(entity.id)}

        resolved: list[SkuAttrMap] = []
        for sku in sku_inputs:
            stored = by_signature.get(sku.bind_attr_value_ids)
            if stored is None:
                logger.warning(
                    "No stored SKU matches signature '{}' of product {}; dropping {} attribute bindings",
                    sku.bind_attr_value_ids,
                    entity.id,
                    len(sku.attr_maps),
                )
                continue
            for attr_map in sku.attr_maps:
                attr_map.sku_id = stored.id
                attr_map.product_id = entity.id
            resolved.extend(sku.attr_maps)

        self._sku_attr_maps.batch_insert(
            [ProductSkuAttrMapTable.model_validate(attr_map.model_dump(exclude={"id"})) for attr_map in resolved]
        )
        logger.info(
            "Saved {} SKUs with {} attribute bindings for product {}",
            len(sku_inputs),
            len(resolved),
            entity.id,
        )

    def find_tags_by_product_id(self, product_id: int | None) -> list[ProductTagTable]:
        if product_id is None:
            return []
        links = self._product_tags.find_by_product_id(product_id)
        if not links:
            return []
        return self._tags.find_by_id_in([link.tag_id for link in links])

    def find_category_by_cate_id(self, category_id: int | None) -> ProductCategoryTable | None:
        return self._categories.select_by_primary_key(category_id)

    def find_skus_by_id(self, product_id: int | None) -> list[ProductSkuTable]:
        """Active SKUs of a product."""
        if product_id is None:
            return []
        return self._skus.find_by_product_id(product_id)

    def find_sku_attr_maps(self, sku_id: int) -> list[ProductSkuAttrMapTable]:
        """Active attribute bindings of one SKU."""
        return self._sku_attr_maps.find_by_sku_id(sku_id)

    def update_one_sku(self, sku: SkuEntity) -> ProductSkuTable | None:
        """Update cover and prices of one SKU. Attribute bindings cannot change here."""
        row = self._skus.select_by_primary_key(sku.id)
        if row is None:
            logger.debug("SKU {} not found; nothing to update", sku.id)
            return None

        row.cover = sku.cover
        row.price = sku.price
        row.show_price = sku.show_price
        row.update_at = now_millis()
        return self._skus.update_by_primary_key(row)
