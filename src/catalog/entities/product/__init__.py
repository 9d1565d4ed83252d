"""Entity package: Product.

- entity.py: ProductEntity aggregate and its pending SKU/tag state
- table.py: database persistence models
- mappers.py: per-table storage access
- repository.py: persistence and id reconciliation
- forms.py / views.py: inbound forms and outbound view objects
"""

from .entity import (
    PersistenceState,
    ProductEntity,
    ProductReader,
    ProductStatus,
    ProductTagLink,
    ProductType,
    SkuAttrMap,
    SkuEntity,
)
from .forms import AttrInput, ProductForm, SkuInput
from .repository import ProductRepository
from .table import (
    ProductCategoryTable,
    ProductSkuAttrMapTable,
    ProductSkuTable,
    ProductTable,
    ProductTagTable,
    RProductTagTable,
)
from .views import ProductSkuView, ProductView

__all__ = [
    "AttrInput",
    "PersistenceState",
    "ProductCategoryTable",
    "ProductEntity",
    "ProductForm",
    "ProductReader",
    "ProductRepository",
    "ProductSkuAttrMapTable",
    "ProductSkuTable",
    "ProductSkuView",
    "ProductStatus",
    "ProductTable",
    "ProductTagLink",
    "ProductTagTable",
    "ProductType",
    "ProductView",
    "RProductTagTable",
    "SkuAttrMap",
    "SkuEntity",
    "SkuInput",
]
