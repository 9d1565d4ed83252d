"""Unit tests for catalog error types."""

from src.catalog.core.errors import CatalogError, ErrorCode, ProductNotFound, RepositoryNotAttached


class TestCatalogErrors:
    def test_product_not_found_carries_code(self):
        error = ProductNotFound(17)

        assert isinstance(error, CatalogError)
        assert error.code is ErrorCode.PRODUCT_NOT_EXIST
        assert error.product_id == 17
        assert str(error) == "[PRODUCT_NOT_EXIST] Product 17 does not exist"

    def test_repository_not_attached_names_accessor(self):
        error = RepositoryNotAttached("get_tags")

        assert error.code is ErrorCode.REPOSITORY_NOT_ATTACHED
        assert "get_tags" in error.message
