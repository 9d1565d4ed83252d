"""Catalog domain exceptions.

Raised by repositories and entities when a business rule is violated.
Callers (CLI, HTTP layers) translate these into their own responses.
"""

from __future__ import annotations

from enum import Enum


class ErrorCode(str, Enum):
    PRODUCT_NOT_EXIST = "PRODUCT_NOT_EXIST"
    REPOSITORY_NOT_ATTACHED = "REPOSITORY_NOT_ATTACHED"


class CatalogError(Exception):
    """Base class for business errors, carrying a stable error code."""

    code: ErrorCode

    def __init__(self, code: ErrorCode, message: str) -> None:
        super().__init__(message)
        self.code = code
        self.message = message

    def __str__(self) -> str:
        return f"[{self.code.value}] {self.message}"


class ProductNotFound(CatalogError):
    """The requested product does not exist."""

    def __init__(self, product_id: int | None) -> None:
        super().__init__(ErrorCode.PRODUCT_NOT_EXIST, f"Product {product_id} does not exist")
        self.product_id = product_id


class RepositoryNotAttached(CatalogError):
    """A read-through accessor was called on an entity built without a reader."""

    def __init__(self, accessor: str) -> None:
        super().__init__(
            ErrorCode.REPOSITORY_NOT_ATTACHED,
            f"{accessor} needs a product reader; build the entity with repository=...",
        )
