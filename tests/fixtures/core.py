from __future__ import annotations

import sys
from collections.abc import Generator

import pytest
from loguru import logger
from sqlalchemy import StaticPool
from sqlmodel import Session, SQLModel, create_engine

from src.catalog.core.services.database.db_manage import register_tables
from src.catalog.entities.product import (
    AttrInput,
    ProductCategoryTable,
    ProductEntity,
    ProductRepository,
    ProductTagTable,
    SkuInput,
)


@pytest.fixture
def session() -> Generator[Session]:
    """Create a fresh database session for testing."""
    # Each test gets its own in-memory database
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    register_tables()
    SQLModel.metadata.create_all(engine)

    with Session(engine) as session:
        try:
            yield session
        finally:
            session.rollback()
            session.close()
            engine.dispose()


def reset_logger() -> None:
    """Drop every loguru sink and log to whatever ``sys.stderr`` is at write time."""
    logger.remove()
    logger.add(lambda message: sys.stderr.write(message), level="DEBUG")


@pytest.fixture
def restore_logger() -> Generator[None]:
    """Undo sinks added by ``configure_logging`` (e.g. on a CliRunner stream that is closed afterwards)."""
    yield
    reset_logger()


@pytest.fixture
def repository(session: Session) -> ProductRepository:
    return ProductRepository(session)


@pytest.fixture
def category(session: Session) -> ProductCategoryTable:
    row = ProductCategoryTable(name="Shoes", merchant_id=7, sort=1)
    session.add(row)
    session.commit()
    session.refresh(row)
    return row


@pytest.fixture
def tags(session: Session) -> list[ProductTagTable]:
    rows = [
        ProductTagTable(name="new", merchant_id=7),
        ProductTagTable(name="sale", merchant_id=7),
        ProductTagTable(name="eco", merchant_id=7),
    ]
    session.add_all(rows)
    session.commit()
    for row in rows:
        session.refresh(row)
    return rows


@pytest.fixture
def saved_product(repository: ProductRepository, session: Session, category: ProductCategoryTable) -> ProductEntity:
    """A persisted product without tags or SKUs."""
    product = ProductEntity(
        repository=repository,
        name="Trail Runner",
        brief="Lightweight trail shoe",
        cover="https://cdn.example.com/trail.png",
        category_id=category.id,
        merchant_id=7,
    )
    repository.save(product)
    session.commit()
    return product


def sku_input(*value_ids: int, price: int = 1000, show_price: int = 1200, cover: str | None = None) -> SkuInput:
    """Build a SKU input binding one attribute per value id (attr id = position + 1)."""
    return SkuInput(
        cover=cover,
        price=price,
        show_price=show_price,
        attrs=[
            AttrInput(
                attr_id=index + 1,
                attr_name=f"attr-{index + 1}",
                attr_value_id=value_id,
                attr_value_name=f"value-{value_id}",
            )
            for index, value_id in enumerate(value_ids)
        ],
    )
