"""Consolidated data layer tests.

Exercises the product aggregate end to end: a draft built from a form is
saved, reloaded in a fresh session, its SKUs replaced, and one SKU edited.
"""

import json

import pytest
from sqlalchemy import StaticPool
from sqlmodel import Session, SQLModel, create_engine
from loguru import logger
from typer.testing import CliRunner

from src.catalog.cli import app
from src.catalog.core.services.database.db_manage import register_tables
from src.catalog.entities.product import (
    ProductEntity,
    ProductForm,
    ProductRepository,
    ProductStatus,
    ProductTagTable,
)
from src.catalog.runtime.config.config_data import ConfigData
from src.catalog.runtime.context import with_context
from tests.fixtures.core import reset_logger, sku_input


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    register_tables()
    SQLModel.metadata.create_all(engine)
    yield engine
    engine.dispose()


class TestProductRoundTrip:
    """Test persistence across sessions."""

    def test_save_then_by_id_round_trips_simple_fields(self, engine):
        with Session(engine) as session:
            product = ProductEntity(
                name="Canvas Tote",
                brief="Organic cotton",
                cover="tote.png",
                category_id=4,
                merchant_id=9,
                status=ProductStatus.LISTED,
            )
            ProductRepository(session).save(product)
            session.commit()
            product_id = product.id

        with Session(engine) as session:
            loaded = ProductRepository(session).by_id(product_id)

        assert loaded == product
        assert loaded.to_view() == product.to_view()
        assert loaded.status is ProductStatus.LISTED

    def test_form_to_storage_and_back(self, engine):
        with Session(engine) as session:
            tags = [ProductTagTable(name="gift"), ProductTagTable(name="summer")]
            session.add_all(tags)
            session.commit()
            tag_ids = [tag.id for tag in tags]

        form = ProductForm(
            name="Beach Towel",
            merchant_id=9,
            tag_ids=tag_ids,
            skus=[sku_input(101, 201, price=1500), sku_input(102, 201, price=1700)],
        )
        with Session(engine) as session:
            repository = ProductRepository(session)
            product = ProductEntity.from_form(form, repository=repository)
            repository.save(product)
            repository.save_skus(product)
            session.commit()
            product_id = product.id

        with Session(engine) as session:
            repository = ProductRepository(session)
            loaded = repository.by_id(product_id)
            skus = loaded.get_product_skus()

            assert [tag.name for tag in loaded.get_tags()] == ["gift", "summer"]
            assert [(sku.attr_value_ids, sku.price) for sku in skus] == [("101,201", 1500), ("102,201", 1700)]
            for sku in skus:
                assert len(repository.find_sku_attr_maps(sku.id)) == 2


@pytest.mark.usefixtures("restore_logger")
class TestCli:
    """Test the catalog CLI against a temporary SQLite file."""

    def test_init_load_and_show(self, tmp_path):
        override = ConfigData()
        override.database.url = f"sqlite:///{tmp_path / 'catalog.db'}"
        form_file = tmp_path / "product.json"
        form_file.write_text(
            json.dumps(
                {
                    "name": "Wool Scarf",
                    "merchant_id": 3,
                    "skus": [sku_input(7, price=2500).model_dump()],
                }
            )
        )
        runner = CliRunner()

        with with_context(override):
            init = runner.invoke(app, ["init-db"])
            load = runner.invoke(app, ["load-product", str(form_file)])
            show = runner.invoke(app, ["show-product", "1"])
            missing = runner.invoke(app, ["show-product", "99"])

        assert init.exit_code == 0, init.output
        assert load.exit_code == 0, load.output
        assert "Created product 1" in load.output
        assert show.exit_code == 0, show.output
        assert "Wool Scarf" in show.output
        assert "2500" in show.output
        assert missing.exit_code == 1
        assert "PRODUCT_NOT_EXIST" in missing.output

    def test_logging_reaches_live_stderr_after_cli_run(self, tmp_path, capsys):
        override = ConfigData()
        override.database.url = f"sqlite:///{tmp_path / 'catalog.db'}"

        with with_context(override):
            result = CliRunner().invoke(app, ["init-db"])
        assert result.exit_code == 0, result.output

        reset_logger()
        logger.info("catalog still logging")

        err = capsys.readouterr().err
        assert "catalog still logging" in err
        assert "Logging error in Loguru Handler" not in err
