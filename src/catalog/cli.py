"""Catalog CLI: schema setup and product inspection/import."""

from pathlib import Path

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from src.catalog.core.errors import ProductNotFound
from src.catalog.core.services.database.db_session import DbSessionService
from src.catalog.entities.product import ProductEntity, ProductForm, ProductRepository
from src.catalog.runtime.init_db import init_db
from src.catalog.runtime.logging_setup import configure_logging

console = Console()

app = typer.Typer(
    help="🛒 Product catalog data tools",
    no_args_is_help=True,
    rich_markup_mode="rich",
)


@app.callback()
def setup() -> None:
    configure_logging()


@app.command("init-db")
def init_db_command() -> None:
    """Create all catalog tables."""
    init_db()
    console.print("[green]✅ Catalog tables created[/green]")


@app.command("load-product")
def load_product(
    form_file: Path = typer.Argument(..., exists=True, dir_okay=False, help="JSON product form"),
) -> None:
    """Create a product, its tag links and SKUs from a JSON form."""
    try:
        form = ProductForm.model_validate_json(form_file.read_text())
    except ValidationError as e:
        console.print(f"[red]❌ Invalid product form: {escape(str(e))}[/red]")
        raise typer.Exit(code=1) from e

    with DbSessionService().session_scope() as session:
        repository = ProductRepository(session)
        product = ProductEntity.from_form(form, repository=repository)
        repository.save(product)
        repository.save_skus(product)
        product_id = product.id

    console.print(f"[green]✅ Created product {product_id}[/green]")


@app.command("show-product")
def show_product(product_id: int = typer.Argument(..., help="Product id")) -> None:
    """Show a product with its category, tags and active SKUs."""
    try:
        _render_product(product_id)
    except ProductNotFound as e:
        console.print(f"[red]❌ {escape(str(e))}[/red]")
        raise typer.Exit(code=1) from e


def _render_product(product_id: int) -> None:
    with DbSessionService().session_scope() as session:
        repository = ProductRepository(session)
        product = repository.by_id(product_id)
        view = product.to_view()
        category = product.get_category()
        tags = product.get_tags()

        console.print(f"[bold]{escape(view.name)}[/bold] (#{view.id}) status={product.status.name}")
        console.print(f"Category: {category.name if category else '-'}")
        console.print(f"Tags: {', '.join(tag.name for tag in tags) or '-'}")

        table = Table(title="Active SKUs")
        table.add_column("ID", style="cyan")
        table.add_column("Signature", style="magenta")
        table.add_column("Price", style="green", justify="right")
        table.add_column("Show price", style="green", justify="right")
        table.add_column("Attributes", style="blue")
        for sku in product.get_product_skus():
            bindings = repository.find_sku_attr_maps(sku.id)
            table.add_row(
                str(sku.id),
                sku.attr_value_ids,
                str(sku.price),
                str(sku.show_price),
                ", ".join(f"{b.attr_name}={b.attr_value_name}" for b in bindings),
            )
        console.print(table)


def main() -> None:
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
