"""CLI commands for browsing the product catalog."""

from __future__ import annotations

import click

from handyman.domain.model.currency import format_price
from handyman.infrastructure.bootstrap import product_repository


@click.command("list")
@click.option("--category", default=None, help="Only show one category.")
def catalog_list(category: str | None) -> None:
    """List the products in the catalog."""
    repo = product_repository()
    products = repo.list_by_category(category) if category else repo.list_all()

    if not products:
        click.echo("No products found.")
        return

    click.echo(f"{'ID':<4} {'Name':<32} {'Category':<10} {'Price':>12} {'Stock':>6}")
    click.echo("-" * 68)
    for p in products:
        stock = str(p.stock) if p.in_stock else "sold"
        click.echo(
            f"{p.id:<4} {p.name:<32} {p.category:<10} {format_price(p.price):>12} {stock:>6}"
        )
