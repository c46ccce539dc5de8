import asyncio
from pathlib import Path

import click

from handyman.infrastructure.bootstrap import DEFAULT_DATA_DIR, cart_service
from handyman.infrastructure.cli.cart_commands import (
    CART_KEY,
    cart_add,
    cart_clear,
    cart_remove,
    cart_show,
    cart_summary,
    cart_update,
)
from handyman.infrastructure.cli.catalog_commands import catalog_list
from handyman.infrastructure.logging import configure_logging, get_logger

logger = get_logger(__name__)


@click.group()
@click.option(
    "--data-dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=DEFAULT_DATA_DIR,
    show_default=True,
    help="Directory holding the local cart store.",
)
@click.option("--log-level", default=None, help="Overrides the LOG_LEVEL env var.")
@click.pass_context
def cli(ctx: click.Context, data_dir: Path, log_level: str | None) -> None:
    """Handyman — artisanal storefront cart"""
    configure_logging(log_level)
    ctx.ensure_object(dict)
    ctx.obj["data_dir"] = data_dir


@cli.group()
def catalog() -> None:
    """Browse the product catalog."""


@cli.group()
@click.pass_context
def cart(ctx: click.Context) -> None:
    """Manage the shopping cart."""
    service = cart_service(ctx.obj["data_dir"])
    ctx.call_on_close(service.close)
    asyncio.run(service.load_saved_cart())
    logger.debug("Cart loaded with %d item(s)", service.state.total_items)
    ctx.obj[CART_KEY] = service


# Register subcommands
catalog.add_command(catalog_list)
cart.add_command(cart_add)
cart.add_command(cart_clear)
cart.add_command(cart_remove)
cart.add_command(cart_show)
cart.add_command(cart_summary)
cart.add_command(cart_update)
