"""CLI commands for the shopping cart.

The ``cart`` group loads a CartService and stores it on the click
context; every command here receives it through ``pass_cart``.
"""

from __future__ import annotations

from functools import update_wrapper

import click

from handyman.application.add_product_to_cart import AddProductToCartHandler
from handyman.application.cart_service import CartService
from handyman.application.dto import CartDTO, CartSummaryDTO
from handyman.application.show_cart import ShowCartHandler
from handyman.domain.exceptions import CartContextError, DomainException
from handyman.domain.model.value_objects import Variants
from handyman.infrastructure.bootstrap import product_repository

CART_KEY = "cart"


def pass_cart(f):
    """Inject the CartService of the enclosing ``cart`` group.

    Raises CartContextError when the command is invoked outside that
    group, since nothing could have loaded a cart for it.
    """

    @click.pass_context
    def new_func(ctx: click.Context, *args, **kwargs):
        service = ctx.obj.get(CART_KEY) if isinstance(ctx.obj, dict) else None
        if not isinstance(service, CartService):
            raise CartContextError(
                f"'{ctx.command_path}' must be run within the cart command group"
            )
        return ctx.invoke(f, service, *args, **kwargs)

    return update_wrapper(new_func, f)


@click.command("add")
@click.option("--product", "product_id", required=True, help="Catalog product ID.")
@click.option("--quantity", default=1, type=int, show_default=True, help="Units to add.")
@click.option("--color", default=None, help="Color variant.")
@click.option("--size", default=None, help="Size variant.")
@click.option("--material", default=None, help="Material variant.")
@pass_cart
def cart_add(
    cart: CartService,
    product_id: str,
    quantity: int,
    color: str | None,
    size: str | None,
    material: str | None,
) -> None:
    """Add a catalog product to the cart."""
    variants = Variants(color=color, size=size, material=material)
    handler = AddProductToCartHandler(cart=cart, product_repo=product_repository())

    before = cart.get_item_quantity(product_id, None if variants.is_empty else variants)
    try:
        in_cart = handler.handle(
            product_id=product_id,
            quantity=quantity,
            variants=None if variants.is_empty else variants,
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product #{product_id} in cart: {in_cart}")
    if in_cart - before < quantity:
        click.echo(f"Quantity limited to the {in_cart} units in stock.")


@click.command("remove")
@click.option("--id", "item_id", required=True, help="Product ID to remove (all variants).")
@pass_cart
def cart_remove(cart: CartService, item_id: str) -> None:
    """Remove a product from the cart."""
    if not any(item.id == item_id for item in cart.state.items):
        raise click.ClickException(f"Product #{item_id} is not in the cart")
    try:
        cart.remove_item(item_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))
    click.echo(f"Product #{item_id} removed from cart.")


@click.command("update")
@click.option("--id", "item_id", required=True, help="Product ID.")
@click.option("--quantity", required=True, type=int, help="New quantity (0 removes).")
@pass_cart
def cart_update(cart: CartService, item_id: str, quantity: int) -> None:
    """Set the quantity of a product in the cart."""
    try:
        cart.update_quantity(item_id, quantity)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if quantity <= 0:
        click.echo(f"Product #{item_id} removed from cart.")
    else:
        click.echo(f"Product #{item_id} quantity updated.")


@click.command("clear")
@pass_cart
def cart_clear(cart: CartService) -> None:
    """Empty the cart."""
    cart.clear_cart()
    click.echo("Cart cleared.")


@click.command("show")
@pass_cart
def cart_show(cart: CartService) -> None:
    """Show the cart contents and totals."""
    dto = ShowCartHandler(cart).handle()
    if dto.is_empty:
        click.echo("Your cart is empty.")
        return
    _display_cart(dto)


@click.command("summary")
@pass_cart
def cart_summary(cart: CartService) -> None:
    """Show subtotal, VAT, shipping and total."""
    _display_summary(ShowCartHandler(cart).summary())


# --- Display helpers ----------------------------------------------------------


def _display_cart(dto: CartDTO) -> None:
    click.echo(f"{dto.total_items} item(s) in cart")
    click.echo()
    click.echo(f"  {'ID':<4} {'Product':<32} {'Qty':>4} {'Price':>12} {'Total':>12}")
    click.echo(f"  {'-'*68}")
    for item in dto.items:
        click.echo(
            f"  {item.product_id:<4} {item.name:<32} {item.quantity:>4} "
            f"{item.unit_price:>12} {item.line_total:>12}"
        )
        if item.original_price:
            click.echo(f"       was {item.original_price}")
        if item.variants:
            click.echo(f"       {item.variants}")
        if item.low_stock:
            click.echo(f"       only {item.stock} available")
    click.echo(f"  {'-'*68}")
    _display_summary(dto.summary)


def _display_summary(summary: CartSummaryDTO) -> None:
    click.echo(f"  {'Subtotal':<20} {summary.subtotal:>16}")
    click.echo(f"  {'VAT (19%)':<20} {summary.tax:>16}")
    click.echo(f"  {'Shipping':<20} {summary.shipping:>16}")
    click.echo(f"  {'Total':<20} {summary.total:>16}")
    if summary.free_shipping_hint:
        click.echo()
        click.echo(f"  {summary.free_shipping_hint}")
