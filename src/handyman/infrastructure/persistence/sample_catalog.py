"""In-memory ProductRepository seeded with the storefront's sample catalog.

There is no product backend: the storefront ships a hardcoded list of
artisanal products, reproduced here.
"""

from __future__ import annotations

from handyman.domain.model.product import Product
from handyman.domain.repository.product_repository import ProductRepository

SAMPLE_PRODUCTS: tuple[Product, ...] = (
    Product(
        id="1",
        name="Gorra Artesanal Bordada a Mano",
        price=45000,
        original_price=60000,
        category="Gorras",
        stock=3,
        sku="GOR-001",
        image="/img/gorras/gorro1.webp",
        image_alt="Gorra artesanal con bordado tradicional",
        colors=("Rojo", "Azul", "Negro"),
    ),
    Product(
        id="2",
        name="Muñeco de Trapo Tradicional",
        price=35000,
        category="Muñecos",
        stock=8,
        sku="MUN-002",
        image="/img/munecos/muneco1.webp",
        image_alt="Muñeco de trapo hecho a mano con materiales naturales",
    ),
    Product(
        id="3",
        name="Pintura Acrílica sobre Lienzo",
        price=120000,
        category="Pinturas",
        stock=2,
        sku="PIN-003",
        image="/img/pinturas/pintura1.webp",
        image_alt="Pintura artística acrílica con paisaje montañoso",
    ),
    Product(
        id="4",
        name="Poncho de Lana Tejido",
        price=85000,
        category="Ponchos",
        stock=0,
        sku="PON-004",
        image="/img/ponchos/poncho1.webp",
        image_alt="Poncho de lana tejido con patrones geométricos",
    ),
    Product(
        id="5",
        name="Sweater de Alpaca Premium",
        price=150000,
        original_price=180000,
        category="Sweaters",
        stock=12,
        sku="SWE-005",
        image="/img/sweaters/sueter1.webp",
        image_alt="Sweater de alpaca con diseño contemporáneo",
        sizes=("S", "M", "L"),
        materials=("Alpaca", "Alpaca y algodón"),
    ),
    Product(
        id="6",
        name="Gorra de Cuero Natural",
        price=55000,
        category="Gorras",
        stock=6,
        sku="GOR-006",
        image="/img/gorras/gorro2.webp",
        image_alt="Gorra de cuero curtido naturalmente",
    ),
)


class InMemoryProductRepository(ProductRepository):

    def __init__(self, products: tuple[Product, ...] | list[Product] = SAMPLE_PRODUCTS) -> None:
        self._store: dict[str, Product] = {p.id: p for p in products}

    def get_by_id(self, product_id: str) -> Product | None:
        return self._store.get(product_id)

    def list_all(self) -> list[Product]:
        return list(self._store.values())

    def list_by_category(self, category: str) -> list[Product]:
        return [
            p for p in self._store.values()
            if p.category.lower() == category.lower()
        ]
