"""
HelloWebAPI Backend — Product Service
======================================

What:  Read access to the static product catalog.
How:   Holds an ordered, immutable tuple of Product records and answers
       list, filter-by-name and get-by-id queries with linear scans.
Who:   Called by the product route handlers and the health check.

Catalog invariants:
    - Order is the declared order; every query preserves it.
    - Ids are NOT unique (four "Hammer" rows). Lookup by id returns the
      first match in list order.
    - Nothing mutates the catalog after import, so the service is safe to
      share across concurrent requests without locking.
"""

import logging
from decimal import Decimal
from typing import List, Optional, Sequence, Tuple

from hellowebapi.exceptions import NotFoundError
from hellowebapi.models.product import Product

logger = logging.getLogger(__name__)

HAMMER = "Hammer"

CATALOG: Tuple[Product, ...] = (
    Product(id=1, name="Tomato Soup", category="Groceries", price=Decimal("1")),
    Product(id=2, name="Yo-yo", category="Toys", price=Decimal("3.75")),
    Product(id=3, name=HAMMER, category="Hardware", price=Decimal("16.99")),
    Product(id=4, name=HAMMER, category="Hardware", price=Decimal("16.99")),
    Product(id=5, name=HAMMER, category="Hardware", price=Decimal("16.99")),
    Product(id=6, name=HAMMER, category="Hardware", price=Decimal("16.99")),
)


class ProductService:
    """
    Query layer over a fixed product sequence.

    Args:
        products: Records to serve, in order. Defaults to CATALOG.
    """

    def __init__(self, products: Sequence[Product] = CATALOG):
        self._products: Tuple[Product, ...] = tuple(products)

    def __len__(self) -> int:
        return len(self._products)

    def list_products(self) -> List[Product]:
        return list(self._products)

    def list_by_name(self, name: str) -> List[Product]:
        """Products whose name equals `name` exactly (case-sensitive)."""
        return [p for p in self._products if p.name == name]

    def list_hammer_products(self) -> List[Product]:
        return self.list_by_name(HAMMER)

    def find_product(self, product_id: int) -> Optional[Product]:
        return next((p for p in self._products if p.id == product_id), None)

    def get_product(self, product_id: int) -> Product:
        """
        First product with the given id.

        Raises:
            NotFoundError: No product has this id.
        """
        product = self.find_product(product_id)
        if product is None:
            logger.info("Product %d not found", product_id)
            raise NotFoundError(resource="Product", resource_id=str(product_id))
        return product


# Singleton instance used by the routes
product_service = ProductService()
