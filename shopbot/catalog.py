import logging
from typing import Dict, Iterable, List, Optional

from .api.client import ApiClient, ApiError
from .models.models import Category, Product
from .utils.constants import DEFAULT_CATEGORIES

logger = logging.getLogger(__name__)


def _extract_categories(data) -> Optional[list]:
    if isinstance(data, list):
        return data
    if isinstance(data, dict):
        for key in ('categories', 'data'):
            if isinstance(data.get(key), list):
                return data[key]
    return None


def filter_products(
    products: Iterable[Product],
    categories: Optional[List[str]] = None,
    min_rating: Optional[float] = None,
    sort: Optional[str] = None,
    search: Optional[str] = None,
) -> List[Product]:
    """Client-side filtering and sorting of an already fetched product list."""
    filtered = list(products)
    if categories:
        filtered = [p for p in filtered if p.category in categories]
    if min_rating:
        filtered = [p for p in filtered if p.rating >= min_rating]
    if search:
        needle = search.lower()
        filtered = [p for p in filtered if needle in p.name.lower()]
    if sort == 'lowtohigh':
        filtered.sort(key=lambda p: p.price)
    elif sort == 'hightolow':
        filtered.sort(key=lambda p: p.price, reverse=True)
    return filtered


class Catalog:
    """Products and categories fetched from the backend, cached in memory."""

    def __init__(self, api: ApiClient):
        self.api = api
        self._listings: Dict[tuple, List[Product]] = {}
        self.categories: List[Category] = []
        self.error: Optional[str] = None
        self._by_id: Dict[str, Product] = {}

    def _remember(self, products: Iterable[Product]) -> None:
        for product in products:
            if product.id:
                self._by_id[product.id] = product

    async def load_products(self, **params: str) -> List[Product]:
        """Fetch a product listing.

        Listings are cached per query. When the backend fails, the last
        listing for the same query is returned, or an empty list if that
        query never loaded.
        """
        key = tuple(sorted((k, v) for k, v in params.items() if v))
        try:
            data = await self.api.get_products(params)
        except ApiError as e:
            logger.error(f"Failed to fetch products: {e.message}")
            self.error = e.message
            return list(self._listings.get(key, []))
        self.error = None
        products = [Product.from_dict(d) for d in data] if isinstance(data, list) else []
        self._listings[key] = products
        self._remember(products)
        return products

    async def load_categories(self) -> List[Category]:
        try:
            data = await self.api.get_categories()
        except ApiError as e:
            logger.error(f"Failed to fetch categories: {e.message}")
            self.error = e.message
            data = None
        raw = _extract_categories(data)
        if raw is None:
            if data is not None:
                logger.warning("Unexpected categories format, using default categories")
            raw = DEFAULT_CATEGORIES
        self.categories = [Category.from_dict(c) for c in raw]
        return self.categories

    async def get_product(self, product_id: str) -> Product:
        cached = self._by_id.get(product_id)
        if cached:
            return cached
        product = Product.from_dict(await self.api.get_product(product_id))
        self._remember([product])
        return product

    async def related(self, product: Product, limit: int = 4) -> List[Product]:
        if not product.category:
            return []
        try:
            data = await self.api.get_products({'category': product.category})
        except ApiError as e:
            logger.error(f"Error fetching related products: {e.message}")
            return []
        if not isinstance(data, list):
            return []
        related = [p for p in (Product.from_dict(d) for d in data) if p.id != product.id]
        self._remember(related)
        return related[:limit]

    async def create_product(self, data: dict) -> Product:
        product = Product.from_dict(await self.api.create_product(data))
        self._remember([product])
        return product
