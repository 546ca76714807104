from typing import List, Optional

from ..models.models import Product
from ..utils.constants import WISHLIST_KEY
from .cart import CartStore
from .storage import LocalStorage, Store


class WishlistStore(Store):
    def __init__(self, storage: LocalStorage):
        super().__init__(storage)
        self.items: List[Product] = [Product.from_dict(d) for d in self.load_list(WISHLIST_KEY)]

    def _persist(self) -> None:
        self.storage.save(WISHLIST_KEY, [product.to_dict() for product in self.items])

    def get(self, product_id: str) -> Optional[Product]:
        return next((p for p in self.items if p.id == product_id), None)

    def contains(self, product_id: str) -> bool:
        return self.get(product_id) is not None

    def add(self, product: Product) -> None:
        if self.contains(product.id):
            self.notify(f"{product.name} is already in wishlist", 'warning')
            return
        self.items.append(product)
        self._persist()
        self.notify(f"Added {product.name} to wishlist!")

    def remove(self, product_id: str) -> None:
        removed = self.get(product_id)
        self.items = [p for p in self.items if p.id != product_id]
        self._persist()
        self.notify(f"Removed {removed.name if removed else 'item'} from wishlist", 'info')

    def toggle(self, product: Product) -> None:
        if self.contains(product.id):
            self.remove(product.id)
        else:
            self.add(product)

    def move_to_cart(self, product_id: str, cart: CartStore) -> None:
        """Add a wishlisted product to the cart; the wishlist entry stays."""
        product = self.get(product_id)
        if product:
            cart.add(product)

    def clear(self) -> None:
        self.items = []
        self._persist()
        self.notify("Wishlist cleared", 'info')

    @property
    def count(self) -> int:
        return len(self.items)
