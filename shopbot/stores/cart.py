from typing import List, Optional

from ..models.models import CartItem, Product
from ..utils.constants import CART_KEY
from .storage import LocalStorage, Store


class CartStore(Store):
    def __init__(self, storage: LocalStorage):
        super().__init__(storage)
        self.items: List[CartItem] = [CartItem.from_dict(d) for d in self.load_list(CART_KEY)]

    def _persist(self) -> None:
        self.storage.save(CART_KEY, [item.to_dict() for item in self.items])

    def get(self, product_id: str) -> Optional[CartItem]:
        return next((item for item in self.items if item.id == product_id), None)

    def contains(self, product_id: str) -> bool:
        return self.get(product_id) is not None

    def add(self, product: Product, quantity: int = 1) -> None:
        if quantity <= 0:
            return
        existing = self.get(product.id)
        if existing:
            existing.quantity += quantity
            self._persist()
            self.notify(f"Added {quantity} more {product.name} to cart!")
        else:
            self.items.append(CartItem(product=product, quantity=quantity))
            self._persist()
            self.notify(f"Added {product.name} to cart!")

    def remove(self, product_id: str) -> None:
        removed = self.get(product_id)
        self.items = [item for item in self.items if item.id != product_id]
        self._persist()
        self.notify(f"Removed {removed.product.name if removed else 'item'} from cart", 'info')

    def set_quantity(self, product_id: str, quantity: int) -> None:
        item = self.get(product_id)
        name = item.product.name if item else 'item'
        if quantity <= 0:
            self.items = [i for i in self.items if i.id != product_id]
            self._persist()
            self.notify(f"Removed {name} from cart", 'info')
            return
        if item:
            item.quantity = quantity
            self._persist()
        self.notify(f"Updated {name} quantity to {quantity}", 'info')

    def clear(self) -> None:
        self.items = []
        self._persist()
        self.notify("Cart cleared", 'info')

    @property
    def total(self) -> float:
        return sum(item.subtotal for item in self.items)

    @property
    def count(self) -> int:
        return sum(item.quantity for item in self.items)

    @property
    def is_empty(self) -> bool:
        return not self.items
