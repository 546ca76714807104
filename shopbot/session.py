from typing import List, Tuple

from .api.client import ApiClient
from .checkout import CheckoutFlow
from .stores.addresses import AddressStore
from .stores.cart import CartStore
from .stores.orders import OrderStore
from .stores.storage import LocalStorage
from .stores.wishlist import WishlistStore
from .utils.constants import ALERT_EMOJIS


class Session:
    """Everything one chat user owns: persisted stores plus a checkout flow.

    Store notices are buffered here and flushed into the next reply.
    """

    def __init__(self, db, user_id: int, api: ApiClient):
        storage = LocalStorage(db, user_id)
        self.user_id = user_id
        self.cart = CartStore(storage)
        self.wishlist = WishlistStore(storage)
        self.addresses = AddressStore(storage)
        self.orders = OrderStore(storage)
        self.checkout = CheckoutFlow(api, self.cart, self.addresses, self.orders)
        self.alerts: List[Tuple[str, str]] = []
        for store in (self.cart, self.wishlist, self.addresses, self.orders):
            store.subscribe(self._on_notice)

    def _on_notice(self, message: str, level: str) -> None:
        self.alerts.append((message, level))

    def drain_alerts(self) -> str:
        text = "\n".join(f"{ALERT_EMOJIS.get(level, '')} {message}" for message, level in self.alerts)
        self.alerts.clear()
        return text
