import asyncio
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional, Set

from .api.client import ApiClient, ApiError
from .models.models import Order
from .stores.addresses import AddressStore
from .stores.cart import CartStore
from .stores.orders import OrderStore
from .utils.constants import (
    DEMO_USER_ID, FREE_SHIPPING_THRESHOLD, ORDER_STATUS_DELAY, ORDER_STATUS_UPDATE,
    SHIPPING_FEE, TAX_RATE
)

logger = logging.getLogger(__name__)


@dataclass
class OrderTotals:
    subtotal: float
    shipping: float
    tax: float

    @property
    def total(self) -> float:
        return self.subtotal + self.shipping + self.tax


def shipping_for(subtotal: float) -> float:
    return 0 if subtotal > FREE_SHIPPING_THRESHOLD else SHIPPING_FEE


def calculate_totals(subtotal: float) -> OrderTotals:
    return OrderTotals(subtotal=subtotal, shipping=shipping_for(subtotal), tax=subtotal * TAX_RATE)


class CheckoutState(Enum):
    IDLE = 'idle'
    SUBMITTING = 'submitting'
    PLACED = 'placed'
    FAILED = 'failed'


class CheckoutBlocked(Exception):
    """Raised when an order is submitted before its preconditions hold."""


class CheckoutFlow:
    """Idle -> Submitting -> Placed | Failed for one user's checkout."""

    def __init__(
        self,
        api: ApiClient,
        cart: CartStore,
        addresses: AddressStore,
        orders: OrderStore,
        user_id: str = DEMO_USER_ID,
        status_delay: float = ORDER_STATUS_DELAY,
    ):
        self.api = api
        self.cart = cart
        self.addresses = addresses
        self.orders = orders
        self.user_id = user_id
        self.status_delay = status_delay
        self.state = CheckoutState.IDLE
        self.error: Optional[str] = None
        self.order: Optional[Order] = None
        self.status_task: Optional[asyncio.Task] = None
        self._pending: Set[asyncio.Task] = set()

    @property
    def totals(self) -> OrderTotals:
        return calculate_totals(self.cart.total)

    @property
    def blocked_reason(self) -> Optional[str]:
        if self.state == CheckoutState.SUBMITTING:
            return "Order is already being placed"
        if self.addresses.selected is None:
            return "Please select a delivery address"
        if self.cart.is_empty:
            return "Your cart is empty"
        return None

    @property
    def can_submit(self) -> bool:
        return self.blocked_reason is None

    def build_payload(self) -> Dict[str, Any]:
        return {
            'user': self.user_id,
            'items': [
                {'product': item.id, 'quantity': item.quantity, 'price': item.product.price}
                for item in self.cart.items
            ],
            'shippingAddress': self.addresses.selected.ref,
            'totalAmount': self.totals.total,
            'status': 'Pending',
            'paymentStatus': 'Pending',
        }

    async def submit(self) -> Order:
        reason = self.blocked_reason
        if reason:
            raise CheckoutBlocked(reason)

        self.state = CheckoutState.SUBMITTING
        self.error = None
        payload = self.build_payload()
        logger.info(f"Placing order for {len(payload['items'])} items, total {payload['totalAmount']:.2f}")

        try:
            data = await self.api.create_order(payload)
        except ApiError as e:
            logger.error(f"Order placement error: {e.message}")
            self.error = e.message or "Failed to place order. Please try again."
            self.state = CheckoutState.FAILED
            raise

        order = Order.from_dict(data if isinstance(data, dict) else payload)
        self.order = self.orders.place(order)
        self.cart.clear()
        self.state = CheckoutState.PLACED
        # Fire and forget; nothing cancels it if the user moves on
        self.status_task = asyncio.create_task(self._simulate_status_update(self.order.id))
        self._pending.add(self.status_task)
        self.status_task.add_done_callback(self._pending.discard)
        return self.order

    async def _simulate_status_update(self, order_id: str) -> None:
        await asyncio.sleep(self.status_delay)
        try:
            await self.api.update_order(order_id, ORDER_STATUS_UPDATE)
        except ApiError as e:
            logger.warning(f"Status update for order {order_id} failed, updating local copy only: {e.message}")
        self.orders.patch(order_id, ORDER_STATUS_UPDATE)

    def reset(self) -> None:
        self.state = CheckoutState.IDLE
        self.error = None
        self.order = None
