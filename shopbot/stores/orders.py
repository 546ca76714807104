import logging
import time
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from ..models.models import Order
from ..utils.constants import ORDERS_KEY
from .storage import LocalStorage, Store

logger = logging.getLogger(__name__)


class OrderStore(Store):
    """Local mirror of orders created on the backend."""

    def __init__(self, storage: LocalStorage):
        super().__init__(storage)
        self.orders: List[Order] = [Order.from_dict(d) for d in self.load_list(ORDERS_KEY)]

    def _persist(self) -> None:
        self.storage.save(ORDERS_KEY, [o.to_dict() for o in self.orders])

    def place(self, order: Order) -> Order:
        if not order.id:
            # Backend gave us nothing to key on
            order.id = str(int(time.time() * 1000))
        if not order.created_at:
            order.created_at = datetime.now(timezone.utc).isoformat()
        self.orders.insert(0, order)
        self._persist()
        return order

    def get(self, order_id: str) -> Optional[Order]:
        return next((o for o in self.orders if o.id == order_id), None)

    def patch(self, order_id: str, fields: Dict[str, Any]) -> Optional[Order]:
        order = self.get(order_id)
        if not order:
            logger.warning(f"Order {order_id} not found in local mirror")
            return None
        if 'status' in fields:
            order.status = fields['status']
        if 'paymentStatus' in fields:
            order.payment_status = fields['paymentStatus']
        self._persist()
        return order

    def history(self) -> List[Order]:
        return sorted(self.orders, key=lambda o: o.created_at, reverse=True)

    @property
    def count(self) -> int:
        return len(self.orders)
