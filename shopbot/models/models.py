from dataclasses import dataclass, field, asdict
from typing import Any, Dict, List, Optional


def _to_float(value: Any, default: float = 0.0) -> float:
    try:
        return float(value)
    except (TypeError, ValueError):
        return default


def _to_int(value: Any, default: int = 0) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


def _to_str(value: Any) -> str:
    if value is None:
        return ''
    if isinstance(value, dict):
        # Populated references come back as sub-documents
        return str(value.get('name') or value.get('_id') or '')
    return str(value)


@dataclass
class Product:
    id: str
    name: str
    price: float
    description: str = ''
    image: str = ''
    category: str = ''
    rating: float = 0.0
    stock: int = 0

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Product':
        """Build a product from a backend document, coercing bad fields to defaults."""
        if not isinstance(data, dict):
            data = {}
        return cls(
            id=_to_str(data.get('_id') or data.get('id')),
            name=_to_str(data.get('name')),
            price=_to_float(data.get('price')),
            description=_to_str(data.get('description')),
            image=_to_str(data.get('image')),
            category=_to_str(data.get('category')),
            rating=_to_float(data.get('ratings', data.get('rating'))),
            stock=_to_int(data.get('stock')),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            '_id': self.id,
            'name': self.name,
            'price': self.price,
            'description': self.description,
            'image': self.image,
            'category': self.category,
            'ratings': self.rating,
            'stock': self.stock,
        }

    @property
    def in_stock(self) -> bool:
        return self.stock > 0


@dataclass
class Category:
    id: str
    name: str
    image: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Category':
        if not isinstance(data, dict):
            return cls(id='', name=_to_str(data))
        return cls(
            id=_to_str(data.get('_id') or data.get('id')),
            name=_to_str(data.get('name')),
            image=data.get('image'),
        )


@dataclass
class CartItem:
    product: Product
    quantity: int

    @property
    def id(self) -> str:
        return self.product.id

    @property
    def subtotal(self) -> float:
        return self.product.price * self.quantity

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'CartItem':
        return cls(product=Product.from_dict(data), quantity=max(_to_int(data.get('quantity'), 1), 1))

    def to_dict(self) -> Dict[str, Any]:
        return {**self.product.to_dict(), 'quantity': self.quantity}


ADDRESS_FIELDS = ('fullName', 'street', 'city', 'state', 'zipCode', 'country', 'phone')


@dataclass
class Address:
    id: str
    full_name: str
    street: str
    city: str
    state: str
    zip_code: str
    country: str = 'USA'
    phone: str = ''
    is_default: bool = False
    server_id: Optional[str] = None

    @property
    def ref(self) -> str:
        """Identifier sent to the backend: the server id when one was assigned."""
        return self.server_id or self.id

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Address':
        return cls(
            id=_to_str(data.get('id') or data.get('_id')),
            full_name=_to_str(data.get('fullName')),
            street=_to_str(data.get('street')),
            city=_to_str(data.get('city')),
            state=_to_str(data.get('state')),
            zip_code=_to_str(data.get('zipCode')),
            country=_to_str(data.get('country')) or 'USA',
            phone=_to_str(data.get('phone')),
            is_default=bool(data.get('isDefault', False)),
            server_id=data.get('_id'),
        )

    def to_dict(self) -> Dict[str, Any]:
        data = {
            'id': self.id,
            'fullName': self.full_name,
            'street': self.street,
            'city': self.city,
            'state': self.state,
            'zipCode': self.zip_code,
            'country': self.country,
            'phone': self.phone,
            'isDefault': self.is_default,
        }
        if self.server_id:
            data['_id'] = self.server_id
        return data


@dataclass
class OrderItem:
    product: str
    quantity: int
    price: float

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'OrderItem':
        return cls(
            product=_to_str(data.get('product')),
            quantity=_to_int(data.get('quantity'), 1),
            price=_to_float(data.get('price')),
        )


@dataclass
class Order:
    id: str
    items: List[OrderItem] = field(default_factory=list)
    shipping_address: str = ''
    total_amount: float = 0.0
    status: str = 'Pending'
    payment_status: str = 'Pending'
    created_at: str = ''
    user: str = ''

    @property
    def item_count(self) -> int:
        return sum(item.quantity for item in self.items)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Order':
        items = data.get('items')
        return cls(
            id=_to_str(data.get('_id') or data.get('id')),
            items=[OrderItem.from_dict(i) for i in items if isinstance(i, dict)] if isinstance(items, list) else [],
            shipping_address=_to_str(data.get('shippingAddress')),
            total_amount=_to_float(data.get('totalAmount')),
            status=_to_str(data.get('status')) or 'Pending',
            payment_status=_to_str(data.get('paymentStatus')) or 'Pending',
            created_at=_to_str(data.get('createdAt') or data.get('orderDate')),
            user=_to_str(data.get('user')),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            '_id': self.id,
            'user': self.user,
            'items': [asdict(item) for item in self.items],
            'shippingAddress': self.shipping_address,
            'totalAmount': self.total_amount,
            'status': self.status,
            'paymentStatus': self.payment_status,
            'createdAt': self.created_at,
        }
