from shopbot.models.models import Category, Order, Product


def test_product_from_backend_document():
    product = Product.from_dict({
        '_id': '64a1', 'name': 'Kettle', 'price': '24.5', 'ratings': 4.2,
        'stock': 3, 'category': 'Kitchen', 'image': 'http://img',
    })
    assert product.id == '64a1'
    assert product.price == 24.5
    assert product.rating == 4.2
    assert product.in_stock


def test_product_malformed_fields_fall_back_to_defaults():
    product = Product.from_dict({'id': 7, 'price': 'free', 'stock': None, 'category': {'name': 'Books'}})
    assert product.id == '7'
    assert product.name == ''
    assert product.price == 0.0
    assert product.stock == 0
    assert product.category == 'Books'
    assert not product.in_stock


def test_category_from_plain_string():
    assert Category.from_dict('Toys').name == 'Toys'


def test_order_from_backend_document():
    order = Order.from_dict({
        '_id': 'o1',
        'items': [{'product': 'p1', 'quantity': 2, 'price': 10}, 'junk'],
        'totalAmount': 29.59,
        'status': 'Pending',
        'orderDate': '2024-03-01T10:00:00Z',
    })
    assert order.id == 'o1'
    assert order.item_count == 2
    assert order.payment_status == 'Pending'
    assert order.created_at == '2024-03-01T10:00:00Z'
