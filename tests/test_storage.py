from shopbot.models.models import Order
from shopbot.stores.orders import OrderStore
from shopbot.stores.storage import LocalStorage


class TestLocalStorage:
    def test_round_trips_json(self, db):
        storage = LocalStorage(db, 1)
        storage.save('cart', [{'_id': 'a', 'quantity': 2}])
        assert storage.load('cart', []) == [{'_id': 'a', 'quantity': 2}]

    def test_missing_key_returns_default(self, db):
        assert LocalStorage(db, 1).load('wishlist', []) == []

    def test_users_are_isolated(self, db):
        LocalStorage(db, 1).save('cart', ['x'])
        assert LocalStorage(db, 2).load('cart', []) == []

    def test_database_error_on_read_falls_back(self, db):
        db.fail_reads = True
        assert LocalStorage(db, 1).load('cart', []) == []

    def test_invalid_json_falls_back(self, db):
        db.items[(1, 'cart')] = 'not json'
        assert LocalStorage(db, 1).load('cart', []) == []

    def test_database_error_on_write_is_swallowed(self, db):
        db.fail_writes = True
        LocalStorage(db, 1).save('cart', [1])
        assert (1, 'cart') not in db.items


class TestOrderStore:
    def test_place_prepends_and_persists(self, db, storage):
        orders = OrderStore(storage)
        orders.place(Order(id='o1', created_at='2024-01-01T00:00:00'))
        orders.place(Order(id='o2', created_at='2024-01-02T00:00:00'))

        assert [o.id for o in orders.orders] == ['o2', 'o1']
        assert [o['_id'] for o in db.stored(42, 'orders')] == ['o2', 'o1']

    def test_place_assigns_temporary_id(self, storage):
        order = OrderStore(storage).place(Order(id=''))
        assert order.id.isdigit()
        assert order.created_at

    def test_patch_updates_status(self, storage):
        orders = OrderStore(storage)
        orders.place(Order(id='o1'))

        orders.patch('o1', {'status': 'Processing', 'paymentStatus': 'Paid'})

        assert orders.get('o1').status == 'Processing'
        assert orders.get('o1').payment_status == 'Paid'

    def test_patch_unknown_order(self, storage):
        assert OrderStore(storage).patch('missing', {'status': 'Shipped'}) is None

    def test_history_is_newest_first(self, storage):
        orders = OrderStore(storage)
        orders.place(Order(id='new', created_at='2024-05-01T00:00:00'))
        orders.place(Order(id='old', created_at='2023-05-01T00:00:00'))

        assert [o.id for o in orders.history()] == ['new', 'old']

    def test_malformed_mirror_is_ignored(self, db):
        db.items[(42, 'orders')] = '{"unexpected": "shape"}'
        assert OrderStore(LocalStorage(db, 42)).count == 0
