import json

import pytest

from shopbot.api.client import ApiError
from shopbot.catalog import Catalog, filter_products
from shopbot.utils.constants import DEFAULT_CATEGORIES

DEFAULT_NAMES = [c['name'] for c in DEFAULT_CATEGORIES]


@pytest.fixture
def catalog(api):
    return Catalog(api)


class TestCategories:
    @pytest.mark.parametrize('payload', [
        [{'_id': 'c1', 'name': 'Toys'}],
        {'categories': [{'_id': 'c1', 'name': 'Toys'}]},
        {'data': [{'_id': 'c1', 'name': 'Toys'}]},
    ])
    async def test_accepts_known_shapes(self, catalog, backend, payload):
        backend.on('GET', '/categories', json=payload)
        categories = await catalog.load_categories()
        assert [c.name for c in categories] == ['Toys']

    async def test_unknown_shape_falls_back_to_defaults(self, catalog, backend):
        backend.on('GET', '/categories', json={'items': 'what'})
        categories = await catalog.load_categories()
        assert [c.name for c in categories] == DEFAULT_NAMES

    async def test_http_failure_falls_back_to_defaults(self, catalog, backend):
        backend.on('GET', '/categories', status=503, json={})
        categories = await catalog.load_categories()
        assert [c.name for c in categories] == DEFAULT_NAMES
        assert catalog.error == 'HTTP error! status: 503'


class TestProducts:
    async def test_load_caches_products(self, catalog, backend):
        backend.on('GET', '/products', json=[{'_id': 'a', 'name': 'A', 'price': 3}])

        products = await catalog.load_products()
        assert products[0].name == 'A'

        # Detail lookups are served from the cache
        assert (await catalog.get_product('a')).price == 3
        assert backend.sent('GET', '/products/a') == []

    async def test_failed_load_keeps_previous_list_for_same_query(self, catalog, backend):
        backend.on('GET', '/products', json=[{'_id': 'a', 'name': 'A'}])
        await catalog.load_products(category='')

        backend.on('GET', '/products', status=500, json={'message': 'down'})
        products = await catalog.load_products()

        assert [p.id for p in products] == ['a']
        assert catalog.error == 'down'

    async def test_failed_load_never_returns_another_query(self, catalog, backend):
        backend.on('GET', '/products', json=[{'_id': 'b', 'name': 'Novel', 'category': 'Books'}])
        await catalog.load_products(category='Books')

        backend.on('GET', '/products', status=500, json={'message': 'down'})
        products = await catalog.load_products(search='mug')

        assert products == []
        assert catalog.error == 'down'

        # The Books listing is still served for its own query
        products = await catalog.load_products(category='Books', search='')
        assert [p.id for p in products] == ['b']

    async def test_create_product_is_cached(self, catalog, backend):
        backend.on('POST', '/products', status=201, json={'_id': 'n1', 'name': 'Kettle', 'price': 25})

        product = await catalog.create_product({'name': 'Kettle', 'price': 25})

        assert product.id == 'n1'
        assert json.loads(backend.sent('POST', '/products')[0].content)['name'] == 'Kettle'
        assert (await catalog.get_product('n1')).name == 'Kettle'
        assert backend.sent('GET', '/products/n1') == []

    async def test_get_product_fetches_unknown_ids(self, catalog, backend):
        backend.on('GET', '/products/z', json={'_id': 'z', 'name': 'Zed'})
        assert (await catalog.get_product('z')).name == 'Zed'

    async def test_get_product_propagates_errors(self, catalog, backend):
        with pytest.raises(ApiError):
            await catalog.get_product('missing')

    async def test_related_excludes_current_and_limits(self, catalog, backend, make_product):
        backend.on('GET', '/products', json=[
            {'_id': str(i), 'name': f'P{i}', 'category': 'Home'} for i in range(7)
        ])

        related = await catalog.related(make_product(id='2', category='Home'))

        assert [p.id for p in related] == ['0', '1', '3', '4']
        assert backend.requests[0].url.params['category'] == 'Home'

    async def test_related_tolerates_errors(self, catalog, backend, make_product):
        backend.on('GET', '/products', status=500, json={})
        assert await catalog.related(make_product()) == []


class TestFilterProducts:
    def test_category_rating_and_sort(self, make_product):
        products = [
            make_product(id='a', price=30, category='Home', rating=4.5),
            make_product(id='b', price=10, category='Home', rating=4.8),
            make_product(id='c', price=20, category='Books', rating=5),
            make_product(id='d', price=5, category='Home', rating=2),
        ]

        result = filter_products(products, categories=['Home'], min_rating=4, sort='lowtohigh')
        assert [p.id for p in result] == ['b', 'a']

        result = filter_products(products, sort='hightolow')
        assert [p.id for p in result] == ['a', 'c', 'b', 'd']

    def test_search_is_case_insensitive(self, make_product):
        products = [make_product(id='a', name='Blue Mug'), make_product(id='b', name='Lamp')]
        assert [p.id for p in filter_products(products, search='mug')] == ['a']
