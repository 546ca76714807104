import json

import httpx
import pytest

from shopbot.api.client import ApiClient, ApiError


async def test_get_products_drops_blank_filters(api, backend):
    backend.on('GET', '/products', json=[{'_id': 'a'}])

    data = await api.get_products({'search': 'mug', 'category': ''})

    assert data == [{'_id': 'a'}]
    request = backend.requests[0]
    assert request.url.params.get('search') == 'mug'
    assert 'category' not in request.url.params


async def test_create_order_posts_json(api, backend):
    backend.on('POST', '/orders', status=201, json={'_id': 'o1'})

    data = await api.create_order({'user': 'u1', 'items': []})

    assert data == {'_id': 'o1'}
    assert json.loads(backend.sent('POST', '/orders')[0].content) == {'user': 'u1', 'items': []}


async def test_update_order_uses_put(api, backend):
    backend.on('PUT', '/orders/o1', json={'_id': 'o1', 'status': 'Processing'})
    await api.update_order('o1', {'status': 'Processing'})
    assert len(backend.sent('PUT', '/orders/o1')) == 1


async def test_error_message_comes_from_backend(api, backend):
    backend.on('POST', '/orders', status=400, json={'message': 'Invalid shipping address'})

    with pytest.raises(ApiError) as excinfo:
        await api.create_order({})

    assert excinfo.value.status == 400
    assert excinfo.value.message == 'Invalid shipping address'


async def test_error_without_message_reports_status(api, backend):
    backend.on('GET', '/orders', status=500, json=['boom'])

    with pytest.raises(ApiError) as excinfo:
        await api.get_orders()

    assert excinfo.value.message == 'HTTP error! status: 500'


async def test_connection_errors_become_api_errors():
    def refuse(request):
        raise httpx.ConnectError("connection refused", request=request)

    api = ApiClient(base_url='http://backend.test/api', transport=httpx.MockTransport(refuse))
    with pytest.raises(ApiError) as excinfo:
        await api.get_categories()
    assert excinfo.value.status is None


async def test_get_orders_ignores_non_list_payload(api, backend):
    backend.on('GET', '/orders', json={'orders': 'nope'})
    assert await api.get_orders() == []


async def test_create_product(api, backend):
    backend.on('POST', '/products', status=201, json={'_id': 'new', 'name': 'Pen'})
    assert (await api.create_product({'name': 'Pen'}))['_id'] == 'new'
