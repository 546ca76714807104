"""HTTP client for the storefront REST backend.

All requests go through a short-lived ``httpx.AsyncClient``. Failures of any
kind (connection errors, non-2xx statuses) surface as ``ApiError`` so that
handlers only need to catch one exception type.
"""

import logging
from typing import Any, Dict, List, Optional

import httpx

from ..utils.constants import BACKEND_URL, REQUEST_TIMEOUT

logger = logging.getLogger(__name__)


class ApiError(Exception):
    """Error talking to the storefront backend."""

    def __init__(self, message: str, status: Optional[int] = None):
        self.message = message
        self.status = status
        super().__init__(message)


class ApiClient:
    def __init__(
        self,
        base_url: str = BACKEND_URL,
        timeout: float = REQUEST_TIMEOUT,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url.rstrip('/')
        self.timeout = timeout
        self.transport = transport

    def _get_client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self.base_url,
            timeout=self.timeout,
            transport=self.transport,
            headers={'Accept': 'application/json'},
        )

    @staticmethod
    def _handle_response(response: httpx.Response) -> Any:
        if response.is_success:
            try:
                return response.json()
            except ValueError as e:
                raise ApiError("Invalid JSON in response", response.status_code) from e

        try:
            error_data = response.json()
        except ValueError:
            error_data = {}
        message = error_data.get('message') if isinstance(error_data, dict) else None
        raise ApiError(message or f"HTTP error! status: {response.status_code}", response.status_code)

    async def _request(self, method: str, path: str, **kwargs) -> Any:
        try:
            async with self._get_client() as client:
                response = await client.request(method, path, **kwargs)
        except httpx.RequestError as e:
            logger.error(f"Backend unavailable for {method} {path}: {e}")
            raise ApiError(f"Network error: {e}") from e
        return self._handle_response(response)

    async def get_products(self, params: Optional[Dict[str, str]] = None) -> Any:
        # Blank filters are left off the query string
        query = {k: v for k, v in (params or {}).items() if v}
        return await self._request('GET', '/products', params=query)

    async def get_product(self, product_id: str) -> Any:
        return await self._request('GET', f'/products/{product_id}')

    async def create_product(self, data: Dict[str, Any]) -> Any:
        return await self._request('POST', '/products', json=data)

    async def get_categories(self) -> Any:
        return await self._request('GET', '/categories')

    async def create_order(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        return await self._request('POST', '/orders', json=payload)

    async def get_orders(self) -> List[Dict[str, Any]]:
        data = await self._request('GET', '/orders')
        return data if isinstance(data, list) else []

    async def update_order(self, order_id: str, fields: Dict[str, Any]) -> Any:
        return await self._request('PUT', f'/orders/{order_id}', json=fields)
