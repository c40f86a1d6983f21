from typing import Any, Dict, List, Optional

import httpx

from src.client.config import API_URL


class ProductsClient:
    """Small httpx wrapper over the products API."""

    def __init__(self, base_url: Optional[str] = None, transport: Optional[httpx.BaseTransport] = None):
        self._client = httpx.Client(base_url=base_url or API_URL or "", transport=transport)

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.close()

    def close(self) -> None:
        self._client.close()

    def _request(self, method: str, url: str, **kwargs) -> Any:
        response = self._client.request(method, url, **kwargs)
        response.raise_for_status()
        return response.json()

    def hello(self) -> str:
        return self._request("GET", "/")

    def list_products(self) -> List[Dict[str, Any]]:
        return self._request("GET", "/products")

    def create_product(self, name, description=None, price=None, img=None) -> Dict[str, Any]:
        payload = {"name": name, "description": description, "price": price, "img": img}
        return self._request("POST", "/products", json=payload)

    def update_product(self, product_id: int, name, description=None, price=None, img=None) -> Dict[str, Any]:
        payload = {"name": name, "description": description, "price": price, "img": img}
        return self._request("PUT", f"/products/{product_id}", json=payload)

    def delete_product(self, product_id: int) -> Dict[str, Any]:
        return self._request("DELETE", f"/products/{product_id}")
