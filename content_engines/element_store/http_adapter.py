"""HTTP store adapter speaking the ``/api/<kind>`` REST contract."""
from __future__ import annotations

import logging
from typing import Any, Dict, List, Mapping, Optional, Sequence, Union

import httpx

from content_engines.config import runtime_config
from content_engines.elements.errors import (
    ElementValidationError,
    NotFoundError,
    ReorderError,
    StoreError,
)
from content_engines.elements.models import BaseCardElement, ElementKind, element_model_for, strip_server_fields
from content_engines.elements.registry import resolve_kind
from content_engines.element_store.repository import OrderedRef

logger = logging.getLogger(__name__)


def _error_message(resp: httpx.Response) -> str:
    try:
        body = resp.json()
    except ValueError:
        return resp.text or f"HTTP {resp.status_code}"
    if isinstance(body, dict):
        detail = body.get("detail", body)
        if isinstance(detail, dict) and isinstance(detail.get("error"), dict):
            return detail["error"].get("message") or f"HTTP {resp.status_code}"
        if isinstance(detail, str):
            return detail
    return f"HTTP {resp.status_code}"


class HttpElementStore:
    def __init__(
        self,
        kind: Union[ElementKind, str],
        base_url: Optional[str] = None,
        client: Optional[httpx.AsyncClient] = None,
        timeout: Optional[float] = None,
    ) -> None:
        self.kind = resolve_kind(kind)
        self._model = element_model_for(self.kind)
        self._base_url = (base_url or runtime_config.get_elements_api_base_url()).rstrip("/")
        self._client = client
        self._timeout = timeout if timeout is not None else runtime_config.get_elements_http_timeout()

    @property
    def base_url(self) -> str:
        return self._base_url

    @property
    def path(self) -> str:
        return f"/api/{self.kind.value}"

    async def _request(self, method: str, url: str, **kwargs: Any) -> httpx.Response:
        try:
            if self._client is not None:
                return await self._client.request(method, url, **kwargs)
            async with httpx.AsyncClient(base_url=self._base_url, timeout=self._timeout) as client:
                return await client.request(method, url, **kwargs)
        except httpx.HTTPError as exc:
            logger.warning("%s %s failed: %s", method, url, exc)
            raise StoreError(f"{self.kind.value} store unreachable: {exc}") from exc

    def _raise_for_status(self, resp: httpx.Response, element_id: Optional[str] = None) -> None:
        if resp.status_code < 400:
            return
        if resp.status_code == 400:
            try:
                body = resp.json()
            except ValueError:
                body = {}
            errors = body.get("errors") if isinstance(body, dict) else None
            if isinstance(errors, dict):
                raise ElementValidationError({str(k): str(v) for k, v in errors.items()})
            raise StoreError(_error_message(resp))
        if resp.status_code == 404 and element_id is not None:
            raise NotFoundError(self.kind.value, element_id)
        if resp.status_code == 409:
            raise ReorderError(_error_message(resp))
        raise StoreError(_error_message(resp), details={"status_code": resp.status_code})

    def _parse(self, data: Any) -> BaseCardElement:
        try:
            return self._model.model_validate(data)
        except ValueError as exc:
            raise StoreError(f"malformed {self.kind.value} record from store: {exc}") from exc

    async def list(self) -> List[BaseCardElement]:
        resp = await self._request("GET", self.path)
        self._raise_for_status(resp)
        items = [self._parse(item) for item in resp.json()]
        return sorted(items, key=lambda item: item.order)

    async def create(self, payload: Mapping[str, Any]) -> BaseCardElement:
        resp = await self._request("POST", self.path, json=strip_server_fields(payload))
        self._raise_for_status(resp)
        return self._parse(resp.json())

    async def update(self, element_id: str, partial: Mapping[str, Any]) -> BaseCardElement:
        resp = await self._request("PATCH", f"{self.path}/{element_id}", json=strip_server_fields(partial))
        self._raise_for_status(resp, element_id=element_id)
        return self._parse(resp.json())

    async def delete(self, element_id: str) -> None:
        resp = await self._request("DELETE", f"{self.path}/{element_id}")
        self._raise_for_status(resp, element_id=element_id)

    async def bulk_reorder(self, sequence: Sequence[OrderedRef]) -> None:
        body: Dict[str, Any] = {"items": [{"id": item.id, "order": item.order} for item in sequence]}
        resp = await self._request("PUT", f"{self.path}/order", json=body)
        self._raise_for_status(resp)
