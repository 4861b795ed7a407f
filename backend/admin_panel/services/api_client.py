from __future__ import annotations
"""Thin synchronous client for the remote PG-management API.

All panel operations go through ``ApiClient.request``; it attaches the bearer
token from the session context and maps failures onto the panel's taxonomy:

  transport failure / timeout           -> NetworkError
  non-2xx with a JSON ``message``       -> ApiError(message, status)
  non-2xx without a structured message  -> NetworkError
"""
import logging
from typing import Any, Callable, Dict, Optional

import httpx

from admin_panel.errors import ApiError, NetworkError

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 10.0


def _error_message(resp: httpx.Response) -> Optional[str]:
    try:
        payload = resp.json()
    except ValueError:
        return None
    if isinstance(payload, dict):
        message = payload.get('message')
        if isinstance(message, str) and message.strip():
            return message
    return None


class ApiClient:
    def __init__(
        self,
        base_url: str,
        *,
        token_provider: Optional[Callable[[], Optional[str]]] = None,
        timeout: float = DEFAULT_TIMEOUT,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        self.token_provider = token_provider
        self._client = httpx.Client(base_url=base_url, timeout=timeout, transport=transport)

    def close(self):
        self._client.close()

    def _headers(self) -> Dict[str, str]:
        headers = {'Accept': 'application/json'}
        token = self.token_provider() if self.token_provider else None
        if token:
            headers['Authorization'] = f'Bearer {token}'
        return headers

    def request(self, method: str, path: str, *, params: Optional[Dict[str, Any]] = None, json: Any = None) -> Dict[str, Any]:
        if params:
            params = {k: v for k, v in params.items() if v is not None and v != ''}
        try:
            resp = self._client.request(method, path, params=params, json=json, headers=self._headers())
        except httpx.HTTPError as exc:
            logger.warning('remote api %s %s unreachable: %s', method, path, exc)
            raise NetworkError('Remote API unreachable, please retry') from exc

        if resp.status_code >= 400:
            message = _error_message(resp)
            logger.warning('remote api %s %s -> %s', method, path, resp.status_code)
            if message is None:
                raise NetworkError(f'Remote API returned status {resp.status_code}')
            raise ApiError(message, resp.status_code, payload=resp.json())

        if resp.status_code == 204 or not resp.content:
            return {}
        try:
            payload = resp.json()
        except ValueError as exc:
            raise NetworkError('Remote API returned non-JSON data') from exc
        return payload if isinstance(payload, dict) else {'data': payload}

    def get(self, path: str, params: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        return self.request('GET', path, params=params)

    def post(self, path: str, json: Any = None) -> Dict[str, Any]:
        return self.request('POST', path, json=json)

    def patch(self, path: str, json: Any = None) -> Dict[str, Any]:
        return self.request('PATCH', path, json=json)

    def delete(self, path: str) -> Dict[str, Any]:
        return self.request('DELETE', path)


def unwrap(payload: Dict[str, Any]) -> Any:
    """Return ``payload['data']`` for ``{success, data}`` envelopes, else the payload."""
    if isinstance(payload, dict) and 'data' in payload:
        return payload['data']
    return payload

__all__ = ['ApiClient', 'unwrap', 'DEFAULT_TIMEOUT']
