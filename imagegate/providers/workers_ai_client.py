# =============================================================================
# imagegate/providers/workers_ai_client.py - Cloudflare Workers AI REST client
# =============================================================================
# POST {base}/accounts/{account_id}/ai/run/{model_ref} with a bearer token.
# Diffusion models answer with raw PNG bytes; FLUX answers with a JSON envelope
# {"success": true, "result": {"image": "<base64>"}}.
# All failures surface as ProviderError so the batch fails as a unit.
# =============================================================================

from typing import Any

import httpx

from imagegate.core.config import Settings, get_settings
from imagegate.core.errors import ProviderError
from imagegate.core.security import require_cloudflare_credentials
from imagegate.providers.base import BaseImageProvider

BINARY_CONTENT_TYPES = ("image/", "application/octet-stream")


def _first_error_message(data: dict) -> str:
    errors = data.get("errors") or []
    if errors and isinstance(errors[0], dict) and errors[0].get("message"):
        return str(errors[0]["message"])
    return "unknown error"


class WorkersAIClient(BaseImageProvider):
    def __init__(
        self,
        settings: Settings | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._settings = settings or get_settings()
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    async def _get_client(self) -> httpx.AsyncClient:
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                timeout=self._settings.request_timeout,
                transport=self._transport,
            )
        return self._client

    async def close(self) -> None:
        if self._client and not self._client.is_closed:
            await self._client.aclose()
            self._client = None

    def _run_url(self, account_id: str, model_ref: str) -> str:
        base = self._settings.cloudflare_base_url.rstrip("/")
        return f"{base}/accounts/{account_id}/ai/run/{model_ref}"

    async def run(self, model_ref: str, params: dict) -> Any:
        account_id, token = require_cloudflare_credentials(self._settings)
        client = await self._get_client()
        try:
            r = await client.post(
                self._run_url(account_id, model_ref),
                headers={"Authorization": f"Bearer {token}"},
                json=params,
            )
            r.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise ProviderError(
                f"Workers AI error {e.response.status_code}: {(e.response.text or '')[:500]}"
            ) from e
        except httpx.RequestError as e:
            raise ProviderError(f"Workers AI unreachable: {e!s}") from e

        content_type = r.headers.get("content-type", "").lower()
        if content_type.startswith(BINARY_CONTENT_TYPES):
            return r.content
        try:
            data = r.json()
        except ValueError as e:
            raise ProviderError("Workers AI returned an unreadable response") from e
        if not isinstance(data, dict):
            return data
        if data.get("success") is False:
            raise ProviderError(f"Workers AI error: {_first_error_message(data)}")
        return data.get("result", data)
