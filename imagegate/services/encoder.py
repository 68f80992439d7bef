# =============================================================================
# imagegate/services/encoder.py - Raw provider output -> OpenAI image entry
# =============================================================================
# Prompt-only models hand back {"image": "<base64>"}; everything else hands
# back PNG bytes in one of several shapes (bytes, buffer, stream, chunks).
# =============================================================================

import base64
import inspect
import json
from typing import Any

from imagegate.core import models
from imagegate.core.errors import ProviderError
from imagegate.services.normalizer import B64_JSON

DATA_URL_PREFIX = "data:image/png;base64,"
_BYTES_LIKE = (bytes, bytearray, memoryview)


async def read_bytes(raw: Any) -> bytes:
    if isinstance(raw, bytes):
        return raw
    if isinstance(raw, (bytearray, memoryview)):
        return bytes(raw)

    read = getattr(raw, "read", None)
    if callable(read):
        data = read()
        if inspect.isawaitable(data):
            data = await data
        if isinstance(data, _BYTES_LIKE):
            return bytes(data)
    elif hasattr(raw, "__aiter__"):
        chunks = [chunk async for chunk in raw]
        if all(isinstance(c, _BYTES_LIKE) for c in chunks):
            return b"".join(bytes(c) for c in chunks)
    elif hasattr(raw, "__iter__") and not isinstance(raw, (str, dict)):
        chunks = list(raw)
        if all(isinstance(c, _BYTES_LIKE) for c in chunks):
            return b"".join(bytes(c) for c in chunks)

    raise ProviderError(f"Unexpected binary response type from image model: {type(raw).__name__}")


def extract_structured_image(raw: Any) -> str:
    payload = raw
    if isinstance(payload, (bytes, bytearray, str)):
        try:
            payload = json.loads(payload)
        except ValueError:
            payload = None
    image = payload.get("image") if isinstance(payload, dict) else None
    if not isinstance(image, str) or not image:
        raise ProviderError("Invalid response from FLUX model")
    return image


def shape(image_b64: str, response_format: str) -> dict:
    if response_format == B64_JSON:
        return {"b64_json": image_b64}
    return {"url": f"{DATA_URL_PREFIX}{image_b64}"}


async def encode(raw_output: Any, provider_ref: str, response_format: str) -> dict:
    descriptor = models.lookup_by_provider_ref(provider_ref)
    if descriptor is not None and descriptor.accepts_prompt_only:
        image_b64 = extract_structured_image(raw_output)
    else:
        image_b64 = base64.b64encode(await read_bytes(raw_output)).decode("ascii")
    return shape(image_b64, response_format)
