import time

from imagegate.core.config import Settings
from imagegate.core.errors import ProviderError
from imagegate.providers.base import BaseImageProvider
from imagegate.schemas.request import GenerationRequest
from imagegate.schemas.response import ImageData, ImagesResponse
from imagegate.services import encoder, normalizer
from imagegate.services.dispatcher import dispatch
from imagegate.utils.logger import logger


async def generate_images(
    request: GenerationRequest,
    provider: BaseImageProvider,
    settings: Settings,
) -> ImagesResponse:
    normalizer.validate_prompt(request)
    descriptor = normalizer.resolve_model(request, settings.default_model)
    n = normalizer.normalize_count(request.n)
    response_format = normalizer.normalize_response_format(request.response_format)
    params = normalizer.normalize(request, descriptor)

    logger.info(
        "images_generate",
        extra={"model": descriptor.public_id, "provider_ref": descriptor.provider_ref, "n": n},
    )
    start = time.perf_counter()
    raw_outputs = await dispatch(
        provider,
        descriptor.provider_ref,
        params,
        n,
        timeout=settings.request_timeout,
    )
    try:
        data = [
            ImageData(**await encoder.encode(raw, descriptor.provider_ref, response_format))
            for raw in raw_outputs
        ]
    except Exception as e:
        # Reading the provider's output is part of the provider call.
        detail = e.message if isinstance(e, ProviderError) else (str(e) or "Unknown error")
        logger.warning("provider_failed", extra={"provider_ref": descriptor.provider_ref, "error": repr(e)})
        raise ProviderError(f"Image generation failed: {detail}") from e

    latency_ms = (time.perf_counter() - start) * 1000
    logger.info(
        "images_generated",
        extra={"model": descriptor.public_id, "n": n, "latency_ms": round(latency_ms, 2)},
    )
    return ImagesResponse(data=data)
