# =============================================================================
# imagegate/services/dispatcher.py - Fan a batch out to the provider
# =============================================================================
# Image i of a batch runs with seed + i (when a non-zero seed is present), so
# image 0 reproduces the requested seed. Calls run concurrently; results are
# returned in index order. The first failure cancels the rest of the batch.
# =============================================================================

import asyncio
from typing import Any

from imagegate.core.errors import ProviderError
from imagegate.providers.base import BaseImageProvider
from imagegate.schemas.params import NormalizedParameters
from imagegate.utils.logger import logger


def params_for_index(params: NormalizedParameters, index: int) -> NormalizedParameters:
    seed = getattr(params, "seed", None)
    if seed:
        return params.model_copy(update={"seed": seed + index})
    return params.model_copy()


def _as_provider_error(exc: BaseException, timeout: float | None) -> ProviderError:
    if isinstance(exc, asyncio.TimeoutError):
        detail = f"provider did not answer within {timeout}s"
    elif isinstance(exc, ProviderError):
        detail = exc.message
    else:
        detail = str(exc) or "Unknown error"
    return ProviderError(f"Image generation failed: {detail}")


async def dispatch(
    provider: BaseImageProvider,
    provider_ref: str,
    params: NormalizedParameters,
    n: int,
    timeout: float | None = None,
) -> list[Any]:
    async def run_one(index: int) -> Any:
        call = provider.run(provider_ref, params_for_index(params, index).as_payload())
        if timeout:
            return await asyncio.wait_for(call, timeout=timeout)
        return await call

    tasks = [asyncio.ensure_future(run_one(i)) for i in range(n)]
    try:
        return list(await asyncio.gather(*tasks))
    except Exception as e:
        for t in tasks:
            t.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        logger.warning(
            "provider_failed",
            extra={"provider_ref": provider_ref, "n": n, "error": repr(e)},
        )
        raise _as_provider_error(e, timeout) from e
