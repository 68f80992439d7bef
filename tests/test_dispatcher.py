import asyncio

import pytest

from imagegate.core.errors import ProviderError
from imagegate.schemas.params import PromptOnlyParameters, StandardParameters
from imagegate.services.dispatcher import dispatch, params_for_index
from tests.fakes import PNG_BYTES, FakeProvider

SDXL_REF = "@cf/stabilityai/stable-diffusion-xl-base-1.0"


def standard(seed: int) -> StandardParameters:
    return StandardParameters(
        prompt="a red fox",
        negative_prompt="",
        height=1024,
        width=1024,
        num_steps=20,
        strength=0.8,
        guidance=7.5,
        seed=seed,
    )


def test_seeds_increase_per_image():
    provider = FakeProvider()
    outputs = asyncio.run(dispatch(provider, SDXL_REF, standard(1000), 3))
    assert [params["seed"] for _, params in provider.calls] == [1000, 1001, 1002]
    assert all(ref == SDXL_REF for ref, _ in provider.calls)
    assert outputs == [PNG_BYTES + bytes([i]) for i in range(3)]


def test_zero_seed_is_not_offset():
    provider = FakeProvider()
    asyncio.run(dispatch(provider, SDXL_REF, standard(0), 2))
    assert [params["seed"] for _, params in provider.calls] == [0, 0]


def test_base_params_are_not_mutated():
    base = standard(7)
    assert params_for_index(base, 2).seed == 9
    assert base.seed == 7


def test_prompt_only_params_have_no_seed():
    provider = FakeProvider()
    params = PromptOnlyParameters(prompt="a red fox", steps=6)
    asyncio.run(dispatch(provider, "@cf/black-forest-labs/flux-1-schnell", params, 2))
    assert [p for _, p in provider.calls] == [{"prompt": "a red fox", "steps": 6}] * 2


def test_results_keep_index_order_when_calls_finish_out_of_order():
    provider = FakeProvider(delays={0: 0.05, 1: 0.02, 2: 0.0})
    outputs = asyncio.run(dispatch(provider, SDXL_REF, standard(5), 3))
    assert outputs == [PNG_BYTES + bytes([i]) for i in range(3)]


def test_failure_aborts_batch():
    provider = FakeProvider(fail_at=1)
    with pytest.raises(ProviderError) as exc:
        asyncio.run(dispatch(provider, SDXL_REF, standard(5), 3))
    assert exc.value.code == "ai_service_error"
    assert exc.value.message == "Image generation failed: upstream exploded"


def test_provider_error_message_is_not_double_wrapped():
    class Broken(FakeProvider):
        async def run(self, model_ref, params):
            raise ProviderError("Workers AI error 500: boom")

    with pytest.raises(ProviderError) as exc:
        asyncio.run(dispatch(Broken(), SDXL_REF, standard(5), 1))
    assert exc.value.message == "Image generation failed: Workers AI error 500: boom"


def test_timeout_maps_to_provider_error():
    provider = FakeProvider(delays={0: 1.0})
    with pytest.raises(ProviderError) as exc:
        asyncio.run(dispatch(provider, SDXL_REF, standard(5), 1, timeout=0.01))
    assert exc.value.code == "ai_service_error"
    assert "did not answer" in exc.value.message
