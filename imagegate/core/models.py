# =============================================================================
# imagegate/core/models.py - Catalog of public image models
# =============================================================================
# Public ids follow the OpenAI /v1/models shape; provider_ref is the Workers AI
# model path and must never leave the process.
# accepts_prompt_only marks models that take {prompt, steps} and answer with a
# JSON payload holding a base64 image instead of raw PNG bytes.
# =============================================================================

from dataclasses import dataclass
from types import MappingProxyType

MODEL_CREATED = 1677610602
MODEL_OWNER = "cloudflare"


@dataclass(frozen=True)
class ModelDescriptor:
    public_id: str
    provider_ref: str
    max_dimension: int
    accepts_prompt_only: bool
    object: str = "model"
    created: int = MODEL_CREATED
    owned_by: str = MODEL_OWNER

    def to_card(self) -> dict:
        return {
            "id": self.public_id,
            "object": self.object,
            "created": self.created,
            "owned_by": self.owned_by,
        }


MODELS: tuple[ModelDescriptor, ...] = (
    ModelDescriptor(
        public_id="stable-diffusion-xl",
        provider_ref="@cf/stabilityai/stable-diffusion-xl-base-1.0",
        max_dimension=1024,
        accepts_prompt_only=False,
    ),
    ModelDescriptor(
        public_id="flux-1-schnell",
        provider_ref="@cf/black-forest-labs/flux-1-schnell",
        max_dimension=1024,
        accepts_prompt_only=True,
    ),
    ModelDescriptor(
        public_id="dreamshaper-8-lcm",
        provider_ref="@cf/lykon/dreamshaper-8-lcm",
        max_dimension=1024,
        accepts_prompt_only=False,
    ),
)

_BY_ID = MappingProxyType({m.public_id: m for m in MODELS})
_BY_PROVIDER_REF = MappingProxyType({m.provider_ref: m for m in MODELS})


def lookup(public_id: str) -> ModelDescriptor | None:
    return _BY_ID.get(public_id)


def lookup_by_provider_ref(provider_ref: str) -> ModelDescriptor | None:
    return _BY_PROVIDER_REF.get(provider_ref)


def list_models() -> list[dict]:
    return [m.to_card() for m in MODELS]


def model_ids() -> list[str]:
    return [m.public_id for m in MODELS]
