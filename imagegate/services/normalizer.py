# =============================================================================
# imagegate/services/normalizer.py - Client request -> provider parameters
# =============================================================================
# Validation is fail-fast (prompt, then model). Every numeric field is
# parse-or-default then clamped; unreadable values silently take the default.
# response_format is lenient: only the exact string "b64_json" selects base64
# JSON output, everything else (including typos) means data-URL output.
# =============================================================================

import math
import random

from imagegate.core import models
from imagegate.core.errors import InvalidRequestError
from imagegate.core.models import ModelDescriptor
from imagegate.schemas.params import NormalizedParameters, PromptOnlyParameters, StandardParameters
from imagegate.schemas.request import GenerationRequest
from imagegate.utils.parsing import clamp, float_or_default, int_or_default, parse_int

MIN_IMAGES, MAX_IMAGES, DEFAULT_IMAGES = 1, 4, 1

DEFAULT_SIZE = "1024x1024"
DEFAULT_DIMENSION = 1024
MIN_DIMENSION, MAX_DIMENSION = 256, 2048
DIMENSION_STEP = 64

DEFAULT_STEPS, MIN_STEPS, MAX_STEPS = 6, 4, 8
DEFAULT_NUM_STEPS, MIN_NUM_STEPS, MAX_NUM_STEPS = 20, 1, 50
DEFAULT_STRENGTH, MIN_STRENGTH, MAX_STRENGTH = 0.8, 0.0, 1.0
DEFAULT_GUIDANCE, MIN_GUIDANCE, MAX_GUIDANCE = 7.5, 0.0, 30.0
SEED_RANGE = 1_000_000

B64_JSON = "b64_json"
URL = "url"


def validate_prompt(request: GenerationRequest) -> str:
    prompt = request.prompt
    if not isinstance(prompt, str) or not prompt:
        raise InvalidRequestError("Missing or invalid 'prompt' parameter", param="prompt")
    return prompt


def resolve_model(request: GenerationRequest, default_model: str) -> ModelDescriptor:
    model_id = request.model or default_model
    descriptor = models.lookup(model_id) if isinstance(model_id, str) else None
    if descriptor is None:
        raise InvalidRequestError(
            f"Model '{model_id}' not found",
            param="model",
            code="model_not_found",
        )
    return descriptor


def normalize_count(value) -> int:
    return clamp(int_or_default(value, DEFAULT_IMAGES), MIN_IMAGES, MAX_IMAGES)


def sanitize_dimension(value, default: int = DEFAULT_DIMENSION) -> int:
    v = clamp(int_or_default(value, default), MIN_DIMENSION, MAX_DIMENSION)
    # half-up rounding, not banker's: 288 -> 320
    return math.floor(v / DIMENSION_STEP + 0.5) * DIMENSION_STEP


def parse_size(value) -> tuple[int, int]:
    """Return (width, height) for a "WxH" string."""
    size = value if isinstance(value, str) and value else DEFAULT_SIZE
    parts = size.split("x")
    width = sanitize_dimension(parts[0])
    height = sanitize_dimension(parts[1] if len(parts) > 1 else None)
    return width, height


def normalize_response_format(value) -> str:
    return B64_JSON if value == B64_JSON else URL


def _seed(value) -> int:
    seed = parse_int(value)
    return random.randrange(SEED_RANGE) if seed is None else seed


def normalize(request: GenerationRequest, descriptor: ModelDescriptor) -> NormalizedParameters:
    prompt = validate_prompt(request)

    if descriptor.accepts_prompt_only:
        return PromptOnlyParameters(
            prompt=prompt,
            steps=clamp(int_or_default(request.steps, DEFAULT_STEPS), MIN_STEPS, MAX_STEPS),
        )

    width, height = parse_size(request.size)
    negative_prompt = request.negative_prompt if isinstance(request.negative_prompt, str) else ""
    return StandardParameters(
        prompt=prompt,
        negative_prompt=negative_prompt,
        height=height,
        width=width,
        num_steps=clamp(int_or_default(request.num_steps, DEFAULT_NUM_STEPS), MIN_NUM_STEPS, MAX_NUM_STEPS),
        strength=float(clamp(float_or_default(request.strength, DEFAULT_STRENGTH), MIN_STRENGTH, MAX_STRENGTH)),
        guidance=float(clamp(float_or_default(request.guidance, DEFAULT_GUIDANCE), MIN_GUIDANCE, MAX_GUIDANCE)),
        seed=_seed(request.seed),
    )
