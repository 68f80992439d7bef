from typing import Any

from pydantic import BaseModel, ConfigDict


class GenerationRequest(BaseModel):
    """Body of POST /v1/images/generations.

    Fields are deliberately untyped: coercion and defaults live in the
    normalizer so that a bad `n` or `seed` degrades to a default instead of
    failing schema validation.
    """

    model_config = ConfigDict(extra="ignore")

    prompt: Any = None
    model: Any = None
    n: Any = None
    size: Any = None
    response_format: Any = None
    # standard diffusion models
    negative_prompt: Any = None
    num_steps: Any = None
    strength: Any = None
    guidance: Any = None
    seed: Any = None
    # prompt-only models
    steps: Any = None
