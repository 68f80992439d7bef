from typing import Union

from pydantic import BaseModel


class PromptOnlyParameters(BaseModel):
    prompt: str
    steps: int

    def as_payload(self) -> dict:
        return self.model_dump()


class StandardParameters(BaseModel):
    prompt: str
    negative_prompt: str
    height: int
    width: int
    num_steps: int
    strength: float
    guidance: float
    seed: int

    def as_payload(self) -> dict:
        return self.model_dump()


NormalizedParameters = Union[PromptOnlyParameters, StandardParameters]
