from abc import ABC, abstractmethod
from typing import Any


class BaseImageProvider(ABC):
    """Opaque inference capability: one call per generated image."""

    @abstractmethod
    async def run(self, model_ref: str, params: dict) -> Any:
        """Return raw image bytes or a structured payload for `model_ref`."""

    async def close(self) -> None:
        return None
