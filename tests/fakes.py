import asyncio

from imagegate.providers.base import BaseImageProvider

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + bytes(range(24))
FLUX_IMAGE_B64 = "RkxVWC1JTUFHRQ=="


class FakeProvider(BaseImageProvider):
    """Records every call; flux refs answer JSON, the rest answer PNG bytes."""

    def __init__(self, fail_at: int | None = None, flux_payload: dict | None = None, delays=None):
        self.calls: list[tuple[str, dict]] = []
        self.fail_at = fail_at
        self.flux_payload = flux_payload if flux_payload is not None else {"image": FLUX_IMAGE_B64}
        self.delays = delays or {}

    async def run(self, model_ref: str, params: dict):
        index = len(self.calls)
        self.calls.append((model_ref, dict(params)))
        if index in self.delays:
            await asyncio.sleep(self.delays[index])
        if self.fail_at is not None and index == self.fail_at:
            raise RuntimeError("upstream exploded")
        if "flux" in model_ref:
            return self.flux_payload
        return PNG_BYTES + bytes([index])
