import os
from functools import lru_cache

from dotenv import load_dotenv
from pydantic import BaseModel, Field

load_dotenv()

CLOUDFLARE_API_BASE_URL = "https://api.cloudflare.com/client/v4"


def _split_keys(raw: str) -> list[str]:
    return [k.strip() for k in raw.split(",") if k.strip()]


class Settings(BaseModel):
    cloudflare_account_id: str = ""
    cloudflare_api_token: str = ""
    cloudflare_base_url: str = CLOUDFLARE_API_BASE_URL
    api_keys: list[str] = Field(default_factory=list)  # empty = auth disabled
    default_model: str = "stable-diffusion-xl"
    request_timeout: int = 60
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            cloudflare_account_id=os.getenv("CLOUDFLARE_ACCOUNT_ID", ""),
            cloudflare_api_token=os.getenv("CLOUDFLARE_API_TOKEN", ""),
            cloudflare_base_url=os.getenv("CLOUDFLARE_API_BASE_URL", CLOUDFLARE_API_BASE_URL),
            api_keys=_split_keys(os.getenv("API_KEYS", "")),
            default_model=os.getenv("DEFAULT_IMAGE_MODEL", "stable-diffusion-xl"),
            request_timeout=int(os.getenv("REQUEST_TIMEOUT", "60")),
            log_level=os.getenv("LOG_LEVEL", "INFO"),
        )


@lru_cache
def get_settings() -> Settings:
    return Settings.from_env()
