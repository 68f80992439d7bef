from imagegate.core.config import Settings, get_settings
from imagegate.core.errors import AuthenticationError, ProviderError


def require_cloudflare_credentials(settings: Settings | None = None) -> tuple[str, str]:
    s = settings or get_settings()
    account_id = s.cloudflare_account_id.strip()
    token = s.cloudflare_api_token.strip()
    if not account_id:
        raise ProviderError("CLOUDFLARE_ACCOUNT_ID is not set")
    if not token:
        raise ProviderError("CLOUDFLARE_API_TOKEN is not set")
    return account_id, token


def check_api_key(authorization: str | None, api_keys: list[str]) -> None:
    """Static allow-list check. No-op when no keys are configured."""
    if not api_keys:
        return
    if not authorization or not authorization.startswith("Bearer "):
        raise AuthenticationError("You didn't provide an API key.")
    if authorization[len("Bearer "):] not in api_keys:
        raise AuthenticationError("Incorrect API key provided.", code="invalid_api_key")
