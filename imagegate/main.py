from collections.abc import AsyncIterator

from fastapi import Depends, FastAPI, Request, Response
from starlette.exceptions import HTTPException as StarletteHTTPException

from imagegate.core import models
from imagegate.core.config import get_settings
from imagegate.core.errors import (
    APIError,
    AuthenticationError,
    InternalError,
    InvalidRequestError,
    NotFoundError,
    NotImplementedAPIError,
)
from imagegate.core.security import check_api_key
from imagegate.providers.base import BaseImageProvider
from imagegate.providers.workers_ai_client import WorkersAIClient
from imagegate.schemas.request import GenerationRequest
from imagegate.schemas.response import ModelCard, ModelList, ServiceInfo
from imagegate.services.image_service import generate_images
from imagegate.utils.logger import logger

API_VERSION = "1.0.0"

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, POST, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type, Authorization",
}

app = FastAPI(title="Workers AI Image Gateway", version=API_VERSION)


async def get_provider() -> AsyncIterator[BaseImageProvider]:
    provider = WorkersAIClient()
    try:
        yield provider
    finally:
        await provider.close()


@app.middleware("http")
async def gateway_middleware(request: Request, call_next):
    # Preflight is answered before auth and routing, for any path.
    if request.method == "OPTIONS":
        return Response(status_code=204, headers=CORS_HEADERS)
    try:
        check_api_key(request.headers.get("authorization"), get_settings().api_keys)
    except AuthenticationError as e:
        logger.info("auth_rejected", extra={"path": request.url.path, "code": e.code})
        response = e.to_response()
        response.headers.update(CORS_HEADERS)
        return response
    try:
        response = await call_next(request)
    except APIError as e:
        response = e.to_response()
    except Exception as e:
        logger.exception("unhandled_error", extra={"path": request.url.path})
        response = InternalError(f"Internal server error: {e}").to_response()
    response.headers.update(CORS_HEADERS)
    return response


@app.exception_handler(APIError)
async def api_error_handler(request: Request, exc: APIError):
    return exc.to_response()


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    # Unknown paths and wrong methods both read as "Not Found".
    if exc.status_code in (404, 405):
        return NotFoundError().to_response()
    err = APIError(str(exc.detail), error_type="invalid_request_error")
    err.status_code = exc.status_code
    return err.to_response()


async def _read_json_object(request: Request) -> dict:
    try:
        body = await request.json()
    except ValueError:
        body = None
    if not isinstance(body, dict):
        raise InvalidRequestError("We could not parse the JSON body of your request.")
    return body


@app.get("/")
async def root():
    return ServiceInfo(
        message="Cloudflare Workers AI - OpenAI Compatible Image Generation API",
        version=API_VERSION,
        endpoints={
            "models": "GET /v1/models",
            "generate": "POST /v1/images/generations",
        },
        supported_models=models.model_ids(),
    ).model_dump()


@app.get("/v1/models")
async def list_models():
    return ModelList(data=[ModelCard(**card) for card in models.list_models()]).model_dump()


@app.post("/v1/images/generations")
async def create_images(request: Request, provider: BaseImageProvider = Depends(get_provider)):
    body = await _read_json_object(request)
    result = await generate_images(GenerationRequest.model_validate(body), provider, get_settings())
    return result.to_dict()


@app.post("/v1/images/edits")
async def create_image_edit():
    raise NotImplementedAPIError("Image editing endpoint not implemented yet")


@app.post("/v1/images/variations")
async def create_image_variation():
    raise NotImplementedAPIError("Image variations endpoint not implemented yet")


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=8000)
