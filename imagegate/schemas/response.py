import time

from pydantic import BaseModel, Field


class ImageData(BaseModel):
    url: str | None = None
    b64_json: str | None = None


class ImagesResponse(BaseModel):
    created: int = Field(default_factory=lambda: int(time.time()))
    data: list[ImageData]

    def to_dict(self) -> dict:
        return {
            "created": self.created,
            "data": [d.model_dump(exclude_none=True) for d in self.data],
        }


class ModelCard(BaseModel):
    id: str
    object: str = "model"
    created: int
    owned_by: str


class ModelList(BaseModel):
    object: str = "list"
    data: list[ModelCard] = Field(default_factory=list)


class ServiceInfo(BaseModel):
    message: str
    version: str
    endpoints: dict[str, str]
    supported_models: list[str]
