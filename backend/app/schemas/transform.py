from pydantic import BaseModel, ConfigDict, Field


class TransformResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    transformed_image_url: str = Field(..., alias="transformedImageUrl")


class StylesResponse(BaseModel):
    styles: list[str]
    default: str


class ErrorResponse(BaseModel):
    error: str
