from pydantic import BaseModel, ConfigDict, Field


class UploadUrlRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    file_name: str = Field(..., min_length=1, alias="fileName")
    file_type: str = Field(..., min_length=1, alias="fileType")


class UploadUrlResponse(BaseModel):
    url: str
