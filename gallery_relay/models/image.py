from pydantic import BaseModel, ConfigDict, Field


class UploadedImage(BaseModel):
    url: str
    public_id: str


class DeleteResult(BaseModel):
    result: str


class ImageSummary(BaseModel):
    """Public projection of a Cloudinary resource."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    url: str = Field(validation_alias="secure_url")
    public_id: str
    width: int | None = None
    height: int | None = None
    format: str | None = None
    created_at: str | None = None


class ErrorResponse(BaseModel):
    error: str
