from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import Optional

class EditVariant(BaseModel):
    """Configuration of one edit endpoint served by the shared handler."""
    name: str
    model: str
    require_image: bool = True
    keep_first_match: bool = False
    persist_locally: bool = False
    detect_mime_type: bool = False
    use_chat: bool = False
    temperature: Optional[float] = None
    top_p: Optional[float] = None
    top_k: Optional[float] = None
    # Response shaping
    include_saved_path: bool = False
    include_error_details: bool = False
    missing_fields_error: str = "Image and command are required"
    failure_error: str = "Failed to process image"

class ImageEditRequest(BaseModel):
    image: Optional[str] = None  # Canvas snapshot as a data URL
    command: Optional[str] = None

    @field_validator("image", "command", mode="before")
    @classmethod
    def non_string_is_missing(cls, value):
        return value if isinstance(value, str) else None

class ImageEditResult(BaseModel):
    """Image and text pulled out of a single model reply"""
    edited_image: Optional[str] = None
    response_text: Optional[str] = None
    saved_file_path: Optional[str] = None

class ImageEditResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    edited_image: Optional[str] = Field(default=None, alias="editedImage")
    response_text: Optional[str] = Field(default=None, alias="responseText")

class SavedImageEditResponse(ImageEditResponse):
    saved_file_path: Optional[str] = Field(default=None, alias="savedFilePath")

class ErrorResponse(BaseModel):
    error: str
    details: Optional[str] = None
