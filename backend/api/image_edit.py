import json
from typing import Optional

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from config.settings import Settings
from models.image_edit import (
    EditVariant,
    ErrorResponse,
    ImageEditRequest,
    ImageEditResponse,
    SavedImageEditResponse
)
from services.image_edit_service import ImageEditService

router = APIRouter(tags=["image-edit"])

def get_image_edit_service(request: Request) -> ImageEditService:
    return request.app.state.image_edit_service

def get_app_settings(request: Request) -> Settings:
    """Settings the app was created with"""
    return request.app.state.settings

def build_edit_variant(settings: Settings) -> EditVariant:
    """Strict variant: image required, generated images saved locally"""
    return EditVariant(
        name="edit",
        model=settings.EDIT_MODEL,
        require_image=True,
        keep_first_match=settings.KEEP_FIRST_MATCH,
        persist_locally=settings.PERSIST_EDITED_IMAGES,
        detect_mime_type=False,
        use_chat=False,
        include_saved_path=True,
        include_error_details=False,
        missing_fields_error="Image and command are required",
        failure_error="Failed to process image"
    )

def build_edit2_variant(settings: Settings) -> EditVariant:
    """Lenient variant: image optional, chat session, sampling parameters set"""
    return EditVariant(
        name="edit2",
        model=settings.EDIT2_MODEL,
        require_image=False,
        keep_first_match=settings.KEEP_FIRST_MATCH,
        persist_locally=False,
        detect_mime_type=True,
        use_chat=True,
        temperature=1,
        top_p=0.95,
        top_k=40,
        include_saved_path=False,
        include_error_details=True,
        missing_fields_error="Prompt is required",
        failure_error="Failed to generate image"
    )

def error_response(variant: EditVariant, status_code: int, error: Optional[Exception] = None) -> JSONResponse:
    if status_code == 400:
        body = ErrorResponse(error=variant.missing_fields_error)
    else:
        body = ErrorResponse(
            error=variant.failure_error,
            details=str(error) if variant.include_error_details and error is not None else None
        )
    return JSONResponse(status_code=status_code, content=body.model_dump(exclude_none=True))

async def parse_edit_request(request: Request) -> ImageEditRequest:
    """Read the JSON body; an empty body or a non-object counts as no fields.

    Raises:
        ValueError: if the body is not valid JSON
    """
    raw = await request.body()
    if not raw.strip():
        return ImageEditRequest()

    payload = json.loads(raw)
    if not isinstance(payload, dict):
        return ImageEditRequest()

    return ImageEditRequest.model_validate(payload)

async def handle_edit(variant: EditVariant, request: Request, service: ImageEditService) -> JSONResponse:
    """Validate, forward to the model and shape the reply for one variant"""
    try:
        edit_request = await parse_edit_request(request)
    except ValueError as e:
        print(f"❌ Unreadable request body ({variant.name}): {e}")
        return error_response(variant, 500, e)

    command = edit_request.command
    image = edit_request.image

    if not command or (variant.require_image and not image):
        return error_response(variant, 400)

    try:
        if image:
            print(f"🔍 Processing image edit request ({variant.name})")
        result = await service.edit(variant, command, image)

    except Exception as e:
        print(f"❌ Error processing image edit ({variant.name}): {e}")
        return error_response(variant, 500, e)

    if variant.include_saved_path:
        response = SavedImageEditResponse(
            edited_image=result.edited_image,
            response_text=result.response_text,
            saved_file_path=result.saved_file_path
        )
    else:
        response = ImageEditResponse(
            edited_image=result.edited_image,
            response_text=result.response_text
        )

    return JSONResponse(status_code=200, content=response.model_dump(by_alias=True))

# Bodies are read by handle_edit so that malformed input gets the variant's own error shape
EDIT_REQUEST_BODY = {
    "requestBody": {
        "content": {"application/json": {"schema": ImageEditRequest.model_json_schema()}}
    }
}

@router.post("/edit", response_model=SavedImageEditResponse, openapi_extra=EDIT_REQUEST_BODY)
async def edit_image(
    request: Request,
    settings: Settings = Depends(get_app_settings),
    service: ImageEditService = Depends(get_image_edit_service)
):
    """Edit the canvas snapshot with a text command (image required)"""
    return await handle_edit(build_edit_variant(settings), request, service)

@router.post("/edit2", response_model=ImageEditResponse, openapi_extra=EDIT_REQUEST_BODY)
async def edit_image_v2(
    request: Request,
    settings: Settings = Depends(get_app_settings),
    service: ImageEditService = Depends(get_image_edit_service)
):
    """Edit or generate from a text command (image optional)"""
    return await handle_edit(build_edit2_variant(settings), request, service)

@router.get("/api/health")
async def check_gemini_config(service: ImageEditService = Depends(get_image_edit_service)):
    """Check if the Gemini API key is configured"""
    has_key = service.gemini_service.is_configured

    return {
        "configured": has_key,
        "message": "Gemini API key configured" if has_key else "Gemini API key not set"
    }
