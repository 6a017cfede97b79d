"""
Image edit service: one round trip from canvas snapshot to model reply.

The reply is scanned part by part. By default the last text part and the last
image part win, since each match overwrites the previous one. Variants with
keep_first_match stop taking a kind once it has been seen.
"""
from typing import List, Optional

from google.genai import types

from core.data_url import to_data_url, DEFAULT_MIME_TYPE
from models.image_edit import EditVariant, ImageEditResult
from services.gemini_service import GeminiService
from services.image_store_service import ImageStoreService


def response_parts(response: types.GenerateContentResponse) -> List[types.Part]:
    """Parts of the first candidate, or an empty list when there are none"""
    if not response.candidates:
        return []

    content = response.candidates[0].content
    if content is None or not content.parts:
        return []

    return list(content.parts)


class ImageEditService:
    def __init__(self, gemini_service: GeminiService, image_store: Optional[ImageStoreService] = None):
        self.gemini_service = gemini_service
        self.image_store = image_store

    async def extract_result(self, response: types.GenerateContentResponse, variant: EditVariant) -> ImageEditResult:
        result = ImageEditResult()
        parts = response_parts(response)
        print(f"🔍 Number of parts in response: {len(parts)}")

        for part in parts:
            if part.inline_data is not None and part.inline_data.data:
                if variant.keep_first_match and result.edited_image is not None:
                    continue

                mime_type = part.inline_data.mime_type or DEFAULT_MIME_TYPE
                result.edited_image = to_data_url(part.inline_data.data, mime_type)
                print(f"🔍 Image data received, {len(part.inline_data.data)} bytes, MIME type: {mime_type}")

                if variant.persist_locally and self.image_store is not None:
                    saved, file_path, _ = await self.image_store.save_image(part.inline_data.data)
                    if saved:
                        result.saved_file_path = file_path

            elif part.text:
                if variant.keep_first_match and result.response_text is not None:
                    continue

                result.response_text = part.text
                print(f"🔍 Text response received: {part.text[:50]}...")

        return result

    async def edit(self, variant: EditVariant, command: str, image: Optional[str] = None) -> ImageEditResult:
        """Forward the command and optional image to the model and reshape its reply.

        Model and decoding errors propagate to the caller.
        """
        response = await self.gemini_service.generate(variant, command, image)
        return await self.extract_result(response, variant)
