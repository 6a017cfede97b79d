from typing import List, Optional, Callable

from google import genai
from google.genai import types

from core.data_url import split_data_url
from models.image_edit import EditVariant

# Every category the API accepts a threshold for
HARM_CATEGORIES = [
    types.HarmCategory.HARM_CATEGORY_HATE_SPEECH,
    types.HarmCategory.HARM_CATEGORY_SEXUALLY_EXPLICIT,
    types.HarmCategory.HARM_CATEGORY_DANGEROUS_CONTENT,
    types.HarmCategory.HARM_CATEGORY_HARASSMENT,
    types.HarmCategory.HARM_CATEGORY_CIVIC_INTEGRITY,
]

RESPONSE_MODALITIES = ["TEXT", "IMAGE"]

class GeminiService:
    """Thin wrapper around the google-genai client for single-turn image edits."""

    def __init__(
        self,
        api_key: str = "",
        disable_safety_filters: bool = True,
        client_factory: Optional[Callable[[str], genai.Client]] = None
    ):
        self.api_key = api_key or ""
        self.disable_safety_filters = disable_safety_filters
        self._client_factory = client_factory or (lambda key: genai.Client(api_key=key))
        self._client: Optional[genai.Client] = None

    @property
    def is_configured(self) -> bool:
        return bool(self.api_key)

    def _get_client(self) -> genai.Client:
        """Create the SDK client on first use so a missing key only fails the first call"""
        if self._client is None:
            self._client = self._client_factory(self.api_key)
        return self._client

    def build_safety_settings(self) -> Optional[List[types.SafetySetting]]:
        if not self.disable_safety_filters:
            return None
        return [
            types.SafetySetting(category=category, threshold=types.HarmBlockThreshold.BLOCK_NONE)
            for category in HARM_CATEGORIES
        ]

    def build_config(self, variant: EditVariant) -> types.GenerateContentConfig:
        return types.GenerateContentConfig(
            temperature=variant.temperature,
            top_p=variant.top_p,
            top_k=variant.top_k,
            response_modalities=RESPONSE_MODALITIES,
            safety_settings=self.build_safety_settings(),
        )

    def build_message_parts(self, variant: EditVariant, command: str, image: Optional[str]) -> List[types.Part]:
        """Text part first, then the canvas image when one was sent"""
        parts = [types.Part.from_text(text=command)]

        if image:
            mime_type, image_bytes = split_data_url(image, detect_mime=variant.detect_mime_type)
            print(f"🔍 Image payload: {len(image_bytes)} bytes, MIME type: {mime_type}")
            parts.append(types.Part.from_bytes(data=image_bytes, mime_type=mime_type))

        return parts

    async def generate(self, variant: EditVariant, command: str, image: Optional[str]) -> types.GenerateContentResponse:
        """Send one request to the model and return its raw response"""
        parts = self.build_message_parts(variant, command, image)
        config = self.build_config(variant)
        client = self._get_client()

        print(f"🔍 Sending {len(parts)} parts to {variant.model} ({variant.name})")
        if variant.use_chat:
            chat = client.aio.chats.create(model=variant.model, config=config)
            return await chat.send_message(parts)

        return await client.aio.models.generate_content(
            model=variant.model,
            contents=[types.Content(role="user", parts=parts)],
            config=config,
        )
