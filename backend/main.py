from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles
from pathlib import Path
from typing import Optional
import os

# Only load .env file if not running on Heroku
if not os.getenv("DYNO"):  # DYNO is a Heroku-specific environment variable
    from dotenv import load_dotenv
    load_dotenv()
    print("🔧 Local development: Loaded .env file")
else:
    print("☁️ Running on Heroku: Using environment variables")

from api import image_edit
from config.settings import Settings, get_settings
from services.gemini_service import GeminiService
from services.image_edit_service import ImageEditService
from services.image_store_service import ImageStoreService

STATIC_DIR = Path(__file__).parent / "static"

def create_app(
    settings: Optional[Settings] = None,
    gemini_service: Optional[GeminiService] = None
) -> FastAPI:
    settings = settings or get_settings()

    app = FastAPI(title=settings.PROJECT_NAME, version=settings.VERSION)
    app.state.settings = settings

    # One model client per process, handed to the handlers through app.state
    gemini_service = gemini_service or GeminiService(
        api_key=settings.GEMINI_API_KEY,
        disable_safety_filters=settings.DISABLE_SAFETY_FILTERS
    )
    app.state.image_edit_service = ImageEditService(
        gemini_service,
        ImageStoreService(settings.SAVE_DIR)
    )
    if settings.DISABLE_SAFETY_FILTERS:
        print("⚠️ Content safety filters are disabled for all harm categories")

    # Configure CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(image_edit.router)

    @app.get("/health")
    async def health_check():
        return {"status": "healthy"}

    # Doodle page; mounted last so the API routes take precedence
    app.mount("/", StaticFiles(directory=STATIC_DIR, html=True), name="static")

    return app

app = create_app()

if __name__ == "__main__":
    import uvicorn
    settings = get_settings()
    port = int(os.getenv("PORT", settings.PORT))
    uvicorn.run(app, host=settings.HOST, port=port)
