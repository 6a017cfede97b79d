import asyncio
import time
from pathlib import Path
from typing import Tuple, Optional, Callable

class ImageStoreService:
    """Writes generated images to a local directory, one file per image."""

    def __init__(self, save_dir: str, clock: Optional[Callable[[], float]] = None):
        self.save_dir = Path(save_dir)
        self._clock = clock or time.time

    def build_filename(self) -> str:
        timestamp = int(self._clock() * 1000)
        return f"edited_image_{timestamp}.png"

    def _write(self, file_path: Path, image_bytes: bytes):
        self.save_dir.mkdir(parents=True, exist_ok=True)
        file_path.write_bytes(image_bytes)

    async def save_image(self, image_bytes: bytes) -> Tuple[bool, Optional[str], Optional[str]]:
        """Save image bytes under a timestamped filename. Never raises."""
        try:
            file_path = self.save_dir / self.build_filename()
            await asyncio.to_thread(self._write, file_path, image_bytes)

            print(f"✅ Image saved locally at: {file_path}")
            return True, str(file_path), None

        except Exception as e:
            print(f"❌ Error saving image locally: {e}")
            return False, None, str(e)
