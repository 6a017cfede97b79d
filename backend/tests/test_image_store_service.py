"""
Unit tests for ImageStoreService
"""
import pytest

from services.image_store_service import ImageStoreService


@pytest.mark.unit
class TestImageStoreFilename:
    """Tests for timestamped filenames"""

    def test_filename_uses_epoch_millis(self, tmp_path):
        store = ImageStoreService(str(tmp_path), clock=lambda: 1700000000.123)

        assert store.build_filename() == "edited_image_1700000000123.png"


@pytest.mark.unit
@pytest.mark.asyncio
class TestImageStoreService:
    """Tests for best-effort local image saving"""

    async def test_save_creates_directory(self, tmp_path):
        """Test the save directory is created when absent"""
        save_dir = tmp_path / "nested" / "generated"
        store = ImageStoreService(str(save_dir), clock=lambda: 1.0)

        success, file_path, error = await store.save_image(b"png-bytes")

        assert success is True
        assert error is None
        assert file_path == str(save_dir / "edited_image_1000.png")
        assert (save_dir / "edited_image_1000.png").read_bytes() == b"png-bytes"

    async def test_save_failure_is_reported_not_raised(self, tmp_path):
        """Test a write failure comes back as an error tuple"""
        blocker = tmp_path / "blocker"
        blocker.write_text("file, not a directory")
        store = ImageStoreService(str(blocker))

        success, file_path, error = await store.save_image(b"png-bytes")

        assert success is False
        assert file_path is None
        assert error

    async def test_same_millisecond_overwrites(self, tmp_path):
        """Test two saves in one millisecond share a filename"""
        store = ImageStoreService(str(tmp_path), clock=lambda: 5.0)

        _, first, _ = await store.save_image(b"first")
        _, second, _ = await store.save_image(b"second")

        assert first == second
        assert (tmp_path / "edited_image_5000.png").read_bytes() == b"second"
