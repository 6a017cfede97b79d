"""
Doodle canvas: a fixed 800x600 raster mutated by pencil and eraser strokes.

Pointer positions arrive in client (rendered) coordinates together with the
canvas bounds and are always rescaled to the logical buffer size, so strokes
land in the right place whatever size the canvas is displayed at.
"""
import io
from enum import Enum
from pathlib import Path
from typing import Optional, Tuple, Union

from PIL import Image, ImageDraw
from pydantic import BaseModel

from core.data_url import decode_data_url, to_data_url

CANVAS_WIDTH = 800
CANVAS_HEIGHT = 600
BACKGROUND_COLOR = "#ffffff"
DEFAULT_COLOR = "#000000"
DEFAULT_DOWNLOAD_NAME = "ai-doodle.png"

class Tool(str, Enum):
    PENCIL = "pencil"
    ERASER = "eraser"

TOOL_WIDTHS = {
    Tool.PENCIL: 5,
    Tool.ERASER: 20,
}

class CanvasBounds(BaseModel):
    """On-screen rectangle of the canvas, as reported by getBoundingClientRect()"""
    left: float = 0
    top: float = 0
    width: float = CANVAS_WIDTH
    height: float = CANVAS_HEIGHT

Point = Tuple[float, float]

class DoodleCanvas:
    def __init__(self, width: int = CANVAS_WIDTH, height: int = CANVAS_HEIGHT, background: str = BACKGROUND_COLOR):
        self.width = width
        self.height = height
        self.background = background
        self.tool = Tool.PENCIL
        self.color = DEFAULT_COLOR
        self.image = Image.new("RGB", (width, height), background)
        self._draw = ImageDraw.Draw(self.image)
        self._last_point: Optional[Point] = None

    @property
    def is_drawing(self) -> bool:
        return self._last_point is not None

    def set_tool(self, tool: Union[Tool, str]):
        self.tool = Tool(tool)

    def set_color(self, color: str):
        self.color = color

    def stroke_style(self) -> Tuple[str, int]:
        """(color, width) of the active tool; the eraser paints background"""
        if self.tool == Tool.ERASER:
            return self.background, TOOL_WIDTHS[Tool.ERASER]
        return self.color, TOOL_WIDTHS[Tool.PENCIL]

    def to_canvas_point(self, client_x: float, client_y: float, bounds: CanvasBounds) -> Point:
        scale_x = self.width / bounds.width if bounds.width else 1
        scale_y = self.height / bounds.height if bounds.height else 1
        return (client_x - bounds.left) * scale_x, (client_y - bounds.top) * scale_y

    def start_stroke(self, client_x: float, client_y: float, bounds: Optional[CanvasBounds] = None):
        self._last_point = self.to_canvas_point(client_x, client_y, bounds or CanvasBounds())

    def continue_stroke(self, client_x: float, client_y: float, bounds: Optional[CanvasBounds] = None):
        if self._last_point is None:
            return

        point = self.to_canvas_point(client_x, client_y, bounds or CanvasBounds())
        self._draw_segment(self._last_point, point)
        self._last_point = point

    def end_stroke(self):
        self._last_point = None

    def _draw_segment(self, start: Point, end: Point):
        color, width = self.stroke_style()
        self._draw.line([start, end], fill=color, width=width, joint="curve")

        # Round line caps
        radius = width / 2
        for x, y in (start, end):
            self._draw.ellipse([x - radius, y - radius, x + radius, y + radius], fill=color)

    def reset(self):
        self._draw.rectangle([0, 0, self.width, self.height], fill=self.background)

    def to_png_bytes(self) -> bytes:
        buffer = io.BytesIO()
        self.image.save(buffer, format="PNG")
        return buffer.getvalue()

    def to_data_url(self) -> str:
        return to_data_url(self.to_png_bytes(), "image/png")

    def load_data_url(self, data_url: str):
        """Replace the canvas contents with an image stretched to the full canvas"""
        with Image.open(io.BytesIO(decode_data_url(data_url))) as loaded:
            replacement = loaded.convert("RGB")

        if replacement.size != (self.width, self.height):
            replacement = replacement.resize((self.width, self.height))

        self.reset()
        self.image.paste(replacement, (0, 0))

    def download(self, path: Union[str, Path] = DEFAULT_DOWNLOAD_NAME) -> Path:
        path = Path(path)
        path.write_bytes(self.to_png_bytes())
        return path
