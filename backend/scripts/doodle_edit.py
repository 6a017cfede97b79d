"""
Send a doodle to a running edit proxy and save the repainted canvas.

Usage:
    python scripts/doodle_edit.py "add clouds" --input sketch.png --output result.png
"""

import argparse
import asyncio
import os
import sys
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from core.data_url import to_data_url
from editor.canvas import DoodleCanvas, DEFAULT_DOWNLOAD_NAME
from editor.session import EditorSession


async def run(args) -> int:
    canvas = DoodleCanvas()

    if args.input:
        input_path = Path(args.input)
        if not input_path.exists():
            print(f"❌ Input image not found: {input_path}")
            return 1
        mime_type = "image/png" if input_path.suffix.lower() == ".png" else "image/jpeg"
        canvas.load_data_url(to_data_url(input_path.read_bytes(), mime_type))

    session = EditorSession(canvas, base_url=args.url, endpoint=args.endpoint)
    try:
        print(f"🔍 Sending '{args.command}' to {args.url}{args.endpoint}")
        replaced = await session.submit(args.command)
    finally:
        await session.close()

    if session.last_response_text:
        print(f"💬 {session.last_response_text}")

    if not replaced:
        print("⚠️  No image returned, canvas unchanged")

    output = canvas.download(args.output)
    print(f"✅ Canvas saved to {output}")
    return 0


def main():
    parser = argparse.ArgumentParser(description="Edit a doodle with a natural-language command")
    parser.add_argument("command", help="Edit command, e.g. 'draw apple'")
    parser.add_argument("--input", help="Image to start from (blank canvas if omitted)")
    parser.add_argument("--output", default=DEFAULT_DOWNLOAD_NAME, help="Where to save the result")
    parser.add_argument("--url", default=os.getenv("DOODLE_API_URL", "http://127.0.0.1:8000"), help="Edit proxy base URL")
    parser.add_argument("--endpoint", default="/edit", choices=["/edit", "/edit2"], help="Edit endpoint")
    args = parser.parse_args()

    sys.exit(asyncio.run(run(args)))


if __name__ == "__main__":
    main()
