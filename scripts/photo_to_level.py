#!/usr/bin/env python3
"""
Generate a platformer level (Scene JSON) from a photo.

This script:
1. Reads the photo and its pixel dimensions with Pillow
2. Runs the Gemini scene analysis pipeline (with one repair attempt and fallback)
3. Writes the validated Scene JSON with the real image dimensions applied

Usage:
    python scripts/photo_to_level.py photos/desk.jpg
    python scripts/photo_to_level.py photos/desk.jpg -o output/desk_level.json --model gemini-2.5-pro -v
"""

import argparse
import logging
import sys
from pathlib import Path

from PIL import Image

# Add src directory to path
sys.path.insert(0, str(Path(__file__).resolve().parent.parent / "src"))

from exceptions import ConfigurationError  # noqa: E402
from logging_config import setup_logging  # noqa: E402
from scenes.anchors import get_enemy_spawn_anchors  # noqa: E402
from scenes.orchestrate import analyze_image_sync  # noqa: E402
from util.gemini import GeminiAPI  # noqa: E402

logger = logging.getLogger("photo_to_level")


def read_photo(image_path: Path) -> tuple[bytes, str, int, int]:
    """
    Load a photo for analysis.

    Returns:
        (image_bytes, mime_type, width, height)

    Raises:
        FileNotFoundError: If image_path does not exist
    """
    if not image_path.exists():
        raise FileNotFoundError(f"Image not found: {image_path}")

    with Image.open(image_path) as img:
        width, height = img.size
        mime_type = Image.MIME.get(img.format or "", "image/jpeg")

    return image_path.read_bytes(), mime_type, width, height


def main() -> int:
    parser = argparse.ArgumentParser(description="Turn a photo into a platformer level description.")
    parser.add_argument("image", type=Path, help="Path to the photo")
    parser.add_argument("-o", "--output", type=Path, help="Write Scene JSON here (default: stdout)")
    parser.add_argument("--model", help="Gemini model name (default: VISION_MODEL or gemini-2.5-flash)")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    args = parser.parse_args()

    level = logging.DEBUG if args.verbose else logging.INFO
    setup_logging("", level=level)

    try:
        image_bytes, mime_type, width, height = read_photo(args.image)
        api = GeminiAPI(model_name=args.model)
    except (FileNotFoundError, ConfigurationError) as e:
        logger.error(str(e))
        return 1

    logger.info(f"Analyzing {args.image.name} ({width}x{height}, {mime_type}, {len(image_bytes)} bytes)")
    result = analyze_image_sync(image_bytes, mime_type, width, height, api=api)

    scene = result.scene.with_image_size(width, height)
    anchors = get_enemy_spawn_anchors(scene.objects)
    logger.info(
        f"source={result.source} duration={result.duration_ms}ms "
        f"objects={len(scene.objects)} pickups={len(scene.spawns.pickups)} anchors={len(anchors)}"
    )

    if args.output:
        args.output.parent.mkdir(parents=True, exist_ok=True)
        args.output.write_text(scene.to_json(), encoding="utf-8")
        logger.info(f"Scene written to {args.output}")
    else:
        print(scene.to_json())

    return 0


if __name__ == "__main__":
    sys.exit(main())
