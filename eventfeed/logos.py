"""
Download community logos and store them as small square PNGs
for the site's community cards.
"""

import io

import requests
from PIL import Image

from eventfeed import config


def download_image(url: str, timeout: int = 10) -> Image.Image:
    """Download an image from URL and return as PIL Image."""
    headers = {"User-Agent": "Mozilla/5.0 (X11; Linux x86_64)"}
    resp = requests.get(url, headers=headers, timeout=timeout)
    resp.raise_for_status()
    return Image.open(io.BytesIO(resp.content)).convert("RGBA")


def cover_square(img: Image.Image, size: int) -> Image.Image:
    """Resize to fill a size x size square, center cropping the overflow."""
    ratio = img.width / img.height
    if ratio > 1:
        new_height = size
        new_width = max(size, int(round(size * ratio)))
    else:
        new_width = size
        new_height = max(size, int(round(size / ratio)))

    img = img.resize((new_width, new_height), Image.Resampling.LANCZOS)

    left = (new_width - size) // 2
    top = (new_height - size) // 2
    return img.crop((left, top, left + size, top + size))


def process_logo(url: str, output_path, size: int = config.LOGO_SIZE):
    """Fetch a logo and save it as a size x size PNG at output_path."""
    img = cover_square(download_image(url), size)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    img.save(output_path, "PNG", optimize=True)
    return output_path
