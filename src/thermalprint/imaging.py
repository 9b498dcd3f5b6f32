"""Image loading and monochrome rasterization for thermal printing."""

import asyncio
import base64
import binascii
import io
import logging
from pathlib import Path
from typing import Any
from urllib.parse import unquote, unquote_to_bytes, urlparse

import aiohttp
from PIL import Image, UnidentifiedImageError

from thermalprint.adapters.base import Raster
from thermalprint.errors import ImageDecodeError

logger = logging.getLogger(__name__)

# Timeout for fetching remote images (seconds)
FETCH_TIMEOUT = 10.0


def get_image_source(props: dict[str, Any]) -> Any:
    """Get the image source reference from image node props.

    Supports ``source``/``src`` given as a string, bytes or ``{"uri": ...}``.
    """
    source = props.get("source", props.get("src"))
    if isinstance(source, dict):
        source = source.get("uri")
    return source


def _decode_data_uri(uri: str) -> bytes:
    """Decode a ``data:[<mime>][;base64],<payload>`` URI."""
    header, sep, payload = uri.partition(",")
    if not sep:
        raise ImageDecodeError("Malformed data URI: missing ',' separator")
    if header.endswith(";base64"):
        try:
            return base64.b64decode(payload, validate=False)
        except (binascii.Error, ValueError) as e:
            raise ImageDecodeError(f"Invalid base64 image data: {e}") from e
    return unquote_to_bytes(payload)


async def _fetch_url(url: str) -> bytes:
    """Download an image over HTTP(S)."""
    timeout = aiohttp.ClientTimeout(total=FETCH_TIMEOUT)
    try:
        async with aiohttp.ClientSession(timeout=timeout) as session:
            async with session.get(url) as resp:
                if resp.status != 200:
                    raise ImageDecodeError(f"Failed to fetch image {url}: HTTP {resp.status}")
                return await resp.read()
    except (aiohttp.ClientError, TimeoutError) as e:
        raise ImageDecodeError(f"Failed to fetch image {url}: {e}") from e


async def _read_file(path: Path) -> bytes:
    loop = asyncio.get_running_loop()
    try:
        return await loop.run_in_executor(None, path.read_bytes)
    except OSError as e:
        raise ImageDecodeError(f"Failed to read image file {path}: {e}") from e


async def load_image_bytes(source: Any) -> bytes:
    """Resolve an image source reference to encoded image bytes.

    Accepted sources: raw bytes, data URIs, ``http(s)://`` URLs,
    ``file://`` URIs, filesystem paths and bare base64 strings.

    Raises:
        ImageDecodeError: If the source is missing or unreadable.
    """
    if isinstance(source, bytes | bytearray):
        return bytes(source)
    if not isinstance(source, str) or not source.strip():
        raise ImageDecodeError(f"Image node has no usable source: {source!r}")

    source = source.strip()
    if source.startswith("data:"):
        return _decode_data_uri(source)

    scheme = urlparse(source).scheme.lower()
    if scheme in ("http", "https"):
        logger.debug(f"Fetching image from {source}")
        return await _fetch_url(source)
    if scheme == "file":
        return await _read_file(Path(unquote(urlparse(source).path)))

    path = Path(source)
    if len(source) < 4096 and path.suffix and path.exists():
        return await _read_file(path)

    try:
        return base64.b64decode(source, validate=True)
    except (binascii.Error, ValueError) as e:
        raise ImageDecodeError("Image source is not a data URI, URL, file or base64 string") from e


def decode_image(data: bytes) -> Image.Image:
    """Decode encoded image bytes with Pillow.

    Raises:
        ImageDecodeError: If the data is not a readable image.
    """
    try:
        image = Image.open(io.BytesIO(data))
        image.load()
    except (UnidentifiedImageError, Image.DecompressionBombError, OSError, ValueError) as e:
        raise ImageDecodeError(f"Failed to decode image: {e}") from e
    return image


def image_to_raster(
    image: Image.Image,
    max_width: int,
    threshold: int = 128,
    target_width: int | None = None,
) -> Raster:
    """Convert an image to a printable monochrome raster.

    The image is flattened onto white, scaled down to fit ``max_width``
    dots (or to ``target_width`` when given) keeping its aspect ratio,
    converted to grayscale and thresholded to 1 bit.

    Args:
        image: PIL Image in any mode.
        max_width: Printable width in dots.
        threshold: Gray level below which a dot is printed.
        target_width: Requested width in dots, capped at ``max_width``.

    Returns:
        Packed raster, one set bit per black dot.
    """
    # Flatten transparency onto a white background
    if image.mode in ("RGBA", "LA", "P", "PA"):
        rgba = image.convert("RGBA")
        background = Image.new("RGBA", rgba.size, (255, 255, 255, 255))
        image = Image.alpha_composite(background, rgba)

    width, height = image.size
    limit = max(1, max_width)
    if target_width is not None and target_width > 0:
        limit = min(limit, target_width)

    if width > limit or (target_width is not None and width != limit):
        ratio = limit / width
        new_height = max(1, int(round(height * ratio)))
        image = image.resize((limit, new_height), Image.Resampling.LANCZOS)

    gray = image.convert("L")

    # Mode "1" packs 8 dots per byte MSB-first with rows padded to whole bytes;
    # dark pixels are mapped to 1 so a set bit prints.
    mono = gray.point(lambda p: 255 if p < threshold else 0, mode="1")

    raster = Raster(width=mono.width, height=mono.height, data=mono.tobytes())
    raster.validate()
    return raster


class ImageLoader:
    """Loads image node sources and decodes them into PIL images."""

    async def load(self, source: Any) -> Image.Image:
        """Load and decode an image source.

        Raises:
            ImageDecodeError: If the source cannot be read or decoded.
        """
        data = await load_image_bytes(source)
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, decode_image, data)
