"""Best-effort downscale and JPEG recompression for profile photos."""

import io
import logging

from PIL import Image

logger = logging.getLogger(__name__)


def optimize_image(data: bytes, max_dimension: int = 320, quality: int = 80) -> bytes:
    """Fit data within max_dimension (keeping aspect ratio) and re-encode as JPEG.

    Returns data unchanged if it cannot be decoded or re-encoding does not
    make it smaller.
    """
    if not data:
        return data
    try:
        img = Image.open(io.BytesIO(data))
        img.load()
        if max(img.size) > max_dimension:
            scale = max_dimension / max(img.size)
            new_size = (max(1, int(img.size[0] * scale)), max(1, int(img.size[1] * scale)))
            img = img.resize(new_size, Image.Resampling.LANCZOS)
        if img.mode not in ("RGB", "L"):
            img = img.convert("RGB")
        buf = io.BytesIO()
        img.save(buf, format="JPEG", quality=quality, optimize=True)
        optimized = buf.getvalue()
    except Exception as e:
        logger.warning("Photo optimization failed, keeping original: %s", e)
        return data
    if len(optimized) >= len(data):
        return data
    return optimized
