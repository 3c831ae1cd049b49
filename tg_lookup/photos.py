"""Fetch at most one profile photo for a resolved user."""

import logging

from tg_lookup.config import OUTPUT_FILE, SIZE_SMALLEST, Settings
from tg_lookup.models import DEFAULT_MIME, PhotoDescriptor
from tg_lookup.optimizer import optimize_image

logger = logging.getLogger(__name__)


def smallest_size(photo):
    """Smallest entry of photo.sizes by width*height, or None.

    Stripped and path thumbnails have no dimensions and are skipped.
    """
    smallest = None
    smallest_area = None
    for size in getattr(photo, "sizes", None) or []:
        w = getattr(size, "w", None)
        h = getattr(size, "h", None)
        if not w or not h:
            continue
        if smallest is None or w * h < smallest_area:
            smallest, smallest_area = size, w * h
    return smallest


async def resolve_photo(platform, user, settings: Settings, optimizer=optimize_image):
    """Return a PhotoDescriptor for the user's first photo, or None if none is visible.

    Download errors propagate; the caller records them on the entry.
    """
    photos = await platform.get_user_photos(user, limit=1)
    if not photos:
        return None
    photo = photos[0]

    size = smallest_size(photo) if settings.photo_size_policy == SIZE_SMALLEST else None
    optimize = settings.optimize_photos and optimizer is not None

    if settings.output_mode == OUTPUT_FILE:
        filename = f"{user.id}_{photo.id}.jpg"
        path = settings.photo_dir / filename
        settings.photo_dir.mkdir(parents=True, exist_ok=True)
        if not optimize:
            await platform.download_to_file(photo, path, size=size)
            if not path.exists() or path.stat().st_size == 0:
                return None
            return PhotoDescriptor(mime=DEFAULT_MIME, filename=filename, url=settings.photo_url(filename))

    data = await platform.download_to_bytes(photo, size=size)
    if not data:
        return None
    if optimize:
        data = _optimize(optimizer, data, settings, user.id)

    if settings.output_mode != OUTPUT_FILE:
        return PhotoDescriptor(mime=DEFAULT_MIME, data=data)
    path.write_bytes(data)
    return PhotoDescriptor(mime=DEFAULT_MIME, filename=filename, url=settings.photo_url(filename))


def _optimize(optimizer, data: bytes, settings: Settings, user_id) -> bytes:
    try:
        return optimizer(data, settings.photo_max_dimension, settings.photo_quality) or data
    except Exception as e:
        logger.warning("Optimizer failed for user %s: %s", user_id, e)
        return data
