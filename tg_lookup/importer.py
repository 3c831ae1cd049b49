"""Register a batch of canonical phones as contacts and map them to users."""

import asyncio
import logging
from dataclasses import dataclass, field

from telethon.errors import FloodWaitError

from tg_lookup.config import NAMES_OVERWRITE, NAMES_PRESERVE

logger = logging.getLogger(__name__)


@dataclass
class ImportResult:
    users: dict = field(default_factory=dict)  # canonical phone -> telethon User
    error: str | None = None


def _canonical(phone: str | None) -> str | None:
    if not phone:
        return None
    return phone if phone.startswith("+") else f"+{phone}"


def saved_names(contacts) -> dict[str, tuple[str, str]]:
    """Map canonical phone -> (first_name, last_name) of already saved contacts."""
    names = {}
    for user in contacts:
        phone = _canonical(getattr(user, "phone", None))
        if phone:
            names[phone] = (user.first_name or "", user.last_name or "")
    return names


async def import_batch(
    platform,
    batch,
    placeholder: str = "Imported",
    name_policy: str = NAMES_OVERWRITE,
    existing_names=None,
    flood_wait_cap: float = 30.0,
    sleep=asyncio.sleep,
) -> ImportResult:
    """Import (canonical_phone, display_name) pairs in one request.

    Phones the platform does not return a user for are simply absent from
    the mapping. If the request itself fails the mapping is empty and the
    failure is reported in ImportResult.error.
    """
    existing_names = existing_names or {}
    entries = []
    seen = set()
    for phone, name in batch:
        if phone in seen:
            continue
        seen.add(phone)
        if name_policy == NAMES_PRESERVE and phone in existing_names:
            first, last = existing_names[phone]
        else:
            first, last = (name or "").strip() or placeholder, ""
        entries.append((phone.lstrip("+"), first, last))

    try:
        users = await platform.import_contacts(entries)
    except FloodWaitError as e:
        logger.warning("Rate limited! Waiting %s seconds...", e.seconds)
        await sleep(min(e.seconds, flood_wait_cap))
        return ImportResult(error=f"Rate limited. Try again in {e.seconds} seconds.")
    except Exception as e:
        logger.warning("Batch import failed: %s", e)
        return ImportResult(error=str(e))

    mapped = {}
    for user in users:
        phone = _canonical(getattr(user, "phone", None))
        if phone in seen:
            mapped[phone] = user
    return ImportResult(users=mapped)
