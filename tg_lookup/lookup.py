"""Batch lookup pipeline: normalize, import, resolve photos, aggregate."""

import asyncio
import logging

from tg_lookup.config import NAMES_PRESERVE, Settings
from tg_lookup.housekeeping import prune_contacts
from tg_lookup.importer import import_batch, saved_names
from tg_lookup.models import LookupResult, PhoneInput, ResolvedUser
from tg_lookup.optimizer import optimize_image
from tg_lookup.phone import normalize_phone
from tg_lookup.photos import resolve_photo

logger = logging.getLogger(__name__)

CANNOT_NORMALIZE = "Cannot normalize phone to +2519XXXXXXXX format"
NOT_FOUND = "User not found, not on Telegram, or not visible"


def build_inputs(phones, names=None) -> list[PhoneInput]:
    """Pair phones with index-aligned names; non-string names are ignored."""
    names = names if isinstance(names, list) else []
    inputs = []
    for i, raw in enumerate(phones):
        name = names[i] if i < len(names) and isinstance(names[i], str) else ""
        inputs.append(PhoneInput(index=i, raw=raw, name=name.strip()))
    return inputs


async def run_lookup(
    platform,
    inputs: list[PhoneInput],
    settings: Settings,
    sleep=asyncio.sleep,
    optimizer=optimize_image,
) -> list[LookupResult]:
    """Look up every non-blank input and return one result per input, in order."""
    prune = await prune_contacts(platform, settings.contact_limit)
    logger.info("Contacts housekeeping: %s (count=%s)", prune.status, prune.count)
    existing_names = saved_names(prune.contacts) if settings.name_policy == NAMES_PRESERVE else {}

    results: dict[int, LookupResult] = {}
    pending = []
    for entry in inputs:
        raw = (entry.raw or "").strip()
        if not raw:
            continue
        canonical = normalize_phone(raw)
        if canonical is None:
            results[entry.index] = LookupResult(entry.index, raw, error=CANNOT_NORMALIZE)
            continue
        pending.append((entry, canonical))

    size = settings.batch_size
    batches = [pending[i:i + size] for i in range(0, len(pending), size)]
    for number, batch in enumerate(batches, start=1):
        if number > 1:
            await sleep(settings.batch_delay)
        logger.info("Processing batch %d/%d: %d numbers", number, len(batches), len(batch))
        for result in await _process_batch(platform, batch, settings, existing_names, sleep, optimizer):
            results[result.index] = result

    return [results[i] for i in sorted(results)]


async def _process_batch(platform, batch, settings, existing_names, sleep, optimizer):
    imported = await import_batch(
        platform,
        [(canonical, entry.name) for entry, canonical in batch],
        placeholder=settings.placeholder_name,
        name_policy=settings.name_policy,
        existing_names=existing_names,
        flood_wait_cap=settings.flood_wait_cap,
        sleep=sleep,
    )

    users = {user.id: user for user in imported.users.values()}

    async def fetch(user):
        try:
            return await resolve_photo(platform, user, settings, optimizer=optimizer), None
        except Exception as e:
            logger.warning("Photo fetch failed for user %s: %s", user.id, e)
            return None, f"Photo fetch error: {e}"

    outcomes = await asyncio.gather(*(fetch(user) for user in users.values()))
    photos = dict(zip(users, outcomes))

    not_found = NOT_FOUND
    if imported.error:
        not_found = f"{NOT_FOUND} (import failed: {imported.error})"

    results = []
    for entry, canonical in batch:
        user = imported.users.get(canonical)
        if user is None:
            results.append(LookupResult(entry.index, canonical, error=not_found))
            continue
        descriptor, error = photos[user.id]
        results.append(
            LookupResult(
                entry.index,
                canonical,
                user=ResolvedUser.from_telegram(user),
                photos=[descriptor] if descriptor is not None else [],
                error=error,
            )
        )

    if settings.cleanup_after_batch and users:
        try:
            await platform.delete_contacts(list(users))
        except Exception as e:
            logger.warning("Deleting imported contacts failed: %s", e)
    return results
