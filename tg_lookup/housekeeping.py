"""Keep the lookup account's saved-contact list under a fixed size."""

import logging
from dataclasses import dataclass, field

logger = logging.getLogger(__name__)

PRUNED = "pruned"
SKIPPED = "skipped"
FAILED = "failed"


@dataclass
class PruneResult:
    status: str
    count: int | None = None
    # Saved contacts as seen before pruning; empty once they were reset.
    contacts: list = field(default_factory=list)
    error: str | None = None


async def prune_contacts(platform, limit: int) -> PruneResult:
    """Reset all saved contacts when there are more than limit. Never raises."""
    try:
        contacts = await platform.get_contacts()
    except Exception as e:
        logger.warning("Contact count check failed: %s", e)
        return PruneResult(FAILED, error=str(e))

    count = len(contacts)
    if count <= limit:
        return PruneResult(SKIPPED, count=count, contacts=contacts)

    logger.info("Saved contacts %d > %d, resetting", count, limit)
    try:
        await platform.reset_saved_contacts()
    except Exception as e:
        logger.warning("Contacts cleanup failed: %s", e)
        return PruneResult(FAILED, count=count, contacts=contacts, error=str(e))
    return PruneResult(PRUNED, count=count)
