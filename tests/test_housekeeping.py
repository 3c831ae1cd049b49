"""Tests for saved-contact pruning."""

import asyncio

from conftest import FakePlatform, make_user
from tg_lookup.housekeeping import FAILED, PRUNED, SKIPPED, prune_contacts


def _contacts(n):
    return [make_user(i, f"+2519{i:08d}") for i in range(n)]


def test_below_limit_is_skipped():
    platform = FakePlatform(contacts=_contacts(3))
    result = asyncio.run(prune_contacts(platform, limit=3))
    assert result.status == SKIPPED
    assert result.count == 3
    assert len(result.contacts) == 3
    assert platform.resets == 0


def test_above_limit_resets_all_contacts():
    platform = FakePlatform(contacts=_contacts(4))
    result = asyncio.run(prune_contacts(platform, limit=3))
    assert result.status == PRUNED
    assert result.count == 4
    assert result.contacts == []
    assert platform.resets == 1


def test_count_failure_is_reported_not_raised():
    platform = FakePlatform()
    platform.contacts_error = ConnectionError("network down")
    result = asyncio.run(prune_contacts(platform, limit=3))
    assert result.status == FAILED
    assert "network down" in result.error
    assert platform.resets == 0


def test_reset_failure_is_reported_not_raised():
    class BrokenReset(FakePlatform):
        async def reset_saved_contacts(self):
            raise RuntimeError("FLOOD_WAIT")

    platform = BrokenReset(contacts=_contacts(5))
    result = asyncio.run(prune_contacts(platform, limit=1))
    assert result.status == FAILED
    assert result.count == 5
