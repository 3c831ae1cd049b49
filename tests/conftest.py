"""In-memory stand-in for TelegramPlatform; no network."""

from types import SimpleNamespace

import pytest

from tg_lookup.config import Settings


def make_user(user_id, phone, first_name="Abebe", username=None, bot=False):
    # Telegram returns phones without the leading +
    return SimpleNamespace(
        id=user_id,
        phone=phone.lstrip("+"),
        first_name=first_name,
        last_name=None,
        username=username,
        bot=bot,
    )


def make_photo(photo_id, sizes=((160, 160), (640, 640))):
    return SimpleNamespace(
        id=photo_id,
        sizes=[SimpleNamespace(type=f"s{w}", w=w, h=h) for w, h in sizes],
    )


class FakePlatform:
    def __init__(self, accounts=None, photos=None, contacts=None):
        self.accounts = dict(accounts or {})  # canonical phone -> user
        self.photos = dict(photos or {})  # user id -> [photo]
        self.contacts = list(contacts or [])
        self.import_calls = []
        self.photo_calls = []
        self.downloads = []
        self.deleted = []
        self.resets = 0
        self.import_error = None
        self.contacts_error = None
        self.download_errors = {}  # user id -> exception

    async def get_contacts(self):
        if self.contacts_error:
            raise self.contacts_error
        return list(self.contacts)

    async def reset_saved_contacts(self):
        self.resets += 1
        self.contacts = []

    async def delete_contacts(self, user_ids):
        self.deleted.extend(user_ids)

    async def import_contacts(self, entries):
        self.import_calls.append(list(entries))
        if self.import_error:
            raise self.import_error
        users = []
        for phone, _first, _last in entries:
            user = self.accounts.get(f"+{phone}")
            if user is not None:
                users.append(user)
        return users

    async def get_user_photos(self, user, limit=1):
        self.photo_calls.append((user.id, limit))
        return self.photos.get(user.id, [])[:limit]

    async def download_to_bytes(self, photo, size=None):
        self.downloads.append((photo.id, size))
        for user_id, photos in self.photos.items():
            if photo in photos and user_id in self.download_errors:
                raise self.download_errors[user_id]
        return b"photo-%d" % photo.id

    async def download_to_file(self, photo, path, size=None):
        self.downloads.append((photo.id, size))
        path.write_bytes(b"photo-%d" % photo.id)
        return str(path)


@pytest.fixture
def settings():
    return Settings(
        api_id=1,
        api_hash="hash",
        session_string="session",
        batch_delay=0,
        optimize_photos=False,
    )


@pytest.fixture
def no_sleep():
    calls = []

    async def sleep(seconds):
        calls.append(seconds)

    sleep.calls = calls
    return sleep
