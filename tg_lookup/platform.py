"""Thin wrapper over the Telethon requests the lookup pipeline needs."""

import logging
from contextlib import asynccontextmanager

from telethon import TelegramClient
from telethon.sessions import StringSession
from telethon.tl.functions.contacts import (
    DeleteContactsRequest,
    GetContactsRequest,
    ImportContactsRequest,
    ResetSavedRequest,
)
from telethon.tl.functions.photos import GetUserPhotosRequest
from telethon.tl.types import InputPhoneContact

from tg_lookup.config import Settings
from tg_lookup.errors import ConfigurationError, SessionNotInitialized

logger = logging.getLogger(__name__)


class TelegramPlatform:
    """The operations the pipeline performs against one authorized client."""

    def __init__(self, client: TelegramClient):
        self.client = client

    async def get_contacts(self) -> list:
        result = await self.client(GetContactsRequest(hash=0))
        # contacts.contactsNotModified carries no users
        return list(getattr(result, "users", []) or [])

    async def reset_saved_contacts(self) -> None:
        await self.client(ResetSavedRequest())

    async def delete_contacts(self, user_ids: list[int]) -> None:
        if user_ids:
            await self.client(DeleteContactsRequest(id=user_ids))

    async def import_contacts(self, entries: list[tuple[str, str, str]]) -> list:
        """Import (phone, first_name, last_name) entries; return the matched users."""
        contacts = [
            InputPhoneContact(client_id=idx, phone=phone, first_name=first, last_name=last)
            for idx, (phone, first, last) in enumerate(entries)
        ]
        result = await self.client(ImportContactsRequest(contacts))
        return list(result.users)

    async def get_user_photos(self, user, limit: int = 1) -> list:
        result = await self.client(
            GetUserPhotosRequest(user_id=user, offset=0, max_id=0, limit=limit)
        )
        return list(result.photos)

    async def download_to_bytes(self, photo, size=None) -> bytes:
        return await self.client.download_media(photo, file=bytes, thumb=_thumb(size))

    async def download_to_file(self, photo, path, size=None):
        return await self.client.download_media(photo, file=str(path), thumb=_thumb(size))


def _thumb(size):
    # download_media only matches PhotoSizeProgressive by its type letter
    return size.type if size is not None else None


def build_client(settings: Settings) -> TelegramClient:
    settings.require_credentials()
    if settings.session_string:
        session = StringSession(settings.session_string)
    else:
        session = str(settings.session_file)
    return TelegramClient(session, settings.api_id, settings.api_hash)


@asynccontextmanager
async def open_platform(settings: Settings, client_factory=build_client):
    """Connect once, check authorization, and always disconnect."""
    client = client_factory(settings)
    try:
        await client.connect()
    except Exception as e:
        raise ConfigurationError(f"Telegram client init failed: {e}") from e
    try:
        if not await client.is_user_authorized():
            raise SessionNotInitialized("Session not authorized. Run generate_session.py and log in.")
        yield TelegramPlatform(client)
    finally:
        await client.disconnect()
