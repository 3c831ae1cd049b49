"""Log in once and print the session string to put in SESSION_STRING."""

from telethon.sync import TelegramClient
from telethon.sessions import StringSession

from tg_lookup.config import Settings

settings = Settings.from_env()
api_id = settings.api_id or input("Enter your API ID: ")
api_hash = settings.api_hash or input("Enter your API Hash: ")

# start() prompts for phone, login code and 2FA password as needed
with TelegramClient(StringSession(), int(api_id), api_hash) as client:
    me = client.get_me()
    print(f"\nLogged in as {me.first_name} (id {me.id})")
    print("\nYour session string (save this as SESSION_STRING):\n")
    print(client.session.save())
