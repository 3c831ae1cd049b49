"""Request/response records passed between the lookup stages."""

import base64
from dataclasses import dataclass, field

DEFAULT_MIME = "image/jpeg"


@dataclass(frozen=True)
class PhoneInput:
    index: int
    raw: str
    name: str = ""


@dataclass(frozen=True)
class ResolvedUser:
    id: int
    username: str | None
    first_name: str | None
    last_name: str | None
    phone: str | None
    bot: bool = False

    @classmethod
    def from_telegram(cls, user) -> "ResolvedUser":
        phone = getattr(user, "phone", None)
        if phone and not phone.startswith("+"):
            phone = f"+{phone}"
        return cls(
            id=user.id,
            username=getattr(user, "username", None),
            first_name=getattr(user, "first_name", None),
            last_name=getattr(user, "last_name", None),
            phone=phone,
            bot=bool(getattr(user, "bot", False)),
        )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "username": self.username,
            "first_name": self.first_name,
            "last_name": self.last_name,
            "phone": self.phone,
            "bot": self.bot,
        }


@dataclass(frozen=True)
class PhotoDescriptor:
    """Either inline bytes (data) or a saved file (filename + url)."""

    mime: str = DEFAULT_MIME
    data: bytes | None = None
    filename: str | None = None
    url: str | None = None

    @property
    def data_uri(self) -> str | None:
        if self.data is None:
            return None
        encoded = base64.b64encode(self.data).decode("ascii")
        return f"data:{self.mime};base64,{encoded}"

    def to_dict(self) -> dict:
        if self.data is not None:
            return {"data_uri": self.data_uri, "mime": self.mime}
        return {"file": self.filename, "url": self.url, "mime": self.mime}


@dataclass
class LookupResult:
    index: int
    phone: str
    user: ResolvedUser | None = None
    photos: list[PhotoDescriptor] = field(default_factory=list)
    error: str | None = None

    def to_dict(self) -> dict:
        return {
            "phone": self.phone,
            "user": self.user.to_dict() if self.user else None,
            "photos": [p.to_dict() for p in self.photos],
            "error": self.error,
        }
