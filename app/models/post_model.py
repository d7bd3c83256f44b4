from dataclasses import dataclass, field
from datetime import datetime, timezone


EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def format_timestamp(value: datetime) -> str:
    return value.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def coerce_id(value) -> int:
    """Read a stored id as an int; anything unreadable counts as 0."""
    if isinstance(value, bool):
        return 0
    try:
        return int(value)
    except (TypeError, ValueError):
        return 0


def parse_timestamp(value):
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, str) and value.strip():
        text = value.strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError:
            return None
    else:
        return None

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


@dataclass(frozen=True)
class OwnerContext:
    """The acting identity as asserted by the identity provider."""

    id: int
    username: str
    avatar_ref: str | None = None


@dataclass
class Post:
    id: int
    header: str
    content: str
    slug: str
    created_at: datetime
    user_id: int
    user_name: str
    cover_img: str = ""
    tags: list[str] = field(default_factory=list)
    user_img: str | None = None
    updated_at: datetime | None = None

    def to_dict(self) -> dict:
        data = {
            "id": self.id,
            "header": self.header,
            "content": self.content,
            "coverImg": self.cover_img,
            "createdAt": format_timestamp(self.created_at),
            "tags": list(self.tags),
            "slug": self.slug,
            "userId": self.user_id,
            "userName": self.user_name,
        }
        if self.user_img is not None:
            data["userImg"] = self.user_img
        if self.updated_at is not None:
            data["updatedAt"] = format_timestamp(self.updated_at)
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "Post":
        tags = data.get("tags")
        return cls(
            id=coerce_id(data.get("id")),
            header=data.get("header") or "",
            content=data.get("content") or "",
            slug=data.get("slug") or "",
            created_at=parse_timestamp(data.get("createdAt")) or EPOCH,
            user_id=coerce_id(data.get("userId")),
            user_name=data.get("userName") or "",
            cover_img=data.get("coverImg") or "",
            tags=[str(tag) for tag in tags if tag is not None] if isinstance(tags, list) else [],
            user_img=data.get("userImg"),
            updated_at=parse_timestamp(data.get("updatedAt")),
        )
