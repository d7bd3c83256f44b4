from dataclasses import dataclass

from app.models.post_model import coerce_id


@dataclass
class User:
    id: int
    username: str
    name: str
    password_hash: str
    img_profile: str | None = None

    def to_dict(self):
        data = {
            "id": self.id,
            "username": self.username,
            "name": self.name,
            "passwordHash": self.password_hash,
        }
        if self.img_profile is not None:
            data["imgProfile"] = self.img_profile
        return data

    def to_public_dict(self):
        return {
            "id": self.id,
            "username": self.username,
            "name": self.name,
            "imgProfile": self.img_profile,
        }

    @classmethod
    def from_dict(cls, data):
        return cls(
            id=coerce_id(data.get("id")),
            username=data.get("username") or "",
            name=data.get("name") or data.get("username") or "",
            password_hash=data.get("passwordHash") or "",
            img_profile=data.get("imgProfile"),
        )
