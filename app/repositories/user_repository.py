from app.errors import NotFoundError
from app.extensions.document_store import DocumentStore
from app.models.post_model import coerce_id
from app.models.user_model import User


class UserRepository:
    def __init__(self, store: DocumentStore):
        self._store = store

    def _load(self):
        return [User.from_dict(record) for record in self._store.read()]

    def get_by_id(self, user_id: int):
        return next((user for user in self._load() if user.id == user_id), None)

    def get_by_username(self, username: str):
        return next((user for user in self._load() if user.username == username), None)

    def create_user(self, username, password_hash, name=None, img_profile=None):
        with self._store.transaction() as snapshot:
            if any(record.get("username") == username for record in snapshot.records):
                raise ValueError("Username already exists")

            highest = max((coerce_id(record.get("id")) for record in snapshot.records), default=0)
            user = User(
                id=max(highest, snapshot.last_id) + 1,
                username=username,
                name=(name or username).strip(),
                password_hash=password_hash,
                img_profile=img_profile,
            )
            snapshot.records.append(user.to_dict())
            snapshot.last_id = user.id

        return user

    def update_img_profile(self, user_id: int, img_profile: str):
        with self._store.transaction() as snapshot:
            for index, record in enumerate(snapshot.records):
                if coerce_id(record.get("id")) == user_id:
                    user = User.from_dict(record)
                    user.img_profile = img_profile
                    snapshot.records[index] = user.to_dict()
                    break
            else:
                raise NotFoundError("User not found")

        return user
