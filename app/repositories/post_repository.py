import logging

from app.errors import NotFoundError, UnauthorizedError
from app.extensions.document_store import DocumentStore
from app.models.post_model import OwnerContext, Post, coerce_id, utcnow
from app.services import search_service
from app.services.paging import DEFAULT_LIMIT, DEFAULT_OFFSET, normalize_limit, normalize_offset
from app.services.slug_service import slugify


logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = ("header", "content", "cover_img", "tags")


def _newest_first(posts):
    return sorted(posts, key=lambda post: post.created_at.timestamp(), reverse=True)


class PostRepository:
    """Query and mutation API over the post collection.

    Every mutation runs inside ``DocumentStore.transaction`` so read, change
    and write happen under the store lock and two writers can never
    interleave.
    """

    def __init__(self, store: DocumentStore, clock=utcnow):
        self._store = store
        self._clock = clock

    def _now(self):
        # Records keep millisecond precision.
        now = self._clock()
        return now.replace(microsecond=now.microsecond // 1000 * 1000)

    def _load(self) -> list[Post]:
        return [Post.from_dict(record) for record in self._store.read()]

    def list_posts(self, limit=DEFAULT_LIMIT, offset=DEFAULT_OFFSET) -> list[Post]:
        limit = normalize_limit(limit)
        offset = normalize_offset(offset)
        return _newest_first(self._load())[offset:offset + limit]

    def count(self) -> int:
        return len(self._store.read())

    def get(self, post_id: int) -> Post:
        for post in self._load():
            if post.id == post_id:
                return post
        raise NotFoundError("Post not found")

    def get_by_slug(self, slug: str) -> Post:
        # Slugs are not unique; the first stored match wins.
        for post in self._load():
            if post.slug == slug:
                return post
        raise NotFoundError("Post not found")

    def search(self, query, limit=DEFAULT_LIMIT) -> list[Post]:
        return search_service.search(query, _newest_first(self._load()), limit)

    def create(self, fields: dict, owner: OwnerContext) -> Post:
        with self._store.transaction() as snapshot:
            highest = max((coerce_id(record.get("id")) for record in snapshot.records), default=0)
            post_id = max(highest, snapshot.last_id) + 1

            slug = slugify(fields.get("slug")) or slugify(fields["header"]) or f"post-{post_id}"
            post = Post(
                id=post_id,
                header=fields["header"],
                content=fields.get("content") or "",
                slug=slug,
                created_at=self._now(),
                user_id=owner.id,
                user_name=owner.username,
                cover_img=fields.get("cover_img") or "",
                tags=list(fields.get("tags") or []),
                user_img=owner.avatar_ref,
            )
            snapshot.records.append(post.to_dict())
            snapshot.last_id = post_id

        logger.info("Created post %s (%s) for user %s", post.id, post.slug, owner.id)
        return post

    def update(self, post_id: int, fields: dict, owner: OwnerContext) -> Post:
        with self._store.transaction() as snapshot:
            index, current = self._find_owned(snapshot.records, post_id, owner)

            for name in UPDATABLE_FIELDS:
                if fields.get(name) is not None:
                    setattr(current, name, fields[name])

            # A new header never re-derives the slug; only an explicit one does.
            new_slug = slugify(fields.get("slug"))
            if new_slug:
                current.slug = new_slug

            current.updated_at = self._now()
            snapshot.records[index] = current.to_dict()

        logger.info("Updated post %s for user %s", post_id, owner.id)
        return current

    def remove(self, post_id: int, owner: OwnerContext) -> None:
        with self._store.transaction() as snapshot:
            index, _ = self._find_owned(snapshot.records, post_id, owner)
            del snapshot.records[index]

        logger.info("Removed post %s for user %s", post_id, owner.id)

    @staticmethod
    def _find_owned(records, post_id: int, owner: OwnerContext):
        for index, record in enumerate(records):
            if coerce_id(record.get("id")) == post_id:
                post = Post.from_dict(record)
                if post.user_id != owner.id:
                    raise UnauthorizedError("Not allowed")
                return index, post
        raise NotFoundError("Post not found")
