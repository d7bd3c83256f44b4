"""Ranked free-text search over posts.

Every post is scored against the set of query tokens. A field earns its
high weight when it contains all tokens and its low weight when it contains
at least one. A post whose slug equals the slugified query starts from a
base score that outranks any combination of field matches.

The weights below are part of the observable ordering; changing one changes
search results for clients.
"""
from dataclasses import dataclass

from app.models.post_model import Post
from app.services.paging import DEFAULT_LIMIT, normalize_limit
from app.services.slug_service import slugify


SLUG_EXACT_SCORE = 100
SLUG_PARTIAL_BONUS = 10
HEADER_WEIGHTS = (24, 12)
CONTENT_WEIGHTS = (16, 8)
USER_NAME_WEIGHTS = (6, 3)
TAG_WEIGHTS = (10, 5)


@dataclass(frozen=True)
class SearchHit:
    post: Post
    score: int
    slug_exact_match: bool


def tokenize(query) -> frozenset[str]:
    return frozenset((query or "").lower().split())


def _contains_all(value: str, tokens) -> bool:
    return all(token in value for token in tokens)


def _contains_any(value: str, tokens) -> bool:
    return any(token in value for token in tokens)


def score_field(value: str, tokens, weights: tuple[int, int]) -> int:
    if not value:
        return 0
    weight_all, weight_any = weights
    if _contains_all(value, tokens):
        return weight_all
    if _contains_any(value, tokens):
        return weight_any
    return 0


def score_post(post: Post, tokens, slug_candidate: str) -> SearchHit:
    slug = (post.slug or "").lower()
    slug_exact_match = bool(slug_candidate) and slug == slug_candidate

    score = SLUG_EXACT_SCORE if slug_exact_match else 0
    score += score_field((post.header or "").lower(), tokens, HEADER_WEIGHTS)
    score += score_field((post.content or "").lower(), tokens, CONTENT_WEIGHTS)
    score += score_field((post.user_name or "").lower(), tokens, USER_NAME_WEIGHTS)

    # Best tag only; several matching tags do not add up.
    score += max(
        (score_field((tag or "").lower(), tokens, TAG_WEIGHTS) for tag in post.tags),
        default=0,
    )

    if not slug_exact_match and _contains_any(slug, tokens):
        score += SLUG_PARTIAL_BONUS

    return SearchHit(post=post, score=score, slug_exact_match=slug_exact_match)


def rank(query, posts) -> list[SearchHit]:
    raw = str(query or "").strip()
    tokens = tokenize(raw)
    if not tokens:
        return []

    slug_candidate = slugify(raw)
    hits = [score_post(post, tokens, slug_candidate) for post in posts]
    hits = [hit for hit in hits if hit.slug_exact_match or hit.score > 0]

    return sorted(
        hits,
        key=lambda hit: (
            not hit.slug_exact_match,
            -hit.score,
            -hit.post.created_at.timestamp(),
        ),
    )


def search(query, posts, limit=DEFAULT_LIMIT) -> list[Post]:
    limit = normalize_limit(limit)
    return [hit.post for hit in rank(query, posts)[:limit]]
