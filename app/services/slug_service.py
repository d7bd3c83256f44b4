import re


_DISALLOWED = re.compile(r"[^a-z0-9\s-]")
_WHITESPACE = re.compile(r"\s+")
_HYPHENS = re.compile(r"-+")


def slugify(text) -> str:
    """Turn free text into a URL-safe slug.

    Returns an empty string when nothing survives the filtering; callers
    decide what to do with that.
    """
    value = (text or "").lower().strip()
    value = _DISALLOWED.sub("", value)
    value = _WHITESPACE.sub("-", value)
    return _HYPHENS.sub("-", value)
