import re
from datetime import datetime
from enum import Enum

MAX_SLUG_LENGTH = 40

# ö keeps its umlaut here; the ASCII filter below drops it afterwards
REPLACEMENTS = (
    ("ü", "ue"),
    ("ä", "ae"),
    ("ö", "öe"),
    ("ß", "ss"),
)

NON_WORD_RE = re.compile(r'[^\w\s-]', re.ASCII)
SEPARATOR_RE = re.compile(r'[\s_-]+', re.ASCII)
EDGE_HYPHENS_RE = re.compile(r'^-+|-+$')


class SlugMode(str, Enum):
    TITLE = "title"
    FILENAME = "filename"


def slug_from_filename(filename: str) -> str:
    """Drop the last dot-separated segment: 'my-post.md' -> 'my-post'."""
    return ".".join(filename.split(".")[:-1])


def slugify(title: str) -> str:
    slug = title.lower().strip()
    for old, new in REPLACEMENTS:
        slug = slug.replace(old, new)
    slug = NON_WORD_RE.sub("", slug)
    slug = SEPARATOR_RE.sub("-", slug)
    return EDGE_HYPHENS_RE.sub("", slug)


def truncate_slug(slug: str, limit: int = MAX_SLUG_LENGTH) -> str:
    """Cut `slug` to `limit` chars, dropping the last (partial) word."""
    if len(slug) < limit:
        return slug
    # No hyphen inside the limit leaves an empty slug (date prefix only)
    return "-".join(slug[:limit].split("-")[:-1])


def generate_url(date: datetime, title: str, filename: str, mode: SlugMode = SlugMode.TITLE) -> str:
    """Build the URL segment for a post."""
    if SlugMode(mode) is SlugMode.FILENAME:
        return slug_from_filename(filename)

    return f"{date.strftime('%Y-%m-%d')}-{truncate_slug(slugify(title))}"
