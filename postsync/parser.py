import re
from pathlib import Path

from postsync.dates import parse_date
from postsync.errors import ContentReadError, MissingDateError, MissingTitleError
from postsync.models import PostRecord, PostStatus, json_escape
from postsync.slug import SlugMode, generate_url

FENCE = "+++"

FIELD_RE = re.compile(r'^\s*(?P<key>[A-Za-z0-9_-]+)\s*=\s*(?P<value>.*?)\s*$')
QUOTED_RE = re.compile(r'"([^"]*)"')


def parse_header(header: str) -> dict:
    """
    Read `key = value` lines from a front-matter header.

    Values are returned raw (trimmed, quotes kept). Comments, table headers
    and anything else that is not an assignment are skipped; the first
    assignment of a key wins.
    """
    fields = {}
    for line in header.splitlines():
        stripped = line.strip()
        if not stripped or stripped.startswith(("#", "[")):
            continue
        match = FIELD_RE.match(line)
        if match:
            fields.setdefault(match.group('key'), match.group('value'))
    return fields


def header_field(fields: dict, name: str):
    """Raw value of `name`, or None when the header does not set it."""
    return fields.get(name)


def split_front_matter(raw: str):
    """Return (header, body) from a `+++` fenced file."""
    # Blunt trim: also eats '+' that belong to the body (e.g. a trailing "C++")
    text = raw.strip().strip("+").strip()
    header, *body = text.split(FENCE)
    return header, FENCE.join(body).strip()


def _quoted(value: str):
    """Leading double-quoted string of `value`; a trailing comment is ignored."""
    match = QUOTED_RE.match(value)
    return match.group(1) if match else None


def _unquote_optional(value: str) -> str:
    if value.startswith('"'):
        value = value[1:]
    if value.endswith('"'):
        value = value[:-1]
    return value


class ContentParser:
    def __init__(self, slug_mode=SlugMode.TITLE):
        self.slug_mode = SlugMode(slug_mode)

    def parse_file(self, path) -> PostRecord:
        path = Path(path)
        try:
            raw = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise ContentReadError(f"Could not read {path}: {e}") from e
        return self.parse(raw, path.name)

    def parse(self, raw: str, filename: str) -> PostRecord:
        header, body = split_front_matter(raw)
        fields = parse_header(header)

        title_raw = header_field(fields, "title")
        if title_raw is None:
            raise MissingTitleError(f"Could not match title for {filename}")
        title = _quoted(title_raw)
        if title is None:
            raise MissingTitleError(f"Title of {filename} must be a double-quoted string")
        title = title.strip()
        if not title:
            raise MissingTitleError(f"Could not read title for {filename}")

        status = PostStatus.DRAFT if header_field(fields, "draft") == "true" else PostStatus.PUBLISHED

        date_raw = header_field(fields, "date")
        if date_raw is None or not _unquote_optional(date_raw):
            raise MissingDateError(f"Could not match date for {filename}")
        date = parse_date(_unquote_optional(date_raw))

        # Fail early if either value can't be put on the wire
        json_escape(title)
        json_escape(body)

        return PostRecord(
            filename=filename,
            title=title,
            date=date,
            status=status,
            url=generate_url(date, title, filename, self.slug_mode),
            content=body,
        )
