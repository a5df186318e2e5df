import re
from datetime import datetime, timedelta, timezone

import pytest

from postsync.slug import SlugMode, generate_url, slugify, truncate_slug

DATE = datetime(2023, 5, 1, 12, 0, tzinfo=timezone.utc)
SLUG_RE = re.compile(r'^\d{4}-\d{2}-\d{2}-[a-z0-9-]*$')


def test_simple_title():
    assert generate_url(DATE, "Hello World", "ignored.md") == "2023-05-01-hello-world"


@pytest.mark.parametrize("title,expected", [
    ("  Hello, World!  ", "hello-world"),
    ("Hello, World! -- _Test_", "hello-world-test"),
    ("Über Größe", "ueber-gresse"),
    ("Käse & Straße", "kaese-strasse"),
    ("Crème brûlée: déjà vu 🎉", "crme-brle-dj-vu"),
    ("snake_case__title", "snake-case-title"),
    ("!!!", ""),
])
def test_slugify(title, expected):
    assert slugify(title) == expected


def test_long_title_drops_partial_word():
    title = "abcdefghij klmnopqrst uvwxyzabcd efghijklmnop"
    assert generate_url(DATE, title, "x.md") == "2023-05-01-abcdefghij-klmnopqrst-uvwxyzabcd"


def test_long_title_cut_on_boundary():
    title = "The quick brown fox jumps over the lazy dog again and again"
    assert generate_url(DATE, title, "x.md") == "2023-05-01-the-quick-brown-fox-jumps-over-the-lazy"


def test_just_under_limit_is_untouched():
    slug = "a" * 19 + "-" + "b" * 19
    assert len(slug) == 39
    assert truncate_slug(slug) == slug


def test_long_word_without_hyphen_leaves_date_only():
    assert generate_url(DATE, "x" * 50, "x.md") == "2023-05-01-"


def test_exactly_at_limit_is_truncated():
    slug = "a" * 19 + "-" + "b" * 20
    assert len(slug) == 40
    assert truncate_slug(slug) == "a" * 19


def test_date_prefix_uses_own_offset():
    late = datetime(2023, 5, 1, 23, 30, tzinfo=timezone(timedelta(hours=-2)))
    assert generate_url(late, "Night", "x.md") == "2023-05-01-night"


@pytest.mark.parametrize("filename,expected", [
    ("my-post.md", "my-post"),
    ("archive.tar.gz", "archive.tar"),
    ("Weird Name!.txt", "Weird Name!"),
    ("README", ""),
])
def test_filename_mode(filename, expected):
    assert generate_url(DATE, "Some Title", filename, SlugMode.FILENAME) == expected


def test_mode_accepts_plain_string():
    assert generate_url(DATE, "Some Title", "my-post.md", "filename") == "my-post"


@pytest.mark.parametrize("title", [
    "Hello World",
    "Über Größe im Straßenverkehr",
    "C++ & Rust: \"quoted\" <tags>",
    "Tabs\tand\nnewlines",
    "Ünïcödé everywhere — 日本語 — ok",
    "a" * 100,
])
def test_title_mode_output_is_url_safe_and_stable(title):
    first = generate_url(DATE, title, "x.md")
    assert SLUG_RE.match(first)
    assert first == generate_url(DATE, title, "x.md")
