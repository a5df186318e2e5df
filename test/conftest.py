# test/conftest.py
import sys
from pathlib import Path

import pytest

# Insert the project root (one level up) at the front of sys.path
PROJECT_ROOT = Path(__file__).parent.parent.resolve()
sys.path.insert(0, str(PROJECT_ROOT))


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep a developer's POSTSYNC_* variables out of the tests."""
    for name in ("ENDPOINT", "DIRECTORY", "USE_FILENAME", "TIMEOUT", "LOG_FILE"):
        monkeypatch.delenv(f"POSTSYNC_{name}", raising=False)
    yield


def make_post(title="Hello World", date='"2023-05-01T12:00:00Z"', draft="false", body="Some content"):
    lines = ["+++"]
    if title is not None:
        lines.append(f'title = "{title}"')
    if date is not None:
        lines.append(f"date = {date}")
    if draft is not None:
        lines.append(f"draft = {draft}")
    lines.append("+++")
    lines.append(body)
    return "\n".join(lines) + "\n"


@pytest.fixture
def post_text():
    return make_post
