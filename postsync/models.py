import json
from dataclasses import dataclass
from datetime import datetime
from enum import Enum

from postsync.dates import to_epoch_ms
from postsync.errors import MarshalError


class PostStatus(str, Enum):
    PUBLISHED = "published"
    DRAFT = "draft"


def json_escape(value: str) -> str:
    """Escape `value` so it can sit between the quotes of a JSON string."""
    try:
        encoded = json.dumps(value, ensure_ascii=False)
        # lone surrogates survive dumps() but can't be sent as UTF-8
        encoded.encode("utf-8")
    except (TypeError, ValueError) as e:
        raise MarshalError(f"Could not marshal {value!r}: {e}") from e
    return encoded[1:-1]


@dataclass(frozen=True)
class PostRecord:
    filename: str
    title: str
    date: datetime
    status: PostStatus
    url: str
    content: str

    @property
    def date_ms(self) -> int:
        return to_epoch_ms(self.date)

    @property
    def escaped_title(self) -> str:
        return json_escape(self.title)

    @property
    def escaped_content(self) -> str:
        return json_escape(self.content)

    def to_payload(self) -> dict:
        """Object sent to the endpoint."""
        return {
            "title": self.title,
            "status": self.status.value,
            "date": self.date_ms,
            "url": self.url,
        }
