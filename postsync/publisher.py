import json
import requests

from postsync.errors import ResponseReadError, TransportError
from postsync.logger import logger

JSON_HEADERS = {"Content-Type": "application/json; charset=utf-8"}


def format_json(data) -> str:
    """Pretty-print a JSON document (bytes or text) with a one-space indent."""
    if isinstance(data, bytes):
        try:
            data = data.decode("utf-8")
        except UnicodeDecodeError as e:
            raise ResponseReadError(f"Response body is not UTF-8: {e}") from e
    try:
        parsed = json.loads(data)
    except ValueError as e:
        raise ResponseReadError(f"Response body is not JSON: {e}") from e
    return json.dumps(parsed, indent=1, ensure_ascii=False)


def build_payload(post) -> bytes:
    return json.dumps(post.to_payload(), ensure_ascii=False).encode("utf-8")


class PostPublisher:
    """Sends post records, one POST each, to a fixed endpoint"""

    def __init__(self, endpoint, timeout=None, session=None):
        self.endpoint = endpoint
        self.timeout = timeout
        self.session = session or requests.Session()

    def _describe_body(self, response):
        try:
            return format_json(response.content)
        except ResponseReadError as e:
            logger.warning(f"⚠️ Could not parse response body: {e}")
            return response.text

    def post(self, post):
        """Raw POST; raises TransportError when no response is received."""
        try:
            return self.session.post(
                self.endpoint,
                data=build_payload(post),
                headers=JSON_HEADERS,
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            raise TransportError(f"Could not POST {post.filename}: {e}") from e

    def submit(self, post) -> bool:
        """POST one record and log what came back. Never raises for HTTP problems."""
        try:
            response = self.post(post)
        except TransportError as e:
            logger.error(f"❌ {e}")
            return False

        if response.status_code >= 400:
            body = self._describe_body(response)
            logger.error(f"❌ Response for {post.filename} (Status {response.status_code}): {body}")
            return False

        if response.content:
            logger.debug(f"Response for {post.filename}: {self._describe_body(response)}")
        logger.debug(f"Submitted {post.filename} -> {post.url}")
        return True

    def submit_all(self, posts):
        """Submit every record in order; returns how many were accepted."""
        accepted = 0
        for post in posts:
            if self.submit(post):
                accepted += 1
        return accepted

    def close(self):
        self.session.close()
