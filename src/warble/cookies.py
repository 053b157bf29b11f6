"""The locale cookie, read and written.

``CookieLocaleCache`` reads the incoming ``Cookie`` header with
``parse_cookies`` and queues a ``SetCookie`` for the response when the
locale changes. Names and values are percent-encoded, so locale codes
and custom cache keys survive any character set.
"""

from dataclasses import dataclass
from urllib.parse import quote, unquote


def parse_cookies(header: str) -> dict[str, str]:
    """Decode a ``Cookie`` header into a name-value dict (last duplicate wins)."""
    cookies: dict[str, str] = {}
    for pair in (header or "").split(";"):
        name, sep, value = pair.partition("=")
        if sep:
            cookies[unquote(name.strip())] = unquote(value.strip())
    return cookies


@dataclass(frozen=True, slots=True)
class SetCookie:
    """The ``Set-Cookie`` directive that persists a chosen locale.

    ``max_age=None`` makes it a session cookie.
    """

    name: str
    value: str
    max_age: int | None = None
    path: str = "/"
    samesite: str = "lax"

    def to_header_value(self) -> str:
        attributes = {"Max-Age": self.max_age, "Path": self.path, "SameSite": self.samesite}
        pieces = [f"{quote(self.name, safe='')}={quote(self.value, safe='')}"]
        pieces.extend(
            f"{key}={value}" for key, value in attributes.items() if value not in (None, "")
        )
        return "; ".join(pieces)
