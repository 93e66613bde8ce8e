"""Request and response value types."""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping
from urllib.parse import urlparse

from hello.fetch.errors import InvalidUrlError

SUPPORTED_SCHEMES = ("https",)
SUPPORTED_METHODS = ("GET",)
DEFAULT_ENCODING = "utf-8"


@dataclass(frozen=True)
class FetchRequest:
    """A single outbound request. Validated on construction and never mutated."""

    uri: str
    method: str = "GET"
    headers: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self):
        parsed = urlparse(self.uri)
        if not parsed.scheme or not parsed.netloc:
            raise InvalidUrlError(f"URL must be absolute, got '{self.uri}'", url=self.uri)
        if parsed.scheme.lower() not in SUPPORTED_SCHEMES:
            raise InvalidUrlError(f"URL must use https, got scheme '{parsed.scheme}'", url=self.uri)
        if not parsed.hostname:
            raise InvalidUrlError(f"URL has no host: '{self.uri}'", url=self.uri)
        try:
            parsed.port
        except ValueError as e:
            raise InvalidUrlError(f"URL has an invalid port: '{self.uri}' ({e})", url=self.uri) from e
        if self.method.upper() not in SUPPORTED_METHODS:
            raise ValueError(f"Unsupported method {self.method}, only GET is supported")
        object.__setattr__(self, "method", self.method.upper())
        object.__setattr__(self, "headers", MappingProxyType(dict(self.headers)))

    @property
    def host(self) -> str:
        return urlparse(self.uri).hostname or ""


@dataclass(frozen=True)
class FetchResponse:
    status_code: int
    body: bytes
    headers: Mapping[str, str] = field(default_factory=dict)
    url: str = ""
    reason: str = ""

    def __post_init__(self):
        object.__setattr__(self, "headers", MappingProxyType(dict(self.headers)))

    def header(self, name: str, default: str = "") -> str:
        """Case-insensitive header lookup."""
        lowered = name.lower()
        for key, value in self.headers.items():
            if key.lower() == lowered:
                return value
        return default

    @property
    def location(self) -> str:
        return self.header("Location")

    @property
    def is_redirect(self) -> bool:
        return 300 <= self.status_code < 400 and bool(self.location)

    @property
    def encoding(self) -> str:
        """Charset from the Content-Type header, UTF-8 when absent."""
        content_type = self.header("Content-Type")
        for param in content_type.split(";")[1:]:
            key, _, value = param.strip().partition("=")
            if key.lower() == "charset" and value:
                return value.strip("\"'")
        return DEFAULT_ENCODING

    @property
    def text(self) -> str:
        try:
            return self.body.decode(self.encoding)
        except (LookupError, UnicodeDecodeError):
            return self.body.decode(DEFAULT_ENCODING, errors="replace")
