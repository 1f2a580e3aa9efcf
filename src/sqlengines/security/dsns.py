"""DSN parsing and redaction for configured connection entries."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional
from urllib.parse import parse_qsl, urlencode, urlparse

from ..errors import ConfigurationError


@dataclass(frozen=True)
class DSNConfig:
    scheme: str
    username: Optional[str]
    password: Optional[str]
    host: Optional[str]
    port: Optional[int]
    database: Optional[str]
    path: str
    query: dict[str, str] = field(default_factory=dict)

    def redacted(self) -> str:
        """
        Return the DSN with the password masked; safe to log.
        """

        netloc = ""
        if self.username:
            netloc += self.username
            if self.password:
                netloc += ":***"
            netloc += "@"
        if self.host:
            netloc += self.host
        if self.port:
            netloc += f":{self.port}"

        result = f"{self.scheme}://{netloc}{self.path}"
        if self.query:
            result += f"?{urlencode(self.query)}"
        return result


def parse_dsn(dsn: str) -> DSNConfig:
    if not isinstance(dsn, str) or not dsn.strip():
        raise ConfigurationError("DSN must be a non-empty string")
    parsed = urlparse(dsn.strip())
    if not parsed.scheme:
        raise ConfigurationError("DSN is missing a scheme (expected 'scheme://...')")
    try:
        port = parsed.port
    except ValueError as exc:
        raise ConfigurationError(f"Invalid port in DSN for scheme '{parsed.scheme}'") from exc
    return DSNConfig(
        scheme=parsed.scheme.lower(),
        username=parsed.username,
        password=parsed.password,
        host=parsed.hostname,
        port=port,
        database=parsed.path.lstrip("/") or None,
        path=parsed.path or "",
        query=dict(parse_qsl(parsed.query, keep_blank_values=True)),
    )
