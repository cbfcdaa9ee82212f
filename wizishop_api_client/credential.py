"""
Parsing of the JSON Web Token issued by the WiziShop login endpoint.

The token is only decoded, never verified: the signature segment is
kept as part of the raw string and sent back to the API untouched.
The payload carries the shop identifier (``id_shop``) used to build
the API base URL and the expiry timestamp (``exp``).
"""

from __future__ import annotations

import base64
import binascii
import json
from dataclasses import dataclass
from datetime import datetime, timezone
from types import MappingProxyType
from typing import Any, Mapping, Optional

from .exceptions import MalformedCredentialError

# Used when the payload has no ``exp`` claim, so such tokens are always expired.
DEFAULT_EXPIRY = 1


def urlsafe_b64decode(segment: str) -> bytes:
    """Decode a URL-safe base64 segment, restoring any stripped padding."""
    remainder = len(segment) % 4
    if remainder:
        segment += "=" * (4 - remainder)
    return base64.b64decode(segment.translate(str.maketrans("-_", "+/")))


def _decode_segment(segment: str, name: str) -> dict:
    try:
        decoded = json.loads(urlsafe_b64decode(segment).decode("utf-8"))
    except (binascii.Error, UnicodeDecodeError, ValueError) as exc:
        raise MalformedCredentialError(f"Invalid {name} encoding") from exc
    if not isinstance(decoded, dict):
        raise MalformedCredentialError(f"Invalid {name} encoding")
    return decoded


@dataclass(frozen=True)
class Credential:
    """An immutable, decoded bearer token.

    Use :meth:`from_string` to build one; the constructor does not
    validate its arguments.

    Parameters
    ----------
    raw_token : str
        The compact token exactly as issued by the server.
    claims : Mapping[str, Any]
        The decoded payload segment.
    """

    raw_token: str
    claims: Mapping[str, Any]

    @classmethod
    def from_string(cls, token: str) -> "Credential":
        """Parse a compact ``header.payload.signature`` token.

        Raises
        ------
        MalformedCredentialError
            If the token is empty, does not have exactly three
            segments, or if the header or payload is not a base64url
            encoded JSON object.
        """
        if not token or not isinstance(token, str):
            raise MalformedCredentialError("Token cannot be empty")

        segments = token.split(".")
        if len(segments) != 3:
            raise MalformedCredentialError("Wrong number of segments")

        header_segment, payload_segment, _signature = segments
        _decode_segment(header_segment, "header")
        payload = _decode_segment(payload_segment, "claims")

        return cls(raw_token=token, claims=MappingProxyType(payload))

    @property
    def token(self) -> str:
        """The raw token, for use in an ``Authorization: Bearer`` header."""
        return self.raw_token

    def claim(self, key: str, default: Any = None) -> Any:
        """Return the claim ``key`` or ``default`` when it is absent."""
        return self.claims.get(key, default)

    @property
    def shop_id(self) -> Optional[Any]:
        return self.claim("id_shop")

    @property
    def expires_at(self) -> datetime:
        """The ``exp`` claim as a timezone-aware UTC datetime."""
        exp = self.claims.get("exp")
        if exp is None:
            exp = DEFAULT_EXPIRY
        return datetime.fromtimestamp(exp, tz=timezone.utc)

    def is_expired(self, now: Optional[datetime] = None) -> bool:
        """Return ``True`` if ``now`` is strictly after the token expiry.

        Parameters
        ----------
        now : datetime, optional
            Reference time.  Naive datetimes are assumed to be in UTC.
            Defaults to the current UTC time.
        """
        if now is None:
            now = datetime.now(timezone.utc)
        elif now.tzinfo is None:
            now = now.replace(tzinfo=timezone.utc)
        return now > self.expires_at
