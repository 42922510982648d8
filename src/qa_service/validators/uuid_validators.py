"""
Identifier parsing shared by every DAO implementation.

Identifiers arrive as plain strings (path params, JSON bodies). They are parsed
here, before any storage call, so a malformed value never reaches the database.
"""
import re
import uuid

from qa_service.exceptions.base import InvalidUUIDError

_HEX = "[0-9a-fA-F]"
_HYPHENATED = rf"{_HEX}{{8}}-{_HEX}{{4}}-{_HEX}{{4}}-{_HEX}{{4}}-{_HEX}{{12}}"

# `uuid.UUID()` strips braces, hyphens and "urn:"/"uuid:" anywhere in the string and
# hands the rest to int(..., 16), so it must only ever see one of these forms.
UUID_PATTERN = re.compile(
    rf"(?:{_HEX}{{32}}|{_HYPHENATED}|\{{{_HYPHENATED}\}}|urn:uuid:{_HYPHENATED})"
)


def parse_uuid(value: str, *, field: str = "uuid") -> uuid.UUID:
    """
    Parse `value` into a UUID or raise InvalidUUIDError.

    Accepted forms:
        - 32 hex digits:        12345678123456781234567812345678
        - hyphenated 8-4-4-4-12: 12345678-1234-5678-1234-567812345678
        - braced hyphenated:    {12345678-1234-5678-1234-567812345678}
        - URN:                  urn:uuid:12345678-1234-5678-1234-567812345678
    Hex digits may be upper or lower case. Nothing else is accepted: no surrounding
    whitespace, signs, underscores, repeated braces or prefixes.

    Args:
        value: the caller-supplied identifier string.
        field: name used in the error detail (e.g. "question_uuid").

    Raises:
        InvalidUUIDError: if `value` is not a string or not a well-formed UUID.
    """
    if isinstance(value, uuid.UUID):
        return value
    if not isinstance(value, str):
        raise InvalidUUIDError(f"invalid {field}: expected a string, got {type(value).__name__}")
    try:
        if UUID_PATTERN.fullmatch(value) is None:
            raise ValueError("badly formed hexadecimal UUID string")
        return uuid.UUID(value)
    except ValueError as exc:
        raise InvalidUUIDError(f"invalid {field} {value!r}: {exc}") from exc
