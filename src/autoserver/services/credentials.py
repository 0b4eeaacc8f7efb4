"""Secure credential generation for AutoServer."""

import base64
import secrets
from typing import Callable

from autoserver.constants import PASSWORD_RANDOM_BYTES, PASSWORD_STRIP_CHARS
from autoserver.errors import CredentialError
from autoserver.errors_catalog import actionable_error

_STRIP_TABLE = str.maketrans("", "", PASSWORD_STRIP_CHARS)


def generate_password(token_bytes: Callable[[int], bytes] = secrets.token_bytes) -> str:
    """Return a random password safe to embed unescaped in shell and SQL.

    Sixteen bytes from the OS CSPRNG are base64-encoded and stripped of
    ``/``, ``+`` and ``=``, leaving at most 22 characters. The character
    encoding the final byte's low bits is always alphanumeric, so the
    result is never empty.
    """
    try:
        raw = token_bytes(PASSWORD_RANDOM_BYTES)
    except (OSError, NotImplementedError) as exc:
        raise CredentialError(actionable_error("random_source_unavailable", reason=str(exc))) from exc
    return base64.b64encode(raw).decode("ascii").translate(_STRIP_TABLE)
