import base64

import pytest

from autoserver.errors import CredentialError
from autoserver.services.credentials import generate_password


@pytest.mark.parametrize("_attempt", range(20))
def test_generated_password_is_shell_and_sql_safe(_attempt):
    password = generate_password()

    assert password
    assert len(password) <= 22
    assert not set(password) & set("/+=")


def test_generated_password_strips_unsafe_characters_from_encoding():
    raw = bytes([0xFB, 0xEF, 0xFF] * 5 + [0xFF])
    encoded = base64.b64encode(raw).decode("ascii")
    assert set(encoded) & set("/+=")

    password = generate_password(lambda size: raw)

    assert password == encoded.replace("/", "").replace("+", "").replace("=", "")


def test_generated_password_draws_sixteen_bytes():
    requested = []

    def token_bytes(size):
        requested.append(size)
        return b"\x00" * size

    password = generate_password(token_bytes)

    assert requested == [16]
    assert password == "A" * 22


def test_generated_password_fails_without_random_source():
    def broken(_size):
        raise NotImplementedError("no urandom")

    with pytest.raises(CredentialError, match="no urandom"):
        generate_password(broken)


def test_generated_password_is_never_empty_even_for_worst_case_bytes():
    password = generate_password(lambda size: b"\xff" * 15 + b"\xfb")

    assert password == "w"
