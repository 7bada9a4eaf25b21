import hashlib
from datetime import timedelta
from uuid import uuid4

from src.domain.base import utc_now
from src.domain.entities import TokenScope
from src.domain.entities.token import (
    generate_token,
    hash_token,
    is_valid_token_plaintext,
)


def test_generated_plaintext_shape():
    plaintext, _ = generate_token(uuid4(), timedelta(hours=1), TokenScope.authentication)

    assert len(plaintext) == 26
    assert is_valid_token_plaintext(plaintext)


def test_only_hash_is_stored():
    user_id = uuid4()
    plaintext, token = generate_token(user_id, timedelta(hours=1), TokenScope.activation)

    assert token.hash == hashlib.sha256(plaintext.encode()).hexdigest()
    assert token.hash != plaintext
    assert token.user_id == user_id
    assert token.scope == TokenScope.activation


def test_generated_tokens_are_unique():
    plaintexts = {
        generate_token(uuid4(), timedelta(hours=1), TokenScope.authentication)[0]
        for _ in range(100)
    }

    assert len(plaintexts) == 100


def test_expiry_boundary():
    _, token = generate_token(uuid4(), timedelta(minutes=45), TokenScope.password_reset)

    assert not token.is_expired(token.expiry - timedelta(seconds=1))
    assert token.is_expired(token.expiry)
    assert token.is_expired(utc_now() + timedelta(hours=1))


def test_plaintext_structural_check():
    assert not is_valid_token_plaintext("")
    assert not is_valid_token_plaintext(None)
    assert not is_valid_token_plaintext("ABC")
    assert not is_valid_token_plaintext("y3qmgx3pj3wlrl2yrtqgq6krhu")  # lowercase
    assert not is_valid_token_plaintext("Y3QMGX3PJ3WLRL2YRTQGQ6KRH1")  # '1' is not base32
    assert is_valid_token_plaintext("Y3QMGX3PJ3WLRL2YRTQGQ6KRHU")


def test_hash_is_hex_sha256():
    assert hash_token("abc") == (
        "ba7816bf8f01cfea414140de5dae2223b00361a396177a9cb410ff61f20015ad"
    )
