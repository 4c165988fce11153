"""Tests for password hashing and bearer tokens."""

import json
import time

import pytest

from zaiboost_api.app.core import security
from zaiboost_api.app.core.security import (
    InvalidSignature,
    MalformedToken,
    TokenExpired,
    _b64_url_decode,
    _b64_url_encode,
    create_access_token,
    decode_access_token,
    hash_password,
    verify_password,
)


class TestPasswordHashing:

    def test_verify_accepts_original_password(self):
        stored = hash_password("paimon123")

        assert verify_password("paimon123", stored)

    def test_verify_rejects_other_password(self):
        stored = hash_password("paimon123")

        assert not verify_password("paimon124", stored)

    def test_stored_format_is_salt_colon_hash(self):
        salt, digest = hash_password("paimon123").split(":")

        assert len(salt) == 32
        assert len(digest) == 128
        int(salt, 16)
        int(digest, 16)

    def test_same_password_hashes_differently(self):
        assert hash_password("paimon123") != hash_password("paimon123")

    @pytest.mark.parametrize("stored", ["", "nocolon", ":", "a:b:c", "abc:", None])
    def test_malformed_stored_value_fails_verification(self, stored):
        assert verify_password("paimon123", stored) is False


class TestAccessToken:

    def test_round_trip_returns_claims(self):
        claims = {"id": 3, "username": "traveler", "role": "customer"}

        payload = decode_access_token(create_access_token(claims))

        assert {k: payload[k] for k in claims} == claims

    def test_token_has_three_base64url_segments(self):
        token = create_access_token({"id": 1})
        header, payload, signature = token.split(".")

        assert json.loads(_b64_url_decode(header)) == {"alg": "HS256", "typ": "JWT"}
        assert "=" not in token

    def test_expiry_is_epoch_millis(self):
        before = int(time.time() * 1000)
        token = create_access_token({"id": 1}, expires_hours=72)

        payload = json.loads(_b64_url_decode(token.split(".")[1]))

        assert payload["exp"] >= before + 72 * 3600 * 1000
        assert payload["exp"] < before + 73 * 3600 * 1000

    def test_expired_token_is_rejected(self):
        token = create_access_token({"id": 1}, expires_hours=-1)

        with pytest.raises(TokenExpired):
            decode_access_token(token)

    def test_expiry_checked_against_current_time(self, monkeypatch):
        token = create_access_token({"id": 1}, expires_hours=1)
        monkeypatch.setattr(security, "_now_ms", lambda: int(time.time() * 1000) + 2 * 3600 * 1000)

        with pytest.raises(TokenExpired):
            decode_access_token(token)

    def test_altered_signature_is_rejected(self):
        header, payload, signature = create_access_token({"id": 1}).split(".")
        raw = bytearray(_b64_url_decode(signature))
        raw[0] ^= 0x01
        tampered = f"{header}.{payload}.{_b64_url_encode(bytes(raw))}"

        with pytest.raises(InvalidSignature):
            decode_access_token(tampered)

    def test_altered_payload_is_rejected(self):
        header, _, signature = create_access_token({"id": 1, "role": "customer"}).split(".")
        forged = _b64_url_encode(json.dumps({"id": 1, "role": "admin", "exp": 9999999999999}).encode())

        with pytest.raises(InvalidSignature):
            decode_access_token(f"{header}.{forged}.{signature}")

    def test_other_secret_is_rejected(self):
        token = create_access_token({"id": 1}, secret="another-secret")

        with pytest.raises(InvalidSignature):
            decode_access_token(token)

    @pytest.mark.parametrize("token", ["", "abc", "a.b", "a..c", "a.b.c.d"])
    def test_missing_segments_are_malformed(self, token):
        with pytest.raises(MalformedToken):
            decode_access_token(token)

    def test_signed_garbage_payload_is_malformed(self):
        header = _b64_url_encode(b'{"alg":"HS256","typ":"JWT"}')
        payload = _b64_url_encode(b"not json")
        signature = _b64_url_encode(security._sign(f"{header}.{payload}".encode(), security.settings.jwt_secret))

        with pytest.raises(MalformedToken):
            decode_access_token(f"{header}.{payload}.{signature}")
