"""Tests for password hashing and bearer tokens."""
import time
import uuid

import pytest

from roomease.auth import get_fernet, issue_token, read_token
from roomease.errors import Unauthorized
from roomease.utils.security import hash_password, verify_password


class TestPasswordHashing:

    def test_round_trip(self):
        stored = hash_password("correct horse")
        assert stored.startswith("scrypt$")
        assert verify_password("correct horse", stored) is True

    def test_wrong_password(self):
        assert verify_password("wrong", hash_password("correct horse")) is False

    def test_salted(self):
        assert hash_password("same") != hash_password("same")

    @pytest.mark.parametrize("stored", ["", "plain", "md5$abc$def", "scrypt$only-two"])
    def test_malformed_hash(self, stored):
        assert verify_password("anything", stored) is False


class TestTokens:

    def test_round_trip(self):
        user_id = uuid.uuid4()
        assert read_token(issue_token(user_id)) == user_id

    def test_tampered(self):
        token = issue_token(uuid.uuid4())
        with pytest.raises(Unauthorized):
            read_token(token[:-4] + "AAAA")

    def test_garbage(self):
        with pytest.raises(Unauthorized):
            read_token("not-a-token")

    def test_expired(self):
        long_ago = int(time.time()) - 365 * 24 * 3600
        token = get_fernet().encrypt_at_time(uuid.uuid4().bytes, long_ago).decode()
        with pytest.raises(Unauthorized):
            read_token(token)
