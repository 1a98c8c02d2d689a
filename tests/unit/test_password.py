"""Unit tests for password hashing."""

import pytest

from moviemate.kernel.identity import password as password_module
from moviemate.kernel.identity.credential_service import CredentialService
from moviemate.kernel.identity.errors import HashingFailure, MismatchFailure
from moviemate.kernel.identity.password import BCRYPT_ROUNDS, PasswordHasher


class TestPasswordHasher:
    """Tests for PasswordHasher."""

    def test_hash_creates_different_hashes(self, hasher: PasswordHasher):
        """Same password should create different hashes (due to salt)."""
        password = "TestPassword123"
        hash1 = hasher.hash(password)
        hash2 = hasher.hash(password)

        assert hash1 != hash2
        assert hash1.startswith("$2b$")  # bcrypt prefix
        assert hasher.verify(password, hash1) is True
        assert hasher.verify(password, hash2) is True

    def test_default_work_factor(self):
        """Application hasher uses the fixed production cost."""
        hashed = PasswordHasher().hash("TestPassword123")

        assert hashed.startswith(f"$2b${BCRYPT_ROUNDS}$")

    def test_verify_wrong_password(self, hasher: PasswordHasher):
        hashed = hasher.hash("TestPassword123")

        assert hasher.verify("WrongPassword", hashed) is False

    @pytest.mark.parametrize("stored", ["", "not-a-hash", "$2b$04$short", "$argon2id$v=19$abc"])
    def test_verify_malformed_hash_is_mismatch(self, hasher: PasswordHasher, stored: str):
        assert hasher.verify("TestPassword123", stored) is False

    def test_empty_password_rejected(self, hasher: PasswordHasher):
        with pytest.raises(ValueError):
            hasher.hash("")

    def test_long_password_round_trip(self, hasher: PasswordHasher):
        """No length ceiling: inputs past bcrypt's 72 bytes still hash and verify."""
        password = "correct horse battery staple " * 5
        hashed = hasher.hash(password)

        assert hasher.verify(password, hashed) is True

    def test_unicode_password(self, hasher: PasswordHasher):
        password = "pässwörd-电影-🎬"
        hashed = hasher.hash(password)

        assert hasher.verify(password, hashed) is True
        assert hasher.verify("passwoerd-电影-🎬", hashed) is False

    def test_entropy_failure_surfaces_as_hashing_failure(self, hasher, monkeypatch):
        def exhausted(*args, **kwargs):
            raise OSError("no entropy")

        monkeypatch.setattr(password_module.bcrypt, "gensalt", exhausted)

        with pytest.raises(HashingFailure):
            hasher.hash("TestPassword123")

    def test_needs_rehash(self, hasher: PasswordHasher):
        cheap = hasher.hash("TestPassword123")

        assert hasher.needs_rehash(cheap) is False
        assert PasswordHasher(rounds=5).needs_rehash(cheap) is True
        assert hasher.needs_rehash("garbage") is True


class TestCheckPassword:
    """Round-trip properties through the credential service."""

    @pytest.mark.parametrize("password", ["hunter22", "Sup3rSecret!", "a", " spaced out "])
    def test_round_trip(self, credentials: CredentialService, password: str):
        stored = credentials.hash_password(password)

        assert credentials.check_password(password, stored) is None

    @pytest.mark.parametrize(
        "password,attempt",
        [
            ("hunter22", "hunter23"),
            ("Sup3rSecret!", "sup3rsecret!"),
            ("abc", "abc "),
        ],
    )
    def test_different_password_fails(self, credentials: CredentialService, password, attempt):
        stored = credentials.hash_password(password)

        with pytest.raises(MismatchFailure):
            credentials.check_password(attempt, stored)

    def test_wrong_and_malformed_are_indistinguishable(self, credentials: CredentialService):
        stored = credentials.hash_password("hunter22")

        with pytest.raises(MismatchFailure) as wrong:
            credentials.check_password("nope", stored)
        with pytest.raises(MismatchFailure) as malformed:
            credentials.check_password("hunter22", "not-a-bcrypt-hash")

        assert type(wrong.value) is type(malformed.value)
        assert str(wrong.value) == str(malformed.value)
