"""Unit tests for SHA-256 hash commitments."""

import hashlib

from hypothesis import given
from hypothesis import strategies as st

from vvote_verifier.domain.primitives.hash_commitment import (
    DIGEST_SIZE,
    commit,
    is_hex,
    verify,
    verify_hex,
)


class TestCommit:
    """Tests for the commitment byte layout."""

    def test_short_message_is_concatenated_raw(self) -> None:
        """Test that a message of at most 32 bytes is not pre-hashed."""
        witness = b"\x11" * 32
        message = b"\x22" * 32

        assert commit(witness, message) == hashlib.sha256(witness + message).digest()

    def test_long_message_is_prehashed(self) -> None:
        """Test that a message over 32 bytes is replaced by its digest."""
        witness = b"\x11" * 32
        message = b"\x22" * 33

        expected = hashlib.sha256(witness + hashlib.sha256(message).digest()).digest()
        assert commit(witness, message) == expected

    def test_commitment_is_one_digest(self) -> None:
        """Test commitment length."""
        assert len(commit(b"w", b"m")) == DIGEST_SIZE


class TestVerify:
    """Tests for verify and verify_hex."""

    def test_verify_accepts_matching_opening(self) -> None:
        """Test that the committed opening verifies."""
        c = commit(b"witness", b"message")

        assert verify(c, b"witness", b"message") is True

    def test_verify_rejects_other_message(self) -> None:
        """Test that a different message does not verify."""
        c = commit(b"witness", b"message")

        assert verify(c, b"witness", b"massage") is False

    def test_verify_hex_accepts_either_case(self) -> None:
        """Test that hex input is case-insensitive."""
        witness = bytes(range(32))
        value = bytes(range(32, 64))
        c = commit(witness, value)

        assert verify_hex(c.hex().upper(), witness.hex(), value.hex().upper())

    def test_verify_hex_malformed_hex_is_false(self) -> None:
        """Test that malformed hex fails without raising."""
        assert verify_hex("zz", "00", "00") is False
        assert verify_hex("abc", "00", "00") is False

    @given(
        witness=st.binary(min_size=1, max_size=64),
        message=st.binary(max_size=96),
        other=st.binary(max_size=96),
    )
    def test_commitment_binds_message(
        self, witness: bytes, message: bytes, other: bytes
    ) -> None:
        """Test that a commitment opens only to its own message."""
        c = commit(witness, message)

        assert verify(c, witness, message)
        if _prepared(other) != _prepared(message):
            assert not verify(c, witness, other)


def _prepared(message: bytes) -> bytes:
    return hashlib.sha256(message).digest() if len(message) > 32 else message


class TestIsHex:
    """Tests for is_hex."""

    def test_valid_hex(self) -> None:
        assert is_hex("00ff") is True
        assert is_hex("ABcd") is True

    def test_invalid_hex(self) -> None:
        assert is_hex("") is False
        assert is_hex("abc") is False
        assert is_hex("xy") is False
