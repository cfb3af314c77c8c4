"""
Hashing Unit Tests
Tests for bloomtree/crypto/hashing.py

Tests:
- sha256 / hash_concat stability
- Named hash policy lookup
- digest_with_policy failure wrapping
- to_hex/from_hex round trip
"""
import hashlib

import pytest

from bloomtree.crypto.hashing import (
    DEFAULT_HASH_ALGORITHM,
    HASH_POLICIES,
    digest_with_policy,
    from_hex,
    get_hash_policy,
    hash_concat,
    sha256,
    to_hex,
)
from bloomtree.schemas.errors import (
    ErrorCodes,
    HashPolicyException,
    UnknownHashAlgorithmException,
)


class TestSha256:
    """Tests for sha256() function."""

    def test_sha256_known_value(self):
        """Test sha256 produces correct hash for known input."""
        result = sha256(b"hello")

        assert result.hex() == "2cf24dba5fb0a30e26e83b2ac5b9e29e1b161e5c1fa7425e73043362938b9824"
        assert len(result) == 32

    def test_sha256_empty_bytes(self):
        """Test sha256 of empty bytes."""
        assert sha256(b"") == hashlib.sha256(b"").digest()

    def test_sha256_different_inputs_different_outputs(self):
        """Test different inputs produce different hashes."""
        assert sha256(b"input1") != sha256(b"input2")


class TestHashConcat:
    """Tests for hash_concat() function."""

    def test_hash_concat_basic(self):
        """Test basic concatenation hashing."""
        left = sha256(b"left")
        right = sha256(b"right")

        assert hash_concat(left, right) == hashlib.sha256(left + right).digest()

    def test_hash_concat_order_matters(self):
        """Test that order of arguments matters."""
        a = sha256(b"a")
        b = sha256(b"b")

        assert hash_concat(a, b) != hash_concat(b, a)

    def test_hash_concat_with_policy(self):
        """Test concatenation under a non-default policy."""
        a = sha256(b"a")
        b = sha256(b"b")

        assert hash_concat(a, b, hashlib.blake2s) == hashlib.blake2s(a + b).digest()


class TestHashPolicies:
    """Tests for named hash policy lookup."""

    def test_default_is_sha256(self):
        assert DEFAULT_HASH_ALGORITHM == "sha256"
        assert get_hash_policy(DEFAULT_HASH_ALGORITHM) is hashlib.sha256

    @pytest.mark.parametrize("name", sorted(HASH_POLICIES))
    def test_registered_policies_produce_digests(self, name):
        digest = digest_with_policy(get_hash_policy(name), b"data")
        assert isinstance(digest, bytes)
        assert len(digest) > 0

    def test_lookup_normalizes_name(self):
        """Lookup is case-insensitive and accepts '-' for '_'."""
        assert get_hash_policy("SHA3-256") is hashlib.sha3_256

    def test_unknown_algorithm_raises(self):
        with pytest.raises(UnknownHashAlgorithmException) as exc_info:
            get_hash_policy("md5")
        assert exc_info.value.code == ErrorCodes.UNKNOWN_HASH_ALGORITHM
        assert exc_info.value.details == {"algorithm": "md5"}


class TestDigestWithPolicy:
    """Tests for digest_with_policy()."""

    def test_chunks_are_concatenated(self):
        assert digest_with_policy(hashlib.sha256, b"ab", b"cd") == sha256(b"abcd")

    def test_no_chunks(self):
        assert digest_with_policy(hashlib.sha256) == sha256(b"")

    def test_failing_update_wrapped(self):
        """Failures while writing are reported as HashPolicyException."""

        class BrokenAccumulator:
            def update(self, data):
                raise IOError("write failed")

            def digest(self):
                return b""

        with pytest.raises(HashPolicyException) as exc_info:
            digest_with_policy(BrokenAccumulator, b"data")
        assert exc_info.value.code == ErrorCodes.HASH_POLICY_FAILED
        assert isinstance(exc_info.value.__cause__, IOError)


class TestHexConversion:
    """Tests for to_hex() and from_hex() functions."""

    def test_to_hex_format(self):
        """Test to_hex produces correct format with 0x prefix."""
        assert to_hex(bytes.fromhex("deadbeef")) == "0xdeadbeef"

    def test_to_hex_empty(self):
        assert to_hex(b"") == "0x"

    def test_from_hex_valid(self):
        assert from_hex("0xdeadbeef") == bytes.fromhex("deadbeef")

    def test_from_hex_missing_prefix(self):
        """Test from_hex rejects input without 0x prefix."""
        with pytest.raises(ValueError, match="must start with '0x'"):
            from_hex("deadbeef")

    def test_from_hex_odd_length(self):
        """Test from_hex rejects odd-length hex string."""
        with pytest.raises(ValueError, match="even length"):
            from_hex("0xabc")

    def test_from_hex_invalid_chars(self):
        """Test from_hex rejects invalid hex characters."""
        with pytest.raises(ValueError, match="Invalid hex"):
            from_hex("0xgg")

    def test_hex_round_trip_sha256(self):
        """Test round trip with actual SHA-256 hash."""
        hash_value = sha256(b"test data")
        hex_str = to_hex(hash_value)

        assert from_hex(hex_str) == hash_value
        assert len(hex_str) == 2 + 64
