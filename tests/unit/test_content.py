"""
Content Capability Unit Tests
Tests for bloomtree/merkle/content.py

Tests:
1. Shipped content types hash and compare as documented
2. The Content protocol is structural
3. content_digest / content_equals wrap foreign failures
"""
import hashlib

import pytest

from bloomtree.crypto.hashing import sha256
from bloomtree.merkle import BytesContent, CanonicalContent, Content, TextContent
from bloomtree.merkle.content import content_digest, content_equals
from bloomtree.schemas.errors import (
    CanonicalizationException,
    ContentEqualityException,
    ContentHashingException,
    ErrorCodes,
)

from fixtures.common import FailingEqualsContent, FailingHashContent


class TestBytesContent:
    """Tests for BytesContent."""

    def test_hash(self):
        assert BytesContent(b"abc").hash() == sha256(b"abc")

    def test_custom_policy(self):
        assert BytesContent(b"abc", hash_policy=hashlib.sha512).hash() == hashlib.sha512(b"abc").digest()

    def test_equals(self):
        assert BytesContent(b"abc").equals(BytesContent(b"abc"))
        assert not BytesContent(b"abc").equals(BytesContent(b"abd"))
        assert not BytesContent(b"abc").equals(TextContent("abc"))

    def test_policy_part_of_equality(self):
        """Items hashed under different policies are different items."""
        assert not BytesContent(b"x", hash_policy=hashlib.sha512).equals(BytesContent(b"x"))
        assert BytesContent(b"x", hash_policy=hashlib.sha512).equals(
            BytesContent(b"x", hash_policy=hashlib.sha512)
        )

    def test_str(self):
        assert str(BytesContent(b"\x01\xff")) == "01ff"


class TestTextContent:
    """Tests for TextContent."""

    def test_hash_is_utf8(self):
        assert TextContent("héllo").hash() == sha256("héllo".encode("utf-8"))

    def test_equals(self):
        assert TextContent("a").equals(TextContent("a"))
        assert not TextContent("a").equals(TextContent("b"))

    def test_str(self):
        assert str(TextContent("line")) == "line"


class TestCanonicalContent:
    """Tests for CanonicalContent."""

    def test_key_order_irrelevant(self):
        a = CanonicalContent({"a": 1, "b": 2})
        b = CanonicalContent({"b": 2, "a": 1})
        assert a.hash() == b.hash()
        assert a.equals(b)

    def test_hash_of_canonical_json(self):
        assert CanonicalContent({"b": 2, "a": 1}).hash() == sha256(b'{"a":1,"b":2}')

    def test_str(self):
        assert str(CanonicalContent({"b": 2, "a": 1})) == '{"a":1,"b":2}'

    def test_uncanonicalizable_value_raises(self):
        with pytest.raises(CanonicalizationException):
            CanonicalContent({"x": float("nan")}).hash()


class TestEqualityMatchesDigest:
    """equals() never holds between items with different digests."""

    @pytest.mark.parametrize("make", [
        lambda policy: BytesContent(b"x", hash_policy=policy),
        lambda policy: TextContent("x", hash_policy=policy),
        lambda policy: CanonicalContent({"x": 1}, hash_policy=policy),
    ], ids=["bytes", "text", "canonical"])
    def test_equal_items_share_digest(self, make):
        items = [make(hashlib.sha256), make(hashlib.sha512), make(hashlib.blake2s)]
        for a in items:
            for b in items:
                if a.equals(b):
                    assert a.hash() == b.hash()
        assert make(hashlib.sha256).equals(make(hashlib.sha256))
        assert not make(hashlib.sha256).equals(make(hashlib.sha512))


class TestProtocol:
    """Tests for the structural Content protocol."""

    @pytest.mark.parametrize("content", [
        BytesContent(b"x"),
        TextContent("x"),
        CanonicalContent({"x": 1}),
        FailingHashContent("x"),
    ])
    def test_is_content(self, content):
        assert isinstance(content, Content)

    def test_plain_string_is_not_content(self):
        assert not isinstance("x", Content)


class TestCapabilityWrapping:
    """Tests for content_digest() / content_equals()."""

    def test_digest_failure_wrapped(self):
        with pytest.raises(ContentHashingException) as exc_info:
            content_digest(FailingHashContent("x", fail=True), leaf_index=3)
        err = exc_info.value
        assert err.code == ErrorCodes.CONTENT_HASH_FAILED
        assert err.details == {"content_type": "FailingHashContent", "leaf_index": 3}

    def test_own_exceptions_pass_through(self):
        """Library exceptions raised inside hash() are not re-wrapped."""
        with pytest.raises(CanonicalizationException):
            content_digest(CanonicalContent({"x": float("inf")}))

    def test_equality_failure_wrapped(self):
        with pytest.raises(ContentEqualityException) as exc_info:
            content_equals(FailingEqualsContent("a"), TextContent("a"))
        assert exc_info.value.details["other_type"] == "TextContent"

    def test_error_model_round_trip(self):
        with pytest.raises(ContentEqualityException) as exc_info:
            content_equals(FailingEqualsContent("a"), TextContent("a"))
        model = exc_info.value.to_error_model()
        assert model.code == ErrorCodes.CONTENT_EQUALITY_FAILED
        assert model.to_exception().message == exc_info.value.message
