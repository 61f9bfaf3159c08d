#!/usr/bin/env python3
"""
Tests for the lifecycle of a single reference.
"""
from unittest import mock

import pytest

from json_schema_refs import (
    CircularReferenceError,
    ErrorCode,
    InvalidPointerError,
    NotAReferenceError,
    PointerResolutionError,
    Reference,
    ReferenceState,
)


class TestReference:
    """Tests for Reference class."""

    def setup_method(self):
        """Set up the test environment."""
        self.ref_resolver = mock.Mock()
        self.document = {
            "definitions": {
                "name": {"type": "string"},
            }
        }
        self.ref_resolver.fetch_ref.return_value = self.document

    def test_is_reference(self):
        """Test classifying nodes."""
        assert Reference.is_reference({"$ref": "#/definitions/name"})
        assert Reference.is_reference({"$ref": ""})
        assert not Reference.is_reference({"type": "string"})
        assert not Reference.is_reference(["$ref"])
        assert not Reference.is_reference("$ref")

    def test_not_a_reference(self):
        """Test that nodes without $ref are rejected."""
        with pytest.raises(NotAReferenceError):
            Reference(self.ref_resolver, None, {"type": "string"})

        with pytest.raises(NotAReferenceError) as excinfo:
            Reference(self.ref_resolver, None, [{"$ref": "#"}])
        assert excinfo.value.code == ErrorCode.NOT_A_REFERENCE

    def test_parse(self):
        """Test splitting a reference into location and pointer parts."""
        reference = Reference(self.ref_resolver, "http://example.com/root.json",
                              {"$ref": "  other.json#/definitions/a~1b  "})

        assert reference.state is ReferenceState.UNRESOLVED
        assert reference.ref_string == "other.json#/definitions/a~1b"
        assert reference.uri == "other.json"
        assert reference.parts == ["definitions", "a/b"]
        assert reference.source_uri == "http://example.com/root.json"

    def test_parse_empty_reference(self):
        """Test that an empty reference points at the current document."""
        reference = Reference(self.ref_resolver, "http://example.com/root.json", {"$ref": "  "})

        assert reference.uri == ""
        assert reference.parts == []
        assert reference.resolve() is self.document
        self.ref_resolver.fetch_ref.assert_called_once_with("", "http://example.com/root.json")

    def test_invalid_pointer(self):
        """Test that malformed pointers are rejected while parsing."""
        with pytest.raises(InvalidPointerError) as excinfo:
            Reference(self.ref_resolver, None, {"$ref": "other.json#definitions/a"})
        assert excinfo.value.code == ErrorCode.INVALID_POINTER

        with pytest.raises(InvalidPointerError):
            Reference(self.ref_resolver, None, {"$ref": ["#/definitions/a"]})

    def test_unparsed_reference_cannot_resolve(self):
        """Test that resolving before parsing is a programming error."""
        reference = Reference(self.ref_resolver, None)

        assert reference.state is ReferenceState.UNPARSED
        with pytest.raises(RuntimeError):
            reference.resolve()
        self.ref_resolver.fetch_ref.assert_not_called()

    def test_set_referenced_object(self):
        """Test parsing a node after construction."""
        reference = Reference(self.ref_resolver, None)
        reference.set_referenced_object({"$ref": "#/definitions/name"})

        assert reference.state is ReferenceState.UNRESOLVED
        assert reference.resolve() == {"type": "string"}

    def test_resolve_is_idempotent(self):
        """Test that a resolved reference returns the same node without fetching again."""
        reference = Reference(self.ref_resolver, None, {"$ref": "#/definitions/name"})

        first = reference.resolve()
        second = reference.resolve()

        assert first is self.document["definitions"]["name"]
        assert second is first
        assert reference.state is ReferenceState.RESOLVED
        self.ref_resolver.fetch_ref.assert_called_once_with("", None)

    def test_slot_holds_reference_until_resolved(self):
        """Test that the containing slot is swapped for the reference and then the target."""
        container = {"items": {"$ref": "#/definitions/name"}}
        reference = Reference(self.ref_resolver, None, container["items"], container, "items")

        assert container["items"] is reference

        reference.resolve()

        assert container["items"] is self.document["definitions"]["name"]

    def test_slot_in_array(self):
        """Test slot replacement inside an array."""
        container = [{"type": "null"}, {"$ref": "#/definitions/name"}]
        reference = Reference(self.ref_resolver, None, container[1], container, 1)

        assert container[1] is reference
        reference.resolve()
        assert container == [{"type": "null"}, {"type": "string"}]

    def test_direct_cycle(self):
        """Test that a reference pointing at its own slot is detected."""
        document = {"definitions": {}}
        self.ref_resolver.fetch_ref.return_value = document
        reference = Reference(self.ref_resolver, None, {"$ref": "#/definitions/self"},
                              document["definitions"], "self")

        with pytest.raises(CircularReferenceError) as excinfo:
            reference.resolve()

        assert excinfo.value.code == ErrorCode.CIRCULAR_REFERENCE
        assert "#/definitions/self" in str(excinfo.value)

    def test_chained_references(self):
        """Test that pending references met on the way are resolved first."""
        document = {"definitions": {"target": {"type": "integer"}}}
        self.ref_resolver.fetch_ref.return_value = document
        inner = Reference(self.ref_resolver, None, {"$ref": "#/definitions/target"},
                          document["definitions"], "alias")
        outer = Reference(self.ref_resolver, None, {"$ref": "#/definitions/alias"})

        assert outer.resolve() is document["definitions"]["target"]
        assert inner.state is ReferenceState.RESOLVED
        assert document["definitions"]["alias"] is document["definitions"]["target"]

    def test_failed_resolution_can_be_retried(self):
        """Test that a failure leaves the reference unresolved rather than resolving."""
        reference = Reference(self.ref_resolver, None, {"$ref": "#/definitions/missing"})

        with pytest.raises(PointerResolutionError):
            reference.resolve()
        assert reference.state is ReferenceState.UNRESOLVED

        # Same error again, not a cycle
        with pytest.raises(PointerResolutionError):
            reference.resolve()

    def test_resolved_during_fetch(self):
        """Test that a reference resolved while its document was fetched is not walked again."""
        target = {"type": "boolean"}
        reference = None

        def fetch_ref(uri, source_uri):
            # The fetch drains other references, one of which needs this one
            if reference.state is ReferenceState.UNRESOLVED and fetch_ref.calls == 0:
                fetch_ref.calls += 1
                reference.resolve()
            return {"definitions": {"name": target}}
        fetch_ref.calls = 0

        self.ref_resolver.fetch_ref.side_effect = fetch_ref
        reference = Reference(self.ref_resolver, None, {"$ref": "other.json#/definitions/name"})

        assert reference.resolve() is target
        assert reference.state is ReferenceState.RESOLVED
        assert self.ref_resolver.fetch_ref.call_count == 2

    def test_str(self):
        """Test the string representation."""
        reference = Reference(self.ref_resolver, None, {"$ref": "#/definitions/name"})
        assert str(reference) == "Reference(ref='#/definitions/name', state=unresolved)"
