"""Record Ids — compound (collection, key) identity and its wire form.

Tests cover:
    - str() produces "<collection>:<key>"
    - parse() accepts full and bare forms for the right collection
    - parse() fails closed on another collection's id, empty keys, nested separators
"""

import pytest

from portfolio.core.domain_types import (
    Collection, RecordId,
)
from portfolio.core.errors import InvalidRecordIdError


def test_wire_form_is_collection_prefixed():
    rid = RecordId(Collection.BLOG_POST, "abc123")
    assert str(rid) == "blog_post:abc123"


def test_new_ids_are_unique_and_scoped():
    ids = {RecordId.new(Collection.PROJECT) for _ in range(50)}
    assert len(ids) == 50
    assert all(r.collection is Collection.PROJECT for r in ids)
    assert all(str(r).startswith("project:") for r in ids)


def test_parse_full_form_roundtrips():
    rid = RecordId.new(Collection.PROJECT)
    assert RecordId.parse(str(rid), Collection.PROJECT) == rid


def test_parse_bare_key_is_composed_with_collection():
    rid = RecordId.parse("abc123", Collection.BLOG_POST)
    assert rid == RecordId(Collection.BLOG_POST, "abc123")


def test_parse_strips_surrounding_whitespace():
    rid = RecordId.parse("  project:xyz  ", Collection.PROJECT)
    assert rid.key == "xyz"


def test_parse_rejects_other_collections_id():
    with pytest.raises(InvalidRecordIdError) as exc:
        RecordId.parse("project:abc123", Collection.BLOG_POST)
    assert exc.value.http_status == 400
    assert exc.value.collection == "blog_post"


@pytest.mark.parametrize("raw", ["", "   ", "blog_post:", "blog_post:a:b"])
def test_parse_rejects_malformed_ids(raw):
    with pytest.raises(InvalidRecordIdError):
        RecordId.parse(raw, Collection.BLOG_POST)
