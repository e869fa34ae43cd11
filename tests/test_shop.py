from __future__ import annotations

from persistence import ANONYMOUS_CREATOR_ID, Shop


def test_display_name_for_named_creator():
    s = Shop(created_by="Alice", created_by_id="u1")
    assert s.created_by_display_name() == "Alice"


def test_set_creator_anonymous():
    s = Shop(created_by="Alice", created_by_id="u1")
    s.set_creator_anonymous()
    assert s.created_by == ""
    assert s.created_by_id == ANONYMOUS_CREATOR_ID
    assert s.created_by_display_name() == "Anonymous"


def test_properties_exclude_id():
    props = Shop(id=3, title="t").properties()
    assert "id" not in props
    assert props["title"] == "t"
