"""
Form Reducer: Happy Path Tests

One test per primitive type. Apply event to an appropriate schema, verify
the resulting schema.
"""

import pytest

from formengine.kernel.events import (
    add_field_event,
    move_field_event,
    remove_field_event,
    update_field_event,
)
from formengine.kernel.reducer import empty_schema, reduce

# ============================================================================
# Fixtures
# ============================================================================


@pytest.fixture
def empty():
    return empty_schema()


@pytest.fixture
def one_text_field(empty):
    result = reduce(empty, add_field_event(1, "text", field_id=100))
    assert result.applied
    return result.schema


@pytest.fixture
def one_choice_field(empty):
    result = reduce(empty, add_field_event(1, "choice", field_id=200))
    assert result.applied
    return result.schema


@pytest.fixture
def three_fields(empty):
    schema = empty
    for seq, (fid, ftype) in enumerate([(1, "text"), (2, "choice"), (3, "text")], start=1):
        result = reduce(schema, add_field_event(seq, ftype, field_id=fid))
        assert result.applied
        schema = result.schema
    return schema


# ============================================================================
# field.add
# ============================================================================


class TestFieldAdd:
    def test_add_to_empty(self, empty):
        result = reduce(empty, add_field_event(1, "text", field_id=100))

        assert result.applied
        assert result.error is None
        assert result.schema == [{"id": 100, "name": "", "type": "text", "options": []}]

    def test_add_without_id_assigns_one(self, empty):
        result = reduce(empty, add_field_event(1, "choice"))

        assert result.applied
        assert isinstance(result.schema[0]["id"], int)
        assert result.schema[0]["type"] == "choice"

    def test_add_appends_to_end(self, one_text_field):
        result = reduce(one_text_field, add_field_event(2, "choice", field_id=200))

        assert [f["id"] for f in result.schema] == [100, 200]

    def test_input_schema_not_mutated(self, one_text_field):
        before = [dict(f) for f in one_text_field]
        reduce(one_text_field, add_field_event(2, "choice", field_id=200))
        assert one_text_field == before


# ============================================================================
# field.update
# ============================================================================


class TestFieldUpdate:
    def test_update_name(self, one_text_field):
        result = reduce(one_text_field, update_field_event(2, 100, "name", "Customer Name"))

        assert result.applied
        assert result.schema == [{"id": 100, "name": "Customer Name", "type": "text", "options": []}]

    def test_update_options_from_raw_string(self, one_choice_field):
        result = reduce(one_choice_field, update_field_event(2, 200, "options", "a,b,c"))

        assert result.schema[0]["options"] == ["a", "b", "c"]

    def test_update_options_from_list(self, one_choice_field):
        result = reduce(one_choice_field, update_field_event(2, 200, "options", ["North", "South"]))

        assert result.schema[0]["options"] == ["North", "South"]

    def test_options_on_text_field_ignored(self, one_text_field):
        result = reduce(one_text_field, update_field_event(2, 100, "options", "a,b"))

        assert result.applied
        assert result.schema[0]["options"] == []
        assert [w.code for w in result.warnings] == ["OPTIONS_IGNORED"]

    def test_options_on_unknown_type_ignored(self, empty):
        schema = reduce(empty, add_field_event(1, "date", field_id=5)).schema

        result = reduce(schema, update_field_event(2, 5, "options", "a"))

        assert result.schema[0]["options"] == []


# ============================================================================
# field.remove / field.move
# ============================================================================


class TestFieldRemove:
    def test_remove(self, three_fields):
        result = reduce(three_fields, remove_field_event(4, 2))

        assert result.applied
        assert [f["id"] for f in result.schema] == [1, 3]


class TestFieldMove:
    def test_move_to_front(self, three_fields):
        result = reduce(three_fields, move_field_event(4, 3, 0))

        assert result.applied
        assert [f["id"] for f in result.schema] == [3, 1, 2]

    def test_move_to_end(self, three_fields):
        result = reduce(three_fields, move_field_event(4, 1, 2))

        assert [f["id"] for f in result.schema] == [2, 3, 1]

    def test_move_index_clamps_high(self, three_fields):
        result = reduce(three_fields, move_field_event(4, 1, 99))

        assert [f["id"] for f in result.schema] == [2, 3, 1]

    def test_move_index_clamps_low(self, three_fields):
        result = reduce(three_fields, move_field_event(4, 3, -5))

        assert [f["id"] for f in result.schema] == [3, 1, 2]
