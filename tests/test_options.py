"""Tests for the interaction option bag."""

import pytest

from formbuilder.errors import InvalidOptionValue
from formbuilder.options import ABSENT, InteractionOptions, merge_options


def test_missing_key_is_absent_not_none():
    options = InteractionOptions()

    assert options.get("max_chars") is ABSENT
    assert not options.get("max_chars")
    assert "max_chars" not in options


def test_stored_none_and_zero_are_not_absent():
    options = InteractionOptions({"placeholder": None, "max_chars": 0})

    assert options.get("placeholder") is None
    assert options.get("max_chars") == 0
    assert options.get("max_chars") is not ABSENT


def test_get_with_explicit_default():
    assert InteractionOptions().get("rows", 3) == 3


def test_set_merges_into_existing_bag():
    options = InteractionOptions({"rows": 10})
    options.set("max_chars", 250)

    assert options.to_dict() == {"rows": 10, "max_chars": 250}


def test_merge_keeps_previous_keys_and_overwrites_per_key():
    options = InteractionOptions({"rows": 10, "max_chars": 250})
    options.merge({"max_chars": 500})

    assert options == {"rows": 10, "max_chars": 500}


def test_round_trip_preserves_value_types():
    written = {"rows": 10, "max_chars": 250, "ratio": 0.5, "strict": True, "hint": "10"}
    options = InteractionOptions().merge(written)

    for key, value in written.items():
        assert options.get(key) == value
        assert type(options.get(key)) is type(value)


@pytest.mark.parametrize("value", [[1, 2], {"nested": True}, object()])
def test_non_scalar_values_are_rejected(value):
    options = InteractionOptions({"rows": 10})

    with pytest.raises(InvalidOptionValue):
        options.merge({"max_chars": 100, "bad": value})

    assert options.to_dict() == {"rows": 10}


def test_merge_options_does_not_mutate_the_stored_dict():
    stored = {"rows": 10}

    merged = merge_options(stored, {"max_chars": 250})

    assert merged == {"rows": 10, "max_chars": 250}
    assert stored == {"rows": 10}


def test_merge_options_accepts_empty_stored_value():
    assert merge_options(None, {"rows": 4}) == {"rows": 4}
