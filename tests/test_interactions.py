"""Tests for resolving a block's component and validator."""

from types import SimpleNamespace

import pytest

from formbuilder.errors import UnknownBlockType
from formbuilder.interactions import (
    MAX_CHARS_MESSAGE,
    REQUIRED_MESSAGE,
    ValidationResult,
    resolve,
    validate,
)


def _block(block_type="input-long", options=None, with_interaction=True):
    interactions = []
    if with_interaction:
        interactions.append(SimpleNamespace(id="i-1", type="textarea", options=options))
    return SimpleNamespace(type=block_type, interactions=interactions)


def test_long_text_block_uses_textarea_component():
    resolved = resolve(_block())

    assert resolved.in_use
    assert resolved.component == "TextareaAction"
    assert dict(resolved.props) == {"disableEnterKey": True}
    assert resolved.to_dict() == {
        "in_use": True,
        "component": "TextareaAction",
        "props": {"disableEnterKey": True},
    }


@pytest.mark.parametrize("length", [1, 249, 250])
def test_payload_within_limit_is_valid(length):
    assert validate(_block(options={"max_chars": 250}), "a" * length) == ValidationResult(True)


def test_payload_over_limit_is_invalid():
    result = validate(_block(options={"max_chars": 250}), "a" * 251)

    assert not result.valid
    assert result.message == MAX_CHARS_MESSAGE
    assert result.to_dict() == {"valid": False, "message": MAX_CHARS_MESSAGE}


@pytest.mark.parametrize("options", [None, {}, {"max_chars": 0}, {"max_chars": -5}, {"rows": 3}])
def test_no_positive_limit_means_no_limit(options):
    assert validate(_block(options=options), "a" * 5000).valid


def test_non_numeric_limit_is_ignored():
    assert validate(_block(options={"max_chars": "ten"}), "a" * 50).valid
    assert validate(_block(options={"max_chars": True}), "a" * 50).valid


@pytest.mark.parametrize("payload", [None, "", []])
@pytest.mark.parametrize("options", [None, {"max_chars": 250}, {"max_chars": 0}])
def test_empty_payload_is_required(payload, options):
    result = validate(_block(options=options), payload)

    assert result == ValidationResult(False, REQUIRED_MESSAGE)


def test_length_is_measured_on_the_raw_payload():
    block = _block(options={"max_chars": 3})

    assert not validate(block, "  ab  ").valid
    assert validate(block, "   ").valid


def test_long_text_block_without_interaction_still_requires_input():
    block = _block(with_interaction=False)

    assert validate(block, "anything").valid
    assert validate(block, "").message == REQUIRED_MESSAGE


@pytest.mark.parametrize("block_type", ["none", "consent", "radio", "input-short", "input-email"])
def test_blocks_without_binding_are_always_valid(block_type):
    resolved = resolve(_block(block_type, with_interaction=False))

    assert not resolved.in_use
    assert resolved.component is None
    assert resolved.validator(None).valid
    assert resolved.validator("").valid


def test_validator_is_not_affected_by_later_option_changes():
    options = {"max_chars": 5}
    validator = resolve(_block(options=options)).validator
    options["max_chars"] = 500

    assert not validator("a" * 10).valid


def test_validator_is_repeatable():
    validator = resolve(_block(options={"max_chars": 5})).validator

    results = [validator("abcdef") for _ in range(3)]

    assert results == [ValidationResult(False, MAX_CHARS_MESSAGE)] * 3


def test_first_interaction_is_the_active_one():
    block = _block(options={"max_chars": 2})
    block.interactions.append(SimpleNamespace(id="i-2", type="textarea", options={"max_chars": 100}))

    resolved = resolve(block)

    assert resolved.interaction.id == "i-1"
    assert not resolved.validator("abc").valid


def test_unknown_block_type_raises():
    with pytest.raises(UnknownBlockType):
        resolve(_block("input-date"))


@pytest.mark.parametrize("payload", [["x" * 500], {"text": "x" * 500}, ("a", "b", "c", "d", "e", "f")])
def test_non_text_payloads_are_measured_in_characters(payload):
    result = validate(_block(options={"max_chars": 10}), payload)

    assert result == ValidationResult(False, MAX_CHARS_MESSAGE)


def test_short_non_text_payload_within_limit_is_valid():
    assert validate(_block(options={"max_chars": 10}), 12345).valid
