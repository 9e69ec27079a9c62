"""
Block type registry.

Maps every block type tag to a read-only descriptor telling whether blocks of
that type expect an answer and which interaction types may be attached to
them. Adding a block type means adding one entry to ``_DESCRIPTORS``.
"""
from dataclasses import dataclass
from types import MappingProxyType
from typing import FrozenSet, Mapping

from .enums import FormBlockType, FormBlockInteractionType
from .errors import UnknownBlockType, UnknownInteractionType


@dataclass(frozen=True)
class BlockTypeDescriptor:
    type: FormBlockType
    is_actionable: bool
    accepts_interaction_types: FrozenSet[FormBlockInteractionType]

    def accepts(self, interaction_type) -> bool:
        return interaction_type_of(interaction_type) in self.accepts_interaction_types


def _descriptor(block_type: FormBlockType, *interaction_types: FormBlockInteractionType, actionable: bool = True):
    return BlockTypeDescriptor(block_type, actionable, frozenset(interaction_types))


_INPUT = FormBlockInteractionType.input

_DESCRIPTORS = (
    _descriptor(FormBlockType.none, FormBlockInteractionType.button, actionable=False),
    _descriptor(FormBlockType.consent, FormBlockInteractionType.consent),
    _descriptor(FormBlockType.checkbox, FormBlockInteractionType.checkbox),
    _descriptor(FormBlockType.radio, FormBlockInteractionType.radio),
    _descriptor(FormBlockType.long, FormBlockInteractionType.textarea),
    _descriptor(FormBlockType.short, _INPUT),
    _descriptor(FormBlockType.email, _INPUT),
    _descriptor(FormBlockType.link, _INPUT),
    _descriptor(FormBlockType.number, _INPUT),
    _descriptor(FormBlockType.phone, _INPUT),
)

BLOCK_TYPE_REGISTRY: Mapping[FormBlockType, BlockTypeDescriptor] = MappingProxyType(
    {d.type: d for d in _DESCRIPTORS}
)


def block_type_of(type_tag) -> FormBlockType:
    """Coerce a stored tag (or enum member) into a FormBlockType."""
    try:
        return FormBlockType(type_tag)
    except ValueError:
        raise UnknownBlockType(type_tag) from None


def interaction_type_of(type_tag) -> FormBlockInteractionType:
    try:
        return FormBlockInteractionType(type_tag)
    except ValueError:
        raise UnknownInteractionType(type_tag) from None


def describe(type_tag) -> BlockTypeDescriptor:
    return BLOCK_TYPE_REGISTRY[block_type_of(type_tag)]


def is_actionable(type_tag) -> bool:
    return describe(type_tag).is_actionable


def accepts(type_tag, interaction_type) -> bool:
    return describe(type_tag).accepts(interaction_type)
