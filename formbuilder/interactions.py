"""
Interaction resolver.

Given a block, pick the client component that handles it (if any) and build
a validator for respondent input. Bindings are looked up by block type; each
binding owns a validator factory that receives the active interaction's
options and returns a pure function ``payload -> ValidationResult``.
"""
from dataclasses import dataclass, field
from numbers import Real
from types import MappingProxyType
from typing import Any, Callable, FrozenSet, Mapping, Optional, Sequence

from .enums import FormBlockType
from .options import ABSENT
from .registry import block_type_of

REQUIRED_MESSAGE = 'This field is required'
MAX_CHARS_MESSAGE = 'You have exceeded the maximum number of characters allowed.'


@dataclass(frozen=True)
class ValidationResult:
    valid: bool
    message: Optional[str] = None

    def to_dict(self) -> dict:
        data = {'valid': self.valid}
        if self.message is not None:
            data['message'] = self.message
        return data


VALID = ValidationResult(True)

Validator = Callable[[Any], ValidationResult]


def _is_empty(payload: Any) -> bool:
    if payload is None:
        return True
    if isinstance(payload, (str, bytes, list, tuple, dict, set)):
        return len(payload) == 0
    return False


def required(rule: Callable[[Any], ValidationResult]) -> Validator:
    """Wrap a type-specific rule with the required-field precondition."""

    def validator(payload: Any) -> ValidationResult:
        if _is_empty(payload):
            return ValidationResult(False, REQUIRED_MESSAGE)
        return rule(payload)

    return validator


def _positive_limit(value: Any) -> Optional[Real]:
    # bools are ints in Python but never a meaningful limit
    if value is ABSENT or isinstance(value, bool) or not isinstance(value, Real):
        return None
    return value if value > 0 else None


def max_chars_validator(options: Mapping[str, Any]) -> Validator:
    limit = _positive_limit(options.get('max_chars', ABSENT))

    def rule(payload: Any) -> ValidationResult:
        if limit is None:
            return VALID
        # characters, so lists and objects are measured in their text form
        length = len(payload) if isinstance(payload, str) else len(str(payload))
        if length <= limit:
            return VALID
        return ValidationResult(False, MAX_CHARS_MESSAGE)

    return required(rule)


def always_valid(payload: Any) -> ValidationResult:
    return VALID


@dataclass(frozen=True)
class InteractionBinding:
    component: str
    block_types: FrozenSet[FormBlockType]
    validator_factory: Callable[[Mapping[str, Any]], Validator]
    props: Mapping[str, Any] = field(default_factory=lambda: MappingProxyType({}))

    def applies_to(self, block_type: FormBlockType) -> bool:
        return block_type in self.block_types


TEXTAREA_ACTION = InteractionBinding(
    component='TextareaAction',
    block_types=frozenset({FormBlockType.long}),
    validator_factory=max_chars_validator,
    props=MappingProxyType({'disableEnterKey': True}),
)

BINDINGS: Sequence[InteractionBinding] = (TEXTAREA_ACTION,)


@dataclass(frozen=True)
class ResolvedInteraction:
    in_use: bool
    component: Optional[str]
    validator: Validator
    props: Mapping[str, Any]
    interaction: Any = None

    def to_dict(self) -> dict:
        return {
            'in_use': self.in_use,
            'component': self.component,
            'props': dict(self.props),
        }


NOT_IN_USE = ResolvedInteraction(False, None, always_valid, MappingProxyType({}))


def find_binding(block_type) -> Optional[InteractionBinding]:
    block_type = block_type_of(block_type)
    for binding in BINDINGS:
        if binding.applies_to(block_type):
            return binding
    return None


def active_interaction(block) -> Any:
    interactions = getattr(block, 'interactions', None) or []
    return interactions[0] if interactions else None


def resolve(block) -> ResolvedInteraction:
    """Resolve the component, props and validator for ``block``.

    Raises UnknownBlockType when the block carries a tag outside FormBlockType.
    """
    binding = find_binding(block.type)
    if binding is None:
        return NOT_IN_USE

    interaction = active_interaction(block)
    # snapshot the options so the validator does not see later mutations
    options = MappingProxyType(dict(interaction.options or {})) if interaction is not None else MappingProxyType({})
    return ResolvedInteraction(
        in_use=True,
        component=binding.component,
        validator=binding.validator_factory(options),
        props=binding.props,
        interaction=interaction,
    )


def validate(block, payload: Any) -> ValidationResult:
    return resolve(block).validator(payload)
