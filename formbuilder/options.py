"""
Option bag attached to a block interaction.

Options are stored as an opaque JSON object of ``name -> scalar``. Nothing
here knows what a key means; validators interpret keys such as ``max_chars``
or ``rows`` for the interaction types that define them.
"""
from typing import Any, Dict, Iterator, Mapping, Optional, Union

from .errors import InvalidOptionValue

OptionValue = Union[bool, int, float, str, None]

_SCALARS = (bool, int, float, str, type(None))


class _Absent:
    """Marker for a key that was never set. Falsy, and distinct from None."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self):
        return False

    def __repr__(self):
        return 'ABSENT'


ABSENT = _Absent()


def _check(key: str, value: Any) -> OptionValue:
    if not isinstance(value, _SCALARS):
        raise InvalidOptionValue(key, value)
    return value


class InteractionOptions(Mapping):
    def __init__(self, data: Optional[Mapping[str, Any]] = None):
        self._data: Dict[str, OptionValue] = {}
        if data:
            self.merge(data)

    def get(self, key: str, default: Any = ABSENT) -> Any:
        return self._data.get(key, default)

    def set(self, key: str, value: OptionValue) -> 'InteractionOptions':
        self._data[key] = _check(key, value)
        return self

    def merge(self, updates: Mapping[str, Any]) -> 'InteractionOptions':
        # validate everything first so a bad value leaves the bag untouched
        checked = {k: _check(k, v) for k, v in updates.items()}
        self._data.update(checked)
        return self

    def to_dict(self) -> Dict[str, OptionValue]:
        return dict(self._data)

    def __getitem__(self, key: str) -> OptionValue:
        return self._data[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __repr__(self):
        return f'InteractionOptions({self._data!r})'


def merge_options(current: Optional[Mapping[str, Any]], updates: Mapping[str, Any]) -> Dict[str, OptionValue]:
    """Return a new plain dict with ``updates`` merged over ``current``."""
    return InteractionOptions(current).merge(updates).to_dict()
