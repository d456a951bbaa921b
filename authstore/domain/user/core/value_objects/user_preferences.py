"""UserPreferences value object."""

import math
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Union

from authstore.domain.user.core.exceptions.user_errors import InvalidPreferencesError

# Recognized value shapes: scalars, lists of values, nested string-keyed maps.
PreferenceScalar = Union[None, bool, int, float, str]
PreferenceValue = Union[PreferenceScalar, List[Any], Dict[str, Any]]

_SCALAR_TYPES = (bool, int, float, str)

# BSON stores integers as signed 64-bit.
_INT64_MIN = -(2**63)
_INT64_MAX = 2**63 - 1


def _check_value(value: Any, path: str) -> None:
    if value is None:
        return
    if isinstance(value, _SCALAR_TYPES):
        if isinstance(value, float) and not math.isfinite(value):
            raise InvalidPreferencesError(f"'{path}' must be a finite number")
        if isinstance(value, int) and not isinstance(value, bool):
            if not _INT64_MIN <= value <= _INT64_MAX:
                raise InvalidPreferencesError(f"'{path}' is out of 64-bit integer range")
        if isinstance(value, str):
            _check_text(value, path)
        return
    if isinstance(value, list):
        for index, item in enumerate(value):
            _check_value(item, f"{path}[{index}]")
        return
    if isinstance(value, Mapping):
        _check_mapping(value, path)
        return
    raise InvalidPreferencesError(f"'{path}' has unsupported type {type(value).__name__}")


def _check_text(text: str, path: str) -> None:
    try:
        text.encode("utf-8")
    except UnicodeEncodeError:
        raise InvalidPreferencesError(f"'{path}' is not valid UTF-8") from None


def _check_mapping(data: Mapping[Any, Any], path: str) -> None:
    for key, value in data.items():
        if not isinstance(key, str):
            raise InvalidPreferencesError(f"keys must be strings, got {key!r} in '{path}'")
        _check_text(key, f"{path} key" if path else "key")
        _check_value(value, f"{path}.{key}" if path else key)


def _plain(value: Any) -> Any:
    """Deep-copy into plain dicts/lists so callers can't mutate stored data."""
    if isinstance(value, Mapping):
        return {key: _plain(item) for key, item in value.items()}
    if isinstance(value, list):
        return [_plain(item) for item in value]
    return value


@dataclass(frozen=True)
class UserPreferences:
    """User application preferences value object.

    Open-schema mapping of string keys to dynamically-typed values.
    Immutable - use `with_value()` to create modified copies.

    Accepted values: None, bool, int (signed 64-bit), float (finite),
    UTF-8 encodable str, lists of accepted values and nested mappings
    with string keys.

    Examples:
        >>> prefs = UserPreferences.default()
        >>> prefs.data
        {}

        >>> prefs = UserPreferences(data={"theme": "dark", "language": "it"})
        >>> prefs.get("theme")
        'dark'

        >>> prefs2 = prefs.with_value("notifications", True)
        >>> prefs2.data
        {'theme': 'dark', 'language': 'it', 'notifications': True}

    Raises:
        InvalidPreferencesError: If data is None, not a mapping, or holds
            values outside the accepted shapes
    """

    data: Dict[str, Any]

    def __post_init__(self) -> None:
        """Validate preferences data."""
        if self.data is None:
            raise InvalidPreferencesError("must not be null")

        if not isinstance(self.data, Mapping):
            raise InvalidPreferencesError(
                f"must be a mapping, got {type(self.data).__name__}"
            )

        _check_mapping(self.data, "")
        object.__setattr__(self, "data", _plain(self.data))

    @staticmethod
    def default() -> "UserPreferences":
        """Create default empty preferences.

        Returns:
            UserPreferences with empty data dictionary
        """
        return UserPreferences(data={})

    @classmethod
    def coerce(cls, value: Any) -> "UserPreferences":
        """Accept an existing instance or a raw mapping.

        Raises:
            InvalidPreferencesError: If value is None or invalid
        """
        if isinstance(value, cls):
            return value
        return cls(data=value)

    def get(self, key: str, default: Any = None) -> Any:
        """Get preference value by key.

        Examples:
            >>> prefs = UserPreferences(data={"theme": "dark"})
            >>> prefs.get("missing", "default_value")
            'default_value'
        """
        return self.data.get(key, default)

    def with_value(self, key: str, value: Any) -> "UserPreferences":
        """Return new preferences with updated value (immutable)."""
        new_data = dict(self.data)
        new_data[key] = value
        return UserPreferences(data=new_data)

    def to_document(self) -> Dict[str, Any]:
        """Plain copy suitable for storage."""
        return _plain(self.data)

    def __contains__(self, key: str) -> bool:
        return key in self.data

    def __len__(self) -> int:
        return len(self.data)
