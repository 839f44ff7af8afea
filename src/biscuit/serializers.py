"""Cookie value serializers.

A serializer turns arbitrary values into cookie text and back. The
storage applies it to every value it reads or writes; without one,
values are plain strings.
"""

import json
from typing import Any, Protocol, runtime_checkable

_JSON_KEYWORDS = frozenset({"null", "true", "false"})
_JSON_LEADERS = frozenset('{["0123456789')


@runtime_checkable
class Serializer(Protocol):
    """Parses and serializes cookie values."""

    def parse(self, text: str) -> Any: ...
    def stringify(self, value: Any) -> str: ...


def _looks_like_json(text: str) -> bool:
    return text in _JSON_KEYWORDS or (bool(text) and text[0] in _JSON_LEADERS)


class JSONSerializer:
    """Serializes cookie values as compact JSON.

    Plain strings are stored raw when they cannot be mistaken for JSON,
    which keeps ordinary values readable::

        >>> json_serializer.stringify("dark")
        'dark'
        >>> json_serializer.stringify("true")
        '"true"'
        >>> json_serializer.stringify({"zzz": 222})
        '{"zzz":222}'

    ``parse`` falls back to the raw text whenever it is not valid JSON.
    """

    __slots__ = ()

    def parse(self, text: str) -> Any:
        if _looks_like_json(text):
            try:
                return json.loads(text)
            except (ValueError, RecursionError):
                pass
        return text

    def stringify(self, value: Any) -> str:
        encoded = json.dumps(value, separators=(",", ":"), ensure_ascii=False)
        if isinstance(value, str) and not _looks_like_json(value) and encoded[1:-1] == value:
            return value
        return encoded


json_serializer = JSONSerializer()
