"""Argument checks shared by the tool validators.

Each check raises InvalidArgumentTypeError naming the field and the expected
JSON type. Absent or null optional fields are accepted; a null is
forwarded as sent.
"""

from typing import Any, Mapping

from models.errors import InvalidArgumentTypeError


def _is_number(value: Any) -> bool:
    # bool is an int subclass but not a JSON number
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def require_non_empty_string(arguments: Mapping[str, Any], field: str) -> str:
    value = arguments.get(field)
    if not isinstance(value, str) or not value:
        raise InvalidArgumentTypeError(field, "a non-empty string")
    return value


def optional_string(arguments: Mapping[str, Any], field: str) -> None:
    if arguments.get(field) is not None and not isinstance(arguments[field], str):
        raise InvalidArgumentTypeError(field, "a string")


def optional_number(arguments: Mapping[str, Any], field: str) -> None:
    if arguments.get(field) is not None and not _is_number(arguments[field]):
        raise InvalidArgumentTypeError(field, "a number")


def optional_object(arguments: Mapping[str, Any], field: str) -> None:
    if arguments.get(field) is not None and not isinstance(arguments[field], dict):
        raise InvalidArgumentTypeError(field, "an object")
