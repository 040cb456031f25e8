from typing import Any, Dict, Mapping


class _Unset:
    """Marker for a field the caller did not provide at all.

    JSON null arrives as None and is a real value; only UNSET is dropped.
    """

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "UNSET"

    def __bool__(self) -> bool:
        return False


UNSET = _Unset()


def clean_object(obj: Mapping[str, Any]) -> Dict[str, Any]:
    """Return a copy of ``obj`` without the keys whose value is UNSET."""
    return {key: value for key, value in obj.items() if value is not UNSET}


def pick(arguments: Mapping[str, Any], *fields: str) -> Dict[str, Any]:
    """Select ``fields`` from ``arguments``, marking absent ones UNSET, then clean."""
    return clean_object({field: arguments.get(field, UNSET) for field in fields})
