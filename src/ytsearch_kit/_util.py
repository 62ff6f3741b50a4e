from __future__ import annotations

import inspect, functools, re, types

from datetime import datetime, date
from typing import Any, get_origin, get_args, Union, get_type_hints, Mapping

from ._errors import InvalidEnum, InvalidDate

__all__ = [
    "runtime_typecheck",
]

_RFC3339_RE = re.compile(
    r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}(\.\d{1,6})?(Z|[+-]\d{2}:\d{2})$"
)

def _is_instance(val: Any, anno: Any) -> bool:

    origin = get_origin(anno)

    if origin is None:
        return anno is Any or isinstance(val, anno)

    if origin is Union or origin is types.UnionType:
        return any(_is_instance(val, arg) for arg in get_args(anno))

    return isinstance(val, origin)

def runtime_typecheck(fn):

    sig   = inspect.signature(fn)
    hints = get_type_hints(fn)

    @functools.wraps(fn)
    def wrapper(*args, **kwargs):
        bound = sig.bind_partial(*args, **kwargs)
        for name, value in bound.arguments.items():
            anno = hints.get(name)
            if anno and not _is_instance(value, anno):
                raise TypeError(
                    f"{fn.__name__}() argument '{name}' "
                    f"expects {anno}, got {type(value).__name__}"
                )
        return fn(*args, **kwargs)

    return wrapper

def _validate_enum(param_name: str, value: str, allowed: set[str]) -> str:
    """Return *value* unchanged if it is one of *allowed*, else raise :class:`InvalidEnum`."""
    if value not in allowed:
        bullets = "\n  • " + "\n  • ".join(sorted(allowed))
        raise InvalidEnum(f"{param_name}={value!r} is invalid. Allowed values:{bullets}")
    return value

def _prune_none(mapping: Mapping[str, object]) -> dict[str, object]:
    """Return a new dict without the None-valued keys."""
    return {k: v for k, v in mapping.items() if v is not None}

def _encode_term(term: str) -> str:
    """Percent-encode ``%`` and spaces so the term can sit in a query string as-is.

    Trailing spaces are dropped.
    """
    return "%20".join(term.rstrip(" ").replace("%", "%25").split(" "))

def _rfc3339(param_name: str, value: datetime | date | str) -> str:
    """Render *value* as an RFC‑3339 timestamp or raise :class:`InvalidDate`.

    Naive datetimes are taken to be UTC; bare dates become midnight UTC.
    """
    if isinstance(value, datetime):
        if value.tzinfo is None:
            return value.isoformat(timespec="seconds") + "Z"
        return value.isoformat(timespec="seconds")
    if isinstance(value, date):
        return f"{value.isoformat()}T00:00:00Z"

    if not isinstance(value, str) or not _RFC3339_RE.match(value):
        raise InvalidDate(
            f"{param_name}={value!r} is not an RFC 3339 timestamp "
            f"(e.g. '1970-01-01T00:00:00Z')"
        )
    try:
        datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError as exc:
        raise InvalidDate(f"{param_name}={value!r} is not a valid date: {exc}") from exc
    return value
