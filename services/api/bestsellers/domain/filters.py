from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Literal

ISBN_DELIMITER = ";"
ALT_ISBN_DELIMITER = ","
OFFSET_STEP = 20

# ASCII only: \d would also accept other Unicode digits.
_isbn_re = re.compile(r"[0-9]{10}|[0-9]{13}")
_int_re = re.compile(r"-?[0-9]+")

MSG_STRING = "The {field} field must be a string."
MSG_UTF8 = "The {field} field must be valid UTF-8 text."
MSG_ISBN_FORMAT = "Each ISBN must be exactly 10 or 13 digits."
MSG_ISBN_TYPE = "The isbn field must be a string or an array of strings."
MSG_ISBN_EMPTY = "The isbn field must contain at least one ISBN."
MSG_ISBN_MIXED = "The isbn field must use either ';' or ',' as a delimiter, not both."
MSG_OFFSET_INTEGER = "The offset field must be an integer."
MSG_OFFSET_MIN = "The offset field must be at least 0."
MSG_OFFSET_STEP = "The offset field must be a multiple of 20."


@dataclass(frozen=True)
class FilterSet:
    author: str | None = None
    title: str | None = None
    isbn: tuple[str, ...] | None = None
    offset: int | None = None

    @property
    def isbn_param(self) -> str | None:
        """Canonical wire form: entries joined with ';' in input order."""
        if self.isbn is None:
            return None
        return ISBN_DELIMITER.join(self.isbn)


@dataclass(frozen=True)
class ValidationError:
    """Field-level problems with client input. Returned, never raised."""

    errors: Mapping[str, tuple[str, ...]]
    kind: Literal["validation"] = field(default="validation", init=False)
    status_code: int = field(default=422, init=False)

    def as_dict(self) -> dict[str, list[str]]:
        return {name: list(msgs) for name, msgs in self.errors.items()}


class _InvalidIsbnInput(Exception):
    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


def split_isbn_input(value: Any) -> list[str]:
    """Turn any accepted isbn shape into a list of trimmed entries.

    Accepts a string delimited by ';' or ',' (not both), or a list/tuple of
    strings. Entries are not checked for format here.
    """
    if isinstance(value, str):
        if ISBN_DELIMITER in value and ALT_ISBN_DELIMITER in value:
            raise _InvalidIsbnInput(MSG_ISBN_MIXED)
        sep = ISBN_DELIMITER if ISBN_DELIMITER in value else ALT_ISBN_DELIMITER
        return [part.strip() for part in value.split(sep)]

    if isinstance(value, (list, tuple)):
        if not value:
            raise _InvalidIsbnInput(MSG_ISBN_EMPTY)
        if not all(isinstance(v, str) for v in value):
            raise _InvalidIsbnInput(MSG_ISBN_TYPE)
        return [v.strip() for v in value]

    raise _InvalidIsbnInput(MSG_ISBN_TYPE)


def _check_isbn(value: Any) -> tuple[tuple[str, ...] | None, list[str]]:
    try:
        entries = split_isbn_input(value)
    except _InvalidIsbnInput as e:
        return None, [e.message]

    # All or nothing: one bad entry rejects the whole field.
    if any(not _isbn_re.fullmatch(e) for e in entries):
        return None, [MSG_ISBN_FORMAT]
    return tuple(entries), []


def _check_offset(value: Any) -> tuple[int | None, list[str]]:
    # bool is an int subclass; JSON true is not an offset.
    if isinstance(value, bool):
        return None, [MSG_OFFSET_INTEGER]
    try:
        if isinstance(value, int):
            n = value
            str(n)
        elif isinstance(value, str) and _int_re.fullmatch(value.strip()):
            n = int(value.strip())
        else:
            return None, [MSG_OFFSET_INTEGER]
    except ValueError:
        # Past the interpreter's int <-> str digit limit.
        return None, [MSG_OFFSET_INTEGER]

    problems: list[str] = []
    if n < 0:
        problems.append(MSG_OFFSET_MIN)
    if n % OFFSET_STEP != 0:
        problems.append(MSG_OFFSET_STEP)
    if problems:
        return None, problems
    return n, []


def validate_filters(raw: Mapping[str, Any]) -> FilterSet | ValidationError:
    """Validate raw request parameters and build a normalized FilterSet.

    A key holding ``None`` counts as absent. Unknown keys are ignored. Every
    recognised field is checked so the error lists all problems at once.
    """
    errors: dict[str, tuple[str, ...]] = {}
    values: dict[str, Any] = {}

    for name in ("author", "title"):
        v = raw.get(name)
        if v is None:
            continue
        if not isinstance(v, str):
            errors[name] = (MSG_STRING.format(field=name),)
            continue
        try:
            v.encode("utf-8")
        except UnicodeEncodeError:
            # Lone surrogates survive JSON decoding but cannot go on the wire.
            errors[name] = (MSG_UTF8.format(field=name),)
            continue
        values[name] = v

    if raw.get("isbn") is not None:
        isbn, problems = _check_isbn(raw["isbn"])
        if problems:
            errors["isbn"] = tuple(problems)
        else:
            values["isbn"] = isbn

    if raw.get("offset") is not None:
        offset, problems = _check_offset(raw["offset"])
        if problems:
            errors["offset"] = tuple(problems)
        else:
            values["offset"] = offset

    if errors:
        return ValidationError(errors=errors)
    return FilterSet(**values)
