"""Chainable checks for configuration values."""

from __future__ import annotations

import dataclasses
import re
from typing import Any

# Cloud region formats; e.g. af-south-1
GEO_TAG_REGEX = r"^[a-zA-Z\-\d]*\Z"
# RFC 1123 host names, whose segments may start with a digit
HOST_NAME_REGEX = (
    r"^(([a-zA-Z0-9]|[a-zA-Z0-9][a-zA-Z0-9\-]*[a-zA-Z0-9])\.)*"
    r"([A-Za-z0-9]|[A-Za-z0-9][A-Za-z0-9\-]*[A-Za-z0-9])\Z"
)
# IPv4 addresses
IP_ADDRESS_REGEX = (
    r"^(([0-9]|[1-9][0-9]|1[0-9]{2}|2[0-4][0-9]|25[0-5])\.){3}"
    r"([0-9]|[1-9][0-9]|1[0-9]{2}|2[0-4][0-9]|25[0-5])\Z"
)
# Versions such as 0.1.2, v0.1.2 or v0.1.2-alpha
VERSION_NUMBER_REGEX = (
    r"^(v){0,1}(0|(?:[1-9]\d*))(?:\.(0|(?:[1-9]\d*))(?:\.(0|(?:[1-9]\d*)))?"
    r"(?:\-([\w][\w\.\-_]*))?)?\Z"
)
# Kubernetes namespace names
K8S_NAMESPACE_REGEX = r"^[a-z0-9]([-a-z0-9]*[a-z0-9])?\Z"


class ValidationError(ValueError):
    """Raised when a value fails a check."""


@dataclasses.dataclass
class Validator:
    """A named value with checks that raise ValidationError and return self on success."""

    name: str
    str_value: str = ""
    str_items: list[str] = dataclasses.field(default_factory=list)
    int_value: int = 0

    def is_not_empty(self) -> Validator:
        if self.str_value == "":
            raise ValidationError(f"'{self.name}' is empty")
        return self

    def match_regexp(self, regex: str) -> Validator:
        """Check the string value against ``regex``; an empty value always passes."""
        if self.str_value == "":
            return self
        if re.search(regex, self.str_value, re.ASCII) is None:
            raise ValidationError(f"'{self.str_value}' does not match given criteria ({regex})")
        return self

    def match_regexps(self, *args: str) -> Validator:
        """Pass if the value matches at least one of the given expressions."""
        error: ValidationError | None = None
        for regex in args:
            try:
                return self.match_regexp(regex)
            except ValidationError as exc:
                error = exc
        if error is not None:
            raise error
        return self

    def is_higher_than_zero(self) -> Validator:
        if self.int_value <= 0:
            raise ValidationError(f"'{self.name}' is less or equal to zero")
        return self

    def is_higher_or_equal_to_zero(self) -> Validator:
        if self.int_value < 0:
            raise ValidationError(f"'{self.name}' is less than zero")
        return self

    def is_less_or_equal_to(self, num: int) -> Validator:
        if self.int_value > num:
            raise ValidationError(f"'{self.name}' is higher than '{num}'")
        return self

    def is_not_equal_to(self, value: str) -> Validator:
        if self.str_value == value:
            raise ValidationError(f"'{self.name}' can't be equal to '{value}'")
        return self

    def has_items(self) -> Validator:
        if not self.str_items:
            raise ValidationError(f"'{self.name}' should contain at least one item")
        return self

    def has_unique_items(self) -> Validator:
        if len(set(self.str_items)) != len(self.str_items):
            joined = " ".join(self.str_items)
            raise ValidationError(f"'{self.name}' contains redundant values '[{joined}]'")
        return self


def field(name: str, value: Any) -> Validator:
    """Wrap an int, a string or a list of strings for validation."""
    if isinstance(value, bool):
        pass
    elif isinstance(value, int):
        return Validator(name, int_value=int(value))
    elif isinstance(value, str):
        return Validator(name, str_value=value)
    elif isinstance(value, (list, tuple)) and all(isinstance(item, str) for item in value):
        return Validator(name, str_items=list(value))
    raise ValidationError(
        f"can't parse '{value}' of type '{type(value).__name__}' as int or string"
    )


def is_not_blank(s: str) -> bool:
    """Return True if ``s`` holds anything other than spaces."""
    return s.replace(" ", "") != ""