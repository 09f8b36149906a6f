"""Typed series options and option-key validation."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from attrs import evolve, field, fields, frozen, validators
from toolz import merge, valfilter

from .chart import PreconditionError
from .types import SeriesType

# Highcharts camelCase key -> SeriesOptions field
_ALIASES: dict[str, str] = {
    "zIndex": "z_index",
    "linkedTo": "linked_to",
    "fillOpacity": "fill_opacity",
    "lineWidth": "line_width",
}
_KEYS: dict[str, str] = {field_name: key for key, field_name in _ALIASES.items()}


def _type_value(value: str | SeriesType | None) -> str | None:
    return value.value if isinstance(value, SeriesType) else value


def _between_0_and_1(instance, attribute, value) -> None:
    if value is not None and not 0 <= value <= 1:
        raise ValueError(f"{attribute.name} must be between 0 and 1, got {value}")


def validate_args(operation: str, args: Mapping[str, Any]) -> None:
    """
    Check that option keys are usable as Highcharts keys.

    Only the shape of the keys is checked; unknown keys are allowed and
    passed through untouched.

    Args:
        operation: Name of the calling operation, used in error messages
        args: Keyword options supplied by the caller

    Raises:
        PreconditionError: If a key is empty, not a string, or dotted
    """
    for key in args:
        if not isinstance(key, str) or not key:
            raise PreconditionError(
                f"{operation}: option names must be non-empty strings, got {key!r}"
            )
        if "." in key:
            head, *rest = key.split(".")
            hint = head + "".join(part[:1].upper() + part[1:] for part in rest)
            raise PreconditionError(
                f"{operation}: option '{key}' is not a valid Highcharts key; "
                f"use camelCase (e.g. '{hint}')"
            )


@frozen(kw_only=True)
class SeriesOptions:
    """Well-known series options plus a passthrough bag for everything else.

    Unset fields are left out of the series entry so the renderer's own
    defaults apply.
    """

    name: str | None = None
    type: str | None = field(default=None, converter=_type_value)
    color: str | None = None
    id: str | None = None
    z_index: int | None = None
    linked_to: str | None = None
    fill_opacity: float | None = field(default=None, validator=_between_0_and_1)
    line_width: float | None = field(
        default=None, validator=validators.optional(validators.ge(0))
    )
    extra: Mapping[str, Any] = field(factory=dict)

    @classmethod
    def from_kwargs(cls, **kwargs: Any) -> SeriesOptions:
        """Split keyword options into known fields and ``extra``.

        Known fields may be spelled in camelCase (``zIndex``) or snake_case
        (``z_index``).
        """
        known = {f.name for f in fields(cls)} - {"extra"}
        values: dict[str, Any] = {}
        extra: dict[str, Any] = {}
        for key, value in kwargs.items():
            name = _ALIASES.get(key, key)
            if name in known:
                values[name] = value
            else:
                extra[key] = value
        return cls(**values, extra=extra)

    def merge(self, **kwargs: Any) -> SeriesOptions:
        """Return a copy with ``kwargs`` overriding this instance's values."""
        if not kwargs:
            return self
        other = SeriesOptions.from_kwargs(**kwargs)
        overrides = valfilter(lambda v: v is not None, _field_values(other))
        return evolve(self, **overrides, extra=merge(self.extra, other.extra))

    def with_defaults(self, **defaults: Any) -> SeriesOptions:
        """Fill only the fields the caller left unset."""
        given = SeriesOptions.from_kwargs(**defaults)
        missing = {
            name: value
            for name, value in _field_values(given).items()
            if value is not None and getattr(self, name) is None
        }
        return evolve(self, **missing, extra=merge(given.extra, self.extra))

    def without(self, *names: str) -> SeriesOptions:
        """Return a copy with the given fields unset."""
        return evolve(self, **{_ALIASES.get(name, name): None for name in names})

    def to_dict(self) -> dict[str, Any]:
        entry = {_KEYS.get(name, name): value for name, value in _field_values(self).items()}
        return merge(valfilter(lambda v: v is not None, entry), self.extra)


def _field_values(opts: SeriesOptions) -> dict[str, Any]:
    return {f.name: getattr(opts, f.name) for f in fields(SeriesOptions) if f.name != "extra"}
