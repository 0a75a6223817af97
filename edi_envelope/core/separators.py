"""Dialect defaults and separator context construction.

WHY: Every segment written into an interchange depends on four control
characters: the component separator, the data element separator, the
release indicator and the segment terminator. Each dialect has fixed
defaults; callers may override any subset of them. Encoding must work
from one merged, validated, immutable value so no step can see a
half-configured state.

HOW: Dialect defaults are named frozen dataclass constants (EDIFACT, X12)
registered in DIALECTS. build_separator_context() merges a
SeparatorOverride onto the chosen dialect's defaults and returns a frozen
SeparatorContext, whose __post_init__ enforces the invariants. Override
documents coming from JSON (CLI files, dict input) are validated with
jsonschema before they become a SeparatorOverride.

RULES:
- The four separators must be pairwise distinct, single characters
- is_default is True iff all four separators equal the dialect defaults
- Dialect constants are never mutated; contexts are built per call
- X12 has no release character; its fourth control slot is the
  repetition separator and it never escapes data
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Any, Dict, Optional, Tuple

import jsonschema

from edi_envelope import config
from edi_envelope.errors import ConfigurationError


@dataclass(frozen=True)
class Dialect:
    """Fixed properties of one interchange standard.

    RULES:
    - advice_tag: 3-char tag of the separator advice string, or None
      when the standard has no such string
    - release_escapes: True when the release indicator may be used to
      escape separator characters inside data values
    """

    name: str
    component: str
    data: str
    release: str
    terminator: str
    advice_tag: Optional[str]
    release_escapes: bool

    @property
    def separators(self) -> Tuple[str, str, str, str]:
        return (self.component, self.data, self.release, self.terminator)


EDIFACT = Dialect(
    name="edifact",
    component=":",
    data="+",
    release="?",
    terminator="'",
    advice_tag="UNA",
    release_escapes=True,
)

X12 = Dialect(
    name="x12",
    component=">",
    data="*",
    release="^",
    terminator="~",
    advice_tag=None,
    release_escapes=False,
)

DIALECTS: Dict[str, Dialect] = {
    EDIFACT.name: EDIFACT,
    X12.name: X12,
}

# Separator field names, in advice-string order.
SEPARATOR_FIELDS = ("component", "data", "release", "terminator")

OVERRIDE_SCHEMA: Dict[str, Any] = {
    "$schema": "https://json-schema.org/draft/2020-12/schema",
    "title": "Separator override",
    "type": "object",
    "properties": {
        **{
            name: {"type": "string", "minLength": 1, "maxLength": 1}
            for name in SEPARATOR_FIELDS
        },
        "dialect": {"type": "string", "enum": sorted(DIALECTS)},
    },
    "additionalProperties": False,
}


def get_dialect(name: str) -> Dialect:
    """Look up a registered dialect by identifier (case-insensitive)."""
    try:
        return DIALECTS[name.strip().lower()]
    except KeyError:
        raise ConfigurationError(
            "Unknown dialect '{}'. Available dialects: {}".format(
                name, ", ".join(sorted(DIALECTS))
            )
        ) from None


@dataclass(frozen=True)
class SeparatorOverride:
    """Caller-supplied replacements for any subset of the separators.

    WHY: Trading partners sometimes agree on non-default separators, e.g.
    when the default terminator appears in free-text data. Only the
    fields that differ need to be given.

    RULES:
    - Every field is optional; None means "use the dialect default"
    - dialect, when set, selects the dialect whose defaults are merged
    """

    component: Optional[str] = None
    data: Optional[str] = None
    release: Optional[str] = None
    terminator: Optional[str] = None
    dialect: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> SeparatorOverride:
        """Build an override from a JSON-shaped dict.

        WHY: Overrides arrive from JSON files and request bodies. Checking
        them against OVERRIDE_SCHEMA gives one clear error for unknown
        keys, wrong types and multi-character separators.

        Raises:
            ConfigurationError: If the document fails schema validation.
        """
        try:
            jsonschema.validate(instance=data, schema=OVERRIDE_SCHEMA)
        except jsonschema.ValidationError as exc:
            location = "/".join(str(p) for p in exc.absolute_path) or "<root>"
            raise ConfigurationError(
                "Invalid separator override at {}: {}".format(location, exc.message)
            ) from exc
        return cls(**data)

    def merged(self, other: SeparatorOverride) -> SeparatorOverride:
        """Return a new override where fields set on *other* win."""
        values = {
            f.name: getattr(other, f.name) if getattr(other, f.name) is not None
            else getattr(self, f.name)
            for f in fields(self)
        }
        return SeparatorOverride(**values)


@dataclass(frozen=True)
class SeparatorContext:
    """The effective separators for one encode call.

    WHY: Every envelope step and the segment encoder read the same four
    characters. Freezing them in one validated value keeps the encode
    deterministic and safe to share with nothing else.

    HOW: Built by build_separator_context(). Construction validates the
    invariants, so an invalid context can never exist.

    RULES:
    - component, data, release, terminator: exactly one character each
    - All four pairwise distinct (ConfigurationError otherwise)
    - dialect: identifier of a registered Dialect (checked here too, not
      only in build_separator_context)
    - is_default: True iff the separators equal the dialect defaults
    """

    component: str
    data: str
    release: str
    terminator: str
    dialect: str
    is_default: bool

    def __post_init__(self) -> None:
        for name in SEPARATOR_FIELDS:
            value = getattr(self, name)
            if not isinstance(value, str) or len(value) != 1:
                raise ConfigurationError(
                    "Separator '{}' must be a single character, got {!r}".format(name, value)
                )

        seen: Dict[str, str] = {}
        for name in SEPARATOR_FIELDS:
            value = getattr(self, name)
            if value in seen:
                raise ConfigurationError(
                    "Invalid interchange context: '{}' and '{}' are both {!r}".format(
                        seen[value], name, value
                    )
                )
            seen[value] = name

        defaults = get_dialect(self.dialect).separators
        if self.is_default != (self.separators == defaults):
            raise ConfigurationError(
                "Invalid interchange context: is_default={} but separators {!r} {} the {} defaults".format(
                    self.is_default,
                    "".join(self.separators),
                    "match" if self.separators == defaults else "differ from",
                    self.dialect,
                )
            )

    @property
    def separators(self) -> Tuple[str, str, str, str]:
        return (self.component, self.data, self.release, self.terminator)

    @property
    def spec(self) -> Dialect:
        """The Dialect these separators belong to."""
        return get_dialect(self.dialect)


def build_separator_context(
    dialect: Optional[str] = None,
    override: Optional[SeparatorOverride] = None,
) -> SeparatorContext:
    """Merge an override onto dialect defaults and validate the result.

    WHY: This is the single place where configuration turns into the
    value the encoder trusts. It runs once, before any segment is
    produced, so a bad configuration yields no output at all.

    HOW: Resolve the dialect (override, then argument, then
    config.DEFAULT_DIALECT). Start from its default separators, replace
    each field the override sets, compare with the defaults to compute
    is_default, then construct the frozen context (which validates).

    RULES:
    - An override naming a different dialect than the argument is an error
    - Unset override fields keep the dialect default

    Args:
        dialect: Dialect identifier, e.g. "edifact" or "x12".
        override: Optional separator replacements.

    Returns:
        A validated SeparatorContext.

    Raises:
        ConfigurationError: On unknown dialect, conflicting dialects, or
            invalid separators.
    """
    override = override or SeparatorOverride()

    if override.dialect and dialect and get_dialect(override.dialect) != get_dialect(dialect):
        raise ConfigurationError(
            "Override dialect '{}' conflicts with requested dialect '{}'".format(
                override.dialect, dialect
            )
        )

    spec = get_dialect(override.dialect or dialect or config.DEFAULT_DIALECT)

    values: Dict[str, str] = {}
    for name in SEPARATOR_FIELDS:
        custom = getattr(override, name)
        values[name] = custom if custom is not None else getattr(spec, name)

    effective = tuple(values[name] for name in SEPARATOR_FIELDS)

    return SeparatorContext(
        dialect=spec.name,
        is_default=effective == spec.separators,
        **values,
    )
