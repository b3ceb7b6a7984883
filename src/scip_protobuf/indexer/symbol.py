"""SCIP symbol identity and its canonical string form.

A symbol string is::

    <scheme> ' ' <manager> ' ' <package name> ' ' <version> ' ' <descriptors>

e.g. ``. . demo . User#id.`` for field ``id`` of message ``User`` in
package ``demo``.
"""

import enum
import re
from dataclasses import dataclass

from ..config import DEFAULT_MANAGER, DEFAULT_SCHEME, DEFAULT_VERSION

# Package name used for files that declare no package
NO_PACKAGE = "."

_SIMPLE_NAME = re.compile(r"[A-Za-z0-9_+\-$]+")


class Suffix(enum.Enum):
    """Descriptor kind, rendered as the trailing punctuation of a segment."""

    NAMESPACE = "/"
    TYPE = "#"
    TERM = "."


@dataclass(frozen=True)
class DescriptorSegment:
    """One named, kind-tagged piece of a qualified name."""

    name: str
    suffix: Suffix

    @classmethod
    def type(cls, name: str) -> "DescriptorSegment":
        return cls(name, Suffix.TYPE)

    @classmethod
    def term(cls, name: str) -> "DescriptorSegment":
        return cls(name, Suffix.TERM)

    def format(self) -> str:
        return _escape_name(self.name) + self.suffix.value


@dataclass(frozen=True)
class Symbol:
    """A declaration's identity across the whole index."""

    package: str
    descriptors: tuple[DescriptorSegment, ...]
    scheme: str = DEFAULT_SCHEME
    manager: str = DEFAULT_MANAGER
    version: str = DEFAULT_VERSION

    @property
    def display_name(self) -> str:
        return self.descriptors[-1].name if self.descriptors else ""


def format_symbol(symbol: Symbol) -> str:
    """Render a symbol in SCIP's textual grammar."""
    descriptors = "".join(segment.format() for segment in symbol.descriptors)
    parts = [
        symbol.scheme,
        _escape_package_part(symbol.manager),
        _escape_package_part(symbol.package),
        _escape_package_part(symbol.version),
        descriptors,
    ]
    return " ".join(parts)


def _escape_package_part(value: str) -> str:
    # Empty package parts print as '.', spaces are doubled
    if not value:
        return "."
    return value.replace(" ", "  ")


def _escape_name(name: str) -> str:
    if _SIMPLE_NAME.fullmatch(name):
        return name
    return "`" + name.replace("`", "``") + "`"
