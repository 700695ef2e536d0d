"""Semantic version parsing and ordering.

Accepts the forms release tooling actually produces: an optional ``v``
prefix, one to three numeric segments (missing segments are zero), an
optional ``-prerelease`` and an optional ``+build`` suffix. Ordering follows
SemVer 2.0 precedence; build metadata is ignored when comparing.
"""
from __future__ import annotations

import re
from dataclasses import dataclass, field
from functools import total_ordering
from typing import Tuple, Union

_SEMVER_RE = re.compile(
    r"^v?(?P<major>0|[1-9]\d*)"
    r"(?:\.(?P<minor>0|[1-9]\d*))?"
    r"(?:\.(?P<patch>0|[1-9]\d*))?"
    r"(?:-(?P<pre>[0-9A-Za-z-]+(?:\.[0-9A-Za-z-]+)*))?"
    r"(?:\+(?P<build>[0-9A-Za-z-]+(?:\.[0-9A-Za-z-]+)*))?$"
)

_PreIdent = Union[int, str]


def _pre_key(ident: _PreIdent) -> Tuple[int, int, str]:
    # Numeric identifiers sort before alphanumeric ones.
    if isinstance(ident, int):
        return (0, ident, "")
    return (1, 0, ident)


@total_ordering
@dataclass(frozen=True, eq=False)
class SemVer:
    """A parsed semantic version."""

    major: int
    minor: int = 0
    patch: int = 0
    prerelease: Tuple[_PreIdent, ...] = ()
    build: str = field(default="", compare=False)

    @classmethod
    def parse(cls, text: str) -> "SemVer":
        """Parse ``text`` into a ``SemVer``.

        Raises:
            ValueError: If ``text`` is not a semantic version.
        """
        m = _SEMVER_RE.match(str(text).strip())
        if m is None:
            raise ValueError(f"Malformed version: {text!r}")

        pre: Tuple[_PreIdent, ...] = ()
        if m.group("pre"):
            pre = tuple(int(p) if p.isdigit() else p for p in m.group("pre").split("."))

        return cls(
            major=int(m.group("major")),
            minor=int(m.group("minor") or 0),
            patch=int(m.group("patch") or 0),
            prerelease=pre,
            build=m.group("build") or "",
        )

    def _precedence(self) -> tuple:
        # A release ranks above any of its prereleases.
        pre = tuple(_pre_key(p) for p in self.prerelease)
        return (self.major, self.minor, self.patch, not self.prerelease, pre)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SemVer):
            return NotImplemented
        return self._precedence() == other._precedence()

    def __lt__(self, other: "SemVer") -> bool:
        if not isinstance(other, SemVer):
            return NotImplemented
        return self._precedence() < other._precedence()

    def __hash__(self) -> int:
        return hash(self._precedence())

    def __str__(self) -> str:
        text = f"{self.major}.{self.minor}.{self.patch}"
        if self.prerelease:
            text += "-" + ".".join(str(p) for p in self.prerelease)
        if self.build:
            text += "+" + self.build
        return text


__all__ = ["SemVer"]
