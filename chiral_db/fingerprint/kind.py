from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum

from ..errors import ConfigurationError
from .words import WORD_BITS

ECFP_DIAMETERS = (0, 2, 4, 6, 8, 10)

# "ECFP4", "FCFP2" and the legacy "OpenBabelECFP4" spelling.
_TAG_RE = re.compile(r"(?:OpenBabel)?(ECFP|FCFP)([0-9]+)")


class FingerprintFamily(str, Enum):
    ECFP = "ECFP"  # Morgan, atom invariants
    FCFP = "FCFP"  # Morgan, feature invariants


@dataclass(frozen=True)
class FingerprintKind:
    family: FingerprintFamily
    diameter: int
    nbits: int

    def __post_init__(self):
        if not isinstance(self.family, FingerprintFamily):
            try:
                object.__setattr__(self, "family", FingerprintFamily(self.family))
            except ValueError:
                raise ConfigurationError(f"Unknown fingerprint family: {self.family!r}") from None
        if self.diameter not in ECFP_DIAMETERS:
            raise ConfigurationError(
                f"Unsupported {self.family.value} diameter {self.diameter}; expected one of {ECFP_DIAMETERS}"
            )
        if isinstance(self.nbits, bool) or not isinstance(self.nbits, int):
            raise ConfigurationError(f"nbits must be an integer, got {self.nbits!r}")
        if self.nbits <= 0 or self.nbits % WORD_BITS != 0:
            raise ConfigurationError(f"nbits must be a positive multiple of {WORD_BITS}, got {self.nbits}")

    @classmethod
    def from_tag(cls, tag: str, nbits: int) -> "FingerprintKind":
        """Parse a configuration tag such as ``"ECFP4"`` (case-sensitive)."""
        m = _TAG_RE.fullmatch(str(tag))
        if m is None:
            raise ConfigurationError(f"Unknown fingerprint kind: {tag!r}")
        return cls(FingerprintFamily(m.group(1)), int(m.group(2)), nbits)

    @property
    def tag(self) -> str:
        return f"{self.family.value}{self.diameter}"

    @property
    def radius(self) -> int:
        return self.diameter // 2

    @property
    def span(self) -> int:
        """Words per fingerprint."""
        return self.nbits // WORD_BITS

    def describe(self) -> str:
        return f"{self.tag}({self.nbits} bits)"


def ecfp(diameter: int, nbits: int) -> FingerprintKind:
    return FingerprintKind(FingerprintFamily.ECFP, int(diameter), nbits)


def fcfp(diameter: int, nbits: int) -> FingerprintKind:
    return FingerprintKind(FingerprintFamily.FCFP, int(diameter), nbits)
