"""Structure -> packed fingerprint generation.

The rest of the package only depends on the :class:`FingerprintGenerator`
protocol; RDKit objects never leave this module.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Optional, Protocol

import numpy as np
from rdkit import Chem
from rdkit.Chem import rdFingerprintGenerator

from ..errors import GenerationError
from .kind import FingerprintFamily, FingerprintKind
from .words import pack_bits


class FingerprintGenerator(Protocol):
    def generate(self, kind: FingerprintKind, smiles: str) -> np.ndarray:
        """Return ``kind.span`` uint32 words for ``smiles``."""
        ...


def _safe_mol_from_smiles(smiles: str) -> Optional[Chem.Mol]:
    if not isinstance(smiles, str) or not smiles.strip():
        return None
    return Chem.MolFromSmiles(smiles)


@lru_cache(maxsize=None)
def _morgan_generator(family: FingerprintFamily, radius: int, fp_size: int):
    if family is FingerprintFamily.FCFP:
        return rdFingerprintGenerator.GetMorganGenerator(
            radius=int(radius),
            fpSize=int(fp_size),
            atomInvariantsGenerator=rdFingerprintGenerator.GetMorganFeatureAtomInvGen(),
        )
    return rdFingerprintGenerator.GetMorganGenerator(radius=int(radius), fpSize=int(fp_size))


class RDKitFingerprintGenerator:
    """Morgan (ECFP/FCFP) fingerprints computed with RDKit."""

    def generate(self, kind: FingerprintKind, smiles: str) -> np.ndarray:
        mol = _safe_mol_from_smiles(smiles)
        if mol is None:
            raise GenerationError(f"Invalid SMILES: {smiles!r}")

        if kind.family in (FingerprintFamily.ECFP, FingerprintFamily.FCFP):
            gen = _morgan_generator(kind.family, kind.radius, kind.nbits)
        else:
            raise GenerationError(f"No generator for fingerprint family {kind.family!r}")

        bits = gen.GetFingerprintAsNumPy(mol)
        if bits.size != kind.nbits:
            raise GenerationError(f"Generator returned {bits.size} bits for {kind.describe()}")
        return pack_bits(bits)
