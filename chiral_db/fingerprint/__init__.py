"""Packed fingerprints, fingerprint kinds, generation and documents."""

from .document import FingerprintDocument
from .generator import FingerprintGenerator, RDKitFingerprintGenerator
from .kind import ECFP_DIAMETERS, FingerprintFamily, FingerprintKind, ecfp, fcfp
from .words import WORD_BITS, bulk_tanimoto, pack_bits, popcount, tanimoto
