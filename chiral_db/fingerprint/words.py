"""Packed fingerprint arithmetic.

A fingerprint of ``nbits`` bits is stored as ``nbits // 32`` unsigned 32-bit
words. Bit ``b`` lives in word ``b // 32`` at position ``b % 32``.
"""

from __future__ import annotations

import operator
from typing import Iterable, Optional, Union

import numpy as np

from ..errors import InvalidFingerprintError, LengthMismatchError

WORD_BITS = 32
WORD_DTYPE = np.uint32

# Number of set bits for every byte value.
_POPCOUNT_TABLE = np.array([bin(i).count("1") for i in range(256)], dtype=np.uint8)
_WORD_MAX = 0xFFFFFFFF


def _check_word(value) -> int:
    if isinstance(value, (bool, np.bool_)):
        raise InvalidFingerprintError(f"Fingerprint words must be integers, got {value!r}")
    try:
        word = operator.index(value)
    except TypeError:
        raise InvalidFingerprintError(f"Fingerprint words must be integers, got {value!r}") from None
    if word < 0 or word > _WORD_MAX:
        raise InvalidFingerprintError(f"Fingerprint word {word} is outside [0, 2**{WORD_BITS}).")
    return word


def as_words(values: Union[np.ndarray, Iterable[int]], span: Optional[int] = None) -> np.ndarray:
    """Coerce ``values`` into a contiguous 1-D uint32 array.

    If ``span`` is given, the result must hold exactly ``span`` words.
    """
    if isinstance(values, np.ndarray):
        flat = values.reshape(-1)
        if flat.dtype == np.bool_ or not np.issubdtype(flat.dtype, np.integer):
            raise InvalidFingerprintError(f"Fingerprint words must be integers, got dtype {flat.dtype}")
        if flat.size and (int(flat.min()) < 0 or int(flat.max()) > _WORD_MAX):
            raise InvalidFingerprintError(f"Fingerprint words must lie in [0, 2**{WORD_BITS}).")
        words = np.ascontiguousarray(flat, dtype=WORD_DTYPE)
    else:
        words = np.asarray([_check_word(v) for v in values], dtype=WORD_DTYPE)
    if span is not None and words.size != int(span):
        raise LengthMismatchError(f"Fingerprint has {words.size} words, expected {int(span)}.")
    return words


def popcount(words: np.ndarray) -> int:
    words = np.ascontiguousarray(words, dtype=WORD_DTYPE)
    return int(_POPCOUNT_TABLE[words.view(np.uint8)].sum(dtype=np.int64))


def popcount_rows(matrix: np.ndarray) -> np.ndarray:
    """Per-row popcount of an (n, span) word matrix."""
    matrix = np.ascontiguousarray(matrix, dtype=WORD_DTYPE)
    if matrix.ndim != 2:
        raise ValueError(f"Expected a 2-D word matrix, got shape {matrix.shape}")
    as_bytes = matrix.view(np.uint8).reshape(matrix.shape[0], -1)
    return _POPCOUNT_TABLE[as_bytes].sum(axis=1, dtype=np.int64)


def tanimoto(fp_a: np.ndarray, fp_b: np.ndarray) -> float:
    """Tanimoto coefficient |A & B| / |A | B| of two packed fingerprints.

    Returns 0.0 when both fingerprints are empty.
    """
    a = as_words(fp_a)
    b = as_words(fp_b)
    if a.size != b.size:
        raise LengthMismatchError(f"Cannot compare fingerprints of {a.size} and {b.size} words.")

    union = popcount(np.bitwise_or(a, b))
    if union == 0:
        return 0.0
    return float(popcount(np.bitwise_and(a, b)) / union)


def bulk_tanimoto(query: np.ndarray, matrix: np.ndarray) -> np.ndarray:
    """Tanimoto of ``query`` against every row of ``matrix`` (shape (n, span))."""
    q = as_words(query)
    if matrix.ndim != 2 or matrix.shape[1] != q.size:
        raise LengthMismatchError(
            f"Query has {q.size} words but the fingerprint matrix has shape {matrix.shape}."
        )
    inter = popcount_rows(np.bitwise_and(matrix, q))
    union = popcount_rows(np.bitwise_or(matrix, q))

    sims = np.zeros(matrix.shape[0], dtype=np.float64)
    nonzero = union > 0
    sims[nonzero] = inter[nonzero] / union[nonzero]
    return sims


def pack_bits(bits: np.ndarray) -> np.ndarray:
    """Pack a dense 0/1 array (length a multiple of 32) into words."""
    bits = np.asarray(bits).reshape(-1)
    if bits.size % WORD_BITS != 0:
        raise LengthMismatchError(f"Bit vector length {bits.size} is not a multiple of {WORD_BITS}.")
    packed = np.packbits(bits.astype(bool), bitorder="little")
    return packed.view("<u4").astype(WORD_DTYPE)


def unpack_bits(words: np.ndarray) -> np.ndarray:
    words = as_words(words).astype("<u4")
    return np.unpackbits(words.view(np.uint8), bitorder="little")


def on_bits(words: np.ndarray) -> np.ndarray:
    return np.flatnonzero(unpack_bits(words))
