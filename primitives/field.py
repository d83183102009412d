"""Goldilocks prime field GF(p) and its canonical byte encoding.

Uses galois library for all field arithmetic. FF is the field type; vectors of
field elements are galois FieldArrays so hypercube-sized operations stay
vectorized through numpy.
"""

from typing import Iterable, List

import galois
import numpy as np

# --- Field Construction ---

GOLDILOCKS_PRIME = 0xFFFFFFFF00000001

FF = galois.GF(GOLDILOCKS_PRIME)
"""Scalar field GF(p) - Goldilocks prime field."""

# Fixed width of an encoded field element (p < 2^64)
ELEMENT_BYTES = 8


# --- Conversion ---

def to_field(x) -> FF:
    """Coerce an int (any sign) or field element into an FF scalar."""
    if isinstance(x, FF):
        return x
    return FF(int(x) % GOLDILOCKS_PRIME)


def to_field_array(xs: Iterable) -> FF:
    """Coerce a sequence of ints or field elements into an FF array."""
    if isinstance(xs, FF):
        return xs
    return FF([int(x) % GOLDILOCKS_PRIME for x in xs])


def to_bytes(x) -> bytes:
    """Encode a field element as a fixed-width big-endian integer."""
    return int(x).to_bytes(ELEMENT_BYTES, "big")


def elements_to_bytes(xs: Iterable) -> bytes:
    """Concatenate the fixed-width encodings of several field elements."""
    return b"".join(to_bytes(x) for x in xs)


def from_be_bytes_mod_order(data: bytes) -> FF:
    """Interpret arbitrary-length big-endian bytes as an integer mod p."""
    return FF(int.from_bytes(data, "big") % GOLDILOCKS_PRIME)


def field_sum(values: FF) -> FF:
    """Sum all entries of an FF array in the field."""
    return np.add.reduce(values)


def to_ints(values: Iterable) -> List[int]:
    """Canonical integer representatives, for comparisons and serialization."""
    return [int(v) for v in values]


# --- Power-of-Two Helpers ---

def is_power_of_two(n: int) -> bool:
    return n > 0 and (n & (n - 1)) == 0


def log2_exact(n: int) -> int:
    """Return log2(n), raising if n is not a power of two."""
    if not is_power_of_two(n):
        raise ValueError(f"Hypercube len = {n}, but expected a power of 2")
    return n.bit_length() - 1


def ceil_log2(n: int) -> int:
    """Smallest k with 2^k >= n (0 for n <= 1)."""
    if n <= 1:
        return 0
    return (n - 1).bit_length()


def next_power_of_two(n: int) -> int:
    return 1 << ceil_log2(n)


def pad_to_power_of_two(values: Iterable, min_len: int = 1) -> FF:
    """Zero-pad a value vector to the next power of two (at least min_len)."""
    arr = to_field_array(values)
    target = next_power_of_two(max(len(arr), min_len))
    if target == len(arr):
        return arr
    padded = FF.Zeros(target)
    padded[:len(arr)] = arr
    return padded
