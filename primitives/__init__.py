"""Primitives - Low-level mathematical and cryptographic building blocks."""

from primitives.field import (
    ELEMENT_BYTES,
    FF,
    GOLDILOCKS_PRIME,
    from_be_bytes_mod_order,
    pad_to_power_of_two,
    to_bytes,
    to_field,
    to_field_array,
)
from primitives.multilinear import MultilinearExtension
from primitives.polynomial import evaluate, evaluate_round_record, interpolate
from primitives.transcript import HASH_FUNCTIONS, Transcript

__all__ = [
    # Field
    "FF",
    "GOLDILOCKS_PRIME",
    "ELEMENT_BYTES",
    "to_field",
    "to_field_array",
    "to_bytes",
    "from_be_bytes_mod_order",
    "pad_to_power_of_two",
    # Multilinear extensions
    "MultilinearExtension",
    # Univariate polynomials
    "interpolate",
    "evaluate",
    "evaluate_round_record",
    # Transcript
    "Transcript",
    "HASH_FUNCTIONS",
]
