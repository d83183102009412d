"""
Fiat-Shamir transcript over a pluggable hash oracle.

The transcript absorbs byte strings and produces field challenges in a
deterministic manner. Every squeeze reseeds the running hash with the digest it
just produced, so two squeezes with no absorb in between still differ and each
challenge depends on the whole preceding absorb history.
"""

import hashlib
from typing import Callable, Dict, Iterable, List

from Crypto.Hash import keccak

from primitives.field import FF, elements_to_bytes, from_be_bytes_mod_order

# --- Hash Oracles ---

HASH_FUNCTIONS: Dict[str, Callable] = {
    "keccak256": lambda: keccak.new(digest_bits=256),
    "sha3_256": hashlib.sha3_256,
    "blake2b": lambda: hashlib.blake2b(digest_size=32),
}


class Transcript:
    """
    Fiat-Shamir transcript with chained squeezes.

    State is a running hash object. absorb() feeds it bytes; squeeze()
    finalizes the digest, starts a fresh hash seeded with that digest and
    reduces the digest modulo p.

    Attributes:
        hash_name: Key into HASH_FUNCTIONS selecting the hash oracle
        n_squeezes: Number of challenges drawn so far
    """

    def __init__(self, hash_name: str = "keccak256", label: bytes = b""):
        if hash_name not in HASH_FUNCTIONS:
            raise ValueError(f"Unknown hash '{hash_name}', expected one of {sorted(HASH_FUNCTIONS)}")

        self.hash_name = hash_name
        self._new_hasher = HASH_FUNCTIONS[hash_name]
        self._hasher = self._new_hasher()
        self.n_squeezes = 0

        if label:
            self.absorb(label)

    def absorb(self, data: bytes) -> None:
        """Feed raw bytes into the running hash state."""
        self._hasher.update(bytes(data))

    def absorb_elements(self, elements: Iterable) -> None:
        """Absorb field elements using their fixed-width big-endian encoding."""
        self.absorb(elements_to_bytes(elements))

    def squeeze(self) -> FF:
        """Draw one field challenge and reseed the state with its digest."""
        digest = self._hasher.digest()
        self._hasher = self._new_hasher()
        self._hasher.update(digest)
        self.n_squeezes += 1
        return from_be_bytes_mod_order(digest)

    def squeeze_n(self, n: int) -> List[FF]:
        """Draw n consecutive challenges."""
        return [self.squeeze() for _ in range(n)]

    def absorb_and_squeeze(self, elements: Iterable) -> FF:
        """Absorb field elements, then draw the challenge bound to them."""
        self.absorb_elements(elements)
        return self.squeeze()
