"""GKR proof data structures and serialization."""

import json
import struct
from dataclasses import dataclass, field
from typing import Any, Iterator, List, Tuple

from primitives.field import ELEMENT_BYTES, FF, GOLDILOCKS_PRIME
from protocol.sumcheck import RoundRecord

# --- Type Aliases ---

OracleEvals = Tuple[FF, FF]  # (W(b*), W(c*)) of the next layer


# --- Proof Data Structures ---

@dataclass
class GKRProof:
    """Complete GKR proof, one entry per gate layer, output layer first.

    Attributes:
        claimed_sums: Sum-check claim of each layer
        round_records: Sum-check round records (e0, e1, e2) of each layer
        oracle_evals: Next-layer MLE evaluated at the two halves of the
                      layer's sum-check challenge point
        output: Claimed circuit output (unpadded)
    """
    claimed_sums: List[FF] = field(default_factory=list)
    round_records: List[List[RoundRecord]] = field(default_factory=list)
    oracle_evals: List[OracleEvals] = field(default_factory=list)
    output: List[FF] = field(default_factory=list)

    @property
    def num_layers(self) -> int:
        return len(self.claimed_sums)

    def layers(self) -> Iterator[Tuple[FF, List[RoundRecord], OracleEvals]]:
        """Per-layer (claimed_sum, round_records, oracle_evals) tuples."""
        return zip(self.claimed_sums, self.round_records, self.oracle_evals)


# --- JSON Serialization ---

def proof_to_json(proof: GKRProof) -> dict[str, Any]:
    """Convert GKR proof to JSON-serializable dictionary."""
    return {
        "claimedSums": [str(int(s)) for s in proof.claimed_sums],
        "roundRecords": [
            [[str(int(e)) for e in record] for record in records]
            for records in proof.round_records
        ],
        "oracleEvals": [[str(int(wb)), str(int(wc))] for wb, wc in proof.oracle_evals],
        "output": [str(int(v)) for v in proof.output],
    }


def _parse_element(raw) -> FF:
    """Decode one serialized field element, accepting only canonical values in [0, p)."""
    value = int(raw)
    if not 0 <= value < GOLDILOCKS_PRIME:
        raise ValueError(f"Proof parsing error: {value} is not a canonical field element")
    return FF(value)


def proof_from_json(data: dict[str, Any]) -> GKRProof:
    """Rebuild a GKR proof from its JSON dictionary."""
    return GKRProof(
        claimed_sums=[_parse_element(s) for s in data["claimedSums"]],
        round_records=[
            [tuple(_parse_element(e) for e in record) for record in records]
            for records in data["roundRecords"]
        ],
        oracle_evals=[(_parse_element(wb), _parse_element(wc)) for wb, wc in data["oracleEvals"]],
        output=[_parse_element(v) for v in data["output"]],
    )


def save_proof_to_json(proof: GKRProof, path: str) -> None:
    with open(path, "w") as f:
        json.dump(proof_to_json(proof), f, indent=2)


def load_proof_from_json(path: str) -> GKRProof:
    """Load GKR proof from JSON file."""
    with open(path) as f:
        return proof_from_json(json.load(f))


# --- Binary Serialization ---
#
# Layout (all integers big-endian):
#   [n_layers: u64]
#   per layer: [claimed_sum] [n_rounds: u64] [e0 e1 e2] * n_rounds [w_b] [w_c]
#   [n_outputs: u64] [output] * n_outputs
# Field elements are fixed-width ELEMENT_BYTES integers.

_U64 = struct.Struct(">Q")


def proof_to_bytes(proof: GKRProof) -> bytes:
    """Serialize a GKR proof to its binary layout."""
    out = bytearray(_U64.pack(proof.num_layers))
    for claimed_sum, records, (w_b, w_c) in proof.layers():
        out += _U64.pack(int(claimed_sum))
        out += _U64.pack(len(records))
        for record in records:
            for e in record:
                out += _U64.pack(int(e))
        out += _U64.pack(int(w_b))
        out += _U64.pack(int(w_c))
    out += _U64.pack(len(proof.output))
    for v in proof.output:
        out += _U64.pack(int(v))
    return bytes(out)


def proof_from_bytes(data: bytes) -> GKRProof:
    """Deserialize the binary layout produced by proof_to_bytes."""
    if len(data) % ELEMENT_BYTES != 0:
        raise ValueError(f"Binary proof parsing error: {len(data)} bytes is not a multiple of {ELEMENT_BYTES}")

    n_vals = len(data) // ELEMENT_BYTES
    values = list(struct.unpack(f">{n_vals}Q", data))
    idx = 0

    def take() -> int:
        nonlocal idx
        if idx >= n_vals:
            raise ValueError(f"Binary proof parsing error: truncated after {idx} values")
        idx += 1
        return values[idx - 1]

    proof = GKRProof()
    n_layers = take()
    for _ in range(n_layers):
        proof.claimed_sums.append(_parse_element(take()))
        n_rounds = take()
        proof.round_records.append(
            [(_parse_element(take()), _parse_element(take()), _parse_element(take())) for _ in range(n_rounds)]
        )
        proof.oracle_evals.append((_parse_element(take()), _parse_element(take())))
    n_outputs = take()
    proof.output = [_parse_element(take()) for _ in range(n_outputs)]

    if idx != n_vals:
        raise ValueError(f"Binary proof parsing error: consumed {idx} values, expected {n_vals}")
    return proof
