"""
Schemas & Canonicalization
File: proof.py

Purpose: Multi-proof schema. A multi-proof is the ordered list of sibling
digests (leaf to root) plus the side each sibling sits on, enough for an
independent verifier to recompute the root from one leaf digest.
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_serializer, field_validator

from .errors import ProofFormatException

# Direction markers
SIBLING_LEFT: int = 0   # sibling is the left child, current node is the right child
SIBLING_RIGHT: int = 1  # sibling is the right child, current node is the left child


def _decode_digest(value: Any) -> Any:
    if isinstance(value, str):
        text = value[2:] if value.startswith("0x") else value
        try:
            return bytes.fromhex(text)
        except ValueError as e:
            raise ValueError(f"invalid hex digest: {value[:16]}...") from e
    return value


class ProofStep(BaseModel):
    """One level of a multi-proof."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    sibling: bytes = Field(..., description="Cached digest of the sibling node")
    direction: Literal[0, 1] = Field(
        ...,
        description="0 = sibling is the left child, 1 = sibling is the right child",
    )

    @field_validator("sibling", mode="before")
    @classmethod
    def _sibling_from_hex(cls, value: Any) -> Any:
        return _decode_digest(value)

    @field_serializer("sibling")
    def _sibling_to_hex(self, value: bytes) -> str:
        return "0x" + value.hex()


class MultiProof(BaseModel):
    """
    Inclusion proof for a single content item.

    Attributes:
        leaf_hash: Digest of the proven leaf
        steps: Sibling digests and directions, leaf level first
        root: Root digest of the tree the proof was extracted from
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    leaf_hash: bytes = Field(..., description="Digest of the proven leaf")
    steps: list[ProofStep] = Field(default_factory=list)
    root: bytes = Field(..., description="Root digest the proof is against")

    @field_validator("leaf_hash", "root", mode="before")
    @classmethod
    def _digest_from_hex(cls, value: Any) -> Any:
        return _decode_digest(value)

    @field_serializer("leaf_hash", "root")
    def _digest_to_hex(self, value: bytes) -> str:
        return "0x" + value.hex()

    @property
    def siblings(self) -> list[bytes]:
        return [step.sibling for step in self.steps]

    @property
    def directions(self) -> list[int]:
        return [step.direction for step in self.steps]

    def __len__(self) -> int:
        return len(self.steps)

    def to_json(self) -> str:
        """Serialize to JSON with 0x-prefixed hex digests."""
        return self.model_dump_json(indent=2)

    @classmethod
    def from_json(cls, data: str | bytes) -> "MultiProof":
        """Parse a proof previously produced by to_json()."""
        try:
            return cls.model_validate_json(data)
        except ValidationError as e:
            raise ProofFormatException(
                message=f"Invalid multi-proof: {e.error_count()} error(s)",
                details={"errors": [err["msg"] for err in e.errors()]},
            ) from e


__all__ = [
    "SIBLING_LEFT",
    "SIBLING_RIGHT",
    "ProofStep",
    "MultiProof",
]
