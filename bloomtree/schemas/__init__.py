"""
Schemas & Canonicalization

Error taxonomy, canonical JSON serialization and the multi-proof schema.
"""

from .errors import (
    ErrorCodes,
    BloomTreeError,
    BloomTreeException,
    EmptyContentsException,
    BloomParameterMismatchException,
    BloomDisabledException,
    UnknownHashAlgorithmException,
    ContentHashingException,
    ContentEqualityException,
    HashPolicyException,
    CanonicalizationException,
    ProofFormatException,
)
from .canonical import (
    format_datetime_canonical,
    canonicalize_value,
    dumps_canonical,
    canonical_equals,
)
from .proof import (
    SIBLING_LEFT,
    SIBLING_RIGHT,
    ProofStep,
    MultiProof,
)

__all__ = [
    # Errors
    "ErrorCodes",
    "BloomTreeError",
    "BloomTreeException",
    "EmptyContentsException",
    "BloomParameterMismatchException",
    "BloomDisabledException",
    "UnknownHashAlgorithmException",
    "ContentHashingException",
    "ContentEqualityException",
    "HashPolicyException",
    "CanonicalizationException",
    "ProofFormatException",
    # Canonical JSON
    "format_datetime_canonical",
    "canonicalize_value",
    "dumps_canonical",
    "canonical_equals",
    # Proofs
    "SIBLING_LEFT",
    "SIBLING_RIGHT",
    "ProofStep",
    "MultiProof",
]
