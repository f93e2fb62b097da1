from enum import Enum

class SimilarityFamily(str, Enum):
    """Comparison metric families for similarity (LSH) algorithms."""
    BIT_FINGERPRINT  = "bit-fingerprint"    # SimHash-like fixed-width fingerprints
    PACKED_SIGNATURE = "packed-signature"   # MinHash signatures of uint32 values
    CORRELATION      = "correlation"        # Nilsimsa correlation score
    GENERIC_FALLBACK = "generic-fallback"   # plain nibble Hamming distance
