import numpy as np

from hashlens.common.constants import BYTE_BITS
from hashlens.common.errors import MalformedEncodingError, LengthMismatchError
from hashlens.common.utilities import hex_to_bytes, popcount
from hashlens.datalayer.hash_algorithm.hash_algorithm import HashAlgorithm
from hashlens.datalayer.hash_algorithm.similarity_family import SimilarityFamily
from hashlens.datalayer.hash_algorithm.comparison_result import ComparisonResult

class SimHashAlgorithm(HashAlgorithm):
    """Fixed-width bit fingerprints (SimHash): Hamming distance over bits."""

    @classmethod
    def get_family(cls):
        return SimilarityFamily.BIT_FINGERPRINT

    @classmethod
    def parse(cls, hash_value) -> np.ndarray:
        raw = hex_to_bytes(hash_value)
        if not raw:
            raise MalformedEncodingError(hash_value)
        return np.frombuffer(raw, dtype=np.uint8)

    @classmethod
    def hamming_distance(cls, fingerprint1: np.ndarray, fingerprint2: np.ndarray) -> int:
        if fingerprint1.size != fingerprint2.size:
            raise LengthMismatchError(f"Fingerprints of {fingerprint1.size} and {fingerprint2.size} bytes")
        return popcount(np.bitwise_xor(fingerprint1, fingerprint2))

    @classmethod
    def compare(cls, hash1, hash2):
        fingerprint1, fingerprint2 = cls.parse(hash1), cls.parse(hash2)
        distance = cls.hamming_distance(fingerprint1, fingerprint2)
        bits = fingerprint1.size * BYTE_BITS
        return ComparisonResult(distance=distance, similarity=1 - distance / bits)
