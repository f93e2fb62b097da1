import numpy as np

from hashlens.common.errors import LengthMismatchError
from hashlens.common.utilities import hex_to_nibbles, popcount
from hashlens.datalayer.hash_algorithm.hash_algorithm import HashAlgorithm
from hashlens.datalayer.hash_algorithm.similarity_family import SimilarityFamily
from hashlens.datalayer.hash_algorithm.comparison_result import ComparisonResult

class HammingHashAlgorithm(HashAlgorithm):
    """Generic metric for similarity algorithms without a bespoke one
    (I-Match) and for unknown algorithms: nibble-wise Hamming distance.
    No similarity is given, there is no normalization basis.
    """

    @classmethod
    def get_family(cls):
        return SimilarityFamily.GENERIC_FALLBACK

    @classmethod
    def parse(cls, hash_value) -> np.ndarray:
        return hex_to_nibbles(hash_value)

    @classmethod
    def compare(cls, hash1, hash2):
        nibbles1, nibbles2 = cls.parse(hash1), cls.parse(hash2)
        if nibbles1.size != nibbles2.size:
            raise LengthMismatchError(f"Hashes of {nibbles1.size} and {nibbles2.size} hex chars")
        return ComparisonResult(distance=popcount(np.bitwise_xor(nibbles1, nibbles2)))
