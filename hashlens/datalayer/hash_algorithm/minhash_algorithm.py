import numpy as np

from hashlens.common.constants import SIGNATURE_WIDTH
from hashlens.common.errors import MalformedEncodingError, LengthMismatchError
from hashlens.common.utilities import assert_hex
from hashlens.datalayer.hash_algorithm.hash_algorithm import HashAlgorithm
from hashlens.datalayer.hash_algorithm.similarity_family import SimilarityFamily
from hashlens.datalayer.hash_algorithm.comparison_result import ComparisonResult

# big-endian unsigned 32-bit integers, one per 8 hex chars
SIGNATURE_DTYPE = np.dtype('>u4')

class MinHashAlgorithm(HashAlgorithm):
    """MinHash-like signatures (MinHash, b-bit MinHash, SuperMinHash).

    The hex string packs a sequence of uint32 minimizers. The Jaccard
    similarity is estimated as the fraction of positions where both
    signatures hold the same minimizer.
    """

    @classmethod
    def get_family(cls):
        return SimilarityFamily.PACKED_SIGNATURE

    @classmethod
    def parse(cls, hash_value) -> np.ndarray:
        assert_hex(hash_value)
        if len(hash_value) == 0 or len(hash_value) % SIGNATURE_WIDTH != 0:
            raise MalformedEncodingError(hash_value)
        return np.frombuffer(bytes.fromhex(hash_value), dtype=SIGNATURE_DTYPE)

    @classmethod
    def jaccard(cls, signature1: np.ndarray, signature2: np.ndarray) -> float:
        if signature1.size != signature2.size:
            raise LengthMismatchError(f"Signatures of {signature1.size} and {signature2.size} elements")
        return float(np.count_nonzero(signature1 == signature2)) / signature1.size

    @classmethod
    def compare(cls, hash1, hash2):
        return ComparisonResult(similarity=cls.jaccard(cls.parse(hash1), cls.parse(hash2)))
