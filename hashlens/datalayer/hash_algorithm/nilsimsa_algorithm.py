import numpy as np

from hashlens.common.constants import NILSIMSA_MAX, NILSIMSA_DIGEST_HEX
from hashlens.common.errors import MalformedEncodingError, LengthMismatchError
from hashlens.common.utilities import hex_to_bytes, popcount
from hashlens.datalayer.hash_algorithm.hash_algorithm import HashAlgorithm
from hashlens.datalayer.hash_algorithm.similarity_family import SimilarityFamily
from hashlens.datalayer.hash_algorithm.comparison_result import ComparisonResult

def normalize_correlation(score) -> ComparisonResult:
    """Maps a Nilsimsa correlation score in [-128, 128] (128 means identical)
    to a distance in [0, 256] and a similarity in [0, 1].
    """
    if not -NILSIMSA_MAX <= score <= NILSIMSA_MAX:
        raise ValueError(f"Nilsimsa score out of range: {score}")
    return ComparisonResult(distance=NILSIMSA_MAX - score,
                            similarity=(score + NILSIMSA_MAX) / (2 * NILSIMSA_MAX))

class NilsimsaAlgorithm(HashAlgorithm):

    @classmethod
    def get_family(cls):
        return SimilarityFamily.CORRELATION

    @classmethod
    def parse(cls, hash_value) -> np.ndarray:
        if isinstance(hash_value, str) and len(hash_value) != NILSIMSA_DIGEST_HEX:
            raise MalformedEncodingError(hash_value)
        return np.frombuffer(hex_to_bytes(hash_value), dtype=np.uint8)

    @classmethod
    def correlate(cls, digest1: np.ndarray, digest2: np.ndarray) -> int:
        # number of equal bits minus 128
        if digest1.size != digest2.size:
            raise LengthMismatchError(f"Digests of {digest1.size} and {digest2.size} bytes")
        return NILSIMSA_MAX - popcount(np.bitwise_xor(digest1, digest2))

    @classmethod
    def compare(cls, hash1, hash2):
        return normalize_correlation(cls.correlate(cls.parse(hash1), cls.parse(hash2)))
