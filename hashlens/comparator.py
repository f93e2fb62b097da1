# -*- coding: utf-8 -*-
import logging
logger = logging.getLogger(__name__)

__version__ = "0.1.0"

import threading
from concurrent.futures import ThreadPoolExecutor

from hashlens.datalayer.registry import AlgorithmRegistry, default_registry
from hashlens.datalayer.hash_algorithm.similarity_family import SimilarityFamily
from hashlens.datalayer.hash_algorithm.simhash_algorithm import SimHashAlgorithm
from hashlens.datalayer.hash_algorithm.minhash_algorithm import MinHashAlgorithm
from hashlens.datalayer.hash_algorithm.nilsimsa_algorithm import NilsimsaAlgorithm
from hashlens.datalayer.hash_algorithm.hamming_algorithm import HammingHashAlgorithm
from hashlens.datalayer.hash_algorithm.comparison_result import ComparisonResult

from hashlens.common.errors import ComparisonError

# one metric per family; a new similarity algorithm only needs a catalog entry
METRICS = {
    SimilarityFamily.BIT_FINGERPRINT:  SimHashAlgorithm,
    SimilarityFamily.PACKED_SIGNATURE: MinHashAlgorithm,
    SimilarityFamily.CORRELATION:      NilsimsaAlgorithm,
    SimilarityFamily.GENERIC_FALLBACK: HammingHashAlgorithm,
}

class SimilarityComparator():
    def __init__(self, registry: AlgorithmRegistry=None, max_workers: int=None):
        """Default constructor.

        Arguments:
        registry    -- AlgorithmRegistry used to map algorithm ids to metric families
                       (the catalog shipped with hashlens if None)
        max_workers -- size of the thread pool behind compare_async()
        """
        self._registry = registry if registry is not None else default_registry()
        self._max_workers = max_workers
        self._executor = None
        self._executor_lock = threading.Lock()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        self.close()

    def close(self):
        with self._executor_lock:
            executor, self._executor = self._executor, None
        if executor is not None:
            executor.shutdown(wait=True)

    def get_metric(self, algorithm_id):
        """Returns the HashAlgorithm class that compares outputs of algorithm_id."""
        return METRICS[self._registry.family_of(algorithm_id)]

    def compare(self, algorithm_id, output1, output2) -> ComparisonResult:
        """Compares two hex-encoded outputs of algorithm_id.
        Returns a ComparisonResult; raises MalformedEncodingError or
        LengthMismatchError (both ComparisonError) when the outputs cannot be
        compared. Unknown algorithms are compared with the generic metric.

        Arguments:
        algorithm_id    -- id of the algorithm that produced both outputs
        output1         -- first hex-encoded hash output
        output2         -- second hex-encoded hash output
        """
        metric = self.get_metric(algorithm_id)
        try:
            result = metric.compare(output1, output2)
        except ComparisonError as e:
            logger.debug(f"[-] \"{algorithm_id}\" outputs not comparable ({metric.__name__}): {e!r}")
            raise

        logger.debug(f"[*] {algorithm_id} ({metric.get_family().value}): {result}")
        return result

    def compare_async(self, algorithm_id, output1, output2):
        """Same as compare(), but returns a concurrent.futures.Future right away.
        Errors are delivered through the future."""
        with self._executor_lock:
            if self._executor is None:
                self._executor = ThreadPoolExecutor(max_workers=self._max_workers,
                                                    thread_name_prefix="hashlens-compare")
            return self._executor.submit(self.compare, algorithm_id, output1, output2)
