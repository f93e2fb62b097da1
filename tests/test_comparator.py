import unittest
from unittest import mock
from concurrent.futures import Future, ThreadPoolExecutor

from hashlens.comparator import SimilarityComparator, METRICS
from hashlens.datalayer.registry import AlgorithmRegistry, default_registry
from hashlens.datalayer.descriptor import AlgorithmDescriptor, AlgorithmFamily, UIMode
from hashlens.datalayer.hash_algorithm.similarity_family import SimilarityFamily
from hashlens.datalayer.hash_algorithm.simhash_algorithm import SimHashAlgorithm
from hashlens.datalayer.hash_algorithm.minhash_algorithm import MinHashAlgorithm
from hashlens.datalayer.hash_algorithm.nilsimsa_algorithm import NilsimsaAlgorithm
from hashlens.datalayer.hash_algorithm.hamming_algorithm import HammingHashAlgorithm
from hashlens.common.errors import MalformedEncodingError, LengthMismatchError, ComparisonError

def similarity_descriptor(algorithm_id, metric=None):
    return AlgorithmDescriptor(id=algorithm_id, name=algorithm_id.title(), description="",
                               category="Similarity", family=AlgorithmFamily.SIMILARITY,
                               ui_mode=UIMode.SIMILARITY, supports_comparison=True, metric=metric)

class TestSimilarityComparator(unittest.TestCase):

    def setUp(self):
        self.comparator = SimilarityComparator()

    def tearDown(self):
        self.comparator.close()

    def test_dispatch(self):
        expected = {
            "simhash": SimHashAlgorithm,
            "minhash": MinHashAlgorithm,
            "bbitminhash": MinHashAlgorithm,
            "superminhash": MinHashAlgorithm,
            "nilsimsa": NilsimsaAlgorithm,
            "imatch": HammingHashAlgorithm,
            "sha256": HammingHashAlgorithm,          # not a similarity algorithm
            "not-an-algorithm": HammingHashAlgorithm,
        }
        for algorithm_id, metric in expected.items():
            self.assertIs(self.comparator.get_metric(algorithm_id), metric, algorithm_id)

    def test_every_family_has_a_metric(self):
        for family in SimilarityFamily:
            self.assertEqual(METRICS[family].get_family(), family)

    def test_simhash_identical(self):
        result = self.comparator.compare("simhash", "a3f1c2d4e5b60718", "a3f1c2d4e5b60718")
        self.assertEqual(result.similarity, 1)
        self.assertEqual(result.distance, 0)

    def test_minhash_one_element_differs(self):
        result = self.comparator.compare("minhash", "0123456789abcdef", "0123456789abcdee")
        self.assertEqual(result.similarity, 0.5)
        self.assertIsNone(result.distance)

    def test_minhash_family_members(self):
        for algorithm_id in ["bbitminhash", "superminhash"]:
            result = self.comparator.compare(algorithm_id, "0000000a0000000b", "0000000a0000000b")
            self.assertEqual(result.similarity, 1.0)

    def test_minhash_bad_length(self):
        with self.assertRaises(MalformedEncodingError):
            self.comparator.compare("minhash", "0123456789abcde", "0123456789abcdef")

    def test_nilsimsa_zero_score(self):
        result = self.comparator.compare("nilsimsa", "00" * 32, "0f" * 32)
        self.assertEqual(result.similarity, 0.5)
        self.assertEqual(result.distance, 128)

    def test_imatch_generic(self):
        result = self.comparator.compare("imatch", "00ff", "00f0")
        self.assertEqual(result.as_dict(), {"distance": 4})

    def test_unknown_algorithm_fallback(self):
        result = self.comparator.compare("not-an-algorithm", "ab", "ab")
        self.assertEqual(result.distance, 0)
        with self.assertRaises(LengthMismatchError):
            self.comparator.compare("not-an-algorithm", "ab", "abcd")

    def test_async(self):
        future = self.comparator.compare_async("simhash", "ff", "fe")
        self.assertIsInstance(future, Future)
        self.assertEqual(future.result(timeout=5).distance, 1)

    def test_async_error(self):
        future = self.comparator.compare_async("minhash", "123", "12345678")
        self.assertIsInstance(future.exception(timeout=5), MalformedEncodingError)

    def test_async_many(self):
        futures = [self.comparator.compare_async("imatch", f"{i:02x}", "00") for i in range(16)]
        distances = [future.result(timeout=5).distance for future in futures]
        self.assertEqual(distances, [bin(i).count("1") for i in range(16)])

    def test_trailing_newline_is_malformed(self):
        for args in [("minhash", "0000001\n", "00000001"), ("simhash", "abc\n", "abcd"), ("imatch", "a\n", "ab")]:
            with self.assertRaises(MalformedEncodingError, msg=args[0]):
                self.comparator.compare(*args)

    def test_concurrent_first_calls_share_one_pool(self):
        with mock.patch("hashlens.comparator.ThreadPoolExecutor", wraps=ThreadPoolExecutor) as pool_class:
            with ThreadPoolExecutor(max_workers=8) as callers:
                futures = [callers.submit(self.comparator.compare_async, "simhash", "ff", "ff") for _ in range(8)]
                results = [future.result(timeout=5).result(timeout=5) for future in futures]
        self.assertEqual(pool_class.call_count, 1)
        self.assertTrue(all(result.distance == 0 for result in results))

    def test_uses_packaged_registry(self):
        self.assertIs(self.comparator._registry, default_registry())

class TestComparatorWithSyntheticRegistry(unittest.TestCase):

    def setUp(self):
        registry = AlgorithmRegistry([
            similarity_descriptor("fingerprint", SimilarityFamily.BIT_FINGERPRINT),
            similarity_descriptor("sketch", SimilarityFamily.PACKED_SIGNATURE),
            similarity_descriptor("plain"),
        ])
        self.comparator = SimilarityComparator(registry)

    def tearDown(self):
        self.comparator.close()

    def test_new_algorithm_is_a_table_entry(self):
        self.assertIs(self.comparator.get_metric("fingerprint"), SimHashAlgorithm)
        self.assertIs(self.comparator.get_metric("sketch"), MinHashAlgorithm)
        self.assertEqual(self.comparator.compare("fingerprint", "ff00", "ff00").similarity, 1)

    def test_similarity_without_metric(self):
        self.assertIs(self.comparator.get_metric("plain"), HammingHashAlgorithm)

    def test_simhash_not_registered(self):
        # "simhash" is unknown to this registry: generic metric, no similarity
        result = self.comparator.compare("simhash", "ff", "00")
        self.assertEqual(result.distance, 8)
        self.assertIsNone(result.similarity)

    def test_context_manager(self):
        with SimilarityComparator(AlgorithmRegistry([])) as comparator:
            self.assertEqual(comparator.compare_async("x", "1", "1").result(timeout=5).distance, 0)
        self.assertIsNone(comparator._executor)

    def test_errors_are_comparison_errors(self):
        for args in [("sketch", "1", "1"), ("fingerprint", "ff", "ffff"), ("plain", "a", "ab")]:
            with self.assertRaises(ComparisonError):
                self.comparator.compare(*args)

if __name__ == '__main__':
    unittest.main()
