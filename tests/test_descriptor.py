import unittest

from hashlens.datalayer.registry import default_registry
from hashlens.datalayer.descriptor import ParameterSpec, ParameterKind
from hashlens.common.errors import InvalidParameterError

class TestParameterSpec(unittest.TestCase):

    def setUp(self):
        self.iterations = ParameterSpec(id="iterations", label="Iterations", kind=ParameterKind.NUMBER,
                                        required=True, default=3, minimum=1, maximum=100)
        self.salt = ParameterSpec(id="salt", label="Salt", required=True, generate_random=True)
        self.key = ParameterSpec(id="key", label="Key (optional)")

    def test_number(self):
        self.assertEqual(self.iterations.validate("10"), 10)
        self.assertEqual(self.iterations.validate(" 7 "), 7)
        self.assertEqual(self.iterations.validate(2.5), 2.5)
        self.assertEqual(self.iterations.validate(""), 3)
        self.assertEqual(self.iterations.validate(None), 3)

    def test_number_bounds(self):
        for bad in ["0", 101, "abc", True, "nan"]:
            with self.assertRaises(InvalidParameterError):
                self.iterations.validate(bad)

    def test_required_text(self):
        with self.assertRaises(InvalidParameterError):
            self.salt.validate("")
        self.assertEqual(self.salt.validate("pepper"), "pepper")

    def test_optional_text(self):
        self.assertIsNone(self.key.validate(""))
        self.assertEqual(self.key.validate("secret"), "secret")

    def test_generate(self):
        salt = self.salt.generate()
        self.assertEqual(len(salt), 64)
        int(salt, 16)
        self.assertNotEqual(salt, self.salt.generate())
        self.assertEqual(self.iterations.generate(), 3)

class TestAlgorithmDescriptor(unittest.TestCase):

    def setUp(self):
        self.scrypt = default_registry().get("scrypt")
        self.imatch = default_registry().get("imatch")

    def test_default_parameters(self):
        self.assertEqual(self.scrypt.default_parameters(), {"N": 16384, "r": 8, "p": 1, "dkLen": 64})
        self.assertEqual(self.imatch.default_parameters(),
                         {"lexicon": "test, words, for, demo", "minIntersection": 3})
        self.assertEqual(default_registry().get("md5").default_parameters(), {})

    def test_validate_parameters(self):
        cleaned = self.scrypt.validate_parameters({"salt": "abcd", "N": "2048"})
        self.assertEqual(cleaned, {"salt": "abcd", "N": 2048, "r": 8, "p": 1, "dkLen": 64})

    def test_validate_parameters_errors(self):
        with self.assertRaises(InvalidParameterError):
            self.scrypt.validate_parameters({"N": 2048})                   # salt is required
        with self.assertRaises(InvalidParameterError):
            self.scrypt.validate_parameters({"salt": "a", "N": 512})       # below min
        with self.assertRaises(InvalidParameterError):
            self.scrypt.validate_parameters({"salt": "a", "pepper": "b"})  # unknown

    def test_get_parameter(self):
        self.assertEqual(self.imatch.get_parameter("lexicon").kind, ParameterKind.MULTILINE)
        with self.assertRaises(InvalidParameterError):
            self.imatch.get_parameter("salt")

    def test_as_dict(self):
        as_dict = self.imatch.as_dict()
        self.assertEqual(as_dict["family"], "similarity")
        self.assertEqual(as_dict["metric"], "generic-fallback")
        self.assertTrue(as_dict["supports_comparison"])
        self.assertEqual(as_dict["parameters"][1]["max"], 100)

if __name__ == '__main__':
    unittest.main()
