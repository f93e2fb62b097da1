from abc import ABC, abstractmethod

class HashAlgorithm(ABC):
    # algorithms are stateless: everything is a classmethod, so the
    # class itself is what gets registered for a similarity family
    @classmethod
    @abstractmethod
    def get_family(cls):
        pass

    # decodes an encoded hash into the typed value the metric works on
    @classmethod
    @abstractmethod
    def parse(cls, hash_value):
        pass

    # returns a ComparisonResult, raises ComparisonError on bad input
    @classmethod
    @abstractmethod
    def compare(cls, hash1, hash2):
        pass
