from hashlens.common.constants import HIGH_SIMILARITY, MODERATE_SIMILARITY
from hashlens.common.constants import LABEL_HIGH, LABEL_MODERATE, LABEL_LOW

def similarity_label(similarity: float) -> str:
    """Qualitative label of a normalized similarity score."""
    if similarity > HIGH_SIMILARITY:
        return LABEL_HIGH
    if similarity > MODERATE_SIMILARITY:
        return LABEL_MODERATE
    return LABEL_LOW

class ComparisonResult:
    # distance: lower is more similar (its unit depends on the metric)
    # similarity: normalized to [0, 1], 1 means identical
    __slots__ = ("distance", "similarity")

    def __init__(self, distance=None, similarity=None):
        if distance is None and similarity is None:
            raise ValueError("A comparison result needs a distance or a similarity")
        self.distance = distance
        self.similarity = similarity

    def __eq__(self, other):
        if not isinstance(other, ComparisonResult):
            return NotImplemented
        return self.distance == other.distance and self.similarity == other.similarity

    def __repr__(self):
        return f"ComparisonResult(distance={self.distance!r}, similarity={self.similarity!r})"

    @property
    def label(self):
        if self.similarity is None:
            return None
        return similarity_label(self.similarity)

    def as_dict(self):
        result = {}
        if self.distance is not None:
            result["distance"] = self.distance
        if self.similarity is not None:
            result["similarity"] = self.similarity
        return result
