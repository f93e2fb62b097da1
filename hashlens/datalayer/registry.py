# -*- coding: utf-8 -*-

import os
import re
import logging
import functools
from types import MappingProxyType

import yaml

from hashlens.common.constants import CATALOG_FILE, RELATED_LIMIT
from hashlens.common.errors import UnknownAlgorithmError
from hashlens.common.errors import DuplicateAlgorithmError
from hashlens.common.errors import CatalogFileError
from hashlens.datalayer.descriptor import AlgorithmDescriptor, AlgorithmFamily, UIMode
from hashlens.datalayer.descriptor import ParameterSpec, ParameterKind
from hashlens.datalayer.descriptor import CategoryDetails, CategoryContext
from hashlens.datalayer.hash_algorithm.similarity_family import SimilarityFamily

logger = logging.getLogger(__name__)

CATALOG_PATH = os.path.join(os.path.dirname(os.path.abspath(__file__)), CATALOG_FILE)

def category_slug(name: str) -> str:
    """Converts a category name into its URL slug ("SHA-2" -> "sha-2")."""
    slug = name.lower()
    slug = re.sub(r"[^a-z0-9\s-]", "", slug)   # keep spaces + hyphens
    slug = re.sub(r"\s+", "-", slug)
    slug = re.sub(r"-+", "-", slug)
    return slug.strip()

class AlgorithmRegistry():
    def __init__(self, descriptors, category_details=None):
        """Builds an immutable registry.

        Arguments:
        descriptors         -- iterable of AlgorithmDescriptor, in registration order
        category_details    -- dict of category title to CategoryDetails (curated table)
        """
        algorithms = {}
        by_category = {}
        for descriptor in descriptors:
            if descriptor.id in algorithms:
                raise DuplicateAlgorithmError(descriptor.id)
            algorithms[descriptor.id] = descriptor
            by_category.setdefault(descriptor.category, []).append(descriptor.id)

        self._algorithms = MappingProxyType(algorithms)
        self._by_category = MappingProxyType({key: tuple(value) for key, value in by_category.items()})
        self._category_details = MappingProxyType(dict(category_details or {}))
        self._slug_to_category = MappingProxyType({category_slug(title): title for title in self._by_category})

    def __contains__(self, algorithm_id):
        return algorithm_id in self._algorithms

    def __iter__(self):
        return iter(self._algorithms.values())

    def __len__(self):
        return len(self._algorithms)

    def get(self, algorithm_id) -> AlgorithmDescriptor:
        """Returns the descriptor of algorithm_id. Raises UnknownAlgorithmError if not registered."""
        try:
            return self._algorithms[algorithm_id]
        except KeyError:
            raise UnknownAlgorithmError(algorithm_id) from None

    def list_by_category(self) -> dict:
        """Returns a dict of category title to tuple of algorithm ids (registration order)."""
        return dict(self._by_category)

    def category_titles(self) -> list:
        return list(self._by_category)

    def slug_to_category(self, slug: str) -> str:
        # unknown slugs are returned as they come
        return self._slug_to_category.get(slug, slug)

    def category_details(self, title: str) -> CategoryDetails:
        details = self._category_details.get(title)
        if details is None:
            details = CategoryDetails(
                description=f"{title} hash algorithms for various computing applications.",
                features="Specialized hashing functionality",
                context=CategoryContext.ALGO,
            )
        return details

    def related(self, algorithm_id, limit=RELATED_LIMIT) -> list:
        """Other algorithms of the same category as algorithm_id, at most limit of them."""
        category = self.get(algorithm_id).category
        others = [other for other in self._by_category[category] if other != algorithm_id]
        return others[:limit]

    def comparable(self) -> tuple:
        return tuple(descriptor.id for descriptor in self if descriptor.supports_comparison)

    def family_of(self, algorithm_id) -> SimilarityFamily:
        """Returns the comparison metric family of algorithm_id.
        Unknown ids, or similarity algorithms without their own metric, use
        the generic fallback.
        """
        descriptor = self._algorithms.get(algorithm_id)
        if descriptor is None or descriptor.metric is None:
            logger.debug(f"No bespoke metric for \"{algorithm_id}\", using {SimilarityFamily.GENERIC_FALLBACK.value}")
            return SimilarityFamily.GENERIC_FALLBACK
        return descriptor.metric

def _parse_parameter(raw: dict) -> ParameterSpec:
    return ParameterSpec(
        id=raw["id"],
        label=raw.get("label", raw["id"]),
        kind=ParameterKind(raw.get("kind", "text")),
        required=bool(raw.get("required", False)),
        default=raw.get("default"),
        minimum=raw.get("min"),
        maximum=raw.get("max"),
        placeholder=raw.get("placeholder"),
        generate_random=bool(raw.get("generate_random", False)),
    )

def _parse_algorithm(raw: dict) -> AlgorithmDescriptor:
    metric = raw.get("metric")
    return AlgorithmDescriptor(
        id=raw["id"],
        name=raw.get("name", raw["id"]),
        description=raw.get("description", ""),
        category=raw["category"],
        family=AlgorithmFamily(raw.get("family", "standard-digest")),
        ui_mode=UIMode(raw.get("ui_mode", "standard")),
        output_length=raw.get("output_length"),
        parameters=tuple(_parse_parameter(param) for param in raw.get("parameters") or []),
        supports_comparison=bool(raw.get("supports_comparison", False)),
        metric=SimilarityFamily(metric) if metric else None,
        engine_name=raw.get("engine_name"),
        engine_package=raw.get("engine_package"),
        slow=bool(raw.get("slow", False)),
        legacy=bool(raw.get("legacy", False)),
    )

def load_registry(path=None) -> AlgorithmRegistry:
    """Loads an AlgorithmRegistry from a YAML catalog.

    Arguments:
    path    -- catalog file. If None, the catalog shipped with hashlens is used
    """
    path = path or CATALOG_PATH
    try:
        with open(path, 'r', encoding='utf-8') as file:
            catalog = yaml.safe_load(file)
    except (OSError, yaml.YAMLError) as e:
        raise CatalogFileError(f"Cannot read catalog \"{path}\": {e}") from e

    if not isinstance(catalog, dict) or not isinstance(catalog.get("algorithms"), list):
        raise CatalogFileError(f"Catalog \"{path}\" has no \"algorithms\" list")

    try:
        details = {title: CategoryDetails(description=value["description"],
                                          features=value["features"],
                                          context=CategoryContext(value.get("context", "algo")))
                   for title, value in (catalog.get("categories") or {}).items()}
        descriptors = [_parse_algorithm(raw) for raw in catalog["algorithms"]]
    except (KeyError, TypeError, ValueError) as e:
        # ValueError also covers unknown enum values (family, kind, metric)
        raise CatalogFileError(f"Malformed entry in catalog \"{path}\": {e!r}") from e

    registry = AlgorithmRegistry(descriptors, details)
    logger.debug(f"Catalog \"{path}\" loaded: {len(registry)} algorithms in {len(registry.category_titles())} categories")
    return registry

@functools.lru_cache(maxsize=None)
def default_registry() -> AlgorithmRegistry:
    """Registry of the catalog shipped with hashlens, loaded once per process."""
    return load_registry()
