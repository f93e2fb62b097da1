#!/usr/bin/env python
# -*- coding: utf-8 -*-

import sys
import json
import logging
import argparse

from hashlens.comparator import SimilarityComparator, __version__
from hashlens.common.constants import SETTINGS_FILE, LOGLEVELS
from hashlens.common.settings import load_settings
from hashlens.common.utilities import configure_logging
from hashlens.datalayer.registry import load_registry, category_slug
from hashlens.common.errors import UnknownAlgorithmError, ComparisonError
from hashlens.common.errors import CatalogFileError, SettingsFileError

logger = logging.getLogger(__name__)

def configure_argparse() -> argparse.ArgumentParser:
    """Configures argparse to receive the hashlens subcommands + loglevel."""
    parser = argparse.ArgumentParser(prog="hashlens", description="Hash algorithm catalog and LSH similarity comparison")
    parser.add_argument('--version', action='version', version=f"%(prog)s {__version__}")
    parser.add_argument('--settings', default=SETTINGS_FILE, help=f"YAML settings file (default={SETTINGS_FILE})")
    parser.add_argument('--catalog', help="Alternate YAML catalog (overrides the settings file)")
    # get log level from command line
    parser.add_argument('-log', '--loglevel', choices=LOGLEVELS,
                        help="Provide logging level (default=warning, or the one in the settings file)")

    subparsers = parser.add_subparsers(dest="command", required=True)

    list_parser = subparsers.add_parser("list", help="List algorithms grouped by category")
    list_parser.add_argument("-c", "--category", help="Only this category (name or slug)")

    subparsers.add_parser("categories", help="List categories with their slug and description")

    show_parser = subparsers.add_parser("show", help="Show the descriptor of an algorithm")
    show_parser.add_argument("algorithm", help="Algorithm id")

    compare_parser = subparsers.add_parser("compare", help="Compare two hex-encoded outputs of a similarity algorithm")
    compare_parser.add_argument("algorithm", help="Algorithm id (e.g., simhash, minhash, nilsimsa)")
    compare_parser.add_argument("hash1", help="First hex-encoded output")
    compare_parser.add_argument("hash2", help="Second hex-encoded output")

    return parser

def print_categories(registry):
    for title, ids in registry.list_by_category().items():
        details = registry.category_details(title)
        print(f"{title} [{category_slug(title)}] ({len(ids)}): {details.description}")

def print_algorithms(registry, category=None):
    listing = registry.list_by_category()
    if category is not None:
        title = registry.slug_to_category(category)
        if title not in listing:
            logger.error(f"Unknown category \"{category}\"")
            return 1
        listing = {title: listing[title]}

    for title, ids in listing.items():
        print(f"{title}:")
        for algorithm_id in ids:
            descriptor = registry.get(algorithm_id)
            _str = f"  {algorithm_id}: {descriptor.name}"
            if descriptor.supports_comparison:
                _str += " (comparable)"
            if descriptor.legacy:
                _str += " (legacy)"
            print(_str)
    return 0

def print_comparison(algorithm_id, result):
    print(f"Algorithm: {algorithm_id}")
    if result.distance is not None:
        print(f"Distance: {result.distance}")
    if result.similarity is not None:
        print("Similarity: {:.4f} ({})".format(result.similarity, result.label))

def main(argv=None):
    parser = configure_argparse()
    args = parser.parse_args(argv)

    try:
        settings = load_settings(args.settings)
    except SettingsFileError as e:
        configure_logging(logging.ERROR)
        logger.error(e)
        return 1

    loglevel = args.loglevel or settings["loglevel"]
    configure_logging(loglevel.upper())

    try:
        registry = load_registry(args.catalog or settings["catalog"])
    except CatalogFileError as e:
        logger.error(e)
        return 1

    if args.command == "categories":
        print_categories(registry)
        return 0

    if args.command == "list":
        return print_algorithms(registry, args.category)

    if args.command == "show":
        try:
            descriptor = registry.get(args.algorithm)
        except UnknownAlgorithmError:
            logger.error(f"Unknown algorithm \"{args.algorithm}\"")
            return 1
        print(json.dumps(descriptor.as_dict(), indent=4, ensure_ascii=False))
        return 0

    # compare
    if args.algorithm not in registry:
        logger.warning(f"\"{args.algorithm}\" is not in the catalog, using the generic Hamming metric")
    with SimilarityComparator(registry, max_workers=settings["max_workers"]) as comparator:
        try:
            result = comparator.compare_async(args.algorithm, args.hash1, args.hash2).result()
        except ComparisonError as e:
            logger.error(f"Not comparable: {type(e).__name__}: {e}")
            return 1
    print_comparison(args.algorithm, result)
    return 0

if __name__ == "__main__":
    sys.exit(main())
