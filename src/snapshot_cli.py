#!/usr/bin/env python3
"""
Command-line script for vocabulary context resolution and snapshots.

HOW TO RUN:
The virtual environment .venv should be activated before running the script.

From the src directory, run:
    python snapshot_cli.py --data <file.trig> <command> <vocabulary>

Examples:
    python snapshot_cli.py --data vocabularies.trig context https://slovník.gov.cz/legislativní/sbírka/111/2009
    python snapshot_cli.py --data vocabularies.trig related https://slovník.gov.cz/legislativní/sbírka/111/2009
    python snapshot_cli.py --data vocabularies.trig --output out.trig snapshot https://slovník.gov.cz/legislativní/sbírka/111/2009

Without --data, the SPARQL endpoint configured by VOCABULARY_REPOSITORY_QUERY_ENDPOINT
(and related variables, optionally in a .env file) is used.
"""

import argparse
import logging
import os
import sys

from rdflib import URIRef

# Add src to the path so we can import modules
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from repository.config import RelationshipStrategy, load_configuration
from repository.exceptions import VocabularyStoreError
from repository.store import TripleStore
from vocabulary.service import VocabularyService


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Resolve vocabulary contexts and relationships, create and remove vocabulary snapshots",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Show the repository context of a vocabulary
  python snapshot_cli.py --data data.trig context http://example.org/vocabulary/a

  # List vocabularies related to a vocabulary using the direct SKOS strategy
  python snapshot_cli.py --data data.trig --strategy skos related http://example.org/vocabulary/a

  # Create a cascading snapshot and save the resulting dataset
  python snapshot_cli.py --data data.trig --output result.trig snapshot http://example.org/vocabulary/a
        """
    )
    parser.add_argument("--data", action="append", default=[],
                        help="TriG or N-Quads file loaded into an in-memory store (can be repeated)")
    parser.add_argument("--format", default=None, help="RDF format of data files (guessed from extension by default)")
    parser.add_argument("--output", help="Where to save the in-memory dataset after a modifying command (TriG)")
    parser.add_argument("--env-file", help="Path to a .env file with configuration")
    parser.add_argument("--strategy", choices=[s.value for s in RelationshipStrategy],
                        help="Relationship resolution strategy overriding configuration")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")

    subparsers = parser.add_subparsers(dest="command", required=True)
    for name, help_text in [
        ("context", "Show repository context of a vocabulary"),
        ("related", "List vocabularies related to a vocabulary"),
        ("snapshot", "Create snapshot of a vocabulary and related vocabularies"),
        ("snapshots", "List snapshots of a vocabulary"),
    ]:
        subparser = subparsers.add_parser(name, help=help_text)
        subparser.add_argument("vocabulary", help="Vocabulary IRI")
    remove = subparsers.add_parser("remove-snapshot", help="Remove a vocabulary snapshot and snapshots created with it")
    remove.add_argument("snapshot", help="Snapshot IRI")
    return parser


def create_service(args) -> VocabularyService:
    config = load_configuration(args.env_file)
    if args.strategy:
        config.relationships.strategy = RelationshipStrategy(args.strategy)
    if args.data:
        store = TripleStore()
        for path in args.data:
            print(f"Loading data from {path}")
            store.load(path, format=args.format)
    else:
        store = TripleStore.from_config(config.repository)
    return VocabularyService.from_config(config, store)


def run(args, service: VocabularyService) -> bool:
    """Run the command. Returns whether the store was modified."""
    if args.command == "context":
        vocabulary = URIRef(args.vocabulary)
        print(f"✓ Context of {vocabulary}: {service.get_vocabulary_context(vocabulary)}")
        return False
    if args.command == "related":
        related = service.get_related_vocabularies(URIRef(args.vocabulary))
        print(f"✓ {len(related)} related vocabularies (including the vocabulary itself):")
        for uri in sorted(related):
            print(f"  {uri}")
        return False
    if args.command == "snapshots":
        snapshots = service.find_snapshots(URIRef(args.vocabulary))
        print(f"✓ {len(snapshots)} snapshots:")
        for snapshot in snapshots:
            print(f"  {snapshot.uri} (created {snapshot.created.isoformat()})")
        return False
    if args.command == "snapshot":
        snapshot = service.create_snapshot(URIRef(args.vocabulary))
        print("✓ Snapshot created successfully!")
        print(f"  IRI: {snapshot.uri}")
        print(f"  Created: {snapshot.created.isoformat()}")
        print(f"  Version of: {snapshot.version_of}")
        return True
    if args.command == "remove-snapshot":
        service.remove_snapshot(URIRef(args.snapshot))
        print(f"✓ Snapshot {args.snapshot} removed")
        return True
    raise ValueError(f"Unknown command: {args.command}")


def main(argv=None) -> int:
    """Main CLI entry point."""
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO,
                        format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    try:
        service = create_service(args)
        modified = run(args, service)
        if modified and args.output:
            service.store.dataset.serialize(destination=args.output, format="trig")
            print(f"Dataset saved to {args.output}")
        return 0
    except VocabularyStoreError as e:
        print(f"✗ {type(e).__name__}: {e}")
        return 1


if __name__ == "__main__":
    exit(main())
