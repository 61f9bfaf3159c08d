#!/usr/bin/env python3
"""
Command-line interface for the reference resolver.
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional
from urllib.parse import urlsplit

from .api import ResolutionError
from .resolver import RefResolver
from .retriever import UriRetriever
from .retrievers import SchemeRetriever
from .version import __version__

logger = logging.getLogger("json_schema_refs")


def parse_args(args: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Resolve the $ref references of a JSON schema and print the result."
    )
    parser.add_argument(
        "schema",
        type=str,
        help="Path or URI of the JSON schema"
    )
    parser.add_argument(
        "--base-uri",
        type=str,
        help="URI to resolve relative references against (defaults to the schema URI)"
    )
    parser.add_argument(
        "--indent",
        type=int,
        default=2,
        help="Indentation of the printed JSON"
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=30,
        help="Seconds to wait for remote schemas"
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable verbose output"
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}"
    )

    return parser.parse_args(args)


def to_uri(schema: str) -> str:
    """
    Turn a command line schema argument into a URI.

    Args:
        schema: File path or URI

    Returns:
        The URI, with plain paths converted to absolute `file://` URIs
    """
    scheme = urlsplit(schema).scheme
    # One-letter schemes are Windows drive letters
    if len(scheme) > 1:
        return schema
    return Path(schema).resolve().as_uri()


def main(args: Optional[List[str]] = None) -> int:
    """Main entry point for the script."""
    args = parse_args(args)

    uri = to_uri(args.schema)
    uri_retriever = UriRetriever(SchemeRetriever(timeout=args.timeout), verbose=args.verbose)
    resolver = RefResolver(uri_retriever, verbose=args.verbose)

    try:
        schema = uri_retriever.retrieve(uri)
        resolved = resolver.resolve(schema, args.base_uri or uri)
        output = json.dumps(resolved, indent=args.indent, ensure_ascii=False)
    except ResolutionError as e:
        logger.error(f"Failed to resolve {args.schema}: {e}")
        return 1
    except ValueError as e:
        # json.dumps cannot print recursive schemas
        logger.error(f"Cannot print {args.schema}: {e}")
        return 1

    print(output)
    return 0


if __name__ == "__main__":
    sys.exit(main())
