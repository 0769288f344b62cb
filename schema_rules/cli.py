#!/usr/bin/env python3
"""
Command-line interface for the schema rule translator.
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from .api import TranslationError, translate
from .version import __version__

logger = logging.getLogger("schema_rules")


def load_json(filepath: Union[str, Path]) -> Any:
    """
    Load and parse a JSON file.

    Args:
        filepath: Path to the JSON file

    Returns:
        Parsed JSON data

    Raises:
        FileNotFoundError: If the file doesn't exist
        json.JSONDecodeError: If the file contains invalid JSON
    """
    filepath = Path(filepath)
    if not filepath.exists():
        raise FileNotFoundError(f"File not found: {filepath}")

    try:
        with open(filepath, 'r', encoding='utf-8') as f:
            return json.load(f)
    except json.JSONDecodeError as e:
        # Enhance the error message with file information
        raise json.JSONDecodeError(
            f"Failed to parse JSON in {filepath}: {e.msg}",
            e.doc,
            e.pos
        ) from e


def parse_args(args: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Translate a JSON schema into validation rules and validate a JSON file with them."
    )
    parser.add_argument(
        "data_file",
        type=str,
        help="Path to the JSON data file to validate"
    )
    parser.add_argument(
        "schema_file",
        type=str,
        help="Path to the JSON schema file"
    )
    parser.add_argument(
        "--sub-schema",
        action="append",
        metavar="ID=PATH",
        help="Register a schema file under an id for $ref lookups (can be used multiple times)"
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Disable type conversion of the data"
    )
    parser.add_argument(
        "--describe",
        action="store_true",
        help="Print the translated rule tree as JSON"
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


def load_sub_schemas(definitions: Optional[List[str]]) -> Dict[str, Any]:
    """
    Load the schemas given as ID=PATH pairs.

    Args:
        definitions: ID=PATH strings

    Returns:
        Registry of schemas by id

    Raises:
        ValueError: If a definition has no '='
    """
    sub_schemas = {}
    for definition in definitions or []:
        if "=" not in definition:
            raise ValueError(f"Expected ID=PATH, got '{definition}'")
        schema_id, path = definition.split("=", 1)
        sub_schemas[schema_id] = load_json(path)
    return sub_schemas


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the script."""
    args = parse_args(argv)

    if args.verbose:
        logger.setLevel(logging.DEBUG)

    try:
        data = load_json(args.data_file)
        schema = load_json(args.schema_file)
        sub_schemas = load_sub_schemas(args.sub_schema)
    except FileNotFoundError as e:
        logger.error(str(e))
        return 1
    except ValueError as e:
        # json.JSONDecodeError is a ValueError as well
        logger.error(str(e))
        return 1

    try:
        rule = translate(schema, sub_schemas=sub_schemas or None, strict_mode=args.strict)
    except TranslationError as e:
        logger.error(f"Could not translate schema: {e}")
        return 1

    if args.describe:
        print(json.dumps(rule.describe(), indent=2, default=str))

    result = rule.validate(data, verbose=args.verbose)

    # Report results
    if not result.valid:
        logger.error("Validation failed:")
        for error in result.errors:
            logger.error(f"  - {error}")
        return 1

    logger.info("Validation successful!")
    return 0


if __name__ == "__main__":
    sys.exit(main())
