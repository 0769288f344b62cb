#!/usr/bin/env python3
"""
JSON Schema Rule Translator

This script translates a JSON schema into validation rules and validates
a JSON data file with them.

Usage:
    python schema_rules.py <data_file> <schema_file> [--sub-schema ID=PATH] [--strict] [--describe] [--verbose]
"""

import sys

from schema_rules.cli import main

if __name__ == "__main__":
    sys.exit(main())
