"""
$ref resolution against the root schema and a registry of sub-schemas.
"""

import logging
from typing import Any, Mapping, Optional, Tuple

from .api import SchemaReferenceError
from .utils import JsonPointer

logger = logging.getLogger("schema_rules")


class ReferenceResolver:
    """
    Resolves $ref URIs to schema fragments.

    A URI is split at its first '#' into a schema id (kept with its '#') and
    a fragment path. Ids are looked up in the sub-schema registry; anything
    the registry does not supply resolves against the root schema.
    Fragments are re-walked on every call, nothing is cached.
    """

    def __init__(self, root_schema: Any, sub_schemas: Optional[Mapping[str, Any]] = None):
        """
        Initialize a new reference resolver.

        Args:
            root_schema: The schema being translated
            sub_schemas: Registry of schemas by id
        """
        self.root_schema = root_schema
        self.sub_schemas = sub_schemas

    @staticmethod
    def split(uri: str) -> Tuple[str, str]:
        """
        Split a reference into its schema id and fragment path.

        Args:
            uri: Reference such as "common.json#/definitions/name"

        Returns:
            Tuple of (id including '#', fragment after '#'); the id is empty
            when the reference has no '#'
        """
        index = uri.find("#")
        if index < 0:
            return "", uri
        return uri[:index + 1], uri[index + 1:]

    def find_schema(self, schema_id: str) -> Any:
        """
        Pick the schema document a reference points into.

        Args:
            schema_id: Id prefix of the reference, including its '#'

        Returns:
            The registered schema, or the root schema as a fallback
        """
        schema = None

        if schema_id and self.sub_schemas:
            schema = self.sub_schemas.get(schema_id)
            if schema is None:
                schema = self.sub_schemas.get(schema_id[:-1])

        if schema is None:
            schema = self.root_schema

        return schema

    def resolve(self, uri: str) -> Any:
        """
        Resolve a reference to the schema fragment it points at.

        Args:
            uri: Reference URI

        Returns:
            The fragment, or None when the path leads nowhere

        Raises:
            SchemaReferenceError: If no schema document is available at all
        """
        if not isinstance(uri, str):
            raise SchemaReferenceError(f"Expected $ref to be a string, got {type(uri).__name__}")

        schema_id, path = self.split(uri)
        schema = self.find_schema(schema_id)

        if schema is None:
            raise SchemaReferenceError(f"Can not find schema reference: {uri}.")

        # The first segment is whatever precedes the first '/', normally empty
        parts = [JsonPointer.unescape_part(part) for part in path.split("/")[1:]]
        fragment = JsonPointer.walk(schema, parts)

        logger.debug(f"Resolved $ref '{uri}' to {type(fragment).__name__}")
        return fragment
