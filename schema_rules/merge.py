"""
allOf merging: flattens a list of object or array schemas into one schema.
"""

import logging
from typing import Any, Callable, Dict, List

from .api import MergeTypeError
from .utils import SchemaKeywords

logger = logging.getLogger("schema_rules")

MERGEABLE_TYPES = ("array", "object")


class AllOfMerger:
    """
    Merges the members of an allOf into a single synthetic schema.

    Members given as $ref are dereferenced through the supplied resolver
    before they are inspected. The merged schema is an ordinary schema
    node, to be resolved like any other.
    """

    def __init__(self, resolve_ref: Callable[[str], Any]):
        """
        Initialize a new merger.

        Args:
            resolve_ref: Function mapping a $ref URI to its schema fragment
        """
        self.resolve_ref = resolve_ref

    def schema_type(self, member: Any) -> Any:
        """
        Get the declared type of a member, following a $ref if needed.

        Args:
            member: allOf member

        Returns:
            The type keyword value, or None
        """
        member_type = SchemaKeywords.get(member, SchemaKeywords.TYPE)
        if member_type:
            return member_type

        ref = SchemaKeywords.get(member, SchemaKeywords.REF)
        if ref:
            return SchemaKeywords.get(self.resolve_ref(ref), SchemaKeywords.TYPE)

        return None

    def merge(self, members: List[Any]) -> Dict[str, Any]:
        """
        Merge allOf members.

        Args:
            members: The allOf list

        Returns:
            Merged schema node

        Raises:
            MergeTypeError: If the list is empty, or the members do not all
                share the same array or object type
        """
        if not members:
            raise MergeTypeError("Expected allOf to contain at least one schema.")

        merge_type = self.schema_type(members[0])
        for member in members:
            member_type = self.schema_type(member)
            if member_type not in MERGEABLE_TYPES or member_type != merge_type:
                raise MergeTypeError("Expected allOf item to be an array or object.")

        logger.debug(f"Merging {len(members)} allOf {merge_type} schemas")

        if merge_type == "object":
            return self.merge_objects(members)
        return self.merge_arrays(members)

    def _dereference(self, member: Any) -> Any:
        ref = SchemaKeywords.get(member, SchemaKeywords.REF)
        if ref:
            return self.resolve_ref(ref)
        return member

    def merge_objects(self, members: List[Any]) -> Dict[str, Any]:
        """
        Union the properties and concatenate the required lists of object schemas.

        Later members win when two define the same property. Required names
        are concatenated as they are, duplicates included.
        """
        properties: Dict[str, Any] = {}
        required: List[str] = []

        for member in members:
            member = self._dereference(member)
            properties.update(SchemaKeywords.get(member, SchemaKeywords.PROPERTIES) or {})
            required.extend(SchemaKeywords.get(member, SchemaKeywords.REQUIRED) or [])

        result: Dict[str, Any] = {
            SchemaKeywords.TYPE: "object",
            SchemaKeywords.PROPERTIES: properties,
        }
        if required:
            result[SchemaKeywords.REQUIRED] = required
        return result

    def merge_arrays(self, members: List[Any]) -> Dict[str, Any]:
        """
        Concatenate the items of array schemas.

        A member whose items is a list contributes every entry as a
        positional schema (and its ordered list is flattened alongside). A
        member with a single items schema contributes a schema that every
        element may match; several of them are joined with anyOf. When both
        kinds are present, the per-element schemas cover the elements past
        the positional ones through additionalItems.
        """
        positional: List[Any] = []
        ordered: List[Any] = []
        per_element: List[Any] = []

        for member in members:
            member = self._dereference(member)
            member_items = SchemaKeywords.get(member, SchemaKeywords.ITEMS)
            if isinstance(member_items, list):
                positional.extend(member_items)
                ordered.extend(SchemaKeywords.get(member, SchemaKeywords.ORDERED) or [])
            elif member_items is not None:
                per_element.append(member_items)

        result: Dict[str, Any] = {SchemaKeywords.TYPE: "array"}

        element_schema = None
        if len(per_element) == 1:
            element_schema = per_element[0]
        elif per_element:
            element_schema = {SchemaKeywords.ANY_OF: per_element}

        if positional:
            result[SchemaKeywords.ITEMS] = positional
            if element_schema is not None:
                result[SchemaKeywords.ADDITIONAL_ITEMS] = element_schema
        elif element_schema is not None:
            result[SchemaKeywords.ITEMS] = element_schema

        if ordered:
            result[SchemaKeywords.ORDERED] = ordered
        return result
