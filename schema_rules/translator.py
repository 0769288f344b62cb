"""
Schema translator: turns JSON schema nodes into validation rules.

Translation is a single depth-first pass. Every node is classified by its
keywords and resolved straight into a rule; child nodes are resolved
recursively through the same dispatcher.
"""

import json
import logging
import re
from typing import Any, Callable, Dict, List, Optional

from .api import CycleError, SchemaReferenceError, ShapeError, UnresolvedTypeError
from .merge import AllOfMerger
from .options import build_options, check_schema
from .references import ReferenceResolver
from .rules import (
    AlternativesRule,
    AnyRule,
    ArrayRule,
    BinaryRule,
    BooleanRule,
    DateRule,
    NumberRule,
    ObjectRule,
    Rule,
    StringRule
)
from .utils import SchemaKeywords, TypeUtils

logger = logging.getLogger("schema_rules")

# Schema metadata keywords and the rule builders they map onto
DECORATIONS = (
    (SchemaKeywords.DESCRIPTION, "description"),
    (SchemaKeywords.TITLE, "label"),
    (SchemaKeywords.DEFAULT, "default"),
)

# String formats checked by a StringRule builder
STRING_FORMATS: Dict[str, Callable[[StringRule], StringRule]] = {
    "email": lambda rule: rule.email(),
    "hostname": lambda rule: rule.hostname(),
    "ipv4": lambda rule: rule.ip(["ipv4"]),
    "ipv6": lambda rule: rule.ip(["ipv6"]),
    "uri": lambda rule: rule.uri(),
    "byte": lambda rule: rule.base64(),
}

DATE_FORMATS = ("date", "date-time")


def _literals(values: Any) -> List[Any]:
    return list(values) if isinstance(values, list) else [values]


class SchemaTranslator:
    """
    Translates one JSON schema into a rule tree.

    The translator is configured once with the root schema and options and
    can then resolve the root or any fragment. Nodes that cannot be
    classified are translated to an accept-anything rule; a warning is
    logged and recorded in ``diagnostics``.
    """

    def __init__(self, schema: Any, options: Optional[Any] = None, **kwargs: Any):
        """
        Initialize a new schema translator.

        Args:
            schema: Root schema mapping, or a type name shorthand
            options: Options mapping (subSchemas, types, refineType,
                strictMode) or a TranslatorOptions instance
            **kwargs: snake_case option overrides

        Raises:
            ConfigurationError: If the schema or the options are malformed
        """
        check_schema(schema)

        self.schema = schema
        self.options = build_options(options, **kwargs)
        self.references = ReferenceResolver(schema, self.options.sub_schemas)
        self.merger = AllOfMerger(self.resolve_ref)
        self.diagnostics: List[str] = []

        # $refs currently being resolved, outermost first
        self._active_refs: List[str] = []

        self._type_builders: Dict[str, Callable[[Dict[str, Any], str], Rule]] = {
            "array": self._array,
            "boolean": self._boolean,
            "integer": self._number,
            "number": self._number,
            "object": self._object,
            "string": self._string,
            "null": self._null,
        }

    def translate(self) -> Rule:
        """
        Translate the root schema.

        Returns:
            Root rule

        Raises:
            TranslationError: If any reachable node cannot be translated
        """
        return self.resolve(self.schema)

    def resolve(self, node: Any) -> Rule:
        """
        Classify a schema node and translate it.

        Args:
            node: Schema mapping or type name shorthand

        Returns:
            Rule for the node
        """
        if isinstance(node, dict):
            if TypeUtils.is_set(node.get(SchemaKeywords.TYPE)):
                return self._resolve_type(node)

            if TypeUtils.is_set(node.get(SchemaKeywords.ANY_OF)):
                return self._resolve_any_of(node)

            if TypeUtils.is_set(node.get(SchemaKeywords.ALL_OF)):
                return self._resolve_all_of(node)

            if TypeUtils.is_set(node.get(SchemaKeywords.ONE_OF)):
                return self._resolve_one_of(node)

            if TypeUtils.is_set(node.get(SchemaKeywords.NOT)):
                return self._resolve_not(node)

            if TypeUtils.is_set(node.get(SchemaKeywords.REF)):
                return self._resolve_reference(node[SchemaKeywords.REF])

            # Without a type, an enum accepts its literals whatever their type
            if TypeUtils.is_set(node.get(SchemaKeywords.ENUM)):
                return AnyRule().valid(*_literals(node[SchemaKeywords.ENUM]))

        # A bare string is shorthand for {"type": <string>}
        if isinstance(node, str):
            return self._resolve_type({SchemaKeywords.TYPE: node})

        message = ("schema missing a 'type' or '$ref' or 'enum': "
                   f"{json.dumps(node, default=repr)}")
        logger.warning(message)
        self.diagnostics.append(message)
        return AnyRule()

    def resolve_as_array(self, value: Any) -> List[Rule]:
        """
        Resolve a keyword that holds one schema or a list of schemas.

        Args:
            value: Schema node or list of schema nodes

        Returns:
            One rule per schema, in order
        """
        if isinstance(value, list):
            return [self.resolve(item) for item in value]
        return [self.resolve(value)]

    def resolve_ref(self, uri: str) -> Any:
        """
        Look up the schema fragment a $ref points at.

        Args:
            uri: Reference URI

        Returns:
            The fragment, or None when the path leads nowhere
        """
        return self.references.resolve(uri)

    def _resolve_reference(self, uri: Any) -> Rule:
        if uri in self._active_refs:
            start = self._active_refs.index(uri)
            raise CycleError(self._active_refs[start:] + [uri])

        fragment = self.resolve_ref(uri)
        if fragment is None:
            raise SchemaReferenceError(f"Can not find schema reference: {uri}.")

        self._active_refs.append(uri)
        try:
            return self.resolve(fragment)
        finally:
            self._active_refs.pop()

    # Type resolution

    def _resolve_type(self, node: Dict[str, Any]) -> Rule:
        node_type = node[SchemaKeywords.TYPE]
        fmt = node.get(SchemaKeywords.FORMAT)

        if isinstance(node_type, list):
            rule: Rule = AlternativesRule([self._build_type(node, name, fmt) for name in node_type])
        else:
            rule = self._build_type(node, node_type, fmt)

        for keyword, builder in DECORATIONS:
            value = node.get(keyword)
            if TypeUtils.is_set(value):
                rule = getattr(rule, builder)(value)

        return rule

    def _build_type(self, node: Dict[str, Any], type_name: Any, fmt: Optional[str]) -> Rule:
        if self.options.refine_type is not None:
            type_name = self.options.refine_type(type_name, fmt)

        rule = None
        if isinstance(type_name, str):
            builder = self._type_builders.get(type_name)
            if builder is not None:
                rule = builder(node, type_name)
            elif self.options.types:
                rule = self.options.types.get(type_name)

        if rule is None:
            raise UnresolvedTypeError(f"Could not resolve type: {node[SchemaKeywords.TYPE]}.")

        return rule.strict(self.options.strict_mode)

    def _boolean(self, node: Dict[str, Any], type_name: str) -> Rule:
        return BooleanRule()

    def _null(self, node: Dict[str, Any], type_name: str) -> Rule:
        return AnyRule().valid(None)

    def _number(self, node: Dict[str, Any], type_name: str) -> Rule:
        rule = NumberRule()

        if type_name == "integer":
            rule = rule.integer()

        for keyword, builder in ((SchemaKeywords.MINIMUM, "min"),
                                 (SchemaKeywords.MAXIMUM, "max"),
                                 (SchemaKeywords.EXCLUSIVE_MINIMUM, "greater"),
                                 (SchemaKeywords.EXCLUSIVE_MAXIMUM, "less")):
            value = node.get(keyword)
            if TypeUtils.is_number(value):
                rule = getattr(rule, builder)(value)

        multiple_of = node.get(SchemaKeywords.MULTIPLE_OF)
        if TypeUtils.is_number(multiple_of) and multiple_of != 0:
            rule = rule.multiple(multiple_of)

        return rule

    def _properties(self, node: Dict[str, Any]) -> Optional[Dict[str, Rule]]:
        properties = node.get(SchemaKeywords.PROPERTIES)
        if not isinstance(properties, dict):
            return None

        required = node.get(SchemaKeywords.REQUIRED)
        required = required if isinstance(required, list) else []

        keys = {}
        for key, property_schema in properties.items():
            rule = self.resolve(property_schema)
            if key in required:
                rule = rule.required()
            keys[key] = rule

        return keys

    def _object(self, node: Dict[str, Any], type_name: str) -> Rule:
        rule = ObjectRule(self._properties(node))

        additional = node.get(SchemaKeywords.ADDITIONAL_PROPERTIES)
        if additional is True:
            rule = rule.unknown(True)
        if isinstance(additional, dict):
            rule = rule.pattern("^", self.resolve(additional))

        min_properties = node.get(SchemaKeywords.MIN_PROPERTIES)
        if TypeUtils.is_number(min_properties):
            rule = rule.min(min_properties)

        max_properties = node.get(SchemaKeywords.MAX_PROPERTIES)
        if TypeUtils.is_number(max_properties):
            rule = rule.max(max_properties)

        return rule

    def _array(self, node: Dict[str, Any], type_name: str) -> Rule:
        rule = ArrayRule()
        items = node.get(SchemaKeywords.ITEMS)
        additional = node.get(SchemaKeywords.ADDITIONAL_ITEMS)
        positional = None

        if TypeUtils.is_set(items):
            if isinstance(items, list):
                positional = self.resolve_as_array(items)
                rule = rule.ordered(positional)
            else:
                rule = rule.items(self.resolve_as_array(items))
        elif TypeUtils.is_set(node.get(SchemaKeywords.ORDERED)):
            positional = self.resolve_as_array(node[SchemaKeywords.ORDERED])
            rule = rule.ordered(positional)

        # Elements past the positional rules
        if positional is not None and isinstance(additional, dict):
            rule = rule.items([self.resolve(additional)])

        # Both length caps apply, so the tighter one wins
        max_items = node.get(SchemaKeywords.MAX_ITEMS)
        caps = [limit for limit in (max_items,) if TypeUtils.is_number(limit)]
        if positional is not None and not rule.item_rules:
            # An ordered list alone admits no extra elements unless additionalItems allows them
            if additional is False or (not TypeUtils.is_set(items) and additional is not True):
                caps.append(len(positional))
        if caps:
            rule = rule.max(min(caps))

        min_items = node.get(SchemaKeywords.MIN_ITEMS)
        if TypeUtils.is_number(min_items):
            rule = rule.min(min_items)

        if TypeUtils.is_set(node.get(SchemaKeywords.UNIQUE_ITEMS)):
            rule = rule.unique()

        return rule

    def _string(self, node: Dict[str, Any], type_name: str) -> Rule:
        enum = node.get(SchemaKeywords.ENUM)
        if TypeUtils.is_set(enum):
            return AnyRule().valid(*_literals(enum))

        fmt = node.get(SchemaKeywords.FORMAT)
        if fmt in DATE_FORMATS:
            return self._date(node)
        if fmt == "binary":
            return self._binary(node)

        rule = StringRule()
        add_format = STRING_FORMATS.get(fmt) if isinstance(fmt, str) else None
        if add_format is not None:
            rule = add_format(rule)

        return self._regular_string(node, rule)

    def _regular_string(self, node: Dict[str, Any], rule: StringRule) -> Rule:
        pattern = node.get(SchemaKeywords.PATTERN)
        if TypeUtils.is_set(pattern):
            try:
                rule = rule.regex(pattern)
            except (re.error, TypeError) as e:
                raise ShapeError(f"Invalid pattern {pattern!r}: {e}") from e

        min_length = node.get(SchemaKeywords.MIN_LENGTH, 0)
        if TypeUtils.is_number(min_length):
            if min_length == 0:
                rule = rule.allow("")
            rule = rule.min(min_length)

        max_length = node.get(SchemaKeywords.MAX_LENGTH)
        if TypeUtils.is_number(max_length):
            rule = rule.max(max_length)

        return rule

    def _date(self, node: Dict[str, Any]) -> Rule:
        rule = DateRule()

        # Falsy bounds, such as 0, are skipped
        try:
            if TypeUtils.is_set(node.get(SchemaKeywords.MINIMUM)):
                rule = rule.min(node[SchemaKeywords.MINIMUM])
            if TypeUtils.is_set(node.get(SchemaKeywords.MAXIMUM)):
                rule = rule.max(node[SchemaKeywords.MAXIMUM])
        except ValueError as e:
            raise ShapeError(str(e)) from e

        return rule

    def _binary(self, node: Dict[str, Any]) -> Rule:
        rule = BinaryRule()

        # Falsy lengths, such as 0, are skipped
        if TypeUtils.is_set(node.get(SchemaKeywords.MIN_LENGTH)):
            rule = rule.min(node[SchemaKeywords.MIN_LENGTH])
        if TypeUtils.is_set(node.get(SchemaKeywords.MAX_LENGTH)):
            rule = rule.max(node[SchemaKeywords.MAX_LENGTH])

        return rule

    # Combinators

    @staticmethod
    def _members(node: Dict[str, Any], keyword: str) -> List[Any]:
        members = node[keyword]
        if not isinstance(members, list):
            raise ShapeError(f"Expected {keyword} to be an array.")
        return members

    def _resolve_any_of(self, node: Dict[str, Any]) -> Rule:
        members = self._members(node, SchemaKeywords.ANY_OF)
        return AlternativesRule().try_([self.resolve(member) for member in members])

    def _resolve_one_of(self, node: Dict[str, Any]) -> Rule:
        members = self._members(node, SchemaKeywords.ONE_OF)
        return AlternativesRule().try_([self.resolve(member) for member in members]).required()

    def _resolve_not(self, node: Dict[str, Any]) -> Rule:
        members = self._members(node, SchemaKeywords.NOT)
        condition = AlternativesRule().try_([self.resolve(member) for member in members])
        return AlternativesRule().when(condition, then=AnyRule().forbidden(), otherwise=AnyRule())

    def _resolve_all_of(self, node: Dict[str, Any]) -> Rule:
        members = self._members(node, SchemaKeywords.ALL_OF)
        return self.resolve(self.merger.merge(members))
