"""GraphQL schema parser using graphql-core.

Parses .graphql/.graphqls files (including Apollo Federation directives)
and produces an IRSchema.
"""

import os
from dataclasses import dataclass, field

import click
from graphql import (
    DirectiveNode,
    EnumTypeDefinitionNode,
    EnumTypeExtensionNode,
    FieldDefinitionNode,
    FieldNode,
    GraphQLSyntaxError,
    ListTypeNode,
    NamedTypeNode,
    NonNullTypeNode,
    ObjectTypeDefinitionNode,
    ObjectTypeExtensionNode,
    ScalarTypeDefinitionNode,
    SchemaDefinitionNode,
    SelectionSetNode,
    StringValueNode,
    TypeNode,
    parse,
)

from .ir import (
    ROOT_TYPE_NAMES,
    IRArgumentDefinition,
    IRCompoundType,
    IRDescription,
    IREntityDefinition,
    IREnumDefinition,
    IRFieldDefinition,
    IRListType,
    IRNamedType,
    IRNonNullType,
    IRObjectDefinition,
    IRResolverDefinition,
    IRScalarDefinition,
    IRSchema,
    IRType,
)

SCHEMA_EXTENSIONS = (".graphql", ".graphqls")


class SchemaParseError(ValueError):
    """Raised when a schema is syntactically valid but can't be turned into IR."""


@dataclass
class _ObjectInfo:
    """Object type collected across definitions and extensions."""
    name: str
    description: str | None = None
    fields: list[FieldDefinitionNode] = field(default_factory=list)
    keys: list[str] = field(default_factory=list)

    def get_field(self, name: str) -> FieldDefinitionNode | None:
        for node in self.fields:
            if node.name.value == name:
                return node
        return None


def _description(node) -> IRDescription:
    return IRDescription(node.description.value if node.description else None)


def _directives(node, name: str) -> list[DirectiveNode]:
    return [d for d in (node.directives or ()) if d.name.value == name]


def _fields_argument(directive: DirectiveNode) -> str:
    """Return the ``fields: "..."`` selection string of a federation directive."""
    for arg in directive.arguments or ():
        if arg.name.value == "fields" and isinstance(arg.value, StringValueNode):
            return arg.value.value
    raise SchemaParseError(f"@{directive.name.value} requires a 'fields' string argument")


def _named_type(type_node: TypeNode) -> str:
    """Unwrap list and non-null wrappers down to the type name."""
    while not isinstance(type_node, NamedTypeNode):
        type_node = type_node.type
    return type_node.name.value


def _parse_selection(selection: str, directive_name: str) -> SelectionSetNode:
    """Parse a federation field set such as ``"id organization { id }"``."""
    try:
        document = parse("{ %s }" % selection)
    except GraphQLSyntaxError as e:
        raise SchemaParseError(
            f"Invalid @{directive_name} field set '{selection}': {e.message}"
        ) from e
    selection_set = document.definitions[0].selection_set
    _check_field_selections(selection_set, directive_name)
    return selection_set


def _check_field_selections(selection_set: SelectionSetNode, directive_name: str):
    """Field sets may only select plain fields, no fragments."""
    for selection in selection_set.selections:
        if not isinstance(selection, FieldNode):
            raise SchemaParseError(
                f"@{directive_name} field sets may only select fields, got {selection.kind}"
            )
        if selection.selection_set:
            _check_field_selections(selection.selection_set, directive_name)


class SchemaParser:
    """Parses GraphQL schema files into IR."""

    def __init__(self, schema_path: str):
        """Initialize a parser with a path to a schema file or directory."""
        self.schema_path = schema_path
        self.current_file = ""
        self.root_types: set[str] = set(ROOT_TYPE_NAMES)
        self._objects: dict[str, _ObjectInfo] = {}
        self._enums: dict[str, IREnumDefinition] = {}
        self._scalars: dict[str, IRScalarDefinition] = {}
        self._provided: set[tuple[str, str]] = set()

    @classmethod
    def from_sdl(cls, sdl: str, source_name: str = "<sdl>") -> IRSchema:
        """Parse an in-memory SDL document."""
        parser = cls("")
        parser._parse_source(sdl, source_name)
        return parser._build()

    def parse_all(self) -> IRSchema:
        """Parse all schema files and return the complete IR."""
        for file_path in self._collect_schema_files():
            with open(file_path) as f:
                self._parse_source(f.read(), os.path.basename(file_path))
        return self._build()

    def _collect_schema_files(self) -> list[str]:
        """Collect all schema files from path."""
        files = []
        if os.path.isfile(self.schema_path):
            if self.schema_path.endswith(SCHEMA_EXTENSIONS):
                files.append(self.schema_path)
        else:
            for root, _, filenames in os.walk(self.schema_path):
                for filename in filenames:
                    if filename.endswith(SCHEMA_EXTENSIONS):
                        files.append(os.path.join(root, filename))
        return sorted(files)

    def _parse_source(self, content: str, source_name: str):
        self.current_file = source_name
        try:
            ast = parse(content)
        except GraphQLSyntaxError as e:
            click.echo(f"Error parsing {self.current_file}: {e}", err=True)
            raise
        self._process_ast(ast)

    def _process_ast(self, ast):
        """Collect definitions from a GraphQL AST."""
        for definition in ast.definitions:
            if isinstance(definition, ScalarTypeDefinitionNode):
                name = definition.name.value
                self._scalars[name] = IRScalarDefinition(
                    name=name, description=_description(definition)
                )
            elif isinstance(definition, (EnumTypeDefinitionNode, EnumTypeExtensionNode)):
                self._process_enum(definition)
            elif isinstance(definition, (ObjectTypeDefinitionNode, ObjectTypeExtensionNode)):
                self._process_object(definition)
            elif isinstance(definition, SchemaDefinitionNode):
                for operation_type in definition.operation_types:
                    self.root_types.add(operation_type.type.name.value)

    def _process_enum(self, node: EnumTypeDefinitionNode | EnumTypeExtensionNode):
        name = node.name.value
        values = [v.name.value for v in node.values or ()]
        existing = self._enums.get(name)
        if existing is None:
            self._enums[name] = IREnumDefinition(
                name=name,
                values=values,
                description=_description(node) if isinstance(node, EnumTypeDefinitionNode) else IRDescription(),
            )
        else:
            merged = list(existing.values) + [v for v in values if v not in existing.values]
            description = existing.description
            if isinstance(node, EnumTypeDefinitionNode) and node.description:
                description = _description(node)
            self._enums[name] = IREnumDefinition(name=name, values=merged, description=description)

    def _process_object(self, node: ObjectTypeDefinitionNode | ObjectTypeExtensionNode):
        """Merge an object definition or ``extend type`` block by name."""
        name = node.name.value
        info = self._objects.setdefault(name, _ObjectInfo(name=name))
        if isinstance(node, ObjectTypeDefinitionNode) and node.description:
            info.description = node.description.value

        existing_names = {f.name.value for f in info.fields}
        for field_node in node.fields or ():
            if field_node.name.value not in existing_names:
                info.fields.append(field_node)
                existing_names.add(field_node.name.value)

        # The same key is often repeated on the base type and its extensions.
        for directive in _directives(node, "key"):
            key = " ".join(_fields_argument(directive).split())
            if key not in info.keys:
                info.keys.append(key)

    # -------------------------------------------------------------------------
    # IR construction
    # -------------------------------------------------------------------------

    def _build(self) -> IRSchema:
        """Turn the collected definitions into IR."""
        self._collect_provided_fields()
        return IRSchema(
            objects=[self._build_object(info) for info in self._objects.values()],
            enums=list(self._enums.values()),
            scalars=list(self._scalars.values()),
        )

    def _collect_provided_fields(self):
        """Record every (type, field) pair named by a ``@provides`` directive."""
        for info in self._objects.values():
            for field_node in info.fields:
                for directive in _directives(field_node, "provides"):
                    selection_set = _parse_selection(_fields_argument(directive), "provides")
                    self._mark_provided(_named_type(field_node.type), selection_set)

    def _mark_provided(self, type_name: str, selection_set: SelectionSetNode):
        for selection in selection_set.selections:
            field_name = selection.name.value
            self._provided.add((type_name, field_name))
            if selection.selection_set:
                field_node = self._lookup_field(type_name, field_name)
                self._mark_provided(_named_type(field_node.type), selection.selection_set)

    def _lookup_field(self, type_name: str, field_name: str) -> FieldDefinitionNode:
        info = self._objects.get(type_name)
        if info is None:
            raise SchemaParseError(f"Unknown type '{type_name}' in field selection")
        field_node = info.get_field(field_name)
        if field_node is None:
            raise SchemaParseError(f"Type '{type_name}' has no field '{field_name}'")
        return field_node

    def _build_object(self, info: _ObjectInfo) -> IRObjectDefinition:
        is_root_type = info.name in self.root_types
        fields = [
            IRFieldDefinition(
                name=node.name.value,
                type=self._convert_type(node.type),
                description=_description(node),
            )
            for node in info.fields
        ]
        resolvers = [self._build_resolver(info, node, is_root_type) for node in info.fields]

        if info.keys:
            return IREntityDefinition(
                name=info.name,
                fields=fields,
                resolvers=resolvers,
                description=IRDescription(info.description),
                keys=[self._selection_to_compound(info.name, _parse_selection(key, "key")) for key in info.keys],
            )
        return IRObjectDefinition(
            name=info.name,
            fields=fields,
            resolvers=resolvers,
            description=IRDescription(info.description),
            is_root_type=is_root_type,
        )

    def _build_resolver(
        self, info: _ObjectInfo, node: FieldDefinitionNode, is_root_type: bool
    ) -> IRResolverDefinition:
        name = node.name.value
        requires = IRCompoundType()
        for directive in _directives(node, "requires"):
            requires = self._selection_to_compound(
                info.name, _parse_selection(_fields_argument(directive), "requires")
            )

        is_external = bool(_directives(node, "external"))
        arguments = [
            IRArgumentDefinition(
                name=arg.name.value,
                type=self._convert_type(arg.type),
                description=_description(arg),
            )
            for arg in node.arguments or ()
        ]
        return IRResolverDefinition(
            name=name,
            type=self._convert_type(node.type),
            parent=info.name,
            arguments=arguments,
            requires=requires,
            description=_description(node),
            is_root_type=is_root_type,
            is_not_provided_and_external=is_external and (info.name, name) not in self._provided,
        )

    def _selection_to_compound(
        self, type_name: str, selection_set: SelectionSetNode
    ) -> IRCompoundType:
        """Build the record type for a field set selected on ``type_name``."""
        members = []
        for selection in selection_set.selections:
            field_name = selection.name.value
            field_node = self._lookup_field(type_name, field_name)
            if selection.selection_set:
                nested = self._selection_to_compound(
                    _named_type(field_node.type), selection.selection_set
                )
                members.append((field_name, self._convert_type(field_node.type, nested)))
            else:
                members.append((field_name, self._convert_type(field_node.type)))
        return IRCompoundType(members)

    def _convert_type(self, type_node: TypeNode, leaf: IRType | None = None) -> IRType:
        """Convert a graphql-core type node, optionally replacing the named leaf."""
        if isinstance(type_node, NonNullTypeNode):
            return IRNonNullType(self._convert_type(type_node.type, leaf))
        if isinstance(type_node, ListTypeNode):
            return IRListType(self._convert_type(type_node.type, leaf))
        assert isinstance(type_node, NamedTypeNode), f"Expected NamedTypeNode, got {type(type_node)}"
        return leaf if leaf is not None else IRNamedType(type_node.name.value)
