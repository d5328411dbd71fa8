"""TypeScript declaration generator.

Produces resolver typings for a (possibly federated) GraphQL service:

    translator = TypeScriptTranslator()
    source = translator.generate(objects, enums, scalars)

Every generated object ``X`` gets an ``XRepresentation<TInternalReps>``
alias (the ``parent`` value its resolvers receive) and an ``XResolver``
interface. Plain objects also get an ``X`` interface; entities get an
``X`` alias built from their key sets.
"""

from collections.abc import Sequence

from . import ir
from .translator import TranslationError, Translator

HEADER = """// This is a machine generated file.
// Use "gql-tsgen generate" to regenerate.
type PromiseOrValue<T> = Promise<T> | T
type Nullable<T> = T | null | undefined
type Index<Map extends Record<string, any>, Key extends string, IfMissing> = Map[Key] extends object ? Map[Key] : IfMissing
"""

# Built-in GraphQL scalars with a native TypeScript counterpart.
BUILTIN_SCALARS = {
    "Int": "number",
    "Boolean": "boolean",
    "ID": "string",
    "String": "string",
}

NOT_RESOLVABLE_COMMENT = (
    "// non-resolvable: marked @external and not @provide'd by any fields"
)


class TypeScriptTranslator(Translator):
    """Translates IR definitions into TypeScript type declarations."""

    def generate(
        self,
        objects: Sequence[ir.IRObjectDefinition],
        enums: Sequence[ir.IREnumDefinition],
        scalars: Sequence[ir.IRScalarDefinition],
    ) -> str:
        sections = [
            self._generate_header(),
            self._generate_top_level_resolvers(
                [o.name for o in objects if o.is_root],
                [o.name for o in objects],
                [e.name for e in enums],
                [s.name for s in scalars],
            ),
        ]
        sections.extend(definition.translate(self) for definition in objects)
        sections.extend(definition.translate(self) for definition in enums)
        sections.extend(definition.translate(self) for definition in scalars)
        return "\n".join(sections)

    @staticmethod
    def _generate_header() -> str:
        return HEADER

    def _generate_top_level_resolvers(
        self, root_types: list[str], types: list[str], enums: list[str], scalars: list[str]
    ) -> str:
        """Build the ``Resolvers`` map that ties every resolver interface together."""
        lines = ["export interface Resolvers<TContext = {}, TInternalReps = {}> {"]
        for type_name in types:
            separator = ": " if type_name in root_types else "?: "
            lines.append(
                f"  {type_name}{separator}{type_name}Resolver<TContext, TInternalReps>"
            )
        for scalar in scalars:
            lines.append(f"  {scalar}: any")
        if self.options.experimental_internal_enum_value_support:
            for enum_name in enums:
                lines.append(f"  {enum_name}: {{ [external: {enum_name}External]: any }}")
        lines.append("}\n")
        return "\n".join(lines)

    # Types

    def translate_description(self, t: ir.IRDescription) -> str:
        if not t.text:
            return ""
        return "/**\n * " + "\n * ".join(t.text.split("\n")) + "\n */\n"

    def translate_named_type(self, t: ir.IRNamedType, nullable: bool) -> str:
        name = BUILTIN_SCALARS.get(t.name, t.name)
        return f"Nullable<{name}>" if nullable else name

    def translate_non_null_type(self, t: ir.IRNonNullType) -> str:
        return t.base.translate(self, False)

    def translate_list_type(self, t: ir.IRListType, nullable: bool) -> str:
        array = f"Array<{t.base.translate(self)}>"
        return f"Nullable<{array}>" if nullable else array

    def translate_compound_type(self, t: ir.IRCompoundType) -> str:
        members = "".join(f"{name}: {type_.translate(self)}, " for name, type_ in t.fields)
        return "{ " + members + "}"

    # Definitions

    def translate_argument_definition(self, t: ir.IRArgumentDefinition) -> str:
        # Nullable arguments become optional rather than Nullable<...> so that
        # destructuring defaults (`({ arg = 1 }) => ...`) type-check.
        return "".join([
            t.description.translate(self),
            t.name,
            ": " if isinstance(t.type, ir.IRNonNullType) else "?: ",
            ir.IRNonNullType(t.type).translate(self),
        ])

    def translate_resolver_definition(self, t: ir.IRResolverDefinition) -> str:
        if t.is_not_provided_and_external:
            return f"{t.name}: never {NOT_RESOLVABLE_COMMENT}"
        if not t.parent:
            raise TranslationError(f"Resolver '{t.name}' has no parent definition")

        if t.arguments:
            args_type = "{\n" + "\n".join(arg.translate(self) for arg in t.arguments) + "\n}"
        else:
            args_type = "{}"

        parent_type = f"{t.parent}Representation<TInternalReps>"
        if len(t.requires):
            parent_type += " & " + t.requires.translate(self)
        return_type = t.type.translate(self)

        return "".join([
            t.description.translate(self),
            t.name,
            ": " if t.is_root_type else "?: ",
            f"(parent: {parent_type}, args: {args_type}, context: TContext, info: any)"
            f" => PromiseOrValue<{return_type}>",
        ])

    def translate_field_definition(self, t: ir.IRFieldDefinition) -> str:
        return "".join([
            t.description.translate(self),
            t.name,
            "?: ",
            t.type.translate(self),
        ])

    def translate_object_definition(self, t: ir.IRObjectDefinition) -> str:
        parts = [
            f"type {t.name}Representation<TInternalReps extends Record<string, any>>"
            f' = Index<TInternalReps, "{t.name}", any>\n',
        ]

        # Root operation types are never built as plain values.
        if not t.is_root:
            parts.append(t.description.translate(self))
            parts.append(f"export interface {t.name} {{\n")
            parts.extend(field.translate(self) + "\n" for field in t.fields)
            parts.append("\n}\n")

        parts.append(t.description.translate(self))
        parts.append(f"export interface {t.name}Resolver<TContext = {{}}, TInternalReps = {{}}> {{\n")
        parts.extend(resolver.translate(self) + "\n" for resolver in t.resolvers)
        parts.append("\n}\n")
        return "".join(parts)

    def translate_entity_definition(self, t: ir.IREntityDefinition) -> str:
        if not t.keys:
            raise TranslationError(f"Entity '{t.name}' declares no @key field sets")

        parts = [
            # Any one complete key set is enough to identify the entity.
            f"type {t.name}Representation<TInternalReps extends Record<string, any>>"
            f' = Index<TInternalReps, "{t.name}", {{}}> & (',
            " | ".join(key.translate(self) for key in t.keys),
            ")\n\n",
            t.description.translate(self),
            f"export type {t.name}<TInternalReps = {{}}> = {t.name}Representation<TInternalReps> & {{\n",
        ]
        parts.extend(field.translate(self) + "\n" for field in t.fields)
        parts.append("\n}\n")

        parts.append(t.description.translate(self))
        parts.append(f"export interface {t.name}Resolver<TContext = {{}}, TInternalReps = {{}}> {{\n")
        parts.append(
            f"  __resolveReference?: (parent: {t.name}Representation<{{ /* internal reps are not known here */ }}>,"
            f" args: {{}}, context: TContext, info: any) => PromiseOrValue<Nullable<{t.name}>>\n"
        )
        parts.extend(resolver.translate(self) + "\n" for resolver in t.resolvers)
        parts.append("\n}\n")
        return "".join(parts)

    def translate_enum_definition(self, t: ir.IREnumDefinition) -> str:
        options = " | ".join(f'"{value}"' for value in t.values)
        if self.options.experimental_internal_enum_value_support:
            # Internal values are not checked against the external ones yet.
            return f"export type {t.name}External = {options}\nexport type {t.name} = any\n"
        return f"export type {t.name} = {options}\n"

    def translate_scalar_definition(self, t: ir.IRScalarDefinition) -> str:
        # Scalar payloads are not modelled; any value is accepted.
        return f"export type {t.name} = any\n"
