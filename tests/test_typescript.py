"""Unit tests for the TypeScript translator."""

import pytest

from gql_tsgen.core.ir import (
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
)
from gql_tsgen.core.translator import TranslationError, Translator, TranslatorOptions
from gql_tsgen.core.typescript import HEADER, TypeScriptTranslator


# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture
def translator():
    return TypeScriptTranslator()


@pytest.fixture
def enum_translator():
    return TypeScriptTranslator(
        TranslatorOptions(experimental_internal_enum_value_support=True)
    )


@pytest.fixture
def user_object():
    """type User { id: ID!, name: String } with a resolver for name."""
    return IRObjectDefinition(
        name="User",
        fields=[
            IRFieldDefinition("id", IRNonNullType(IRNamedType("ID"))),
            IRFieldDefinition("name", IRNamedType("String")),
        ],
        resolvers=[IRResolverDefinition("name", IRNamedType("String"), parent="User")],
    )


@pytest.fixture
def query_object():
    return IRObjectDefinition(
        name="Query",
        fields=[IRFieldDefinition("user", IRNamedType("User"))],
        resolvers=[
            IRResolverDefinition(
                "user",
                IRNamedType("User"),
                parent="Query",
                arguments=[IRArgumentDefinition("id", IRNonNullType(IRNamedType("ID")))],
                is_root_type=True,
            )
        ],
        is_root_type=True,
    )


@pytest.fixture
def product_entity():
    """An entity resolvable either by id or by (sku, region)."""
    return IREntityDefinition(
        name="Product",
        fields=[
            IRFieldDefinition("id", IRNonNullType(IRNamedType("ID"))),
            IRFieldDefinition("sku", IRNonNullType(IRNamedType("String"))),
            IRFieldDefinition("region", IRNonNullType(IRNamedType("String"))),
            IRFieldDefinition("weight", IRNamedType("Int")),
        ],
        resolvers=[
            IRResolverDefinition(
                "shippingEstimate",
                IRNamedType("Int"),
                parent="Product",
                requires=IRCompoundType([("weight", IRNamedType("Int"))]),
            ),
            IRResolverDefinition(
                "weight",
                IRNamedType("Int"),
                parent="Product",
                is_not_provided_and_external=True,
            ),
        ],
        keys=[
            IRCompoundType([("id", IRNonNullType(IRNamedType("ID")))]),
            IRCompoundType([
                ("sku", IRNonNullType(IRNamedType("String"))),
                ("region", IRNonNullType(IRNamedType("String"))),
            ]),
        ],
    )


# =============================================================================
# Tests: Types
# =============================================================================


class TestNamedType:
    """Tests for named type rendering."""

    @pytest.mark.parametrize(
        "name,expected",
        [("Int", "number"), ("Boolean", "boolean"), ("ID", "string"), ("String", "string")],
    )
    def test_builtin_scalars(self, translator, name, expected):
        assert IRNamedType(name).translate(translator, False) == expected

    def test_user_types_pass_through(self, translator):
        assert IRNamedType("Product").translate(translator, False) == "Product"
        assert IRNamedType("Float").translate(translator, False) == "Float"

    def test_nullable_by_default(self, translator):
        assert IRNamedType("Int").translate(translator) == "Nullable<number>"

    def test_nullable_wraps_non_null_form(self, translator):
        for name in ("Int", "Boolean", "ID", "String", "Color"):
            bare = IRNamedType(name).translate(translator, False)
            assert IRNamedType(name).translate(translator, True) == f"Nullable<{bare}>"


class TestNonNullType:
    """Tests for non-null wrapping."""

    def test_strips_nullable(self, translator):
        assert IRNonNullType(IRNamedType("Int")).translate(translator) == "number"

    def test_ignores_callers_flag(self, translator):
        node = IRNonNullType(IRNamedType("String"))
        assert node.translate(translator, True) == node.translate(translator, False)

    def test_double_wrap_is_idempotent(self, translator):
        once = IRNonNullType(IRNamedType("User"))
        twice = IRNonNullType(once)
        assert twice.translate(translator) == once.translate(translator) == "User"


class TestListType:
    """Tests for list rendering."""

    def test_nullable_list_of_nullable(self, translator):
        node = IRListType(IRNamedType("Int"))
        assert node.translate(translator) == "Nullable<Array<Nullable<number>>>"

    def test_nullable_list_of_non_null(self, translator):
        node = IRListType(IRNonNullType(IRNamedType("Int")))
        assert node.translate(translator) == "Nullable<Array<number>>"

    def test_non_null_list_of_nullable(self, translator):
        node = IRNonNullType(IRListType(IRNamedType("Int")))
        assert node.translate(translator) == "Array<Nullable<number>>"

    def test_element_and_container_are_independent(self, translator):
        inner_non_null = IRListType(IRNonNullType(IRNamedType("Int"))).translate(translator)
        outer_non_null = IRNonNullType(IRListType(IRNamedType("Int"))).translate(translator)
        assert inner_non_null != outer_non_null

    def test_nested_lists(self, translator):
        node = IRNonNullType(IRListType(IRNonNullType(IRListType(IRNamedType("ID")))))
        assert node.translate(translator) == "Array<Array<Nullable<string>>>"


class TestCompoundType:
    """Tests for inline record rendering."""

    def test_members_in_order(self, translator):
        node = IRCompoundType([
            ("sku", IRNonNullType(IRNamedType("String"))),
            ("region", IRNamedType("String")),
        ])
        assert node.translate(translator) == "{ sku: string, region: Nullable<string>, }"

    def test_empty(self, translator):
        assert IRCompoundType().translate(translator) == "{ }"

    def test_from_mapping(self, translator):
        node = IRCompoundType.from_mapping({"id": IRNonNullType(IRNamedType("ID"))})
        assert node.translate(translator) == "{ id: string, }"


class TestDescription:
    """Tests for description comments."""

    def test_empty_renders_nothing(self, translator):
        assert IRDescription().translate(translator) == ""
        assert IRDescription("").translate(translator) == ""

    def test_multiline_block_comment(self, translator):
        node = IRDescription("line one\nline two")
        assert node.translate(translator) == "/**\n * line one\n * line two\n */\n"


# =============================================================================
# Tests: Definitions
# =============================================================================


class TestArgumentDefinition:
    """Tests for argument rendering."""

    def test_required_argument(self, translator):
        arg = IRArgumentDefinition("id", IRNonNullType(IRNamedType("ID")))
        assert arg.translate(translator) == "id: string"

    def test_nullable_argument_is_optional_not_nullable(self, translator):
        arg = IRArgumentDefinition("limit", IRNamedType("Int"))
        assert arg.translate(translator) == "limit?: number"

    def test_nullable_list_argument(self, translator):
        arg = IRArgumentDefinition("ids", IRListType(IRNamedType("ID")))
        assert arg.translate(translator) == "ids?: Array<Nullable<string>>"

    def test_description_precedes_name(self, translator):
        arg = IRArgumentDefinition("id", IRNamedType("ID"), IRDescription("Lookup key"))
        assert arg.translate(translator) == "/**\n * Lookup key\n */\nid?: string"


class TestFieldDefinition:
    """Tests for field rendering."""

    def test_always_optional(self, translator):
        field = IRFieldDefinition("id", IRNonNullType(IRNamedType("ID")))
        assert field.translate(translator) == "id?: string"

    def test_nullable_field(self, translator):
        field = IRFieldDefinition("name", IRNamedType("String"))
        assert field.translate(translator) == "name?: Nullable<string>"


class TestResolverDefinition:
    """Tests for resolver signatures."""

    def test_plain_resolver(self, translator):
        resolver = IRResolverDefinition("name", IRNamedType("String"), parent="User")
        assert resolver.translate(translator) == (
            "name?: (parent: UserRepresentation<TInternalReps>, args: {}, "
            "context: TContext, info: any) => PromiseOrValue<Nullable<string>>"
        )

    def test_root_resolver_is_required(self, translator, query_object):
        rendered = query_object.resolvers[0].translate(translator)
        assert rendered.startswith("user: (parent: QueryRepresentation<TInternalReps>")

    def test_arguments_record(self, translator, query_object):
        rendered = query_object.resolvers[0].translate(translator)
        assert "args: {\nid: string\n}, context: TContext" in rendered

    def test_requires_intersects_parent(self, translator, product_entity):
        rendered = product_entity.resolvers[0].translate(translator)
        assert (
            "parent: ProductRepresentation<TInternalReps> & { weight: Nullable<number>, }"
            in rendered
        )

    def test_not_provided_external_is_never(self, translator, product_entity):
        rendered = product_entity.resolvers[1].translate(translator)
        assert rendered.startswith("weight: never //")
        assert "=>" not in rendered
        assert "parent:" not in rendered

    def test_missing_parent_raises(self, translator):
        resolver = IRResolverDefinition("orphan", IRNamedType("Int"), parent="")
        with pytest.raises(TranslationError, match="orphan"):
            resolver.translate(translator)


class TestObjectDefinition:
    """Tests for plain object rendering."""

    def test_representation_alias(self, translator, user_object):
        rendered = user_object.translate(translator)
        assert rendered.startswith(
            'type UserRepresentation<TInternalReps extends Record<string, any>> = '
            'Index<TInternalReps, "User", any>\n'
        )

    def test_public_interface(self, translator, user_object):
        rendered = user_object.translate(translator)
        assert "export interface User {\nid?: string\nname?: Nullable<string>\n\n}\n" in rendered

    def test_resolver_interface(self, translator, user_object):
        rendered = user_object.translate(translator)
        assert "export interface UserResolver<TContext = {}, TInternalReps = {}> {\n" in rendered
        assert "name?: (parent: UserRepresentation<TInternalReps>" in rendered
        assert rendered.endswith("\n\n}\n")

    def test_root_type_has_no_public_interface(self, translator, query_object):
        rendered = query_object.translate(translator)
        assert "export interface Query {" not in rendered
        assert "export interface QueryResolver<" in rendered

    def test_description_on_both_interfaces(self, translator):
        obj = IRObjectDefinition("Tag", description=IRDescription("A label"))
        assert obj.translate(translator).count("/**\n * A label\n */\n") == 2


class TestEntityDefinition:
    """Tests for federated entity rendering."""

    def test_representation_is_union_of_keys(self, translator, product_entity):
        rendered = product_entity.translate(translator)
        assert (
            'type ProductRepresentation<TInternalReps extends Record<string, any>> = '
            'Index<TInternalReps, "Product", {}> & '
            "({ id: string, } | { sku: string, region: string, })\n\n"
        ) in rendered

    def test_root_alias_intersects_fields(self, translator, product_entity):
        rendered = product_entity.translate(translator)
        assert (
            "export type Product<TInternalReps = {}> = ProductRepresentation<TInternalReps> & {\n"
            "id?: string\n"
        ) in rendered

    def test_resolve_reference_comes_first(self, translator, product_entity):
        rendered = product_entity.translate(translator)
        header = "export interface ProductResolver<TContext = {}, TInternalReps = {}> {\n"
        body = rendered.split(header, 1)[1]
        assert body.startswith("  __resolveReference?: (parent: ProductRepresentation<{")
        assert "=> PromiseOrValue<Nullable<Product>>\n" in body
        assert body.index("__resolveReference") < body.index("shippingEstimate?:")

    def test_resolve_reference_gets_no_internal_reps(self, translator, product_entity):
        rendered = product_entity.translate(translator)
        assert "__resolveReference?: (parent: ProductRepresentation<TInternalReps>" not in rendered

    def test_no_keys_raises(self, translator):
        entity = IREntityDefinition(name="Broken")
        with pytest.raises(TranslationError, match="Broken"):
            entity.translate(translator)


class TestEnumDefinition:
    """Tests for enum rendering."""

    def test_literal_union(self, translator):
        enum = IREnumDefinition("Color", ["RED", "BLUE"])
        assert enum.translate(translator) == 'export type Color = "RED" | "BLUE"\n'

    def test_internal_values(self, enum_translator):
        rendered = IREnumDefinition("Color", ["RED", "BLUE"]).translate(enum_translator)
        assert 'export type ColorExternal = "RED" | "BLUE"\n' in rendered
        assert "export type Color = any\n" in rendered
        assert 'export type Color = "RED"' not in rendered


class TestScalarDefinition:
    def test_scalar_is_any(self, translator):
        assert IRScalarDefinition("DateTime").translate(translator) == "export type DateTime = any\n"


# =============================================================================
# Tests: Full Generation
# =============================================================================


class TestGenerate:
    """Tests for the generate entry point."""

    def test_empty_schema(self, translator):
        assert translator.generate([], [], []) == (
            HEADER + "\nexport interface Resolvers<TContext = {}, TInternalReps = {}> {\n}\n"
        )

    def test_header_first(self, translator, user_object):
        assert translator.generate([user_object], [], []).startswith(HEADER)

    def test_resolvers_map(self, translator, user_object, query_object, product_entity):
        output = translator.generate(
            [query_object, user_object, product_entity],
            [IREnumDefinition("Color", ["RED"])],
            [IRScalarDefinition("DateTime")],
        )
        assert "  Query: QueryResolver<TContext, TInternalReps>\n" in output
        assert "  User?: UserResolver<TContext, TInternalReps>\n" in output
        assert "  Product?: ProductResolver<TContext, TInternalReps>\n" in output
        assert "  DateTime: any\n" in output
        assert "  Color:" not in output

    def test_root_names_required_without_flag(self, translator):
        output = translator.generate([IRObjectDefinition("Mutation")], [], [])
        assert "  Mutation: MutationResolver<TContext, TInternalReps>" in output

    def test_root_names_skip_public_interface_without_flag(self, translator):
        mutation = IRObjectDefinition(
            "Mutation", fields=[IRFieldDefinition("x", IRNamedType("Int"))]
        )
        output = translator.generate([mutation], [], [])
        assert "  Mutation: MutationResolver<TContext, TInternalReps>" in output
        assert "export interface Mutation {" not in output
        assert "export interface MutationResolver<" in output

    def test_resolvers_map_with_internal_enums(self, enum_translator):
        output = enum_translator.generate([], [IREnumDefinition("Color", ["RED"])], [])
        assert "  Color: { [external: ColorExternal]: any }\n" in output

    def test_section_order_and_spacing(self, translator, user_object):
        output = translator.generate(
            [user_object],
            [IREnumDefinition("Color", ["RED", "BLUE"]), IREnumDefinition("Size", ["S"])],
            [IRScalarDefinition("DateTime")],
        )
        user = output.index("type UserRepresentation")
        color = output.index("export type Color")
        size = output.index("export type Size")
        scalar = output.index("export type DateTime")
        assert user < color < size < scalar
        assert '\n}\n\nexport type Color = "RED" | "BLUE"\n\nexport type Size' in output
        assert output.endswith("export type DateTime = any\n")

    def test_user_example(self, translator, user_object):
        output = translator.generate([user_object], [], [])
        assert "export interface User {" in output
        assert "id?: string\n" in output
        assert "name?: Nullable<string>\n" in output
        assert "export interface UserResolver<TContext = {}, TInternalReps = {}>" in output
        assert "=> PromiseOrValue<Nullable<string>>" in output

    def test_deterministic(self, translator, user_object, query_object, product_entity):
        args = ([query_object, user_object, product_entity], [IREnumDefinition("E", ["A"])], [])
        assert translator.generate(*args) == translator.generate(*args)
        assert TypeScriptTranslator().generate(*args) == translator.generate(*args)

    def test_fails_without_partial_output(self, translator, user_object):
        with pytest.raises(TranslationError):
            translator.generate([user_object, IREntityDefinition(name="Broken")], [], [])


class TestTranslatorContract:
    """Tests for the translator base class."""

    def test_base_class_is_abstract(self):
        with pytest.raises(TypeError):
            Translator()

    def test_default_options(self, translator):
        assert translator.options.experimental_internal_enum_value_support is False

    def test_substitute_translator(self, user_object):
        class UpperCaseTranslator(TypeScriptTranslator):
            def translate_named_type(self, t, nullable):
                return t.name.upper()

        rendered = user_object.translate(UpperCaseTranslator())
        assert "id?: ID\n" in rendered
        assert "name?: STRING\n" in rendered
