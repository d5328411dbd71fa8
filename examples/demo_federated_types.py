#!/usr/bin/env python3
"""Demonstration of resolver typings for a federated service.

This script shows how to:
1. Parse a federated GraphQL schema
2. Inspect the entities and their key sets
3. Generate the TypeScript declarations, with and without internal enum values
"""

from gql_tsgen.core import SchemaParser, TranslatorOptions, TypeScriptTranslator

INVENTORY_SCHEMA = '''
extend type Product @key(fields: "upc") @key(fields: "sku region") {
  upc: String! @external
  sku: String! @external
  region: String! @external
  weight: Int @external
  price: Int @external
  inStock: Boolean
  shippingEstimate: Int @requires(fields: "price weight")
}

extend type Query {
  warehouseStatus(region: String!): WarehouseStatus
}

enum WarehouseStatus {
  OPEN
  CLOSED
}
'''


def main():
    print("=== Federated Resolver Typings Demo ===\n")

    print("1. Parsing the inventory service schema...")
    ir = SchemaParser.from_sdl(INVENTORY_SCHEMA, source_name="inventory.graphql")
    print(f"   {len(ir.objects)} objects, {len(ir.enums)} enums")

    print("\n2. Entities and key sets:")
    for entity in ir.entities:
        keys = " | ".join("{" + ", ".join(key.names) + "}" for key in entity.keys)
        print(f"   {entity.name}: {keys}")
        for resolver in entity.resolvers:
            if resolver.is_not_provided_and_external:
                print(f"     - {resolver.name}: external, not resolvable here")
            elif len(resolver.requires):
                print(f"     - {resolver.name}: requires {', '.join(resolver.requires.names)}")

    print("\n3. Generated declarations:\n")
    print(TypeScriptTranslator().generate_schema(ir))

    print("\n4. With internal enum values enabled, WarehouseStatus becomes:\n")
    options = TranslatorOptions(experimental_internal_enum_value_support=True)
    print(TypeScriptTranslator(options).translate_enum_definition(ir.enums[0]))

    print("=== Demo Complete ===")


if __name__ == "__main__":
    main()
