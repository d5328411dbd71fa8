"""Command-line interface for gql-tsgen."""

from pathlib import Path

import click
import httpx
from graphql import GraphQLSyntaxError

from .core.auth import BearerAuth, HeaderAuth
from .core.fetcher import GraphQLError, ServiceSDLFetcher
from .core.hooks import FilterTypesHook, HookRunner
from .core.parser import SchemaParseError, SchemaParser
from .core.translator import TranslationError, TranslatorOptions
from .core.typescript import TypeScriptTranslator


@click.group()
@click.version_option(package_name="gql-tsgen")
def main():
    """TypeScript resolver typings for (federated) GraphQL services.

    Generate resolver declarations from GraphQL schemas.
    """
    pass


def load_options(config: str | None, internal_enum_values: bool) -> TranslatorOptions:
    """Read the options file, if any, and apply command-line overrides."""
    try:
        options = TranslatorOptions.from_file(config) if config else TranslatorOptions()
    except ValueError as e:
        raise click.BadParameter(str(e), param_hint="--config")
    if internal_enum_values:
        options = options.model_copy(
            update={"experimental_internal_enum_value_support": True}
        )
    return options


def fetch_schema_sdl(endpoint: str, headers: tuple[str, ...], bearer_token: str | None) -> str:
    try:
        auth = HeaderAuth.from_pairs(list(headers))
    except ValueError as e:
        raise click.BadParameter(str(e), param_hint="--header")
    if bearer_token:
        auth = auth.merged(BearerAuth(bearer_token))
    try:
        return ServiceSDLFetcher(endpoint, auth=auth).fetch()
    except (httpx.HTTPError, GraphQLError) as e:
        raise click.ClickException(f"Could not fetch SDL from {endpoint}: {e}")


@main.command()
@click.option(
    "--schema",
    "-s",
    type=click.Path(exists=True),
    help="Path to a GraphQL schema file or a directory of .graphql/.graphqls files.",
)
@click.option(
    "--endpoint",
    "-e",
    help="URL of a federated service to fetch SDL from via _service { sdl }.",
)
@click.option(
    "--output",
    "-o",
    required=True,
    type=click.Path(dir_okay=False),
    help="Output file for the generated declarations (e.g. src/resolvers.d.ts).",
)
@click.option(
    "--config",
    "-c",
    type=click.Path(exists=True, dir_okay=False),
    help="JSON file with translator options.",
)
@click.option(
    "--internal-enum-values",
    is_flag=True,
    help="Emit <Enum>External literal unions and leave internal enum values untyped.",
)
@click.option(
    "--exclude-prefix",
    help="Skip types whose name starts with this prefix.",
)
@click.option("--bearer-token", help="Bearer token used with --endpoint.")
@click.option(
    "--header",
    "-H",
    "headers",
    multiple=True,
    help="Extra 'Name: value' header used with --endpoint. Repeatable.",
)
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Enable verbose output.",
)
def generate(
    schema: str | None,
    endpoint: str | None,
    output: str,
    config: str | None,
    internal_enum_values: bool,
    exclude_prefix: str | None,
    bearer_token: str | None,
    headers: tuple[str, ...],
    verbose: bool,
):
    """Generate TypeScript resolver declarations.

    Examples:

        gql-tsgen generate --schema ./schema --output ./src/resolvers.d.ts

        gql-tsgen generate -s ./schema.graphql -o ./types.ts --internal-enum-values

        gql-tsgen generate -e http://localhost:4001/graphql -o ./types.ts
    """
    if bool(schema) == bool(endpoint):
        raise click.UsageError("Pass exactly one of --schema or --endpoint.")

    options = load_options(config, internal_enum_values)
    output_path = Path(output).resolve()

    if verbose:
        click.echo(f"Source: {schema or endpoint}")
        click.echo(f"Output: {output_path}")
        click.echo(f"Options: {options.model_dump(by_alias=True)}")

    click.echo("Parsing schema...")
    try:
        if schema:
            ir = SchemaParser(str(Path(schema).resolve())).parse_all()
        else:
            ir = SchemaParser.from_sdl(
                fetch_schema_sdl(endpoint, headers, bearer_token), source_name=endpoint
            )
    except (SchemaParseError, GraphQLSyntaxError) as e:
        raise click.ClickException(str(e))

    runner = HookRunner()
    if exclude_prefix:
        runner.add_pre_hook(FilterTypesHook(exclude_prefix=exclude_prefix))
    ir = runner.run_pre_hooks(ir)

    if verbose:
        click.echo(f"  Objects: {len(ir.objects)}")
        click.echo(f"  Entities: {len(ir.entities)}")
        click.echo(f"  Enums: {len(ir.enums)}")
        click.echo(f"  Scalars: {len(ir.scalars)}")

    click.echo("Generating declarations...")
    try:
        code = TypeScriptTranslator(options).generate_schema(ir)
    except TranslationError as e:
        raise click.ClickException(str(e))
    code = runner.run_post_hooks(output_path.name, code)

    output_path.parent.mkdir(parents=True, exist_ok=True)
    with open(output_path, "w") as f:
        f.write(code)

    click.echo(f"Done! Generated declarations in {output_path}")


if __name__ == "__main__":
    main()
