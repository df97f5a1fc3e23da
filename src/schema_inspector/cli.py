"""Command line interface entry point."""

from __future__ import annotations

import logging
import sys
from collections.abc import Sequence
from typing import Any

import click

from schema_inspector.configuration import (
    DEFAULT_CONFIG_FILENAME,
    ConfigurationError,
    InspectorConfiguration,
    default_option_name,
    load_configuration,
    write_placeholder_configuration,
)
from schema_inspector.model import (
    OptionsRepresentation,
    ReferenceNotFoundError,
    name_option,
)
from schema_inspector.navigation import (
    Column,
    ItemsColumn,
    OptionsColumn,
    Selection,
    build_column_data,
    collect_detail_fields,
    find_trailing_selection,
    has_schema_group_nested_items,
)

_OPTION_SELECTION_PREFIX = "@"


class CliError(Exception):
    """Custom CLI error."""


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(package_name="schema-inspector")
@click.option("--verbose", is_flag=True, default=False, help="Log debug output to stderr.")
def cli(verbose: bool) -> None:
    """Column-wise inspection of JSON Schemas."""
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            stream=sys.stderr,
            format="%(levelname)s %(name)s: %(message)s",
        )


def _parse_selections(
    ctx: click.Context, param: click.Parameter, values: Sequence[str]
) -> tuple[Selection, ...]:
    selections: list[Selection] = []
    for value in values:
        if not value.startswith(_OPTION_SELECTION_PREFIX):
            selections.append(value)
            continue
        try:
            selections.append(
                tuple(int(index) for index in value[len(_OPTION_SELECTION_PREFIX) :].split("."))
            )
        except ValueError as exc:
            raise click.BadParameter(
                f"option paths look like '@0' or '@1.0', got '{value}'", ctx=ctx, param=param
            ) from exc
    return tuple(selections)


def _config_option(function: Any) -> Any:
    return click.option(
        "--config",
        "config_path",
        required=True,
        type=click.Path(path_type=str),
        help="Path to YAML/JSON inspector configuration file",
    )(function)


def _select_option(required: bool) -> Any:
    return click.option(
        "--select",
        "selections",
        multiple=True,
        required=required,
        callback=_parse_selections,
        help="Selected property name, or '@'-prefixed option path (e.g. '@1.0'), per column",
    )


def _load_columns(config_path: str, selections: Sequence[Selection]) -> list[Column]:
    try:
        configuration = load_configuration(config_path)
        return _build_columns(configuration, selections)
    except (ConfigurationError, ReferenceNotFoundError) as exc:
        raise CliError(str(exc)) from exc


def _build_columns(
    configuration: InspectorConfiguration, selections: Sequence[Selection]
) -> list[Column]:
    return build_column_data(
        configuration.schemas,
        configuration.reference_schemas,
        selections,
        configuration.parser_config,
    )


def _format_option_path(option_indexes: Sequence[int]) -> str:
    return _OPTION_SELECTION_PREFIX + ".".join(str(index) for index in option_indexes)


def _format_value(value: Any) -> str:
    if isinstance(value, list):
        return ", ".join(_format_value(entry) for entry in value)
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _echo_column(column_index: int, column: Column) -> None:
    header = f"[{column_index + 1}]"
    if column.trailing_selection:
        header += " (trailing selection)"
    click.echo(header)
    if isinstance(column, ItemsColumn):
        for name, group in column.items.items():
            marker = ">" if name == column.selected_item else " "
            suffix = " ..." if has_schema_group_nested_items(group) else ""
            click.echo(f"  {marker} {name}{suffix}")
        return
    _echo_options(column, column.options)


def _echo_options(
    column: OptionsColumn,
    options: OptionsRepresentation,
    parent_indexes: tuple[int, ...] = (),
) -> None:
    indent = "  " * (len(parent_indexes) + 1)
    if options.group_title:
        click.echo(f"{indent}{options.group_title}")
    for index, entry in enumerate(options.options or ()):
        option_indexes = (*parent_indexes, index)
        if entry.options:
            _echo_options(column, entry, option_indexes)
            continue
        marker = ">" if option_indexes == column.selected_item else " "
        label = name_option(option_indexes, column.options, default_option_name)
        click.echo(f"{indent}{marker} {_format_option_path(option_indexes)} {label}")


@cli.command(name="generate-config")
@click.option(
    "--output",
    "output_path",
    required=False,
    default=DEFAULT_CONFIG_FILENAME,
    show_default=True,
    type=click.Path(path_type=str),
    help="Path to the YAML inspector configuration template to write",
)
def generate_config(output_path: str) -> None:
    """Generate an example YAML inspector configuration with guidance comments."""
    try:
        resolved_output = write_placeholder_configuration(output_path)
    except (FileExistsError, OSError) as exc:
        raise CliError(str(exc)) from exc
    click.echo(str(resolved_output))


@cli.command(name="columns")
@_config_option
@_select_option(required=False)
def show_columns(config_path: str, selections: tuple[Selection, ...]) -> None:
    """Print every column resulting from the given selections."""
    for column_index, column in enumerate(_load_columns(config_path, selections)):
        _echo_column(column_index, column)


@cli.command(name="details")
@_config_option
@_select_option(required=True)
def show_details(config_path: str, selections: tuple[Selection, ...]) -> None:
    """Print the schema details of the last valid selection."""
    columns = _load_columns(config_path, selections)
    trailing_selection = find_trailing_selection(columns)
    if trailing_selection is None:
        raise CliError("No valid selection to show details for.")
    try:
        fields = collect_detail_fields(
            trailing_selection.item_group, columns, trailing_selection.column_index
        )
    except ReferenceNotFoundError as exc:
        raise CliError(str(exc)) from exc
    for field in fields:
        click.echo(f"{field.label}: {_format_value(field.value)}")


@cli.command(name="options")
@_config_option
@click.option("--schema", "schema_name", required=True, help="Name of a configured root schema")
def show_options(config_path: str, schema_name: str) -> None:
    """List the selectable option paths of a root schema."""
    try:
        configuration = load_configuration(config_path)
    except ConfigurationError as exc:
        raise CliError(str(exc)) from exc
    if schema_name not in configuration.schemas:
        known_names = ", ".join(configuration.schemas)
        raise CliError(f"Unknown schema '{schema_name}' (configured: {known_names})")
    try:
        columns = _build_columns(configuration, [schema_name])
    except ReferenceNotFoundError as exc:
        raise CliError(str(exc)) from exc
    next_column = columns[-1]
    if not isinstance(next_column, OptionsColumn):
        click.echo(f"Schema '{schema_name}' offers no options.")
        return
    _echo_options(next_column, next_column.options)


def main(argv: list[str] | None = None) -> int:
    """CLI entry point for console_scripts wiring."""
    argv = argv if argv is not None else sys.argv[1:]
    try:
        cli.main(args=list(argv), standalone_mode=False)
    except CliError as exc:
        click.echo(str(exc), err=True)
        return 1
    except click.ClickException as exc:
        exc.show()
        return exc.exit_code
    except click.Abort:
        click.echo("Aborted.", err=True)
        return 1
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
