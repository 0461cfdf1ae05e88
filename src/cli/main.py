"""SaveKit CLI entry points.

This module exposes save file inspection and editing commands.
It maps argparse commands onto SDK calls.
"""

from __future__ import annotations

import argparse
import sys
from typing import Any, Sequence

from cli.run_spec_command import add_run_spec_command, run_run_spec_command
from codec.value_codec import decode_enum, decode_value, supported_value_types
from core.config import SaveKitConfig, parse_save_file_format
from core.constants import DEFAULT_ENUM_WIDTH, ENUM_WIDTH_FORMATS
from core.errors import SaveKitError
from core.types import DataType, SaveFileFormat
from core.value_parsing import format_value, parse_data_type, parse_value, value_type_names
from store.save_client import SaveKitClient, SaveSlot


def build_parser() -> argparse.ArgumentParser:
    """Build the top-level CLI parser.

    Returns:
        Configured argument parser.
    """
    parser = argparse.ArgumentParser(prog="savekit", description="Keyed binary save file CLI")
    parser.add_argument(
        "--storage-root",
        help="Override SAVEKIT_STORAGE_ROOT for this command",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)
    _add_path_command(subparsers)
    _add_put_command(subparsers)
    _add_get_command(subparsers)
    _add_delete_command(subparsers)
    _add_keys_command(subparsers)
    _add_delete_file_command(subparsers)
    add_run_spec_command(subparsers)
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Run the SaveKit CLI.

    Args:
        argv: Optional argument vector.

    Returns:
        Process exit code.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        client = _build_client(args.storage_root)
        return _dispatch(parser, client, args)
    except SaveKitError as error:
        print(f"error: {error}", file=sys.stderr)
        return 1


def _dispatch(
    parser: argparse.ArgumentParser,
    client: SaveKitClient,
    args: argparse.Namespace,
) -> int:
    if args.command == "path":
        return _run_path_command(client, args)
    if args.command == "put":
        return _run_put_command(client, args)
    if args.command == "get":
        return _run_get_command(client, args)
    if args.command == "delete":
        return _run_delete_command(client, args)
    if args.command == "keys":
        return _run_keys_command(client, args)
    if args.command == "delete-file":
        return _run_delete_file_command(client, args)
    if args.command == "run-spec":
        return run_run_spec_command(client, args)
    parser.error(f"Unsupported command: {args.command}")
    return 2


def _build_client(storage_root: str | None) -> SaveKitClient:
    """Build SDK client with optional storage-root override.

    Args:
        storage_root: Optional override path.

    Returns:
        Configured SDK client.
    """
    client = SaveKitClient(SaveKitConfig.from_env())
    if storage_root:
        return client.with_storage_root(storage_root)
    return client


def _run_path_command(client: SaveKitClient, args: argparse.Namespace) -> int:
    print(client.file_path(args.file, _parse_format(args.format)))
    return 0


def _run_put_command(client: SaveKitClient, args: argparse.Namespace) -> int:
    """Handle put command.

    Args:
        client: SDK client.
        args: Parsed CLI args.

    Returns:
        Exit code.
    """
    data_type = parse_data_type(args.type)
    value = parse_value(data_type, args.value)
    result = _slot(client, args).save(args.key, value, data_type, args.enum_width)
    if not result.succeeded:
        print(f"error: {result.status}: {result.message}", file=sys.stderr)
        return 1
    print(f"OK: {args.key} ({data_type.name}) -> {result.path}")
    return 0


def _run_get_command(client: SaveKitClient, args: argparse.Namespace) -> int:
    """Handle get command.

    Args:
        client: SDK client.
        args: Parsed CLI args.

    Returns:
        Exit code, 1 when the key is missing or the file is unreadable.
    """
    result = _slot(client, args).load_raw(args.key)
    if not result.found or result.data is None or result.data_type is None:
        label = "NOT FOUND" if result.status == "not_found" else f"error: {result.status}"
        print(f"{label}: {result.message}", file=sys.stderr)
        return 1
    if args.type and parse_data_type(args.type) != result.data_type:
        print(
            f"error: '{args.key}' is stored as {result.data_type.name}, not {args.type}",
            file=sys.stderr,
        )
        return 1
    if result.data_type == DataType.ENUM:
        print(decode_enum(result.data, args.enum_width))
    elif result.data_type in supported_value_types():
        print(format_value(decode_value(result.data_type, result.data)))
    else:
        print(result.data.hex())
    return 0


def _run_delete_command(client: SaveKitClient, args: argparse.Namespace) -> int:
    result = _slot(client, args).delete(args.key)
    if not result.succeeded:
        print(f"error: {result.status}: {result.message}", file=sys.stderr)
        return 1
    print(f"OK: {'removed' if result.removed else 'absent'} {args.key}")
    return 0


def _run_keys_command(client: SaveKitClient, args: argparse.Namespace) -> int:
    for key in _slot(client, args).keys():
        print(key)
    return 0


def _run_delete_file_command(client: SaveKitClient, args: argparse.Namespace) -> int:
    deleted = client.delete_file(args.file, _parse_format(args.format))
    print("deleted" if deleted else "missing")
    return 0


def _slot(client: SaveKitClient, args: argparse.Namespace) -> SaveSlot:
    return client.slot(args.file, _parse_format(args.format))


def _parse_format(raw_format: str | None) -> SaveFileFormat | None:
    if raw_format is None:
        return None
    return parse_save_file_format(raw_format, "--format")


def _add_file_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--file", help="Save file name without extension")
    parser.add_argument(
        "--format",
        choices=[member.value for member in SaveFileFormat],
        type=str.upper,
        help="Save file format selecting the extension",
    )


def _add_enum_width_argument(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--enum-width",
        type=int,
        default=DEFAULT_ENUM_WIDTH,
        choices=sorted(ENUM_WIDTH_FORMATS),
        help="Bit width of enum payloads",
    )


def _add_path_command(subparsers: Any) -> None:
    """Register path subcommand."""
    parser = subparsers.add_parser("path", help="Print the resolved save file path")
    _add_file_arguments(parser)


def _add_put_command(subparsers: Any) -> None:
    """Register put subcommand."""
    parser = subparsers.add_parser("put", help="Store a typed value under a key")
    parser.add_argument("key")
    parser.add_argument("value", help="Value text; vectors as x,y,z")
    parser.add_argument("--type", required=True, choices=value_type_names(), help="Value type")
    _add_enum_width_argument(parser)
    _add_file_arguments(parser)


def _add_get_command(subparsers: Any) -> None:
    """Register get subcommand."""
    parser = subparsers.add_parser("get", help="Print the value stored under a key")
    parser.add_argument("key")
    parser.add_argument("--type", choices=value_type_names(), help="Require this stored type")
    _add_enum_width_argument(parser)
    _add_file_arguments(parser)


def _add_delete_command(subparsers: Any) -> None:
    """Register delete subcommand."""
    parser = subparsers.add_parser("delete", help="Remove the record stored under a key")
    parser.add_argument("key")
    _add_file_arguments(parser)


def _add_keys_command(subparsers: Any) -> None:
    """Register keys subcommand."""
    parser = subparsers.add_parser("keys", help="List keys in file order")
    _add_file_arguments(parser)


def _add_delete_file_command(subparsers: Any) -> None:
    """Register delete-file subcommand."""
    parser = subparsers.add_parser("delete-file", help="Delete a whole save file")
    _add_file_arguments(parser)
