"""Shared run-spec execution engine for CLI and SDK workflows.

This module maps validated run-spec steps to client operations so different
entry points can execute one declarative batch without drift.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Protocol, cast

from core.config import parse_save_file_format
from core.constants import DEFAULT_ENUM_WIDTH
from core.errors import (
    SaveKitCodecError,
    SaveKitConfigError,
    SaveKitRunSpecError,
    SaveKitStoreError,
)
from core.run_spec import RunSpec, RunSpecStep, int_field, load_run_spec, string_field
from core.types import SaveFileFormat
from core.value_parsing import format_value, parse_data_type, parse_value


class RunSpecClient(Protocol):
    """Client API contract required by run-spec execution."""

    def with_storage_root(self, storage_root: str) -> Any: ...

    def slot(
        self,
        file_name: str | None = None,
        file_format: SaveFileFormat | None = None,
    ) -> Any: ...

    def delete_file(
        self,
        file_name: str | None = None,
        file_format: SaveFileFormat | None = None,
    ) -> bool: ...


@dataclass(frozen=True)
class RunSpecExecutionContext:
    """In-memory context used to execute run-spec steps."""

    client: RunSpecClient
    default_file_name: str | None
    default_file_format: str | None


def execute_run_spec_file(client: RunSpecClient, spec_file: str) -> tuple[str, ...]:
    """Load and execute a run-spec file, returning printable output lines."""
    spec = load_run_spec(spec_file)
    return execute_run_spec(client, spec)


def execute_run_spec(client: RunSpecClient, spec: RunSpec) -> tuple[str, ...]:
    """Execute a parsed run-spec object and return output lines.

    Execution stops at the first failing step.

    Raises:
        SaveKitRunSpecError: If a step is invalid or its store operation fails.
    """
    execution_client = (
        client.with_storage_root(spec.defaults.storage_root)
        if spec.defaults.storage_root
        else client
    )
    context = RunSpecExecutionContext(
        client=execution_client,
        default_file_name=spec.defaults.file_name,
        default_file_format=spec.defaults.file_format,
    )
    output_lines: list[str] = []
    for index, step in enumerate(spec.steps):
        try:
            output_lines.extend(_execute_step(context, step))
        except (SaveKitCodecError, SaveKitConfigError, SaveKitStoreError) as error:
            raise SaveKitRunSpecError(
                f"Run spec step #{index + 1} ({step.command}) failed: {error}"
            ) from error
    return tuple(output_lines)


def _execute_step(context: RunSpecExecutionContext, step: RunSpecStep) -> tuple[str, ...]:
    if step.command == "put":
        return (_execute_put_step(context, step),)
    if step.command == "get":
        return (_execute_get_step(context, step),)
    if step.command == "delete":
        return (_execute_delete_step(context, step),)
    if step.command == "keys":
        return _resolve_slot(context, step).keys()
    if step.command == "delete-file":
        return (_execute_delete_file_step(context, step),)
    raise SaveKitRunSpecError(f"Unsupported run-spec command '{step.command}'.")


def _execute_put_step(context: RunSpecExecutionContext, step: RunSpecStep) -> str:
    key = _required_string(step.args, "key")
    data_type = parse_data_type(_required_string(step.args, "type"))
    if "value" not in step.args:
        raise SaveKitRunSpecError("Run spec step is missing required field 'value'.")
    value = parse_value(data_type, step.args["value"])
    result = _resolve_slot(context, step).save(key, value, data_type, _enum_width(step))
    if not result.succeeded:
        raise SaveKitStoreError(f"put '{key}' returned {result.status}: {result.message}")
    return f"put {key}: ok"


def _execute_get_step(context: RunSpecExecutionContext, step: RunSpecStep) -> str:
    key = _required_string(step.args, "key")
    raw_type = string_field(step.args, "type")
    expected_type = parse_data_type(raw_type) if raw_type else None
    value = _resolve_slot(context, step).load(key, expected_type, _enum_width(step))
    if value is None:
        return f"{key}: not found"
    return f"{key}={format_value(value)}"


def _execute_delete_step(context: RunSpecExecutionContext, step: RunSpecStep) -> str:
    key = _required_string(step.args, "key")
    result = _resolve_slot(context, step).delete(key)
    if not result.succeeded:
        raise SaveKitStoreError(f"delete '{key}' returned {result.status}: {result.message}")
    return f"delete {key}: {'removed' if result.removed else 'absent'}"


def _execute_delete_file_step(context: RunSpecExecutionContext, step: RunSpecStep) -> str:
    file_name, file_format = _resolve_file(context, step)
    deleted = context.client.delete_file(file_name, file_format)
    return f"delete-file {file_name or 'default'}: {'deleted' if deleted else 'missing'}"


def _resolve_slot(context: RunSpecExecutionContext, step: RunSpecStep) -> Any:
    file_name, file_format = _resolve_file(context, step)
    return context.client.slot(file_name, file_format)


def _resolve_file(
    context: RunSpecExecutionContext,
    step: RunSpecStep,
) -> tuple[str | None, SaveFileFormat | None]:
    file_name = string_field(step.args, "file") or context.default_file_name
    raw_format = string_field(step.args, "format") or context.default_file_format
    file_format = parse_save_file_format(raw_format, "run spec format") if raw_format else None
    return file_name, file_format


def _required_string(args: Mapping[str, object], field_name: str) -> str:
    return cast(str, string_field(args, field_name, required=True))


def _enum_width(step: RunSpecStep) -> int:
    width = int_field(step.args, "enum_width")
    return DEFAULT_ENUM_WIDTH if width is None else width
