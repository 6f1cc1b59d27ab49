# SPDX-License-Identifier: MIT

from enum import StrEnum
from pathlib import Path
from typing import Annotated, Optional

import typer

from timbers.errors import StorageError, TimbersError, UserError
from timbers.export.json import format_json, write_json_files
from timbers.export.markdown import format_markdown, write_markdown_files
from timbers.query.entry_query import is_empty_query, run_query
from timbers.terminal.context import fail, get_app_context
from timbers.terminal.parse import parse_entry_query


class ExportFormat(StrEnum):
    JSON = "json"
    MARKDOWN = "md"


def export(
    ctx: typer.Context,
    last: Annotated[
        Optional[int], typer.Option("--last", "-n", help="Last N entries")
    ] = None,
    since: Annotated[
        Optional[str],
        typer.Option("--since", help="valid inputs: 24h, 7d, 2w, 1m, YYYY-MM-DD, RFC3339"),
    ] = None,
    until: Annotated[
        Optional[str],
        typer.Option("--until", help="valid inputs: 24h, 7d, 2w, 1m, YYYY-MM-DD, RFC3339"),
    ] = None,
    tags: Annotated[
        Optional[list[str]],
        typer.Option("--tag", "-t", help="accepts multiple tag options, matches any"),
    ] = None,
    range_str: Annotated[
        Optional[str],
        typer.Option("--range", "-r", help="Entries documenting commits in A..B"),
    ] = None,
    work_item: Annotated[
        Optional[str],
        typer.Option("--work-item", "-w", help="valid input: system or system:id"),
    ] = None,
    export_format: Annotated[
        Optional[ExportFormat],
        typer.Option("--format", "-f", help="default: json to stdout, md with --out"),
    ] = None,
    out: Annotated[
        Optional[Path], typer.Option("--out", "-o", help="Output directory")
    ] = None,
) -> None:
    """
    Export entries as JSON or Markdown.
    """
    app_context = get_app_context(ctx)
    output = app_context.output

    if export_format is None:
        export_format = ExportFormat.JSON if out is None else ExportFormat.MARKDOWN

    try:
        entry_query = parse_entry_query(
            last, since, until, tags, range_str, work_item
        )
        if is_empty_query(entry_query):
            raise UserError(
                "specify --last N, --since, --until, --tag, --work-item or --range "
                "to export entries"
            )
        source = app_context.get_source() if entry_query["range"] else None
        entries = run_query(
            app_context.get_repository().list_entries(), entry_query, source
        )

        if out is None:
            if export_format == ExportFormat.JSON:
                output.console.file.write(format_json(entries) + "\n")
            else:
                output.console.file.write(
                    "\n".join(format_markdown(entry) for entry in entries)
                )
            return

        try:
            out.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise StorageError(f"failed to create directory {out}: {e}")
        if export_format == ExportFormat.JSON:
            written = write_json_files(entries, out)
        else:
            written = write_markdown_files(entries, out)
    except TimbersError as e:
        raise fail(app_context, e)

    if output.json_mode:
        output.json(
            {
                "status": "exported",
                "count": len(written),
                "files": [str(file_path) for file_path in written],
            }
        )
        return
    output.print(f"Exported {len(written)} entries to {out}")
