"""CLI for the dictionary archive (import, search, lookup, servers)."""

import asyncio
import json
from pathlib import Path
from typing import Annotated, Any

import typer
from loguru import logger

from lexicon_search.config import DATABASE_FILENAME, resolve_archive_dir, resolve_source_dir
from lexicon_search.core.database.schema import connect, migrate_schema
from lexicon_search.core.database.store import SqliteContentStore
from lexicon_search.core.importer.loader import import_source_dir
from lexicon_search.errors import LexiconError
from lexicon_search.logging_config import configure_logging
from lexicon_search.models.filters import VisibilityContext
from lexicon_search.models.vocabulary import MARKER_LABELS, MarkerKey
from lexicon_search.service import LexiconService

app = typer.Typer(help="Lexicon search: browse and query the dictionary archive.")

DataDirOption = Annotated[
    Path | None,
    typer.Option("--data-dir", "-d", help="Archive database directory"),
]


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    configure_logging(verbose=verbose)


@app.command(name="import")
def import_cmd(
    source_dir: Annotated[
        Path | None,
        typer.Option("--source-dir", "-s", help="Directory with .json export files"),
    ] = None,
    data_dir: DataDirOption = None,
    force: bool = typer.Option(False, "--force", "-f", help="Re-import all files"),
) -> None:
    """Import dictionary export files into the archive database."""
    src = source_dir or resolve_source_dir()
    dst = data_dir or resolve_archive_dir()

    if src is None or not src.exists():
        logger.error("Source directory not found: {}", src)
        raise typer.Exit(1)

    dst.mkdir(parents=True, exist_ok=True)
    conn = connect(dst / DATABASE_FILENAME)
    try:
        migrate_schema(conn)
        stats = import_source_dir(conn, src, force=force)
        typer.echo(
            f"Imported {stats.files_imported} files "
            f"({stats.words_imported} words), "
            f"skipped {stats.files_skipped}"
        )
    finally:
        conn.close()


def _open_db(data_dir: Path | None) -> SqliteContentStore:
    """Open the archive database, raising if it doesn't exist."""
    db_path = (data_dir or resolve_archive_dir()) / DATABASE_FILENAME
    if not db_path.exists():
        logger.error("Archive database not found: {}. Run 'import' first.", db_path)
        raise typer.Exit(1)
    conn = connect(db_path)
    migrate_schema(conn)
    return SqliteContentStore(conn)


def _run(store: SqliteContentStore, call: Any) -> dict[str, Any]:
    """Run a service coroutine, printing library errors and exiting non-zero."""
    try:
        return asyncio.run(call(LexiconService(store)))
    except LexiconError as e:
        typer.echo(f"Error: {e.message}", err=True)
        raise typer.Exit(1) from e
    finally:
        store.close()


def _marker_params(markers: list[str]) -> dict[str, str]:
    """Turn repeated ``key=value,value`` options into query parameters."""
    known = {key.value for key in MarkerKey}
    params: dict[str, str] = {}
    for item in markers:
        key, sep, values = item.partition("=")
        if not sep or key not in known:
            typer.echo(f"Invalid marker filter '{item}'. Keys: {', '.join(sorted(known))}", err=True)
            raise typer.Exit(2)
        params[key] = values
    return params


def _format_meaning(meaning: dict[str, Any]) -> str:
    parts = [f"{meaning['number']}."]
    if meaning.get("grammarCategory"):
        parts.append(meaning["grammarCategory"])
    if meaning.get("origin"):
        parts.append(f"({meaning['origin']})")
    parts.append(meaning.get("meaning") or "")
    return " ".join(parts)


@app.command()
def search(
    query: str = typer.Argument("", help="Lemma substring"),
    categories: Annotated[
        str | None, typer.Option("--category", "-c", help="Comma-separated categories")
    ] = None,
    origins: Annotated[
        str | None, typer.Option("--origin", "-o", help="Comma-separated origins")
    ] = None,
    letters: Annotated[
        str | None, typer.Option("--letter", "-l", help="Comma-separated letters")
    ] = None,
    dictionaries: Annotated[
        str | None, typer.Option("--dictionary", help="Comma-separated dictionaries")
    ] = None,
    markers: Annotated[
        list[str] | None,
        typer.Option("--marker", "-m", help="Marker filter as key=value[,value]"),
    ] = None,
    status: Annotated[
        str | None, typer.Option("--status", help="Status filter (editor mode)")
    ] = None,
    editor: bool = typer.Option(False, "--editor", "-e", help="Include unpublished entries"),
    page: int = typer.Option(1, "--page", "-p", help="Page number"),
    limit: int = typer.Option(20, "--limit", "-n", help="Results per page"),
    data_dir: DataDirOption = None,
    output_json: bool = typer.Option(False, "--json", "-j", help="Output as JSON"),
) -> None:
    """Search dictionary entries."""
    params: dict[str, str] = {"q": query, "page": str(page), "limit": str(limit)}
    for key, value in (
        ("categories", categories),
        ("origins", origins),
        ("letters", letters),
        ("dictionaries", dictionaries),
        ("status", status),
    ):
        if value is not None:
            params[key] = value
    params.update(_marker_params(markers or []))

    store = _open_db(data_dir)
    context = VisibilityContext(editor_mode=editor)
    envelope = _run(store, lambda service: service.search(params, context))
    data = envelope["data"]

    if output_json:
        typer.echo(json.dumps(data, indent=2, ensure_ascii=False))
        return

    pagination = data["pagination"]
    typer.echo(
        f"Found {pagination['total']} results "
        f"(page {pagination['page']} of {pagination['totalPages']}):\n"
    )
    for item in data["results"]:
        word = item["word"]
        typer.echo(f"  {word['lemma']}  [{item['matchType']}, {item['status']}]")
        for meaning in word["values"]:
            typer.echo(f"    {_format_meaning(meaning)[:100]}")
        typer.echo()


@app.command()
def word(
    lemma: str = typer.Argument(..., help="Exact lemma"),
    editor: bool = typer.Option(False, "--editor", "-e", help="Include unpublished entries"),
    data_dir: DataDirOption = None,
    output_json: bool = typer.Option(False, "--json", "-j", help="Output as JSON"),
) -> None:
    """Show a word with its meanings, examples and notes."""
    store = _open_db(data_dir)
    context = VisibilityContext(editor_mode=editor)
    data = _run(store, lambda service: service.get_word(lemma, context))["data"]

    if output_json:
        typer.echo(json.dumps(data, indent=2, ensure_ascii=False))
        return

    entry = data["word"]
    typer.echo(f"{entry['lemma']}  ({data['status']})")
    for meaning in entry["values"]:
        typer.echo(f"  {_format_meaning(meaning)}")
        for key in MarkerKey:
            if meaning.get(key.value):
                typer.echo(f"     {MARKER_LABELS[key]}: {meaning[key.value]}")
        for example in meaning.get("examples") or []:
            typer.echo(f"     > {example['value']}")
    for comment in data["comments"]:
        user = comment["user"]["username"] if comment["user"] else "?"
        typer.echo(f"  note by {user}: {comment['note']}")


@app.command(name="word-of-the-day")
def word_of_the_day(
    data_dir: DataDirOption = None,
    output_json: bool = typer.Option(False, "--json", "-j", help="Output as JSON"),
) -> None:
    """Show today's word of the day."""
    store = _open_db(data_dir)
    data = _run(store, lambda service: service.word_of_the_day())["data"]

    if output_json:
        typer.echo(json.dumps(data, indent=2, ensure_ascii=False))
        return

    typer.echo(f"{data['word']['lemma']}  [{data['letter']}]")
    for meaning in data["word"]["values"]:
        typer.echo(f"  {_format_meaning(meaning)}")


@app.command()
def facets(
    data_dir: DataDirOption = None,
    output_json: bool = typer.Option(False, "--json", "-j", help="Output as JSON"),
) -> None:
    """List the values available for each filter."""
    store = _open_db(data_dir)
    data = _run(store, lambda service: service.facets())["data"]

    if output_json:
        typer.echo(json.dumps(data, indent=2, ensure_ascii=False))
        return

    typer.echo(f"categories: {', '.join(data['categories'])}")
    typer.echo(f"origins: {', '.join(data['origins'])}")
    typer.echo(f"dictionaries: {', '.join(data['dictionaries'])}")
    for key in MarkerKey:
        typer.echo(f"{key.value}: {', '.join(data['markers'][key.value])}")


@app.command()
def serve() -> None:
    """Start the MCP server (stdio transport)."""
    from lexicon_search.mcp.server import run_mcp_server

    run_mcp_server()


@app.command(name="serve-http")
def serve_http(
    host: str = typer.Option("127.0.0.1", "--host", help="Bind address"),
    port: int = typer.Option(8000, "--port", help="Bind port"),
) -> None:
    """Start the HTTP API."""
    from lexicon_search.api.app import run_http_server

    run_http_server(host=host, port=port)


if __name__ == "__main__":
    app()
