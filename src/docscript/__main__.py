"""CLI entry point for docscript.

Usage:
    python -m docscript compile <document_id_or_url | document.json> [--output FILE]
    python -m docscript replicate <document_id_or_url> [--title TITLE]
"""

from __future__ import annotations

import argparse
import asyncio
import json
import re
import sys
from pathlib import Path
from typing import Any

from docscript.client import ReplicateClient
from docscript.compiler import CompileResult, compile_document
from docscript.config import Settings, get_settings
from docscript.logging import configure_logging
from docscript.transport import GoogleDocsTransport


def parse_document_id(id_or_url: str) -> str:
    """Extract document ID from a URL or return as-is if already an ID."""
    url_pattern = r"docs\.google\.com/document/d/([a-zA-Z0-9_-]+)"
    match = re.search(url_pattern, id_or_url)
    if match:
        return match.group(1)
    return id_or_url


def _is_local_document(source: str) -> bool:
    return source.endswith(".json") and Path(source).is_file()


def _create_transport(settings: Settings) -> GoogleDocsTransport:
    if not settings.access_token:
        raise ValueError("DOCSCRIPT_ACCESS_TOKEN is not set")
    return GoogleDocsTransport(
        access_token=settings.access_token,
        timeout=settings.timeout,
        api_base=settings.api_base,
    )


def _write_requests(requests: list[dict[str, Any]], output: str | None) -> None:
    text = json.dumps({"requests": requests}, indent=2, ensure_ascii=False)
    if output:
        Path(output).write_text(text + "\n", encoding="utf-8")
        print(f"Wrote {len(requests)} request(s) to {output}", file=sys.stderr)
    else:
        print(text)


async def cmd_compile(args: argparse.Namespace) -> int:
    """Compile a document into batchUpdate JSON (dry run)."""
    result: CompileResult
    if _is_local_document(args.document):
        try:
            raw = json.loads(Path(args.document).read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            print(f"Error: cannot read {args.document}: {e}", file=sys.stderr)
            return 1
        result = compile_document(raw, tab_id=args.tab)
    else:
        try:
            transport = _create_transport(get_settings())
        except ValueError as e:
            print(f"Error: {e}", file=sys.stderr)
            return 1
        try:
            client = ReplicateClient(transport)
            result = await client.compile(
                parse_document_id(args.document), tab_id=args.tab
            )
        except Exception as e:
            print(f"Error: {e}", file=sys.stderr)
            return 1
        finally:
            await transport.close()

    if not result.success:
        assert result.failure is not None
        print(f"Compilation failed: {result.failure.message}", file=sys.stderr)
        return 1

    _write_requests(result.unwrap(), args.output)
    return 0


async def cmd_replicate(args: argparse.Namespace) -> int:
    """Rebuild a document as a new Google Doc."""
    document_id = parse_document_id(args.document)
    try:
        transport = _create_transport(get_settings())
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(f"Replicating document: {document_id}", file=sys.stderr)

    try:
        client = ReplicateClient(transport)
        result = await client.replicate(document_id, title=args.title, tab_id=args.tab)
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    finally:
        await transport.close()

    if not result.success:
        print(f"Replicate failed: {result.message}", file=sys.stderr)
        return 1

    print(
        f"{result.message} to document {result.document_id}",
        file=sys.stderr,
    )
    print(result.document_id)
    return 0


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="docscript",
        description="Compile Google Docs into batchUpdate requests that rebuild them",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    # compile subcommand
    compile_parser = subparsers.add_parser(
        "compile",
        help="Print the requests that rebuild a document (dry run)",
    )
    compile_parser.add_argument(
        "document",
        help="Document ID, full Google Docs URL, or a documents.get JSON file",
    )
    compile_parser.add_argument(
        "-o",
        "--output",
        default=None,
        help="Write the requests to this file instead of stdout",
    )
    compile_parser.add_argument(
        "--tab",
        default=None,
        help="Tab ID to compile (defaults to the first tab)",
    )
    compile_parser.set_defaults(func=cmd_compile)

    # replicate subcommand
    replicate_parser = subparsers.add_parser(
        "replicate",
        help="Create a new Google Doc rebuilt from a document",
    )
    replicate_parser.add_argument(
        "document",
        help="Document ID or full Google Docs URL",
    )
    replicate_parser.add_argument(
        "--title",
        default=None,
        help='Title of the new document (defaults to "Copy of <title>")',
    )
    replicate_parser.add_argument(
        "--tab",
        default=None,
        help="Tab ID to replicate (defaults to the first tab)",
    )
    replicate_parser.set_defaults(func=cmd_replicate)

    return parser


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    args = build_parser().parse_args(argv)
    settings = get_settings()
    configure_logging(json_logs=settings.json_logs, log_level=settings.log_level)
    result: int = asyncio.run(args.func(args))
    return result


if __name__ == "__main__":
    sys.exit(main())
