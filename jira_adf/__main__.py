"""CLI entry point for jira-adf.

Usage:
    python -m jira_adf convert notes.txt          # Print ADF JSON for a text file
    echo "- a" | python -m jira_adf convert       # Read text from stdin
    python -m jira_adf tools                      # List available Jira tools
    python -m jira_adf call add_comment --args '{"issueKey": "ABC-1", "comment": "Hi"}'

Or via the installed command:
    jira-adf convert notes.txt --compact
    jira-adf call get_jira_issue_details --args '{"projectKey": "ABC"}'
    jira-adf logs --clear
"""

from __future__ import annotations

import argparse
import json
import logging
import os
import sys
from pathlib import Path

from dotenv import load_dotenv
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from jira_adf._version import get_full_version_string
from jira_adf.adf import transpile
from jira_adf.config import ConfigError, load_config
from jira_adf.jira import JiraClient, clear_logs, get_log_directory, is_api_logging_enabled
from jira_adf.tools import call_tool, list_tools

console = Console()
err_console = Console(stderr=True)


def configure_logging() -> None:
    """Route log records through rich on stderr.

    Level comes from LOG_LEVEL (default WARNING).
    """
    level = os.environ.get("LOG_LEVEL", "WARNING").upper()
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=err_console, show_path=False)],
    )


def read_text(source: Path | None) -> str:
    """Read input text from a file, or stdin when source is None or "-"."""
    if source is None or str(source) == "-":
        return sys.stdin.read()
    return source.read_text(encoding="utf-8")


def run_convert(source: Path | None, *, compact: bool = False) -> int:
    """Print the ADF document for a text file or stdin.

    Args:
        source: Input file, or None/"-" for stdin
        compact: Emit single-line JSON

    Returns:
        Exit code (0 for success, 1 if the file cannot be read or is not UTF-8)
    """
    try:
        text = read_text(source)
    except (OSError, UnicodeDecodeError) as e:
        err_console.print(f"[red]Error:[/] Could not read {source}: {e}")
        return 1

    document = transpile(text)
    print(document.to_json(indent=None if compact else 2))
    return 0


def run_tools() -> int:
    """Print the available tools and their required arguments."""
    table = Table(title="Jira tools")
    table.add_column("Tool", style="cyan", no_wrap=True)
    table.add_column("Description")
    table.add_column("Required", style="dim")

    for tool in list_tools():
        required = ", ".join(tool["inputSchema"].get("required", []))
        table.add_row(tool["name"], tool["description"], required)

    console.print(table)
    return 0


def load_arguments(raw: str | None, args_file: Path | None) -> dict:
    """Parse tool arguments from --args or --args-file (default: empty object)."""
    if args_file is not None:
        return json.loads(args_file.read_text(encoding="utf-8"))
    if raw:
        return json.loads(raw)
    return {}


def run_call(tool_name: str, raw_args: str | None, args_file: Path | None) -> int:
    """Run a single Jira tool and print its result text.

    Returns:
        Exit code (0 for success, 1 on config, argument or tool failure)
    """
    try:
        arguments = load_arguments(raw_args, args_file)
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
        err_console.print(f"[red]Error:[/] Invalid tool arguments: {e}")
        return 1

    try:
        config = load_config()
    except ConfigError as e:
        err_console.print(f"[red]Error:[/] {e}")
        err_console.print("[dim]Set JIRA_HOST, JIRA_EMAIL and JIRA_API_TOKEN (or use a .env file)[/]")
        return 1

    with JiraClient(config) as client:
        result = call_tool(client, tool_name, arguments)

    print(result.text)
    return 1 if result.is_error else 0


def run_logs(*, clear: bool = False) -> int:
    """Show or clear captured Jira API calls."""
    log_dir = get_log_directory()
    state = "[green]enabled[/]" if is_api_logging_enabled() else "[yellow]disabled[/]"
    console.print(f"API logging: {state}")
    console.print(f"Directory: {log_dir}")

    if clear:
        count = clear_logs()
        console.print(f"[green]✓[/] Deleted {count} log files")
    elif log_dir.exists():
        console.print(f"Files: {len(list(log_dir.glob('*.json')))}")
    return 0


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the CLI.

    Args:
        argv: Command line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code
    """
    parser = argparse.ArgumentParser(
        prog="jira-adf",
        description="jira-adf - Plain text to Atlassian Document Format, and Jira issue tools",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""\
Examples:
  jira-adf convert notes.txt               Print ADF JSON for a text file
  jira-adf convert - --compact             Read stdin, print single-line JSON
  jira-adf tools                           List available Jira tools
  jira-adf call delete_jira_issue --args '{"issueKey": "ABC-1"}'
  jira-adf logs --clear                    Delete captured API calls

Environment:
  JIRA_HOST, JIRA_EMAIL, JIRA_API_TOKEN    Jira Cloud credentials (required for call)
  JIRA_ADF_LOG_API=1                       Capture API calls to ~/.jira-adf/api_logs/
  LOG_LEVEL=DEBUG                          Verbose logging
""",
    )
    parser.add_argument(
        "--version",
        "-V",
        action="store_true",
        help="Show version and exit",
    )

    subparsers = parser.add_subparsers(dest="command")

    convert_parser = subparsers.add_parser(
        "convert",
        help="Convert plain text to ADF JSON",
    )
    convert_parser.add_argument(
        "source",
        type=Path,
        nargs="?",
        default=None,
        help="Text file to convert (default: stdin)",
    )
    convert_parser.add_argument(
        "--compact",
        "-c",
        action="store_true",
        help="Print JSON on a single line",
    )

    subparsers.add_parser(
        "tools",
        help="List available Jira tools",
    )

    call_parser = subparsers.add_parser(
        "call",
        help="Run a Jira tool",
    )
    call_parser.add_argument(
        "tool",
        help="Tool name (see 'jira-adf tools')",
    )
    args_group = call_parser.add_mutually_exclusive_group()
    args_group.add_argument(
        "--args",
        "-a",
        dest="raw_args",
        default=None,
        help="Tool arguments as a JSON object",
    )
    args_group.add_argument(
        "--args-file",
        "-f",
        type=Path,
        default=None,
        help="Path to a JSON file with tool arguments",
    )

    logs_parser = subparsers.add_parser(
        "logs",
        help="Show or clear captured Jira API calls",
    )
    logs_parser.add_argument(
        "--clear",
        action="store_true",
        help="Delete all captured request/response files",
    )

    args = parser.parse_args(argv)

    if args.version:
        print(get_full_version_string())
        return 0

    if args.command is None:
        parser.error("a command is required")

    load_dotenv()
    configure_logging()

    if args.command == "convert":
        return run_convert(args.source, compact=args.compact)

    if args.command == "tools":
        return run_tools()

    if args.command == "logs":
        return run_logs(clear=args.clear)

    return run_call(args.tool, args.raw_args, args.args_file)


if __name__ == "__main__":
    sys.exit(main())
