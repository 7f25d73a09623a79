"""
Dilovod CLI - Opinionated command-line interface.

This layer provides the user-facing CLI commands, using the SDK layer
for all operations. It handles:
- Argument parsing
- TTY detection for human vs machine output
- Pretty formatting for human output
- JSON output for piping/automation
"""

import argparse
import json
import logging
import sys
from typing import Any

from dotenv import find_dotenv, load_dotenv

from dilovod_cli.core.client import CLIError, ValidationError
from dilovod_cli.sdk import DilovodClient

# =============================================================================
# Output Helpers
# =============================================================================


MAX_TABLE_COLUMNS = 4  # Columns shown when --fields is not given
COLUMN_WIDTH = 30


def is_tty() -> bool:
    """Check if stdout is a TTY (human) or pipe (LLM/machine)."""
    return sys.stdout.isatty()


def json_output(data: Any, pretty: bool = False) -> None:
    """Print JSON output."""
    indent = 2 if pretty or is_tty() else None
    print(json.dumps(data, indent=indent, ensure_ascii=False, default=str))


def error_output(error: CLIError) -> None:
    """Print error and exit."""
    json_output(error.to_dict())
    sys.exit(1)


def success_output(data: Any) -> None:
    """Print success output."""
    json_output(data)


def table_output(
    headers: list[str],
    rows: list[list[str]],
    widths: list[int],
) -> None:
    """Print a formatted table for human output."""
    # Header
    header_line = "  ".join(h.ljust(w) for h, w in zip(headers, widths))
    print(header_line)
    print("-" * len(header_line))

    # Rows
    for row in rows:
        print("  ".join(str(v)[:w].ljust(w) for v, w in zip(row, widths)))


def _cell(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, (dict, list)):
        return json.dumps(value, ensure_ascii=False)
    return str(value)


def read_json_arg(value: str, name: str) -> Any:
    """Parse a JSON command-line argument, or stdin when the value is '-'."""
    try:
        if value == "-":
            return json.load(sys.stdin)
        return json.loads(value)
    except json.JSONDecodeError as e:
        raise ValidationError(f"Invalid JSON in {name}: {e}")


def read_json_object_arg(value: str, name: str) -> dict[str, Any]:
    """Parse a JSON argument that must be an object."""
    data = read_json_arg(value, name)
    if not isinstance(data, dict):
        raise ValidationError(f"{name} must be a JSON object")
    return data


# =============================================================================
# CLI Commands
# =============================================================================


def cmd_get(client: DilovodClient, args: argparse.Namespace) -> None:
    """Get an object by ID."""
    try:
        success_output(client.get_object(args.object_id))
    except CLIError as e:
        error_output(e)


def cmd_list(client: DilovodClient, args: argparse.Namespace) -> None:
    """List objects of a type."""
    try:
        filter_data = read_json_object_arg(args.filter, "--filter") if args.filter else None
        fields = [f.strip() for f in args.fields.split(",") if f.strip()] if args.fields else None

        objects = client.get_objects(
            args.object_type,
            filter=filter_data,
            fields=fields,
            order_by=args.order_by or "",
            limit=args.limit or 0,
        )

        if is_tty() and isinstance(objects, list):
            if not objects:
                print("No objects found.")
                return

            columns = fields
            if not columns and isinstance(objects[0], dict):
                columns = list(objects[0])[:MAX_TABLE_COLUMNS]
            if not columns:
                json_output(objects)
                return

            table_output(
                columns,
                [[_cell(o.get(c)) if isinstance(o, dict) else "" for c in columns] for o in objects],
                [COLUMN_WIDTH] * len(columns),
            )
            print(f"\n{len(objects)} object(s)")
        else:
            success_output({"data": objects, "total_count": len(objects) if isinstance(objects, list) else None})
    except CLIError as e:
        error_output(e)


def cmd_save(client: DilovodClient, args: argparse.Namespace) -> None:
    """Create or update an object."""
    try:
        object_data = read_json_object_arg(args.data, "object data")
        success_output(client.save_object(object_data))
    except CLIError as e:
        error_output(e)


def cmd_order_create(client: DilovodClient, args: argparse.Namespace) -> None:
    """Create a sale order."""
    try:
        order_data = read_json_object_arg(args.data, "order data")
        success_output(client.sale_order_create(order_data))
    except CLIError as e:
        error_output(e)


# =============================================================================
# Main CLI
# =============================================================================


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="dilovod",
        description="Dilovod CLI - Command-line interface for the Dilovod API",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Output Modes:
  TTY (human):  Tables and indented JSON
  Pipe (LLM):   Compact JSON

Examples:
  dilovod list catalogs.goods --fields name,price --order-by "name ASC" --limit 10
  dilovod list documents.sale_order --order-by "date DESC" --limit 5 | jq '.data[].id'
  dilovod get <object_id>
  dilovod save '{"type": "catalogs.persons", "name": "New Client", "is_buyer": true}'
  dilovod order create - < order.json
""",
    )
    parser.add_argument("--api-key", help="API key (overrides DILOVOD_API_KEY)")
    parser.add_argument("--base-url", help="API base URL (overrides DILOVOD_BASE_URL)")
    parser.add_argument("--verbose", "-v", action="store_true", help="Log requests to stderr")
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # ========== Objects ==========
    get = subparsers.add_parser("get", help="Get an object by ID")
    get.add_argument("object_id", help="Object ID")
    get.set_defaults(func=cmd_get)

    lst = subparsers.add_parser("list", help="List objects of a type")
    lst.add_argument("object_type", help="Object type (e.g., catalogs.goods, documents.sale_order)")
    lst.add_argument("--filter", help="JSON object of field/value pairs to match (or - for stdin)")
    lst.add_argument("--fields", "-f", help="Comma-separated field names to return")
    lst.add_argument("--order-by", "-s", help='Sort field and direction (e.g., "name ASC")')
    lst.add_argument("--limit", "-l", type=int, help="Max results (0 = no limit)")
    lst.set_defaults(func=cmd_list)

    save = subparsers.add_parser("save", help="Create or update an object")
    save.add_argument("data", help="JSON object including 'type' (or - for stdin)")
    save.set_defaults(func=cmd_save)

    # ========== Sale Orders ==========
    order = subparsers.add_parser("order", help="Manage sale orders")
    order.set_defaults(func=lambda _c, _a: order.print_help())
    order_sub = order.add_subparsers(dest="subcommand")

    o_create = order_sub.add_parser("create", help="Create a sale order")
    o_create.add_argument("data", help="Order JSON object (or - for stdin)")
    o_create.set_defaults(func=cmd_order_create)

    return parser


def main(argv: list[str] | None = None) -> None:
    """Main CLI entry point."""
    load_dotenv(find_dotenv(usecwd=True))

    parser = create_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        sys.exit(0)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, stream=sys.stderr, format="%(levelname)s %(name)s: %(message)s")

    # Create client
    client = DilovodClient(api_key=args.api_key, base_url=args.base_url)

    # Run command (subparsers without a command of their own print help)
    args.func(client, args)


if __name__ == "__main__":
    main()
