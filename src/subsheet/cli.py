"""Command-line interface for subscription export and import."""

import argparse
import logging
import sys

from . import auth, commands
from .errors import SubsheetError
from .logging_config import configure_logging
from .service import SubsheetService, share_message


logger = logging.getLogger(__name__)


def create_parser() -> argparse.ArgumentParser:
    """Create argument parser."""
    parser = argparse.ArgumentParser(
        description="Export YouTube subscriptions to Google Sheets and import them back"
    )
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")

    subparsers = parser.add_subparsers(dest="command", help="Command to execute")

    subparsers.add_parser("whoami", help="Show the signed-in account")
    subparsers.add_parser("count", help="Show how many channels you subscribe to")
    subparsers.add_parser("export", help="Export subscriptions to a new spreadsheet")

    copy_parser = subparsers.add_parser(
        "copy", help="Copy a spreadsheet and append your subscriptions not already in it"
    )
    copy_parser.add_argument("source", help="Source spreadsheet ID or URL")

    fetch_parser = subparsers.add_parser("fetch", help="List the channel IDs in a spreadsheet")
    fetch_parser.add_argument("sheet", help="Spreadsheet ID or URL")

    import_parser = subparsers.add_parser(
        "import", help="Subscribe to every channel listed in a spreadsheet"
    )
    import_parser.add_argument("sheet", help="Spreadsheet ID or URL")
    import_parser.add_argument(
        "-p", "--progress", action="store_true", help="Show a progress bar"
    )

    share_parser = subparsers.add_parser("share", help="Print a message to share a sheet")
    share_parser.add_argument("url", help="Spreadsheet URL")
    share_parser.add_argument("count", type=int, help="Number of subscriptions in the sheet")

    return parser


def build_command(args: argparse.Namespace, service: SubsheetService) -> commands.SubsheetCommand:
    """Create the command object for parsed arguments.

    Raises:
        ValueError: If the command is unknown
    """
    if args.command == "whoami":
        return commands.WhoAmICommand(service)
    if args.command == "count":
        return commands.CountCommand(service)
    if args.command == "export":
        return commands.ExportCommand(service)
    if args.command == "copy":
        return commands.CopyCommand(service, args.source)
    if args.command == "fetch":
        return commands.FetchCommand(service, args.sheet)
    if args.command == "import":
        return commands.ImportCommand(service, args.sheet, progress=args.progress)
    raise ValueError(f"Unknown command: {args.command}")


def main() -> int:
    """Main entry point.

    Returns:
        int: Exit code
    """
    parser = create_parser()
    try:
        args = parser.parse_args(args=None if sys.argv[1:] else ["--help"])
    except SystemExit as e:
        return 1 if e.code == 2 else e.code

    configure_logging(debug=args.debug)

    if not args.command:
        parser.print_help()
        return 1

    # Sharing text needs no API access
    if args.command == "share":
        print(share_message(args.url, args.count))
        return 0

    try:
        session = auth.build_session()
    except SubsheetError as e:
        logger.error("Command failed: %s", str(e))
        return 1

    try:
        command = build_command(args, SubsheetService(session))
        command.validate()
        if not command.run():
            logger.error("Command failed to run successfully")
            return 1
        return 0
    except (SubsheetError, ValueError) as e:
        logger.error("Command failed: %s", str(e))
        return 1


if __name__ == "__main__":
    sys.exit(main())
