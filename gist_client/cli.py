"""Command line interface for the gist client."""

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path

from .errors import GistClientError


def parse_filter_args(values: list[str]) -> list[dict]:
    """Turn repeated FIELD=VALUE arguments into filter mappings."""
    filters = []
    for value in values:
        name, sep, pattern = value.partition("=")
        if not sep or not name:
            raise argparse.ArgumentTypeError(f"Expected FIELD=VALUE, got {value!r}")
        filters.append({name: pattern})
    return filters


def read_files(paths: list[Path]) -> dict[str, str]:
    """Map each file name to its text."""
    return {path.name: path.read_text() for path in paths}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Read and manage GitHub gists",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--token",
        default=None,
        help="GitHub token (default: GITHUB_TOKEN from environment or .env)",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log requests to stderr",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # list subcommand
    list_parser = subparsers.add_parser(
        "list",
        help="List gists, following every page",
    )
    scope = list_parser.add_mutually_exclusive_group()
    scope.add_argument("--user", default=None, help="List a user's public gists")
    scope.add_argument("--starred", action="store_true", help="List your starred gists")
    scope.add_argument("--public", action="store_true", help="List all public gists")
    list_parser.add_argument(
        "--since",
        default=None,
        help="Only gists updated after this ISO 8601 timestamp",
    )
    list_parser.add_argument(
        "--filter",
        action="append",
        default=[],
        metavar="FIELD=VALUE",
        help="File filter (repeatable, e.g., --filter language=Python)",
    )
    list_parser.add_argument(
        "--raw-content",
        action="store_true",
        help="Fetch each file's raw content (needed for --filter content=...)",
    )

    get_parser = subparsers.add_parser("get", help="Get one gist")
    get_parser.add_argument("gist_id")
    get_parser.add_argument("--sha", default=None, help="Revision to fetch")

    for name, help_text in (("commits", "List a gist's revisions"), ("forks", "List a gist's forks")):
        sub = subparsers.add_parser(name, help=help_text)
        sub.add_argument("gist_id")

    create_parser = subparsers.add_parser("create", help="Create a gist from local files")
    create_parser.add_argument("files", nargs="+", type=Path)
    create_parser.add_argument("--description", default=None)
    create_parser.add_argument("--public", action="store_true", help="Create a public gist")

    for name, help_text in (
        ("delete", "Delete a gist"),
        ("fork", "Fork a gist"),
        ("star", "Star a gist"),
        ("unstar", "Unstar a gist"),
        ("is-starred", "Check whether a gist is starred"),
    ):
        sub = subparsers.add_parser(name, help=help_text)
        sub.add_argument("gist_id")

    return parser


def list_filters(args) -> list[dict]:
    filters = []
    if args.user:
        filters.append({"userName": args.user})
    if args.starred:
        filters.append({"starred": True})
    if args.public:
        filters.append({"public": True})
    if args.since:
        filters.append({"since": args.since})
    return filters + parse_filter_args(args.filter)


async def run(args):
    from .client import GistClient

    async with GistClient(token=args.token) as client:
        if args.command == "list":
            return await client.get_all(list_filters(args), raw_content=args.raw_content)
        if args.command == "get":
            if args.sha:
                return await client.get_revision(args.gist_id, args.sha)
            return await client.get_one_by_id(args.gist_id)
        if args.command == "commits":
            return await client.get_commits(args.gist_id)
        if args.command == "forks":
            return await client.get_forks(args.gist_id)
        if args.command == "create":
            return await client.create(args.file_contents, description=args.description, public=args.public)
        if args.command == "delete":
            return await client.delete(args.gist_id)
        if args.command == "fork":
            return await client.fork(args.gist_id)
        if args.command == "star":
            return await client.star(args.gist_id)
        if args.command == "unstar":
            return await client.unstar(args.gist_id)
        if args.command == "is-starred":
            return await client.is_starred(args.gist_id)
    raise ValueError(f"Unknown command: {args.command}")


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 0

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, stream=sys.stderr)

    try:
        # bad arguments and unreadable files fail before any request
        if args.command == "list":
            list_filters(args)
        if args.command == "create":
            args.file_contents = read_files(args.files)
        result = asyncio.run(run(args))
    except argparse.ArgumentTypeError as e:
        parser.error(str(e))
    except (GistClientError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    json.dump(result, sys.stdout, indent=2)
    sys.stdout.write("\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())
