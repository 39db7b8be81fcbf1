"""
Command-line interface for torrent-rpc.

Thin front end over TransmissionClient for poking at a daemon from a terminal.

Usage:
    torrent-rpc list
    torrent-rpc add <magnet/url/path> [--download-dir DIR] [--paused]
    torrent-rpc start <id>...
    torrent-rpc start-now <id>...
    torrent-rpc stop <id>...
    torrent-rpc set <id>... --wanted 0 2 --unwanted 1
    torrent-rpc remove <id>... [--delete-data]
"""

import argparse
import json
import sys

from .client import TransmissionClient
from .config import Config
from .errors import TransmissionError
from .logger import logger, set_verbose
from .models import (
    DEFAULT_FIELDS,
    TorrentAddRequest,
    TorrentGetRequest,
    TorrentRemoveRequest,
    TorrentSetRequest,
)


def parse_id(value):
    """Torrent ids are integers; anything else is passed through as a hash."""
    return int(value) if value.isdigit() else value


def format_bytes(size):
    """Format bytes as human-readable string."""
    if size is None:
        return "N/A"
    for unit in ['B', 'KB', 'MB', 'GB', 'TB']:
        if size < 1024:
            return f"{size:.2f} {unit}"
        size /= 1024
    return f"{size:.2f} PB"


def build_parser():
    parser = argparse.ArgumentParser(
        prog="torrent-rpc",
        description="Transmission RPC client",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s list
  %(prog)s list --ids 1 3 --json
  %(prog)s add magnet:?xt=...
  %(prog)s stop 3
  %(prog)s set 3 --wanted 1 3
  %(prog)s remove 3 --delete-data
"""
    )
    parser.add_argument("--url", default=Config.TRANSMISSION_URL, help="RPC endpoint URL")
    parser.add_argument("--timeout", type=float, default=Config.TRANSMISSION_TIMEOUT,
                        help="Deadline per call in seconds")
    parser.add_argument("-v", "--verbose", action="store_true", help="Show debug logging")

    subparsers = parser.add_subparsers(dest="command", help="Commands")

    list_parser = subparsers.add_parser("list", help="List torrents")
    list_parser.add_argument("--ids", nargs="+", type=parse_id, help="Only these torrents")
    list_parser.add_argument("--fields", nargs="+", default=DEFAULT_FIELDS, help="Fields to request")
    list_parser.add_argument("--json", action="store_true", help="Print raw JSON")

    add_parser = subparsers.add_parser("add", help="Add a torrent")
    add_parser.add_argument("filename", help="Magnet URI, URL or path of a .torrent file")
    add_parser.add_argument("--download-dir", help="Download directory on the daemon")
    add_parser.add_argument("--paused", action="store_true", default=None, help="Add without starting")

    for name, help_text in [
        ("start", "Start torrents"),
        ("start-now", "Start torrents, bypassing the queue"),
        ("stop", "Stop torrents"),
    ]:
        action_parser = subparsers.add_parser(name, help=help_text)
        action_parser.add_argument("ids", nargs="+", type=parse_id, help="Torrent ids")

    set_parser = subparsers.add_parser("set", help="Select files to download")
    set_parser.add_argument("ids", nargs="+", type=parse_id, help="Torrent ids")
    set_parser.add_argument("--wanted", nargs="+", type=int, help="File indices to download")
    set_parser.add_argument("--unwanted", nargs="+", type=int, help="File indices to skip")

    rm_parser = subparsers.add_parser("remove", help="Remove torrents")
    rm_parser.add_argument("ids", nargs="+", type=parse_id, help="Torrent ids")
    rm_parser.add_argument("--delete-data", action="store_true", help="Also delete downloaded data")

    return parser


def print_torrents(torrents):
    if not torrents:
        print("No torrents found.")
        return

    print(f"{'ID':<6} {'STATUS':<14} {'PROGRESS':<10} {'SIZE':<12} {'NAME'}")
    print("-" * 80)
    for t in torrents:
        progress = f"{t.percent_done * 100:.1f}%"
        print(f"{t.id:<6} {t.status_name:<14} {progress:<10} {format_bytes(t.total_size):<12} {t.name[:40]}")


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return

    if args.verbose:
        set_verbose()

    try:
        with TransmissionClient(url=args.url, timeout=args.timeout) as client:
            if args.command == "list":
                torrents = client.get(TorrentGetRequest(ids=args.ids, fields=args.fields))
                if args.json:
                    print(json.dumps([t.model_dump(mode="json", by_alias=True) for t in torrents], indent=2))
                else:
                    print_torrents(torrents)

            elif args.command == "add":
                request = TorrentAddRequest(
                    filename=args.filename,
                    download_dir=args.download_dir,
                    paused=args.paused,
                )
                added = client.add(request)
                print(f"Added torrent {added.id}: {added.name} ({added.hash_string})")

            elif args.command == "start":
                client.start(*args.ids)
                print("Torrents started")

            elif args.command == "start-now":
                client.start_now(*args.ids)
                print("Torrents started")

            elif args.command == "stop":
                client.stop(*args.ids)
                print("Torrents stopped")

            elif args.command == "set":
                client.set(TorrentSetRequest(
                    ids=args.ids,
                    files_wanted=args.wanted,
                    files_unwanted=args.unwanted,
                ))
                print("File selection updated")

            elif args.command == "remove":
                client.remove(TorrentRemoveRequest(ids=args.ids, delete_local_data=args.delete_data))
                print("Torrents removed")

    except TransmissionError as e:
        logger.error(f"{args.command} failed: {e}")
        print(f"Error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
