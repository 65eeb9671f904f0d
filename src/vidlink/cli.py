#!/usr/bin/env python3
"""
vidlink CLI - Resolve shared video pages into direct media links.

Usage:
    vidlink "https://www.facebook.com/watch/?v=VIDEO_ID"
    vidlink "https://www.facebook.com/watch/?v=VIDEO_ID" --json
    vidlink download "https://www.facebook.com/watch/?v=VIDEO_ID" -o clip.mp4
    vidlink channels
    vidlink validate-config
"""

import argparse
import asyncio
import json
import sys
from pathlib import Path

from vidlink.config.loader import get_config
from vidlink.exceptions import MediaDownloadError, ResolutionError
from vidlink.models.channel import AttemptEvent
from vidlink.utils.logging import configure_logging


def _print_event(event: AttemptEvent) -> None:
    detail = f" - {event.detail}" if event.detail else ""
    print(
        f"  [{event.index}] {event.channel:<12} {event.outcome:<15} "
        f"{event.elapsed:.1f}s{detail}",
        file=sys.stderr,
    )


def _cmd_resolve(args):
    """Handle the default resolve command."""
    from vidlink.operations.resolve import resolve_video_sync

    on_event = _print_event if args.verbose else None
    result = resolve_video_sync(args.url, on_event=on_event)

    if args.json:
        print(json.dumps(result, indent=2, ensure_ascii=False))
    elif "error" in result:
        print(f"ERROR: {result['error']}", file=sys.stderr)
    else:
        print("\n=== RESULT ===")
        print(f"Title: {result.get('title', '-')}")
        print(f"HD: {result.get('hd', '-')}")
        print(f"SD: {result.get('sd', '-')}")
        print(f"Thumbnail: {result.get('thumbnail', '-')}")

    sys.exit(1 if "error" in result else 0)


async def _resolve_and_download(args) -> Path:
    from vidlink.operations.download import download_media
    from vidlink.operations.resolve import resolve

    config = get_config()
    on_event = _print_event if args.verbose else None
    result = await resolve(args.url, config=config, on_event=on_event)
    dest = args.output or Path.cwd() / "video.mp4"
    return await download_media(
        result, dest, quality=args.quality, user_agent=config.user_agent
    )


def _cmd_download(args):
    """Handle the download subcommand."""
    try:
        path = asyncio.run(_resolve_and_download(args))
    except (ResolutionError, MediaDownloadError) as e:
        print(f"ERROR: {e.message}", file=sys.stderr)
        sys.exit(1)
    print(f"Saved: {path}")


def _cmd_channels(args):
    """Handle the channels subcommand."""
    config = get_config()
    print(f"Config source: {config.source.value}")
    if config.config_path:
        print(f"Config file: {config.config_path}")
    print(f"Attempt timeout: {config.attempt_timeout}s")
    print(f"\nChannels ({len(config.channels)}):")
    for channel in config.channels:
        print(f"  {channel.name:<12} {channel.template}")


def _cmd_validate_config(args):
    """Handle the validate-config subcommand."""
    from vidlink.config.loader import (
        _find_project_config,
        _get_user_config_path,
        _load_yaml_config,
        validate_config,
    )

    config_path = None
    yaml_config = None

    project_path = _find_project_config()
    if project_path:
        config_path = project_path
        yaml_config = _load_yaml_config(project_path)

    if yaml_config is None:
        user_path = _get_user_config_path()
        if user_path.exists():
            config_path = user_path
            yaml_config = _load_yaml_config(user_path)

    if config_path:
        print(f"Config file: {config_path}")
    else:
        print("No config file found.")
        print("  Searched: .vidlink/config.yaml (project)")
        print(f"  Searched: {_get_user_config_path()} (user)")
        print("\nUsing defaults (no validation needed).")
        sys.exit(0)

    if yaml_config is None:
        print("  Failed to parse config file.")
        sys.exit(1)

    result = validate_config(yaml_config)

    if result.errors:
        print(f"\nErrors ({len(result.errors)}):")
        for error in result.errors:
            print(f"  x {error}")

    if result.warnings:
        print(f"\nWarnings ({len(result.warnings)}):")
        for warning in result.warnings:
            print(f"  ! {warning}")

    if result.is_valid and not result.warnings:
        print("\nConfig is valid.")
    elif result.is_valid:
        print(f"\nConfig is valid with {len(result.warnings)} warning(s).")
    else:
        print(f"\nConfig is invalid: {len(result.errors)} error(s), {len(result.warnings)} warning(s).")

    sys.exit(0 if result.is_valid else 1)


COMMANDS = ("resolve", "download", "channels", "validate-config")


def _with_default_command(argv: list[str]) -> list[str]:
    """Insert "resolve" when the first positional is a URL, not a command."""
    for i, arg in enumerate(argv):
        if arg.startswith("-"):
            continue
        if arg in COMMANDS:
            return argv
        return [*argv[:i], "resolve", *argv[i:]]
    return argv


def main(argv: list[str] | None = None):
    parser = argparse.ArgumentParser(
        prog="vidlink",
        description="Resolve shared video pages into direct media links",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    %(prog)s "https://www.facebook.com/watch/?v=VIDEO_ID"
    %(prog)s -v "https://www.facebook.com/watch/?v=VIDEO_ID" --json
    %(prog)s download "https://www.facebook.com/watch/?v=VIDEO_ID" -o clip.mp4
    %(prog)s download "https://www.facebook.com/watch/?v=VIDEO_ID" --quality sd
    %(prog)s channels
    %(prog)s validate-config
        """,
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true",
        help="Debug logging and per-attempt diagnostics",
    )

    subparsers = parser.add_subparsers(dest="command")

    # resolve subcommand (default when a URL is given)
    rs_parser = subparsers.add_parser("resolve", help="Resolve a page into media links")
    rs_parser.add_argument("url", help="Shared video page URL")
    rs_parser.add_argument("--json", action="store_true", help="Print the result as JSON")

    # download subcommand
    dl_parser = subparsers.add_parser(
        "download",
        help="Resolve a page and save the video file",
    )
    dl_parser.add_argument("url", help="Shared video page URL")
    dl_parser.add_argument("-o", "--output", type=Path, help="Output file (default: ./video.mp4)")
    dl_parser.add_argument(
        "--quality", choices=["hd", "sd"], default="hd",
        help="Preferred quality; falls back to the other (default: hd)",
    )

    # channels subcommand
    subparsers.add_parser("channels", help="List configured relay channels")

    # validate-config subcommand
    subparsers.add_parser("validate-config", help="Validate the resolver configuration file")

    args = parser.parse_args(_with_default_command(sys.argv[1:] if argv is None else argv))

    configure_logging(args.verbose)

    if args.command == "resolve":
        _cmd_resolve(args)
    elif args.command == "download":
        _cmd_download(args)
    elif args.command == "channels":
        _cmd_channels(args)
    elif args.command == "validate-config":
        _cmd_validate_config(args)
    else:
        parser.print_help()


if __name__ == "__main__":
    main()
