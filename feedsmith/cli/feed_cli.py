"""
Command-line interface for rendering feeds from a JSON items file.

Usage:
    python -m feedsmith.cli.feed_cli items.json --format rss
    python -m feedsmith.cli.feed_cli items.json --format atom --output feed.xml
    python -m feedsmith.cli.feed_cli items.json --limit 200 --title "Release notes"
    python -m feedsmith.cli.feed_cli --help
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional, List

from pydantic import ValidationError

from ..config import settings as default_settings
from ..feeds import FeedBuilder, FeedFormat, FeedError
from ..feeds.loader import load_items, populate


logger = logging.getLogger(__name__)


def render_file(
    items_path: str,
    format: str,
    output_file: Optional[str] = None,
    title: Optional[str] = None,
    description: Optional[str] = None,
    link: Optional[str] = None,
    limit: Optional[int] = None,
    settings=None
) -> str:
    """
    Render a feed document from a JSON items file.

    Args:
        items_path: JSON items file
        format: "rss" or "atom"
        output_file: Optional path to write the document to
        title: Channel title override
        description: Channel description override
        link: Channel link override
        limit: Enable content shortening with this character limit
        settings: Settings instance (defaults to the global settings)

    Returns:
        The rendered XML document
    """
    settings = settings or default_settings
    builder = FeedBuilder.from_settings(settings)

    if title:
        builder.title = title
    if description:
        builder.description = description
    if link:
        builder.link = link
    if limit is not None:
        builder.set_shortening(True)
        builder.set_text_limit(limit)

    populate(builder, load_items(items_path))

    # Negative TTL returns the bare document without touching the cache
    document = builder.render(format, cache_ttl=-1)

    if output_file:
        Path(output_file).write_text(document, encoding="utf-8")
        logger.info(f"Wrote {format} feed with {builder.get_entry_count()} items to {output_file}")

    return document


def build_parser() -> argparse.ArgumentParser:
    """Create the argument parser"""
    parser = argparse.ArgumentParser(
        description="Render an Atom or RSS feed from a JSON items file"
    )
    parser.add_argument("items", help="JSON file with a list of feed items")
    parser.add_argument(
        "--format",
        choices=[f.value for f in FeedFormat],
        default=FeedFormat.ATOM.value,
        help="Feed format (default: atom)"
    )
    parser.add_argument("--output", "-o", help="Write the feed to this file instead of stdout")
    parser.add_argument("--title", help="Channel title")
    parser.add_argument("--description", help="Channel description")
    parser.add_argument("--link", help="Channel link (defaults to APP_URL)")
    parser.add_argument("--limit", type=int, help="Shorten item content to this many characters")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """CLI entry point"""
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        stream=sys.stderr
    )

    try:
        document = render_file(
            items_path=args.items,
            format=args.format,
            output_file=args.output,
            title=args.title,
            description=args.description,
            link=args.link,
            limit=args.limit
        )
    except FileNotFoundError as e:
        logger.error(f"Items file not found: {e.filename}")
        return 1
    except (ValidationError, ValueError, FeedError) as e:
        logger.error(f"Cannot render feed: {e}")
        return 1

    if not args.output:
        sys.stdout.write(document)
        if not document.endswith("\n"):
            sys.stdout.write("\n")

    return 0


if __name__ == "__main__":
    sys.exit(main())
