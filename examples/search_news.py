"""Command-line helper that runs a single news search against the configured providers."""

from __future__ import annotations

import argparse
import asyncio
import json
from typing import Sequence

from newswire.client import NewsClient
from newswire.config import load_config
from newswire.errors import NewsError


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Search news across configured providers")
    parser.add_argument("query", help="Search text")
    parser.add_argument("--provider", default=None, help="Provider name (defaults to the first configured)")
    parser.add_argument("--page", type=int, default=1)
    parser.add_argument("--limit", type=int, default=10)
    parser.add_argument(
        "--pages",
        type=int,
        default=1,
        help="Number of consecutive pages to print; later pages are served from the cache.",
    )
    return parser.parse_args(argv)


async def run(args: argparse.Namespace) -> int:
    client = NewsClient.from_settings(load_config())
    try:
        for page in range(args.page, args.page + args.pages):
            result = await client.search_news(
                args.query, provider=args.provider, page=page, limit=args.limit
            )
            print(json.dumps(result.to_dict(), ensure_ascii=False, indent=2))
            if not result.pagination.has_next_page:
                break
    except NewsError as exc:
        print(json.dumps(exc.to_dict(), indent=2))
        return 1
    finally:
        await client.aclose()
    return 0


def main(argv: Sequence[str] | None = None) -> None:
    raise SystemExit(asyncio.run(run(parse_args(argv))))


if __name__ == "__main__":  # pragma: no cover
    main()
