"""Browse the remote catalog from the command line.

Usage:
    python -m catalogsync --pages 2
    python -m catalogsync --category smartphones --pages 3
    python -m catalogsync --search phone
    python -m catalogsync --list-categories
"""

import argparse
import asyncio

from catalogsync.application.engine import CatalogEngine
from catalogsync.catalog.store import CatalogState
from catalogsync.infrastructure.config import settings


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="catalogsync",
        description="Browse the remote product catalog",
    )
    parser.add_argument("--search", default="", help="Free-text search query")
    parser.add_argument("--category", default="", help="Category to filter by")
    parser.add_argument(
        "--pages",
        type=int,
        default=1,
        help="Number of pages to load (ignored for searches)",
    )
    parser.add_argument(
        "--list-categories",
        action="store_true",
        help="Print the category list and exit",
    )
    return parser


def print_listing(state: CatalogState) -> None:
    print("=" * 60)
    print(f"Mode: {state.mode}   Status: {state.status.value}   More: {state.has_more}")
    print("=" * 60)
    for product in state.items:
        print(f"  {product.id:>5}  {product.title[:40]:<40}  {product.price:>9.2f}  {product.category}")
    print()
    print(f"{len(state.items)} products")
    if state.error:
        print(f"Error: {state.error}")


async def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    args = build_parser().parse_args(argv)
    engine = CatalogEngine.from_settings(settings)

    try:
        if args.list_categories:
            for name in await engine.load_categories():
                print(name)
            return 0

        if args.category:
            engine.set_category(args.category)
        if args.search:
            engine.set_search_text(args.search)
        engine.start()
        await engine.wait_until_settled()

        for _ in range(args.pages - 1):
            if not engine.request_next_page():
                break
            await engine.wait_until_settled()

        print_listing(engine.state)
        return 1 if engine.state.error else 0
    finally:
        await engine.aclose()


def run() -> None:
    raise SystemExit(asyncio.run(main()))


if __name__ == "__main__":
    run()
