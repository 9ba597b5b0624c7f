#!/usr/bin/env python3
"""
Storefront catalog command line.

Commands:
1. serve     - run the catalog API
2. init-db   - create the catalog tables
3. show      - render a product detail page from the API
4. favorite  - toggle a product in the local favorites
5. history   - print recently viewed products and favorites
"""

import argparse
import asyncio

import uvicorn

from storefront.config import api_config, client_config
from storefront.database import get_engine, init_db
from storefront.detail import CatalogClient, Favorites, LocalStore, ProductPage, RecentlyViewed
from storefront.utils.logging import configure_uvicorn_logging, setup_logging


async def create_tables():
    """Create the catalog and recommendation tables."""
    engine = get_engine()
    await init_db(engine)
    await engine.dispose()
    print("Catalog tables ready")


async def show_product(category: str, product_id: str, base_url: str):
    """Fetch a product with its recommendations and print the detail page."""
    store = LocalStore()

    async with CatalogClient(base_url=base_url) as client:
        page = await ProductPage(client, store, category, product_id).load()

    print(f"\n{'='*50}")
    print(page.render())
    print("=" * 50)
    return page


async def toggle_favorite(category: str, product_id: str, base_url: str):
    """Toggle a product in the local favorites list."""
    store = LocalStore()

    async with CatalogClient(base_url=base_url) as client:
        page = await ProductPage(client, store, category, product_id).load()

    if page.product is None:
        print(page.render())
        return None

    saved = await page.toggle_favorite()
    print(f"{page.product.name}: {'added to' if saved else 'removed from'} favorites")
    return saved


async def print_history():
    """Print recently viewed products and favorites."""
    store = LocalStore()

    for title, items in (
        ("Recently Viewed", await RecentlyViewed(store).items()),
        ("Favorites", await Favorites(store).items()),
    ):
        print(f"\n{title} ({len(items)})")
        for item in items:
            print(f"  - [{item.category}] {item.name} (#{item.id})")


def serve(host: str, port: int):
    """Run the API with uvicorn."""
    configure_uvicorn_logging()
    uvicorn.run("storefront.api.main:app", host=host, port=port, log_config=None)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Storefront product catalog")
    sub = parser.add_subparsers(dest="command", required=True)

    serve_cmd = sub.add_parser("serve", help="Run the catalog API")
    serve_cmd.add_argument("--host", default=api_config.host)
    serve_cmd.add_argument("--port", type=int, default=api_config.port)

    sub.add_parser("init-db", help="Create the catalog tables")

    for name, help_text in (
        ("show", "Render a product detail page"),
        ("favorite", "Toggle a product in favorites"),
    ):
        cmd = sub.add_parser(name, help=help_text)
        cmd.add_argument("category")
        cmd.add_argument("product_id")
        cmd.add_argument("--api", default=client_config.base_url, help="Catalog API base URL")

    sub.add_parser("history", help="Print recently viewed products and favorites")

    return parser


def main():
    """Main entry point."""
    args = build_parser().parse_args()
    setup_logging(api_config.log_level)

    if args.command == "serve":
        serve(args.host, args.port)
    elif args.command == "init-db":
        asyncio.run(create_tables())
    elif args.command == "show":
        asyncio.run(show_product(args.category, args.product_id, args.api))
    elif args.command == "favorite":
        asyncio.run(toggle_favorite(args.category, args.product_id, args.api))
    elif args.command == "history":
        asyncio.run(print_history())


if __name__ == "__main__":
    main()
