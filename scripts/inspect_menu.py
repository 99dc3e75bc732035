"""Inspect a stored navigation tree: outline, flattened rows and counts."""

from __future__ import annotations

import argparse
from pathlib import Path

import httpx

from navtree.outline import count_items, render_outline
from navtree.schemas import NavNode
from navtree.storage import parse_tree
from navtree.tree import flatten_tree


def main() -> None:
    parser = argparse.ArgumentParser(description="Inspect a navigation menu tree.")
    parser.add_argument("--url", help="Running editor API to query (e.g. http://127.0.0.1:8000)")
    parser.add_argument("--file", help="Local JSON file holding the stored tree")
    parser.add_argument("--show-collapsed", action="store_true", help="Expand collapsed items in the outline")
    parser.add_argument("--flat", action="store_true", help="Also print the flattened rows")
    args = parser.parse_args()

    if not args.url and not args.file:
        parser.error("Provide --url or --file")

    items = load_tree(url=args.url, file_path=args.file)

    print("Outline:")
    print(render_outline(items, show_collapsed=args.show_collapsed) or "(empty)")
    print(f"\nItems: {count_items(items)}")

    if args.flat:
        print("\nRows:")
        for row in flatten_tree(items):
            print(f"{row.index:>3} depth={row.depth} parent={row.parent_id or '-'} id={row.id}")


def load_tree(*, url: str | None, file_path: str | None) -> list[NavNode]:
    if url:
        response = httpx.get(f"{url.rstrip('/')}/api/tree", timeout=15.0)
        response.raise_for_status()
        return [NavNode.model_validate(item) for item in response.json()["items"]]

    path = Path(file_path or "")
    if not path.is_file():
        raise FileNotFoundError(f"Tree file not found: {path}")
    return parse_tree(path.read_text(encoding="utf-8"))


if __name__ == "__main__":
    main()
