#!/usr/bin/env python3
"""Export one game's detail page to a standalone HTML file.

Usage:
    python scripts/export_game.py <game-id>             # write exports/<game-id>.html
    python scripts/export_game.py <game-id> --force     # overwrite an existing export
    python scripts/export_game.py <game-id> --base-url http://backend:8000

Exits with status 1 when the game cannot be fetched.
"""

import argparse
import asyncio
import sys
from pathlib import Path

# ---------------------------------------------------------------------------
# Paths
# ---------------------------------------------------------------------------
_SCRIPT_DIR = Path(__file__).resolve().parent
_PROJECT_ROOT = _SCRIPT_DIR.parent
_BACKEND_DIR = _PROJECT_ROOT / "backend"
_EXPORT_DIR = _PROJECT_ROOT / "exports"


async def export_game(
    game_id: str, base_url: str | None = None, force: bool = False, client=None
) -> bool:
    """Write the detail page of *game_id*; return False when it cannot be fetched.

    *client* replaces the HistoryClient built from *base_url*.
    """
    # Add backend to sys.path so we can import app modules directly
    sys.path.insert(0, str(_BACKEND_DIR))
    from app.config import HISTORY_API_URL  # noqa: PLC0415
    from app.history import GameDetailView, ViewStatus  # noqa: PLC0415
    from app.history_api import HistoryClient  # noqa: PLC0415

    out_path = _EXPORT_DIR / f"{game_id}.html"
    if out_path.exists() and not force:
        print(f"[export] {out_path.name} already exists. Use --force to overwrite.")
        return True

    if client is None:
        client = HistoryClient(base_url=base_url or HISTORY_API_URL)
    print(f"[export] Fetching game {game_id} from {client.base_url} …")

    view = GameDetailView(game_id=game_id)
    if await view.load(client) is not ViewStatus.LOADED:
        print(f"[export] Could not fetch game {game_id}.")
        return False

    _EXPORT_DIR.mkdir(parents=True, exist_ok=True)
    out_path.write_text(view.render(), encoding="utf-8")
    print(f"[export] Saved → {out_path}")
    return True


def main() -> None:
    parser = argparse.ArgumentParser(description="Export a game's detail page to HTML.")
    parser.add_argument("game_id", help="Identifier of the game to export")
    parser.add_argument(
        "--base-url",
        help="Game backend URL (default: HISTORY_API_URL)",
        default=None,
    )
    parser.add_argument(
        "--force",
        action="store_true",
        help="Overwrite the export if it already exists.",
    )
    args = parser.parse_args()

    ok = asyncio.run(export_game(args.game_id, base_url=args.base_url, force=args.force))
    sys.exit(0 if ok else 1)


if __name__ == "__main__":
    main()
