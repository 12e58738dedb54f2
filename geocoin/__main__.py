"""Entry point: ``python -m geocoin``.

Supports three modes:
  - ``python -m geocoin``            → Launch the FastAPI server
  - ``python -m geocoin scan``       → List caches around the scan anchor
  - ``python -m geocoin status``     → Print the persisted player state
"""

from __future__ import annotations

import argparse
import logging

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Deterministic location-based coin game engine")
    sub = parser.add_subparsers(dest="command")

    # --- Server mode (default) ---
    srv = sub.add_parser("serve", help="Start the FastAPI server (default)")
    srv.add_argument("--host", type=str, default="127.0.0.1")
    srv.add_argument("--port", type=int, default=8000)
    srv.add_argument("--seed", type=int, default=0)
    srv.add_argument("--store", type=str, default=None, help="JSON file for player state (default: in-memory)")
    srv.add_argument("--policy", type=str, default="regenerate", choices=["regenerate", "retain"])
    srv.add_argument("--anchor", type=str, default="origin", choices=["origin", "player"])
    srv.add_argument("--log-level", type=str, default="INFO", choices=["DEBUG", "INFO", "WARNING"])
    srv.add_argument("--log-file", type=str, default=None)

    # --- Headless region scan ---
    scan = sub.add_parser("scan", help="List caches in the scan region")
    scan.add_argument("--seed", type=int, default=0)
    scan.add_argument("--area", type=int, default=8)
    scan.add_argument("--probability", type=float, default=0.1)
    scan.add_argument("--log-level", type=str, default="WARNING", choices=["DEBUG", "INFO", "WARNING"])

    # --- Persisted player state ---
    status = sub.add_parser("status", help="Show the player state stored in a JSON file")
    status.add_argument("store", type=str)
    status.add_argument("--log-level", type=str, default="WARNING", choices=["DEBUG", "INFO", "WARNING"])

    return parser


def _run_server(args: argparse.Namespace) -> None:
    import uvicorn

    from geocoin.api.app import create_app
    from geocoin.config import GameConfig
    from geocoin.core.enums import CachePolicy, ScanAnchor

    config = GameConfig(
        world_seed=args.seed,
        storage_path=args.store,
        cache_policy=CachePolicy(args.policy),
        scan_anchor=ScanAnchor(args.anchor),
        log_level=args.log_level,
        log_file=args.log_file,
    )
    app = create_app(config)
    uvicorn.run(app, host=args.host, port=args.port, log_level=args.log_level.lower())


def _run_scan(args: argparse.Namespace) -> None:
    from geocoin.config import GameConfig
    from geocoin.core.board import Board
    from geocoin.core.models import LatLng
    from geocoin.systems.cache_factory import CacheFactory
    from geocoin.systems.rng import DeterministicRNG
    from geocoin.utils.logging import setup_logging

    config = GameConfig(
        world_seed=args.seed,
        area_size=args.area,
        cache_probability=args.probability,
        log_level=args.log_level,
    )
    setup_logging(config.log_level)
    logger.info("Scanning %dx%d cells (seed=%d)", 2 * config.area_size, 2 * config.area_size, config.world_seed)

    board = Board(config.tile_width, config.visibility_radius)
    factory = CacheFactory(config, board, DeterministicRNG(config.world_seed))
    anchor = board.cell_of(LatLng(config.origin_lat, config.origin_lng))

    spawned = factory.scan_region(anchor)
    print(f"Anchor cell {anchor.i},{anchor.j} — {len(spawned)} caches")
    for cell in spawned:
        count = factory.initial_token_count(cell)
        tokens = " ".join(str(t) for t in factory.mint_tokens(cell, count))
        print(f"  {cell.i},{cell.j}: {count} coins  {tokens}")


def _run_status(args: argparse.Namespace) -> None:
    from geocoin.storage.kv import JsonFileStore
    from geocoin.storage.persistence import PlayerStore
    from geocoin.utils.logging import setup_logging

    setup_logging(args.log_level)
    record = PlayerStore(JsonFileStore(args.store)).load()
    if record.empty:
        print(f"No player state in {args.store}")
        return
    print(f"Position:  {record.position if record.position is not None else '(default)'}")
    print(f"Coins:     {record.coin_count if record.coin_count is not None else 0}")
    inventory = record.inventory or []
    print(f"Inventory: {' '.join(str(t) for t in inventory) or '(empty)'}")
    print(f"History:   {len(record.history or [])} points")


def main() -> None:
    parser = _build_parser()
    args = parser.parse_args()

    # Default to serve mode if no subcommand given
    if args.command is None:
        args = parser.parse_args(["serve"])

    if args.command == "serve":
        _run_server(args)
    elif args.command == "scan":
        _run_scan(args)
    elif args.command == "status":
        _run_status(args)


if __name__ == "__main__":
    main()
