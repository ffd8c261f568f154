# src/bifview/cli.py
from __future__ import annotations

import argparse
from dataclasses import asdict
import sys
from typing import Sequence

from bifview.config import load_config, _get_config_path
from bifview.errors import BifviewError
from bifview.maps import get_map, canonical_names

__all__ = ["main", "build_parser"]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="bifview", description="Incremental bifurcation diagram renderer.")
    sub = parser.add_subparsers(dest="command", required=True)

    run = sub.add_parser("run", help="Open a window and animate the diagram.")
    run.add_argument("--map", dest="map_name", default=None, help="Registered map name (default from config).")
    run.add_argument("--theme", choices=("light", "dark"), default=None)
    run.add_argument("--config", default=None, help="Path to a TOML config file.")
    run.add_argument("--restart", action="store_true", default=None,
                     help="Start a new random viewport whenever a sweep completes.")
    run.add_argument("--seed", type=int, default=None)
    run.add_argument("--width", type=int, default=None)
    run.add_argument("--height", type=int, default=None)
    run.add_argument("--record", default=None, metavar="PATH",
                     help="Write the state -> raster point map to PATH when the window closes.")

    maps = sub.add_parser("maps", help="Inspect registered maps.")
    maps_sub = maps.add_subparsers(dest="maps_command", required=True)
    maps_sub.add_parser("list", help="List registered maps and their curated ranges.")

    config = sub.add_parser("config", help="Inspect configuration.")
    config_sub = config.add_subparsers(dest="config_command", required=True)
    show = config_sub.add_parser("show", help="Print the resolved configuration.")
    show.add_argument("--config", default=None, help="Path to a TOML config file.")
    config_sub.add_parser("path", help="Print the default config file location.")
    return parser


def _cmd_run(args: argparse.Namespace) -> int:
    from bifview.plot import bifurcation_animate, export

    cfg = load_config(args.config).replace(
        width=args.width,
        height=args.height,
        seed=args.seed,
        restart=args.restart,
        record_points=True if args.record else None,
    )
    anim = bifurcation_animate(args.map_name, config=cfg, scheme=args.theme)
    export.show()
    if args.record:
        path = export.save_points(anim.sink.recorder, args.record)
        print(f"Wrote {len(anim.sink.recorder)} points to {path}")
    return 0


def _cmd_maps_list(_args: argparse.Namespace) -> int:
    for name in canonical_names():
        spec = get_map(name)
        ranges = ", ".join(f"[{lo}, {hi}]" for lo, hi in spec.curated)
        aliases = f" aliases={','.join(spec.aliases)}" if spec.aliases else ""
        print(f"{spec.name}: {spec.description}{aliases}")
        print(f"    ranges: {ranges}")
    return 0


def _cmd_config_show(args: argparse.Namespace) -> int:
    cfg = load_config(args.config)
    for key, val in asdict(cfg).items():
        print(f"{key} = {val!r}")
    print(f"batch_size = {cfg.batch_size!r}")
    return 0


def _cmd_config_path(_args: argparse.Namespace) -> int:
    print(_get_config_path())
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        if args.command == "run":
            return _cmd_run(args)
        if args.command == "maps":
            return _cmd_maps_list(args)
        if args.command == "config":
            if args.config_command == "path":
                return _cmd_config_path(args)
            return _cmd_config_show(args)
    except BifviewError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
    parser.error(f"unknown command {args.command!r}")
    return 2


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
