# patrol/cli.py
from __future__ import annotations
import argparse, csv, logging, os, os.path, sys, time
from dataclasses import dataclass
from typing import List, Optional, Set, Tuple

from .config import DEFAULT_P_BLOCKED, DEFAULT_SIZE, SearchConfig
from .errors import ConfigurationError, UnboundedRunError
from .grid import GridWorld
from .search import ObstructionSearch
from .simulator import VisitedPath
from .types import Position
from .viz import draw_world_png


@dataclass
class RunStats:
    path: VisitedPath
    looping: Set[Position]
    elapsed_sec: float


def analyse(world: GridWorld, config: Optional[SearchConfig] = None) -> RunStats:
    t0 = time.perf_counter()
    search = ObstructionSearch(world.grid, world.start, config)
    path = search.baseline()
    looping = search.find_cyclic_obstructions()
    return RunStats(path, looping, time.perf_counter() - t0)


def format_stats(name: str, world: GridWorld, s: RunStats) -> str:
    return (f"{name:20s} | size={world.grid.width}x{world.grid.height} | "
            f"visited={len(s.path):5d} | looping={len(s.looping):5d} | "
            f"ticks={s.path.ticks:6d} | time={s.elapsed_sec*1000:8.1f} ms")


def _load_and_analyse(path: str, config: SearchConfig) -> Optional[Tuple[GridWorld, RunStats]]:
    """Returns None after reporting a map that cannot be read or that the guard never leaves."""
    try:
        gw = GridWorld.load(path)
        return gw, analyse(gw, config)
    except ConfigurationError as e:
        print(f"error: {path}: {e}", file=sys.stderr)
    except UnboundedRunError:
        print(f"error: {path}: guard never leaves the map", file=sys.stderr)
    return None

# -------- subcommands --------

def cmd_gen(args: argparse.Namespace) -> None:
    os.makedirs(args.out, exist_ok=True)
    for i in range(args.count):
        gw = GridWorld.random(width=args.width, height=args.height, p_blocked=args.p,
                              seed=(args.seed + i) if args.seed is not None else None)
        path = os.path.join(args.out, f"map_{i:03d}.txt")
        gw.save(path)
        print("wrote", path)

def cmd_demo(args: argparse.Namespace) -> None:
    loaded = _load_and_analyse(args.map, SearchConfig(workers=args.workers))
    if loaded is None:
        raise SystemExit(2)
    gw, st = loaded
    base = os.path.splitext(os.path.basename(args.map))[0]
    print(f"Number of visited positions: {len(st.path)}")
    print(f"Number of looping obstructions: {len(st.looping)}")
    print(format_stats(base, gw, st))
    if args.out:
        out_png = os.path.join(args.out, f"{base}.png")
        draw_world_png(gw, st.path, st.looping, out_png)
        print("wrote", out_png)

def cmd_bench(args: argparse.Namespace) -> None:
    maps = sorted(p for p in os.listdir(args.mapdir) if p.endswith(".txt"))
    config = SearchConfig(workers=args.workers)
    rows = []
    for fname in maps:
        loaded = _load_and_analyse(os.path.join(args.mapdir, fname), config)
        if loaded is None:
            continue
        gw, st = loaded
        print(format_stats(fname, gw, st))
        if args.out:
            draw_world_png(gw, st.path, st.looping,
                           os.path.join(args.out, f"{os.path.splitext(fname)[0]}.png"))
        rows.append({
            "map": fname,
            "width": gw.grid.width,
            "height": gw.grid.height,
            "visited": len(st.path),
            "looping": len(st.looping),
            "ticks": st.path.ticks,
            "time_sec": round(st.elapsed_sec, 6),
        })
    if args.csv and rows:
        with open(args.csv, "w", newline="") as f:
            writer = csv.DictWriter(f, fieldnames=list(rows[0].keys()))
            writer.writeheader()
            writer.writerows(rows)
        print("wrote CSV:", args.csv)

def build_argparser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Guard patrol path and loop-trap finder")
    p.add_argument("--log-level", type=str.upper, default="WARNING",
                   choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    sub = p.add_subparsers(dest="cmd", required=True)

    g = sub.add_parser("gen", help="generate random maps")
    g.add_argument("--count", type=int, default=10)
    g.add_argument("--width", type=int, default=DEFAULT_SIZE)
    g.add_argument("--height", type=int, default=DEFAULT_SIZE)
    g.add_argument("--p", type=float, default=DEFAULT_P_BLOCKED)
    g.add_argument("--out", type=str, default="maps")
    g.add_argument("--seed", type=int, default=None)
    g.set_defaults(func=cmd_gen)

    d = sub.add_parser("demo", help="analyse one map and save a PNG")
    d.add_argument("--map", type=str, required=True)
    d.add_argument("--out", type=str, default="runs")
    d.add_argument("--workers", type=int, default=1)
    d.set_defaults(func=cmd_demo)

    b = sub.add_parser("bench", help="analyse every .txt map in a folder")
    b.add_argument("--mapdir", type=str, required=True)
    b.add_argument("--out", type=str, default="")
    b.add_argument("--csv", type=str, default="")
    b.add_argument("--workers", type=int, default=1)
    b.set_defaults(func=cmd_bench)

    return p

def main(argv: Optional[List[str]] = None):
    ap = build_argparser()
    args = ap.parse_args(argv)
    logging.basicConfig(level=args.log_level, format="%(levelname)s %(name)s: %(message)s")
    try:
        args.func(args)
    except ConfigurationError as e:
        print(f"error: {e}", file=sys.stderr)
        raise SystemExit(2)

if __name__ == "__main__":
    main()
