# -------------------------------------
# hostexpand CLI entry point
# -------------------------------------
"""
CLI entry point for hostexpand.

Usage:
    python -m hostexpand 'node[001-004],login[1-2]'
    python -m hostexpand 'node[001-004]' --sep , --max-size 1000
    python -m hostexpand 'node[001-004]' --count
"""
import argparse
import sys

import yaml

from . import hostlist
from .config import DEFAULTS, load_config

EXIT_OK = 0
EXIT_SELFTEST = 1
EXIT_HOSTLIST = 2
EXIT_CONFIG = 3


def _format_group(group: hostlist.RangeGroup) -> str:
    items = ",".join(
        str(r.low) if r.low == r.high else f"{r.low}-{r.high}" for r in group.ranges
    )
    return f"[{items}]w{group.width}"


def _print_scan(expr: hostlist.HostlistExpr) -> None:
    for ai, alt in enumerate(expr.alternatives):
        if not alt.segments:
            print(ai, "EMPTY")
        for seg in alt.segments:
            print(ai, "SEG ", repr(seg.stem), *(_format_group(g) for g in seg.groups))


def main(argv=None) -> int:
    p = argparse.ArgumentParser(
        prog="hostexpand",
        description="Expand a hostlist expression like 'node[001-003],login1' into host names.",
    )
    p.add_argument("hostlist", nargs="?", help="Hostlist expression")
    p.add_argument("--sep", "-s", default=None, help="Separator between names (default: newline)")
    p.add_argument("--count", "-c", action="store_true", help="Print the number of names only")
    p.add_argument("--scan", action="store_true", help="Print the parsed structure instead of expanding")
    p.add_argument("--max-size", type=int, default=None, metavar="N", help="Refuse expansions with more than N names (0 = unlimited)")
    p.add_argument("--config", metavar="PATH", help="YAML file with max_size / separator defaults")
    p.add_argument("--selftest", action="store_true", help="Run selftest and exit")
    args = p.parse_args(argv)

    if args.selftest:
        try:
            hostlist._selftest()
        except AssertionError as e:
            print(f"selftest failed: {e}", file=sys.stderr)
            return EXIT_SELFTEST
        return EXIT_OK

    if args.hostlist is None:
        p.error("hostlist is required unless --selftest is given")

    if args.max_size is not None and args.max_size < 0:
        p.error("--max-size must be >= 0")

    cfg = dict(DEFAULTS)
    if args.config:
        try:
            cfg = load_config(args.config)
        except (OSError, yaml.YAMLError, ValueError) as e:
            print(f"hostexpand config error: {e}", file=sys.stderr)
            return EXIT_CONFIG

    max_size = cfg["max_size"] if args.max_size is None else args.max_size
    sep = cfg["separator"] if args.sep is None else args.sep

    try:
        if args.scan:
            _print_scan(hostlist.parse(args.hostlist))
        elif args.count:
            print(hostlist.count(args.hostlist))
        else:
            print(sep.join(hostlist.expand(args.hostlist, max_size=max_size)))
    except hostlist.HostlistError as e:
        print(f"hostexpand error: {e}", file=sys.stderr)
        return EXIT_HOSTLIST

    return EXIT_OK


if __name__ == "__main__":
    raise SystemExit(main())
