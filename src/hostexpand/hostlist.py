"""
hostlist.py

Scanner + cartesian expansion core for compact hostlist expressions.

Grammar:
  hostlist     := alternative (',' alternative)*
  alternative  := segment*
  segment      := literal bracketgroup*
  bracketgroup := '[' listexpr ']'
  listexpr     := item (',' item)*
  item         := digits ('-' digits)?

Pipeline:
  - split_hostlist(text)   -> HostlistExpr   (top-level commas, segments)
  - parse_range_list(raw)  -> [(low, high?)] (inside one [...] pair)
  - resolve_width(items)   -> int            (zero padding for the group)
  - expand_expr(expr)      -> [names]        (ordered cartesian product)

Examples:
  node[001-003]              -> node001, node002, node003
  host[6,7]-[9-11].x         -> host6-9.x, host6-10.x, ..., host7-11.x
  a,b                        -> a, b

Output order follows the input exactly; nothing is sorted or deduplicated.

Run as a module: python -m hostexpand.hostlist "node[01-03]" --expand
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from itertools import product
from typing import List, Optional, Tuple

from . import hostlist_state as state

__all__ = [
    "HostlistError",
    "HostlistSyntaxError",
    "HostlistOverflowError",
    "HostlistSizeError",
    "DigitToken",
    "Range",
    "RangeGroup",
    "Segment",
    "Alternative",
    "HostlistExpr",
    "split_hostlist",
    "parse_range_list",
    "resolve_width",
    "expand_group",
    "expand_segment",
    "expand_alternative",
    "expand_expr",
    "parse",
    "count",
    "expand",
]


# ============================================================
# Errors
# ============================================================

class HostlistError(ValueError):
    pass


class HostlistSyntaxError(HostlistError):
    pass


class HostlistOverflowError(HostlistError, OverflowError):
    pass


class HostlistSizeError(HostlistError):
    pass


# ============================================================
# Parsed structure
# ============================================================

_DIGITS = frozenset("0123456789")


@dataclass(frozen=True)
class DigitToken:
    value: int
    leading_zeros: int
    length: int

    @classmethod
    def from_text(cls, text: str, pos: int = 0) -> DigitToken:
        """
        Build a token from a run of ASCII digits.
        Raises HostlistOverflowError when the value exceeds state.MAX_VALUE;
        the check runs on the significant digits before int() is called.
        """
        significant = text.lstrip("0")
        if len(significant) > len(str(state.MAX_VALUE)) or int(significant or "0") > state.MAX_VALUE:
            raise HostlistOverflowError(
                f"number {text!r} at position {pos} exceeds maximum {state.MAX_VALUE}"
            )
        return cls(
            value=int(significant or "0"),
            leading_zeros=len(text) - len(significant),
            length=len(text),
        )


RangeItem = Tuple[DigitToken, Optional[DigitToken]]


@dataclass(frozen=True)
class Range:
    low: int
    high: int

    @classmethod
    def from_item(cls, item: RangeItem) -> Range:
        """Normalize a parsed (low, high?) item so that low <= high."""
        lo, hi = item
        if hi is None:
            return cls(lo.value, lo.value)
        return cls(min(lo.value, hi.value), max(lo.value, hi.value))

    @property
    def size(self) -> int:
        return self.high - self.low + 1


@dataclass(frozen=True)
class RangeGroup:
    ranges: Tuple[Range, ...]
    width: int

    @property
    def size(self) -> int:
        return sum(r.size for r in self.ranges)


@dataclass(frozen=True)
class Segment:
    stem: str
    groups: Tuple[RangeGroup, ...] = ()

    @property
    def size(self) -> int:
        return math.prod(g.size for g in self.groups)


@dataclass(frozen=True)
class Alternative:
    segments: Tuple[Segment, ...] = ()

    @property
    def size(self) -> int:
        return math.prod(s.size for s in self.segments)


@dataclass(frozen=True)
class HostlistExpr:
    alternatives: Tuple[Alternative, ...]

    @property
    def size(self) -> int:
        return sum(a.size for a in self.alternatives)


# ============================================================
# Stage 2: range list inside one [...] pair
# ============================================================

def _scan_digits(inner: str, i: int, offset: int) -> Tuple[DigitToken, int]:
    """Read one digits token starting at inner[i]; return (token, index past it)."""
    n = len(inner)
    j = i
    while j < n and inner[j] in _DIGITS:
        j += 1
    if j == i:
        found = repr(inner[i]) if i < n else "']'"
        raise HostlistSyntaxError(f"expected digit at position {offset + i}, found {found}")
    return DigitToken.from_text(inner[i:j], offset + i), j


def parse_range_list(inner: str, offset: int = 0) -> List[RangeItem]:
    """
    Parse the text between '[' and ']' into ordered (low, high) token pairs.
    high is None for a single number. offset is the position of inner[0]
    in the full hostlist and is only used in error messages.

      "1-3,7"  -> [(1, 3), (7, None)]
      "009-11" -> [(009, 11)]
    """
    if not inner:
        raise HostlistSyntaxError(f"empty range list at position {offset}")

    items: List[RangeItem] = []
    n = len(inner)
    i = 0
    while True:
        low, i = _scan_digits(inner, i, offset)
        high = None
        if i < n and inner[i] == "-":
            high, i = _scan_digits(inner, i + 1, offset)
        items.append((low, high))

        if i == n:
            return items
        if inner[i] != ",":
            raise HostlistSyntaxError(
                f"unexpected {inner[i]!r} at position {offset + i} in range list"
            )
        i += 1


# ============================================================
# Stage 3: padding width for a group
# ============================================================

def resolve_width(items: List[RangeItem]) -> int:
    """
    Width of the endpoint with the most leading zeros, scanning endpoints in
    parse order. Ties keep the first one seen. 0 means no padding.

      [9,009]     -> 3
      [01-0001]   -> 4
      [01-010]    -> 2   (both have one leading zero, first wins)
    """
    max_zeros = 0
    width = 0
    for low, high in items:
        for tok in (low, high):
            if tok is not None and tok.leading_zeros > max_zeros:
                max_zeros = tok.leading_zeros
                width = tok.length
    return width


def _build_group(inner: str, offset: int) -> RangeGroup:
    items = parse_range_list(inner, offset)
    return RangeGroup(
        ranges=tuple(Range.from_item(it) for it in items),
        width=resolve_width(items),
    )


# ============================================================
# Stage 1: split on top-level commas into segments
# ============================================================

def split_hostlist(hostlist: str) -> HostlistExpr:
    """
    One-pass scanner with bracket depth 0 or 1.

    At depth 0:
      ','  closes the current alternative
      '['  starts a bracket group; the literal run before it becomes the stem
           of a new segment, or the group joins the previous segment when
           nothing sits between the two groups
      ']'  is an error
    The text between '[' and ']' goes to parse_range_list verbatim.

    An alternative that starts with '[' gets an empty stem:
      "[1-2]x" -> Segment("", [1-2]), Segment("x")
    """
    alternatives: List[Alternative] = []
    segments: List[Segment] = []
    groups: List[RangeGroup] = []
    stem: Optional[str] = None  # stem of the open segment, None if no segment open
    buf: List[str] = []

    def flush_segment() -> None:
        nonlocal stem
        if stem is not None:
            segments.append(Segment(stem, tuple(groups)))
            groups.clear()
            stem = None

    def flush_alternative() -> None:
        flush_segment()
        if buf:
            segments.append(Segment("".join(buf)))
            buf.clear()
        alternatives.append(Alternative(tuple(segments)))
        segments.clear()

    i = 0
    n = len(hostlist)
    while i < n:
        ch = hostlist[i]

        if ch == ",":
            flush_alternative()
            i += 1

        elif ch == "[":
            if stem is None or buf:
                flush_segment()
                stem = "".join(buf)
                buf.clear()
            end = i + 1
            while end < n and hostlist[end] not in "[]":
                end += 1
            if end == n:
                raise HostlistSyntaxError(f"unmatched '[' at position {i} in {hostlist!r}")
            if hostlist[end] == "[":
                raise HostlistSyntaxError(f"nested '[' at position {end} in {hostlist!r}")
            groups.append(_build_group(hostlist[i + 1:end], i + 1))
            i = end + 1

        elif ch == "]":
            raise HostlistSyntaxError(f"unmatched ']' at position {i} in {hostlist!r}")

        else:
            buf.append(ch)
            i += 1

    flush_alternative()
    return HostlistExpr(tuple(alternatives))


# ============================================================
# Stage 4: cartesian expansion
# ============================================================

def expand_group(group: RangeGroup) -> List[str]:
    """All numbers of a group in list order, each padded to the group width."""
    w = group.width
    return [str(v).zfill(w) for r in group.ranges for v in range(r.low, r.high + 1)]


def _multiply(prefixes: List[str], suffixes: List[str]) -> List[str]:
    # prefix varies slowest
    return [p + s for p, s in product(prefixes, suffixes)]


def expand_segment(segment: Segment) -> List[str]:
    out = [segment.stem]
    for g in segment.groups:
        out = _multiply(out, expand_group(g))
    return out


def expand_alternative(alternative: Alternative) -> List[str]:
    out = [""]
    for seg in alternative.segments:
        out = _multiply(out, expand_segment(seg))
    return out


def expand_expr(expr: HostlistExpr) -> List[str]:
    out: List[str] = []
    for alt in expr.alternatives:
        out.extend(expand_alternative(alt))
    return out


# ============================================================
# Entry points
# ============================================================

def parse(hostlist: str) -> HostlistExpr:
    """Parse a hostlist into its structure without expanding it."""
    return split_hostlist(hostlist)


def count(hostlist: str) -> int:
    """Number of names expand() would return, computed without expanding."""
    return parse(hostlist).size


def expand(hostlist: str, *, max_size: int | None = None) -> List[str]:
    """
    Expand a hostlist into the ordered list of names it denotes.

      - parse(hostlist) -> HostlistExpr
      - refuse before expanding if the size is over the ceiling
      - expand_expr(expr)

    max_size=None uses state.MAX_SIZE; 0 disables the ceiling; negative
    values raise ValueError.
    Raises HostlistSyntaxError, HostlistOverflowError or HostlistSizeError;
    no partial result is ever returned.
    """
    if max_size is not None and max_size < 0:
        raise ValueError(f"max_size must be >= 0, got {max_size}")
    expr = parse(hostlist)
    limit = state.MAX_SIZE if max_size is None else max_size
    if limit:
        total = expr.size
        if total > limit:
            raise HostlistSizeError(
                f"{hostlist!r} expands to {total} names, more than the limit of {limit}"
            )
    return expand_expr(expr)


# ============================================================
# Selftest
# ============================================================

def _selftest() -> None:
    def eq(label: str, got, expected) -> None:
        if got != expected:
            raise AssertionError(f"{label}\n   got: {got!r}\n   exp: {expected!r}")

    def raises(label: str, text: str, exc=HostlistSyntaxError, **kw) -> None:
        try:
            got = expand(text, **kw)
        except exc:
            return
        except HostlistError as e:
            raise AssertionError(f"{label}: {text!r} raised {type(e).__name__}, expected {exc.__name__}")
        raise AssertionError(f"{label}: {text!r} expanded to {got!r}, expected {exc.__name__}")

    # --- scanner tests ---
    eq("scan literal", split_hostlist("foo"), HostlistExpr((Alternative((Segment("foo"),)),)))
    eq("scan adjacent groups", split_hostlist("a[1][2]b").alternatives[0].segments, (
        Segment("a", (RangeGroup((Range(1, 1),), 0), RangeGroup((Range(2, 2),), 0))),
        Segment("b"),
    ))
    eq("scan leading bracket stem", split_hostlist("[1-2]x").alternatives[0].segments[0].stem, "")
    eq("scan alternatives", len(split_hostlist("a,b[1,2],c").alternatives), 3)

    # --- width tests ---
    eq("width [9,009]", resolve_width(parse_range_list("9,009")), 3)
    eq("width [01-010]", resolve_width(parse_range_list("01-010")), 2)
    eq("width [1-10]", resolve_width(parse_range_list("1-10")), 0)

    # --- expansion tests ---
    eq("expand literal", expand("foo"), ["foo"])
    eq("expand range", expand("foo[1-3]"), ["foo1", "foo2", "foo3"])
    eq("expand list", expand("foo[1,2,3]"), ["foo1", "foo2", "foo3"])
    eq("expand descending", expand("hostname[7-5]"), ["hostname5", "hostname6", "hostname7"])
    eq("expand padded", expand("hostname[009-011]"), ["hostname009", "hostname010", "hostname011"])
    eq("expand cartesian", expand("hostname[6,7]-[9-11].foo.com"), [
        "hostname6-9.foo.com", "hostname6-10.foo.com", "hostname6-11.foo.com",
        "hostname7-9.foo.com", "hostname7-10.foo.com", "hostname7-11.foo.com",
    ])
    eq("expand alternatives", expand("hostname1.foo.com,hostname2.foo.com"), [
        "hostname1.foo.com", "hostname2.foo.com",
    ])
    eq("expand duplicates", expand("n[1-2],n[1-2]"), ["n1", "n2", "n1", "n2"])

    # --- errors ---
    for text in ("foo[", "foo[1-]", "foo[a]", "foo]", "foo[]", "n[[1]]", "n[1,]"):
        raises("syntax error", text)
    raises("overflow", "n[99999999999]", HostlistOverflowError)
    raises("size limit", "n[1-100]", HostlistSizeError, max_size=10)
    eq("size limit off", len(expand("n[1-100]", max_size=0)), 100)

    # --- count ---
    eq("count", count("n[1-3]x[1,5-6],y"), 10)

    print("selftest: OK")


# ============================================================
# CLI
# ============================================================

def _main(argv=None) -> int:
    import argparse
    import sys

    p = argparse.ArgumentParser(description="hostlist core (scanner + cartesian expansion).")
    p.add_argument("hostlist", nargs="?", help="Input hostlist string")
    p.add_argument("--selftest", action="store_true", help="Run selftest and exit")
    p.add_argument("--expand", action="store_true", help="Expand the hostlist and print one name per line")
    p.add_argument("--count", action="store_true", help="Print the number of names the hostlist expands to")
    p.add_argument("--limit", type=int, default=None, help="Refuse expansions with more names than this (0 = no limit)")
    args = p.parse_args(argv)

    if args.selftest:
        _selftest()
        return 0

    if args.hostlist is None:
        p.error("hostlist is required unless --selftest is given")

    try:
        if args.expand:
            for name in expand(args.hostlist, max_size=args.limit):
                print(name)
            return 0

        if args.count:
            print(count(args.hostlist))
            return 0

        expr = parse(args.hostlist)
    except ValueError as e:
        print(f"hostlist error: {e}", file=sys.stderr)
        return 2

    for ai, alt in enumerate(expr.alternatives):
        for seg in alt.segments:
            print("SEG ", ai, repr(seg.stem), [(g.width, [(r.low, r.high) for r in g.ranges]) for g in seg.groups])
    return 0


if __name__ == "__main__":
    raise SystemExit(_main())
