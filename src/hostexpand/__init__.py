# -------------------------------------
# hostexpand
# -------------------------------------
"""
Expand compact hostlist expressions into explicit host names.

    >>> from hostexpand import expand
    >>> expand("node[01-03]")
    ['node01', 'node02', 'node03']

Modules:
- hostlist: parser and cartesian expansion engine
- hostlist_state: numeric bound and default output ceiling
- config: YAML defaults for the command line
"""

from .hostlist import (
    HostlistError,
    HostlistSyntaxError,
    HostlistOverflowError,
    HostlistSizeError,
    DigitToken,
    Range,
    RangeGroup,
    Segment,
    Alternative,
    HostlistExpr,
    parse,
    count,
    expand,
    expand_expr,
)

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
    "parse",
    "count",
    "expand",
    "expand_expr",
]
