# -------------------------------------
# hostlist shared state
# -------------------------------------
"""
Shared limits for the hostlist expander:
- MAX_VALUE: largest integer a bracket digit token may denote
- MAX_SIZE: default ceiling on the number of expanded names (0 = unlimited)

These are read during a call and never written by the expander itself.
"""

# ============================================================
# Numeric bound for digit tokens
# ============================================================

# 32-bit unsigned range
MAX_VALUE: int = 2**32 - 1


# ============================================================
# Output size ceiling
# ============================================================

MAX_SIZE: int = 0


def set_max_size(n: int | None) -> int:
    """
    Set the default output ceiling used by expand().

    Args:
        n: Maximum number of names. None or 0 disables the ceiling.

    Returns:
        The ceiling now in effect.
    """
    global MAX_SIZE
    n = 0 if n is None else int(n)
    if n < 0:
        raise ValueError(f"max_size must be >= 0, got {n}")
    MAX_SIZE = n
    return MAX_SIZE


def get_max_size() -> int:
    """Return the default output ceiling (0 = unlimited)."""
    return MAX_SIZE
