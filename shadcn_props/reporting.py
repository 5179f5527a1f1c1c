"""Console output helpers (emoji status lines, verbose debug channel)."""

import sys

_VERBOSE = False


def set_verbose(enabled: bool) -> None:
    global _VERBOSE
    _VERBOSE = bool(enabled)


def is_verbose() -> bool:
    return _VERBOSE


def step(msg: str) -> None:
    print(f"🔍 {msg}")


def ok(msg: str) -> None:
    print(f"   ✅ {msg}")


def info(msg: str) -> None:
    print(f"   ℹ️  {msg}")


def warn(msg: str) -> None:
    print(f"   ⚠️  {msg}")


def fail(msg: str) -> None:
    print(f"❌ {msg}", file=sys.stderr)


def debug(area: str, msg: str) -> None:
    """Only printed in verbose mode, on stderr."""
    if _VERBOSE:
        print(f"   [debug:{area}] {msg}", file=sys.stderr)
