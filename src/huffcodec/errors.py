"""Typed errors for huffcodec.

Single source of truth for exit codes lives here.

Policy:
- Errors are small and boring.
- The CLI maps errors to stable exit codes (see EXIT_* constants).
- docs/exit_codes.md is generated from this module (scripts/gen_exit_codes_md.py).
- Empty input is never an error.
"""

from __future__ import annotations

from collections.abc import Hashable
from dataclasses import dataclass

# -------------------------
# Exit codes (single source)
# -------------------------

EXIT_OK = 0
EXIT_USAGE = 2
EXIT_GENERIC = 10
EXIT_UNKNOWN_SYMBOL = 11
EXIT_MALFORMED_TREE = 12
EXIT_TRUNCATED_STREAM = 13


@dataclass(frozen=True, slots=True)
class ExitCodeInfo:
    code: int
    name: str
    description: str


EXIT_CODES: tuple[ExitCodeInfo, ...] = (
    ExitCodeInfo(EXIT_OK, "OK", "Success"),
    ExitCodeInfo(EXIT_USAGE, "USAGE", "Usage/config error (invalid args, invalid codec spec, etc.)"),
    ExitCodeInfo(EXIT_GENERIC, "GENERIC", "Generic failure (corrupt payload, unexpected error, etc.)"),
    ExitCodeInfo(EXIT_UNKNOWN_SYMBOL, "UNKNOWN_SYMBOL", "Input symbol absent from the trained code map"),
    ExitCodeInfo(EXIT_MALFORMED_TREE, "MALFORMED_TREE", "Bit stream walks into a missing child (tree/stream mismatch)"),
    ExitCodeInfo(EXIT_TRUNCATED_STREAM, "TRUNCATED_STREAM", "Bit stream ends in the middle of a code (--strict only)"),
)

_EXIT_CODE_BY_CODE: dict[int, ExitCodeInfo] = {e.code: e for e in EXIT_CODES}


def exit_code_info(code: int) -> ExitCodeInfo | None:
    return _EXIT_CODE_BY_CODE.get(int(code))


def render_exit_codes_markdown() -> str:
    """Render docs/exit_codes.md content."""
    lines: list[str] = []
    lines.append("# Exit codes\n")
    lines.append("> GENERATED FILE. Do not edit manually.\n")
    lines.append("> Source of truth: `src/huffcodec/errors.py` (EXIT_CODES).\n")
    lines.append("> Regenerate: `python scripts/gen_exit_codes_md.py`.\n\n")
    lines.append("These are the CLI exit codes you can rely on.\n\n")
    lines.append("| Code | Name | Meaning |\n")
    lines.append("|---:|---|---|\n")
    for e in sorted(EXIT_CODES, key=lambda x: x.code):
        lines.append(f"| {e.code} | `{e.name}` | {e.description} |\n")
    lines.append("\n## Notes\n")
    lines.append("- Every internal error extends `HuffCodecError` and carries an `exit_code`.\n")
    lines.append("- `--debug` re-raises errors to show full stack traces.\n")
    lines.append("- On failure no output file is written.\n")
    return "".join(lines)


# ---------------
# Typed exceptions
# ---------------


class HuffCodecError(Exception):
    """Base error for huffcodec."""

    exit_code: int = EXIT_GENERIC


class UsageError(HuffCodecError):
    exit_code = EXIT_USAGE


class CorruptPayload(HuffCodecError):
    exit_code = EXIT_GENERIC


class InvalidCodeError(HuffCodecError):
    """A trained codec breaks one of its own guarantees (prefix-free, weights, non-empty codes)."""

    exit_code = EXIT_GENERIC


class UnknownSymbolError(HuffCodecError):
    """Encode met a symbol that was never seen during training."""

    exit_code = EXIT_UNKNOWN_SYMBOL

    def __init__(self, symbol: Hashable, position: int) -> None:
        super().__init__(f"symbol {symbol!r} at position {position} has no code")
        self.symbol = symbol
        self.position = position


class MalformedTreeError(HuffCodecError):
    """Decode needed a child that the tree does not have."""

    exit_code = EXIT_MALFORMED_TREE

    def __init__(self, message: str, bit_offset: int | None = None) -> None:
        if bit_offset is not None:
            message = f"{message} (bit {bit_offset})"
        super().__init__(message)
        self.bit_offset = bit_offset


class TruncatedBitStream(HuffCodecError):
    exit_code = EXIT_TRUNCATED_STREAM

    def __init__(self, pending_bits: int) -> None:
        super().__init__(f"bit stream ends {pending_bits} bit(s) into an unfinished code")
        self.pending_bits = pending_bits
