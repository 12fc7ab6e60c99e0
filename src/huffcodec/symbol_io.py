"""Sequential symbol reader/writer over files.

- bytes: one symbol per byte (int 0..255)
- text: one symbol per character; newline translation is disabled so that
  the round trip is byte exact for the chosen encoding
"""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path

from huffcodec.core.frequency import Symbol
from huffcodec.errors import UsageError


def read_symbols(path: str | Path, kind: str = "bytes", encoding: str = "utf-8") -> list[Symbol]:
    p = Path(path)
    if kind == "bytes":
        return list(p.read_bytes())
    if kind == "text":
        with p.open("r", encoding=encoding, newline="") as f:
            return list(f.read())
    raise UsageError(f"tipo di simboli non supportato: {kind!r}")


def symbols_to_bytes(symbols: Iterable[Symbol], kind: str = "bytes", encoding: str = "utf-8") -> bytes:
    if kind == "bytes":
        return bytes(symbols)  # type: ignore[arg-type]
    if kind == "text":
        return "".join(symbols).encode(encoding)  # type: ignore[arg-type]
    raise UsageError(f"tipo di simboli non supportato: {kind!r}")


def write_symbols(
    path: str | Path, symbols: Iterable[Symbol], kind: str = "bytes", encoding: str = "utf-8"
) -> None:
    # serializza prima di aprire il file: niente output parziale
    Path(path).write_bytes(symbols_to_bytes(symbols, kind, encoding))
