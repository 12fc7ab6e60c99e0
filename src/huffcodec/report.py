"""Stats and verification helpers.

Policy: everything here is read-only over an already trained codec.
Reports are plain dicts/dataclasses; printing is the CLI's job.
"""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import asdict, dataclass
from typing import Any

from huffcodec.baseline import BaselineCompressor
from huffcodec.core.code_map import is_prefix_free
from huffcodec.core.codec_huffman import HuffmanCodec
from huffcodec.core.frequency import FrequencyTable, Symbol
from huffcodec.core.tree import iter_leaves, tree_depth
from huffcodec.errors import HuffCodecError, InvalidCodeError


def shannon_entropy(table: FrequencyTable) -> float:
    """Bit/simbolo minimi teorici per la distribuzione della tabella."""
    total = table.total
    if total == 0:
        return 0.0
    h = 0.0
    for f in table.values():
        p = f / total
        h -= p * math.log2(p)
    return h


@dataclass(frozen=True)
class CompressionStats:
    n_symbols: int
    distinct: int
    tree_depth: int
    encoded_bits: int
    packed_bytes: int
    avg_code_length: float
    entropy: float
    raw_bytes: int
    baseline_id: str
    baseline_bytes: int

    @property
    def ratio(self) -> float | None:
        if self.raw_bytes == 0:
            return None
        return self.packed_bytes / self.raw_bytes

    def to_dict(self) -> dict[str, Any]:
        d = asdict(self)
        d["ratio"] = self.ratio
        return d


def compression_stats(
    symbols: Sequence[Symbol],
    codec: HuffmanCodec,
    raw: bytes,
    *,
    baseline: BaselineCompressor | None = None,
) -> CompressionStats:
    """Encode ``symbols`` with ``codec`` and compare against a generic compressor on ``raw``."""
    if baseline is None:
        baseline = BaselineCompressor()

    buf = codec.encode(symbols)
    n = len(symbols)
    return CompressionStats(
        n_symbols=n,
        distinct=codec.table.distinct,
        tree_depth=tree_depth(codec.tree),
        encoded_bits=buf.bit_length,
        packed_bytes=len(buf.to_bytes()),
        avg_code_length=(buf.bit_length / n) if n else 0.0,
        entropy=shannon_entropy(codec.table),
        raw_bytes=len(raw),
        baseline_id=baseline.resolved_id,
        baseline_bytes=len(baseline.compress(raw)),
    )


def verify_roundtrip(symbols: Sequence[Symbol], codec: HuffmanCodec) -> None:
    """Raise if the trained codec breaks one of its structural guarantees."""
    if not is_prefix_free(codec.code_map):
        raise InvalidCodeError("code map non prefix-free")

    leaf_total = sum(leaf.weight for leaf in iter_leaves(codec.tree))
    root_weight = codec.tree.weight if codec.tree is not None else 0
    if not (root_weight == leaf_total == codec.table.total):
        raise InvalidCodeError(
            f"pesi incoerenti: root={root_weight} foglie={leaf_total} tabella={codec.table.total}"
        )

    for sym, code in codec.code_map.items():
        if len(code) == 0:
            raise InvalidCodeError(f"codice vuoto per {sym!r}")

    back = codec.decompress(codec.compress(symbols), strict=True)
    if back != list(symbols):
        raise HuffCodecError("roundtrip fallito: output diverso dall'input")


def format_stats(stats: CompressionStats, label: str) -> str:
    lines = [f"=== huffcodec stats ({label}) ==="]
    lines.append(f"Simboli        : {stats.n_symbols} ({stats.distinct} distinti)")
    if stats.n_symbols == 0:
        lines.append("Input vuoto: niente statistiche sensate")
        lines.append("===============================")
        return "\n".join(lines)
    lines.append(f"Profondita'    : {stats.tree_depth}")
    lines.append(f"Bit codificati : {stats.encoded_bits}")
    lines.append(f"Byte compressi : {stats.packed_bytes} (raw {stats.raw_bytes})")
    if stats.ratio is not None:
        lines.append(f"Rapporto       : {stats.ratio:.3f} (1.0 = nessuna compressione)")
    lines.append(f"Bit/simbolo    : {stats.avg_code_length:.3f} (entropia {stats.entropy:.3f})")
    lines.append(f"Baseline       : {stats.baseline_id} {stats.baseline_bytes} byte")
    lines.append("===============================")
    return "\n".join(lines)
