from __future__ import annotations

import zlib
from dataclasses import dataclass

try:
    import zstandard as zstd  # type: ignore
except Exception:  # pragma: no cover
    zstd = None


def have_zstd() -> bool:
    return zstd is not None


def resolve_baseline_id(codec_id: str, *, have_zstd: bool) -> str:
    cid = str(codec_id)
    if cid in ("zstd", "zstd_tight") and not have_zstd:
        return "zlib"
    return cid


@dataclass
class BaselineCompressor:
    """
    Compressore generico di riferimento per il report (non fa parte del formato).

    "zstd_tight" riduce l'overhead del frame zstd:
      - no content size nel frame
      - no checksum
    """

    codec_id: str = "zstd_tight"
    level: int = 19

    def compress(self, data: bytes) -> bytes:
        cid = resolve_baseline_id(self.codec_id, have_zstd=have_zstd())
        if cid == "zlib":
            return zlib.compress(data, 9)
        if cid == "zstd_tight":
            c = zstd.ZstdCompressor(
                level=int(self.level),
                write_content_size=False,
                write_checksum=False,
            )
            return c.compress(data)
        if cid == "zstd":
            return zstd.ZstdCompressor(level=int(self.level)).compress(data)
        raise ValueError(f"baseline non supportata: {self.codec_id!r}")

    @property
    def resolved_id(self) -> str:
        return resolve_baseline_id(self.codec_id, have_zstd=have_zstd())
