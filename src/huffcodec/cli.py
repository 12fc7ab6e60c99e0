"""huffcodec CLI.

This is the stable CLI entrypoint (console-script: ``huffcodec``).

The code tree is not stored in the compressed file: ``decompress`` rebuilds it
from the same training corpus used by ``compress`` (``--train``, default: the
input itself for compress).
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

from huffcodec.codec_spec import EMPTY_SPEC, SYMBOL_KINDS, ResolvedSettings, load_codec_spec
from huffcodec.core.codec_huffman import HuffmanCodec
from huffcodec.errors import HuffCodecError
from huffcodec.symbol_io import read_symbols, write_symbols


def _add_common_args(p: argparse.ArgumentParser) -> None:
    p.add_argument("--debug", action="store_true", help="Show stack traces on errors")


def _add_symbol_args(p: argparse.ArgumentParser) -> None:
    p.add_argument("--symbols", choices=SYMBOL_KINDS, default=None, help="Symbol kind (default: bytes)")
    p.add_argument("--encoding", default=None, help="Text encoding for --symbols text (default: utf-8)")
    p.add_argument(
        "--spec",
        default=None,
        help="Codec spec JSON. Use '@file.json' to load from file, or pass JSON inline.",
    )


def _settings(ns: argparse.Namespace) -> ResolvedSettings:
    spec = load_codec_spec(ns.spec) if ns.spec else EMPTY_SPEC
    # precedence: CLI flag > spec > default
    return spec.resolve(
        symbols=ns.symbols,
        encoding=ns.encoding,
        strict=getattr(ns, "strict", None),
    )


def _train(corpus: Path, st: ResolvedSettings) -> HuffmanCodec:
    return HuffmanCodec.train(read_symbols(corpus, st.symbols, st.encoding))


def _cmd_compress(input_path: Path, output_path: Path, train_path: Path | None, st: ResolvedSettings) -> int:
    symbols = read_symbols(input_path, st.symbols, st.encoding)
    codec = HuffmanCodec.train(symbols) if train_path is None else _train(train_path, st)
    blob = codec.compress(symbols)
    output_path.write_bytes(blob)

    print("=== huffcodec compress ===")
    print(f"File originale : {input_path} ({input_path.stat().st_size} byte)")
    print(f"File compresso : {output_path} ({len(blob)} byte)")
    print("==========================")
    return 0


def _cmd_decompress(input_path: Path, output_path: Path, train_path: Path, st: ResolvedSettings) -> int:
    codec = _train(train_path, st)
    symbols = codec.decompress(input_path.read_bytes(), strict=st.strict)
    write_symbols(output_path, symbols, st.symbols, st.encoding)
    print(f"Decompressione completata: {output_path} ({len(symbols)} simboli)")
    return 0


def _cmd_codes(corpus: Path, st: ResolvedSettings, *, as_json: bool) -> int:
    codec = _train(corpus, st)
    rows = [
        {
            "symbol": sym,
            "count": codec.table[sym],
            "code": "".join(str(b) for b in codec.code_map[sym]),
        }
        for sym in sorted(codec.code_map, key=lambda s: (len(codec.code_map[s]), codec.code_map[s]))
    ]
    if as_json:
        print(json.dumps({"total": codec.table.total, "codes": rows}, ensure_ascii=False, indent=2))
        return 0

    print(f"=== huffcodec codes ({corpus}) ===")
    for r in rows:
        print(f"{r['symbol']!r:>8} {r['count']:>10}  {r['code']}")
    print(f"Totale simboli : {codec.table.total}")
    print("=================================")
    return 0


def _cmd_stats(input_path: Path, train_path: Path | None, st: ResolvedSettings, *, as_json: bool) -> int:
    from huffcodec.report import compression_stats, format_stats

    symbols = read_symbols(input_path, st.symbols, st.encoding)
    codec = HuffmanCodec.train(symbols) if train_path is None else _train(train_path, st)
    stats = compression_stats(symbols, codec, input_path.read_bytes())
    if as_json:
        print(json.dumps(stats.to_dict(), indent=2))
    else:
        print(format_stats(stats, str(input_path)))
    return 0


def _cmd_verify(input_path: Path, st: ResolvedSettings) -> int:
    from huffcodec.report import verify_roundtrip

    symbols = read_symbols(input_path, st.symbols, st.encoding)
    verify_roundtrip(symbols, HuffmanCodec.train(symbols))
    print("OK")
    return 0


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="huffcodec", description="Huffman codec (lossless, bit exact)")
    sub = p.add_subparsers(dest="cmd", required=True)

    p_c = sub.add_parser("compress", help="Huffman-encode a file")
    p_c.add_argument("input", type=Path)
    p_c.add_argument("output", type=Path)
    p_c.add_argument("--train", type=Path, default=None, help="Training corpus (default: input)")
    _add_symbol_args(p_c)
    _add_common_args(p_c)

    p_d = sub.add_parser("decompress", help="Decode a file produced by compress")
    p_d.add_argument("input", type=Path)
    p_d.add_argument("output", type=Path)
    p_d.add_argument("--train", type=Path, required=True, help="Corpus used to train the encoder")
    p_d.add_argument(
        "--strict",
        action=argparse.BooleanOptionalAction,
        default=None,
        help=(
            "Fail if the stream ends in the middle of a code instead of dropping those bits. "
            "--no-strict overrides a spec with \"strict\": true."
        ),
    )
    _add_symbol_args(p_d)
    _add_common_args(p_d)

    p_k = sub.add_parser("codes", help="Show the frequency table and code map of a corpus")
    p_k.add_argument("corpus", type=Path)
    p_k.add_argument("--json", action="store_true", help="Machine-readable output")
    _add_symbol_args(p_k)
    _add_common_args(p_k)

    p_s = sub.add_parser("stats", help="Compression stats (vs entropy and a zstd baseline)")
    p_s.add_argument("input", type=Path)
    p_s.add_argument("--train", type=Path, default=None, help="Training corpus (default: input)")
    p_s.add_argument("--json", action="store_true", help="Machine-readable output")
    _add_symbol_args(p_s)
    _add_common_args(p_s)

    p_v = sub.add_parser("verify", help="In-memory round trip check of a file")
    p_v.add_argument("input", type=Path)
    _add_symbol_args(p_v)
    _add_common_args(p_v)

    p_sv = sub.add_parser("spec-validate", help="Validate a codec spec (v1)")
    p_sv.add_argument("spec_arg", metavar="spec", help="Codec spec JSON (@file.json or inline JSON)")
    _add_common_args(p_sv)

    return p


def main(argv: list[str] | None = None) -> int:
    argv = list(sys.argv[1:] if argv is None else argv)
    p = build_parser()
    ns = p.parse_args(argv)

    try:
        if ns.cmd == "spec-validate":
            # load is the validation
            load_codec_spec(str(ns.spec_arg))
            print("OK")
            return 0

        st = _settings(ns)
        if ns.cmd == "compress":
            return _cmd_compress(ns.input, ns.output, ns.train, st)
        if ns.cmd == "decompress":
            return _cmd_decompress(ns.input, ns.output, ns.train, st)
        if ns.cmd == "codes":
            return _cmd_codes(ns.corpus, st, as_json=bool(ns.json))
        if ns.cmd == "stats":
            return _cmd_stats(ns.input, ns.train, st, as_json=bool(ns.json))
        if ns.cmd == "verify":
            return _cmd_verify(ns.input, st)
        raise AssertionError("unreachable")

    except SystemExit:
        raise
    except HuffCodecError as e:
        if getattr(ns, "debug", False):
            raise
        print(f"[huffcodec] {e}", file=sys.stderr)
        return int(getattr(e, "exit_code", 10) or 10)
    except Exception as e:
        if getattr(ns, "debug", False):
            raise
        print(f"[huffcodec] error: {e}", file=sys.stderr)
        return 10


if __name__ == "__main__":
    raise SystemExit(main())
