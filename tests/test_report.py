from __future__ import annotations

import pytest

from huffcodec.baseline import BaselineCompressor, resolve_baseline_id
from huffcodec.core.code_map import build_code_map
from huffcodec.core.codec_huffman import HuffmanCodec
from huffcodec.core.frequency import FrequencyTable, count_frequencies
from huffcodec.core.tree import build_code_tree
from huffcodec.errors import CorruptPayload, InvalidCodeError
from huffcodec.report import compression_stats, format_stats, shannon_entropy, verify_roundtrip


def test_resolve_baseline_falls_back_to_zlib_when_zstd_missing() -> None:
    assert resolve_baseline_id("zstd_tight", have_zstd=False) == "zlib"
    assert resolve_baseline_id("zstd", have_zstd=False) == "zlib"
    assert resolve_baseline_id("zstd_tight", have_zstd=True) == "zstd_tight"
    assert resolve_baseline_id("zlib", have_zstd=True) == "zlib"


def test_entropy() -> None:
    assert shannon_entropy(FrequencyTable()) == 0.0
    assert shannon_entropy(FrequencyTable({"a": 5})) == 0.0
    assert shannon_entropy(FrequencyTable({"a": 1, "b": 1})) == pytest.approx(1.0)


def test_stats_abacabad() -> None:
    data = b"abacabad"
    codec = HuffmanCodec.train(data)
    st = compression_stats(list(data), codec, data, baseline=BaselineCompressor("zlib"))
    assert st.n_symbols == 8
    assert st.distinct == 4
    assert st.tree_depth == 3
    assert st.encoded_bits == 14
    assert st.packed_bytes == 3  # 2 data bytes + lastbits trailer
    assert st.avg_code_length == pytest.approx(14 / 8)
    # dyadic distribution: Huffman hits the entropy exactly
    assert st.entropy == pytest.approx(1.75)
    assert st.baseline_id == "zlib"
    assert "Rapporto" in format_stats(st, "abacabad")


def test_stats_empty() -> None:
    codec = HuffmanCodec.train(b"")
    st = compression_stats([], codec, b"", baseline=BaselineCompressor("zlib"))
    assert st.encoded_bits == 0
    assert st.ratio is None
    assert "vuoto" in format_stats(st, "empty")


@pytest.mark.parametrize("data", [b"", b"x", b"xxxxxxxxx", b"hello huffman world"])
def test_verify_roundtrip_ok(data: bytes) -> None:
    verify_roundtrip(list(data), HuffmanCodec.train(data))


def test_weight_conservation_via_table() -> None:
    table = count_frequencies(b"abracadabra")
    codec = HuffmanCodec.from_table(table)
    assert codec.tree is not None
    assert codec.tree.weight == table.total == 11


def test_verify_rejects_non_prefix_free_map() -> None:
    table = FrequencyTable({"a": 1, "b": 1})
    broken = HuffmanCodec(table=table, tree=build_code_tree(table), code_map={"a": (0,), "b": (0, 1)})
    with pytest.raises(InvalidCodeError, match="prefix-free"):
        verify_roundtrip(list("ab"), broken)


def test_verify_rejects_weight_mismatch() -> None:
    tree = build_code_tree(FrequencyTable({"a": 2, "b": 1}))
    broken = HuffmanCodec(table=FrequencyTable({"a": 1, "b": 1}), tree=tree, code_map=build_code_map(tree))
    with pytest.raises(InvalidCodeError, match="pesi"):
        verify_roundtrip(list("ab"), broken)
    assert not isinstance(InvalidCodeError("x"), CorruptPayload)
