from __future__ import annotations

import random

import pytest

from huffcodec.core.code_map import build_code_map, code_lengths, is_prefix_free
from huffcodec.core.frequency import FrequencyTable, count_frequencies
from huffcodec.core.tree import build_code_tree


def _codes(table: FrequencyTable):
    return build_code_map(build_code_tree(table))


def test_no_tree_gives_empty_map() -> None:
    assert dict(build_code_map(None)) == {}


def test_single_symbol_code_is_one_left_bit() -> None:
    assert dict(_codes(FrequencyTable({"a": 5}))) == {"a": (0,)}


def test_abcd_scenario() -> None:
    cm = _codes(FrequencyTable({"a": 4, "b": 2, "c": 1, "d": 1}))
    assert dict(cm) == {"a": (0,), "b": (1, 0), "c": (1, 1, 0), "d": (1, 1, 1)}
    ln = code_lengths(cm)
    assert ln["a"] <= ln["b"] <= ln["c"] == ln["d"]


def test_code_map_is_read_only() -> None:
    cm = _codes(FrequencyTable({"a": 1, "b": 1}))
    with pytest.raises(TypeError):
        cm["c"] = (1,)  # type: ignore[index]


@pytest.mark.parametrize("seed", [0, 1, 2, 3])
def test_prefix_free_on_random_tables(seed: int) -> None:
    rng = random.Random(seed)
    data = bytes(rng.randrange(256) for _ in range(rng.randrange(1, 3000)))
    cm = _codes(count_frequencies(data))
    assert is_prefix_free(cm)
    assert all(len(code) >= 1 for code in cm.values())


def test_is_prefix_free_detects_violation() -> None:
    assert not is_prefix_free({"a": (0,), "b": (0, 1)})
    assert is_prefix_free({"a": (0,), "b": (1, 0), "c": (1, 1)})


def test_determinism_same_table_same_map() -> None:
    table = count_frequencies("mississippi river banks")
    assert dict(_codes(table)) == dict(_codes(FrequencyTable(dict(table))))
