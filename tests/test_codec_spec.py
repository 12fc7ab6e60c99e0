from __future__ import annotations

import json
from pathlib import Path

import pytest

from huffcodec.codec_spec import EMPTY_SPEC, SPEC_ID_V1, CodecSpecError, load_codec_spec
from huffcodec.errors import EXIT_USAGE


def test_load_inline_and_resolve() -> None:
    spec = load_codec_spec(json.dumps({"spec": SPEC_ID_V1, "symbols": "text", "encoding": "latin-1"}))
    assert spec.symbols == "text"
    assert spec.encoding == "latin-1"
    assert spec.strict is None

    st = spec.resolve()
    assert (st.symbols, st.encoding, st.strict) == ("text", "latin-1", False)

    # CLI flag wins over spec
    st = spec.resolve(symbols="bytes", strict=True)
    assert (st.symbols, st.strict) == ("bytes", True)


def test_defaults() -> None:
    st = EMPTY_SPEC.resolve()
    assert (st.symbols, st.encoding, st.strict) == ("bytes", "utf-8", False)


def test_load_from_file(tmp_path: Path) -> None:
    p = tmp_path / "s.json"
    p.write_text(json.dumps({"spec": SPEC_ID_V1, "strict": True}), encoding="utf-8")
    assert load_codec_spec(f"@{p}").strict is True


@pytest.mark.parametrize(
    "arg",
    [
        "",
        "[]",
        "not json",
        "{}",
        json.dumps({"spec": "other.v1"}),
        json.dumps({"spec": SPEC_ID_V1, "extra": 1}),
        json.dumps({"spec": SPEC_ID_V1, "symbols": "words"}),
        json.dumps({"spec": SPEC_ID_V1, "encoding": "no-such-codec"}),
        json.dumps({"spec": SPEC_ID_V1, "strict": "yes"}),
        "@/nonexistent/spec.json",
    ],
)
def test_invalid_specs(arg: str) -> None:
    with pytest.raises(CodecSpecError) as ei:
        load_codec_spec(arg)
    assert ei.value.exit_code == EXIT_USAGE
