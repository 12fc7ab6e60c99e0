#!/usr/bin/env python3
"""Write (or, with --check, compare) docs/exit_codes.md against src/huffcodec/errors.py.

Exit status: 0 ok / written, 1 docs out of date (--check).
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

REPO = Path(__file__).resolve().parents[1]
DOC_PATH = REPO / "docs" / "exit_codes.md"


def is_current(doc_path: Path = DOC_PATH) -> bool:
    from huffcodec.errors import render_exit_codes_markdown

    if not doc_path.is_file():
        return False
    return doc_path.read_text(encoding="utf-8") == render_exit_codes_markdown()


def main(argv: list[str] | None = None) -> int:
    p = argparse.ArgumentParser(description=__doc__)
    p.add_argument("--check", action="store_true", help="Do not write; fail if the doc is stale")
    ns = p.parse_args(argv)

    sys.path.insert(0, str(REPO / "src"))
    from huffcodec.errors import render_exit_codes_markdown  # noqa: E402

    if ns.check:
        if is_current():
            print(f"[huffcodec] {DOC_PATH.relative_to(REPO)} is up to date")
            return 0
        print(
            f"[huffcodec] {DOC_PATH.relative_to(REPO)} is stale: run python scripts/gen_exit_codes_md.py",
            file=sys.stderr,
        )
        return 1

    DOC_PATH.parent.mkdir(parents=True, exist_ok=True)
    DOC_PATH.write_text(render_exit_codes_markdown(), encoding="utf-8")
    print(f"[huffcodec] wrote {DOC_PATH}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
