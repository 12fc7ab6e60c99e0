from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType
from typing import Optional

from .frequency import Symbol
from .tree import Leaf, Node

Code = tuple[int, ...]
CodeMap = Mapping[Symbol, Code]


def build_code_map(root: Optional[Node]) -> CodeMap:
    """
    Simbolo -> cammino radice-foglia (0 = sinistra, 1 = destra).

    DFS iterativa: la profondita' dell'albero e' limitata dall'alfabeto,
    ma un albero esterno potrebbe essere degenere.
    """
    codes: dict[Symbol, Code] = {}
    if root is None:
        return MappingProxyType(codes)

    stack: list[tuple[Node, Code]] = [(root, ())]
    while stack:
        node, path = stack.pop()
        if isinstance(node, Leaf):
            codes[node.symbol] = path
            continue
        if node.right is not None:
            stack.append((node.right, path + (1,)))
        stack.append((node.left, path + (0,)))

    return MappingProxyType(codes)


def code_lengths(code_map: CodeMap) -> dict[Symbol, int]:
    return {sym: len(code) for sym, code in code_map.items()}


def is_prefix_free(code_map: CodeMap) -> bool:
    # dopo l'ordinamento lessicografico un prefisso precede sempre le sue estensioni
    codes = sorted(code_map.values())
    for a, b in zip(codes, codes[1:]):
        if b[: len(a)] == a:
            return False
    return True
