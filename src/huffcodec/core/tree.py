from __future__ import annotations

import heapq
import itertools
from collections.abc import Iterator
from dataclasses import dataclass
from typing import Optional, Union

from .frequency import FrequencyTable, Symbol


# -------------------
# Nodi dell'albero Huffman
# -------------------
@dataclass(frozen=True)
class Leaf:
    symbol: Symbol
    weight: int


@dataclass(frozen=True)
class Internal:
    """
    Nodo interno: peso = somma dei pesi del sottoalbero.

    ``right`` e' None solo nel caso bootstrap a simbolo singolo,
    dove l'unica foglia sta a sinistra di una radice sintetica.
    """

    weight: int
    left: "Node"
    right: Optional["Node"] = None


Node = Union[Leaf, Internal]


def _sort_key(sym: Symbol) -> tuple[str, object]:
    # ordinamento stabile anche se i tipi dei simboli fossero misti
    return (type(sym).__name__, sym)


def build_code_tree(table: FrequencyTable) -> Optional[Node]:
    """
    Merge Huffman bottom-up con min-heap su (peso, sequenza di inserimento).

    Le foglie entrano nell'heap in ordine di simbolo, quindi tabelle uguali
    producono sempre lo stesso albero. Il primo nodo estratto diventa il
    figlio sinistro.

    Ritorna None per una tabella vuota.
    """
    heap: list[tuple[int, int, Node]] = []
    counter = itertools.count()

    for sym in sorted(table, key=_sort_key):
        heapq.heappush(heap, (table[sym], next(counter), Leaf(symbol=sym, weight=table[sym])))

    if not heap:
        return None

    # Caso speciale: un solo simbolo => radice sintetica con la foglia a sinistra
    if len(heap) == 1:
        _, _, only = heap[0]
        return Internal(weight=only.weight, left=only, right=None)

    while len(heap) > 1:
        w1, _, n1 = heapq.heappop(heap)
        w2, _, n2 = heapq.heappop(heap)
        parent = Internal(weight=w1 + w2, left=n1, right=n2)
        heapq.heappush(heap, (parent.weight, next(counter), parent))

    return heap[0][2]


def iter_leaves(root: Optional[Node]) -> Iterator[Leaf]:
    """Foglie da sinistra a destra, con stack esplicito."""
    if root is None:
        return
    stack: list[Node] = [root]
    while stack:
        node = stack.pop()
        if isinstance(node, Leaf):
            yield node
            continue
        if node.right is not None:
            stack.append(node.right)
        stack.append(node.left)


def tree_depth(root: Optional[Node]) -> int:
    """Lunghezza del cammino piu' lungo radice -> foglia (0 se niente albero)."""
    if root is None:
        return 0
    best = 0
    stack: list[tuple[Node, int]] = [(root, 0)]
    while stack:
        node, depth = stack.pop()
        if isinstance(node, Leaf):
            best = max(best, depth)
            continue
        stack.append((node.left, depth + 1))
        if node.right is not None:
            stack.append((node.right, depth + 1))
    return best
