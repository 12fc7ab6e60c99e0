from __future__ import annotations

from collections import Counter
from collections.abc import Hashable, Iterable, Iterator, Mapping

# Un simbolo e' un int 0-255 (bytes) oppure una stringa di 1 carattere (text)
Symbol = Hashable


def _validated(counts: Mapping[Symbol, int]) -> dict[Symbol, int]:
    # conteggi interi >= 0; gli zeri spariscono: chiavi = simboli osservati
    clean: dict[Symbol, int] = {}
    for sym, f in counts.items():
        if isinstance(f, bool) or not isinstance(f, int):
            raise ValueError(f"conteggio non intero per {sym!r}: {f!r}")
        if f < 0:
            raise ValueError(f"conteggio negativo per {sym!r}: {f}")
        if f > 0:
            clean[sym] = f
    return clean

class FrequencyTable(Mapping[Symbol, int]):
    """
    Tabella simbolo -> numero di occorrenze, immutabile.

    Le chiavi sono esattamente i simboli osservati (conteggi > 0).
    Una tabella vuota e' valida: rappresenta un input vuoto.
    """

    __slots__ = ("_counts", "_total")

    def __init__(self, counts: Mapping[Symbol, int] | None = None) -> None:
        self._counts: dict[Symbol, int] = _validated(counts or {})
        self._total = sum(self._counts.values())

    @classmethod
    def from_counts(cls, counts: Mapping[Symbol, int]) -> "FrequencyTable":
        return cls(counts)

    def __getitem__(self, sym: Symbol) -> int:
        return self._counts[sym]

    def __iter__(self) -> Iterator[Symbol]:
        return iter(self._counts)

    def __len__(self) -> int:
        return len(self._counts)

    def __repr__(self) -> str:
        return f"FrequencyTable({self._counts!r})"

    @property
    def total(self) -> int:
        return self._total

    @property
    def distinct(self) -> int:
        return len(self._counts)


def count_frequencies(symbols: Iterable[Symbol]) -> FrequencyTable:
    """Single pass over the stream; the counter never escapes this function."""
    counts: Counter[Symbol] = Counter()
    for sym in symbols:
        counts[sym] += 1
    return FrequencyTable(counts)
