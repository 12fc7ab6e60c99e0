from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Optional

from huffcodec.errors import MalformedTreeError, TruncatedBitStream, UnknownSymbolError

from .bitstream import BitBuffer, BitReader, BitWriter
from .code_map import CodeMap, build_code_map
from .frequency import FrequencyTable, Symbol, count_frequencies
from .tree import Leaf, Node, build_code_tree


def encode_symbols(symbols: Iterable[Symbol], code_map: CodeMap) -> BitBuffer:
    """
    symbols -> BitBuffer (concatenazione dei codici, nell'ordine di input).

    Un simbolo senza codice e' un errore: niente escape, niente skip.
    """
    writer = BitWriter()
    for pos, sym in enumerate(symbols):
        code = code_map.get(sym)
        if code is None:
            raise UnknownSymbolError(sym, pos)
        writer.write_bits(code)
    return writer.getvalue()


def decode_bits(buffer: BitBuffer, root: Optional[Node], *, strict: bool = False) -> list[Symbol]:
    """
    Percorre l'albero un bit alla volta: 0 = sinistra, 1 = destra.

    Foglia raggiunta => emette il simbolo e torna alla radice.
    La fine dell'input termina la decodifica; se si e' a meta' discesa
    quei bit vengono scartati (strict=True li tratta come errore).
    """
    if buffer.bit_length == 0:
        return []
    if root is None:
        raise MalformedTreeError("bit stream non vuoto ma nessun albero", bit_offset=0)
    if isinstance(root, Leaf):
        raise MalformedTreeError("la radice e' una foglia: nessun cammino possibile", bit_offset=0)

    out: list[Symbol] = []
    node: Node = root
    pending = 0
    reader = BitReader(buffer)

    while reader.has_next():
        offset = reader.position
        bit = reader.read_bit()
        # node qui e' sempre un Internal: le foglie vengono consumate subito
        child = node.left if bit == 0 else node.right
        if child is None:
            raise MalformedTreeError(
                f"figlio {'sinistro' if bit == 0 else 'destro'} assente", bit_offset=offset
            )
        if isinstance(child, Leaf):
            out.append(child.symbol)
            node = root
            pending = 0
        else:
            node = child
            pending += 1

    if pending and strict:
        raise TruncatedBitStream(pending)

    return out


@dataclass(frozen=True)
class HuffmanCodec:
    """
    Tabella, albero e mappa dei codici, costruiti una volta e mai modificati.

    L'albero non viene serializzato: encoder e decoder devono addestrarsi
    sullo stesso corpus.
    """

    table: FrequencyTable
    tree: Optional[Node]
    code_map: CodeMap
    codec_id: str = "huffman"

    @classmethod
    def from_table(cls, table: FrequencyTable) -> "HuffmanCodec":
        tree = build_code_tree(table)
        return cls(table=table, tree=tree, code_map=build_code_map(tree))

    @classmethod
    def train(cls, symbols: Iterable[Symbol]) -> "HuffmanCodec":
        return cls.from_table(count_frequencies(symbols))

    def encode(self, symbols: Iterable[Symbol]) -> BitBuffer:
        return encode_symbols(symbols, self.code_map)

    def decode(self, buffer: BitBuffer, *, strict: bool = False) -> list[Symbol]:
        return decode_bits(buffer, self.tree, strict=strict)

    def compress(self, symbols: Iterable[Symbol]) -> bytes:
        return self.encode(symbols).to_bytes()

    def decompress(self, blob: bytes, *, strict: bool = False) -> list[Symbol]:
        return self.decode(BitBuffer.from_bytes(blob), strict=strict)
