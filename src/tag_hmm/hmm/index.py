"""
Stable integer positions for states and observations.

Every probability matrix addresses its cells through an EntityIndex. The
index is built once in registration order and frozen as soon as a matrix
is constructed over it.
"""

from typing import Dict, Hashable, Iterable, Iterator, List, Tuple

from ..exceptions import IndexFrozenError, UnregisteredEntityError


class EntityIndex:
    """
    Bijective mapping from an ordered set of symbols to 0..n-1.

    Args:
        symbols: Initial symbols, registered in iteration order
        kind: Label used in error messages ("state", "observation")
    """

    def __init__(self, symbols: Iterable[Hashable] = (), kind: str = "entity"):
        self.kind = kind
        self._positions: Dict[Hashable, int] = {}
        self._symbols: List[Hashable] = []
        self._frozen = False

        for symbol in symbols:
            self.assign(symbol)

    @classmethod
    def of(cls, symbols, kind: str = "entity") -> "EntityIndex":
        """Return symbols unchanged if already an index, otherwise build one."""
        if isinstance(symbols, cls):
            return symbols
        return cls(symbols, kind=kind)

    def assign(self, symbol: Hashable) -> int:
        """
        Register a symbol and return its position.

        Registering a known symbol again returns its existing position.

        Raises:
            IndexFrozenError: If the index has been frozen
        """
        if symbol in self._positions:
            return self._positions[symbol]
        if self._frozen:
            raise IndexFrozenError(f"Cannot register {self.kind} {symbol!r}: index is frozen")

        position = len(self._symbols)
        self._positions[symbol] = position
        self._symbols.append(symbol)
        return position

    def index_of(self, symbol: Hashable) -> int:
        """
        Look up the position of a registered symbol.

        Raises:
            UnregisteredEntityError: If the symbol was never assigned
        """
        try:
            return self._positions[symbol]
        except (KeyError, TypeError):
            raise UnregisteredEntityError(symbol, self.kind) from None

    def symbol_at(self, position: int) -> Hashable:
        """Inverse lookup; raises IndexError outside 0..n-1."""
        if position < 0 or position >= len(self._symbols):
            raise IndexError(
                f"{self.kind} index {position} is out of range [0, {len(self._symbols)})"
            )
        return self._symbols[position]

    def freeze(self) -> "EntityIndex":
        """Make the index immutable."""
        self._frozen = True
        return self

    @property
    def frozen(self) -> bool:
        return self._frozen

    @property
    def symbols(self) -> Tuple[Hashable, ...]:
        return tuple(self._symbols)

    def __len__(self) -> int:
        return len(self._symbols)

    def __iter__(self) -> Iterator[Hashable]:
        return iter(tuple(self._symbols))

    def __contains__(self, symbol: Hashable) -> bool:
        try:
            return symbol in self._positions
        except TypeError:
            return False

    def __eq__(self, other) -> bool:
        if not isinstance(other, EntityIndex):
            return NotImplemented
        return self._symbols == other._symbols

    __hash__ = None

    def __repr__(self) -> str:
        return f"EntityIndex(kind={self.kind!r}, size={len(self._symbols)})"
