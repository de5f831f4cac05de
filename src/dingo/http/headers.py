"""Case-insensitive HTTP headers.

``Headers`` is the immutable view over the raw ASGI byte pairs a
``Request`` carries. ``MutableHeaders`` is what a handler fills in
through ``ResponseWriter.headers``.
"""

from collections.abc import Iterator, Mapping


class Headers(Mapping[str, str]):
    """Immutable, case-insensitive request headers.

    Names are folded to lower case once, at construction. Lookup returns
    the first value; ``get_list`` returns all of them.
    """

    __slots__ = ("_index", "_raw")

    def __init__(self, raw: tuple[tuple[bytes, bytes], ...] = ()) -> None:
        index: dict[str, list[str]] = {}
        for name, value in raw:
            index.setdefault(name.decode("latin-1").lower(), []).append(
                value.decode("latin-1")
            )
        self._raw = raw
        self._index = index

    @classmethod
    def from_pairs(cls, pairs: Mapping[str, str]) -> "Headers":
        """Build headers from a ``{name: value}`` mapping of strings."""
        return cls(
            tuple(
                (k.lower().encode("latin-1"), v.encode("latin-1"))
                for k, v in pairs.items()
            )
        )

    def __getitem__(self, key: str) -> str:
        return self._index[key.lower()][0]

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and key.lower() in self._index

    def __iter__(self) -> Iterator[str]:
        return iter(self._index)

    def __len__(self) -> int:
        return len(self._index)

    def __repr__(self) -> str:
        return f"Headers({ {k: v[0] for k, v in self._index.items()}!r})"

    def get_list(self, key: str) -> list[str]:
        """Return all values for *key*."""
        return list(self._index.get(key.lower(), ()))

    @property
    def raw(self) -> tuple[tuple[bytes, bytes], ...]:
        """Raw header byte pairs, as received."""
        return self._raw


class MutableHeaders:
    """Response headers, case-insensitive, in insertion order.

    ``set`` replaces every value for a name, ``add`` appends another one.
    """

    __slots__ = ("_items",)

    def __init__(self) -> None:
        self._items: list[tuple[str, str]] = []

    def set(self, name: str, value: str) -> None:
        """Replace all values for *name* with *value*."""
        self.delete(name)
        self._items.append((name, value))

    def add(self, name: str, value: str) -> None:
        """Append a value for *name*, keeping existing ones."""
        self._items.append((name, value))

    def delete(self, name: str) -> None:
        lower = name.lower()
        self._items = [(k, v) for k, v in self._items if k.lower() != lower]

    def get(self, name: str, default: str | None = None) -> str | None:
        """Return the first value for *name*, or *default* if missing."""
        lower = name.lower()
        for k, v in self._items:
            if k.lower() == lower:
                return v
        return default

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self.get(name) is not None

    def __iter__(self) -> Iterator[tuple[str, str]]:
        return iter(tuple(self._items))

    def __len__(self) -> int:
        return len(self._items)

    def __repr__(self) -> str:
        return f"MutableHeaders({self._items!r})"
