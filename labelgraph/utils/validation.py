from collections.abc import Callable, Hashable, Iterable
from itertools import filterfalse
from typing import Any, TypeVar

T = TypeVar("T")


def check_key(key) -> None:
    """Raise ``TypeError`` unless *key* can be used as a vertex key."""
    if not isinstance(key, Hashable):
        raise TypeError(f"Vertex keys must be hashable, got {type(key).__name__}")
    # Hashable only checks for __hash__; tuples of lists fail late.
    try:
        hash(key)
    except TypeError as e:
        raise TypeError(f"Vertex keys must be hashable, got {key!r}") from e


def check_label(label) -> None:
    """Raise ``TypeError`` unless *label* is a string (``""`` is a valid label)."""
    if not isinstance(label, str):
        raise TypeError(f"label must be str, got {type(label).__name__}")


def is_hashable(obj) -> bool:
    try:
        hash(obj)
    except TypeError:
        return False
    return True


def unique_iter(iterable: Iterable[T], key: Callable[[T], Any] | None = None) -> Iterable[T]:
    # Based on https://iteration-utilities.readthedocs.io/en/latest/generated/unique_everseen.html
    seen: set[Any] = set()
    seen_add = seen.add
    if key is None:
        for element in filterfalse(seen.__contains__, iterable):
            seen_add(element)
            yield element
    else:
        for element in iterable:
            k = key(element)
            if k not in seen:
                seen_add(k)
                yield element
