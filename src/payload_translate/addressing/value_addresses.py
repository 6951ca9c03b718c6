"""Read and write values inside nested document trees by address."""

from __future__ import annotations

from collections.abc import MutableMapping, MutableSequence, Sequence
from typing import Any

AddressKey = str | int
Address = tuple[AddressKey, ...]


class AddressNotFound(LookupError):
    """Raised when an address does not resolve inside a value tree."""

    def __init__(self, address: Sequence[AddressKey], depth: int) -> None:
        self.address = tuple(address)
        self.depth = depth
        super().__init__(
            f"Address '{format_address(address)}' not found at segment {depth}."
        )


def format_address(address: Sequence[AddressKey]) -> str:
    """Render an address in dotted form, e.g. ``items.0.label``."""
    return ".".join(str(key) for key in address)


def parse_address(text: str) -> Address:
    """Parse a dotted address; all-digit segments become list indices."""
    if not text:
        return ()
    return tuple(int(part) if part.isdigit() else part for part in text.split("."))


def read_value(tree: Any, address: Sequence[AddressKey]) -> Any:
    """Return the value stored at ``address``.

    Raises:
      AddressNotFound: If a segment is absent or crosses a non-container value.
    """
    current = tree
    for depth, key in enumerate(address):
        if isinstance(current, MutableMapping):
            mapping_key = _mapping_key(current, key)
            if mapping_key is None:
                raise AddressNotFound(address, depth)
            current = current[mapping_key]
        elif _is_sequence(current):
            index = _sequence_index(key)
            if index is None or index >= len(current):
                raise AddressNotFound(address, depth)
            current = current[index]
        else:
            raise AddressNotFound(address, depth)
    return current


def write_value(tree: Any, address: Sequence[AddressKey], value: Any) -> Any:
    """Store ``value`` at ``address`` in place and return ``tree``.

    Missing intermediate containers are created as lists when the following
    key is a non-negative integer and as dicts otherwise.

    Raises:
      ValueError: If ``address`` is empty.
      AddressNotFound: If an existing intermediate value is not a container.
    """
    if not address:
        raise ValueError("Cannot write to an empty address.")

    current = tree
    for depth, key in enumerate(address[:-1]):
        next_key = address[depth + 1]
        current = _descend_or_create(current, key, next_key, address, depth)
    _assign(current, address[-1], value, address, len(address) - 1)
    return tree


def _descend_or_create(
    container: Any, key: AddressKey, next_key: AddressKey, address: Sequence[AddressKey], depth: int
) -> Any:
    if isinstance(container, MutableMapping):
        mapping_key = _mapping_key(container, key)
        if mapping_key is not None and _is_container(container[mapping_key]):
            return container[mapping_key]
        if mapping_key is not None and container[mapping_key] is not None:
            raise AddressNotFound(address, depth + 1)
        child = _empty_container_for(next_key)
        container[mapping_key if mapping_key is not None else key] = child
        return child
    if _is_sequence(container):
        index = _sequence_index(key)
        if index is None:
            raise AddressNotFound(address, depth)
        if index < len(container) and _is_container(container[index]):
            return container[index]
        if index < len(container) and container[index] is not None:
            raise AddressNotFound(address, depth + 1)
        child = _empty_container_for(next_key)
        _assign(container, index, child, address, depth)
        return child
    raise AddressNotFound(address, depth)


def _assign(
    container: Any, key: AddressKey, value: Any, address: Sequence[AddressKey], depth: int
) -> None:
    if isinstance(container, MutableMapping):
        mapping_key = _mapping_key(container, key)
        container[mapping_key if mapping_key is not None else key] = value
        return
    if _is_sequence(container):
        index = _sequence_index(key)
        if index is None:
            raise AddressNotFound(address, depth)
        while len(container) <= index:
            container.append(None)
        container[index] = value
        return
    raise AddressNotFound(address, depth)


def _empty_container_for(next_key: AddressKey) -> dict[str, Any] | list[Any]:
    if _sequence_index(next_key) is not None:
        return []
    return {}


def _mapping_key(mapping: MutableMapping[Any, Any], key: AddressKey) -> AddressKey | None:
    if key in mapping:
        return key
    # Parsed addresses turn "0" into 0; JSON object keys stay strings.
    if isinstance(key, int) and str(key) in mapping:
        return str(key)
    return None


def _sequence_index(key: AddressKey) -> int | None:
    if isinstance(key, bool):
        return None
    if isinstance(key, int):
        return key if key >= 0 else None
    if isinstance(key, str) and key.isdigit():
        return int(key)
    return None


def _is_sequence(value: Any) -> bool:
    return isinstance(value, MutableSequence) and not isinstance(value, (str, bytes, bytearray))


def _is_container(value: Any) -> bool:
    return isinstance(value, MutableMapping) or _is_sequence(value)
