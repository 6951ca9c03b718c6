"""Path addressing exports."""

from .value_addresses import (
    Address,
    AddressKey,
    AddressNotFound,
    format_address,
    parse_address,
    read_value,
    write_value,
)

__all__ = [
    "Address",
    "AddressKey",
    "AddressNotFound",
    "format_address",
    "parse_address",
    "read_value",
    "write_value",
]
