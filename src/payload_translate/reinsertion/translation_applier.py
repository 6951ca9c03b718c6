"""Replay translated fragments into a copy of the source document."""

from __future__ import annotations

import copy
import logging
from collections.abc import Collection, Iterator, Mapping, Sequence
from itertools import groupby
from typing import Any

from payload_translate.addressing import AddressNotFound, format_address, read_value, write_value
from payload_translate.extraction import FragmentKind, TranslatableField
from payload_translate.rich_text import PROTECTED_NODE_TYPES, replace_text_leaves

from .reinsertion_outcomes import ReinsertionResult

LOGGER = logging.getLogger(__name__)


def apply_translations(
    original: Mapping[str, Any],
    fields: Sequence[TranslatableField],
    translations: Sequence[str],
    *,
    protected_node_types: Collection[str] = PROTECTED_NODE_TYPES,
) -> ReinsertionResult:
    """Return a deep copy of ``original`` with ``translations[i]`` written at ``fields[i]``.

    A translation missing for a position leaves the original text there. A
    length mismatch is logged and reported on the result, never raised.
    """
    document = copy.deepcopy(dict(original))
    applied = 0

    for run in _runs(fields):
        if run[0][1].kind is FragmentKind.RICH_TEXT_FRAGMENT:
            applied += _apply_rich_text_run(document, run, translations, protected_node_types)
        else:
            index, field = run[0]
            if index >= len(translations):
                continue
            try:
                write_value(document, field.address, translations[index])
            except AddressNotFound as exc:
                LOGGER.warning("Skipping %s: %s", format_address(field.address), exc)
                continue
            applied += 1

    result = ReinsertionResult(
        document=document,
        applied=applied,
        skipped=len(fields) - applied,
        expected=len(fields),
        received=len(translations),
    )
    if result.count_mismatch:
        LOGGER.warning(
            "Expected %d translations, got %d; %d field(s) keep their original text.",
            result.expected,
            result.received,
            result.skipped,
        )
    return result


def _runs(
    fields: Sequence[TranslatableField],
) -> Iterator[list[tuple[int, TranslatableField]]]:
    """Group consecutive rich-text fragments of the same field; other fields stand alone."""
    for key, items in groupby(enumerate(fields), key=_run_key):
        members = list(items)
        if key is None:
            for member in members:
                yield [member]
        else:
            yield members


def _run_key(item: tuple[int, TranslatableField]) -> tuple[Any, ...] | None:
    field = item[1]
    if field.kind is FragmentKind.RICH_TEXT_FRAGMENT:
        return field.address
    return None


def _apply_rich_text_run(
    document: dict[str, Any],
    run: list[tuple[int, TranslatableField]],
    translations: Sequence[str],
    protected_node_types: Collection[str],
) -> int:
    address = run[0][1].address
    available = [translations[index] for index, _ in run if index < len(translations)]
    if not available:
        return 0
    try:
        editor_state = read_value(document, address)
    except AddressNotFound as exc:
        LOGGER.warning("Skipping rich text %s: %s", format_address(address), exc)
        return 0

    replacement = replace_text_leaves(
        editor_state, available, protected_node_types=protected_node_types
    )
    if replacement.expected != len(run):
        LOGGER.warning(
            "Rich text %s has %d text leaves, %d were extracted.",
            format_address(address),
            replacement.expected,
            len(run),
        )
    if not replacement.is_complete:
        LOGGER.debug(
            "Rich text %s keeps original text in %d leaf(s).",
            format_address(address),
            replacement.expected - replacement.replaced,
        )
    write_value(document, address, editor_state)
    return replacement.replaced
