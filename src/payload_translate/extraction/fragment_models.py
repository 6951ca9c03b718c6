"""Extraction domain entities."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from payload_translate.addressing import Address, format_address


class FragmentKind(str, Enum):
    """Kind of text fragment emitted by extraction."""

    TEXT = "text"
    TEXTAREA = "textarea"
    RICH_TEXT_FRAGMENT = "richTextFragment"


@dataclass(frozen=True)
class TranslatableField:
    """One addressable unit of translatable text.

    ``address`` locates the field inside the document. For rich-text
    fragments ``rich_text_address`` additionally locates the text leaf inside
    the field's editor state.
    """

    address: Address
    kind: FragmentKind
    text: str
    rich_text_address: Address | None = None

    def to_payload(self) -> dict[str, object]:
        payload: dict[str, object] = {
            "path": format_address(self.address),
            "type": self.kind.value,
            "value": self.text,
        }
        if self.rich_text_address is not None:
            payload["lexicalPath"] = format_address(self.rich_text_address)
        return payload
