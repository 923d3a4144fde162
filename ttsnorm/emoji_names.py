"""
Emoji name table.

Pairs a precomputed ``emoji -> spoken name`` mapping with a matcher that
recognises exactly those sequences, multi-codepoint flags and ZWJ
sequences included. The default table is built once from the ``emoji``
package; tests and callers can supply their own mapping instead.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from types import MappingProxyType

import emoji
import regex

from ttsnorm.rule import NEVER_MATCH, alternation, compile_pattern
from ttsnorm.utils import LazyValue

logger = logging.getLogger(__name__)


def spoken_name(short_code: str) -> str:
    """
    Turn an ``emoji`` short code into words.

    Examples:
        >>> spoken_name(":grinning_face:")
        'grinning face'
    """
    return " ".join(short_code.strip(":").replace("_", " ").split())


class EmojiTable:
    """
    Immutable emoji lookup plus its compiled matcher.

    Args:
        names: Emoji sequence -> spoken name
    """

    def __init__(self, names: Mapping[str, str]):
        cleaned = {sequence: name for sequence, name in names.items() if sequence and name}
        self.names: Mapping[str, str] = MappingProxyType(cleaned)
        # Longest first, so a ZWJ family is not read as its first member
        self.pattern: regex.Pattern = (
            compile_pattern("emoji", alternation(cleaned)) if cleaned else NEVER_MATCH
        )

    def __len__(self) -> int:
        return len(self.names)

    def lookup(self, sequence: str) -> str | None:
        return self.names.get(sequence)

    @classmethod
    def from_emoji_package(cls) -> EmojiTable:
        """Build the table from ``emoji.EMOJI_DATA`` English short codes."""
        names = {}
        for sequence, data in emoji.EMOJI_DATA.items():
            short_code = data.get("en")
            if short_code:
                names[sequence] = spoken_name(short_code)
        logger.debug(f"Emoji table built with {len(names)} entries")
        return cls(names)


_DEFAULT_TABLE: LazyValue[EmojiTable] = LazyValue(EmojiTable.from_emoji_package)


def get_default_table() -> EmojiTable:
    """Return the process-wide emoji table, building it on first use."""
    return _DEFAULT_TABLE.get()
