"""
Phrase lookup for the handful of strings the engine renders itself.

Localization proper lives outside the engine; ``Translator`` is the seam it
plugs into. ``DEFAULT_TRANSLATOR`` carries the English phrases.
"""

from __future__ import annotations

from typing import Mapping, Protocol, Sequence, TypeVar

T = TypeVar("T")

DEFAULT_PHRASES: dict[str, str] = {
    "common.attachment": "Attachment",
    "common.hidden": "Hidden",
    "workspace.invite.invited": "invited",
    "workspace.invite.removed": "removed",
    "workspace.invite.leftWorkspace": "left the workspace",
    "workspace.invite.to": "to",
    "workspace.invite.from": "from",
    "violationDismissal.rter.manual": "marked this receipt as cash",
    "violationDismissal.duplicatedTransaction.manual": "resolved the duplicate",
}


class Translator(Protocol):
    def translate(self, key: str) -> str: ...


class PhraseTableTranslator:
    """Looks phrases up in a flat table; unknown keys render as themselves."""

    def __init__(self, phrases: Mapping[str, str] | None = None) -> None:
        self._phrases = dict(DEFAULT_PHRASES if phrases is None else phrases)

    def translate(self, key: str) -> str:
        return self._phrases.get(key, key)


DEFAULT_TRANSLATOR = PhraseTableTranslator()


def format_list_with_separators(
    items: Sequence[T],
    separator: T,
    last_separator: T,
    pair_separator: T | None = None,
) -> list[T]:
    """
    Interleave separators the way an English conjunction list reads.

    Two items get ``pair_separator`` (default ``last_separator``) between
    them; three or more get ``separator`` between each pair and
    ``last_separator`` before the last.
    """
    if len(items) < 2:
        return list(items)
    if len(items) == 2:
        joiner = last_separator if pair_separator is None else pair_separator
        return [items[0], joiner, items[1]]
    result: list[T] = []
    for index, item in enumerate(items):
        if index == len(items) - 1:
            result.append(last_separator)
        elif index > 0:
            result.append(separator)
        result.append(item)
    return result
