"""Store-style merge of partial records into an action collection."""

from __future__ import annotations

from typing import Any, Mapping, Optional

from app.schemas.report_action import ReportAction


def fast_merge(target: Any, source: Any) -> Any:
    """
    Deep-merge ``source`` into a copy of ``target``.

    Dicts merge key by key, a ``None`` value in ``source`` removes the key,
    and anything else (lists included) replaces the target value.
    """
    if not isinstance(target, dict) or not isinstance(source, dict):
        return source
    merged = dict(target)
    for key, value in source.items():
        if value is None:
            merged.pop(key, None)
        elif isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = fast_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def merge_report_actions(
    report_actions: Mapping[str, ReportAction],
    actions_to_merge: Optional[Mapping[str, Any]] = None,
) -> dict[str, ReportAction]:
    """
    Apply pending updates to a report's actions without touching the originals.

    Each value in ``actions_to_merge`` is a ``ReportAction``, a partial wire
    dict, or ``None`` to drop the action.
    """
    merged = dict(report_actions)
    for key, update in (actions_to_merge or {}).items():
        if update is None:
            merged.pop(key, None)
            continue
        if isinstance(update, ReportAction):
            update = update.to_wire()
        existing = merged.get(key)
        base = existing.to_wire() if existing is not None else {}
        if "message" in update:
            # The incoming payload decides its own representation.
            base.pop("messageFormat", None)
            base.pop("message", None)
        record = fast_merge(base, update)
        if existing is None and not (
            record.get("reportActionID") and record.get("actionName")
        ):
            # A partial update for an unknown action has nothing to render
            continue
        merged[key] = ReportAction.model_validate(record)
    return merged
