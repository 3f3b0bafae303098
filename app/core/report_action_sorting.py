"""
Total ordering of report actions and gap-aware chain extraction.

Actions reach the client in pages and in arbitrary order. Sorting gives every
device the same sequence without coordination; the continuity chain tells
which stretch of that sequence is known to be complete, by following each
action's ``previousReportActionID`` back-reference.
"""

from __future__ import annotations

import math
from datetime import datetime, timezone
from functools import cmp_to_key
from typing import Optional, Sequence

from app.constants.report_actions import (
    CONSECUTIVE_ACTION_WINDOW_MS,
    IOU_REQUEST_ACTION_TYPES,
    PendingAction,
    ReportActionName,
    RoomChangeLogName,
)
from app.core.exceptions import InvalidReportActionsError
from app.core.report_action_predicates import (
    get_iou_type,
    get_whispered_to,
    is_created_action,
    is_deleted_action,
    is_optimistic_action,
    is_renamed_action,
    is_report_preview_action,
    is_submitted_action,
)
from app.schemas.report_action import ReportAction


def compare_report_actions(
    first: ReportAction, second: ReportAction, descending: bool = False
) -> int:
    """
    Order by ``created``, then created-first, then report-preview-last, then id.

    The id is opaque but generated the same way everywhere, so it settles
    same-millisecond ties identically on every device.
    """
    multiplier = -1 if descending else 1

    if first.created != second.created:
        return (-1 if first.created < second.created else 1) * multiplier

    if first.action_name != second.action_name:
        if is_created_action(first) or is_created_action(second):
            return (-1 if is_created_action(first) else 1) * multiplier
        if is_report_preview_action(first) or is_report_preview_action(second):
            return (1 if is_report_preview_action(first) else -1) * multiplier

    if first.report_action_id == second.report_action_id:
        return 0
    return (-1 if first.report_action_id < second.report_action_id else 1) * multiplier


def get_sorted_report_actions(
    report_actions: Sequence[Optional[ReportAction]], descending: bool = False
) -> list[ReportAction]:
    """Return a new, stably sorted list; ``None`` entries are dropped."""
    if not isinstance(report_actions, (list, tuple)):
        raise InvalidReportActionsError("get_sorted_report_actions", report_actions)

    present = [action for action in report_actions if action is not None]
    return sorted(
        present,
        key=cmp_to_key(
            lambda first, second: compare_report_actions(first, second, descending)
        ),
    )


def should_ignore_gap(
    current: Optional[ReportAction], next_action: Optional[ReportAction]
) -> bool:
    """
    Pairs that legitimately break the back-reference chain: optimistic
    actions, whispers, room invites on ``current`` and created or closed
    actions on ``next_action``.
    """
    if current is None or next_action is None:
        return False
    return (
        is_optimistic_action(current)
        or is_optimistic_action(next_action)
        or bool(get_whispered_to(current))
        or bool(get_whispered_to(next_action))
        or current.action_name == RoomChangeLogName.INVITE_TO_ROOM
        or next_action.action_name == ReportActionName.CREATED
        or next_action.action_name == ReportActionName.CLOSED
    )


def get_continuous_report_action_chain(
    sorted_report_actions: Sequence[ReportAction], anchor_id: Optional[str] = None
) -> list[ReportAction]:
    """
    Largest gapless slice of newest-first ``sorted_report_actions`` around
    ``anchor_id`` (or around the newest confirmed action when no id is given).

    A requested anchor that is missing yields ``[]``; a report made only of
    optimistic actions is continuous as a whole.
    """
    if not isinstance(sorted_report_actions, (list, tuple)):
        raise InvalidReportActionsError(
            "get_continuous_report_action_chain", sorted_report_actions
        )

    actions = list(sorted_report_actions)
    if anchor_id:
        index = next(
            (i for i, action in enumerate(actions) if action.report_action_id == anchor_id),
            -1,
        )
    else:
        index = next(
            (i for i, action in enumerate(actions) if not is_optimistic_action(action)),
            -1,
        )

    if index == -1:
        return [] if anchor_id else actions

    start_index = index
    end_index = index

    # Towards older actions: each action must point back at the next one.
    while (
        end_index < len(actions) - 1
        and actions[end_index].previous_report_action_id
        == actions[end_index + 1].report_action_id
    ) or should_ignore_gap(
        actions[end_index], actions[end_index + 1] if end_index + 1 < len(actions) else None
    ):
        end_index += 1

    # Towards newer actions: the newer neighbour must point back at this one.
    while (
        start_index > 0
        and actions[start_index].report_action_id
        == actions[start_index - 1].previous_report_action_id
    ) or should_ignore_gap(
        actions[start_index], actions[start_index - 1] if start_index > 0 else None
    ):
        start_index -= 1

    return actions[start_index : end_index + 1]


def find_previous_action(
    report_actions: Optional[Sequence[ReportAction]],
    action_index: int,
    is_offline: bool = False,
) -> Optional[ReportAction]:
    """
    The action displayed right before ``action_index`` in a newest-first list.

    Actions pending deletion stay in memory but are not displayed, so they are
    skipped unless offline, where every action is still shown.
    """
    if not report_actions:
        return None
    for action in report_actions[action_index + 1 :]:
        if is_offline or action.pending_action != PendingAction.DELETE:
            return action
    return None


def _created_to_ms(created: str) -> float:
    try:
        parsed = datetime.fromisoformat(created)
    except ValueError:
        return float("nan")
    # Store timestamps are naive UTC
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed.timestamp() * 1000


def is_consecutive_action_made_by_previous_actor(
    report_actions: Optional[Sequence[ReportAction]],
    action_index: int,
    is_offline: bool = False,
    window_ms: int = CONSECUTIVE_ACTION_WINDOW_MS,
) -> bool:
    """
    True when the action at ``action_index`` should be grouped under the
    previous one: same actor, within ``window_ms`` (five minutes by
    default), and neither of them a kind that always stands on its own.
    """
    if not report_actions or not 0 <= action_index < len(report_actions):
        return False
    previous_action = find_previous_action(report_actions, action_index, is_offline)
    current_action = report_actions[action_index]
    if previous_action is None:
        return False

    elapsed = _created_to_ms(current_action.created) - _created_to_ms(previous_action.created)
    # Unparseable timestamps never fall inside the grouping window
    if math.isnan(elapsed) or elapsed > window_ms:
        return False

    if is_created_action(previous_action):
        return False

    if is_renamed_action(previous_action) or is_renamed_action(current_action):
        return False

    if previous_action.delegate_account_id != current_action.delegate_account_id:
        return False

    if is_report_preview_action(previous_action) != is_report_preview_action(current_action):
        return False

    if is_submitted_action(current_action):
        admin_account_id = current_action.admin_account_id
        return admin_account_id in (
            previous_action.actor_account_id,
            previous_action.admin_account_id,
        )

    if is_submitted_action(previous_action):
        if previous_action.admin_account_id is not None:
            return current_action.actor_account_id == previous_action.admin_account_id
        return current_action.actor_account_id == previous_action.actor_account_id

    return current_action.actor_account_id == previous_action.actor_account_id


def get_most_recent_iou_request_action_id(
    report_actions: Optional[Sequence[ReportAction]],
) -> Optional[str]:
    """Id of the newest create / split / track money request, if any."""
    if not isinstance(report_actions, (list, tuple)):
        return None
    iou_request_actions = [
        action
        for action in report_actions
        if get_iou_type(action) in IOU_REQUEST_ACTION_TYPES
    ]
    if not iou_request_actions:
        return None
    return get_sorted_report_actions(iou_request_actions)[-1].report_action_id


def get_first_visible_report_action_id(
    sorted_report_actions: Optional[Sequence[ReportAction]] = None,
    is_offline: bool = False,
) -> str:
    """
    Id of the oldest content action in a newest-first list.

    The very last entry is always the created action, so the first content
    action is the one before it, ignoring deleted actions without visible
    children (offline every action counts).
    """
    if not isinstance(sorted_report_actions, (list, tuple)):
        return ""
    remaining = [
        action
        for action in sorted_report_actions
        if is_offline
        or not is_deleted_action(action)
        or (action.child_visible_action_count or 0) > 0
    ]
    return remaining[-2].report_action_id if len(remaining) > 1 else ""
