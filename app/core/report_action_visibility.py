"""
Per-viewer visibility rules for report actions.

Everything here is a pure decision over one action (and, for the batch
helper, one keyed collection). The viewer is passed explicitly.
"""

from __future__ import annotations

from typing import Mapping, Optional, Union

from app.constants.report_actions import (
    DEPRECATED_ACTION_NAMES,
    SUPPORTED_ACTION_NAMES,
    PendingAction,
    ReportActionName,
)
from app.core.report_action_predicates import (
    is_deleted_action,
    is_deleted_parent_action,
    is_money_request_action,
    is_pending_remove,
    is_report_preview_action,
    is_resolved_action_track_expense,
    is_reversed_transaction,
    is_trip_preview,
    is_whisper_action,
    is_whisper_action_targeted_to_others,
)
from app.infra.logging_config import get_logger
from app.schemas.report_action import ReportAction

logger = get_logger("visibility")


def is_report_action_deprecated(
    action: Optional[ReportAction], key: Union[str, int, None]
) -> bool:
    """
    Deprecated actions are absent ones, ones still keyed by their legacy
    sequence number, and retired legacy kinds.
    """
    if action is None:
        return True

    # Collections keyed by sequence number predate stable ids and are unreliable
    if action.sequence_number is not None and str(action.sequence_number) == str(key):
        logger.info(
            "Filtered out report action %s keyed by sequence number",
            action.report_action_id,
        )
        return True

    if action.action_name in DEPRECATED_ACTION_NAMES:
        logger.info(
            "Filtered out deprecated report action %s of kind %s",
            action.report_action_id,
            action.action_name,
        )
        return True

    return False


def should_report_action_be_visible(
    action: Optional[ReportAction],
    key: Union[str, int, None],
    current_account_id: Optional[int] = None,
) -> bool:
    """Whether ``action`` belongs in the timeline shown to ``current_account_id``."""
    if action is None:
        return False

    if is_report_action_deprecated(action, key):
        return False

    if action.action_name not in SUPPORTED_ACTION_NAMES:
        return False

    # Closed reports show a footer instead
    if action.action_name == ReportActionName.CLOSED:
        return False

    # Already described by the IOU action it belongs to
    if action.action_name == ReportActionName.MARKED_REIMBURSED:
        return False

    if is_whisper_action_targeted_to_others(action, current_account_id):
        return False

    if is_pending_remove(action) and not action.child_visible_action_count:
        return False

    if is_trip_preview(action):
        return True

    is_deleted = is_deleted_action(action)
    is_pending = bool(action.pending_action)
    return (
        not is_deleted
        or is_pending
        or is_deleted_parent_action(action)
        or is_reversed_transaction(action)
    )


def should_report_action_be_visible_as_last_action(
    action: Optional[ReportAction], current_account_id: Optional[int] = None
) -> bool:
    """
    Stricter rule for the preview line of a report: no failed sends, no
    whispers except previews and money requests, and no deleted content.
    """
    if action is None:
        return False

    if action.errors:
        return False

    return (
        should_report_action_be_visible(
            action, action.report_action_id, current_account_id
        )
        and not (
            is_whisper_action(action)
            and not is_report_preview_action(action)
            and not is_money_request_action(action)
        )
        and not (is_deleted_action(action) and not is_deleted_parent_action(action))
        and not is_resolved_action_track_expense(action)
    )


def should_hide_new_marker(action: Optional[ReportAction], is_offline: bool = False) -> bool:
    if action is None:
        return True
    return not is_offline and action.pending_action == PendingAction.DELETE


def filter_out_deprecated_report_actions(
    report_actions: Optional[Mapping[str, Optional[ReportAction]]],
) -> list[ReportAction]:
    """Values of a keyed collection, without deprecated entries."""
    return [
        action
        for key, action in (report_actions or {}).items()
        if not is_report_action_deprecated(action, key)
    ]
