"""
Classification of report actions.

Every predicate accepts ``None`` and answers ``False`` for it, so callers can
pass whatever the store returned without checking first. Kind checks all go
through ``is_action_of_type``.
"""

from __future__ import annotations

import re
from typing import Any, Optional

from app.constants.report_actions import (
    APPROVED_OR_SUBMITTED_ACTION_NAMES,
    ATTACHMENT_MESSAGE_TEXT,
    ATTACHMENT_SOURCE_ATTRIBUTE,
    ATTACHMENT_TRANSLATION_KEY,
    ATTACHMENT_UPLOADING_MESSAGE_HTML,
    INVITE_MEMBER_ACTION_NAMES,
    MEMBER_CHANGE_ACTION_NAMES,
    MODERATOR_DECISION_PENDING_REMOVE,
    NOTIFIABLE_ACTION_NAMES,
    OLD_DOT_ACTION_NAMES,
    TASK_ACTION_NAMES,
    IOUActionType,
    MessageFormat,
    PendingAction,
    PolicyChangeLogName,
    ReportActionName,
    ReportType,
    RoomChangeLogName,
)
from app.schemas.report_action import Message, ReportAction

_ATTACHMENT_SOURCE = re.compile(
    rf' {ATTACHMENT_SOURCE_ATTRIBUTE}="(.*)"', re.IGNORECASE
)


def is_action_of_type(action: Optional[ReportAction], *action_names: str) -> bool:
    """True when the action's discriminant is one of ``action_names``."""
    if action is None:
        return False
    return action.action_name in action_names


def get_original_message(action: Optional[ReportAction]) -> Optional[dict[str, Any]]:
    """
    Return the kind-specific payload of an action.

    Actions sent in the single-object form carry it inline in ``message``;
    the list form keeps it in ``originalMessage``.
    """
    if action is None:
        return None
    if action.message_format == MessageFormat.OBJECT and action.first_message:
        return action.first_message.model_dump(by_alias=True, exclude_none=True)
    return action.original_message


def get_iou_type(action: Optional[ReportAction]) -> Optional[str]:
    """IOU ``type`` of a money request action, ``None`` for any other kind."""
    if not is_money_request_action(action):
        return None
    return (get_original_message(action) or {}).get("type")


def is_created_action(action: Optional[ReportAction]) -> bool:
    return is_action_of_type(action, ReportActionName.CREATED)


def is_deleted_action(action: Optional[ReportAction]) -> bool:
    """
    Deleted actions have an empty message, an empty first html fragment
    (legacy convention) or an explicit deletion flag on the first fragment.
    """
    if action is None:
        return False
    first = action.first_message
    if first is None or first.html == "":
        return True
    return bool(first.deleted)


def is_deleted_parent_action(action: Optional[ReportAction]) -> bool:
    """
    A deleted thread parent that still has visible replies, so it stays on
    screen as a placeholder. Either the explicit fragment flag or the
    deletion itself marks it.
    """
    if action is None or (action.child_visible_action_count or 0) <= 0:
        return False
    first = action.first_message
    flagged = first is not None and bool(first.is_deleted_parent_action)
    return flagged or is_deleted_action(action)


def is_reversed_transaction(action: Optional[ReportAction]) -> bool:
    if action is None or action.first_message is None:
        return False
    return bool(action.first_message.is_reversed_transaction) and (
        action.child_visible_action_count or 0
    ) > 0


def is_pending_remove(action: Optional[ReportAction]) -> bool:
    """True when a moderator decision to remove the message is pending."""
    if action is None or action.first_message is None:
        return False
    decision = action.first_message.moderation_decision or {}
    return decision.get("decision") == MODERATOR_DECISION_PENDING_REMOVE


def is_message_deleted(action: Optional[ReportAction]) -> bool:
    if action is None or action.first_message is None:
        return False
    return bool(action.first_message.is_deleted_parent_action)


def is_money_request_action(action: Optional[ReportAction]) -> bool:
    return is_action_of_type(action, ReportActionName.IOU)


def is_report_preview_action(action: Optional[ReportAction]) -> bool:
    return is_action_of_type(action, ReportActionName.REPORT_PREVIEW)


def is_submitted_action(action: Optional[ReportAction]) -> bool:
    return is_action_of_type(action, ReportActionName.SUBMITTED)


def is_modified_expense_action(action: Optional[ReportAction]) -> bool:
    return is_action_of_type(action, ReportActionName.MODIFIED_EXPENSE)


def is_policy_change_log_action(action: Optional[ReportAction]) -> bool:
    return is_action_of_type(action, *PolicyChangeLogName)


def is_room_change_log_action(action: Optional[ReportAction]) -> bool:
    return is_action_of_type(action, *RoomChangeLogName)


def is_chronos_ooo_list_action(action: Optional[ReportAction]) -> bool:
    return is_action_of_type(action, ReportActionName.CHRONOS_OOO_LIST)


def is_add_comment_action(action: Optional[ReportAction]) -> bool:
    return is_action_of_type(action, ReportActionName.ADD_COMMENT)


def is_created_task_report_action(action: Optional[ReportAction]) -> bool:
    """A comment that created a task report."""
    return is_add_comment_action(action) and bool(
        (get_original_message(action) or {}).get("taskReportID")
    )


def is_trip_preview(action: Optional[ReportAction]) -> bool:
    return is_action_of_type(action, ReportActionName.TRIP_PREVIEW)


def is_reimbursement_queued_action(action: Optional[ReportAction]) -> bool:
    return is_action_of_type(action, ReportActionName.REIMBURSEMENT_QUEUED)


def is_reimbursement_dequeued_action(action: Optional[ReportAction]) -> bool:
    return is_action_of_type(action, ReportActionName.REIMBURSEMENT_DEQUEUED)


def is_member_change_action(action: Optional[ReportAction]) -> bool:
    return is_action_of_type(action, *MEMBER_CHANGE_ACTION_NAMES)


def is_invite_member_action(action: Optional[ReportAction]) -> bool:
    return is_action_of_type(action, *INVITE_MEMBER_ACTION_NAMES)


def is_leave_policy_action(action: Optional[ReportAction]) -> bool:
    return is_action_of_type(action, PolicyChangeLogName.LEAVE_POLICY)


def is_closed_action(action: Optional[ReportAction]) -> bool:
    return is_action_of_type(action, ReportActionName.CLOSED)


def is_renamed_action(action: Optional[ReportAction]) -> bool:
    return is_action_of_type(action, ReportActionName.RENAMED)


def is_task_action(action: Optional[ReportAction]) -> bool:
    """Task system messages (completed, cancelled, reopened, edited)."""
    return is_action_of_type(action, *TASK_ACTION_NAMES)


def is_actionable_track_expense(action: Optional[ReportAction]) -> bool:
    return is_action_of_type(action, ReportActionName.ACTIONABLE_TRACK_EXPENSE_WHISPER)


def is_resolved_action_track_expense(action: Optional[ReportAction]) -> bool:
    return is_actionable_track_expense(action) and bool(action.resolution)


def is_actionable_mention_whisper(action: Optional[ReportAction]) -> bool:
    return is_action_of_type(action, ReportActionName.ACTIONABLE_MENTION_WHISPER)


def is_actionable_report_mention_whisper(action: Optional[ReportAction]) -> bool:
    return is_action_of_type(
        action, ReportActionName.ACTIONABLE_REPORT_MENTION_WHISPER
    )


def is_actionable_join_request(action: Optional[ReportAction]) -> bool:
    return is_action_of_type(action, ReportActionName.ACTIONABLE_JOIN_REQUEST)


def is_approved_or_submitted_report_action(action: Optional[ReportAction]) -> bool:
    return is_action_of_type(action, *APPROVED_OR_SUBMITTED_ACTION_NAMES)


def is_notifiable_report_action(action: Optional[ReportAction]) -> bool:
    return is_action_of_type(action, *NOTIFIABLE_ACTION_NAMES)


def is_old_dot_report_action(action: Optional[ReportAction]) -> bool:
    """Kinds produced by the legacy backend."""
    return is_action_of_type(action, *OLD_DOT_ACTION_NAMES)


def is_split_bill_action(action: Optional[ReportAction]) -> bool:
    return get_iou_type(action) == IOUActionType.SPLIT


def is_track_expense_action(action: Optional[ReportAction]) -> bool:
    return get_iou_type(action) == IOUActionType.TRACK


def is_pay_action(action: Optional[ReportAction]) -> bool:
    return get_iou_type(action) == IOUActionType.PAY


def is_sent_money_report_action(action: Optional[ReportAction]) -> bool:
    """A pay-type IOU that carries its own IOU details (money sent directly)."""
    return is_pay_action(action) and bool(
        (get_original_message(action) or {}).get("IOUDetails")
    )


def is_transaction_thread(parent_action: Optional[ReportAction]) -> bool:
    """
    True when a thread hangs off an IOU action that requested, tracked or
    directly sent money, i.e. the thread is about a single transaction.
    """
    iou_type = get_iou_type(parent_action)
    if iou_type in (IOUActionType.CREATE, IOUActionType.TRACK):
        return True
    return is_sent_money_report_action(parent_action)


def is_thread_parent_message(action: Optional[ReportAction], report_id: str) -> bool:
    """True for the chat message a thread was started from."""
    if action is None or action.child_type != ReportType.CHAT:
        return False
    return (action.child_visible_action_count or 0) > 0 or str(
        action.child_report_id
    ) == str(report_id)


def get_whispered_to(action: Optional[ReportAction]) -> list[int]:
    """Recipients of a whisper; empty for actions visible to everyone."""
    if action is None:
        return []
    first = action.first_message
    if first is not None and first.whispered_to is not None:
        return list(first.whispered_to)
    original_message = get_original_message(action) or {}
    return list(original_message.get("whisperedTo") or [])


def is_whisper_action(action: Optional[ReportAction]) -> bool:
    return len(get_whispered_to(action)) > 0


def is_whisper_action_targeted_to_others(
    action: Optional[ReportAction], current_account_id: Optional[int]
) -> bool:
    """True for a whisper the current viewer is not a recipient of."""
    if not is_whisper_action(action):
        return False
    viewer = current_account_id if current_account_id is not None else -1
    return viewer not in get_whispered_to(action)


def is_optimistic_action(action: Optional[ReportAction]) -> bool:
    """Unconfirmed actions: flagged optimistic, or pending add / delete."""
    if action is None:
        return False
    return bool(action.is_optimistic_action) or action.pending_action in (
        PendingAction.ADD,
        PendingAction.DELETE,
    )


def is_report_message_attachment(message: Optional[Message]) -> bool:
    """True when a message fragment is an uploaded file rather than text."""
    if message is None or not message.text or not message.html:
        return False
    if message.translation_key:
        return message.translation_key == ATTACHMENT_TRANSLATION_KEY
    has_source = _ATTACHMENT_SOURCE.search(message.html) is not None
    return message.text == ATTACHMENT_MESSAGE_TEXT and (
        has_source or message.html == ATTACHMENT_UPLOADING_MESSAGE_HTML
    )


def is_report_action_attachment(action: Optional[ReportAction]) -> bool:
    if action is None:
        return False
    if action.is_attachment is not None:
        return action.is_attachment
    if action.attachment_info is not None:
        return bool(action.attachment_info)
    return is_report_message_attachment(action.first_message)


def is_report_action_unread(action: Optional[ReportAction], last_read_time: str) -> bool:
    """Unread when created after ``last_read_time``; with no read time, anything but the created action."""
    if not last_read_time:
        return not is_created_action(action)
    return bool(action is not None and action.created and last_read_time < action.created)


def was_action_taken_by_account(
    action: Optional[ReportAction], account_id: Optional[int]
) -> bool:
    if action is None or account_id is None:
        return False
    return action.actor_account_id == account_id


def get_number_of_money_requests(action: Optional[ReportAction]) -> int:
    """Expense count of a report preview."""
    if action is None:
        return 0
    return action.child_money_request_count or 0


def get_iou_report_id_from_report_action_preview(action: Optional[ReportAction]) -> str:
    if not is_report_preview_action(action):
        return "-1"
    linked = (get_original_message(action) or {}).get("linkedReportID")
    return str(linked) if linked else "-1"


def get_linked_transaction_id(action: Optional[ReportAction]) -> Optional[str]:
    """Transaction behind a money request action, if any."""
    if not is_money_request_action(action):
        return None
    transaction_id = (get_original_message(action) or {}).get("IOUTransactionID")
    return str(transaction_id) if transaction_id else None
