"""Snapshot-bound report action queries: display streams, last-visible state and lookups."""

from __future__ import annotations

from typing import Any, Mapping, Optional, Sequence, Union

from pydantic import BaseModel, Field

from app.config import get_settings
from app.constants.report_actions import (
    ATTACHMENT_MESSAGE_TEXT,
    ATTACHMENT_TRANSLATION_KEY,
    EPOCH_DB_TIME,
    IOU_THREAD_ACTION_TYPES,
    ONE_TRANSACTION_REPORT_TYPES,
    ChatType,
    IOUActionType,
    PendingAction,
    ReportActionName,
)
from app.core.localize import DEFAULT_TRANSLATOR, Translator
from app.core.report_action_messages import (
    get_actionable_mention_whisper_message,
    get_member_change_message_fragment,
    get_member_change_message_plain_text,
    get_report_action_message,
    get_text_from_html,
    replace_base_url_in_policy_change_log_action,
)
from app.core.report_action_predicates import (
    get_iou_type,
    get_linked_transaction_id,
    get_original_message,
    is_actionable_join_request,
    is_closed_action,
    is_created_action,
    is_deleted_action,
    is_message_deleted,
    is_money_request_action,
    is_report_message_attachment,
    is_report_action_unread,
    is_report_preview_action,
    is_sent_money_report_action,
    is_task_action,
    is_whisper_action_targeted_to_others,
    was_action_taken_by_account,
)
from app.core.report_action_sorting import (
    get_continuous_report_action_chain,
    get_first_visible_report_action_id,
    get_sorted_report_actions,
    is_consecutive_action_made_by_previous_actor,
)
from app.core.report_action_visibility import (
    filter_out_deprecated_report_actions,
    should_report_action_be_visible,
    should_report_action_be_visible_as_last_action,
)
from app.infra.logging_config import get_logger
from app.schemas.report import Report
from app.schemas.report_action import Message, ReportAction
from app.schemas.snapshot import ReportActionsSnapshot
from app.utils.html_text import line_breaks_to_spaces
from app.utils.merge import merge_report_actions

logger = get_logger("report_actions_service")

ReportActionCollection = Union[Mapping[str, ReportAction], Sequence[ReportAction]]


class LastVisibleMessage(BaseModel):
    """Preview line of a report, as shown in the report list."""

    last_message_translation_key: Optional[str] = Field(
        None, alias="lastMessageTranslationKey"
    )
    last_message_text: str = Field("", alias="lastMessageText")
    last_message_html: Optional[str] = Field(None, alias="lastMessageHtml")

    model_config = {"populate_by_name": True}


def _as_keyed(report_actions: Optional[ReportActionCollection]) -> dict[str, ReportAction]:
    """Key a list by action id; mappings are returned as a plain dict."""
    if not report_actions:
        return {}
    if isinstance(report_actions, Mapping):
        return dict(report_actions)
    return {
        action.report_action_id: action
        for action in report_actions
        if action is not None
    }


class ReportActionsService:
    """
    Answers report action queries against one store snapshot.

    The snapshot supplies the reports, their actions, the viewer and the
    connectivity state, so every method is a pure function of its arguments
    and the snapshot given at construction.
    """

    def __init__(
        self,
        snapshot: ReportActionsSnapshot,
        translator: Optional[Translator] = None,
    ) -> None:
        self.snapshot = snapshot
        self.translator = translator or DEFAULT_TRANSLATOR
        self.settings = get_settings()
        self.environment_url = snapshot.environment_url or self.settings.environment_url

    # Lookups

    def get_all_report_actions(self, report_id: Optional[str]) -> dict[str, ReportAction]:
        return self.snapshot.get_report_actions(report_id)

    def get_report_action(
        self, report_id: Optional[str], report_action_id: Optional[str]
    ) -> Optional[ReportAction]:
        if not report_action_id:
            return None
        return self.get_all_report_actions(report_id).get(str(report_action_id))

    def get_parent_report_action(self, report: Optional[Report]) -> Optional[ReportAction]:
        """The action a thread or task report hangs off, if the report is one."""
        if report is None or not report.parent_report_id or not report.parent_report_action_id:
            return None
        return self.get_report_action(report.parent_report_id, report.parent_report_action_id)

    def get_report_preview_action(
        self, chat_report_id: str, iou_report_id: str
    ) -> Optional[ReportAction]:
        """The preview in a chat that links to ``iou_report_id``."""
        for action in self.get_all_report_actions(chat_report_id).values():
            if not is_report_preview_action(action):
                continue
            linked_report_id = (get_original_message(action) or {}).get("linkedReportID")
            if linked_report_id is not None and str(linked_report_id) == str(iou_report_id):
                return action
        return None

    def get_iou_action_for_report_id(
        self, report_id: str, transaction_id: str
    ) -> Optional[ReportAction]:
        """The money request action of ``report_id`` for one transaction."""
        report = self.snapshot.get_report(report_id)
        if report is None:
            return None
        for action in self.get_all_report_actions(report.report_id).values():
            if get_linked_transaction_id(action) == str(transaction_id):
                return action
        return None

    def get_linked_transaction_id(
        self,
        action_or_id: Union[ReportAction, str, None],
        report_id: Optional[str] = None,
    ) -> Optional[str]:
        """Like the plain accessor, but also resolves an action id within ``report_id``."""
        if isinstance(action_or_id, str):
            action_or_id = self.get_report_action(report_id, action_or_id)
        return get_linked_transaction_id(action_or_id)

    def get_last_closed_report_action(
        self, report_actions: Optional[Mapping[str, ReportAction]]
    ) -> Optional[ReportAction]:
        """
        Newest closed action of a report. Archived rooms may carry several,
        and some archived system rooms carry none.
        """
        if not any(is_closed_action(action) for action in (report_actions or {}).values()):
            return None
        sorted_actions = get_sorted_report_actions(
            filter_out_deprecated_report_actions(report_actions)
        )
        closed_actions = [action for action in sorted_actions if is_closed_action(action)]
        return closed_actions[-1] if closed_actions else None

    # Display streams

    def get_sorted_report_actions_for_display(
        self,
        report_actions: Optional[ReportActionCollection],
        include_invisible: bool = False,
    ) -> list[ReportAction]:
        """
        Newest-first actions ready to render, with workspace change log links
        pointing at this environment.
        """
        if not report_actions:
            return []

        if include_invisible:
            actions = [action for action in _as_keyed(report_actions).values() if action]
        else:
            actions = [
                action
                for key, action in _as_keyed(report_actions).items()
                if should_report_action_be_visible(
                    action, key, self.snapshot.current_account_id
                )
            ]

        adjusted = [
            replace_base_url_in_policy_change_log_action(action, self.environment_url)
            for action in actions
        ]
        return get_sorted_report_actions(adjusted, descending=True)

    def get_continuous_chain_for_report(
        self, report_id: str, anchor_id: Optional[str] = None
    ) -> list[ReportAction]:
        sorted_actions = self.get_sorted_report_actions_for_display(
            self.get_all_report_actions(report_id), include_invisible=True
        )
        return get_continuous_report_action_chain(sorted_actions, anchor_id)

    def get_one_transaction_thread_report_id(
        self,
        report_id: str,
        report_actions: Optional[ReportActionCollection],
        is_offline: Optional[bool] = None,
    ) -> Optional[str]:
        """
        Child thread id when ``report_id`` is an expense-type report backed by
        exactly one transaction, otherwise ``None``.
        """
        report = self.snapshot.get_report(report_id)
        if report is None or report.type not in ONE_TRANSACTION_REPORT_TYPES:
            return None

        actions = list(_as_keyed(report_actions).values())
        if not actions:
            return None

        offline = self.snapshot.is_offline if is_offline is None else is_offline
        iou_actions = []
        for action in actions:
            if get_iou_type(action) not in IOU_THREAD_ACTION_TYPES or not action.child_report_id:
                continue
            original_message = get_original_message(action) or {}
            # Deleted requests still count while they carry a transaction,
            # have visible replies, or are only pending deletion offline.
            if (
                original_message.get("IOUTransactionID")
                or (is_message_deleted(action) and action.child_visible_action_count)
                or (action.pending_action == PendingAction.DELETE and offline)
            ):
                iou_actions.append(action)

        if len(iou_actions) != 1:
            return None

        iou_action = iou_actions[0]
        is_deleted = (get_original_message(iou_action) or {}).get("deleted") or is_deleted_action(
            iou_action
        )
        if is_deleted and not (iou_action.child_visible_action_count or 0) > 0:
            logger.debug(
                "Report %s has a single deleted money request, not a one-transaction report",
                report_id,
            )
            return None

        return iou_action.child_report_id

    def get_combined_report_actions(
        self,
        report_actions: Sequence[ReportAction],
        transaction_thread_report_id: Optional[str],
        transaction_thread_report_actions: Optional[Sequence[ReportAction]],
        report_id: Optional[str] = None,
    ) -> list[ReportAction]:
        """
        Merge a one-transaction report with its transaction thread into one
        newest-first stream, without the thread's created action and without
        the money request previews that only spawned the thread.
        """
        if not transaction_thread_report_actions and not transaction_thread_report_id:
            return list(report_actions)

        thread_actions = [
            action
            for action in transaction_thread_report_actions or []
            if action.action_name != ReportActionName.CREATED
        ]
        report = self.snapshot.get_report(report_id)
        is_self_dm = report is not None and report.chat_type == ChatType.SELF_DM

        def keep(action: ReportAction) -> bool:
            if not is_money_request_action(action):
                return True
            iou_type = get_iou_type(action)
            if is_sent_money_report_action(action) or iou_type == IOUActionType.CREATE:
                return False
            # Self DMs keep tracked expenses.
            return is_self_dm or iou_type != IOUActionType.TRACK

        combined = [action for action in [*report_actions, *thread_actions] if keep(action)]
        return get_sorted_report_actions(combined, descending=True)

    # Last visible state

    def _merged_actions(
        self, report_id: str, actions_to_merge: Optional[Mapping[str, Any]] = None
    ) -> list[ReportAction]:
        return list(
            merge_report_actions(
                self.get_all_report_actions(report_id), actions_to_merge
            ).values()
        )

    def get_last_visible_action(
        self, report_id: str, actions_to_merge: Optional[Mapping[str, Any]] = None
    ) -> Optional[ReportAction]:
        """Newest action fit for the report preview, after applying pending updates."""
        visible = [
            action
            for action in self._merged_actions(report_id, actions_to_merge)
            if should_report_action_be_visible_as_last_action(
                action, self.snapshot.current_account_id
            )
        ]
        sorted_actions = get_sorted_report_actions(visible, descending=True)
        return sorted_actions[0] if sorted_actions else None

    def get_last_visible_message(
        self,
        report_id: str,
        actions_to_merge: Optional[Mapping[str, Any]] = None,
        report_action: Optional[ReportAction] = None,
    ) -> LastVisibleMessage:
        last_visible_action = report_action or self.get_last_visible_action(
            report_id, actions_to_merge
        )
        message = get_report_action_message(last_visible_action)

        if message is not None and is_report_message_attachment(message):
            return LastVisibleMessage(
                last_message_translation_key=ATTACHMENT_TRANSLATION_KEY,
                last_message_text=ATTACHMENT_MESSAGE_TEXT,
                last_message_html=ATTACHMENT_TRANSLATION_KEY,
            )

        if is_created_action(last_visible_action):
            return LastVisibleMessage(last_message_text="")

        message_text = get_text_from_html(message.html if message else None)
        if message_text:
            max_length = self.settings.last_message_text_max_length
            message_text = line_breaks_to_spaces(message_text)[:max_length].strip()
        return LastVisibleMessage(last_message_text=message_text)

    def does_report_have_visible_actions(
        self, report_id: str, actions_to_merge: Optional[Mapping[str, Any]] = None
    ) -> bool:
        """Whether anything besides the created action and task system messages is left."""
        return any(
            should_report_action_be_visible_as_last_action(
                action, self.snapshot.current_account_id
            )
            and not is_task_action(action)
            and not is_created_action(action)
            for action in self._merged_actions(report_id, actions_to_merge)
        )

    def get_most_recent_report_action_last_modified(self) -> str:
        """
        Newest modification time across all confirmed actions and reports.
        Pending actions are skipped because the server may know of newer ones.
        """
        most_recent = EPOCH_DB_TIME
        for actions in self.snapshot.report_actions.values():
            for action in actions.values():
                if action.pending_action:
                    continue
                last_modified = action.last_modified or action.created
                if last_modified >= most_recent:
                    most_recent = last_modified

        for report in self.snapshot.reports.values():
            report_last_modified = (
                report.last_visible_action_last_modified
                or report.last_visible_action_created
            )
            if report_last_modified and report_last_modified >= most_recent:
                most_recent = report_last_modified

        return most_recent

    # Current viewer

    def has_request_from_current_account(
        self, report_id: Optional[str], current_account_id: Optional[int] = None
    ) -> bool:
        if not report_id:
            return False
        account_id = (
            self.snapshot.current_account_id
            if current_account_id is None
            else current_account_id
        )
        return any(
            is_money_request_action(action) and action.actor_account_id == account_id
            for action in self.get_all_report_actions(report_id).values()
        )

    def is_current_action_unread(self, report: Report, action: ReportAction) -> bool:
        """True for the oldest unread action, the one the "new" marker goes above."""
        last_read_time = report.last_read_time or ""
        sorted_actions = get_sorted_report_actions(
            list(self.get_all_report_actions(report.report_id).values())
        )
        index = next(
            (
                i
                for i, candidate in enumerate(sorted_actions)
                if candidate.report_action_id == action.report_action_id
            ),
            -1,
        )
        if index == -1:
            return False
        previous_action = sorted_actions[index - 1] if index > 0 else None
        return is_report_action_unread(action, last_read_time) and (
            previous_action is None
            or not is_report_action_unread(previous_action, last_read_time)
        )

    def is_actionable_join_request_pending(self, report_id: str) -> bool:
        return any(
            is_actionable_join_request(action)
            and (get_original_message(action) or {}).get("choice") == ""
            for action in self.get_all_report_actions(report_id).values()
        )

    def was_action_taken_by_current_user(self, action: Optional[ReportAction]) -> bool:
        return was_action_taken_by_account(action, self.snapshot.current_account_id)

    def is_whisper_action_targeted_to_others(self, action: Optional[ReportAction]) -> bool:
        return is_whisper_action_targeted_to_others(action, self.snapshot.current_account_id)

    def is_consecutive_action_made_by_previous_actor(
        self, report_actions: Sequence[ReportAction], action_index: int
    ) -> bool:
        return is_consecutive_action_made_by_previous_actor(
            report_actions,
            action_index,
            self.snapshot.is_offline,
            self.settings.consecutive_action_window_ms,
        )

    def get_first_visible_report_action_id(
        self, sorted_report_actions: Sequence[ReportAction]
    ) -> str:
        return get_first_visible_report_action_id(
            sorted_report_actions, self.snapshot.is_offline
        )

    # Rendering

    def get_member_change_message_fragment(self, action: ReportAction) -> Message:
        return get_member_change_message_fragment(
            action,
            self.snapshot.personal_details,
            self.environment_url,
            self.translator,
        )

    def get_member_change_message_plain_text(self, action: ReportAction) -> str:
        return get_member_change_message_plain_text(
            action, self.snapshot.personal_details, self.translator
        )

    def get_actionable_mention_whisper_message(self, action: ReportAction) -> str:
        return get_actionable_mention_whisper_message(
            action, self.snapshot.personal_details, self.translator
        )
