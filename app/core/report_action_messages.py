"""
Canonical text and html views of an action's message payload, plus the
sentences the engine builds itself for membership changes and mention
whispers.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Mapping, Optional

from app.constants.report_actions import BASE_URL_PLACEHOLDER, MessageFormat
from app.core.localize import DEFAULT_TRANSLATOR, Translator, format_list_with_separators
from app.core.report_action_predicates import (
    get_original_message,
    is_invite_member_action,
    is_leave_policy_action,
    is_member_change_action,
    is_policy_change_log_action,
)
from app.schemas.report import PersonalDetails
from app.schemas.report_action import Message, ReportAction
from app.utils.html_text import extract_anchor_hrefs, parse_html_to_text

_LAST_LIST_SEPARATOR = re.compile(r", ([^,]*)$")


@dataclass(frozen=True)
class MessageElement:
    """One piece of a rendered sentence: plain text, a user mention or a room link."""

    kind: str
    content: str
    account_id: Optional[int] = None
    room_name: Optional[str] = None
    room_id: Optional[str] = None


def get_report_action_message(action: Optional[ReportAction]) -> Optional[Message]:
    """The primary fragment of an action's message."""
    if action is None:
        return None
    return action.first_message


def get_text_from_html(markup: Optional[str]) -> str:
    return parse_html_to_text(markup) if markup else ""


def get_report_action_html(action: Optional[ReportAction]) -> str:
    message = get_report_action_message(action)
    return (message.html if message else None) or ""


def get_report_action_text(action: Optional[ReportAction]) -> str:
    """Plain text of the primary fragment; an empty html falls back to ``text``."""
    message = get_report_action_message(action)
    if message is None:
        return ""
    return get_text_from_html(message.html or message.text)


def get_report_action_message_text(action: Optional[ReportAction]) -> str:
    """Plain text of every fragment, concatenated in order."""
    if action is None:
        return ""
    if action.message_format != MessageFormat.LIST:
        return get_report_action_text(action)
    return "".join(
        get_text_from_html(fragment.html or fragment.text) for fragment in action.message
    )


def get_message_of_old_dot_report_action(action: Optional[ReportAction]) -> str:
    """
    Legacy backend actions carry their sentence split over several fragments;
    for now the text of all of them is concatenated without separators.
    """
    return get_report_action_message_text(action)


def extract_links_from_message_html(action: Optional[ReportAction]) -> list[str]:
    return extract_anchor_hrefs(get_report_action_html(action))


def _display_name_or_hidden(
    account_id: int,
    personal_details: Mapping[int, PersonalDetails],
    translator: Translator,
) -> str:
    details = personal_details.get(account_id)
    display_name = details.effective_display_name if details else None
    return display_name or translator.translate("common.hidden")


def get_member_change_message_elements(
    action: Optional[ReportAction],
    personal_details: Mapping[int, PersonalDetails],
    translator: Translator = DEFAULT_TRANSLATOR,
) -> list[MessageElement]:
    """
    Build "<verb> @a, @b and @c [to|from #room]" as a list of elements.

    Empty for anything that is not a membership change.
    """
    if not is_member_change_action(action):
        return []

    is_invite = is_invite_member_action(action)
    verb = translator.translate("workspace.invite.removed")
    if is_invite:
        verb = translator.translate("workspace.invite.invited")
    if is_leave_policy_action(action):
        verb = translator.translate("workspace.invite.leftWorkspace")

    original_message = get_original_message(action) or {}
    target_account_ids: list[int] = original_message.get("targetAccountIDs") or []
    mentions = [
        MessageElement(
            kind="userMention",
            content=f"@{_display_name_or_hidden(account_id, personal_details, translator)}",
            account_id=account_id,
        )
        for account_id in target_account_ids
    ]
    mentions_with_separators = format_list_with_separators(
        mentions,
        MessageElement(kind="text", content=", "),
        MessageElement(kind="text", content=", and "),
        pair_separator=MessageElement(kind="text", content=" and "),
    )

    room_elements: list[MessageElement] = []
    room_name = original_message.get("roomName")
    room_id = original_message.get("reportID")
    if room_name and room_id:
        preposition_key = "workspace.invite.to" if is_invite else "workspace.invite.from"
        room_elements = [
            MessageElement(kind="text", content=f" {translator.translate(preposition_key)} "),
            MessageElement(
                kind="roomReference",
                content=room_name,
                room_name=room_name,
                room_id=str(room_id),
            ),
        ]

    return [
        MessageElement(kind="text", content=f"{verb} "),
        *mentions_with_separators,
        *room_elements,
    ]


def get_member_change_message_fragment(
    action: Optional[ReportAction],
    personal_details: Mapping[int, PersonalDetails],
    environment_url: str,
    translator: Translator = DEFAULT_TRANSLATOR,
) -> Message:
    """Render a membership change as a muted html comment fragment."""
    parts = []
    for element in get_member_change_message_elements(action, personal_details, translator):
        if element.kind == "userMention":
            parts.append(
                f"<mention-user accountID={element.account_id}>{element.content}</mention-user>"
            )
        elif element.kind == "roomReference":
            parts.append(
                f'<a href="{environment_url}/r/{element.room_id}" target="_blank">{element.room_name}</a>'
            )
        else:
            parts.append(element.content)

    text = get_report_action_text(action) if get_report_action_message(action) else ""
    return Message(html=f"<muted-text>{''.join(parts)}</muted-text>", text=text, type="COMMENT")


def get_member_change_message_plain_text(
    action: Optional[ReportAction],
    personal_details: Mapping[int, PersonalDetails],
    translator: Translator = DEFAULT_TRANSLATOR,
) -> str:
    elements = get_member_change_message_elements(action, personal_details, translator)
    return "".join(element.content for element in elements)


def get_actionable_mention_whisper_message(
    action: Optional[ReportAction],
    personal_details: Mapping[int, PersonalDetails],
    translator: Translator = DEFAULT_TRANSLATOR,
) -> str:
    """Warn that mentioned people are not members of the room."""
    if action is None:
        return ""
    original_message = get_original_message(action) or {}
    invitee_account_ids: list[int] = original_message.get("inviteeAccountIDs") or []
    mentions = [
        f"<mention-user accountID={account_id}>"
        f"@{_display_name_or_hidden(account_id, personal_details, translator)}"
        "</mention-user>"
        for account_id in invitee_account_ids
    ]
    joined = _LAST_LIST_SEPARATOR.sub(r" and \1", ", ".join(mentions))
    membership = "aren't members" if len(mentions) > 1 else "isn't a member"
    return f"Heads up, {joined} {membership} of this room."


def get_dismissed_violation_message_text(
    original_message: Optional[dict[str, Any]],
    translator: Translator = DEFAULT_TRANSLATOR,
) -> str:
    original_message = original_message or {}
    reason = original_message.get("reason")
    violation_name = original_message.get("violationName")
    return translator.translate(f"violationDismissal.{violation_name}.{reason}")


def replace_base_url_in_policy_change_log_action(
    action: ReportAction, environment_url: str
) -> ReportAction:
    """
    Workspace change logs are rendered server side with a ``%baseURL``
    placeholder in their links; return a copy with the placeholder filled in.
    """
    if not action.message or not is_policy_change_log_action(action):
        return action
    if action.message_format != MessageFormat.LIST:
        return action

    first = action.message[0]
    html = get_report_action_html(action).replace(BASE_URL_PLACEHOLDER, environment_url, 1)
    fragments = [first.model_copy(update={"html": html}), *action.message[1:]]
    return action.model_copy(update={"message": fragments})
