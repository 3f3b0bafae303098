"""
Pydantic schemas for report actions.

Wire keys are the store's camelCase keys; attributes are snake_case and both
are accepted on input. The ``message`` payload arrives either as a single
object or as a list of fragments; it is normalized once here into a list of
fragments plus a ``message_format`` tag recording the original shape.
"""

from __future__ import annotations

from typing import Any, Optional, Union

from pydantic import BaseModel, Field, model_serializer, model_validator

from app.constants.report_actions import MessageFormat


class Message(BaseModel):
    """One fragment of an action's message payload."""

    html: Optional[str] = None
    text: Optional[str] = None
    type: Optional[str] = None
    deleted: Optional[Union[bool, str]] = None
    is_deleted_parent_action: Optional[bool] = Field(
        None, alias="isDeletedParentAction"
    )
    is_reversed_transaction: Optional[bool] = Field(
        None, alias="isReversedTransaction"
    )
    whispered_to: Optional[list[int]] = Field(None, alias="whisperedTo")
    moderation_decision: Optional[dict[str, Any]] = Field(
        None, alias="moderationDecision"
    )
    translation_key: Optional[str] = Field(None, alias="translationKey")
    is_edited: Optional[bool] = Field(None, alias="isEdited")

    model_config = {"populate_by_name": True, "extra": "allow", "frozen": True}


class ReportAction(BaseModel):
    """A single conversation event. Immutable once validated."""

    report_action_id: str = Field(alias="reportActionID")
    report_id: Optional[str] = Field(None, alias="reportID")
    action_name: str = Field(alias="actionName")
    created: str = ""
    previous_report_action_id: Optional[str] = Field(
        None, alias="previousReportActionID"
    )
    actor_account_id: Optional[int] = Field(None, alias="actorAccountID")
    delegate_account_id: Optional[int] = Field(None, alias="delegateAccountID")
    admin_account_id: Optional[int] = Field(None, alias="adminAccountID")
    message: list[Message] = Field(default_factory=list)
    message_format: MessageFormat = Field(MessageFormat.LIST, alias="messageFormat")
    original_message: Optional[dict[str, Any]] = Field(None, alias="originalMessage")
    child_report_id: Optional[str] = Field(None, alias="childReportID")
    child_type: Optional[str] = Field(None, alias="childType")
    child_visible_action_count: Optional[int] = Field(
        None, alias="childVisibleActionCount"
    )
    child_money_request_count: Optional[int] = Field(
        None, alias="childMoneyRequestCount"
    )
    pending_action: Optional[str] = Field(None, alias="pendingAction")
    is_optimistic_action: Optional[bool] = Field(None, alias="isOptimisticAction")
    errors: Optional[dict[str, Any]] = None
    sequence_number: Optional[int] = Field(None, alias="sequenceNumber")
    last_modified: Optional[str] = Field(None, alias="lastModified")
    resolution: Optional[str] = None
    is_attachment: Optional[bool] = Field(None, alias="isAttachment")
    attachment_info: Optional[dict[str, Any]] = Field(None, alias="attachmentInfo")

    model_config = {
        "populate_by_name": True,
        "extra": "allow",
        "frozen": True,
        "coerce_numbers_to_str": True,
    }

    @model_validator(mode="before")
    @classmethod
    def normalize_message(cls, values: Any) -> Any:
        """Turn the single-object / fragment-list payload into fragments + tag."""
        if not isinstance(values, dict):
            return values
        values = dict(values)
        message = values.get("message")
        if message is None:
            fragments, message_format = [], MessageFormat.LIST
        elif isinstance(message, (list, tuple)):
            fragments = [fragment for fragment in message if fragment is not None]
            message_format = MessageFormat.LIST
        else:
            fragments, message_format = [message], MessageFormat.OBJECT
        values["message"] = fragments
        # A previously dumped action already carries its tag.
        if "messageFormat" not in values and "message_format" not in values:
            values["messageFormat"] = message_format
        return values

    @model_serializer(mode="wrap")
    def serialize_message(self, handler):
        """Dump ``message`` back in the representation it arrived in."""
        data = handler(self)
        if self.message_format == MessageFormat.OBJECT and self.message:
            data["message"] = data["message"][0]
        return data

    @property
    def first_message(self) -> Optional[Message]:
        return self.message[0] if self.message else None

    def to_wire(self) -> dict[str, Any]:
        """Dump with store keys, dropping unset optional fields."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)
