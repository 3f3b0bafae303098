"""Pydantic schemas for reports (conversations) and the people in them."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field


class Report(BaseModel):
    """A conversation record as held by the store."""

    report_id: str = Field(alias="reportID")
    type: Optional[str] = None
    chat_type: Optional[str] = Field(None, alias="chatType")
    last_read_time: Optional[str] = Field(None, alias="lastReadTime")
    parent_report_id: Optional[str] = Field(None, alias="parentReportID")
    parent_report_action_id: Optional[str] = Field(
        None, alias="parentReportActionID"
    )
    last_visible_action_created: Optional[str] = Field(
        None, alias="lastVisibleActionCreated"
    )
    last_visible_action_last_modified: Optional[str] = Field(
        None, alias="lastVisibleActionLastModified"
    )

    model_config = {
        "populate_by_name": True,
        "extra": "allow",
        "frozen": True,
        "coerce_numbers_to_str": True,
    }


class PersonalDetails(BaseModel):
    """Display information for one account."""

    account_id: int = Field(alias="accountID")
    display_name: Optional[str] = Field(None, alias="displayName")
    login: Optional[str] = None

    model_config = {"populate_by_name": True, "extra": "allow", "frozen": True}

    @property
    def effective_display_name(self) -> Optional[str]:
        """Display name, falling back to the login without its SMS domain."""
        if self.display_name:
            return self.display_name
        if self.login:
            return self.login.removesuffix("@expensify.sms")
        return None
