"""
Read-only view of the store that every snapshot-bound query runs against.

The store keeps this current through its own subscriptions; the engine only
reads it. Callers treat each result as a point-in-time view of the snapshot
they passed in.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field

from app.schemas.report import PersonalDetails, Report
from app.schemas.report_action import ReportAction


class ReportActionsSnapshot(BaseModel):
    """Reports, their actions keyed by action key, and session state."""

    reports: dict[str, Report] = Field(default_factory=dict)
    report_actions: dict[str, dict[str, ReportAction]] = Field(
        default_factory=dict, alias="reportActions"
    )
    personal_details: dict[int, PersonalDetails] = Field(
        default_factory=dict, alias="personalDetails"
    )
    current_account_id: Optional[int] = Field(None, alias="currentAccountID")
    is_offline: bool = Field(False, alias="isOffline")
    environment_url: Optional[str] = Field(None, alias="environmentURL")

    model_config = {"populate_by_name": True, "frozen": True}

    def get_report(self, report_id: Optional[str]) -> Optional[Report]:
        if not report_id:
            return None
        return self.reports.get(str(report_id))

    def get_report_actions(self, report_id: Optional[str]) -> dict[str, ReportAction]:
        """Actions of one report keyed by action key; empty when unknown."""
        if not report_id:
            return {}
        return self.report_actions.get(str(report_id), {})

    def get_personal_details(self, account_id: int) -> Optional[PersonalDetails]:
        return self.personal_details.get(account_id)
