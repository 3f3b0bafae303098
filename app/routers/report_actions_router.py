"""Report actions API: stateless views over a store snapshot sent in the request body."""

from typing import Any, Optional

from fastapi import APIRouter, HTTPException, Query
from pydantic import BaseModel

from app.core.report_action_sorting import get_sorted_report_actions
from app.infra.logging_config import get_logger
from app.schemas.report_action import ReportAction
from app.schemas.snapshot import ReportActionsSnapshot
from app.services.report_actions_service import ReportActionsService

logger = get_logger("report_actions_router")

router = APIRouter(
    prefix="/report-actions",
    tags=["report-actions"],
    responses={404: {"description": "Not found"}},
)


class SortReportActionsRequest(BaseModel):
    """Actions to order, in any arrival order."""

    actions: list[Optional[ReportAction]]


def _to_wire(actions: list[ReportAction]) -> list[dict[str, Any]]:
    return [action.to_wire() for action in actions]


@router.post("/sort")
def sort_report_actions(
    data: SortReportActionsRequest,
    descending: bool = Query(False),
) -> dict:
    """Sort actions into the canonical order."""
    return {"data": _to_wire(get_sorted_report_actions(data.actions, descending))}


@router.post("/{report_id}/display")
def get_report_actions_for_display(
    report_id: str,
    snapshot: ReportActionsSnapshot,
    include_invisible: bool = Query(False),
) -> dict:
    """Newest-first actions of a report as the viewer should see them."""
    svc = ReportActionsService(snapshot)
    actions = svc.get_sorted_report_actions_for_display(
        svc.get_all_report_actions(report_id), include_invisible
    )
    return {"data": _to_wire(actions)}


@router.post("/{report_id}/chain")
def get_continuous_chain(
    report_id: str,
    snapshot: ReportActionsSnapshot,
    anchor_id: Optional[str] = Query(None),
) -> dict:
    """Gapless slice of the report's actions around ``anchor_id``."""
    svc = ReportActionsService(snapshot)
    if not svc.get_all_report_actions(report_id):
        raise HTTPException(status_code=404, detail="Report actions not found")
    chain = svc.get_continuous_chain_for_report(report_id, anchor_id)
    logger.debug("Chain for report %s anchored at %s has %d actions", report_id, anchor_id, len(chain))
    return {"data": _to_wire(chain)}


@router.post("/{report_id}/last-visible")
def get_last_visible(report_id: str, snapshot: ReportActionsSnapshot) -> dict:
    """Last visible action and the preview line derived from it."""
    svc = ReportActionsService(snapshot)
    action = svc.get_last_visible_action(report_id)
    message = svc.get_last_visible_message(report_id, report_action=action)
    return {
        "data": {
            "action": action.to_wire() if action else None,
            "message": message.model_dump(by_alias=True),
            "hasVisibleActions": svc.does_report_have_visible_actions(report_id),
        }
    }


@router.post("/{report_id}/combined")
def get_combined_report_actions(report_id: str, snapshot: ReportActionsSnapshot) -> dict:
    """
    Display stream of a one-transaction report merged with its transaction
    thread; other reports get their own display stream.
    """
    svc = ReportActionsService(snapshot)
    report_actions = svc.get_all_report_actions(report_id)
    thread_report_id = svc.get_one_transaction_thread_report_id(report_id, report_actions)
    thread_actions = (
        svc.get_sorted_report_actions_for_display(
            svc.get_all_report_actions(thread_report_id)
        )
        if thread_report_id
        else []
    )
    combined = svc.get_combined_report_actions(
        svc.get_sorted_report_actions_for_display(report_actions),
        thread_report_id,
        thread_actions,
        report_id,
    )
    return {
        "data": {
            "transactionThreadReportID": thread_report_id,
            "actions": _to_wire(combined),
        }
    }
