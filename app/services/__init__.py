from app.services.report_actions_service import LastVisibleMessage, ReportActionsService

__all__ = [
    "LastVisibleMessage",
    "ReportActionsService",
]
