"""Fixtures and builders for report actions, reports and snapshots."""

import pytest

from app.schemas.report import PersonalDetails, Report
from app.schemas.report_action import ReportAction
from app.schemas.snapshot import ReportActionsSnapshot

CURRENT_ACCOUNT_ID = 5
OTHER_ACCOUNT_ID = 9


def build_report_action(
    report_action_id: str,
    action_name: str = "ADDCOMMENT",
    created: str = "2024-01-01 10:00:00.000",
    html: str | None = "<p>hello</p>",
    **fields,
) -> ReportAction:
    """
    Build a wire-shaped action. ``html=None`` leaves ``message`` out unless
    it is given explicitly in ``fields``.
    """
    data = {
        "reportActionID": report_action_id,
        "actionName": action_name,
        "created": created,
    }
    if html is not None and "message" not in fields:
        data["message"] = [{"html": html, "text": html, "type": "COMMENT"}]
    data.update(fields)
    return ReportAction.model_validate(data)


def build_iou_action(
    report_action_id: str,
    iou_type: str = "create",
    created: str = "2024-01-01 10:00:00.000",
    **fields,
) -> ReportAction:
    original_message = {"type": iou_type, "IOUTransactionID": f"txn-{report_action_id}"}
    original_message.update(fields.pop("original_message", {}))
    return build_report_action(
        report_action_id,
        action_name="IOU",
        created=created,
        originalMessage=original_message,
        **fields,
    )


def build_linked_chain(count: int, start_minute: int = 0) -> list[ReportAction]:
    """Newest-first actions each pointing back at the next older one."""
    actions = []
    for index in range(count):
        previous_id = str(index - 1) if index > 0 else None
        actions.append(
            build_report_action(
                str(index),
                created=f"2024-01-01 10:{start_minute + index:02d}:00.000",
                previousReportActionID=previous_id,
            )
        )
    return list(reversed(actions))


def build_snapshot(
    reports=None,
    report_actions=None,
    current_account_id=CURRENT_ACCOUNT_ID,
    **fields,
) -> ReportActionsSnapshot:
    keyed_actions = {
        report_id: {action.report_action_id: action for action in actions}
        for report_id, actions in (report_actions or {}).items()
    }
    return ReportActionsSnapshot(
        reports={report.report_id: report for report in (reports or [])},
        report_actions=keyed_actions,
        current_account_id=current_account_id,
        **fields,
    )


@pytest.fixture(scope="function")
def personal_details(faker):
    """Two people: one with a display name, one known only by an SMS login."""
    return {
        CURRENT_ACCOUNT_ID: PersonalDetails(
            account_id=CURRENT_ACCOUNT_ID, display_name=faker.first_name()
        ),
        OTHER_ACCOUNT_ID: PersonalDetails(
            account_id=OTHER_ACCOUNT_ID, login="+15551234567@expensify.sms"
        ),
    }


@pytest.fixture(scope="function")
def chat_report():
    return Report(report_id="100", type="chat", last_read_time="2024-01-01 10:01:00.000")


@pytest.fixture(scope="function")
def chat_report_actions(faker):
    """A small confirmed conversation: created, two comments, a whisper to someone else."""
    return [
        build_report_action("1", action_name="CREATED", created="2024-01-01 10:00:00.000"),
        build_report_action(
            "2",
            created="2024-01-01 10:01:00.000",
            html=f"<p>{faker.sentence()}</p>",
            previousReportActionID="1",
            actorAccountID=CURRENT_ACCOUNT_ID,
        ),
        build_report_action(
            "3",
            created="2024-01-01 10:02:00.000",
            html="<p>latest<br>reply</p>",
            previousReportActionID="2",
            actorAccountID=OTHER_ACCOUNT_ID,
        ),
        build_report_action(
            "4",
            action_name="ACTIONABLEMENTIONWHISPER",
            created="2024-01-01 10:03:00.000",
            previousReportActionID="3",
            message=[{"html": "whisper", "text": "whisper", "whisperedTo": [OTHER_ACCOUNT_ID]}],
        ),
    ]


@pytest.fixture(scope="function")
def setup_chat_snapshot(chat_report, chat_report_actions, personal_details):
    """Snapshot holding the chat report, viewed by ``CURRENT_ACCOUNT_ID``."""
    return ReportActionsSnapshot(
        reports={chat_report.report_id: chat_report},
        report_actions={
            chat_report.report_id: {
                action.report_action_id: action for action in chat_report_actions
            }
        },
        personal_details=personal_details,
        current_account_id=CURRENT_ACCOUNT_ID,
        environment_url="https://staging.example.com",
    )


@pytest.fixture(scope="function")
def setup_one_transaction_snapshot():
    """
    An expense report with one money request whose transaction thread has a
    created action and a comment.
    """
    expense_report = Report(report_id="200", type="expense", chat_type=None)
    thread_report = Report(
        report_id="300",
        type="chat",
        parent_report_id="200",
        parent_report_action_id="21",
    )
    expense_actions = [
        build_report_action("20", action_name="CREATED", created="2024-01-02 09:00:00.000"),
        build_iou_action(
            "21",
            created="2024-01-02 09:01:00.000",
            childReportID="300",
            previousReportActionID="20",
        ),
    ]
    thread_actions = [
        build_report_action("30", action_name="CREATED", created="2024-01-02 09:01:00.000"),
        build_report_action(
            "31",
            created="2024-01-02 09:05:00.000",
            html="<p>receipt attached</p>",
            previousReportActionID="30",
        ),
    ]
    return build_snapshot(
        reports=[expense_report, thread_report],
        report_actions={"200": expense_actions, "300": thread_actions},
    )
