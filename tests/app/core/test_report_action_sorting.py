"""Tests for ordering, continuity chains and actor grouping."""

import time

import pytest

from app.core.exceptions import InvalidReportActionsError
from app.core.report_action_sorting import (
    compare_report_actions,
    find_previous_action,
    get_continuous_report_action_chain,
    get_first_visible_report_action_id,
    get_most_recent_iou_request_action_id,
    get_sorted_report_actions,
    is_consecutive_action_made_by_previous_actor,
    should_ignore_gap,
)
from tests.fixtures.report_action_fixtures import (
    build_iou_action,
    build_linked_chain,
    build_report_action,
)


def _ids(actions):
    return [action.report_action_id for action in actions]


def test_sort_by_created_ascending_and_descending():
    """Actions sort by creation time in either direction."""
    actions = [
        build_report_action("b", created="2024-01-01 10:02:00.000"),
        build_report_action("a", created="2024-01-01 10:00:00.000"),
        build_report_action("c", created="2024-01-01 10:01:00.000"),
    ]
    assert _ids(get_sorted_report_actions(actions)) == ["a", "c", "b"]
    assert _ids(get_sorted_report_actions(actions, descending=True)) == ["b", "c", "a"]


def test_created_first_and_preview_last_on_same_timestamp():
    """Created sorts first and previews last on equal timestamps."""
    same = "2024-01-01 10:00:00.000"
    actions = [
        build_report_action("1", action_name="REPORTPREVIEW", created=same),
        build_report_action("2", created=same),
        build_report_action("3", action_name="CREATED", created=same),
    ]
    assert _ids(get_sorted_report_actions(actions)) == ["3", "2", "1"]
    assert _ids(get_sorted_report_actions(actions, descending=True)) == ["1", "2", "3"]


def test_ties_broken_by_id():
    """Equal timestamps fall back to the action id."""
    same = "2024-01-01 10:00:00.000"
    actions = [build_report_action(i, created=same) for i in ("9", "10", "1")]
    assert _ids(get_sorted_report_actions(actions)) == ["1", "10", "9"]


def test_compare_is_antisymmetric():
    """Swapping the operands negates the comparison."""
    first = build_report_action("1", created="2024-01-01 10:00:00.000")
    second = build_report_action("2", created="2024-01-01 10:00:00.000")
    assert compare_report_actions(first, second) == -compare_report_actions(second, first)
    assert compare_report_actions(first, first) == 0


def test_sort_is_idempotent_and_does_not_mutate_input():
    """Sorting twice gives the same order and leaves the input alone."""
    actions = [
        build_report_action("b", created="2024-01-01 10:02:00.000"),
        build_report_action("a", created="2024-01-01 10:00:00.000"),
    ]
    once = get_sorted_report_actions(actions, descending=True)
    assert get_sorted_report_actions(once, descending=True) == once
    assert _ids(actions) == ["b", "a"]


def test_sort_drops_missing_entries():
    """Missing entries are dropped before sorting."""
    actions = [None, build_report_action("a")]
    assert _ids(get_sorted_report_actions(actions)) == ["a"]


def test_sort_rejects_non_sequence_input():
    """A mapping is rejected as input to the sort."""
    with pytest.raises(InvalidReportActionsError) as exc_info:
        get_sorted_report_actions({"a": build_report_action("a")})
    assert isinstance(exc_info.value, TypeError)
    assert exc_info.value.received_type == "dict"


def test_fully_linked_chain_is_continuous():
    """A fully linked list is one chain."""
    actions = build_linked_chain(5)
    assert get_continuous_report_action_chain(actions) == actions


def test_single_break_truncates_chain():
    """A broken back-reference ends the chain."""
    actions = build_linked_chain(5)
    broken = [
        action.model_copy(update={"previous_report_action_id": "x"})
        if action.report_action_id == "2"
        else action
        for action in actions
    ]
    assert _ids(get_continuous_report_action_chain(broken)) == ["4", "3", "2"]
    assert _ids(get_continuous_report_action_chain(broken, "1")) == ["1", "0"]


def test_missing_anchor_returns_empty_chain():
    """An unknown anchor yields an empty chain."""
    assert get_continuous_report_action_chain(build_linked_chain(3), "404") == []


def test_all_optimistic_actions_are_continuous():
    """Optimistic actions alone form one chain."""
    actions = [
        build_report_action(str(i), pendingAction="add", created=f"2024-01-01 10:0{i}:00.000")
        for i in range(3, 0, -1)
    ]
    assert get_continuous_report_action_chain(actions) == actions


def test_optimistic_action_bridges_gap():
    """An optimistic action joins the chain it sits above."""
    actions = build_linked_chain(3)
    optimistic = build_report_action(
        "opt", created="2024-01-01 10:09:00.000", isOptimisticAction=True
    )
    assert _ids(get_continuous_report_action_chain([optimistic, *actions])) == [
        "opt",
        "2",
        "1",
        "0",
    ]


def test_should_ignore_gap_room_invite_only_on_current():
    """Room invites skip the gap only as the current action."""
    invite = build_report_action("1", action_name="INVITETOROOM")
    comment = build_report_action("2")
    assert should_ignore_gap(invite, comment) is True
    assert should_ignore_gap(comment, invite) is False
    created = build_report_action("3", action_name="CREATED")
    assert should_ignore_gap(comment, created) is True
    assert should_ignore_gap(comment, None) is False


def _comment(report_action_id, created, actor=1, **fields):
    return build_report_action(
        report_action_id, created=created, actorAccountID=actor, **fields
    )


def test_consecutive_within_window_boundary():
    """Actions exactly five minutes apart still group."""
    actions = [
        _comment("2", "2024-01-01 10:05:00.000"),
        _comment("1", "2024-01-01 10:00:00.000"),
        build_report_action("0", action_name="CREATED", created="2024-01-01 09:59:00.000"),
    ]
    assert is_consecutive_action_made_by_previous_actor(actions, 0) is True
    assert is_consecutive_action_made_by_previous_actor(actions, 1) is False

    late = [_comment("2", "2024-01-01 10:05:00.001"), *actions[1:]]
    assert is_consecutive_action_made_by_previous_actor(late, 0) is False


def test_consecutive_requires_same_actor_and_delegate():
    """Different actors or delegates never group."""
    other_actor = [_comment("2", "2024-01-01 10:01:00.000", actor=2), _comment("1", "2024-01-01 10:00:00.000")]
    assert is_consecutive_action_made_by_previous_actor(other_actor, 0) is False

    delegated = [
        _comment("2", "2024-01-01 10:01:00.000", delegateAccountID=7),
        _comment("1", "2024-01-01 10:00:00.000"),
    ]
    assert is_consecutive_action_made_by_previous_actor(delegated, 0) is False


def test_consecutive_never_groups_renamed_actions():
    """Renames always stand on their own."""
    actions = [
        _comment("2", "2024-01-01 10:01:00.000"),
        build_report_action(
            "1", action_name="RENAMED", created="2024-01-01 10:00:00.000", actorAccountID=1
        ),
    ]
    assert is_consecutive_action_made_by_previous_actor(actions, 0) is False


def test_consecutive_skips_pending_delete_unless_offline():
    """Pending deletes are skipped when looking back, unless offline."""
    actions = [
        _comment("3", "2024-01-01 10:02:00.000"),
        _comment("2", "2024-01-01 10:01:00.000", actor=2, pendingAction="delete"),
        _comment("1", "2024-01-01 10:00:00.000"),
    ]
    assert find_previous_action(actions, 0).report_action_id == "1"
    assert is_consecutive_action_made_by_previous_actor(actions, 0) is True
    assert is_consecutive_action_made_by_previous_actor(actions, 0, is_offline=True) is False


def test_submitted_groups_with_admin():
    """Submitted actions group with the admin who submitted."""
    actions = [
        build_report_action(
            "2",
            action_name="SUBMITTED",
            created="2024-01-01 10:01:00.000",
            actorAccountID=3,
            adminAccountID=1,
        ),
        _comment("1", "2024-01-01 10:00:00.000"),
    ]
    assert is_consecutive_action_made_by_previous_actor(actions, 0) is True


@pytest.fixture
def daylight_saving_timezone(monkeypatch):
    if not hasattr(time, "tzset"):
        pytest.skip("time.tzset is not available on this platform")
    monkeypatch.setenv("TZ", "America/New_York")
    time.tzset()
    yield
    monkeypatch.undo()
    time.tzset()


def test_consecutive_window_ignores_host_timezone(daylight_saving_timezone):
    """Naive store timestamps are read as UTC across a local clock change."""
    actions = [
        _comment("2", "2024-03-10 03:01:00.000"),
        _comment("1", "2024-03-10 01:59:00.000"),
    ]
    assert is_consecutive_action_made_by_previous_actor(actions, 0) is False


def test_consecutive_unparseable_created_is_not_grouped():
    """An action whose timestamp cannot be parsed starts its own group."""
    actions = [
        _comment("2", "not a timestamp"),
        _comment("1", "2024-01-01 10:00:00.000"),
    ]
    assert is_consecutive_action_made_by_previous_actor(actions, 0) is False


def test_consecutive_out_of_range_index():
    """Out of range indexes never group."""
    assert is_consecutive_action_made_by_previous_actor([], 0) is False
    assert is_consecutive_action_made_by_previous_actor(build_linked_chain(2), 5) is False


def test_most_recent_iou_request_action_id():
    """The newest create or track request wins."""
    actions = [
        build_iou_action("a", "create", created="2024-01-01 10:00:00.000"),
        build_iou_action("b", "track", created="2024-01-01 10:05:00.000"),
        build_iou_action("c", "pay", created="2024-01-01 10:10:00.000"),
        build_report_action("d", created="2024-01-01 10:20:00.000"),
    ]
    assert get_most_recent_iou_request_action_id(actions) == "b"
    assert get_most_recent_iou_request_action_id([]) is None
    assert get_most_recent_iou_request_action_id(None) is None


def test_first_visible_report_action_id():
    """The first visible id skips pending deletes."""
    actions = [
        build_report_action("3", created="2024-01-01 10:03:00.000"),
        build_report_action("2", created="2024-01-01 10:02:00.000"),
        build_report_action("1", created="2024-01-01 10:01:00.000", message=[]),
        build_report_action("0", action_name="CREATED", created="2024-01-01 10:00:00.000"),
    ]
    assert get_first_visible_report_action_id(actions) == "2"
    assert get_first_visible_report_action_id(actions, is_offline=True) == "1"
    assert get_first_visible_report_action_id(actions[-1:]) == ""
    assert get_first_visible_report_action_id(None) == ""
