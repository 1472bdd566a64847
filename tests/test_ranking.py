from datetime import datetime

from case_analytics.adapters import CASE_ADAPTER, TASK_ADAPTER
from case_analytics.ranking import rank_fastest, rank_participants

from factories import make_case, make_task, noon, user


def ids(entries):
    return [(entry.identity.id, entry.count) for entry in entries]


def test_ties_keep_first_encounter_order():
    cases = [
        make_case(noon(2024, 1, 1), creator=user("a")),
        make_case(noon(2024, 1, 1), creator=user("b")),
        make_case(noon(2024, 1, 1), creator=user("c")),
        make_case(noon(2024, 1, 1), creator=user("b")),
        make_case(noon(2024, 1, 1), creator=user("a")),
    ]
    ranking = rank_participants(cases, CASE_ADAPTER.roles["creators"])
    assert ids(ranking) == [("a", 2), ("b", 2), ("c", 1)]


def test_higher_count_wins_over_encounter_order():
    cases = [make_case(noon(2024, 1, 1), creator=user(uid)) for uid in ["x", "y", "y"]]
    assert ids(rank_participants(cases, CASE_ADAPTER.roles["creators"])) == [("y", 2), ("x", 1)]


def test_first_identity_object_is_kept():
    cases = [
        make_case(noon(2024, 1, 1), creator=user("a", "Ann")),
        make_case(noon(2024, 1, 1), creator=user("a", "Ann Renamed")),
    ]
    ranking = rank_participants(cases, CASE_ADAPTER.roles["creators"])
    assert ranking[0].identity.display_name == "Ann"
    assert ranking[0].count == 2


def test_incomplete_identities_are_skipped():
    cases = [
        make_case(noon(2024, 1, 1), creator={"name": "No Id"}),
        make_case(noon(2024, 1, 1), creator={"_id": "nameless"}),
        make_case(noon(2024, 1, 1), creator=user("ok", "")),
        make_case(noon(2024, 1, 1)),
    ]
    assert rank_participants(cases, CASE_ADAPTER.roles["creators"]) == []


def test_empty_input():
    assert rank_participants([], CASE_ADAPTER.roles["approvers"]) == []


def test_solution_providers_and_approvers_count_each_answer():
    case = make_case(
        noon(2024, 1, 1),
        answers=[
            {"creator": user("s1"), "approved": user("boss")},
            {"creator": user("s1")},
            {"creator": user("s2"), "approved": user("boss")},
        ],
    )
    assert ids(rank_participants([case], CASE_ADAPTER.roles["solution_providers"])) == [("s1", 2), ("s2", 1)]
    assert ids(rank_participants([case], CASE_ADAPTER.roles["approvers"])) == [("boss", 2)]


def test_raters_counted_once_per_case():
    cases = [
        make_case(noon(2024, 1, 1), metricScores=[
            {"user": user("r1"), "score": 4},
            {"user": user("r1"), "score": 5},
            {"user": user("r2"), "score": 3},
        ]),
        make_case(noon(2024, 1, 2), metricScores=[{"user": user("r2"), "score": 2}]),
    ]
    assert ids(rank_participants(cases, CASE_ADAPTER.roles["raters"])) == [("r2", 2), ("r1", 1)]


def test_task_completers_and_commenters():
    tasks = [
        make_task(noon(2024, 1, 1), "DONE", assignee=user("dev")),
        make_task(noon(2024, 1, 1), "IN_PROGRESS", assignee=user("dev")),
        make_task(noon(2024, 1, 1), "done", assignee=user("qa"), activities=[
            {"type": "COMMENT", "createdBy": user("pm")},
            {"type": "STATUS_CHANGE", "createdBy": user("qa")},
            {"type": "comment", "createdBy": user("pm")},
        ]),
    ]
    assert ids(rank_participants(tasks, TASK_ADAPTER.roles["completers"])) == [("dev", 1), ("qa", 1)]
    assert ids(rank_participants(tasks, TASK_ADAPTER.roles["commenters"])) == [("pm", 2)]


def test_fastest_completers_ascending():
    tasks = [
        make_task(datetime(2024, 1, 1), "DONE", assignee=user("slow"), completedAt=datetime(2024, 1, 5)),
        make_task(datetime(2024, 1, 1), "DONE", assignee=user("quick"), completedAt=datetime(2024, 1, 1, 12)),
        make_task(datetime(2024, 1, 1), "DONE", assignee=user("quick"), completedAt=datetime(2024, 1, 2, 12)),
        make_task(datetime(2024, 1, 1), "DONE", assignee=user("nodate")),
        make_task(datetime(2024, 1, 1), "TODO", assignee=user("open"), completedAt=datetime(2024, 1, 2)),
    ]
    fastest = rank_fastest(tasks, TASK_ADAPTER)
    assert [(e.identity.id, e.average_days, e.count) for e in fastest] == [
        ("quick", 1.0, 2),
        ("slow", 4.0, 1),
    ]
