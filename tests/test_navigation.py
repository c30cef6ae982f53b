import copy

import pytest

from operations_audit.models import ACTIONS, STEPS
from operations_audit.navigation import DEFAULT_TRANSITIONS, TransitionTable


def test_default_table_is_total() -> None:
    table = TransitionTable()
    for step in STEPS:
        for action in ACTIONS:
            target = table.target(step, action)
            assert target is None or target in STEPS


def test_forward_chain_reaches_done() -> None:
    table = TransitionTable()
    path = ["intro"]
    step = "intro"
    while True:
        target = table.target(step, "next") or table.target(step, "timeout")
        if target is None:
            break
        path.append(target)
        step = target

    assert path == [
        "intro", "q1", "q2", "q3", "q4", "q5", "q6", "q7", "q8", "q9",
        "loading", "contact", "final", "done",
    ]


def test_previous_from_contact_skips_loading() -> None:
    table = TransitionTable()
    assert table.target("contact", "previous") == "q9"
    for step in STEPS:
        assert table.target(step, "previous") != "loading"


def test_backward_chain_mirrors_forward() -> None:
    table = TransitionTable()
    assert table.target("final", "previous") == "contact"
    assert table.target("q1", "previous") == "intro"
    assert table.target("q5", "previous") == "q4"
    assert table.target("intro", "previous") is None


def test_skip_only_on_question_steps() -> None:
    table = TransitionTable()
    skippable = [s for s in STEPS if table.allows(s, "skip")]
    assert skippable == ["q1", "q2", "q3", "q4", "q5", "q6", "q7", "q8", "q9"]
    assert table.target("q9", "skip") == "loading"


def test_loading_only_leaves_by_timeout() -> None:
    table = TransitionTable()
    assert table.target("loading", "timeout") == "contact"
    assert not table.allows("loading", "next")
    assert not table.allows("loading", "previous")
    assert not table.allows("loading", "skip")


def test_results_and_done_have_no_edges() -> None:
    table = TransitionTable()
    assert table.is_terminal("done")
    assert table.is_terminal("results")
    for step in STEPS:
        assert "results" not in [table.target(step, a) for a in ACTIONS]


def test_missing_step_is_rejected() -> None:
    transitions = copy.deepcopy(DEFAULT_TRANSITIONS)
    del transitions["q4"]
    with pytest.raises(ValueError, match="missing steps"):
        TransitionTable(transitions)


def test_missing_action_is_rejected() -> None:
    transitions = copy.deepcopy(DEFAULT_TRANSITIONS)
    del transitions["q4"]["skip"]
    with pytest.raises(ValueError, match="missing actions"):
        TransitionTable(transitions)


def test_unknown_target_is_rejected() -> None:
    transitions = copy.deepcopy(DEFAULT_TRANSITIONS)
    transitions["q4"]["next"] = "q10"
    with pytest.raises(ValueError, match="unknown step"):
        TransitionTable(transitions)


def test_wiring_disabled_results_step_is_rejected() -> None:
    transitions = copy.deepcopy(DEFAULT_TRANSITIONS)
    transitions["q9"]["next"] = "results"
    with pytest.raises(ValueError, match="results"):
        TransitionTable(transitions)
