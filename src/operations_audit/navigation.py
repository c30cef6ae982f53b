"""Step transition table for the pre-audit wizard.

Every (step, action) pair has an entry. None means the action is not
offered on that step. The table is checked for completeness when built.

The `results` step has no inbound or outbound edges: it is kept as a
defined step but disabled in the default flow.
"""

from __future__ import annotations

from typing import Mapping

from .models import ACTIONS, QUESTION_STEPS, STEPS, Action, Step

Transitions = Mapping[Step, Mapping[Action, Step | None]]

DISABLED_STEPS: frozenset[Step] = frozenset({"results"})


def _question_edges() -> dict[Step, dict[Action, Step | None]]:
    edges: dict[Step, dict[Action, Step | None]] = {}
    chain: list[Step] = ["intro", *QUESTION_STEPS, "loading"]
    for prev, step, nxt in zip(chain, chain[1:], chain[2:]):
        edges[step] = {"next": nxt, "previous": prev, "skip": nxt, "timeout": None}
    return edges


DEFAULT_TRANSITIONS: dict[Step, dict[Action, Step | None]] = {
    "intro": {"next": "q1", "previous": None, "skip": None, "timeout": None},
    **_question_edges(),
    "loading": {"next": None, "previous": None, "skip": None, "timeout": "contact"},
    "results": {"next": None, "previous": None, "skip": None, "timeout": None},
    # Previous from contact goes back to the last question, never to loading
    "contact": {"next": "final", "previous": "q9", "skip": None, "timeout": None},
    "final": {"next": "done", "previous": "contact", "skip": None, "timeout": None},
    "done": {"next": None, "previous": None, "skip": None, "timeout": None},
}


class TransitionTable:
    """Total lookup of (step, action) -> next step."""

    def __init__(self, transitions: Transitions = DEFAULT_TRANSITIONS):
        """Build and validate a transition table.

        Args:
            transitions: Mapping of step -> action -> target step (or None)

        Raises:
            ValueError: If a step or action is missing, or a target is unknown
        """
        self._validate(transitions)
        self._table = {step: dict(transitions[step]) for step in STEPS}

    @staticmethod
    def _validate(transitions: Transitions) -> None:
        missing_steps = [s for s in STEPS if s not in transitions]
        if missing_steps:
            raise ValueError(f"Transition table missing steps: {missing_steps}")

        unknown_steps = [s for s in transitions if s not in STEPS]
        if unknown_steps:
            raise ValueError(f"Transition table has unknown steps: {unknown_steps}")

        for step in STEPS:
            row = transitions[step]
            missing_actions = [a for a in ACTIONS if a not in row]
            if missing_actions:
                raise ValueError(f"Step {step!r} missing actions: {missing_actions}")
            for action, target in row.items():
                if action not in ACTIONS:
                    raise ValueError(f"Step {step!r} has unknown action {action!r}")
                if target is not None and target not in STEPS:
                    raise ValueError(f"Step {step!r} --{action}--> unknown step {target!r}")

        for step in DISABLED_STEPS:
            if any(transitions[step].values()):
                raise ValueError(f"Disabled step {step!r} must have no outgoing edges")
            for source in STEPS:
                if step in transitions[source].values():
                    raise ValueError(f"Disabled step {step!r} is reachable from {source!r}")

    def target(self, step: Step, action: Action) -> Step | None:
        """Next step for an action, or None when the action is not offered."""
        return self._table[step][action]

    def allows(self, step: Step, action: Action) -> bool:
        return self._table[step][action] is not None

    def is_terminal(self, step: Step) -> bool:
        return not any(self._table[step].values())
