"""Gene-run results (actions) and brain-level results (decisions)."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from evonomics.domain.direction import MooreDirection


class ActionKind(Enum):
    """Outcome of executing a single gene."""

    NOTHING = "nothing"
    WRITE = "write"
    MOVE = "move"
    DIVIDE = "divide"
    TRADE = "trade"
    ROTATE_LEFT = "rotate_left"
    ROTATE_RIGHT = "rotate_right"


@dataclass(frozen=True)
class Action:
    """What a gene run asked for. Only the fields relevant to ``kind`` are set."""

    kind: ActionKind
    register: int = 0
    value: float = 0.0
    direction: MooreDirection | None = None
    quantity: int = 0
    rate: float = 0.0


NOTHING_ACTION = Action(ActionKind.NOTHING)


class DecisionKind(Enum):
    """Externally visible outcome of one ``decide`` call."""

    NOTHING = "nothing"
    MOVE = "move"
    DIVIDE = "divide"
    TRADE = "trade"


@dataclass(frozen=True)
class Decision:
    """A brain's choice for this tick, handed to the cellular-automaton step."""

    kind: DecisionKind
    direction: MooreDirection | None = None
    quantity: int = 0
    rate: float = 0.0

    def rotated(self, quarter_turns: int) -> Decision:
        """Return this decision with its direction turned counter-clockwise."""
        if self.direction is None:
            return self
        return Decision(
            self.kind, self.direction.rotate(quarter_turns), self.quantity, self.rate
        )

    @classmethod
    def from_action(cls, action: Action) -> Decision:
        if action.kind is ActionKind.MOVE:
            return cls(DecisionKind.MOVE, action.direction)
        if action.kind is ActionKind.DIVIDE:
            return cls(DecisionKind.DIVIDE, action.direction)
        if action.kind is ActionKind.TRADE:
            return cls(DecisionKind.TRADE, quantity=action.quantity, rate=action.rate)
        if action.kind is ActionKind.NOTHING:
            return NOTHING_DECISION
        raise ValueError(f"{action.kind.value} action cannot become a decision")


NOTHING_DECISION = Decision(DecisionKind.NOTHING)
