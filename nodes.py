"""
AST for the robot control language.

Every node is a frozen dataclass and belongs to one of three families:

  - program nodes   execute(robot) -> None   (Program, Block, Loop, While, If, Action)
  - sensor nodes    evaluate(robot) -> int   (Number, Sensor, Arithmetic)
  - condition nodes evaluate(robot) -> bool  (Comparison, And, Or, Not)

str(node) gives the canonical surface syntax, which parses back to an equal
tree. The robot handle is duck-typed; see ACTIONS and SENSORS for the methods
it has to provide.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Tuple, Union

logger = logging.getLogger(__name__)


class EvaluationError(ArithmeticError):
    """Raised when an expression cannot be evaluated (division by zero)."""


class RobotInterrupted(Exception):
    """Raised by a robot handle to stop a running program (game over, no fuel)."""


# language keyword -> (robot method, positional args)
ACTIONS = {
    "move": ("move", ()),
    "turnL": ("turn_left", ()),
    "turnR": ("turn_right", ()),
    "takeFuel": ("take_fuel", ()),
    "wait": ("idle_wait", ()),
    "turnAround": ("turn_around", ()),
    "shieldOn": ("set_shield", (True,)),
    "shieldOff": ("set_shield", (False,)),
}

# actions that accept an optional repeat count
REPEATABLE = ("move", "wait")

SENSORS = {
    "fuelLeft": "get_fuel",
    "oppLR": "get_opponent_lr",
    "oppFB": "get_opponent_fb",
    "numBarrels": "num_barrels",
    "barrelLR": "get_closest_barrel_lr",
    "barrelFB": "get_closest_barrel_fb",
    "wallDist": "get_distance_to_wall",
}

ARITHMETIC = ("add", "sub", "mul", "div")
RELATIONS = ("lt", "gt", "eq")


def _truncating_div(left: int, right: int) -> int:
    # Python's // floors; the language rounds toward zero.
    quotient = abs(left) // abs(right)
    return quotient if (left < 0) == (right < 0) else -quotient


# --------------------------------------------------
# Sensor / expression nodes
# --------------------------------------------------

@dataclass(frozen=True)
class Number:
    value: int

    def evaluate(self, robot) -> int:
        return self.value

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class Sensor:
    """A named sensor reading, e.g. `fuelLeft` or `wallDist`."""

    name: str

    def __post_init__(self):
        if self.name not in SENSORS:
            raise ValueError(f"Unknown sensor {self.name!r}")

    def evaluate(self, robot) -> int:
        value = getattr(robot, SENSORS[self.name])()
        logger.debug("sensor %s -> %s", self.name, value)
        return value

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class Arithmetic:
    """`add`, `sub`, `mul` or `div` over two sub-expressions."""

    op: str
    left: "Expression"
    right: "Expression"

    def __post_init__(self):
        if self.op not in ARITHMETIC:
            raise ValueError(f"Unknown operator {self.op!r}")

    def evaluate(self, robot) -> int:
        left = self.left.evaluate(robot)
        right = self.right.evaluate(robot)
        if self.op == "add":
            return left + right
        if self.op == "sub":
            return left - right
        if self.op == "mul":
            return left * right
        if right == 0:
            raise EvaluationError(f"Division by zero in {self}")
        return _truncating_div(left, right)

    def __str__(self) -> str:
        return f"{self.op}({self.left}, {self.right})"


Expression = Union[Number, Sensor, Arithmetic]


# --------------------------------------------------
# Condition nodes
# --------------------------------------------------

@dataclass(frozen=True)
class Comparison:
    """`lt`, `gt` or `eq` over two expressions."""

    op: str
    left: Expression
    right: Expression

    def __post_init__(self):
        if self.op not in RELATIONS:
            raise ValueError(f"Unknown relation {self.op!r}")

    def evaluate(self, robot) -> bool:
        left = self.left.evaluate(robot)
        right = self.right.evaluate(robot)
        if self.op == "lt":
            return left < right
        if self.op == "gt":
            return left > right
        return left == right

    def __str__(self) -> str:
        return f"{self.op}({self.left}, {self.right})"


@dataclass(frozen=True)
class And:
    left: "Condition"
    right: "Condition"

    def evaluate(self, robot) -> bool:
        # both sides always run, sensor reads included
        left = self.left.evaluate(robot)
        right = self.right.evaluate(robot)
        return left and right

    def __str__(self) -> str:
        return f"and({self.left}, {self.right})"


@dataclass(frozen=True)
class Or:
    left: "Condition"
    right: "Condition"

    def evaluate(self, robot) -> bool:
        left = self.left.evaluate(robot)
        right = self.right.evaluate(robot)
        return left or right

    def __str__(self) -> str:
        return f"or({self.left}, {self.right})"


@dataclass(frozen=True)
class Not:
    operand: "Condition"

    def evaluate(self, robot) -> bool:
        return not self.operand.evaluate(robot)

    def __str__(self) -> str:
        return f"not({self.operand})"


Condition = Union[Comparison, And, Or, Not]


# --------------------------------------------------
# Program nodes
# --------------------------------------------------

@dataclass(frozen=True)
class Action:
    """
    One primitive action. `amount` is the optional repeat count of `move` and
    `wait`; without it the action runs once.
    """

    name: str
    amount: Optional[Expression] = None

    def __post_init__(self):
        if self.name not in ACTIONS:
            raise ValueError(f"Unknown action {self.name!r}")
        if self.amount is not None and self.name not in REPEATABLE:
            raise ValueError(f"Action {self.name!r} takes no argument")

    def execute(self, robot) -> None:
        method, args = ACTIONS[self.name]
        times = 1 if self.amount is None else self.amount.evaluate(robot)
        for _ in range(times):
            getattr(robot, method)(*args)

    def __str__(self) -> str:
        if self.amount is None:
            return f"{self.name};"
        return f"{self.name}({self.amount});"


@dataclass(frozen=True)
class Block:
    statements: Tuple["Statement", ...] = ()

    def execute(self, robot) -> None:
        for statement in self.statements:
            statement.execute(robot)

    def __str__(self) -> str:
        if not self.statements:
            return "{}"
        return "{ " + " ".join(str(s) for s in self.statements) + " }"


@dataclass(frozen=True)
class Loop:
    """Runs its block forever; only an exception from the robot ends it."""

    block: Block

    def execute(self, robot) -> None:
        while True:
            self.block.execute(robot)

    def __str__(self) -> str:
        return f"loop {self.block}"


@dataclass(frozen=True)
class While:
    condition: Condition
    block: Block

    def execute(self, robot) -> None:
        iterations = 0
        while self.condition.evaluate(robot):
            iterations += 1
            logger.debug("while %s: iteration %d", self.condition, iterations)
            self.block.execute(robot)

    def __str__(self) -> str:
        return f"while({self.condition}) {self.block}"


@dataclass(frozen=True)
class If:
    condition: Condition
    block: Block
    else_block: Optional[Block] = None

    @property
    def has_else(self) -> bool:
        return self.else_block is not None

    def execute(self, robot) -> None:
        if self.condition.evaluate(robot):
            self.block.execute(robot)
        elif self.else_block is not None:
            self.else_block.execute(robot)

    def __str__(self) -> str:
        text = f"if({self.condition}) {self.block}"
        if self.else_block is not None:
            text += f" else {self.else_block}"
        return text


Statement = Union[Action, Loop, While, If]


@dataclass(frozen=True)
class Program:
    """Root of a parsed program: the top-level statements in source order."""

    statements: Tuple[Statement, ...] = ()

    def execute(self, robot) -> None:
        for statement in self.statements:
            statement.execute(robot)

    def __str__(self) -> str:
        return "\n".join(str(s) for s in self.statements)
