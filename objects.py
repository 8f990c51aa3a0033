"""Runtime values produced by the evaluator.

Every value is an immutable dataclass tagged with an `ObjectType`:
`Integer`, `Boolean`, `Null`, `Function` and the `ReturnValue` marker. The
marker only travels between a `return` statement and the nearest function
call or program boundary, where it is unwrapped; callers of the evaluator
never see one.

`inspect()` gives the display form used by the REPL and by tests: decimal
integers, `true`/`false`, `null`, and functions in the same canonical source
form the AST renders to, e.g. `fn(x) { (x + 2); }`.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import List, Union, TYPE_CHECKING
from ast_nodes import BlockNode
from pretty_printer import PrettyPrinter

if TYPE_CHECKING:
    from environment import Environment


class ObjectType(Enum):
    INTEGER = auto()
    BOOLEAN = auto()
    NULL = auto()
    RETURN_VALUE = auto()
    FUNCTION = auto()

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class Integer:
    value: int
    type: ObjectType = field(default=ObjectType.INTEGER, init=False, repr=False)

    def inspect(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class Boolean:
    value: bool
    type: ObjectType = field(default=ObjectType.BOOLEAN, init=False, repr=False)

    def inspect(self) -> str:
        return "true" if self.value else "false"


@dataclass(frozen=True)
class Null:
    type: ObjectType = field(default=ObjectType.NULL, init=False, repr=False)

    def inspect(self) -> str:
        return "null"


@dataclass(frozen=True)
class ReturnValue:
    value: Object
    type: ObjectType = field(default=ObjectType.RETURN_VALUE, init=False, repr=False)

    def inspect(self) -> str:
        return self.value.inspect()


# Functions compare by identity: two closures over different frames are
# different values even when their source is the same.
@dataclass(frozen=True, eq=False)
class Function:
    parameters: List[str]
    body: BlockNode
    env: Environment = field(repr=False)
    type: ObjectType = field(default=ObjectType.FUNCTION, init=False, repr=False)

    def inspect(self) -> str:
        return f"fn({', '.join(self.parameters)}) {PrettyPrinter.render(self.body)}"


Object = Union[Integer, Boolean, Null, ReturnValue, Function]

NULL = Null()
TRUE = Boolean(True)
FALSE = Boolean(False)


def native_bool_to_boolean(value: bool) -> Boolean:
    return TRUE if value else FALSE
