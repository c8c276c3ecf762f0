"""Abstract syntax tree for lambdalang. One frozen dataclass per node kind; children are owned by their parent and
sequences are tuples, so a tree cannot be modified once the parser returns it.
"""

from dataclasses import dataclass
from typing import Optional, Tuple


class Node:
    """Superclass of every AST node."""


@dataclass(frozen=True)
class Number(Node):
    value: float


@dataclass(frozen=True)
class String(Node):
    value: str


@dataclass(frozen=True)
class Bool(Node):
    value: bool


@dataclass(frozen=True)
class Var(Node):
    name: str


@dataclass(frozen=True)
class Lambda(Node):
    params: Tuple[str, ...]
    body: Node


@dataclass(frozen=True)
class Call(Node):
    func: Node
    args: Tuple[Node, ...]


@dataclass(frozen=True)
class If(Node):
    condition: Node
    then: Node
    otherwise: Optional[Node] = None


@dataclass(frozen=True)
class Assign(Node):
    target: Node
    value: Node


@dataclass(frozen=True)
class Binary(Node):
    operator: str
    left: Node
    right: Node


@dataclass(frozen=True)
class Program(Node):
    body: Tuple[Node, ...]
