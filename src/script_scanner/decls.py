"""
Declaration Records
===================

Plain data produced and used by the declaration scanner:

- ScopeKind / NameScope: what an open brace stands for while scanning
- ClassDecl: one emitted class declaration
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Any


class ScopeKind(Enum):
    """What a brace-delimited scope belongs to."""
    NAMESPACE = auto()      # namespace A.B { ... }
    CLASS = auto()          # class C { ... }
    STRUCT = auto()         # struct S { ... }
    BLOCK = auto()          # any other { ... }: bodies, initializers, enums


@dataclass(frozen=True)
class NameScope:
    """
    One open brace on the scanner's scope stack.

    Namespace scopes contribute to the dotted namespace of declarations
    nested inside them; class and struct scopes contribute to the dotted
    owner-name prefix of nested types. Block scopes contribute nothing.

    Attributes:
        kind: What opened the brace
        name: Declared name (dotted for namespaces, empty for blocks)
    """
    kind: ScopeKind
    name: str = ""

    @property
    def is_type(self) -> bool:
        """Return True for class and struct scopes."""
        return self.kind in (ScopeKind.CLASS, ScopeKind.STRUCT)


@dataclass(frozen=True)
class ClassDecl:
    """
    A non-generic class declaration found in script source.

    Attributes:
        namespace: Dot-joined namespace path ("" at global scope)
        name: Class name, prefixed with enclosing type names for nested
            classes ("Outer.Inner")
        base: Direct base type names in source order, generic arguments
            stripped ("List" for "List<int>")
        nested: True when declared inside another class or struct
    """
    namespace: str
    name: str
    base: tuple[str, ...] = ()
    nested: bool = False

    @property
    def full_name(self) -> str:
        """Namespace-qualified name, e.g. 'Game.Player.Inventory'."""
        if self.namespace:
            return f"{self.namespace}.{self.name}"
        return self.name

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-serializable representation."""
        return {
            "namespace": self.namespace,
            "name": self.name,
            "full_name": self.full_name,
            "base": list(self.base),
            "nested": self.nested,
        }
