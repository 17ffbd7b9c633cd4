"""
Type descriptor model for the strict-equality engine.

Atomic kinds are a closed set. Structural "is-a" relationships between them
are declared once in an explicit table rather than derived from any runtime
class hierarchy, so every lattice query is a plain lookup.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, FrozenSet, Iterable, Optional, Tuple


class Kind(str, Enum):
    """Atomic type kinds the classifier reasons over."""
    STRING = "string"
    NON_EMPTY_STRING = "non-empty-string"
    INT = "int"
    FLOAT = "float"
    BOOL = "bool"
    NULL = "null"
    ARRAY = "array"
    KEYED_ARRAY = "keyed-array"
    LIST = "list"
    ITERABLE = "iterable"
    OBJECT = "object"
    NAMED_OBJECT = "named-object"
    CALLABLE = "callable"
    RESOURCE = "resource"
    CLOSED_RESOURCE = "closed-resource"


class Provenance(str, Enum):
    """Where an operand type came from."""
    INFERRED = "inferred"
    ANNOTATED = "annotated"


class Polarity(str, Enum):
    """The loose operator being considered for a rewrite."""
    EQUAL = "=="
    NOT_EQUAL = "!="

    @classmethod
    def from_operator(cls, operator: str) -> "Polarity":
        # "<>" is an alias of "!=" in the analyzed language
        if operator == "<>":
            return cls.NOT_EQUAL
        return cls(operator)


class Verdict(str, Enum):
    SAFE = "safe"
    UNSAFE = "unsafe"


# Direct parents in the structural partial order. Anything not listed is a root.
_PARENTS: Dict[Kind, Tuple[Kind, ...]] = {
    Kind.NON_EMPTY_STRING: (Kind.STRING,),
    Kind.KEYED_ARRAY: (Kind.LIST,),
    Kind.LIST: (Kind.ARRAY,),
    Kind.ARRAY: (Kind.ITERABLE,),
    Kind.NAMED_OBJECT: (Kind.OBJECT,),
}


def _ancestors(kind: Kind) -> FrozenSet[Kind]:
    seen = {kind}
    pending = list(_PARENTS.get(kind, ()))
    while pending:
        parent = pending.pop()
        if parent not in seen:
            seen.add(parent)
            pending.extend(_PARENTS.get(parent, ()))
    return frozenset(seen)


# Reflexive-transitive closure, computed once over the closed Kind set
_ANCESTORS: Dict[Kind, FrozenSet[Kind]] = {kind: _ancestors(kind) for kind in Kind}

STRUCTURAL_KINDS: FrozenSet[Kind] = frozenset({
    Kind.ARRAY, Kind.KEYED_ARRAY, Kind.LIST, Kind.ITERABLE,
})

TOO_COMPLICATED_KINDS: FrozenSet[Kind] = STRUCTURAL_KINDS | {Kind.OBJECT, Kind.NAMED_OBJECT}


@dataclass(frozen=True)
class Atomic:
    """One inferred type shape.

    Attributes:
        kind: The atomic kind
        shape: Key shape for KEYED_ARRAY (e.g. "array{id: int}"), informational only
        class_name: Class name for NAMED_OBJECT
    """
    kind: Kind
    shape: Optional[str] = None
    class_name: Optional[str] = None

    def __str__(self) -> str:
        if self.kind is Kind.NAMED_OBJECT and self.class_name:
            return self.class_name
        if self.kind is Kind.KEYED_ARRAY and self.shape:
            return self.shape
        return self.kind.value


def is_a(first: Atomic, second: Atomic) -> bool:
    """True when `first` is the same kind as `second` or one of its descendants."""
    return second.kind in _ANCESTORS[first.kind]


def is_too_complicated(atomic: Atomic) -> bool:
    """Structural or reference kinds whose loose comparison must be special-cased."""
    return atomic.kind in TOO_COMPLICATED_KINDS


def is_string_like(atomic: Atomic) -> bool:
    return is_a(atomic, STRING)


STRING = Atomic(Kind.STRING)
NON_EMPTY_STRING = Atomic(Kind.NON_EMPTY_STRING)
INT = Atomic(Kind.INT)
FLOAT = Atomic(Kind.FLOAT)
BOOL = Atomic(Kind.BOOL)
NULL = Atomic(Kind.NULL)
ARRAY = Atomic(Kind.ARRAY)
KEYED_ARRAY = Atomic(Kind.KEYED_ARRAY)
LIST = Atomic(Kind.LIST)
ITERABLE = Atomic(Kind.ITERABLE)
OBJECT = Atomic(Kind.OBJECT)
CALLABLE = Atomic(Kind.CALLABLE)
RESOURCE = Atomic(Kind.RESOURCE)
CLOSED_RESOURCE = Atomic(Kind.CLOSED_RESOURCE)


def named_object(class_name: str) -> Atomic:
    return Atomic(Kind.NAMED_OBJECT, class_name=class_name)


def keyed_array(shape: str) -> Atomic:
    return Atomic(Kind.KEYED_ARRAY, shape=shape)


@dataclass(frozen=True)
class TypeDescriptor:
    """The inferred type of one operand: one atomic kind or a union of them.

    Members keep their declaration order and each appears once.
    """
    members: Tuple[Atomic, ...]
    provenance: Provenance = Provenance.INFERRED

    def __post_init__(self):
        if not self.members:
            raise ValueError("TypeDescriptor needs at least one atomic kind")
        deduped = tuple(dict.fromkeys(self.members))
        if deduped != self.members:
            object.__setattr__(self, 'members', deduped)

    @classmethod
    def from_atomics(cls, members: Iterable[Atomic],
                     provenance: Provenance = Provenance.INFERRED) -> "TypeDescriptor":
        """Build a descriptor from a provider-supplied collection of atomics."""
        return cls(tuple(members), provenance)

    def is_single(self) -> bool:
        return len(self.members) == 1

    def is_annotated(self) -> bool:
        return self.provenance is Provenance.ANNOTATED

    def atomic_kinds(self) -> Tuple[Atomic, ...]:
        """Members in declaration order."""
        return self.members

    def single(self) -> Atomic:
        """The last declared member; the only one for a single descriptor."""
        return self.members[-1]

    def __str__(self) -> str:
        return "|".join(str(member) for member in self.members)


def single(atomic: Atomic, provenance: Provenance = Provenance.INFERRED) -> TypeDescriptor:
    return TypeDescriptor((atomic,), provenance)


def union(*members: Atomic, provenance: Provenance = Provenance.INFERRED) -> TypeDescriptor:
    return TypeDescriptor(tuple(members), provenance)
