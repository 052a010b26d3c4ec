"""Name components for managed types and their C++ spellings."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from functools import total_ordering
from typing import Iterable, Optional, Tuple

_REF_GENERIC = "void*"


def _optional_tuple(value: Optional[Iterable[str]]) -> Optional[Tuple[str, ...]]:
    return None if value is None else tuple(value)


def _optional_key(value):
    """Order ``None`` before any present value."""
    return (0,) if value is None else (1, value)


@total_ordering
@dataclass(frozen=True, eq=True)
class NameComponents:
    """The parts of a managed type name: namespace, nesting, name and generics."""

    name: str = ""
    namespace: Optional[str] = None
    declaring_types: Optional[Tuple[str, ...]] = None
    generics: Optional[Tuple[str, ...]] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "declaring_types", _optional_tuple(self.declaring_types))
        object.__setattr__(self, "generics", _optional_tuple(self.generics))

    def _key(self):
        return (
            _optional_key(self.namespace),
            _optional_key(self.declaring_types),
            self.name,
            _optional_key(self.generics),
        )

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, NameComponents):
            return NotImplemented
        return self._key() < other._key()

    def combine_all(self) -> str:
        """Full name as ``Namespace.Outer/Name<A,B>``."""
        completed = self.name
        if self.declaring_types is not None:
            completed = f"{'/'.join(self.declaring_types)}/{completed}"
        if self.namespace is not None:
            completed = f"{self.namespace}.{completed}"
        if self.generics is not None:
            completed = f"{completed}<{','.join(self.generics)}>"
        return completed

    def into_ref_generics(self) -> "NameComponents":
        """Replace every generic argument with ``void*``."""
        if self.generics is None:
            return self
        return replace(self, generics=tuple(_REF_GENERIC for _ in self.generics))

    def remove_generics(self) -> "NameComponents":
        return replace(self, generics=None)

    def remove_namespace(self) -> "NameComponents":
        return replace(self, namespace=None)

    def formatted_name(self, include_generics: bool) -> str:
        """The bare name, with generics appended if requested and present."""
        if self.generics is not None and include_generics:
            return f"{self.name}<{','.join(self.generics)}>"
        return self.name

    def to_cpp(self) -> "CppNameComponents":
        """The same components as a non-pointer C++ name."""
        return CppNameComponents(
            name=self.name,
            namespace=self.namespace,
            declaring_types=self.declaring_types,
            generics=self.generics,
        )


@total_ordering
@dataclass(frozen=True, eq=True)
class CppNameComponents:
    """The parts of a C++ type name, optionally a pointer."""

    name: str = ""
    namespace: Optional[str] = None
    declaring_types: Optional[Tuple[str, ...]] = None
    generics: Optional[Tuple[str, ...]] = None
    is_pointer: bool = field(default=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "declaring_types", _optional_tuple(self.declaring_types))
        object.__setattr__(self, "generics", _optional_tuple(self.generics))

    def _key(self):
        return (
            _optional_key(self.namespace),
            _optional_key(self.declaring_types),
            self.name,
            _optional_key(self.generics),
            self.is_pointer,
        )

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, CppNameComponents):
            return NotImplemented
        return self._key() < other._key()

    def combine_all(self) -> str:
        """Fully qualified C++ name such as ``::ns::Name<A,B>*``.

        Declaring types, when present, take the place of the namespace.
        """
        if self.declaring_types is not None:
            scope: Optional[str] = "::".join(self.declaring_types)
        else:
            scope = self.namespace

        if scope is None:
            prefix = ""
        elif scope == "":
            prefix = "::"
        else:
            prefix = f"::{scope}::"

        completed = f"{prefix}{self.name}"
        if self.generics is not None:
            completed = f"{completed}<{','.join(self.generics)}>"
        if self.is_pointer:
            completed = f"{completed}*"
        return completed

    def into_ref_generics(self) -> "CppNameComponents":
        """Replace every generic argument with ``void*``."""
        if self.generics is None:
            return self
        return replace(self, generics=tuple(_REF_GENERIC for _ in self.generics))

    def remove_generics(self) -> "CppNameComponents":
        return replace(self, generics=None)

    def as_pointer(self) -> "CppNameComponents":
        return replace(self, is_pointer=True)

    def remove_pointer(self) -> "CppNameComponents":
        return replace(self, is_pointer=False)

    def formatted_name(self, include_generics: bool) -> str:
        """The bare name, with generics appended if requested and present."""
        if self.generics is not None and include_generics:
            return f"{self.name}<{','.join(self.generics)}>"
        return self.name