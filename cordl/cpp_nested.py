"""Nested structs, classes, enums and unions declared inside a C++ type."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

from cordl.cpp_methods import Writable
from cordl.writer import SortLevel, Writer


def _write_members(writer: Writer, declarations: Tuple[Writable, ...]) -> None:
    for member in declarations:
        member.write(writer)


@dataclass(frozen=True)
class CppNestedStruct:
    """A struct, class or enum declared inside another type.

    ``packing`` wraps the declaration in a ``#pragma pack`` push and pop.
    """

    declaring_name: str
    base_type: Optional[str] = None
    declarations: Tuple[Writable, ...] = ()
    is_enum: bool = False
    is_class: bool = False
    is_private: bool = False
    brief_comment: Optional[str] = None
    packing: Optional[int] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "declarations", tuple(self.declarations))

    def _head(self) -> str:
        keyword = "class" if self.is_class else "struct"
        if self.is_enum:
            keyword = f"enum {keyword}"
            base = self.base_type
        else:
            base = None if self.base_type is None else f"public {self.base_type}"

        if base is not None:
            return f"{keyword} {self.declaring_name} : {base} {{"
        return f"{keyword} {self.declaring_name} {{"

    def write(self, writer: Writer) -> None:
        if self.is_private:
            writer.writeln("private:")
        if self.brief_comment is not None:
            writer.writeln(f"/// @brief {self.brief_comment}")
        if self.packing is not None:
            writer.writeln(f"#pragma pack(push, tp, {self.packing})")

        writer.writeln(self._head())
        _write_members(writer, self.declarations)
        writer.writeln("};")

        if self.packing is not None:
            writer.writeln("#pragma pack(pop, tp)")
        if self.is_private:
            writer.writeln("public:")

    def sort_level(self) -> SortLevel:
        return SortLevel.NESTED_STRUCT


@dataclass(frozen=True)
class CppNestedUnion:
    """An anonymous union declared inside a type, starting at ``offset``."""

    declarations: Tuple[Writable, ...] = ()
    brief_comment: Optional[str] = None
    offset: int = 0
    is_private: bool = False

    def __post_init__(self) -> None:
        object.__setattr__(self, "declarations", tuple(self.declarations))

    def write(self, writer: Writer) -> None:
        if self.is_private:
            writer.writeln("private:")
        if self.brief_comment is not None:
            writer.writeln(f"/// @brief {self.brief_comment}")

        writer.writeln("union {")
        _write_members(writer, self.declarations)
        writer.writeln("};")

        if self.is_private:
            writer.writeln("public:")

    def sort_level(self) -> SortLevel:
        return SortLevel.NESTED_UNION