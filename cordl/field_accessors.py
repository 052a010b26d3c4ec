"""Naming and layout helpers for field accessors and backing fields."""

from __future__ import annotations

from dataclasses import replace
from typing import Iterable, List, Tuple

from cordl.cpp_members import CppFieldDecl, CppStaticAssert

ACCESSOR_FIELD_PREFIX = "___"
GETTER_PREFIX = "__cordl_internal_get_"
SETTER_PREFIX = "__cordl_internal_set_"
CLASH_PREFIX = "_cordl_"
OFFSET_MISMATCH_MESSAGE = "Offset mismatch!"

# offset written for a field whose offset is unknown
_UNKNOWN_OFFSET = 0xFFFFFFFF


def fixup_backing_field(fieldname: str) -> str:
    """Name of the private field that backs an accessor property."""
    return f"{ACCESSOR_FIELD_PREFIX}{fieldname}"


def method_names_from_fieldinfo(f_cpp_name: str) -> Tuple[str, str]:
    """Getter and setter method names for a field's property."""
    return f"{GETTER_PREFIX}{f_cpp_name}", f"{SETTER_PREFIX}{f_cpp_name}"


def offset_asserts(cpp_name: str, fields: Iterable[CppFieldDecl]) -> List[CppStaticAssert]:
    """Static asserts checking that each field sits at its recorded offset."""
    asserts = []
    for field in fields:
        offset = field.offset if field.offset is not None else _UNKNOWN_OFFSET
        asserts.append(
            CppStaticAssert(
                condition=f"offsetof({cpp_name}, {field.cpp_name}) == 0x{offset:x}",
                message=OFFSET_MISMATCH_MESSAGE,
            )
        )
    return asserts


def apply_property_name_clashes(
    fields: Iterable[CppFieldDecl], property_names: Iterable[str]
) -> List[CppFieldDecl]:
    """Keep the laid-out instance fields, renaming and hiding any that share a property's name.

    Fields that are static or have no offset are dropped; order is preserved.
    """
    taken = set(property_names)
    result = []
    for field in fields:
        if field.offset is None or not field.instance:
            continue
        if field.cpp_name in taken:
            field = replace(field, cpp_name=f"{CLASH_PREFIX}{field.cpp_name}", is_private=True)
        result.append(field)
    return result