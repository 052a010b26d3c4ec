"""Union packing for explicitly laid out types, following the runtime's own layout."""

from __future__ import annotations

from dataclasses import replace
from typing import Iterable, Tuple

from cordl.cpp_members import CppFieldDecl
from cordl.cpp_nested import CppNestedStruct, CppNestedUnion

_UNION_COMMENT = "Explicitly laid out type with union based offsets"
_PADDING_TYPE = "uint8_t"


def _padding_field(cpp_name: str, offset: int, comment: str) -> CppFieldDecl:
    return CppFieldDecl(
        cpp_name=cpp_name,
        field_ty=_PADDING_TYPE,
        offset=offset,
        instance=True,
        readonly=False,
        const_expr=False,
        value=None,
        brief_comment=comment,
        is_private=False,
    )


def field_into_offset_structs(
    min_offset: int, field: CppFieldDecl
) -> Tuple[CppNestedStruct, CppNestedStruct]:
    """Split a field into a byte-packed struct and an alignment struct.

    Both structs start with a padding array as long as the field's offset, so the
    field lands at that offset inside the enclosing union. The first struct is packed
    to one byte; the second keeps the natural alignment.
    """
    if field.offset is None:
        raise ValueError(f"field {field.cpp_name!r} has no offset; only instance fields can be packed")

    padding = field.offset

    packed_padding = _padding_field(
        f"{field.cpp_name}_padding[0x{padding:x}]",
        padding,
        f"Padding field 0x{padding:x}",
    )
    alignment_padding = _padding_field(
        f"{field.cpp_name}_padding_forAlignment[0x{padding:x}]",
        padding,
        f"Padding field 0x{padding:x} for alignment",
    )
    alignment_field = replace(field, cpp_name=f"{field.cpp_name}_forAlignment", is_private=False)
    packed_field = replace(field, is_private=False)

    packed_struct = CppNestedStruct(
        declaring_name="",
        base_type=None,
        declarations=(packed_padding, packed_field),
        brief_comment=None,
        is_class=False,
        is_enum=False,
        is_private=False,
        packing=1,
    )
    alignment_struct = CppNestedStruct(
        declaring_name="",
        base_type=None,
        declarations=(alignment_padding, alignment_field),
        brief_comment=None,
        is_class=False,
        is_enum=False,
        is_private=False,
        packing=None,
    )
    return packed_struct, alignment_struct


def pack_fields_into_single_union(fields: Iterable[CppFieldDecl]) -> CppNestedUnion:
    """Place every field in one private union, each at its own offset."""
    fields = list(fields)
    missing = [f.cpp_name for f in fields if f.offset is None]
    if missing:
        raise ValueError(f"fields without offsets cannot be packed: {', '.join(missing)}")

    min_offset = min((f.offset for f in fields), default=0)

    declarations = tuple(
        struct
        for field in fields
        for struct in field_into_offset_structs(min_offset, field)
    )

    return CppNestedUnion(
        declarations=declarations,
        brief_comment=_UNION_COMMENT,
        offset=min_offset,
        is_private=True,
    )