import pytest

from cordl.cpp_members import CppFieldDecl
from cordl.cpp_nested import CppNestedStruct, CppNestedUnion
from cordl.field_layout import field_into_offset_structs, pack_fields_into_single_union
from cordl.writer import Writer


def _field(name, offset, ty="int32_t", private=False):
    return CppFieldDecl(cpp_name=name, field_ty=ty, offset=offset, is_private=private)


def test_offset_structs_packing_and_names():
    packed, aligned = field_into_offset_structs(0, _field("x", 8))
    assert packed.packing == 1
    assert aligned.packing is None
    assert packed.declaring_name == ""
    assert aligned.declaring_name == ""
    pad, real = packed.declarations
    assert pad.cpp_name == "x_padding[0x8]"
    assert pad.field_ty == "uint8_t"
    assert pad.brief_comment == "Padding field 0x8"
    assert real.cpp_name == "x"
    apad, areal = aligned.declarations
    assert apad.cpp_name == "x_padding_forAlignment[0x8]"
    assert apad.brief_comment == "Padding field 0x8 for alignment"
    assert areal.cpp_name == "x_forAlignment"


def test_offset_structs_clear_private_and_keep_type():
    packed, aligned = field_into_offset_structs(0, _field("y", 4, ty="float_t", private=True))
    for struct in (packed, aligned):
        real = struct.declarations[1]
        assert real.is_private is False
        assert real.field_ty == "float_t"
        assert real.offset == 4
        assert struct.declarations[0].offset == 4


def test_padding_ignores_min_offset():
    packed, _ = field_into_offset_structs(4, _field("z", 8))
    assert packed.declarations[0].cpp_name == "z_padding[0x8]"


def test_offset_structs_require_offset():
    with pytest.raises(ValueError):
        field_into_offset_structs(0, _field("s", None))


def test_union_properties():
    fields = [_field("a", 8), _field("b", 4)]
    union = pack_fields_into_single_union(fields)
    assert isinstance(union, CppNestedUnion)
    assert union.offset == 4
    assert union.is_private is True
    assert union.brief_comment == "Explicitly laid out type with union based offsets"
    assert len(union.declarations) == 2 * len(fields)
    assert all(isinstance(d, CppNestedStruct) for d in union.declarations)
    names = [d.declarations[1].cpp_name for d in union.declarations]
    assert names == ["a", "a_forAlignment", "b", "b_forAlignment"]


def test_empty_union():
    union = pack_fields_into_single_union([])
    assert union.offset == 0
    assert union.declarations == ()


def test_union_rejects_missing_offset():
    with pytest.raises(ValueError):
        pack_fields_into_single_union([_field("a", 4), _field("b", None)])


def test_union_written_output():
    writer = Writer()
    pack_fields_into_single_union([_field("a", 8)]).write(writer)
    lines = writer.stream.getvalue().splitlines()
    assert lines[0] == "private:"
    assert lines[-1] == "public:"
    assert "union {" in lines
    assert lines.count("#pragma pack(push, tp, 1)") == 1
    assert lines.count("#pragma pack(pop, tp)") == 1
    assert lines.count("struct  {") == 2