import pytest

from cordl.cpp_members import CppFieldDecl, CppStaticAssert
from cordl.field_accessors import (
    ACCESSOR_FIELD_PREFIX,
    apply_property_name_clashes,
    fixup_backing_field,
    method_names_from_fieldinfo,
    offset_asserts,
)
from cordl.writer import Writer


def _field(name, offset=0x10, instance=True):
    return CppFieldDecl(cpp_name=name, field_ty="int32_t", offset=offset, instance=instance)


def test_fixup_backing_field_prefixes_name():
    result = fixup_backing_field("m_value")
    assert result == ACCESSOR_FIELD_PREFIX + "m_value"
    assert result.endswith("m_value")
    assert len(result) > len("m_value")


def test_method_names_from_fieldinfo():
    getter, setter = method_names_from_fieldinfo("speed")
    assert getter == "__cordl_internal_get_speed"
    assert setter == "__cordl_internal_set_speed"


def test_offset_asserts_condition_and_message():
    asserts = offset_asserts("::Foo", [_field("bar", 0x10)])
    assert len(asserts) == 1
    assert asserts[0].condition == "offsetof(::Foo, bar) == 0x10"
    assert asserts[0].message == "Offset mismatch!"


def test_offset_asserts_written_form():
    writer = Writer()
    for sa in offset_asserts("::Foo", [_field("bar", 0x10)]):
        sa.write(writer)
    assert writer.stream.getvalue() == 'static_assert(offsetof(::Foo, bar) == 0x10, "Offset mismatch!");\n'


def test_offset_asserts_unknown_offset():
    (sa,) = offset_asserts("::Foo", [_field("bar", None)])
    assert sa.condition.endswith("0xffffffff")


def test_offset_asserts_one_per_field_in_order():
    fields = [_field("a", 0x8), _field("b", 0x10), _field("c", 0x18)]
    asserts = offset_asserts("::T", fields)
    assert [a.condition.split(", ")[1].split(")")[0] for a in asserts] == ["a", "b", "c"]
    assert all(isinstance(a, CppStaticAssert) for a in asserts)


def test_clashing_field_is_renamed_and_private():
    result = apply_property_name_clashes([_field("value"), _field("other")], ["value"])
    assert [f.cpp_name for f in result] == ["_cordl_value", "other"]
    assert [f.is_private for f in result] == [True, False]


def test_non_clashing_fields_unchanged():
    fields = [_field("a"), _field("b")]
    assert apply_property_name_clashes(fields, []) == fields


def test_static_and_offsetless_fields_dropped():
    fields = [_field("inst"), _field("stat", instance=False), _field("nooff", offset=None)]
    result = apply_property_name_clashes(fields, ["stat", "nooff"])
    assert [f.cpp_name for f in result] == ["inst"]


@pytest.mark.parametrize("name", ["x", "m_field", "Item"])
def test_clash_keeps_type_and_offset(name):
    original = _field(name, 0x20)
    (renamed,) = apply_property_name_clashes([original], [name])
    assert renamed.field_ty == original.field_ty
    assert renamed.offset == original.offset
    assert renamed.cpp_name.endswith(name)
    assert renamed.cpp_name != original.cpp_name