import pytest

from cordl.name_components import CppNameComponents, NameComponents


@pytest.fixture
def full_name():
    return NameComponents(
        name="Inner",
        namespace="System",
        declaring_types=["Outer"],
        generics=["T", "U"],
    )


def test_combine_all_full(full_name):
    assert full_name.combine_all() == "System.Outer/Inner<T,U>"


def test_combine_all_name_only():
    assert NameComponents(name="Plain").combine_all() == "Plain"


def test_lists_are_stored_as_tuples(full_name):
    assert full_name.declaring_types == ("Outer",)
    assert full_name.generics == ("T", "U")
    assert hash(full_name) == hash(
        NameComponents(name="Inner", namespace="System",
                       declaring_types=("Outer",), generics=("T", "U"))
    )


def test_remove_generics_keeps_rest(full_name):
    stripped = full_name.remove_generics()
    assert stripped.generics is None
    assert "<" not in stripped.combine_all()
    assert stripped.namespace == full_name.namespace
    assert stripped.declaring_types == full_name.declaring_types
    assert full_name.generics == ("T", "U")


def test_remove_namespace(full_name):
    stripped = full_name.remove_namespace()
    assert stripped.namespace is None
    assert not stripped.combine_all().startswith("System.")
    assert stripped.name == full_name.name


def test_into_ref_generics(full_name):
    ref = full_name.into_ref_generics()
    assert ref.generics == ("void*", "void*")
    assert ref.name == full_name.name


def test_into_ref_generics_without_generics():
    n = NameComponents(name="X")
    assert n.into_ref_generics().generics is None


def test_formatted_name(full_name):
    assert full_name.formatted_name(False) == full_name.name
    assert full_name.formatted_name(True) == full_name.name + "<T,U>"
    assert NameComponents(name="A").formatted_name(True) == "A"


def test_ordering_none_namespace_first():
    a = NameComponents(name="Z")
    b = NameComponents(name="A", namespace="")
    assert a < b
    assert sorted([b, a]) == [a, b]


def test_ordering_by_name_when_scope_equal():
    a = NameComponents(name="A", namespace="N")
    b = NameComponents(name="B", namespace="N")
    assert a < b and not b < a


def test_to_cpp(full_name):
    cpp = full_name.to_cpp()
    assert cpp.name == full_name.name
    assert cpp.namespace == full_name.namespace
    assert cpp.declaring_types == full_name.declaring_types
    assert cpp.generics == full_name.generics
    assert cpp.is_pointer is False


def test_cpp_combine_all_namespace_generics_pointer():
    n = CppNameComponents(name="List_1", namespace="System", generics=["int32_t"], is_pointer=True)
    assert n.combine_all() == "::System::List_1<int32_t>*"


def test_cpp_declaring_types_override_namespace():
    n = CppNameComponents(name="Inner", namespace="Ignored", declaring_types=["Outer"])
    assert n.combine_all() == "::Outer::Inner"


def test_cpp_empty_namespace_is_global():
    n = CppNameComponents(name="ArrayW", namespace="")
    assert n.combine_all() == "::" + n.name


def test_cpp_no_scope():
    n = CppNameComponents(name="Il2CppObject")
    assert n.combine_all() == n.name


def test_cpp_pointer_round_trip():
    base = CppNameComponents(name="Foo", namespace="Bar")
    ptr = base.as_pointer()
    assert ptr.is_pointer
    assert ptr.combine_all() == base.combine_all() + "*"
    assert ptr.remove_pointer() == base


def test_cpp_remove_generics_and_ref_generics():
    n = CppNameComponents(name="Dict", namespace="S", generics=["A", "B"])
    assert n.remove_generics().combine_all() == CppNameComponents(name="Dict", namespace="S").combine_all()
    assert n.into_ref_generics().generics == ("void*", "void*")


def test_cpp_formatted_name():
    n = CppNameComponents(name="Dict", namespace="S", generics=["A", "B"], is_pointer=True)
    assert n.formatted_name(False) == "Dict"
    assert n.formatted_name(True) == "Dict<A,B>"