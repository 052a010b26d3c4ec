# cordl

Building blocks for writing C++ header text that describes IL2CPP types.
The package models C++ names, declarations and definitions as immutable
dataclasses, each of which can write itself to a `Writer`.

## Installation

```
pip install .
```

For running the tests:

```
pip install ".[test]"
pytest
```

## Modules

- `cordl.name_components`: `NameComponents`, a managed type name
  (`combine_all()` gives `Namespace.Outer/Name<A,B>`), and
  `CppNameComponents`, a C++ type name (`combine_all()` gives
  `::Namespace::Name<A,B>`, with declaring types taking the place of the
  namespace and a trailing `*` when `is_pointer` is set). Both offer
  `remove_generics()`, `into_ref_generics()` (every generic argument becomes
  `void*`) and `formatted_name(include_generics)`. `NameComponents.to_cpp()`
  converts between them.
- `cordl.writer`: `Writer`, a text sink over any text stream (an in-memory
  `io.StringIO` by default) with `write` and `writeln`, and `SortLevel`, the
  groups generated members are ordered by.
- `cordl.cpp_members`: `CppTemplate` and `make_typenames`, `CppInclude`,
  `CppForwardDeclare` (with `sort_key()`), `CppUsingAlias`, `CppStaticAssert`,
  `CppLine`, `CppCommentedString`, `CppParam` with the helpers
  `params_as_args`, `params_as_args_no_default`, `params_names`,
  `params_types` and `params_il2cpp_types`, `CppFieldDecl` (with `to_impl()`),
  `CppFieldImpl` and `CppPropertyDecl` (written as a
  `__declspec(property(...))` declaration).
- `cordl.cpp_methods`: `CppMethodDecl`, `CppMethodImpl`, `CppConstructorDecl`,
  `CppConstructorImpl` (each declaration has `to_impl()`), `CppMethodData` and
  `CppMethodSizeStruct`, which writes the `MetadataGetter` specialisation
  giving a method's size, address and method info.
- `cordl.cpp_nested`: `CppNestedStruct` (struct, class or enum, optionally
  wrapped in `#pragma pack`) and `CppNestedUnion`.
- `cordl.field_layout`: `pack_fields_into_single_union` and
  `field_into_offset_structs`, which place explicitly laid out fields in one
  union of padded structs, a byte-packed one and an aligned one per field.
  A field without an offset raises `ValueError`.
- `cordl.field_accessors`: `fixup_backing_field`,
  `method_names_from_fieldinfo`, `offset_asserts` (one `offsetof` static
  assert per field) and `apply_property_name_clashes` (keeps laid-out
  instance fields and renames and hides those that share a property's name).

## Example

```python
from cordl.cpp_members import CppFieldDecl, CppPropertyDecl
from cordl.field_accessors import fixup_backing_field, method_names_from_fieldinfo
from cordl.writer import Writer

writer = Writer()
getter, setter = method_names_from_fieldinfo("value")

CppPropertyDecl(cpp_name="value", prop_ty="int32_t", getter=getter, setter=setter).write(writer)
CppFieldDecl(
    cpp_name=fixup_backing_field("value"),
    field_ty="int32_t",
    offset=0x10,
    brief_comment="Field value",
).write(writer)

print(writer.stream.getvalue())
```

## What it does not do

The package has no command and does not read IL2CPP metadata. It does not
resolve types, gather includes across a set of types, turn arbitrary names
into safe C++ identifiers or file paths, or write header files to disk: it
gives the pieces those steps are made from, and writes them as text to
whatever stream a `Writer` is given.