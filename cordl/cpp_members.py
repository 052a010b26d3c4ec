"""Basic C++ declarations: templates, includes, aliases, fields and properties."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path, PurePath
from typing import Iterable, Iterator, Optional, Tuple, Union

from cordl.writer import SortLevel, Writer


@dataclass(frozen=True, order=True)
class CppTemplate:
    """A template header: pairs of (constraint, parameter name)."""

    names: Tuple[Tuple[str, str], ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "names", tuple(tuple(pair) for pair in self.names))

    def just_names(self) -> Iterator[str]:
        """The parameter names without their constraints."""
        return (name for _constraint, name in self.names)

    def write(self, writer: Writer) -> None:
        params = ",".join(f"{constraint} {name}" for constraint, name in self.names)
        writer.writeln(f"template<{params}>")


def make_typenames(names: Iterable[str]) -> CppTemplate:
    """A template whose every parameter is an unconstrained ``typename``."""
    return CppTemplate(tuple(("typename", name) for name in names))


@dataclass(frozen=True)
class CppStaticAssert:
    condition: str
    message: Optional[str] = None

    def write(self, writer: Writer) -> None:
        if self.message is None:
            writer.writeln(f"static_assert({self.condition})")
        else:
            writer.writeln(f'static_assert({self.condition}, "{self.message}");')


@dataclass(frozen=True)
class CppLine:
    """A raw line of C++."""

    line: str

    def write(self, writer: Writer) -> None:
        writer.write(self.line)
        writer.writeln()


@dataclass(frozen=True)
class CppCommentedString:
    data: str
    comment: Optional[str] = None

    def write(self, writer: Writer) -> None:
        writer.writeln(self.data)
        if self.comment is not None:
            writer.writeln(f"// {self.comment}")


@dataclass(frozen=True, order=True)
class CppInclude:
    """An ``#include`` line, quoted or in angle brackets for system headers."""

    include: PurePath
    system: bool = False

    def __post_init__(self) -> None:
        object.__setattr__(self, "include", Path(self.include))

    def write(self, writer: Writer) -> None:
        path = self.include.as_posix()
        if self.system:
            writer.writeln(f"#include <{path}>")
        else:
            writer.writeln(f'#include "{path}"')


@dataclass(frozen=True)
class CppUsingAlias:
    result: str
    alias: str
    template: Optional[CppTemplate] = None

    def write(self, writer: Writer) -> None:
        if self.template is not None:
            self.template.write(writer)
        writer.writeln(f"using {self.alias} = {self.result};")

    def sort_level(self) -> SortLevel:
        return SortLevel.USING_ALIAS


@dataclass(frozen=True)
class CppForwardDeclare:
    """A forward declaration of a class or struct, optionally a specialisation."""

    cpp_name: str
    is_struct: bool = False
    cpp_namespace: Optional[str] = None
    templates: Optional[CppTemplate] = None
    literals: Optional[Tuple[str, ...]] = None

    def __post_init__(self) -> None:
        if self.literals is not None:
            object.__setattr__(self, "literals", tuple(self.literals))

    def write(self, writer: Writer) -> None:
        if self.cpp_namespace is not None:
            writer.writeln(f"namespace {self.cpp_namespace} {{")
        if self.templates is not None:
            self.templates.write(writer)
        # a specialisation of an already templated declaration needs no second header
        if self.literals is not None and self.templates is None:
            writer.writeln("template<>")

        if self.literals is not None:
            name = f"{self.cpp_name}<{','.join(self.literals)}>"
        else:
            name = self.cpp_name
        keyword = "struct" if self.is_struct else "class"
        writer.writeln(f"{keyword} {name};")

        if self.cpp_namespace is not None:
            writer.writeln("}")

    def sort_key(self) -> str:
        """Key that orders forward declarations deterministically."""
        literals = ",".join(self.literals or ())
        templates = ",".join(self.templates.just_names()) if self.templates else ""
        return f"{self.cpp_namespace or ''}_{self.cpp_name}_{literals}_{templates}"


@dataclass(frozen=True, order=True)
class CppParam:
    name: str
    ty: str
    modifiers: str = ""
    def_value: Optional[str] = None


def params_as_args(params: Iterable[CppParam]) -> Iterator[str]:
    """Parameters as declared, with default values where present."""
    for p in params:
        if p.def_value is not None:
            yield f"{p.ty}{p.modifiers} {p.name} = {p.def_value}"
        else:
            yield f"{p.ty} {p.modifiers} {p.name}"


def params_as_args_no_default(params: Iterable[CppParam]) -> Iterator[str]:
    """Parameters as declared, leaving out default values."""
    return (f"{p.ty} {p.modifiers} {p.name}" for p in params)


def params_names(params: Iterable[CppParam]) -> Iterator[str]:
    return (p.name for p in params)


def params_types(params: Iterable[CppParam]) -> Iterator[str]:
    return (p.ty for p in params)


def params_il2cpp_types(params: Iterable[CppParam]) -> Iterator[str]:
    return (f"::il2cpp_utils::ExtractType({p.name})" for p in params)


def _modifiers(const_expr: bool, readonly: bool) -> Tuple[list, list]:
    prefix, suffix = [], []
    if const_expr:
        prefix.append("constexpr")
    elif readonly:
        suffix.append("const")
    return prefix, suffix


@dataclass(frozen=True)
class CppFieldImpl:
    """Out-of-class definition of a static field."""

    cpp_name: str
    field_ty: str
    value: str = ""
    declaring_type: str = ""
    declaring_type_template: Optional[CppTemplate] = None
    readonly: bool = False
    const_expr: bool = False

    def write(self, writer: Writer) -> None:
        if self.declaring_type_template is not None:
            self.declaring_type_template.write(writer)
        declaring_ty = self.declaring_type
        if declaring_ty.startswith("::"):
            declaring_ty = declaring_ty[2:]
        prefix, suffix = _modifiers(self.const_expr, self.readonly)
        writer.writeln(
            f"{' '.join(prefix)} {self.field_ty} {' '.join(suffix)} "
            f"{declaring_ty}::{self.cpp_name}{{{self.value}}};"
        )

    def sort_level(self) -> SortLevel:
        return SortLevel.FIELDS_IMPL


@dataclass(frozen=True)
class CppFieldDecl:
    """A field declared inside a type."""

    cpp_name: str
    field_ty: str
    offset: Optional[int] = None
    instance: bool = True
    readonly: bool = False
    const_expr: bool = False
    value: Optional[str] = None
    brief_comment: Optional[str] = None
    is_private: bool = False

    def write(self, writer: Writer) -> None:
        if self.brief_comment is not None:
            writer.writeln(f"/// @brief {self.brief_comment}")
        if self.is_private:
            writer.writeln("private:")

        prefix, suffix = _modifiers(self.const_expr, self.readonly)
        if not self.instance:
            prefix.insert(0, "static")
        head = f"{' '.join(prefix)} {self.field_ty} {' '.join(suffix)} {self.cpp_name}"
        if self.value is not None:
            writer.writeln(f"{head}{{{self.value}}};")
        else:
            writer.writeln(f"{head};")

        if self.is_private:
            writer.writeln("public:")

    def sort_level(self) -> SortLevel:
        return SortLevel.FIELDS

    def to_impl(self) -> CppFieldImpl:
        """The matching definition, with no declaring type filled in yet."""
        return CppFieldImpl(
            cpp_name=self.cpp_name,
            field_ty=self.field_ty,
            value=self.value if self.value is not None else "",
            declaring_type="",
            declaring_type_template=None,
            readonly=self.readonly,
            const_expr=self.const_expr,
        )


@dataclass(frozen=True)
class CppPropertyDecl:
    """A ``__declspec(property)`` declaration backed by accessor methods."""

    cpp_name: str
    prop_ty: str
    instance: bool = True
    getter: Optional[str] = None
    setter: Optional[str] = None
    indexable: bool = False
    brief_comment: Optional[str] = None

    def write(self, writer: Writer) -> None:
        accessors = []
        if self.getter is not None:
            accessors.append(f"get={self.getter}")
        if self.setter is not None:
            accessors.append(f"put={self.setter}")
        property_spec = ", ".join(accessors)
        brackets = "[]" if self.indexable else ""

        if self.brief_comment is not None:
            writer.writeln(f"/// @brief {self.brief_comment}")
        writer.writeln(
            f" __declspec(property({property_spec})) {self.prop_ty}  "
            f"{self.cpp_name}{brackets};"
        )

    def sort_level(self) -> SortLevel:
        return SortLevel.PROPERTIES


IncludePath = Union[str, PurePath]