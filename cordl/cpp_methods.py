"""C++ method, constructor and method-size declarations and their output."""

from __future__ import annotations

from dataclasses import dataclass, field
from functools import total_ordering
from typing import Dict, Iterable, Optional, Protocol, Tuple

from cordl.cpp_members import (
    CppParam,
    CppTemplate,
    params_as_args,
    params_as_args_no_default,
    params_types,
)
from cordl.writer import SortLevel, Writer


class Writable(Protocol):
    """Anything that can write itself as C++ text."""

    def write(self, writer: Writer) -> None: ...


def _optional_key(value):
    """Order ``None`` before any present value."""
    return (0,) if value is None else (1, value)


def _debug_str(value: str) -> str:
    escaped = (
        value.replace("\\", "\\\\")
        .replace('"', '\\"')
        .replace("\n", "\\n")
        .replace("\r", "\\r")
        .replace("\t", "\\t")
    )
    return f'"{escaped}"'


def _debug_param(param: CppParam) -> str:
    default = "None" if param.def_value is None else f"Some({_debug_str(param.def_value)})"
    return (
        f"CppParam {{ name: {_debug_str(param.name)}, ty: {_debug_str(param.ty)}, "
        f"modifiers: {_debug_str(param.modifiers)}, def_value: {default} }}"
    )


def _debug_params(params: Iterable[CppParam]) -> str:
    return f"[{', '.join(_debug_param(p) for p in params)}]"


def _write_default_param_comments(writer: Writer, params: Iterable[CppParam]) -> None:
    for param in params:
        if param.def_value is not None:
            writer.writeln(f"/// @param {param.name}: {param.ty} (default: {param.def_value})")


def _initializers(
    initialized_values: Dict[str, str], base_ctor: Optional[Tuple[str, str]]
) -> str:
    if not initialized_values and base_ctor is None:
        return ""
    items = [f"{name}({value})" for name, value in initialized_values.items()]
    if base_ctor is not None:
        base_name, args = base_ctor
        items.insert(0, f"{base_name}({args})")
    return f": {','.join(items)}"


def _write_body(writer: Writer, body: Iterable[Writable]) -> None:
    for line in body:
        line.write(writer)


@total_ordering
@dataclass(frozen=True, eq=False)
class CppMethodImpl:
    """Out-of-class definition of a method."""

    cpp_method_name: str
    return_type: str = "void"
    declaring_cpp_full_name: str = ""
    parameters: Tuple[CppParam, ...] = ()
    instance: bool = True
    declaring_type_template: Optional[CppTemplate] = None
    template: Optional[CppTemplate] = None
    is_const: bool = False
    is_virtual: bool = False
    is_constexpr: bool = False
    is_no_except: bool = False
    is_operator: bool = False
    is_inline: bool = False
    suffix_modifiers: Tuple[str, ...] = ()
    prefix_modifiers: Tuple[str, ...] = ()
    brief: Optional[str] = None
    body: Tuple[Writable, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "parameters", tuple(self.parameters))
        object.__setattr__(self, "suffix_modifiers", tuple(self.suffix_modifiers))
        object.__setattr__(self, "prefix_modifiers", tuple(self.prefix_modifiers))
        object.__setattr__(self, "body", tuple(self.body))

    def _eq_key(self):
        # bodies cannot be compared reliably, so they take no part
        return (
            self.cpp_method_name,
            self.declaring_cpp_full_name,
            self.return_type,
            self.parameters,
            self.instance,
            self.declaring_type_template,
            self.template,
            self.is_const,
            self.is_virtual,
            self.is_constexpr,
            self.is_no_except,
            self.is_operator,
            self.is_inline,
            self.suffix_modifiers,
            self.prefix_modifiers,
            self.brief,
        )

    def _order_key(self):
        return (
            self.cpp_method_name,
            self.declaring_cpp_full_name,
            self.return_type,
            self.parameters,
            self.instance,
            _optional_key(self.declaring_type_template),
            _optional_key(self.template),
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CppMethodImpl):
            return NotImplemented
        return self._eq_key() == other._eq_key()

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, CppMethodImpl):
            return NotImplemented
        return self._order_key() < other._order_key()

    def __hash__(self) -> int:
        return hash(self._eq_key())

    def write(self, writer: Writer) -> None:
        if self.brief is not None:
            writer.writeln(f"/// @brief {self.brief}")
        _write_default_param_comments(writer, self.parameters)

        if self.declaring_type_template is not None:
            self.declaring_type_template.write(writer)
        if self.template is not None:
            self.template.write(writer)

        prefix = list(self.prefix_modifiers)
        suffix = list(self.suffix_modifiers)
        if self.is_constexpr:
            prefix.append("constexpr")
        elif self.is_inline:
            prefix.append("inline")
        if self.is_virtual:
            prefix.append("virtual")
        if self.is_const and self.instance:
            suffix.append("const")
        if self.is_no_except:
            suffix.append("noexcept")

        declaring_type = self.declaring_cpp_full_name
        if declaring_type.startswith("::"):
            declaring_type = declaring_type[2:]
        operator = "operator " if self.is_operator else ""
        params = ", ".join(params_as_args_no_default(self.parameters))

        writer.writeln(
            f"{' '.join(prefix)} {self.return_type} {declaring_type}::"
            f"{operator}{self.cpp_method_name}({params}) {' '.join(suffix)} {{"
        )
        _write_body(writer, self.body)
        writer.writeln("}")

    def sort_level(self) -> SortLevel:
        return SortLevel.METHODS


@total_ordering
@dataclass(frozen=True, eq=False)
class CppMethodDecl:
    """A method declared inside a type, optionally with an inline body."""

    cpp_name: str
    return_type: str = "void"
    parameters: Tuple[CppParam, ...] = ()
    instance: bool = True
    template: Optional[CppTemplate] = None
    suffix_modifiers: Tuple[str, ...] = ()
    prefix_modifiers: Tuple[str, ...] = ()
    is_virtual: bool = False
    is_constexpr: bool = False
    is_const: bool = False
    is_no_except: bool = False
    is_implicit_operator: bool = False
    is_explicit_operator: bool = False
    is_inline: bool = False
    brief: Optional[str] = None
    body: Optional[Tuple[Writable, ...]] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "parameters", tuple(self.parameters))
        object.__setattr__(self, "suffix_modifiers", tuple(self.suffix_modifiers))
        object.__setattr__(self, "prefix_modifiers", tuple(self.prefix_modifiers))
        if self.body is not None:
            object.__setattr__(self, "body", tuple(self.body))

    def _eq_key(self):
        return (
            self.cpp_name,
            self.return_type,
            self.parameters,
            self.instance,
            self.template,
            self.suffix_modifiers,
            self.prefix_modifiers,
            self.is_virtual,
            self.is_constexpr,
            self.is_const,
            self.is_no_except,
            self.is_implicit_operator,
            self.is_inline,
            self.brief,
            self.body is not None,
        )

    def _order_key(self):
        return (
            self.cpp_name,
            self.return_type,
            self.parameters,
            self.instance,
            _optional_key(self.template),
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CppMethodDecl):
            return NotImplemented
        return self._eq_key() == other._eq_key()

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, CppMethodDecl):
            return NotImplemented
        return self._order_key() < other._order_key()

    def __hash__(self) -> int:
        return hash(self._eq_key())

    def write(self, writer: Writer) -> None:
        if self.brief is not None:
            writer.writeln(f"/// @brief {self.brief}")
        _write_default_param_comments(writer, self.parameters)

        if self.template is not None:
            self.template.write(writer)

        prefix = list(self.prefix_modifiers)
        suffix = list(self.suffix_modifiers)
        if not self.instance:
            prefix.append("static")
        if self.is_constexpr:
            prefix.append("constexpr")
        elif self.is_inline:
            prefix.append("inline")
        if self.is_virtual:
            prefix.append("virtual")
        if self.is_explicit_operator:
            prefix.append("explicit operator")
        elif self.is_implicit_operator:
            prefix.append("operator")
        if self.is_const and self.instance:
            suffix.append("const")
        if self.is_no_except:
            suffix.append("noexcept")

        params = ", ".join(params_as_args(self.parameters))
        head = f"{' '.join(prefix)} {self.return_type} {self.cpp_name}({params}) {' '.join(suffix)}"

        if self.body is not None:
            writer.writeln(f"{head} {{")
            _write_body(writer, self.body)
            writer.writeln("}")
        else:
            writer.writeln(f"{head};")

    def sort_level(self) -> SortLevel:
        return SortLevel.METHODS

    def to_impl(self) -> CppMethodImpl:
        """The matching definition, with no declaring type filled in yet."""
        return CppMethodImpl(
            cpp_method_name=self.cpp_name,
            return_type=self.return_type,
            declaring_cpp_full_name="",
            parameters=self.parameters,
            instance=self.instance,
            declaring_type_template=None,
            template=self.template,
            is_const=self.is_const,
            is_virtual=self.is_virtual,
            is_constexpr=self.is_constexpr,
            is_no_except=self.is_no_except,
            is_operator=self.is_implicit_operator,
            is_inline=self.is_inline,
            suffix_modifiers=self.suffix_modifiers,
            prefix_modifiers=self.prefix_modifiers,
            brief=self.brief,
            body=self.body if self.body is not None else (),
        )


@total_ordering
@dataclass(frozen=True, eq=False)
class CppConstructorImpl:
    """Out-of-class definition of a constructor."""

    declaring_full_name: str
    declaring_name: str
    parameters: Tuple[CppParam, ...] = ()
    base_ctor: Optional[Tuple[str, str]] = None
    initialized_values: Dict[str, str] = field(default_factory=dict)
    is_constexpr: bool = False
    is_no_except: bool = False
    is_default: bool = False
    template: Optional[CppTemplate] = None
    body: Tuple[Writable, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "parameters", tuple(self.parameters))
        object.__setattr__(self, "initialized_values", dict(self.initialized_values))
        object.__setattr__(self, "body", tuple(self.body))
        if self.base_ctor is not None:
            object.__setattr__(self, "base_ctor", tuple(self.base_ctor))

    def _eq_key(self):
        return (
            self.declaring_full_name,
            self.declaring_name,
            self.parameters,
            self.base_ctor,
            frozenset(self.initialized_values.items()),
            self.is_constexpr,
            self.is_no_except,
            self.is_default,
            self.template,
        )

    def _order_key(self):
        return (
            self.declaring_full_name,
            self.declaring_name,
            self.parameters,
            _optional_key(self.template),
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CppConstructorImpl):
            return NotImplemented
        return self._eq_key() == other._eq_key()

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, CppConstructorImpl):
            return NotImplemented
        return self._order_key() < other._order_key()

    def __hash__(self) -> int:
        return hash(self._eq_key())

    def write(self, writer: Writer) -> None:
        writer.writeln(f"// Ctor Parameters {_debug_params(self.parameters)}")
        if self.template is not None:
            self.template.write(writer)

        initializers = _initializers(self.initialized_values, self.base_ctor)
        suffixes = "noexcept" if self.is_no_except else ""
        prefixes = "constexpr" if self.is_constexpr else ""
        params = ", ".join(params_as_args_no_default(self.parameters))
        head = (
            f"{prefixes} {self.declaring_full_name}::{self.declaring_name}({params}) "
            f"{suffixes} {initializers}"
        )

        if self.is_default:
            writer.writeln(f"{head} = default;")
        else:
            writer.writeln(f"{head} {{")
            _write_body(writer, self.body)
            writer.writeln("}")

    def sort_level(self) -> SortLevel:
        return SortLevel.CONSTRUCTORS


@total_ordering
@dataclass(frozen=True, eq=False)
class CppConstructorDecl:
    """A constructor declared inside a type."""

    cpp_name: str
    parameters: Tuple[CppParam, ...] = ()
    template: Optional[CppTemplate] = None
    is_constexpr: bool = False
    is_explicit: bool = False
    is_default: bool = False
    is_no_except: bool = False
    is_delete: bool = False
    is_protected: bool = False
    base_ctor: Optional[Tuple[str, str]] = None
    initialized_values: Dict[str, str] = field(default_factory=dict)
    brief: Optional[str] = None
    body: Optional[Tuple[Writable, ...]] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "parameters", tuple(self.parameters))
        object.__setattr__(self, "initialized_values", dict(self.initialized_values))
        if self.body is not None:
            object.__setattr__(self, "body", tuple(self.body))
        if self.base_ctor is not None:
            object.__setattr__(self, "base_ctor", tuple(self.base_ctor))

    def _eq_key(self):
        return (
            self.cpp_name,
            self.parameters,
            self.template,
            self.is_constexpr,
            self.is_explicit,
            self.is_default,
            self.is_no_except,
            self.is_delete,
            self.is_protected,
            self.base_ctor,
            frozenset(self.initialized_values.items()),
            self.brief,
            self.body is not None,
        )

    def _order_key(self):
        return (self.cpp_name, self.parameters, _optional_key(self.template))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CppConstructorDecl):
            return NotImplemented
        return self._eq_key() == other._eq_key()

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, CppConstructorDecl):
            return NotImplemented
        return self._order_key() < other._order_key()

    def __hash__(self) -> int:
        return hash(self._eq_key())

    def write(self, writer: Writer) -> None:
        if self.is_protected:
            writer.writeln("protected:")

        writer.writeln(f"// Ctor Parameters {_debug_params(self.parameters)}")
        if self.brief is not None:
            writer.writeln(f"// @brief {self.brief}")
        if self.template is not None:
            self.template.write(writer)

        name = self.cpp_name
        params = ", ".join(params_as_args(self.parameters))

        if self.is_delete:
            writer.writeln(f"{name}({params}) = delete;")
            return

        prefix = []
        if self.is_constexpr:
            prefix.append("constexpr")
        elif self.body is not None:
            prefix.append("inline")
        if self.is_explicit:
            prefix.append("explicit")
        suffixes = "noexcept" if self.is_no_except else ""
        prefixes = " ".join(prefix)

        if self.body is not None and not self.is_default:
            initializers = _initializers(self.initialized_values, self.base_ctor)
            writer.writeln(f"{prefixes} {name}({params}) {suffixes} {initializers} {{")
            _write_body(writer, self.body)
            writer.writeln("}")
        elif self.is_default:
            writer.writeln(f"{prefixes} {name}({params}) {suffixes} = default;")
        else:
            writer.writeln(f"{prefixes} {name}({params}) {suffixes};")

        if self.is_protected:
            writer.writeln("public:")

    def sort_level(self) -> SortLevel:
        return SortLevel.CONSTRUCTORS

    def to_impl(self) -> CppConstructorImpl:
        """The matching definition, named after the constructor itself."""
        return CppConstructorImpl(
            declaring_full_name=self.cpp_name,
            declaring_name=self.cpp_name,
            parameters=self.parameters,
            base_ctor=self.base_ctor,
            initialized_values=self.initialized_values,
            is_constexpr=self.is_constexpr,
            is_no_except=self.is_no_except,
            is_default=self.is_default,
            template=self.template,
            body=self.body if self.body is not None else (),
        )


@dataclass(frozen=True, order=True)
class CppMethodData:
    """Estimated code size and address of a compiled method."""

    estimated_size: int
    addrs: int


@dataclass(frozen=True)
class CppMethodSizeStruct:
    """A metadata specialisation that reports a method's size, address and info."""

    cpp_method_name: str
    method_name: str
    declaring_type_name: str
    declaring_classof_call: str
    ret_ty: str
    instance: bool
    method_data: CppMethodData
    method_info_var: str
    params: Tuple[CppParam, ...] = ()
    method_info_lines: Tuple[str, ...] = ()
    declaring_template: Optional[CppTemplate] = None
    template: Optional[CppTemplate] = None
    generic_literals: Optional[Tuple[str, ...]] = None
    interface_clazz_of: str = ""
    is_final: bool = False
    slot: Optional[int] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "params", tuple(self.params))
        object.__setattr__(self, "method_info_lines", tuple(self.method_info_lines))
        if self.generic_literals is not None:
            object.__setattr__(self, "generic_literals", tuple(self.generic_literals))

    def _method_info_lines(self) -> str:
        var = self.method_info_var
        # interfaces have no vtable to resolve a slot on, so final methods use the lines given
        if self.slot is not None and not self.is_final:
            return (
                "\n"
                f"                            static auto* {var} = THROW_UNLESS(::il2cpp_utils::ResolveVtableSlot(\n"
                f"                                {self.declaring_classof_call},\n"
                f"                                 {self.interface_clazz_of}(),\n"
                f"                                  {self.slot}\n"
                "                                ));"
            )
        return "\n".join(self.method_info_lines)

    def write(self, writer: Writer) -> None:
        writer.writeln(
            f"//  Writing Method size for method: "
            f"{self.declaring_type_name}.{self.cpp_method_name}"
        )

        template = self.template if self.template is not None else CppTemplate()
        complete_type_name = self.declaring_type_name
        params_format = ", ".join(params_types(self.params))
        f_ptr_prefix = f"{self.declaring_type_name}::" if self.instance else ""
        size = self.method_data.estimated_size
        addr = self.method_data.addrs
        method_info_lines = self._method_info_lines()

        if self.declaring_template is not None:
            self.declaring_template.write(writer)
        template.write(writer)

        writer.writeln(
            "\n"
            "struct CORDL_HIDDEN ::il2cpp_utils::il2cpp_type_check::MetadataGetter<"
            f"static_cast<{self.ret_ty} ({f_ptr_prefix}*)({params_format})>"
            f"(&{complete_type_name}::{self.cpp_method_name})> {{\n"
            f"  constexpr static std::size_t size = 0x{size:x};\n"
            f"  constexpr static std::size_t addrs = 0x{addr:x};\n"
            "\n"
            "  inline static const ::MethodInfo* methodInfo() {\n"
            f"    {method_info_lines}\n"
            f"    return {self.method_info_var};\n"
            "  }\n"
            "};"
        )

    def sort_level(self) -> SortLevel:
        return SortLevel.SIZE_STRUCT