"""Model C++ names and declarations for IL2CPP types and write them as text."""

__version__ = "0.1.0"
__all__ = [
    "cpp_members",
    "cpp_methods",
    "cpp_nested",
    "field_accessors",
    "field_layout",
    "name_components",
    "writer",
]