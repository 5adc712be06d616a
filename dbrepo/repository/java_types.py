"""Java type table used by the repository model.

The generated code targets Java, so columns are typed with Java type
names. Primitive types cannot hold null and carry a language default.
"""

from typing import Optional

STRING_TYPE = "java.lang.String"

# primitive type -> default value literal
PRIMITIVE_DEFAULTS = {
    "boolean": "false",
    "byte": "(byte)0",
    "short": "(short)0",
    "int": "0",
    "long": "0L",
    "float": "0.0F",
    "double": "0.0D",
    "char": "' '",
}

# primitive type -> wrapper type
WRAPPERS = {
    "boolean": "java.lang.Boolean",
    "byte": "java.lang.Byte",
    "short": "java.lang.Short",
    "int": "java.lang.Integer",
    "long": "java.lang.Long",
    "float": "java.lang.Float",
    "double": "java.lang.Double",
    "char": "java.lang.Character",
}


def is_primitive(java_type: Optional[str]) -> bool:
    return java_type in PRIMITIVE_DEFAULTS


def is_string(java_type: Optional[str]) -> bool:
    return java_type in (STRING_TYPE, "String")


def default_value_for(java_type: Optional[str]) -> Optional[str]:
    """Default value literal for a primitive type, None for reference types."""
    return PRIMITIVE_DEFAULTS.get(java_type)


def wrapper_for(java_type: str) -> str:
    """Wrapper type of a primitive type (reference types are returned as is)."""
    return WRAPPERS.get(java_type, java_type)
