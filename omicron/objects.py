from enum import IntEnum

from dataclasses import dataclass
from dataslots import dataslots
from typing import Optional, Tuple


class TypeTag(IntEnum):
    Byte = 0
    SByte = 1
    Short = 2
    UShort = 3
    Int = 4
    UInt = 5
    Long = 6
    ULong = 7
    Float = 8
    Double = 9
    Bool = 10
    String = 11
    This = 12
    Struct = 13


builtin_types = {
    'byte': TypeTag.Byte,
    'sbyte': TypeTag.SByte,
    'short': TypeTag.Short,
    'ushort': TypeTag.UShort,
    'int': TypeTag.Int,
    'uint': TypeTag.UInt,
    'long': TypeTag.Long,
    'ulong': TypeTag.ULong,
    'float': TypeTag.Float,
    'double': TypeTag.Double,
    'bool': TypeTag.Bool,
    'string': TypeTag.String,
}


THIS_NAME = 'this'


@dataslots
@dataclass(frozen=True)
class ParsedType:
    tag: TypeTag
    # Only set for TypeTag.Struct, holds the struct name as written.
    value: Optional[str] = None

    @property
    def is_struct(self):
        return self.tag == TypeTag.Struct

    def __str__(self):
        if self.tag == TypeTag.Struct:
            return self.value

        if self.tag == TypeTag.This:
            return THIS_NAME

        for keyword, tag in builtin_types.items():
            if tag == self.tag:
                return keyword


def resolve_type(identifier: str) -> ParsedType:
    """Map a type spelling to a builtin type, or to a reference to a named struct.

    Struct references are not checked against anything, forward and undefined
    names are both fine here.
    """
    tag = builtin_types.get(identifier)
    if tag is None:
        return ParsedType(TypeTag.Struct, identifier)

    return ParsedType(tag)


@dataslots
@dataclass(frozen=True)
class TypeArgument:
    name: str
    type: ParsedType
    is_pointer: bool = False
    is_array: bool = False

    @classmethod
    def this(cls, is_pointer=False):
        return cls(THIS_NAME, ParsedType(TypeTag.This), is_pointer=is_pointer)

    @property
    def is_this(self):
        return self.type.tag == TypeTag.This


@dataslots
@dataclass(frozen=True)
class ParsedVariable:
    type_argument: TypeArgument
    offset: int = 0

    @property
    def name(self):
        return self.type_argument.name

    @property
    def type(self):
        return self.type_argument.type


@dataslots
@dataclass(frozen=True)
class ParsedFunction:
    name: str
    args: Tuple[TypeArgument, ...] = ()
    sig: Optional[str] = None
    vfunc: Optional[int] = None

    @property
    def is_virtual(self):
        return self.vfunc is not None


@dataslots
@dataclass(frozen=True)
class ParsedStruct:
    name: str
    extends: Optional[str] = None
    variables: Tuple[ParsedVariable, ...] = ()
    functions: Tuple[ParsedFunction, ...] = ()

    def get_variable(self, name) -> Optional[ParsedVariable]:
        for variable in self.variables:
            if variable.name == name:
                return variable

        return None

    def get_function(self, name) -> Optional[ParsedFunction]:
        for function in self.functions:
            if function.name == name:
                return function

        return None
