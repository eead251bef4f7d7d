from lark import Lark, Transformer
from lark.exceptions import UnexpectedInput

from dataclasses import dataclass
from dataslots import dataslots
from typing import List, Optional, Tuple

from omicron.objects import *

from omicron.error import ParseError, NoNameError, InvalidAttrError

import functools
import logging
import re
import struct


logger = logging.getLogger(__name__)


INT32_MIN = -(1 << 31)
INT32_MAX = (1 << 31) - 1
UINT32_MAX = (1 << 32) - 1

_DECIMAL_RE = re.compile(r'[+-]?[0-9]+')
_HEX_RE = re.compile(r'\+?[0-9A-Fa-f]+')


# Syntax nodes, one per top level declaration in the source.

@dataslots
@dataclass(frozen=True)
class NameDecl:
    name: str
    line: int = 0


@dataslots
@dataclass(frozen=True)
class ExtendsDecl:
    name: str
    line: int = 0


@dataslots
@dataclass(frozen=True)
class Comment:
    text: str


@dataslots
@dataclass(frozen=True)
class Attribute:
    name: str
    value: str


@dataslots
@dataclass(frozen=True)
class AttributeBlock:
    attributes: Tuple[Attribute, ...]


@dataslots
@dataclass(frozen=True)
class VarDecl:
    type_argument: TypeArgument


@dataslots
@dataclass(frozen=True)
class FuncDecl:
    name: str
    args: Tuple[TypeArgument, ...]


class StructTransformer(Transformer):
    def start(self, args):
        return args

    def name_decl(self, args):
        args.pop(0)  # KW_NAME
        token = args.pop(0)
        return NameDecl(token.value, token.line)

    def extends_decl(self, args):
        args.pop(0)  # KW_EXTENDS
        token = args.pop(0)
        return ExtendsDecl(token.value, token.line)

    def comment(self, args):
        return Comment(args[0].value[1:].strip())

    def func_decl(self, args):
        args.pop(0)  # KW_FUNC
        name = args.pop(0).value
        arguments = args.pop(0)

        return FuncDecl(name, tuple(arguments or ()))

    def arguments(self, args):
        return args

    def this_argument(self, args):
        _, pointer = args
        return TypeArgument.this(is_pointer=pointer is not None)

    def var_decl(self, args):
        args.pop(0)  # KW_VAR
        return VarDecl(args.pop(0))

    def type_argument(self, args):
        type_name, array, pointer, name = args
        return TypeArgument(name.value, resolve_type(type_name.value),
                            is_pointer=pointer is not None, is_array=array is not None)

    def attr_block(self, args):
        return AttributeBlock(tuple(args))

    def attribute(self, args):
        name, value = args
        # Strip the surrounding quotes.
        return Attribute(name.value, value.value[1:-1])


def _to_int32(n):
    return struct.unpack('<i', struct.pack('<I', n & UINT32_MAX))[0]


def parse_number(text: str) -> int:
    """Parse a numeric attribute value into a signed 32 bit integer.

    A leading '-' negates the result. After it, a '0x' prefix selects a hexadecimal
    value (optionally signed with '+') that must fit in 32 unsigned bits and is
    reinterpreted as signed, anything else must be a signed decimal that fits in
    32 bits.
    """
    value = text

    negative = value.startswith('-')
    if negative:
        value = value[1:]

    if value.startswith('0x'):
        value = value[2:]
        if not _HEX_RE.fullmatch(value):
            raise InvalidAttrError('Invalid number "%s"' % text)

        n = int(value, 16)
        if n > UINT32_MAX:
            raise InvalidAttrError('Number out of range "%s"' % text)
    else:
        if not _DECIMAL_RE.fullmatch(value):
            raise InvalidAttrError('Invalid number "%s"' % text)

        n = int(value)
        if not INT32_MIN <= n <= INT32_MAX:
            raise InvalidAttrError('Number out of range "%s"' % text)

    n = _to_int32(n)
    if negative:
        n = _to_int32(-n)

    return n


def _find_attribute(attributes, name) -> Optional[str]:
    for attribute in attributes:
        if attribute.name == name:
            return attribute.value

    return None


def _number_attribute(attributes, name) -> Optional[int]:
    value = _find_attribute(attributes, name)
    if value is None:
        return None

    try:
        return parse_number(value)
    except InvalidAttrError:
        raise InvalidAttrError('Invalid number', name, value) from None


def _warn_unused(attributes, known, declaration):
    for attribute in attributes:
        if attribute.name not in known:
            logger.warning('Ignoring unknown attribute %r on %s', attribute.name, declaration)


def _first(nodes, node_type):
    found = [node for node in nodes if isinstance(node, node_type)]
    if not found:
        return None

    for duplicate in found[1:]:
        logger.warning('Ignoring duplicate %r declaration on line %d, using %r from line %d',
                       duplicate.name, duplicate.line, found[0].name, found[0].line)

    return found[0].name


def bind_struct(nodes: List) -> ParsedStruct:
    """Fold a list of syntax nodes into a struct.

    Attribute blocks accumulate until the next variable or function, which takes
    the attributes it knows and clears the rest. Attributes still pending at the
    end of the document are an error.
    """
    name = _first(nodes, NameDecl)
    if name is None:
        raise NoNameError()

    extends = _first(nodes, ExtendsDecl)

    pending = []
    variables = []
    functions = []

    for node in nodes:
        if isinstance(node, AttributeBlock):
            pending.extend(node.attributes)

        elif isinstance(node, Comment):
            logger.debug('Comment: %s', node.text)

        elif isinstance(node, VarDecl):
            offset = _number_attribute(pending, 'offset')
            _warn_unused(pending, ('offset',), 'variable %r' % node.type_argument.name)

            variables.append(ParsedVariable(node.type_argument, offset or 0))
            pending = []

        elif isinstance(node, FuncDecl):
            sig = _find_attribute(pending, 'sig')
            vfunc = _number_attribute(pending, 'vfunc')
            _warn_unused(pending, ('sig', 'vfunc'), 'function %r' % node.name)

            functions.append(ParsedFunction(node.name, node.args, sig, vfunc))
            pending = []

    if pending:
        names = ', '.join(attribute.name for attribute in pending)
        raise InvalidAttrError('Attributes not followed by a declaration: %s' % names)

    return ParsedStruct(name, extends, tuple(variables), tuple(functions))


from .lexer import LEXER


@functools.lru_cache(maxsize=None)
def _get_parser(debug=False) -> Lark:
    return Lark(LEXER, start='start', debug=debug, parser='lalr', lexer='contextual',
                maybe_placeholders=True, transformer=StructTransformer())


def parse_nodes(data: str, debug=False) -> List:
    try:
        nodes = _get_parser(debug).parse(data)
    except UnexpectedInput as e:
        line = getattr(e, 'line', None)
        if line is None or line < 1:
            raise ParseError() from e

        raise ParseError(line=line, column=e.column) from e

    logger.debug('Parsed %d syntax nodes', len(nodes))
    return nodes


def parse(data: str, debug=False) -> ParsedStruct:
    parsed = bind_struct(parse_nodes(data, debug=debug))
    logger.debug('Parsed struct %r with %d variables and %d functions',
                 parsed.name, len(parsed.variables), len(parsed.functions))
    return parsed


def parse_file(fp: str, debug=False) -> ParsedStruct:
    with open(fp, 'r', encoding='utf-8') as f:
        return parse(f.read(), debug=debug)


def parse_files(fps, debug=False) -> ParsedStruct:
    data = []

    for fp in fps:
        with open(fp, 'r', encoding='utf-8') as f:
            data.append(f.read())

    return parse('\n'.join(data), debug=debug)
