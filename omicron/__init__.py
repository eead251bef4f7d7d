from omicron.objects import TypeTag, ParsedType, TypeArgument, ParsedVariable, ParsedFunction, ParsedStruct, resolve_type
from omicron.error import OmicronError, ParseError, NoNameError, InvalidAttrError
from omicron.parser import parse, parse_file, parse_files, parse_number
from omicron.serialize import to_dict, to_json, from_dict, from_json

__version__ = '0.1'
