"""Conversion between parsed structs and their JSON interchange form.

The shape is::

    {
        "name": "B",
        "extends": "A",
        "variables": [
            {"type_argument": {"name": "my_struct", "type": {"tag": "Struct", "value": "C"},
                               "is_pointer": false, "is_array": false},
             "offset": 270441}
        ],
        "functions": [
            {"name": "do_thing", "args": [], "sig": "E8 ?? ?? ?? ??", "vfunc": null}
        ]
    }

Types are tagged values, ``value`` is only present for ``Struct``.
"""
import json

from omicron.objects import TypeTag, ParsedType, TypeArgument, ParsedVariable, ParsedFunction, ParsedStruct


def type_to_dict(parsed_type: ParsedType) -> dict:
    if parsed_type.tag == TypeTag.Struct:
        return {'tag': parsed_type.tag.name, 'value': parsed_type.value}

    return {'tag': parsed_type.tag.name}


def type_argument_to_dict(argument: TypeArgument) -> dict:
    return {
        'name': argument.name,
        'type': type_to_dict(argument.type),
        'is_pointer': argument.is_pointer,
        'is_array': argument.is_array,
    }


def to_dict(parsed: ParsedStruct) -> dict:
    return {
        'name': parsed.name,
        'extends': parsed.extends,
        'variables': [
            {
                'type_argument': type_argument_to_dict(variable.type_argument),
                'offset': variable.offset,
            }
            for variable in parsed.variables
        ],
        'functions': [
            {
                'name': function.name,
                'args': [type_argument_to_dict(arg) for arg in function.args],
                'sig': function.sig,
                'vfunc': function.vfunc,
            }
            for function in parsed.functions
        ],
    }


def to_json(parsed: ParsedStruct, indent=2) -> str:
    return json.dumps(to_dict(parsed), indent=indent)


def type_from_dict(data: dict) -> ParsedType:
    tag = TypeTag[data['tag']]
    if tag == TypeTag.Struct:
        return ParsedType(tag, data['value'])

    return ParsedType(tag)


def type_argument_from_dict(data: dict) -> TypeArgument:
    return TypeArgument(data['name'], type_from_dict(data['type']),
                        is_pointer=data.get('is_pointer', False), is_array=data.get('is_array', False))


def from_dict(data: dict) -> ParsedStruct:
    variables = tuple(
        ParsedVariable(type_argument_from_dict(variable['type_argument']), variable.get('offset', 0))
        for variable in data.get('variables', ())
    )

    functions = tuple(
        ParsedFunction(function['name'],
                       tuple(type_argument_from_dict(arg) for arg in function.get('args', ())),
                       function.get('sig'), function.get('vfunc'))
        for function in data.get('functions', ())
    )

    return ParsedStruct(data['name'], data.get('extends'), variables, functions)


def from_json(data: str) -> ParsedStruct:
    return from_dict(json.loads(data))
