LEXER = r'''start: _node+

_node: name_decl | extends_decl | comment | func_decl | var_decl | attr_block

name_decl: KW_NAME STRUCT_NAME
extends_decl: KW_EXTENDS STRUCT_NAME

comment: COMMENT

func_decl: KW_FUNC NAME "(" [arguments] ")"
arguments: (this_argument | type_argument) ("," type_argument)*
this_argument: THIS [POINTER]

var_decl: KW_VAR type_argument

type_argument: STRUCT_NAME [ARRAY] [POINTER] NAME

attr_block: "[" attribute ("," attribute)* "]"
attribute: NAME "=" ATTR_VALUE


THIS: "this"
ARRAY: "[]"
POINTER: "*"

STRUCT_NAME: /[A-Za-z0-9_:]+/
NAME: /[A-Za-z0-9_]+/
ATTR_VALUE: /"[A-Za-z0-9_? ]+"/


KW_NAME: /name(?![A-Za-z0-9_:])/
KW_EXTENDS: /extends(?![A-Za-z0-9_:])/
KW_FUNC: /func(?![A-Za-z0-9_:])/
KW_VAR: /var(?![A-Za-z0-9_:])/


COMMENT: /#[^\n]*/


%ignore WHITESPACE
WHITESPACE: /\s+/
'''
