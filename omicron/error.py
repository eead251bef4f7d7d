class OmicronError(Exception):
    pass


class ParseError(OmicronError):
    def __init__(self, message='Parse error', line=None, column=None):
        if line is not None:
            message = '%s (line %d, column %d)' % (message, line, column)

        OmicronError.__init__(self, message)
        self.line = line
        self.column = column


class NoNameError(OmicronError):
    def __init__(self, message='No name specified'):
        OmicronError.__init__(self, message)


class InvalidAttrError(OmicronError):
    def __init__(self, message='Invalid attribute', name=None, value=None):
        if name is not None:
            message = '%s: %s = "%s"' % (message, name, value)

        OmicronError.__init__(self, message)
        self.name = name
        self.value = value
