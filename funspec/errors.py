

class FunspecError(Exception):
    """ Base class for all funspec errors"""
    pass

class FunspecInvalidSymbol(FunspecError):
    """ Raised when something other than a Symbol is bound"""
    pass

class FunspecUnboundSymbol(FunspecError):
    """ Raised when a symbol is looked up before it is bound"""
    pass

class FunspecSyntaxError(FunspecError):
    """ Raised when a textual call spec cannot be read"""

class FunspecArityError(FunspecError):
    """ Raised when the number of arguments passed to a function is incorrect"""

class FunspecTypeError(FunspecError):
    """ Raised when a value has the wrong type for the operation"""

class UnsupportedConstruct(FunspecError):
    """ Raised when a call spec is an anonymous function or a formula shorthand"""

    def __init__(self, text: str, label: str):
        super().__init__(
            f"`{text}` must be a function name (quoted or unquoted) "
            f"or an unquoted call, not `{label}`"
        )
        self.text = text
        self.label = label

class ResolutionFailure(FunspecUnboundSymbol):
    """ Raised when a function name does not resolve to a callable"""

    def __init__(self, name: str):
        super().__init__(f"object '{name}' of mode 'function' was not found")
        self.name = name

class InvalidInput(FunspecTypeError):
    """ Raised when the legacy adapter receives a spec of an unknown kind"""
