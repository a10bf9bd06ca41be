class EmberError(Exception):
    """ Base class for all ember errors"""
    pass


class EmberEndOfFile(EmberError):
    """ Raised when a cursor is asked to advance past the end of its source"""


class EmberSyntaxError(EmberError):
    """ Raised by host-facing drivers when the parser reports a ParseError"""

    def __init__(self, parse_error):
        super().__init__(parse_error.format())
        self.parse_error = parse_error


class EmberUnterminatedString(EmberError):
    """ Raised by the tokenizer when input ends inside a string literal"""

    def __init__(self, location):
        super().__init__(f"{location}: unterminated string literal")
        self.location = location


class EmberOutOfMemory(EmberError):
    """ Raised when a memory scope exceeds its configured limit"""


class EmberEvalError(EmberError):
    """ Base class for recoverable evaluation errors"""
    user_message = "error: evaluation failed"


class EmberUnknownVariable(EmberEvalError):
    """ Raised when a variable is referenced before it is bound"""
    user_message = "error: found unknown variable"


class EmberUnknownFn(EmberEvalError):
    """ Raised when a function is called that has no implementation"""
    user_message = "error: found unknown function"


class EmberInvalidCast(EmberEvalError):
    """ Raised when an expression is not of the expected variant"""
    user_message = "error: found invalid cast"


class EmberArityError(EmberEvalError):
    """ Raised when the number of arguments passed to a function is incorrect"""
    user_message = "error: invalid number of arguments were supplied"


class EmberInvalidArgumentName(EmberEvalError):
    """ Raised when an argument must be spelled or shaped a certain way, ex define's args(...)"""
    user_message = "error: invalid argument name was found"


class EmberInvalidArgumentValue(EmberEvalError):
    """ Raised when an argument evaluates to a value outside what the function accepts"""
    user_message = "error: invalid argument value"


class EmberShadowing(EmberEvalError):
    """ Raised when a defined function's parameter would hide a variable of the caller"""
    user_message = "error: found argument shadowing"


class EmberHostError(EmberEvalError):
    """ Raised when a host-registered native function fails"""
    user_message = "error: a host function failed"


class EmberRecursionLimit(EmberEvalError):
    """ Raised when evaluation nests deeper than the configured maximum"""
    user_message = "error: evaluation nested too deeply"
