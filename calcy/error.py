# error.py
"""Error types raised by the calcy engine and console.

Every error carries a message, a four digit code and (once it passed through
MathEngine.solve) the equation that produced it.
"""


class MathError(Exception):
    def __init__(self, message, code="9999", equation=None):
        super().__init__(message)
        self.message = message
        self.code = code
        self.equation = equation


# -----------------------------
# Parsing (tokenizer / tree builder)
# -----------------------------

class ParseError(MathError):
    pass


class ValueError(ParseError):
    """A numeric literal could not be parsed as the active number type."""
    def __init__(self, literal, type_name):
        super().__init__(f"could not parse {literal} to {type_name}", code="3001")
        self.literal = literal
        self.type_name = type_name


class UnexpectedTokenError(ParseError):
    def __init__(self, position, char):
        super().__init__(f"found unexpected token {char} at position {position}", code="3011")
        self.position = position
        self.char = char


class EmptyError(ParseError):
    def __init__(self):
        super().__init__("empty input found while parsing", code="3012")


class UnbalancedBracketsError(ParseError):
    def __init__(self, position, char):
        if char == ")":
            message = f"missing '(' for ')' at position {position}"
        else:
            message = f"missing ')' for '(' at position {position}"
        super().__init__(message, code="3009")
        self.position = position
        self.char = char


# -----------------------------
# Evaluation
# -----------------------------

class EvalError(MathError):
    pass


class VariableNotFound(EvalError):
    def __init__(self, name):
        super().__init__(f"variable {name} was not found", code="3002")
        self.name = name


# -----------------------------
# Number types / configuration
# -----------------------------

class UnsupportedOperationError(MathError):
    """The number type does not implement the requested operation."""
    def __init__(self, operation, type_name):
        super().__init__(f"{operation} is not implemented for {type_name}", code="3004")
        self.operation = operation
        self.type_name = type_name


class DecimalParseError(MathError):
    def __init__(self, text):
        super().__init__(f"invalid decimal literal: {text!r}", code="3008")
        self.text = text


class ConfigurationError(MathError):
    def __init__(self, message, code="5000"):
        super().__init__(message, code=code)


Error_Dictionary = {

    "1" : "File Error",
    "3" : "Calculator Error",
    "5" : "Configuration Error",
    "9" : "Runtime Error"

}

# Error Messages are structured in:
# 1. Digit: Main Error
# 2. Digit: Specification
# 3. and 4. Digit: Error Number

ERROR_MESSAGES = {
    "1000" : "Input file could not be read: ", # + path
    "3001" : "Invalid number literal for the selected data type.",
    "3002" : "Unknown variable: ", # + name
    "3004" : "Operation not supported by the selected data type.",
    "3008" : "Invalid decimal number.",
    "3009" : "Unbalanced brackets.",
    "3011" : "Unexpected Token: ", # + token
    "3012" : "Empty expression.",
    "3013" : "Invalid assignment: ", # + statement
    "5000" : "Unknown data type: ", # + datatype

    "9999" : "Unexpected Error: " #+error
}


def describe(error):
    """Return the 'error <code>: <message>' line the console prints for an error."""
    return f"error {error.code}: {error.message}"


def category(code):
    """Return the main error category for a four digit code (first digit)."""
    return Error_Dictionary.get(str(code)[:1], Error_Dictionary["9"])
