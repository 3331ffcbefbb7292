# error.py
"""""
Error taxonomy for the complex calculator.

Every failure raised by the engine is a MathError carrying a 4-digit code,
the message, the source equation (attached by the facade functions) and the
offending fragment of input, if there is one.
"""""


class MathError(Exception):
    code = "9999"

    def __init__(self, message, code=None, equation=None, fragment=None):
        super().__init__(message)
        self.message = message
        if code is not None:
            self.code = code
        self.equation = equation
        self.fragment = fragment


# --- Families -----------------------------------------------------------

class TokenError(MathError):
    pass

class ParseError(MathError):
    pass

class ComplexLiteralError(MathError):
    pass

class CalculationError(MathError):
    pass

class ConfigurationError(MathError):
    code = "5001"


# --- Tokenizer ----------------------------------------------------------

class InvalidToken(TokenError):
    code = "3001"


# --- Parser -------------------------------------------------------------

class UnclosedParenthesis(ParseError):
    code = "3009"

class UnexpectedToken(ParseError):
    code = "3011"

class InvalidPrimary(ParseError):
    code = "3012"

class TrailingTokens(ParseError):
    code = "3013"

class ExpressionTooDeep(ParseError):
    code = "3014"


# --- Complex literals ---------------------------------------------------

class EmptyComplexLiteral(ComplexLiteralError):
    code = "3100"

class InvalidComplexLiteral(ComplexLiteralError):
    code = "3101"


# --- Evaluation ---------------------------------------------------------

class UnboundVariable(CalculationError):
    code = "3002"

class DivisionByZero(CalculationError):
    code = "3003"

class ComplexExponentUnsupported(CalculationError):
    code = "3007"

class ArityError(CalculationError):
    code = "3218"

class UnknownFunction(CalculationError):
    code = "2004"

class InvalidBinding(CalculationError):
    code = "3102"


Error_Dictionary = {

    "2" : "Function Error",
    "3" : "Calculator Error",
    "5" : "Configuration Error",
    "9" : "Runtime Error"

}

#Error Messages are structured in:
# 1. Digit: Main Error
# 2. Digit: Specification
# 3. and 4. Digit: Error Number


ERROR_MESSAGES = {
    "2004" : "Unknown function: ", # + function name

    "3001" : "Invalid token near: ", # + remaining input
    "3002" : "No value given for variable: ", # + variable name
    "3003" : "Division by Zero",
    "3007" : "Complex exponent not supported.",
    "3009" : "Missing ')'. ",
    "3011" : "Unexpected Token: ", # + expected / found
    "3012" : "Invalid primary: ", # + token
    "3013" : "Unconsumed tokens: ", # + remaining tokens
    "3014" : "Expression nested too deeply.",
    "3100" : "Empty complex number.",
    "3101" : "Invalid complex number: ", # + literal
    "3102" : "Invalid value for variable: ", # + variable name
    "3217" : "Missing ')' after function",
    "3218" : "Wrong number of arguments for function: ", # + function name

    "5001" : "Invalid setting: ", # + key

    "9999" : "Unexpected Error: " #+error
}


def describe(error):
    """Return the one-line user facing text for a MathError."""
    prefix = ERROR_MESSAGES.get(error.code, "Unknown error")
    text = f"Error {error.code}: {prefix}"
    # Prefixes ending in ': ' expect the offending fragment appended
    if error.fragment is not None and prefix.endswith(": "):
        text += str(error.fragment)
    return text
