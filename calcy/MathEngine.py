# MathEngine.py
"""""
Core calculation engine of calcy.

Pipeline
--------
1) Tokenizer: converts a raw input string into a flat list of tokens.
2) Tree builder: splits the token list at its major operand (the loosest
   binding operator on the shallowest bracket level) and recurses on both
   halves, producing a binary expression tree.
3) Evaluator: walks the tree post-order with a variable table, delegating
   arithmetic to the selected NumberType.

The engine never prints or exits; errors are raised as error.MathError
subclasses and reach the caller unchanged.
"""""

import logging
import string

from . import error as E
from . import NumberTypes

logger = logging.getLogger(__name__)

# Supported operators, with their split priority (higher = binds looser)
Operations = ["+", "-", "*", "/", "^"]
PRIORITY = {"+": 10, "-": 9, "*": 8, "/": 7, "^": 6}

NUMBER_CHARS = "0123456789."
LETTERS = string.ascii_letters

# Token kinds
NUMBER = "number"
VARIABLE = "variable"
OPERATOR = "operator"
OPEN = "("
CLOSE = ")"


# -----------------------------
# Tokens
# -----------------------------

class Token:
    """One lexical unit. The source position is kept for error messages only."""
    def __init__(self, kind, value=None, position=None):
        self.kind = kind
        self.value = value
        self.position = position

    @property
    def char(self):
        """Source text of this token, as shown in error messages."""
        if self.kind in (OPEN, CLOSE):
            return self.kind
        return str(self.value)

    def ends_operand(self):
        """True if an operator may follow this token."""
        return self.kind in (NUMBER, VARIABLE, CLOSE)

    def __eq__(self, other):
        if not isinstance(other, Token):
            return NotImplemented
        return self.kind == other.kind and self.value == other.value

    def __repr__(self):
        if self.kind in (OPEN, CLOSE):
            return f"Token({self.kind!r})"
        return f"Token({self.kind!r}, {self.value!r})"


# -----------------------------
# Expression tree nodes
# -----------------------------

class Number:
    """Leaf holding a literal of the active number type."""
    def __init__(self, value):
        self.value = value

    def evaluate(self, variables, number_type):
        return self.value

    def __eq__(self, other):
        return isinstance(other, Number) and self.value == other.value

    def __repr__(self):
        return f"Number({self.value})"


class Variable:
    """Leaf referring to a variable by its exact (case-sensitive) name."""
    def __init__(self, name):
        self.name = name

    def evaluate(self, variables, number_type):
        try:
            return variables[self.name]
        except KeyError:
            raise E.VariableNotFound(self.name) from None

    def __eq__(self, other):
        return isinstance(other, Variable) and self.name == other.name

    def __repr__(self):
        return f"Variable('{self.name}')"


class BinOp:
    """Binary operation: left <operator> right."""
    def __init__(self, left, operator, right):
        self.left = left
        self.operator = operator
        self.right = right

    def evaluate(self, variables, number_type):
        """Evaluate both subtrees first, then apply the operator."""
        left_value = self.left.evaluate(variables, number_type)
        right_value = self.right.evaluate(variables, number_type)
        return number_type.apply(self.operator, left_value, right_value)

    def __eq__(self, other):
        return (isinstance(other, BinOp) and self.operator == other.operator
                and self.left == other.left and self.right == other.right)

    def __repr__(self):
        return f"BinOp({self.operator!r}, left={self.left}, right={self.right})"


# -----------------------------
# Tokenizer
# -----------------------------

def _juxtapose(tokens, position):
    """Insert the implicit '*' when an operand directly follows another one."""
    if tokens and tokens[-1].ends_operand():
        tokens.append(Token(OPERATOR, "*", position))


def tokenize(problem, number_type=NumberTypes.F64):
    """Convert a raw input string into a list of Tokens.

    Notes:
    - Bare letters are one-character variables ('ab' is 'a' * 'b'); a quoted
      run ("abc") is one variable.
    - Juxtaposition is multiplication: '2a', '2(3)', '(1)(2)', '(a)b'.
    - Operators need a number, variable or ')' in front of them, so a leading
      operator (unary minus included) is rejected.
    - Brackets are not balanced here; build_tree checks them.
    """
    tokens = []
    b = 0

    while b < len(problem):
        current_char = problem[b]

        # --- Numbers: digits and decimal separator ---
        if current_char in NUMBER_CHARS:
            start = b
            while (b + 1 < len(problem)) and (problem[b + 1] in NUMBER_CHARS):
                b += 1
            literal = problem[start:b + 1]
            _juxtapose(tokens, start)
            tokens.append(Token(NUMBER, number_type.parse(literal), start))

        # --- Operators ---
        elif current_char in Operations:
            if not tokens or not tokens[-1].ends_operand():
                raise E.UnexpectedTokenError(b, current_char)
            tokens.append(Token(OPERATOR, current_char, b))

        # --- Parentheses ---
        elif current_char == "(":
            _juxtapose(tokens, b)
            tokens.append(Token(OPEN, position=b))
        elif current_char == ")":
            tokens.append(Token(CLOSE, position=b))

        # --- Single letter variables ---
        elif current_char in LETTERS:
            _juxtapose(tokens, b)
            tokens.append(Token(VARIABLE, current_char, b))

        # --- Quoted multi-letter variables ---
        elif current_char == '"':
            end = problem.find('"', b + 1)
            if end == -1:
                raise E.UnexpectedTokenError(b, current_char)
            name = problem[b + 1:end]
            if not name:
                raise E.UnexpectedTokenError(end, '"')
            for offset, char in enumerate(name):
                if char not in LETTERS:
                    raise E.UnexpectedTokenError(b + 1 + offset, char)
            _juxtapose(tokens, b)
            tokens.append(Token(VARIABLE, name, b))
            b = end

        # --- Whitespace (ignored) ---
        elif current_char.isspace():
            pass

        else:
            raise E.UnexpectedTokenError(b, current_char)

        b += 1

    logger.debug("Tokenized input: %s", tokens)
    return tokens


# -----------------------------
# Tree builder (major operand splitting)
# -----------------------------

def check_brackets(tokens):
    """Raise UnbalancedBracketsError on the first unmatched bracket."""
    open_positions = []
    for token in tokens:
        if token.kind == OPEN:
            open_positions.append(token.position)
        elif token.kind == CLOSE:
            if not open_positions:
                raise E.UnbalancedBracketsError(token.position, CLOSE)
            open_positions.pop()
    if open_positions:
        raise E.UnbalancedBracketsError(open_positions[-1], OPEN)


def find_major_operand(tokens):
    """Return (index, level) of the operator that becomes the tree root.

    Shallower bracket levels always win. On the same level the higher
    priority wins, and on equal priority the later operator wins, which makes
    chains like 10-3-2 left associative. Returns None without operators.
    """
    level = 0
    best = None  # (index, priority, level)

    for index, token in enumerate(tokens):
        if token.kind == OPEN:
            level += 1
        elif token.kind == CLOSE:
            level -= 1
        elif token.kind == OPERATOR:
            priority = PRIORITY[token.value]
            if best is None or level < best[2] or (level == best[2] and priority >= best[1]):
                best = (index, priority, level)

    if best is None:
        return None
    return best[0], best[2]


def _strip_brackets(left, right, level):
    """Drop the `level` brackets enclosing the split from both slices."""
    if level == 0:
        return left, right

    opening = left[:level]
    closing = right[len(right) - level:]
    if len(opening) < level or any(token.kind != OPEN for token in opening):
        token = left[0] if left else right[0]
        raise E.UnexpectedTokenError(token.position, token.char)
    if len(closing) < level or any(token.kind != CLOSE for token in closing):
        token = right[-1] if right else left[-1]
        raise E.UnexpectedTokenError(token.position, token.char)

    return left[level:], right[:len(right) - level]


def _build(tokens):
    if not tokens:
        raise E.EmptyError()

    if len(tokens) == 1:
        token = tokens[0]
        if token.kind == NUMBER:
            return Number(token.value)
        if token.kind == VARIABLE:
            return Variable(token.value)
        raise E.UnexpectedTokenError(token.position, token.char)

    major = find_major_operand(tokens)

    if major is None:
        # Only a bracketed operand is left, e.g. "(5)" or "((a))"
        if tokens[0].kind == OPEN and tokens[-1].kind == CLOSE:
            return _build(tokens[1:-1])
        raise E.UnexpectedTokenError(tokens[1].position, tokens[1].char)

    index, level = major
    left, right = _strip_brackets(tokens[:index], tokens[index + 1:], level)
    logger.debug("Split at %r (level %d) with left %s and right %s", tokens[index], level, left, right)

    return BinOp(_build(left), tokens[index].value, _build(right))


def build_tree(tokens):
    """Turn a token list into an expression tree."""
    check_brackets(tokens)
    tree = _build(list(tokens))
    if logger.isEnabledFor(logging.DEBUG):
        try:
            rendered = repr(tree)
        except RecursionError:
            rendered = f"<{type(tree).__name__} too deep to render>"
        logger.debug("Parsed input: %s", rendered)
    return tree


# -----------------------------
# Evaluator
# -----------------------------

def evaluate(tree, variables=None, number_type=NumberTypes.F64):
    """Evaluate an expression tree against a read-only variable table."""
    return tree.evaluate(variables if variables is not None else {}, number_type)


# -----------------------------
# Public entry points
# -----------------------------

def solve(problem, variables=None, number_type=NumberTypes.F64):
    """Main API: tokenize -> build_tree -> evaluate, stopping at the first error."""
    logger.info("Solving equation %r with type %s and variables %s", problem, number_type.name, variables)
    try:
        tokens = tokenize(problem, number_type)
        tree = build_tree(tokens)
        return evaluate(tree, variables, number_type)

    # Re-raise our domain errors after attaching the source equation
    except E.MathError as e:
        e.equation = problem
        raise
    except RecursionError:
        raise E.MathError("expression is nested too deeply", equation=problem) from None


def calculate(problem, variables=None, number_type=NumberTypes.F64):
    """Solve and render the result with the number type's display format."""
    return number_type.format(solve(problem, variables, number_type))
