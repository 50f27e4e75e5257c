#!/usr/bin/env python3
"""
Robot Control Language Parser

Recursive-descent parser for the robot-control language:
  - Actions: move, turnL, turnR, takeFuel, wait, turnAround, shieldOn, shieldOff
  - Control structures: loop, while and if-else
  - Conditions: lt, gt, eq combined with and, or, not
  - Expressions: integer literals, sensors, and add/sub/mul/div

Tokenization uses a single regular expression; the parser has one function
per grammar nonterminal and builds the node tree defined in nodes.py.
Every parse function either returns a complete node or raises ParserFailure.
"""

import re
import sys

from nodes import (
    Action,
    And,
    Arithmetic,
    Block,
    Comparison,
    If,
    Loop,
    Not,
    Number,
    Or,
    Program,
    Sensor,
    While,
)

# number of upcoming tokens shown in an error message
CONTEXT_TOKENS = 5


class ParserFailure(Exception):
    """A syntax error, with the position and the next few tokens as context."""

    def __init__(self, message, context=(), line=None, column=None):
        self.message = message
        self.context = list(context)
        self.line = line
        self.column = column
        super().__init__(str(self))

    def __str__(self):
        if self.line is None:
            where = "Syntax error at end of input"
        else:
            where = f"Syntax error at line {self.line}, col {self.column}"
        upcoming = "".join(" " + t for t in self.context)
        return f"{where}: {self.message}\n   @ ...{upcoming}..."


# --------------------------------------------------
# Tokenization (Lexer)
# --------------------------------------------------
def tokenize(text):
    # The only time tokens can touch is when one of them is one of (){},;
    token_specs = [
        ('PUNCT',   r'[(){},;]'),
        ('WORD',    r'[^\s(){},;]+'),
        ('NEWLINE', r'\n'),
        ('SKIP',    r'[^\S\n]+'),
    ]
    token_regex = "|".join("(?P<%s>%s)" % (name, pattern) for name, pattern in token_specs)
    regex = re.compile(token_regex)

    tokens = []
    line_num = 1
    line_start = 0

    for mo in regex.finditer(text):
        kind = mo.lastgroup
        column = mo.start() - line_start
        if kind in ('PUNCT', 'WORD'):
            tokens.append((mo.group(), line_num, column))
        elif kind == 'NEWLINE':
            line_num += 1
            line_start = mo.end()
    return tokens


class TokenStream:
    """Cursor over the token list. Running out of tokens is not an error."""

    def __init__(self, tokens):
        self.tokens = list(tokens)
        self.pos = 0

    @classmethod
    def from_text(cls, text):
        return cls(tokenize(text))

    def current_token(self):
        if self.pos < len(self.tokens):
            return self.tokens[self.pos]
        return None

    def has_next(self, pattern=None):
        """True if a token is left and, when given, it matches `pattern` as a whole."""
        token = self.current_token()
        if token is None:
            return False
        if pattern is None:
            return True
        if isinstance(pattern, str):
            return token[0] == pattern
        return pattern.fullmatch(token[0]) is not None

    def peek(self):
        token = self.current_token()
        return token[0] if token else None

    def next(self):
        token = self.current_token()
        if token is None:
            raise ParserFailure("Unexpected end of input")
        self.pos += 1
        return token[0]

    def upcoming(self, count):
        return [t[0] for t in self.tokens[self.pos:self.pos + count]]

    def reset(self):
        self.pos = 0


# --------------------------------------------------
# Grammar patterns
# --------------------------------------------------
def _words(*words):
    return re.compile("|".join(words))


NUMPAT = re.compile(r"-?(0|[1-9][0-9]*)")
OPENPAREN = "("
CLOSEPAREN = ")"
OPENBRACE = "{"
CLOSEBRACE = "}"
COMMA = ","
SEMICOLON = ";"

ACTPAT = _words("move", "turnL", "turnR", "takeFuel", "wait", "shieldOn", "shieldOff", "turnAround")
LOOPPAT = _words("loop")
WHILEPAT = _words("while")
IFPAT = _words("if")
ELSEPAT = _words("else")
SENPAT = _words("fuelLeft", "oppLR", "oppFB", "numBarrels", "barrelLR", "barrelFB", "wallDist")
RELOPPAT = _words("lt", "gt", "eq")
OPPAT = _words("add", "sub", "mul", "div")
CONDPAT = _words("and", "or", "not")

# actions that may carry a parenthesised repeat count
COUNTED_ACTIONS = ("move", "wait")

PATTERNS = {
    'NUMBER': NUMPAT,
    'ACTION': ACTPAT,
    'LOOP': LOOPPAT,
    'WHILE': WHILEPAT,
    'IF': IFPAT,
    'ELSE': ELSEPAT,
    'SENSOR': SENPAT,
    'RELOP': RELOPPAT,
    'OP': OPPAT,
    'CONDOP': CONDPAT,
}


# --------------------------------------------------
# Parser utilities
# --------------------------------------------------
def fail(message, s):
    token = s.current_token()
    context = s.upcoming(CONTEXT_TOKENS)
    if token is None:
        raise ParserFailure(message, context)
    raise ParserFailure(message, context, token[1], token[2])


def require(pattern, message, s):
    """Consume and return the next token if it matches `pattern`, else fail."""
    if s.has_next(pattern):
        return s.next()
    fail(message, s)


def check_for(pattern, s):
    """Consume the next token and return True if it matches `pattern`."""
    if s.has_next(pattern):
        s.next()
        return True
    return False


# --------------------------------------------------
# Parsing Functions (Recursive-Descent)
# --------------------------------------------------

# PROG -> STMT*
def parse_program(s):
    if not s.has_next():
        fail("Empty expr", s)
    statements = []
    while s.has_next():
        statements.append(parse_stmt(s))
    return Program(tuple(statements))


# STMT -> ACT | LOOP | IF | WHILE
def parse_stmt(s):
    if not s.has_next():
        fail("Empty expr", s)
    if s.has_next(ACTPAT):
        return parse_act(s)
    if s.has_next(LOOPPAT):
        return parse_loop(s)
    if s.has_next(IFPAT):
        return parse_if(s)
    if s.has_next(WHILEPAT):
        return parse_while(s)
    fail(f"Unknown statement '{s.peek()}'", s)


# ACT -> ( "move" [ "(" EXP ")" ] | "turnL" | ... | "wait" [ "(" EXP ")" ] ) ";"
def parse_act(s):
    if not s.has_next():
        fail("Empty expr", s)
    name = require(ACTPAT, "Unknown action.", s)
    amount = None
    if name in COUNTED_ACTIONS and check_for(OPENPAREN, s):
        amount = parse_exp(s)
        require(CLOSEPAREN, "No closing parenthesis.", s)
    # Make sure that there is a semicolon on the end
    require(SEMICOLON, "No semicolon.", s)
    return Action(name, amount)


# LOOP -> "loop" BLOCK
def parse_loop(s):
    if not s.has_next():
        fail("Empty expr", s)
    require(LOOPPAT, "Not 'loop'.", s)
    return Loop(parse_block(s))


# BLOCK -> "{" STMT* "}"
def parse_block(s):
    if not s.has_next():
        fail("Empty expr", s)
    require(OPENBRACE, "No open brace.", s)
    statements = []
    while s.has_next() and not s.has_next(CLOSEBRACE):
        statements.append(parse_stmt(s))
    require(CLOSEBRACE, "No close brace.", s)
    return Block(tuple(statements))


# IF -> "if" "(" COND ")" BLOCK [ "else" BLOCK ]
def parse_if(s):
    if not s.has_next():
        fail("Empty expr", s)
    require(IFPAT, "Not 'if'.", s)
    require(OPENPAREN, "No open parenthesis.", s)
    cond = parse_cond(s)
    require(CLOSEPAREN, "No close parenthesis.", s)
    block = parse_block(s)
    else_block = None
    if check_for(ELSEPAT, s):
        else_block = parse_block(s)
    return If(cond, block, else_block)


# WHILE -> "while" "(" COND ")" BLOCK
def parse_while(s):
    if not s.has_next():
        fail("Empty expr", s)
    require(WHILEPAT, "Not 'while'.", s)
    require(OPENPAREN, "No open parenthesis.", s)
    cond = parse_cond(s)
    require(CLOSEPAREN, "No close parenthesis.", s)
    return While(cond, parse_block(s))


# COND -> RELOP "(" EXP "," EXP ")" | CONDOP
def parse_cond(s):
    if not s.has_next():
        fail("Empty expr", s)
    if s.has_next(RELOPPAT):
        relop = parse_relop(s)
        require(OPENPAREN, "No open parenthesis.", s)
        left = parse_exp(s)
        require(COMMA, "No comma.", s)
        right = parse_exp(s)
        require(CLOSEPAREN, "No close parenthesis.", s)
        return Comparison(relop, left, right)
    if s.has_next(CONDPAT):
        return parse_cond_op(s)
    fail("Expected a condition (lt, gt, eq, and, or, not).", s)


# RELOP -> "lt" | "gt" | "eq"
def parse_relop(s):
    if not s.has_next():
        fail("Empty expr", s)
    return require(RELOPPAT, "Expected lt, gt or eq.", s)


# CONDOP -> "and" "(" COND "," COND ")" | "or" "(" COND "," COND ")" | "not" "(" COND ")"
def parse_cond_op(s):
    if not s.has_next():
        fail("Empty expr", s)
    op = require(CONDPAT, "Expected and, or or not.", s)
    require(OPENPAREN, "No open parenthesis.", s)
    first = parse_cond(s)
    if op == "not":
        require(CLOSEPAREN, "No close parenthesis.", s)
        return Not(first)
    require(COMMA, "No comma.", s)
    second = parse_cond(s)
    require(CLOSEPAREN, "No close parenthesis.", s)
    if op == "and":
        return And(first, second)
    return Or(first, second)


# EXP -> NUMBER | SENSOR | OP
def parse_exp(s):
    if not s.has_next():
        fail("Empty expr", s)
    if s.has_next(NUMPAT):
        return Number(int(s.next()))
    if s.has_next(SENPAT):
        return parse_sen(s)
    if s.has_next(OPPAT):
        return parse_op(s)
    fail("Expected an expression (number, sensor or operator).", s)


# SENSOR -> "fuelLeft" | "oppLR" | "oppFB" | "numBarrels" | "barrelLR" | "barrelFB" | "wallDist"
def parse_sen(s):
    if not s.has_next():
        fail("Empty expr", s)
    return Sensor(require(SENPAT, "Entered invalid sensor.", s))


# OP -> ( "add" | "sub" | "mul" | "div" ) "(" EXP "," EXP ")"
def parse_op(s):
    if not s.has_next():
        fail("Empty expr", s)
    op = require(OPPAT, "Expected add, sub, mul or div.", s)
    require(OPENPAREN, "No open parenthesis.", s)
    left = parse_exp(s)
    require(COMMA, f"No comma at {op}.", s)
    right = parse_exp(s)
    require(CLOSEPAREN, "No close parenthesis.", s)
    return Arithmetic(op, left, right)


def parse(text):
    """Tokenize and parse a whole program."""
    return parse_program(TokenStream.from_text(text))


# --------------------------------------------------
# Main Function
# --------------------------------------------------
def main():
    if len(sys.argv) < 2:
        print("Usage: python parser.py <filename>")
        sys.exit(1)

    filename = sys.argv[1]
    try:
        with open(filename, 'r') as file:
            source_code = file.read()
    except IOError as e:
        print(f"Error reading file {filename}: {e}")
        sys.exit(1)

    try:
        # Uncomment the following line to print the token list for debugging:
        # print("Tokens:", tokenize(source_code))
        program = parse(source_code)
        print("Parsed Program:")
        print(program)
    except ParserFailure as e:
        print("Parsing error:", e)
        sys.exit(1)


if __name__ == '__main__':
    main()
