from ..common import ParseError


def make_comma_or(parts):
    parts = list(map(lambda x: f'"{x}"', parts))
    if len(parts) > 1:
        last = parts[-1]
        first = parts[:-1]
        return ", ".join(first) + " or " + last
    else:
        return "".join(parts)


class RecursiveDescentParser:
    """Base class for recursive descent parsers.

    The parser walks over a list of tokens with a cursor. A production
    either returns a node with the cursor just behind the tokens it used,
    or raises a ParseError.
    """

    def __init__(self):
        self.tokens = []  # Sequence of tokens
        self.position = 0  # Index of the token under cursor

    def init_lexer(self, tokens, position=0):
        """Initialize the parser with the given list of tokens"""
        self.tokens = list(tokens)
        self.position = position

    @property
    def token(self):
        """The current token under cursor, None at the end"""
        if self.position < len(self.tokens):
            return self.tokens[self.position]

    def error(self, msg, loc=None):
        """Raise an error at the given location"""
        if loc is None:
            loc = self.current_location
        raise ParseError(msg, loc)

    @property
    def current_location(self):
        """Location of the token under cursor, or of the last token
        when all tokens are consumed"""
        if self.token is not None:
            return self.token.loc
        elif self.tokens:
            return self.tokens[-1].loc

    def describe_current(self):
        if self.at_end:
            return "end of input"
        return f'"{self.token.typ}"'

    # Lexer helpers:
    def consume(self, typ):
        """Assert that the next token is typ, and if so, return it.

        If typ is a list or tuple, consume one of the given types.
        """
        assert typ is not None
        expected_types = typ if isinstance(typ, (list, tuple, set)) else [typ]

        if self.peek in expected_types:
            return self.next_token()
        else:
            expected = make_comma_or(expected_types)
            self.error(f"Expected {expected}, got {self.describe_current()}")

    def has_consumed(self, typ):
        """Checks if the look-ahead token is of type typ, and if so
        eats the token and returns true"""
        if self.peek == typ:
            self.next_token()
            return True
        return False

    def next_token(self):
        """Advance to the next token, but never beyond the end"""
        tok = self.token
        if not self.at_end:
            self.position += 1
        return tok

    @property
    def peek(self):
        """Look at the next token type to parse without popping it"""
        if self.token:
            return self.token.typ

    def look_ahead(self, amount):
        """Take a look at the token type x tokens ahead"""
        index = self.position + amount
        if index < len(self.tokens):
            return self.tokens[index].typ

    @property
    def at_end(self):
        """True when the cursor is at the 'EOF' token or beyond the tokens"""
        return self.peek in (None, 'EOF')
