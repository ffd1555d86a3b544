""" Hand written lexer.

The idea of lexers is to split the sourcecode into chunks of text which
are then labeled as tokens.

A cursor points to a specific character in the text. The text between
the start mark and the cursor is the text under scope, which can be
emitted as a token or ignored.

"""

import bisect
from ..common import Token, SourceLocation, LexicalError


class HandLexerBase:
    """Base class for handwritten lexers based on an idea of Rob Pike.

    Each state is a method which consumes some characters and returns
    the next state, or None when the input is exhausted.

    See also:
    http://eli.thegreenplace.net/2012/08/09/
    using-sub-generators-for-lexical-scanning-in-python/

    And:
    https://www.youtube.com/watch?v=HxaD_trXwRE
    """

    def __init__(self):
        self.token_buffer = []  # emitted tokens
        self._filename = None
        self._text = ''
        self._pos = 0
        self._start = 0
        self._first_row = 1
        self._line_starts = [0]

    def tokenize(self, filename, text, start_state, row=1):
        """ Return a sequence of tokens """
        self._filename = filename
        self._text = text
        self._pos = 0
        self._first_row = row
        self._line_starts = [0] + [
            i + 1 for i, c in enumerate(text) if c == '\n']
        self.token_buffer.clear()
        self._mark_start()
        state = start_state
        while state:
            while self.token_buffer:
                yield self.token_buffer.pop(0)
            state = state()
        while self.token_buffer:
            yield self.token_buffer.pop(0)

    def next_char(self):
        """Retrieve next character, None at the end of the text."""
        if self._pos < len(self._text):
            char = self._text[self._pos]
            self._pos += 1
            return char

    def backup_char(self, char):
        """ go back one item """
        if char:
            assert self._pos > 0
            self._pos -= 1

    def get_location(self, pos=None):
        """ Return the location of the given offset (default: cursor) """
        if pos is None:
            pos = self._pos
        index = bisect.bisect_right(self._line_starts, pos) - 1
        row = self._first_row + index
        column = pos - self._line_starts[index] + 1
        return SourceLocation(self._filename, row, column, 1)

    @property
    def current_text(self):
        """ The text between the start mark and the cursor """
        return self._text[self._start:self._pos]

    def _mark_start(self):
        """ Store location, and reset text buffer. """
        self._start = self._pos

    @property
    def start_location(self):
        """ Location of the text under scope """
        location = self.get_location(self._start)
        location.length = max(self._pos - self._start, 1)
        return location

    def make_token(self, typ, val):
        return Token(typ, val, self.start_location)

    def emit(self, typ, val=None):
        """ Emit the current text under scope as a token """
        if val is None:
            val = self.current_text
        token = self.make_token(typ, val)
        self.token_buffer.append(token)
        self._mark_start()

    def ignore(self):
        """ Ignore text under cursor """
        self._mark_start()

    def accept(self, valid):
        """ Accept a single character if it is in the valid set """
        char = self.next_char()
        if char and char in valid:
            return True
        else:
            self.backup_char(char)
            return False

    def accept_run(self, valid):
        while self.accept(valid):
            pass

    def error(self, message, loc=None):
        if loc is None:
            loc = self.get_location()
        raise LexicalError(message, loc)

