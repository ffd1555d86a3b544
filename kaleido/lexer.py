""" Lexical analyzer part. Splits the input character stream into tokens. """

import string
from .tools.handlexer import HandLexerBase


KEYWORDS = ('def', 'extern', 'if', 'then', 'else', 'for', 'in')
WHITESPACE = ' \t\r\n'
COMMENT = '#'
LETTERS = string.ascii_letters
DIGITS = string.digits
ALPHANUMERIC = LETTERS + DIGITS
NUMBER_CHARS = DIGITS + '.'


class KaleidoLexer(HandLexerBase):
    """ Generates a sequence of tokens from a piece of source text.

    Tokens are produced lazily. Identifiers matching a keyword get the
    keyword as type, numbers get type 'NUMBER' and a float value, every
    other character is a punctuation token whose type is the character
    itself. The last token is always of type 'EOF'.
    """
    def tokenize(self, text, filename='<stdin>', row=1):
        """ Generator of tokens for the given text.

        The row argument is the line number of the first line of text.
        """
        return super().tokenize(filename, text, self.lex_token, row=row)

    def lex_token(self):
        c = self.next_char()
        if c is None:
            self.emit('EOF', 'EOF')
            return

        if c in WHITESPACE:
            self.accept_run(WHITESPACE)
            self.ignore()
        elif c == COMMENT:
            self.lex_comment()
        elif c in LETTERS:
            self.lex_identifier()
        elif c in NUMBER_CHARS:
            self.lex_number()
        else:
            self.emit(c)

        return self.lex_token

    def lex_comment(self):
        """ Eat all characters until and including the end of line """
        while True:
            c = self.next_char()
            if c is None or c == '\n':
                break
        self.ignore()

    def lex_identifier(self):
        self.accept_run(ALPHANUMERIC)
        name = self.current_text
        if name in KEYWORDS:
            self.emit(name)
        else:
            self.emit('ID')

    def lex_number(self):
        self.accept_run(NUMBER_CHARS)
        txt = self.current_text
        if txt.count('.') > 1 or txt == '.':
            self.error(
                'Malformed number "{}"'.format(txt), loc=self.start_location)
        self.emit('NUMBER', float(txt))
