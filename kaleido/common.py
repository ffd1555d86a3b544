"""
   Error handling routines
   Diagnostic utils
   Source location structures
"""

import collections
import logging


logformat = '%(asctime)s | %(levelname)8s | %(name)10.10s | %(message)s'


class SourceLocation:
    """ A location that refers to a position in a source text """

    __slots__ = ['filename', 'row', 'col', 'length']

    def __init__(self, filename, row, col, ln):
        self.filename = filename
        self.row = row
        self.col = col
        self.length = ln

    def __repr__(self):
        return '({}, {}, {}, {})'.format(
            self.filename, self.row, self.col, self.length)

    def __str__(self):
        return '{}:{}:{}'.format(self.filename, self.row, self.col)

    def print_message(self, message, lines, context=2, file=None):
        """ Print a message at this location in the given source lines """
        print_message(
            lines, self.row, self.col, self.length, message,
            context=context, file=file)


def print_message(lines, row, col, length, message, context=2, file=None):
    """ Render a message nicely embedded in surrounding source.

    The lines are a mapping from row number to the text of that row.
    """
    prerow = max(row - context, 1)
    afterrow = row + context

    for r in range(prerow, afterrow + 1):
        if r in lines:
            print('{:5} :{}'.format(r, lines[r]), file=file)

        # Mark the offending text:
        if r == row:
            base_txt = '      :'
            if length < 1:
                length = 1
            marker = '^' * length
            indent1_txt = base_txt + ' ' * (col - 1)
            indent2_txt = indent1_txt + ' ' * (length // 2)
            print('{}{}'.format(indent1_txt, marker), file=file)
            print('{}|'.format(indent2_txt), file=file)
            print('{}+---- {}'.format(indent2_txt, message), file=file)


class Token:
    """
    Token is used in the lexical analyzer. The lexical analyzer takes
    a text and splits it into tokens.
    """

    __slots__ = ['typ', 'val', 'loc']

    def __init__(self, typ, val, loc):
        self.typ = typ
        self.val = val
        assert isinstance(loc, SourceLocation)
        self.loc = loc

    def __repr__(self):
        return 'Token({}, {}, {})'.format(self.typ, self.val, self.loc)


class CompilerError(Exception):
    """ Base of all errors reported to the user of the compiler """
    def __init__(self, msg, loc=None):
        super().__init__(msg)
        self.msg = msg
        self.loc = loc
        if loc:
            assert isinstance(loc, SourceLocation), \
                   '{0} must be SourceLocation'.format(type(loc))

    def __repr__(self):
        return '"{}"'.format(self.msg)

    def render(self, lines, context=2, file=None):
        """ Render this error in some lines of context """
        self.loc.print_message(
            'Error: {0}'.format(self.msg), lines, context=context, file=file)


class LexicalError(CompilerError):
    """ Malformed literal in the source text """
    pass


class ParseError(CompilerError):
    """ Token sequence does not match the grammar """
    pass


class CodegenError(CompilerError):
    """ The backend could not compile a unit """
    pass


class ExecutionError(CompilerError):
    """ A compiled unit failed while running """
    pass


class DiagnosticsManager:
    """ Collects and prints errors, rendered against their source text.

    A session can run for a long time, so only the most recent source
    lines and diagnostics are kept. The error_count covers all errors.
    """
    max_lines = 100
    max_diags = 100

    def __init__(self, file=None):
        self.diags = collections.deque(maxlen=self.max_diags)
        self.error_count = 0
        self.sources = {}
        self.file = file
        self.logger = logging.getLogger('kaleido.diagnostics')

    def add_line(self, name, row, line):
        """ Register a single line of an interactively growing source """
        lines = self.sources.setdefault(name, {})
        lines[row] = line.rstrip('\r\n')
        while len(lines) > self.max_lines:
            del lines[next(iter(lines))]

    def add_diag(self, d):
        """ Add a diagnostic message """
        if d.loc:
            self.logger.info('Line %s: %s', d.loc.row, d.msg)
        else:
            self.logger.info(str(d.msg))
        self.error_count += 1
        self.diags.append(d)

    def print_error(self, e, context=2):
        """ Print a single error in a nice formatted way """
        if e.loc and e.loc.filename in self.sources:
            lines = self.sources[e.loc.filename]
            e.render(lines, context=context, file=self.file)
        else:
            print('Error: {0}'.format(e.msg), file=self.file)
