""" The read-eval-print loop of the interactive compiler.

Each line of input is lexed completely, then split into statements on ';'.
Every statement is parsed into a unit and handed to the backend:

.. graphviz::

   digraph kaleido {
   rankdir="LR"
   1 [label="input line"]
   10 [label="lexer" ]
   20 [label="parser" ]
   40 [label="backend"]
   99 [label="result"]
   1 -> 10
   10 -> 20
   20 -> 40
   40 -> 99
   }

"""

import logging
import sys
from .common import DiagnosticsManager, CompilerError
from .common import LexicalError, ParseError, CodegenError, ExecutionError
from .context import Context
from .lexer import KaleidoLexer
from .parser import Parser
from .visitor import AstPrinter
from . import nodes


class Toplevel:
    """ Turns lines of text into units for the backend.

    Errors never end the session. A lexical error drops the whole line,
    a parse error drops the rest of the line and a backend error only
    drops the statement it occurred in.
    """
    logger = logging.getLogger('kaleido.toplevel')
    prompt = 'ready> '

    def __init__(
            self, backend=None, output=None, filename='<stdin>',
            dump_ast=False, dump_code=False):
        self.output = output
        if backend is None:
            backend = Context(output)
        self.backend = backend
        self.filename = filename
        self.dump_ast = dump_ast
        self.dump_code = dump_code
        self.lexer = KaleidoLexer()
        self.parser = Parser()
        self.diag = DiagnosticsManager(file=output)
        self.row = 0

    def emit(self, txt):
        print(txt, file=self.output)

    def report(self, error):
        """ Show an error to the user """
        self.diag.add_diag(error)
        self.diag.print_error(error, context=0)

    def main_loop(self, input_file=None, prompt=True):
        """ Read and handle lines until the end of the input """
        if input_file is None:
            input_file = sys.stdin
        self.logger.debug('Entering main loop')
        while True:
            if prompt:
                print(self.prompt, end='', file=self.output, flush=True)
            line = input_file.readline()
            if not line:
                break
            self.handle_line(line)
        if prompt:
            self.emit('')
        self.logger.debug('End of input')

    def load_file(self, f):
        """ Handle all lines of a file, without prompting """
        self.filename = getattr(f, 'name', '<input>')
        self.row = 0
        self.main_loop(f, prompt=False)

    def handle_line(self, line):
        """ Handle all statements on a single line of text.

        Returns the list of units which were parsed successfully.
        """
        self.row += 1
        self.diag.add_line(self.filename, self.row, line)
        try:
            tokens = list(self.lexer.tokenize(
                line.rstrip('\r\n'), self.filename, self.row))
        except LexicalError as ex:
            self.report(ex)
            return []

        self.parser.init_lexer(tokens)
        units = []
        while not self.parser.at_end:
            # Empty statements are fine:
            if self.parser.has_consumed(';'):
                continue

            try:
                unit = self.parse_statement()
            except ParseError as ex:
                self.report(ex)
                break
            units.append(unit)
            self.handle_unit(unit)
        return units

    def parse_statement(self):
        """ Parse a single statement, selected by its first token """
        try:
            if self.parser.peek == 'def':
                return self.parser.parse_definition()
            elif self.parser.peek == 'extern':
                return self.parser.parse_extern()
            else:
                return self.parser.parse_toplevel()
        except RecursionError:
            raise ParseError(
                'Expression nested too deeply',
                self.parser.current_location) from None

    def handle_unit(self, unit):
        """ Acknowledge a parsed unit and forward it to the backend """
        if isinstance(unit, nodes.Prototype):
            self.emit('Parsed an extern.')
        elif unit.prototype.is_anonymous:
            self.emit('Parsed a top-level expression.')
        else:
            self.emit('Parsed a function definition.')

        if self.dump_ast:
            try:
                AstPrinter().print_ast(unit, self.output)
            except RecursionError:
                self.report(CompilerError(
                    'Expression nested too deeply to print', unit.loc))

        try:
            if isinstance(unit, nodes.Prototype):
                self.backend.compile_prototype(unit)
            else:
                handle = self.backend.compile_function(unit)
                if self.dump_code:
                    self.emit(handle.source)
                if unit.prototype.is_anonymous:
                    value = self.backend.run(handle)
                    self.emit('Evaluated to {}'.format(value))
        except (CodegenError, ExecutionError) as ex:
            self.report(ex)
