""" This module contains the parsing parts for the kaleido language. """

import logging
from .tools.recursivedescent import RecursiveDescentParser
from . import nodes


class Parser(RecursiveDescentParser):
    """ Parses a sequence of tokens into an abstract syntax tree (AST).

    Use init_lexer to hand over the tokens, then call one of the top level
    productions. After a production the position attribute points just
    behind the tokens that were used.
    """
    logger = logging.getLogger('kaleido.parser')

    LEFT_ASSOCIATIVITY = 'left'
    RIGHT_ASSOCIATIVITY = 'right'
    op_binding_powers = {
        '<': (10, LEFT_ASSOCIATIVITY),
        '+': (20, LEFT_ASSOCIATIVITY),
        '-': (20, LEFT_ASSOCIATIVITY),
        '*': (40, LEFT_ASSOCIATIVITY),
    }

    # Top level productions:
    def parse_definition(self):
        """ Parse a function definition: 'def' prototype expression """
        loc = self.consume('def').loc
        prototype = self.parse_prototype()
        self.logger.debug('Parsing function %s', prototype.name)
        body = self.parse_expression()
        return nodes.Function(prototype, body, loc)

    def parse_extern(self):
        """ Parse an external declaration: 'extern' prototype """
        self.consume('extern')
        return self.parse_prototype()

    def parse_toplevel(self):
        """ Parse a bare expression into an anonymous function """
        return nodes.anonymous_function(self.parse_expression())

    def parse_prototype(self):
        """ Parse a function signature. Parameters are not separated:

        name '(' id* ')'
        """
        name = self.consume('ID')
        self.consume('(')
        parameters = []
        while self.peek == 'ID':
            parameters.append(self.consume('ID').val)
        self.consume(')')
        return nodes.Prototype(name.val, parameters, name.loc)

    # Expressions:
    def parse_expression(self, rbp=0):
        """ Process expressions with precedence climbing
            See also:
            http://eli.thegreenplace.net/2012/08/02/
                parsing-expressions-by-precedence-climbing
        """
        lhs = self.parse_primary()
        while self.peek in self.op_binding_powers and \
                self.op_binding_powers[self.peek][0] >= rbp:
            operator = self.next_token()
            precedence, associativity = self.op_binding_powers[operator.typ]
            if associativity == self.LEFT_ASSOCIATIVITY:
                next_precedence = precedence + 1
            else:  # pragma: no cover
                next_precedence = precedence
            rhs = self.parse_expression(next_precedence)
            lhs = nodes.Binop(operator.typ, lhs, rhs, operator.loc)
        return lhs

    def parse_primary(self):
        """ Parse a primary expression, the operand of binary operators.

        The alternative is selected by looking at the first token only.
        """
        if self.peek == 'NUMBER':
            number = self.consume('NUMBER')
            return nodes.Number(number.val, number.loc)
        elif self.peek == '(':
            self.consume('(')
            expr = self.parse_expression()
            self.consume(')')
            return expr
        elif self.peek == 'ID':
            if self.look_ahead(1) == '(':
                return self.parse_call()
            name = self.consume('ID')
            return nodes.Variable(name.val, name.loc)
        elif self.peek == 'if':
            return self.parse_if()
        elif self.peek == 'for':
            return self.parse_for()
        else:
            self.error(
                'Expected expression, got {}'.format(self.describe_current()))

    def parse_call(self):
        """ Parse a function call: name '(' [expr (',' expr)*] ')' """
        callee = self.consume('ID')
        self.consume('(')
        args = []
        if not self.has_consumed(')'):
            while True:
                args.append(self.parse_expression())
                if not self.has_consumed(','):
                    break
            self.consume(')')
        return nodes.Call(callee.val, args, callee.loc)

    def parse_if(self):
        """ Parse 'if' expr 'then' expr 'else' expr """
        loc = self.consume('if').loc
        condition = self.parse_expression()
        self.consume('then')
        then_branch = self.parse_expression()
        self.consume('else')
        else_branch = self.parse_expression()
        return nodes.If(condition, then_branch, else_branch, loc)

    def parse_for(self):
        """ Parse 'for' id '=' expr ',' expr [',' expr] 'in' expr """
        loc = self.consume('for').loc
        var_name = self.consume('ID').val
        self.consume('=')
        start = self.parse_expression()
        self.consume(',')
        end = self.parse_expression()
        if self.has_consumed(','):
            step = self.parse_expression()
        else:
            step = None
        self.consume('in')
        body = self.parse_expression()
        return nodes.For(var_name, start, end, step, body, loc)
