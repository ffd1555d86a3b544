"""
AST (abstract syntax tree) nodes for the kaleido language.
The tree is build by the parser.
Then code is generated from it.
"""

# pylint: disable=R0903


class Node:
    """ Base class of all nodes in a AST.

    Nodes compare equal when they are of the same class and their fields
    compare equal. Source locations do not take part in the comparison.
    """
    fields = ()

    def __eq__(self, other):
        if type(self) is not type(other):
            return NotImplemented
        return all(
            getattr(self, f) == getattr(other, f) for f in self.fields)


# Expressions:
class Expression(Node):
    """ Base class of all expressions, every expression has a value """
    def __init__(self, loc):
        self.loc = loc


class Number(Expression):
    """ Numeric literal """
    fields = ('value',)

    def __init__(self, value, loc=None):
        super().__init__(loc)
        assert isinstance(value, float)
        self.value = value

    def __repr__(self):
        return 'NUMBER {}'.format(self.value)


class Variable(Expression):
    """ Reference to a parameter or loop variable """
    fields = ('name',)

    def __init__(self, name, loc=None):
        super().__init__(loc)
        assert name
        self.name = name

    def __repr__(self):
        return 'VARIABLE {}'.format(self.name)


class Binop(Expression):
    """ Expression taking two operands and one operator """
    arithmatic_ops = ('+', '-', '*')
    compare_ops = ('<',)
    all_ops = arithmatic_ops + compare_ops
    fields = ('op', 'a', 'b')

    def __init__(self, op, a, b, loc=None):
        super().__init__(loc)
        assert isinstance(a, Expression), type(a)
        assert isinstance(b, Expression), type(b)
        assert op in self.all_ops
        self.op = op
        self.a = a
        self.b = b

    def __repr__(self):
        return 'BINOP {}'.format(self.op)


class Call(Expression):
    """ Call to a function with a list of arguments """
    fields = ('callee', 'args')

    def __init__(self, callee, args, loc=None):
        super().__init__(loc)
        assert all(isinstance(a, Expression) for a in args)
        self.callee = callee
        self.args = args

    def __repr__(self):
        return 'CALL {}'.format(self.callee)


class If(Expression):
    """ Conditional expression, selects one of two values """
    fields = ('condition', 'then_branch', 'else_branch')

    def __init__(self, condition, then_branch, else_branch, loc=None):
        super().__init__(loc)
        self.condition = condition
        self.then_branch = then_branch
        self.else_branch = else_branch

    def __repr__(self):
        return 'IF'


class For(Expression):
    """ Bounded loop. The step is None when it was not given. """
    fields = ('var_name', 'start', 'end', 'step', 'body')

    def __init__(self, var_name, start, end, step, body, loc=None):
        super().__init__(loc)
        assert step is None or isinstance(step, Expression)
        self.var_name = var_name
        self.start = start
        self.end = end
        self.step = step
        self.body = body

    def __repr__(self):
        return 'FOR {}'.format(self.var_name)


# Top level units:
class Prototype(Node):
    """ Signature of a function: its name and the names of its
    parameters. All values are doubles, so there are no types. """
    fields = ('name', 'parameters')

    def __init__(self, name, parameters, loc=None):
        self.name = name
        self.parameters = parameters
        self.loc = loc

    @property
    def is_anonymous(self):
        return self.name == ''

    def __repr__(self):
        return 'PROTOTYPE {}({})'.format(self.name, ' '.join(self.parameters))


class Function(Node):
    """ A prototype together with the expression which is its body """
    fields = ('prototype', 'body')

    def __init__(self, prototype, body, loc=None):
        assert isinstance(prototype, Prototype)
        assert isinstance(body, Expression)
        self.prototype = prototype
        self.body = body
        self.loc = loc

    @property
    def name(self):
        return self.prototype.name

    def __repr__(self):
        return 'FUNCTION {}'.format(self.prototype.name or '<anonymous>')


def anonymous_function(body):
    """ Wrap a top level expression into a function without a name and
    without parameters. """
    return Function(Prototype('', [], body.loc), body, body.loc)
