"""
    Visitor class.
"""

from . import nodes


class Visitor:
    """
        Visitor that can visit all nodes in the AST
        and run pre and post functions.
    """
    def __init__(self, pre=None, post=None):
        self.pre = pre
        self.post = post

    def visit(self, node):
        """ Visit a node and all its descendants """
        self.do(node)

    def do(self, node):
        """ Visit a single node """
        # Run pre function:
        if self.pre:
            self.pre(node)

        # Descent into subnodes:
        if isinstance(node, nodes.Function):
            self.do(node.prototype)
            self.do(node.body)
        elif isinstance(node, nodes.Binop):
            self.do(node.a)
            self.do(node.b)
        elif isinstance(node, nodes.Call):
            for arg in node.args:
                self.do(arg)
        elif isinstance(node, nodes.If):
            self.do(node.condition)
            self.do(node.then_branch)
            self.do(node.else_branch)
        elif isinstance(node, nodes.For):
            self.do(node.start)
            self.do(node.end)
            if node.step is not None:
                self.do(node.step)
            self.do(node.body)
        elif isinstance(node, (nodes.Prototype, nodes.Number, nodes.Variable)):
            # Those nodes do not have child nodes.
            pass
        else:  # pragma: no cover
            raise NotImplementedError('Could not visit "{0}"'.format(node))

        # run post function
        if self.post:
            self.post(node)


class AstPrinter:
    """ Prints an AST as text """
    def print_ast(self, node, f):
        self.indent = 2
        self.f = f
        visitor = Visitor(self.print1, self.print2)
        visitor.visit(node)

    def print1(self, node):
        print(' ' * self.indent + repr(node), file=self.f)
        self.indent += 2

    def print2(self, _):
        self.indent -= 2
