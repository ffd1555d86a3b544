""" Python back-end. Generates python code from kaleido functions.

Every kaleido function becomes a python function. Expressions are
flattened into a sequence of assignments to temporaries, since the
conditional and the loop need statements in python.

For example 'def f(x) x * 2 + 1' becomes:

.. code::

    def k_f(v_x):
        t1 = v_x * 2.0
        t2 = t1 + 1.0
        return t2

Calls go through the 'fn' dictionary of the namespace the code is loaded
into, so that functions can be (re)bound after the caller was compiled.
"""

import contextlib
import io
import logging
import math
import time
from .common import CodegenError
from . import nodes


class CodeGenerator:
    """ Generates python source code for a kaleido function.

    The lookup function maps a function name onto its number of
    parameters, or None when no such function was declared.
    """
    logger = logging.getLogger('kaleido.codegen')

    def __init__(self, lookup):
        self.lookup = lookup
        self.output_file = None
        self.scope = {}
        self._level = 0
        self._counter = 0

    def print(self, level, *args):
        """Print args to current file with level indents"""
        print("    " * level, end="", file=self.output_file)
        print(*args, file=self.output_file)

    def _indent(self):
        self._level += 1

    def _dedent(self):
        self._level -= 1

    @contextlib.contextmanager
    def func_def(self, decl):
        self.emit(f"def {decl}")
        self._indent()
        yield
        self._dedent()

    @contextlib.contextmanager
    def indented(self):
        self._indent()
        yield
        self._dedent()

    def emit(self, txt):
        """Emit python code at current indentation level"""
        self.print(self._level, txt)

    def new_name(self, prefix):
        self._counter += 1
        return f"{prefix}{self._counter}"

    def generate(self, function, python_name):
        """ Return python source code defining the given function """
        prototype = function.prototype
        self.logger.debug("Generating code for %s", function)
        self.output_file = io.StringIO()
        self._level = 0
        self._counter = 0
        self.scope = {}
        for parameter in prototype.parameters:
            self.scope[parameter] = f"v_{parameter}"

        self.emit(f"# Automatically generated on {time.ctime()}")
        self.emit(f"# Kaleido function {prototype.name or '<anonymous>'}")
        parameters = ", ".join(self.scope[p] for p in prototype.parameters)
        with self.func_def(f"{python_name}({parameters}):"):
            value = self.gen_expr(function.body)
            self.emit(f"return {value}")
        return self.output_file.getvalue()

    def gen_expr(self, expr):
        """ Generate code for an expression.

        Returns a python expression text which is either a literal or a
        local variable name holding the value.
        """
        if isinstance(expr, nodes.Number):
            value = self.gen_literal(expr.value)
        elif isinstance(expr, nodes.Variable):
            if expr.name not in self.scope:
                raise CodegenError(
                    "Unknown variable name: {}".format(expr.name), expr.loc)
            value = self.scope[expr.name]
        elif isinstance(expr, nodes.Binop):
            value = self.gen_binop(expr)
        elif isinstance(expr, nodes.Call):
            value = self.gen_call(expr)
        elif isinstance(expr, nodes.If):
            value = self.gen_if(expr)
        elif isinstance(expr, nodes.For):
            value = self.gen_for(expr)
        else:  # pragma: no cover
            raise NotImplementedError(str(expr))
        return value

    def gen_literal(self, value):
        if math.isinf(value):
            return "INF"
        return repr(value)

    def gen_binop(self, expr):
        lhs = self.gen_expr(expr.a)
        rhs = self.gen_expr(expr.b)
        value = self.new_name("t")
        if expr.op == "<":
            self.emit(f"{value} = 1.0 if {lhs} < {rhs} else 0.0")
        else:
            self.emit(f"{value} = {lhs} {expr.op} {rhs}")
        return value

    def gen_call(self, expr):
        arity = self.lookup(expr.callee)
        if arity is None:
            raise CodegenError(
                "Unknown function: {}".format(expr.callee), expr.loc)
        if arity != len(expr.args):
            raise CodegenError(
                "Incorrect number of arguments passed to {}".format(
                    expr.callee), expr.loc)
        args = [self.gen_expr(arg) for arg in expr.args]
        value = self.new_name("t")
        self.emit(f"{value} = fn[{expr.callee!r}]({', '.join(args)})")
        return value

    def gen_if(self, expr):
        """ Only the selected branch is evaluated """
        condition = self.gen_expr(expr.condition)
        value = self.new_name("t")
        self.emit(f"if {condition} != 0.0:")
        with self.indented():
            then_value = self.gen_expr(expr.then_branch)
            self.emit(f"{value} = {then_value}")
        self.emit("else:")
        with self.indented():
            else_value = self.gen_expr(expr.else_branch)
            self.emit(f"{value} = {else_value}")
        return value

    def gen_for(self, expr):
        """ Generate a loop which runs the body at least once.

        The end condition is evaluated after the body and the step, with
        the loop variable not yet incremented.
        """
        start = self.gen_expr(expr.start)
        variable = "{}_{}".format(self.new_name("l"), expr.var_name)
        self.emit(f"{variable} = {start}")

        # The loop variable shadows an outer name within the loop only:
        old_variable = self.scope.get(expr.var_name)
        self.scope[expr.var_name] = variable
        self.emit("while True:")
        with self.indented():
            self.gen_expr(expr.body)
            if expr.step is None:
                step = "1.0"
            else:
                step = self.gen_expr(expr.step)
            end = self.gen_expr(expr.end)
            self.emit(f"{variable} = {variable} + {step}")
            self.emit(f"if {end} == 0.0:")
            with self.indented():
                self.emit("break")
        if old_variable is None:
            del self.scope[expr.var_name]
        else:
            self.scope[expr.var_name] = old_variable

        value = self.new_name("t")
        self.emit(f"{value} = 0.0")
        return value
