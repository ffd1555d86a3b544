""" The backend of the interactive compiler.

The context holds everything that lives longer than a single statement:
the table of declared functions and the python namespace into which the
generated code is loaded.
"""

import logging
import math
from .common import CodegenError, ExecutionError
from .codegenerator import CodeGenerator
from .runtime import Runtime


class FunctionHandle:
    """ A declared function. It is callable once it has a body. """
    def __init__(self, name, parameters):
        self.name = name
        self.parameters = list(parameters)
        self.function = None
        self.source = None

    @property
    def arity(self):
        return len(self.parameters)

    @property
    def has_body(self):
        return self.function is not None

    def __repr__(self):
        return 'FunctionHandle({}, {})'.format(self.name, self.parameters)


def unresolved(name):
    """ Create a placeholder for an external without implementation """
    def stub(*args):
        raise ExecutionError('Unresolved external function: {}'.format(name))
    return stub


class Context:
    """ Compilation and execution context of one session.

    Functions are compiled with compile_prototype and compile_function.
    Anonymous functions can be executed with run.
    """
    logger = logging.getLogger('kaleido.context')
    anonymous_name = 'k_anonymous'

    def __init__(self, output=None):
        self.runtime = Runtime(output)
        self.functions = {}
        self.namespace = {'fn': {}, 'INF': math.inf}

    def arity_of(self, name):
        """ Get the number of parameters of a declared function """
        if name in self.functions:
            return self.functions[name].arity

    def check_prototype(self, prototype):
        """ Check a prototype against earlier declarations """
        seen = set()
        for parameter in prototype.parameters:
            if parameter in seen:
                raise CodegenError(
                    'Duplicate parameter {} in {}'.format(
                        parameter, prototype.name or 'anonymous function'),
                    prototype.loc)
            seen.add(parameter)

        if prototype.name in self.functions:
            handle = self.functions[prototype.name]
            if handle.arity != len(prototype.parameters):
                raise CodegenError(
                    'Function {} redeclared with {} parameters, '
                    'previously {}'.format(
                        prototype.name, len(prototype.parameters),
                        handle.arity),
                    prototype.loc)
            return handle

    def compile_prototype(self, prototype):
        """ Declare a function signature, return its handle.

        A known external function is bound right away.
        """
        handle = self.check_prototype(prototype)
        if handle:
            self.logger.debug('%s already declared', prototype.name)
            return handle

        handle = FunctionHandle(prototype.name, prototype.parameters)
        external = self.runtime.lookup(prototype.name)
        if external:
            function, arity = external
            if arity != handle.arity:
                raise CodegenError(
                    'External function {} takes {} parameters'.format(
                        prototype.name, arity),
                    prototype.loc)
            handle.function = function
        else:
            function = unresolved(prototype.name)
        self.logger.debug('Declaring %s', handle)
        self.namespace['fn'][prototype.name] = function
        self.functions[prototype.name] = handle
        return handle

    def compile_function(self, function):
        """ Compile a function definition, return its handle.

        The function table is only updated when compilation succeeds.
        Anonymous functions are not added to the table at all.
        """
        prototype = function.prototype
        anonymous = prototype.is_anonymous
        handle = self.check_prototype(prototype)
        if handle and handle.has_body:
            raise CodegenError(
                'Function {} already has a body'.format(prototype.name),
                prototype.loc)

        if anonymous:
            python_name = self.anonymous_name
            lookup = self.arity_of
        else:
            python_name = 'k_{}'.format(prototype.name)
            arity = len(prototype.parameters)

            # Allow recursive calls:
            def lookup(name):
                if name == prototype.name:
                    return arity
                return self.arity_of(name)

        try:
            source = CodeGenerator(lookup).generate(function, python_name)
            code = compile(source, '<kaleido {}>'.format(python_name), 'exec')
        except (RecursionError, SyntaxError):
            # Python limits the nesting of blocks and indentation:
            raise CodegenError(
                'Expression nested too deeply', function.loc) from None
        self.logger.debug('Generated code:\n%s', source)

        local_names = {}
        exec(code, self.namespace, local_names)
        if handle is None:
            handle = FunctionHandle(prototype.name, prototype.parameters)
        handle.function = local_names[python_name]
        handle.source = source
        if not anonymous:
            self.namespace['fn'][prototype.name] = handle.function
            self.functions[prototype.name] = handle
        return handle

    def run(self, handle):
        """ Execute a function without parameters and return its value """
        assert handle.has_body and handle.arity == 0
        self.logger.debug('Running %s', handle)
        try:
            return handle.function()
        except RecursionError:
            raise ExecutionError('Maximum recursion depth exceeded') from None
        except (ArithmeticError, ValueError) as ex:
            raise ExecutionError(str(ex)) from None
