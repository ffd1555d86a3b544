""" Library of external functions which can be bound with 'extern'.

For example, after 'extern sin(x)' the function sin can be called from
kaleido code.
"""

import math


class Runtime:
    """ Holds the functions available to extern declarations.

    Output of the printing functions goes to the given file, or to
    standard output when no file is given.
    """
    def __init__(self, output=None):
        self.output = output
        # Mapping of name to function and number of arguments:
        self.functions = {
            'putchard': (self.putchard, 1),
            'printd': (self.printd, 1),
            'pow': (math.pow, 2),
        }
        for name in (
                'sin', 'cos', 'tan', 'atan', 'exp', 'log', 'sqrt',
                'fabs', 'floor', 'ceil'):
            self.functions[name] = (self.wrap_math(getattr(math, name)), 1)

    @staticmethod
    def wrap_math(func):
        """ Make sure the result of a math function is a float """
        def wrapper(x):
            return float(func(x))
        wrapper.__name__ = func.__name__
        return wrapper

    def lookup(self, name):
        """ Get the function and its number of arguments, or None """
        return self.functions.get(name)

    def putchard(self, x):
        """ Write the character with the given code """
        print(chr(int(x)), end='', file=self.output)
        return 0.0

    def printd(self, x):
        """ Write a number on a line of its own """
        print('%f' % x, file=self.output)
        return 0.0
