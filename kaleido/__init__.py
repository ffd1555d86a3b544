""" An interactive compiler for the kaleido expression language,
implemented in pure Python.

Example usage:

>>> from kaleido.toplevel import Toplevel
>>> session = Toplevel()
>>> units = session.handle_line('def twice(x) x * 2; twice(21)')
Parsed a function definition.
Parsed a top-level expression.
Evaluated to 42.0

"""

# Define version here. Used in docs, and setup script:
__version_info__ = (0, 1, 0)
__version__ = '.'.join(map(str, __version_info__))
