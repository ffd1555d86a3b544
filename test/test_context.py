import io
import unittest
from kaleido.context import Context
from kaleido.lexer import KaleidoLexer
from kaleido.parser import Parser
from kaleido.common import CodegenError, ExecutionError


class BackendTestCase(unittest.TestCase):
    """ Compile and run snippets with the python backend """
    def setUp(self):
        self.output = io.StringIO()
        self.context = Context(self.output)

    def parse(self, snippet):
        parser = Parser()
        parser.init_lexer(KaleidoLexer().tokenize(snippet))
        if parser.peek == 'def':
            return parser.parse_definition()
        elif parser.peek == 'extern':
            return parser.parse_extern()
        else:
            return parser.parse_toplevel()

    def declare(self, snippet):
        return self.context.compile_prototype(self.parse(snippet))

    def define(self, snippet):
        return self.context.compile_function(self.parse(snippet))

    def evaluate(self, snippet):
        handle = self.define(snippet)
        return self.context.run(handle)

    def test_arithmetic(self):
        self.assertEqual(7.0, self.evaluate('1 + 2 * 3'))
        self.assertEqual(-4.0, self.evaluate('1 - 2 - 3'))
        self.assertEqual(9.0, self.evaluate('(1 + 2) * 3'))

    def test_compare(self):
        self.assertEqual(1.0, self.evaluate('1 < 2'))
        self.assertEqual(0.0, self.evaluate('2 < 1'))
        self.assertEqual(0.0, self.evaluate('2 < 2'))

    def test_result_is_float(self):
        self.assertIsInstance(self.evaluate('4'), float)

    def test_function(self):
        self.define('def add(a b) a + b')
        self.assertEqual(5.0, self.evaluate('add(2, 3)'))

    def test_recursion(self):
        self.define('def fib(x) if x < 3 then 1 else fib(x-1) + fib(x-2)')
        self.assertEqual(55.0, self.evaluate('fib(10)'))

    def test_only_selected_branch_runs(self):
        self.declare('extern printd(x)')
        self.assertEqual(2.0, self.evaluate('if 1 then 2 else printd(3)'))
        self.assertEqual('', self.output.getvalue())
        self.assertEqual(0.0, self.evaluate('if 0 then 2 else printd(3)'))
        self.assertEqual('3.000000\n', self.output.getvalue())

    def test_loop(self):
        self.declare('extern printd(x)')
        self.assertEqual(0.0, self.evaluate('for i = 1, i < 3 in printd(i)'))
        self.assertEqual(
            '1.000000\n2.000000\n3.000000\n', self.output.getvalue())

    def test_loop_with_step(self):
        self.declare('extern printd(x)')
        self.evaluate('for i = 0, i < 5, 2 in printd(i)')
        self.assertEqual(
            '0.000000\n2.000000\n4.000000\n6.000000\n',
            self.output.getvalue())

    def test_loop_runs_at_least_once(self):
        self.declare('extern printd(x)')
        self.evaluate('for i = 5, 0 in printd(i)')
        self.assertEqual('5.000000\n', self.output.getvalue())

    def test_loop_variable_shadows(self):
        self.define('def f(i) (for i = 1, i < 3 in i) + i')
        self.assertEqual(10.0, self.evaluate('f(10)'))

    def test_loop_variable_scope(self):
        with self.assertRaises(CodegenError) as cm:
            self.define('def f() (for i = 1, i < 3 in i) + i')
        self.assertEqual('Unknown variable name: i', cm.exception.msg)

    def test_putchard(self):
        self.declare('extern putchard(c)')
        self.evaluate('putchard(72) + putchard(105) + putchard(10)')
        self.assertEqual('Hi\n', self.output.getvalue())

    def test_math_externals(self):
        self.declare('extern sin(x)')
        self.declare('extern pow(x y)')
        self.assertEqual(0.0, self.evaluate('sin(0)'))
        self.assertEqual(8.0, self.evaluate('pow(2, 3)'))

    def test_unknown_variable(self):
        with self.assertRaises(CodegenError) as cm:
            self.define('def f(x) y')
        self.assertEqual('Unknown variable name: y', cm.exception.msg)
        self.assertEqual(10, cm.exception.loc.col)

    def test_unknown_function(self):
        with self.assertRaises(CodegenError) as cm:
            self.evaluate('foo(1)')
        self.assertEqual('Unknown function: foo', cm.exception.msg)

    def test_wrong_number_of_arguments(self):
        self.define('def f(x) x')
        with self.assertRaises(CodegenError) as cm:
            self.evaluate('f(1, 2)')
        self.assertEqual(
            'Incorrect number of arguments passed to f', cm.exception.msg)

    def test_failed_compile_has_no_effect(self):
        with self.assertRaises(CodegenError):
            self.define('def f(x) y')
        self.assertNotIn('f', self.context.functions)
        self.define('def f(x) x')
        self.assertEqual(3.0, self.evaluate('f(3)'))

    def test_duplicate_parameters(self):
        with self.assertRaises(CodegenError):
            self.declare('extern f(x x)')
        with self.assertRaises(CodegenError):
            self.define('def f(x x) x')

    def test_redeclare_same_arity(self):
        first = self.declare('extern f(x)')
        second = self.declare('extern f(y)')
        self.assertIs(first, second)

    def test_redeclare_other_arity(self):
        self.declare('extern f(x)')
        with self.assertRaises(CodegenError):
            self.declare('extern f(x y)')
        with self.assertRaises(CodegenError):
            self.define('def f(x y) x')

    def test_redefinition(self):
        self.define('def f(x) x')
        with self.assertRaises(CodegenError):
            self.define('def f(x) x + 1')
        self.assertEqual(1.0, self.evaluate('f(1)'))

    def test_define_declared_function(self):
        """ An extern can be used before the definition is given """
        self.declare('extern g(x)')
        self.define('def f(x) g(x) * 2')
        with self.assertRaises(ExecutionError):
            self.evaluate('f(1)')
        self.define('def g(x) x + 1')
        self.assertEqual(4.0, self.evaluate('f(1)'))

    def test_external_wrong_arity(self):
        with self.assertRaises(CodegenError):
            self.declare('extern sin(x y)')

    def test_external_has_body(self):
        self.declare('extern sin(x)')
        with self.assertRaises(CodegenError):
            self.define('def sin(x) x')

    def test_anonymous_not_registered(self):
        self.evaluate('1')
        self.assertEqual({}, self.context.functions)

    def test_unresolved_external(self):
        self.declare('extern missing(x)')
        with self.assertRaises(ExecutionError) as cm:
            self.evaluate('missing(1)')
        self.assertEqual(
            'Unresolved external function: missing', cm.exception.msg)

    def test_infinite_recursion(self):
        self.define('def forever(x) forever(x)')
        with self.assertRaises(ExecutionError):
            self.evaluate('forever(1)')

    def test_math_domain_error(self):
        self.declare('extern sqrt(x)')
        with self.assertRaises(ExecutionError):
            self.evaluate('sqrt(0 - 1)')

    def test_huge_literal(self):
        self.assertEqual(float('inf'), self.evaluate('1' + '0' * 400))

    def test_deeply_nested_loops(self):
        with self.assertRaises(CodegenError) as cm:
            self.define('for i = 1, 0 in ' * 150 + '1')
        self.assertEqual('Expression nested too deeply', cm.exception.msg)

    def test_generated_source(self):
        handle = self.define('def f(x) if x < 1 then 0 else x * 2')
        self.assertIn('def k_f(v_x):', handle.source)
        self.assertIn('if t1 != 0.0:', handle.source)


if __name__ == '__main__':
    unittest.main()
