""" Test cases for the commandline utility. """

import io
import os
import tempfile
import unittest
from unittest.mock import patch

from kaleido.cli.kaleido import kaleido


def relpath(*args):
    return os.path.normpath(
        os.path.join(os.path.dirname(os.path.abspath(__file__)), *args))


def new_temp_file(suffix, content):
    """ Generate a new temporary file with the given content """
    handle, filename = tempfile.mkstemp(suffix=suffix)
    with os.fdopen(handle, 'w') as f:
        f.write(content)
    return filename


class KaleidoTestCase(unittest.TestCase):
    """ Test the kaleido command-line utility """
    @patch('sys.stderr', new_callable=io.StringIO)
    @patch('sys.stdout', new_callable=io.StringIO)
    def test_source_file(self, mock_stdout, mock_stderr):
        filename = new_temp_file('.kal', 'def f(x) x * 2\nf(4)\n')
        self.addCleanup(os.remove, filename)
        kaleido([filename])
        output = mock_stdout.getvalue()
        self.assertIn('Parsed a function definition.', output)
        self.assertIn('Evaluated to 8.0', output)
        self.assertNotIn('ready>', output)

    @patch('sys.stderr', new_callable=io.StringIO)
    @patch('sys.stdout', new_callable=io.StringIO)
    def test_source_file_with_errors(self, mock_stdout, mock_stderr):
        filename = new_temp_file('.kal', 'def f( 1\n')
        self.addCleanup(os.remove, filename)
        with self.assertRaises(SystemExit) as cm:
            kaleido([filename])
        self.assertEqual(1, cm.exception.code)
        self.assertIn('Error: Expected ")"', mock_stdout.getvalue())

    @patch('sys.stderr', new_callable=io.StringIO)
    @patch('sys.stdout', new_callable=io.StringIO)
    def test_examples(self, mock_stdout, mock_stderr):
        kaleido([relpath('..', 'examples', 'fib.kal')])
        self.assertEqual(2, mock_stdout.getvalue().count('Evaluated to 55.0'))

    @patch('sys.stderr', new_callable=io.StringIO)
    @patch('sys.stdout', new_callable=io.StringIO)
    def test_loops_example(self, mock_stdout, mock_stderr):
        kaleido([relpath('..', 'examples', 'loops.kal')])
        self.assertIn('*\n**\n***\n****\n*****\n', mock_stdout.getvalue())

    @patch('sys.stderr', new_callable=io.StringIO)
    @patch('sys.stdout', new_callable=io.StringIO)
    @patch('sys.stdin', new_callable=io.StringIO)
    def test_interactive(self, mock_stdin, mock_stdout, mock_stderr):
        mock_stdin.write('extern sin(x); sin(0)\n')
        mock_stdin.seek(0)
        kaleido(['--prompt', '> ', '--dump-ast'])
        output = mock_stdout.getvalue()
        self.assertTrue(output.startswith('> Parsed an extern.'))
        self.assertIn('PROTOTYPE sin(x)', output)
        self.assertIn('Evaluated to 0.0', output)

    @patch('sys.stdout', new_callable=io.StringIO)
    def test_help(self, mock_stdout):
        """ Test help function """
        with self.assertRaises(SystemExit) as cm:
            kaleido(['-h'])
        self.assertEqual(0, cm.exception.code)
        self.assertIn('kaleido', mock_stdout.getvalue())

    @patch('sys.stderr', new_callable=io.StringIO)
    def test_invalid_log_level(self, mock_stderr):
        """ Test invalid log level """
        with self.assertRaises(SystemExit) as cm:
            kaleido(['--log', 'blabla'])
        self.assertEqual(2, cm.exception.code)
        self.assertIn('invalid log_level value', mock_stderr.getvalue())


if __name__ == '__main__':
    unittest.main()
