""" Test cases for the various commandline utilities. """

import unittest
import tempfile
import io
import os
import struct
import zipfile
from unittest.mock import patch

from classlens.cli.hexdump import hexdump
from classlens.cli.java import java, printable
from classlens.__main__ import main
from class_builder import ClassBuilder, hello_world


def new_temp_file(suffix, data=b''):
    """ Generate a new temporary file with the given contents """
    handle, filename = tempfile.mkstemp(suffix=suffix)
    os.write(handle, data)
    os.close(handle)
    return filename


class JavaTestCase(unittest.TestCase):
    """ Test the java command-line utility """
    def setUp(self):
        self.class_file = new_temp_file('.class', hello_world().build())

    def tearDown(self):
        os.remove(self.class_file)

    @patch('sys.stdout', new_callable=io.StringIO)
    def test_help(self, mock_stdout):
        with self.assertRaises(SystemExit) as cm:
            java(['-h'])
        self.assertEqual(0, cm.exception.code)
        self.assertIn('java', mock_stdout.getvalue())

    @patch('sys.stderr', new_callable=io.StringIO)
    def test_invalid_log_level(self, mock_stderr):
        with self.assertRaises(SystemExit) as cm:
            java(['--log', 'blabla', 'summary', self.class_file])
        self.assertEqual(2, cm.exception.code)
        self.assertIn('invalid log_level value', mock_stderr.getvalue())

    @patch('sys.stdout', new_callable=io.StringIO)
    def test_summary(self, mock_stdout):
        java(['summary', self.class_file])
        self.assertEqual(
            'Class:       Hello\n'
            'Superclass:  java.lang.Object\n'
            'Version:     52.0 (Java 8)\n'
            'Interfaces:  (None)\n'
            '\n'
            '--- Fields ---\n'
            '(No declared fields)\n'
            '\n'
            '--- Methods ---\n'
            ' - void <init>()\n'
            ' - void main(java.lang.String[])\n',
            mock_stdout.getvalue())

    @patch('sys.stdout', new_callable=io.StringIO)
    def test_summary_colored(self, mock_stdout):
        java(['summary', '--color', self.class_file])
        output = mock_stdout.getvalue()
        self.assertIn('\x1b[', output)
        self.assertIn('Hello', output)

    @patch('sys.stdout', new_callable=io.StringIO)
    def test_methods(self, mock_stdout):
        java(['methods', self.class_file])
        self.assertEqual(
            'void <init>()\nvoid main(java.lang.String[])\n',
            mock_stdout.getvalue())

    @patch('sys.stdout', new_callable=io.StringIO)
    def test_javap(self, mock_stdout):
        java(['javap', self.class_file])
        output = mock_stdout.getvalue()
        self.assertIn('Bytecode for method: void <init>()\n', output)
        self.assertIn(
            'Bytecode for method: void main(java.lang.String[])\n', output)
        self.assertIn('// String Hello world\n', output)

    @patch('sys.stdout', new_callable=io.StringIO)
    def test_javap_method(self, mock_stdout):
        java(['javap', '-m', 'void <init>()', self.class_file])
        output = mock_stdout.getvalue()
        self.assertTrue(
            output.startswith('Bytecode for method: void <init>()\n'))
        self.assertNotIn('main', output)

    @patch('sys.stdout', new_callable=io.StringIO)
    def test_javap_constants(self, mock_stdout):
        java(['javap', '--constants', self.class_file])
        output = mock_stdout.getvalue()
        self.assertIn('Constant pool:\n', output)
        self.assertIn('Bytecode for method:', output)

    @patch('sys.stderr', new_callable=io.StringIO)
    @patch('sys.stdout', new_callable=io.StringIO)
    def test_javap_unknown_method(self, mock_stdout, mock_stderr):
        with self.assertRaises(SystemExit) as cm:
            java(['javap', '-m', 'void nothing()', self.class_file])
        self.assertEqual(1, cm.exception.code)
        self.assertEqual('', mock_stdout.getvalue())

    @patch('sys.stderr', new_callable=io.StringIO)
    @patch('sys.stdout', new_callable=io.StringIO)
    def test_bad_magic(self, mock_stdout, mock_stderr):
        bad_file = new_temp_file('.class', b'\xde\xad\xbe\xef' + bytes(20))
        try:
            with self.assertRaises(SystemExit) as cm:
                java(['summary', bad_file])
        finally:
            os.remove(bad_file)
        self.assertEqual(1, cm.exception.code)
        self.assertIn('BadMagic', mock_stderr.getvalue())
        self.assertEqual('', mock_stdout.getvalue())

    @patch('sys.stderr', new_callable=io.StringIO)
    @patch('sys.stdout', new_callable=io.StringIO)
    def test_invalid_bytecode(self, mock_stdout, mock_stderr):
        builder = ClassBuilder()
        builder.add_method('run', '()V', code=[0xe0])
        bad_file = new_temp_file('.class', builder.build())
        try:
            with self.assertRaises(SystemExit) as cm:
                java(['javap', bad_file])
        finally:
            os.remove(bad_file)
        self.assertEqual(1, cm.exception.code)
        self.assertIn('UnsupportedOpcode', mock_stderr.getvalue())

    @patch('sys.stderr', new_callable=io.StringIO)
    @patch('sys.stdout', new_callable=io.StringIO)
    def test_jar(self, mock_stdout, mock_stderr):
        jar_file = new_temp_file('.jar')
        try:
            with zipfile.ZipFile(jar_file, 'w') as f:
                f.writestr('Hello.class', hello_world().build())
            java(['jar', jar_file])
        finally:
            os.remove(jar_file)
        self.assertEqual('Hello.class: Hello\n', mock_stdout.getvalue())

    @patch('sys.stderr', new_callable=io.StringIO)
    @patch('sys.stdout', new_callable=io.StringIO)
    def test_corrupt_jar(self, mock_stdout, mock_stderr):
        jar_file = new_temp_file('.jar', b'PK\x03\x04 not really a zip')
        try:
            with self.assertRaises(SystemExit) as cm:
                java(['jar', jar_file])
        finally:
            os.remove(jar_file)
        self.assertEqual(1, cm.exception.code)
        self.assertIn('Not a valid jar file', mock_stderr.getvalue())

    @patch('sys.stdout', new_callable=io.StringIO)
    def test_lone_surrogate_is_escaped(self, mock_stdout):
        builder = ClassBuilder()
        # Modified utf-8 for a lone high surrogate:
        text = builder.add_raw(b'\x01\x00\x03\xed\xa0\x80')
        builder.add_raw(struct.pack('>BH', 8, text))
        bad_file = new_temp_file('.class', builder.build())
        try:
            java(['javap', '--constants', bad_file])
        finally:
            os.remove(bad_file)
        output = mock_stdout.getvalue()
        self.assertIn('String \\ud800', output)
        self.assertNotIn('\ud800', output)

    def test_printable(self):
        self.assertEqual('a\\udc80b', printable('a\udc80b'))
        self.assertEqual('hé\U0001F600', printable('hé\U0001F600'))

    @patch('sys.stderr', new_callable=io.StringIO)
    @patch('sys.stdout', new_callable=io.StringIO)
    def test_very_verbose_logs_constants(self, mock_stdout, mock_stderr):
        report_file = new_temp_file('.txt')
        try:
            java(['-v', '-v', '--report', report_file, 'summary',
                  self.class_file])
            with open(report_file) as f:
                report = f.read()
        finally:
            os.remove(report_file)
        self.assertIn('constant #1:', report)
        self.assertIn('constant #1:', mock_stderr.getvalue())

    @patch('sys.stderr', new_callable=io.StringIO)
    @patch('sys.stdout', new_callable=io.StringIO)
    def test_verbose_without_constants(self, mock_stdout, mock_stderr):
        java(['-v', 'summary', self.class_file])
        log = mock_stderr.getvalue()
        self.assertIn('Loggers attached', log)
        self.assertNotIn('constant #1:', log)

    @patch('sys.stdout', new_callable=io.StringIO)
    def test_report_file(self, mock_stdout):
        report_file = new_temp_file('.txt')
        try:
            java(['--log', 'debug', '--report', report_file, 'summary',
                  self.class_file])
            with open(report_file) as f:
                report = f.read()
        finally:
            os.remove(report_file)
        self.assertIn('Loggers attached', report)


class HexDumpTestCase(unittest.TestCase):
    """ Test the hexdump command-line utility """
    @patch('sys.stdout', new_callable=io.StringIO)
    def test_help(self, mock_stdout):
        with self.assertRaises(SystemExit) as cm:
            hexdump(['-h'])
        self.assertEqual(0, cm.exception.code)
        self.assertIn('dump', mock_stdout.getvalue())

    @patch('sys.stdout', new_callable=io.StringIO)
    def test_hexdump(self, mock_stdout):
        bin_file = new_temp_file('.bin', bytes(range(20)))
        try:
            hexdump([bin_file])
        finally:
            os.remove(bin_file)
        self.assertEqual(
            '00 01 02 03 04 05 06 07 08 09 0A 0B 0C 0D 0E 0F\n'
            '10 11 12 13\n',
            mock_stdout.getvalue())

    @patch('sys.stdout', new_callable=io.StringIO)
    def test_canonical(self, mock_stdout):
        bin_file = new_temp_file('.bin', b'ABCD')
        try:
            hexdump(['-C', '--width', '4', bin_file])
        finally:
            os.remove(bin_file)
        self.assertEqual(
            '00000000  41 42 43 44  |ABCD|\n', mock_stdout.getvalue())

    @patch('sys.stderr', new_callable=io.StringIO)
    def test_zero_width(self, mock_stderr):
        bin_file = new_temp_file('.bin', b'ABCD')
        try:
            with self.assertRaises(SystemExit) as cm:
                hexdump(['--width', '0', bin_file])
        finally:
            os.remove(bin_file)
        self.assertEqual(2, cm.exception.code)
        self.assertIn('invalid positive_int value', mock_stderr.getvalue())

    @patch('sys.stdout', new_callable=io.StringIO)
    def test_empty_file(self, mock_stdout):
        bin_file = new_temp_file('.bin')
        try:
            hexdump([bin_file])
        finally:
            os.remove(bin_file)
        self.assertEqual('', mock_stdout.getvalue())


class MainTestCase(unittest.TestCase):
    """ Test the subcommand dispatcher """
    @patch('sys.stdout', new_callable=io.StringIO)
    def test_help(self, mock_stdout):
        with patch('sys.argv', ['classlens']):
            main()
        self.assertIn('python -m classlens java -h', mock_stdout.getvalue())

    @patch('sys.stdout', new_callable=io.StringIO)
    def test_dispatch(self, mock_stdout):
        class_file = new_temp_file('.class', hello_world().build())
        try:
            with patch('sys.argv', ['classlens', 'java', 'methods',
                                    class_file]):
                main()
        finally:
            os.remove(class_file)
        self.assertIn('void main(java.lang.String[])', mock_stdout.getvalue())


if __name__ == '__main__':
    unittest.main()
