import io
import unittest

from classlens.jvm import read_class_file, summary_report, print_class_file
from classlens.common import UnsupportedOpcode
from classlens.jvm.printer import method_report, NO_CODE_TEXT
from class_builder import ClassBuilder, hello_world
from class_builder import ACC_ABSTRACT, ACC_NATIVE, ACC_PUBLIC


def load(builder):
    return read_class_file(builder.build())


class SummaryTestCase(unittest.TestCase):
    def test_hello_world(self):
        expected = (
            "Class:       Hello\n"
            "Superclass:  java.lang.Object\n"
            "Version:     52.0 (Java 8)\n"
            "Interfaces:  (None)\n"
            "\n"
            "--- Fields ---\n"
            "(No declared fields)\n"
            "\n"
            "--- Methods ---\n"
            " - void <init>()\n"
            " - void main(java.lang.String[])\n"
        )
        self.assertEqual(expected, summary_report(load(hello_world())))

    def test_members_and_interfaces(self):
        builder = ClassBuilder('org/example/Point', major=61, minor=0)
        builder.add_interface('java/io/Serializable')
        builder.add_interface('java/lang/Cloneable')
        builder.add_field('x', 'I')
        builder.add_field('grid', '[[J')
        builder.add_field('name', 'Ljava/lang/String;')
        expected = (
            "Class:       org.example.Point\n"
            "Superclass:  java.lang.Object\n"
            "Version:     61.0 (Java 17)\n"
            "Interfaces:  java.io.Serializable, java.lang.Cloneable\n"
            "\n"
            "--- Fields ---\n"
            " - int x\n"
            " - long[][] grid\n"
            " - java.lang.String name\n"
            "\n"
            "--- Methods ---\n"
            "(No declared methods)\n"
        )
        self.assertEqual(expected, summary_report(load(builder)))

    def test_no_superclass(self):
        builder = ClassBuilder('java/lang/Object', super_name=None)
        summary = summary_report(load(builder))
        self.assertIn("Superclass:  N/A\n", summary)

    def test_minor_version(self):
        builder = ClassBuilder(major=45, minor=3)
        summary = summary_report(load(builder))
        self.assertIn("Version:     45.3 (Java 1)\n", summary)


class MethodReportTestCase(unittest.TestCase):
    def test_init(self):
        builder = hello_world()
        init = load(builder).methods[0]
        init_ref = builder.add_method_ref(
            'java/lang/Object', '<init>', '()V')
        expected = (
            "Bytecode for method: void <init>()\n"
            "\n"
            "\n"
            "Max stack: 1, Max locals: 1, Code length: 5\n"
            + "-" * 50 + "\n"
            "    0: aload_0\n"
            "    1: invokespecial #{} // Method java/lang/Object.\"<init>\":()V\n"
            "    4: return\n"
        ).format(init_ref)
        self.assertEqual(expected, method_report(init))

    def test_abstract_method(self):
        builder = ClassBuilder()
        builder.add_method(
            'size', '()I', access_flags=ACC_PUBLIC | ACC_ABSTRACT)
        method, = load(builder).methods
        expected = (
            "Bytecode for method: int size()\n"
            "\n"
            "\n"
            "(No bytecode for this method - it may be abstract or native)"
        )
        self.assertEqual(expected, method_report(method))

    def test_native_method(self):
        builder = ClassBuilder()
        builder.add_method(
            'hash', '(Ljava/lang/Object;)I',
            access_flags=ACC_PUBLIC | ACC_NATIVE)
        method, = load(builder).methods
        self.assertTrue(method_report(method).endswith(NO_CODE_TEXT))

    def test_exception_table(self):
        builder = ClassBuilder()
        exception = builder.add_class('java/io/IOException')
        builder.add_method(
            'run', '()V', code=[0x00, 0xb1, 0x4c, 0xb1],
            exception_table=[(0, 2, 2, exception), (0, 1, 3, 0)])
        method, = load(builder).methods
        report = method_report(method)
        self.assertTrue(report.endswith(
            "    3: return\n"
            "Exception table:\n"
            "   from    to  target type\n"
            "      0     2       2 java/io/IOException\n"
            "      0     1       3 any\n"), report)

    def test_invalid_code(self):
        builder = ClassBuilder()
        builder.add_method('run', '()V', code=[0x00, 0xe5])
        method, = load(builder).methods
        with self.assertRaises(UnsupportedOpcode):
            method_report(method)


class PrintClassFileTestCase(unittest.TestCase):
    def test_hello_world(self):
        f = io.StringIO()
        print_class_file(load(hello_world()), file=f)
        text = f.getvalue()
        self.assertTrue(text.startswith('class Hello\n'))
        self.assertIn('  major version: 52\n', text)
        self.assertIn('  flags: ACC_PUBLIC, ACC_SUPER\n', text)
        self.assertIn('Constant pool:\n', text)
        self.assertIn('    #1 = Utf8               Hello\n', text)
        self.assertIn('// class Hello', text)
        self.assertIn('  void main(java.lang.String[]);\n', text)
        self.assertIn('    descriptor: ([Ljava/lang/String;)V\n', text)
        self.assertIn('    flags: ACC_PUBLIC, ACC_STATIC\n', text)
        self.assertIn('    Code: ', text)
        self.assertTrue(text.endswith('}\nSourceFile: 2 bytes\n'))


if __name__ == '__main__':
    unittest.main()
