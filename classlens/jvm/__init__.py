""" Java virtual machine (JVM) class files.

This module supports loading java class files and disassembling the
bytecode of their methods.

See also:

https://en.wikipedia.org/wiki/Java_bytecode_instruction_listings
"""

from .io import read_jar, read_class_file, load_code
from .descriptor import parse_field_descriptor, parse_method_descriptor
from .disasm import disassemble
from .printer import print_class_file, summary_report, method_report


__all__ = [
    "disassemble",
    "load_code",
    "method_report",
    "parse_field_descriptor",
    "parse_method_descriptor",
    "print_class_file",
    "read_class_file",
    "read_jar",
    "summary_report",
]
