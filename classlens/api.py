"""
The api module contains a set of handy functions to analyze class files
and disassemble their methods.
"""

import logging
from collections import OrderedDict
from .jvm.io import read_class_file
from .jvm.printer import summary_report, method_report
from .utils.hexdump import hex_listing

# When using 'from classlens.api import *' include the following:
__all__ = [
    'analyze', 'disassemble', 'hex_dump', 'build_method_map',
    'read_class_file', 'AnalysisResult']


logger = logging.getLogger('classlens.api')


class AnalysisResult:
    """ Outcome of analyzing a class file.

    Attributes:
        summary: textual overview of the class.
        methods: ordered mapping from signature to method.
        hex_dump: hex listing of the raw bytes.
        class_file: the parsed class file.
        data: the raw bytes that were analyzed.
    """
    def __init__(self, summary, methods, hex_dump, class_file, data):
        self.summary = summary
        self.methods = methods
        self.hex_dump = hex_dump
        self.class_file = class_file
        self.data = data

    def __repr__(self):
        return 'AnalysisResult({}, {} methods)'.format(
            self.class_file.this_class, len(self.methods))


def analyze(data, verbose=False):
    """ Analyze the contents of a class file.

    Args:
        data: the bytes of the class file, or a binary file like object.
        verbose: also log every constant of the constant pool.

    Returns:
        An :class:`AnalysisResult` object

    Raises:
        ClassFormatError: when the bytes are not a valid class file.

    .. doctest::

        >>> from classlens.api import analyze
        >>> with open('Hello.class', 'rb') as f:
        ...     result = analyze(f)
        >>> print(result.summary)
    """
    if hasattr(data, 'read'):
        data = data.read()
    data = bytes(data)
    logger.debug('Analyzing %s bytes', len(data))
    class_file = read_class_file(data, verbose=verbose)
    return AnalysisResult(
        summary_report(class_file),
        build_method_map(class_file),
        hex_listing(data),
        class_file,
        data)


def build_method_map(class_file):
    """ Map the signature of each method to the method.

    Methods are kept in declaration order. When two methods have the same
    signature, for example a bridge method and the method it bridges to,
    the method declared last is kept at the position of the first one.
    """
    methods = OrderedDict()
    for method in class_file.methods:
        signature = method.signature
        if signature in methods:
            logger.warning(
                'Signature "%s" occurs more than once, using the last one',
                signature)
        methods[signature] = method
    return methods


def disassemble(method):
    """ Create the bytecode listing of the given method.

    Methods without code, such as abstract and native methods, result
    in a placeholder text.
    """
    return method_report(method)


def hex_dump(data):
    """ Hex listing of raw bytes, 16 bytes per line.

    This works on any data, also when it is not a valid class file.
    """
    return hex_listing(bytes(data))
