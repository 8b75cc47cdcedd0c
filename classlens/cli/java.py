""" Java class file inspection utility.
"""

import argparse
import io
import logging
import sys
from .base import base_parser, class_file_parser, LogSetup
from ..api import analyze, disassemble
from ..jvm import read_jar, print_class_file
from ..jvm.lexer import highlight


logger = logging.getLogger('java')

parser = argparse.ArgumentParser(description=__doc__, parents=[base_parser])
subparsers = parser.add_subparsers(
    title="commands", description="possible commands", dest="command"
)

color_parser = argparse.ArgumentParser(add_help=False)
color_parser.add_argument(
    "--color", action="store_true", default=False,
    help="Show the output with syntax coloring",
)

summary_parser = subparsers.add_parser(
    "summary", help="Show an overview of a java class.",
    parents=[class_file_parser, color_parser],
)

methods_parser = subparsers.add_parser(
    "methods", help="List the method signatures of a java class.",
    parents=[class_file_parser],
)

dis_parser = subparsers.add_parser(
    "javap", help="Disassemble (javap) a java class.",
    parents=[class_file_parser, color_parser],
)
dis_parser.add_argument(
    "--method", "-m", metavar="signature",
    help="Only disassemble the method with this signature, "
    "for example 'void main(java.lang.String[])'",
)
dis_parser.add_argument(
    "--constants", action="store_true", default=False,
    help="Also print the constant pool and member details",
)

jar_parser = subparsers.add_parser("jar", help="Explore jar file.")
jar_parser.add_argument(
    "jarfile", metavar="java jar file", help="jar file to inspect"
)


def printable(text):
    """ Escape lone surrogates, which modified utf-8 strings may contain """
    return text.encode("utf-8", "backslashreplace").decode("utf-8")


def emit(text, color=False):
    text = printable(text)
    if color:
        text = highlight(text)
    if not text.endswith("\n"):
        text += "\n"
    sys.stdout.write(text)


def java(args=None):
    """ Java command line utility. """
    args = parser.parse_args(args)
    with LogSetup(args):
        verbose = args.verbose > 1
        if args.command == "jar":
            for name, class_file in read_jar(args.jarfile, verbose=verbose):
                emit("{}: {}".format(name, class_file.this_class))
            return

        if args.command is None:  # pragma: no cover
            parser.print_usage()
            sys.exit(1)

        data = args.class_file.read()
        args.class_file.close()
        result = analyze(data, verbose=verbose)

        if args.command == "summary":
            emit(result.summary, args.color)
        elif args.command == "methods":
            for signature in result.methods:
                emit(signature)
        else:
            assert args.command == "javap"
            if args.constants:
                f = io.StringIO()
                print_class_file(result.class_file, file=f)
                emit(f.getvalue(), args.color)
            if args.method is None:
                methods = list(result.methods.values())
            elif args.method in result.methods:
                methods = [result.methods[args.method]]
            else:
                logger.error("No method with signature %s", args.method)
                sys.exit(1)
            listing = "\n".join(disassemble(method) for method in methods)
            emit(listing, args.color)


if __name__ == "__main__":
    java()
