""" Main entry point, dispatching to one of the command line tools.

For example 'python -m classlens java summary Hello.class'.
"""

import sys
import importlib


valid_programs = [
    "hexdump",
    "java",
]


def load_program(name):
    """ Get the entry function of a tool in classlens.cli """
    module = importlib.import_module("classlens.cli." + name)
    return module, getattr(module, name)


def main():
    if len(sys.argv) > 1 and sys.argv[1] in valid_programs:
        _, func = load_program(sys.argv[1])
        func(sys.argv[2:])
    else:
        print_help_message()


def print_help_message():
    print("classlens: inspect java class files")
    print()
    print("Use one of these tools:")
    for name in valid_programs:
        module, _ = load_program(name)
        summary = module.__doc__.strip().splitlines()[0]
        print("  {:<10} {}".format(name, summary))
    print()
    print("For the options of a tool:")
    for name in valid_programs:
        print("  $ python -m classlens {} -h".format(name))
    print()


if __name__ == "__main__":
    main()
