""" Functions to render class contents as text.
"""

from .disasm import disassemble
from .enums import format_flags


NO_CODE_TEXT = "(No bytecode for this method - it may be abstract or native)"
SEPARATOR = "-" * 50


def summary_report(class_file):
    """ Create the overview of a class: name, version and members. """
    if class_file.interfaces:
        interfaces = ", ".join(class_file.interfaces)
    else:
        interfaces = "(None)"
    lines = [
        "Class:       {}".format(class_file.this_class),
        "Superclass:  {}".format(class_file.super_class or "N/A"),
        "Version:     {}.{} (Java {})".format(
            class_file.major_version,
            class_file.minor_version,
            class_file.java_version,
        ),
        "Interfaces:  {}".format(interfaces),
        "",
        "--- Fields ---",
        fields_report(class_file.fields),
        "",
        "--- Methods ---",
        methods_report(class_file.methods),
    ]
    return "\n".join(lines) + "\n"


def fields_report(fields):
    if not fields:
        return "(No declared fields)"
    return "\n".join(
        " - {} {}".format(field.field_type, field.name) for field in fields
    )


def methods_report(methods):
    if not methods:
        return "(No declared methods)"
    return "\n".join(" - {}".format(method.signature) for method in methods)


def method_report(method):
    """ Create the bytecode listing of a single method. """
    lines = ["Bytecode for method: {}".format(method.signature), "", ""]
    code = method.code
    if code is None:
        lines.append(NO_CODE_TEXT)
        return "\n".join(lines)

    lines.append("Max stack: {}, Max locals: {}, Code length: {}".format(
        code.max_stack, code.max_locals, code.code_length
    ))
    lines.append(SEPARATOR)
    for instruction in disassemble(code.code):
        lines.append(instruction.render(method.constant_pool))

    if code.exception_table:
        lines.append("Exception table:")
        lines.append("   from    to  target type")
        for handler in code.exception_table:
            lines.append(
                "{:>7} {:>5} {:>7} {}".format(
                    handler.start_pc,
                    handler.end_pc,
                    handler.handler_pc,
                    handler.catch_type or "any",
                )
            )
    return "\n".join(lines) + "\n"


def print_class_file(class_file, file=None):
    """ Dump a class file. """
    ClassFilePrinter(class_file, file=file)


class ClassFilePrinter:
    """ Verbose listing of a class file, including the constant pool. """

    def __init__(self, class_file, file=None):
        self.class_file = class_file
        self.file = file
        self.print("class {}".format(class_file.this_class))
        self.print("  minor version:", class_file.minor_version)
        self.print("  major version:", class_file.major_version)
        self.print(
            "  flags:", format_flags(class_file.access_flags, "class")
        )

        self.print("Constant pool:")
        constant_pool = class_file.constant_pool
        for i, value in constant_pool:
            text = "{:>6} = {:<18} {}".format(
                "#{}".format(i), value.tag.name, value.value
            )
            description = constant_pool.describe(i)
            if description != str(value.value):
                text += "  // " + description
            self.print(text)

        self.print("{")

        for field in class_file.fields:
            self.print("  {} {};".format(field.field_type, field.name))
            self.print("    descriptor:", field.descriptor)
            self.print("    flags:", format_flags(field.access_flags, "field"))
            self.print_attributes("    ", field.attributes)

        for method in class_file.methods:
            self.print("  {};".format(method.signature))
            self.print("    descriptor:", method.descriptor)
            self.print(
                "    flags:", format_flags(method.access_flags, "method")
            )
            self.print_attributes("    ", method.attributes)

        self.print("}")
        self.print_attributes("", class_file.attributes)

    def print(self, *args):
        print(*args, file=self.file)

    def print_attributes(self, indent, attributes):
        for attribute in attributes:
            self.print(
                "{}{}: {} bytes".format(
                    indent, attribute.name, len(attribute.data)
                )
            )
