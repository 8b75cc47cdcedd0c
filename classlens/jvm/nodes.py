""" Data structures for most java related items. """

from collections import namedtuple
from ..common import InvalidConstantPoolIndex
from .enums import ConstantTag, ReferenceKind, NewArrayType
from .opcodes import op_to_name, op_to_arg_types, ArgType


class MethodType:
    def __init__(self, parameter_types, return_type):
        self.parameter_types = tuple(parameter_types)
        self.return_type = return_type

    def __repr__(self):
        return "MethodType({}, {})".format(
            self.parameter_types, self.return_type
        )


class BaseType:
    names = {
        "B": "byte",
        "C": "char",
        "D": "double",
        "F": "float",
        "I": "int",
        "J": "long",
        "S": "short",
        "Z": "boolean",
    }

    def __init__(self, typ):
        self.typ = typ

    def __str__(self):
        return self.names[self.typ]

    def __repr__(self):
        return "BaseType({!r})".format(self.typ)


class VoidType:
    """ Return type of methods which return nothing. """

    def __str__(self):
        return "void"

    def __repr__(self):
        return "VoidType()"


class ObjectType:
    def __init__(self, class_name):
        self.class_name = class_name

    def __str__(self):
        return self.class_name.replace("/", ".")

    def __repr__(self):
        return "ObjectType({!r})".format(self.class_name)


class ArrayType:
    def __init__(self, component_type):
        self.component_type = component_type

    def flatten(self):
        """ Get the non-array element type and the number of dimensions.

        Arrays can have 255 dimensions, so this does not recurse.
        """
        element_type, dimensions = self.component_type, 1
        while isinstance(element_type, ArrayType):
            element_type = element_type.component_type
            dimensions += 1
        return element_type, dimensions

    def __str__(self):
        element_type, dimensions = self.flatten()
        return "{}{}".format(element_type, "[]" * dimensions)

    def __repr__(self):
        element_type, dimensions = self.flatten()
        return "ArrayType({!r}, dimensions={})".format(
            element_type, dimensions
        )


def display_name(internal_name):
    """ Turn an internal class name like java/lang/Object into
    java.lang.Object """
    return internal_name.replace("/", ".")


class ClassFile:
    magic = 0xCAFEBABE

    def __init__(
        self,
        major_version=None,
        minor_version=None,
        constant_pool=None,
        access_flags=None,
        this_class=None,
        super_class=None,
        interfaces=(),
        fields=(),
        methods=(),
        attributes=(),
    ):
        self.major_version = major_version
        self.minor_version = minor_version
        self.constant_pool = constant_pool
        self.access_flags = frozenset(access_flags or ())
        self.this_class = this_class
        self.super_class = super_class
        self.interfaces = tuple(interfaces)
        self.fields = tuple(fields)
        self.methods = tuple(methods)
        self.attributes = tuple(attributes)

    def __repr__(self):
        return "ClassFile({})".format(self.this_class)

    @property
    def java_version(self):
        return self.major_version - 44


class ConstantPool:
    """ Constant pool.

    Indexing starts at 1. Slot 0 and the slot following a long or double
    constant hold None and cannot be retrieved.
    """

    def __init__(self):
        self._pool = [None]  # Start with a dummy at position 0.

    def __getitem__(self, index):
        if not 0 < index < len(self._pool):
            raise InvalidConstantPoolIndex(
                "Constant pool index {} out of range 1..{}".format(
                    index, len(self._pool) - 1
                )
            )
        constant = self._pool[index]
        if constant is None:
            raise InvalidConstantPoolIndex(
                "Constant pool index {} is a reserved slot".format(index)
            )
        return constant

    def __len__(self):
        # This equals the constant_pool_count in the class file.
        return len(self._pool)

    def __iter__(self):
        """ Iterate over (index, constant) pairs of the used slots. """
        for index, constant in enumerate(self._pool):
            if constant is not None:
                yield index, constant

    def append(self, constant):
        self._pool.append(constant)

    def get(self, index, *tags):
        """ Get a constant and check it is one of the given kinds. """
        constant = self[index]
        if tags and constant.tag not in tags:
            raise InvalidConstantPoolIndex(
                "Constant pool index {} is {}, expected {}".format(
                    index,
                    constant.tag.name,
                    " or ".join(tag.name for tag in tags),
                )
            )
        return constant

    def get_utf8(self, index):
        return self.get(index, ConstantTag.Utf8).value

    def get_class_name(self, index):
        """ Get the internal name of a class constant. """
        name_index = self.get(index, ConstantTag.Class).value
        return self.get_utf8(name_index)

    def get_name_and_type(self, index):
        name_index, descriptor_index = self.get(
            index, ConstantTag.NameAndType
        ).value
        return self.get_utf8(name_index), self.get_utf8(descriptor_index)

    def describe(self, index):
        """ Describe a constant the way javap does in its comments. """
        constant = self[index]
        tag, value = constant.tag, constant.value
        if tag == ConstantTag.Utf8:
            return value
        elif tag == ConstantTag.Integer:
            return "int {}".format(value)
        elif tag == ConstantTag.Float:
            return "float {!r}f".format(value)
        elif tag == ConstantTag.Long:
            return "long {}l".format(value)
        elif tag == ConstantTag.Double:
            return "double {!r}d".format(value)
        elif tag == ConstantTag.Class:
            return "class {}".format(quote_name(self.get_utf8(value)))
        elif tag == ConstantTag.String:
            return "String {}".format(self.get_utf8(value))
        elif tag == ConstantTag.FieldRef:
            return "Field {}".format(self._member_text(value))
        elif tag == ConstantTag.MethodRef:
            return "Method {}".format(self._member_text(value))
        elif tag == ConstantTag.InterfaceMethodRef:
            return "InterfaceMethod {}".format(self._member_text(value))
        elif tag == ConstantTag.NameAndType:
            name, descriptor = self.get_name_and_type(index)
            return "{}:{}".format(quote_name(name), descriptor)
        elif tag == ConstantTag.MethodHandle:
            kind, reference_index = value
            reference = self[reference_index]
            return "MethodHandle {}:{}".format(
                ReferenceKind(kind).name, self._member_text(reference.value)
            )
        elif tag == ConstantTag.MethodType:
            return "MethodType {}".format(self.get_utf8(value))
        elif tag in (ConstantTag.Dynamic, ConstantTag.InvokeDynamic):
            bootstrap_index, nat_index = value
            name, descriptor = self.get_name_and_type(nat_index)
            return "{} #{}:{}:{}".format(
                tag.name, bootstrap_index, quote_name(name), descriptor
            )
        else:
            assert tag in (ConstantTag.Module, ConstantTag.Package), tag
            return "{} {}".format(tag.name, self.get_utf8(value))

    def _member_text(self, value):
        class_index, nat_index = value
        owner = self.get_class_name(class_index)
        name, descriptor = self.get_name_and_type(nat_index)
        return "{}.{}:{}".format(
            quote_name(owner), quote_name(name), descriptor
        )


def quote_name(name):
    """ javap puts names like <init> and [I in quotes. """
    if name.startswith(("<", "[")):
        return '"{}"'.format(name)
    return name


class Constant:
    def __init__(self, tag, value):
        self.tag = tag
        self.value = value

    def __repr__(self):
        return "Constant {}: {}".format(self.tag, self.value)


class Field:
    def __init__(self, access_flags, name, descriptor, field_type, attributes):
        self.access_flags = frozenset(access_flags)
        self.name = name
        self.descriptor = descriptor
        self.field_type = field_type
        self.attributes = tuple(attributes)

    def __repr__(self):
        return "Field({} {})".format(self.field_type, self.name)


class Method:
    def __init__(
        self,
        access_flags,
        name,
        descriptor,
        method_type,
        attributes,
        code=None,
        constant_pool=None,
    ):
        self.access_flags = frozenset(access_flags)
        self.name = name
        self.descriptor = descriptor
        self.method_type = method_type
        self.attributes = tuple(attributes)
        self.code = code
        self.constant_pool = constant_pool

    def __repr__(self):
        return "Method({})".format(self.signature)

    @property
    def signature(self):
        """ Human readable signature, for example 'void main(java.lang.String[])'
        """
        parameters = ", ".join(map(str, self.method_type.parameter_types))
        return "{} {}({})".format(
            self.method_type.return_type, self.name, parameters
        )


class Attribute:
    def __init__(self, name, data, offset=None):
        self.name = name
        self.data = data
        # Position of the attribute data in the class file
        self.offset = offset

    def __repr__(self):
        return "Attribute(name={}, data={})".format(self.name, self.data)


ExceptionHandler = namedtuple(
    "ExceptionHandler",
    ["start_pc", "end_pc", "handler_pc", "catch_type_index", "catch_type"],
)


class CodeAttribute:
    def __init__(
        self, max_stack, max_locals, code, exception_table, attributes
    ):
        self.max_stack = max_stack
        self.max_locals = max_locals
        self.code = bytes(code)
        self.exception_table = tuple(exception_table)
        self.attributes = tuple(attributes)

    def __repr__(self):
        return "CodeAttribute(max_stack={}, max_locals={}, length={})".format(
            self.max_stack, self.max_locals, self.code_length
        )

    @property
    def code_length(self):
        return len(self.code)


class SwitchTable:
    """ Jump table of a tableswitch or lookupswitch instruction.

    The pairs are (match, target) tuples with absolute targets.
    """

    def __init__(self, default, pairs, low=None, high=None):
        self.default = default
        self.pairs = tuple(pairs)
        self.low = low
        self.high = high

    def __repr__(self):
        return "SwitchTable(default={}, pairs={})".format(
            self.default, self.pairs
        )


class Instruction:
    """ A single java instruction. """

    def __init__(self, offset, opcode, args, wide=False):
        self.offset = offset
        self.opcode = opcode
        self.args = tuple(args)
        self.wide = wide

    @property
    def mnemonic(self):
        name = op_to_name[self.opcode]
        return name + "_w" if self.wide else name

    def __repr__(self):
        return "instruction(opcode={} (0x{:0X}), args={})".format(
            self.mnemonic, self.opcode, self.args
        )

    def __str__(self):
        return self.render()

    def render(self, constant_pool=None):
        """ Render this instruction as text, javap style.

        When a constant pool is given, constant operands are annotated with
        a comment describing the constant.
        """
        head = "{:>5}: {}".format(self.offset, self.mnemonic)
        operands = []
        comment = None
        arg_types = [
            t for t in op_to_arg_types[self.opcode] if t != ArgType.ZERO
        ]
        for arg_type, arg in zip(arg_types, self.args):
            if arg_type in (ArgType.CONST8, ArgType.CONST16):
                operands.append("#{}".format(arg))
                if constant_pool is not None:
                    comment = constant_pool.describe(arg)
            elif arg_type == ArgType.ATYPE:
                operands.append(NewArrayType(arg).name)
            elif arg_type in (ArgType.TABLESWITCH, ArgType.LOOKUPSWITCH):
                return self._render_switch(head, arg_type, arg)
            else:
                operands.append(str(arg))

        if operands:
            head += " " + ", ".join(operands)
        if comment is not None:
            head += " // " + comment
        return head

    @staticmethod
    def _render_switch(head, arg_type, table):
        if arg_type == ArgType.TABLESWITCH:
            summary = "{} to {}".format(table.low, table.high)
        else:
            summary = str(len(table.pairs))
        lines = ["{} {{ // {}".format(head, summary)]
        for match, target in table.pairs:
            lines.append("{:>18}: {}".format(match, target))
        lines.append("{:>18}: {}".format("default", table.default))
        lines.append("{:>7}".format("}"))
        return "\n".join(lines)
