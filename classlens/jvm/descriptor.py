""" Parsing of field and method descriptors.

A descriptor is the compact type notation used in class files, for
example '(ILjava/lang/String;)[J' for a method taking an int and a string
and returning a long array.
"""

from ..common import MalformedDescriptor
from .nodes import BaseType, VoidType, ObjectType, ArrayType, MethodType


MAX_ARRAY_DIMENSIONS = 255


def parse_field_descriptor(text):
    parser = DescriptorParser(text)
    return parser.parse_field_descriptor()


def parse_method_descriptor(text):
    parser = DescriptorParser(text)
    return parser.parse_method_descriptor()


class DescriptorParser:
    """ Descriptor string parser. """

    def __init__(self, text):
        self.text = text
        self.pos = 0

    def error(self, msg):
        raise MalformedDescriptor(
            "Descriptor {!r}: {}".format(self.text, msg)
        )

    def parse_field_descriptor(self):
        typ = self.parse_field_type()
        if not self.at_end:
            self.error("unexpected text after type")
        return typ

    def parse_field_type(self):
        dimensions = 0
        while self.peek == "[":
            self.take()
            dimensions += 1
        if dimensions > MAX_ARRAY_DIMENSIONS:
            self.error("too many array dimensions")

        if self.at_end:
            if dimensions:
                self.error("unterminated array type")
            self.error("ends where a type was expected")

        c = self.take()
        if c in BaseType.names:
            typ = BaseType(c)
        elif c == "L":
            end = self.text.find(";", self.pos)
            if end == -1:
                self.error("unterminated class name")
            class_name = self.text[self.pos:end]
            if not class_name:
                self.error("empty class name")
            self.pos = end + 1
            typ = ObjectType(class_name)
        else:
            self.error("unknown type code {!r}".format(c))

        for _ in range(dimensions):
            typ = ArrayType(typ)
        return typ

    def parse_method_descriptor(self):
        """ Parse a method descriptor, such as (I[J)V """
        # Parameter types:
        if self.peek != "(":
            self.error("expected '('")
        self.take()
        parameter_types = []
        while self.peek != ")":
            if self.at_end:
                self.error("unterminated parameter list")
            typ = self.parse_field_type()
            parameter_types.append(typ)
        self.take()

        # Return type:
        if self.peek == "V":
            self.take()
            return_type = VoidType()
        else:
            return_type = self.parse_field_type()

        if not self.at_end:
            self.error("unexpected text after return type")
        return MethodType(parameter_types, return_type)

    def take(self):
        c = self.text[self.pos]
        self.pos += 1
        return c

    @property
    def peek(self):
        if self.pos < len(self.text):
            return self.text[self.pos]

    @property
    def at_end(self):
        return self.pos >= len(self.text)
