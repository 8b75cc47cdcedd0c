""" Decoding of java bytecode into instructions. """

import logging
from ..common import ClassFormatError, UnsupportedOpcode
from ..format.io import ByteCursor
from .enums import NewArrayType
from .nodes import Instruction, SwitchTable
from .opcodes import ArgType, op_to_arg_types, op_to_name, widened_ops


logger = logging.getLogger("jvm.disasm")


def disassemble(bytecode):
    """ Process a bytecode slab into instructions. """
    decoder = BytecodeDecoder(bytecode)
    instructions = list(decoder.decode())
    logger.debug(
        "Decoded %s instructions from %s bytes", len(instructions), len(bytecode)
    )
    return instructions


class BytecodeDecoder:
    """ Decodes the code array of a method one instruction at a time.

    Operands are read through a cursor limited to the code array, so an
    instruction running past the end raises TruncatedData.
    """

    def __init__(self, bytecode):
        self.reader = ByteCursor(bytecode)

    def decode(self):
        while not self.reader.at_end:
            yield self.decode_instruction()

    def decode_instruction(self):
        offset = self.reader.pos
        opcode = self.reader.read_u8()
        if opcode not in op_to_name:
            raise UnsupportedOpcode(
                "Unsupported opcode 0x{:02X}".format(opcode), offset=offset
            )

        arg_types = op_to_arg_types[opcode]
        if arg_types == (ArgType.WIDE,):
            return self.decode_wide(offset)

        args = []
        for arg_type in arg_types:
            arg = self.read_arg(arg_type, offset)
            if arg_type != ArgType.ZERO:
                args.append(arg)
        return Instruction(offset, opcode, args)

    def decode_wide(self, offset):
        """ Decode the instruction following a wide prefix. """
        opcode = self.reader.read_u8()
        if opcode not in widened_ops:
            raise UnsupportedOpcode(
                "Opcode 0x{:02X} cannot follow wide".format(opcode),
                offset=offset + 1,
            )
        args = [self.reader.read_u16()]
        if op_to_name[opcode] == "iinc":
            args.append(self.reader.read_i16())
        return Instruction(offset, opcode, args, wide=True)

    def read_arg(self, arg_type, offset):
        reader = self.reader
        if arg_type == ArgType.I8:
            return reader.read_i8()
        elif arg_type == ArgType.I16:
            return reader.read_i16()
        elif arg_type in (ArgType.U8, ArgType.LOCAL, ArgType.CONST8):
            return reader.read_u8()
        elif arg_type == ArgType.CONST16:
            return reader.read_u16()
        elif arg_type == ArgType.ZERO:
            return reader.read_u8()
        elif arg_type == ArgType.BRANCH16:
            return offset + reader.read_i16()
        elif arg_type == ArgType.BRANCH32:
            return offset + reader.read_i32()
        elif arg_type == ArgType.ATYPE:
            atype = reader.read_u8()
            try:
                NewArrayType(atype)
            except ValueError:
                raise ClassFormatError(
                    "Invalid newarray type {}".format(atype), offset=offset
                ) from None
            return atype
        elif arg_type == ArgType.TABLESWITCH:
            return self.read_tableswitch(offset)
        elif arg_type == ArgType.LOOKUPSWITCH:
            return self.read_lookupswitch(offset)
        else:  # pragma: no cover
            raise NotImplementedError(arg_type)

    def skip_padding(self):
        """ Switch tables start at a multiple of four from the code start """
        self.reader.skip(-self.reader.pos % 4)

    def read_tableswitch(self, offset):
        self.skip_padding()
        default = offset + self.reader.read_i32()
        low = self.reader.read_i32()
        high = self.reader.read_i32()
        if high < low:
            raise ClassFormatError(
                "tableswitch high {} below low {}".format(high, low),
                offset=offset,
            )
        pairs = []
        for match in range(low, high + 1):
            pairs.append((match, offset + self.reader.read_i32()))
        return SwitchTable(default, pairs, low=low, high=high)

    def read_lookupswitch(self, offset):
        self.skip_padding()
        default = offset + self.reader.read_i32()
        npairs = self.reader.read_i32()
        if npairs < 0:
            raise ClassFormatError(
                "lookupswitch with {} pairs".format(npairs), offset=offset
            )
        pairs = []
        for _ in range(npairs):
            match = self.reader.read_i32()
            pairs.append((match, offset + self.reader.read_i32()))
        return SwitchTable(default, pairs)
