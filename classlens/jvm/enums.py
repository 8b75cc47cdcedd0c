""" Java class file related enums. """


import enum


class ConstantTag(enum.IntEnum):
    Utf8 = 1
    Integer = 3
    Float = 4
    Long = 5
    Double = 6
    Class = 7
    String = 8
    FieldRef = 9
    MethodRef = 10
    InterfaceMethodRef = 11
    NameAndType = 12
    MethodHandle = 15
    MethodType = 16
    Dynamic = 17
    InvokeDynamic = 18
    Module = 19
    Package = 20


class AccessFlag(enum.IntEnum):
    ACC_PUBLIC = 0x1
    ACC_PRIVATE = 0x2
    ACC_PROTECTED = 0x4
    ACC_STATIC = 0x8
    ACC_FINAL = 0x10
    ACC_SUPER = 0x20
    ACC_SYNCHRONIZED = 0x20
    ACC_BRIDGE = 0x40
    ACC_VOLATILE = 0x40
    ACC_VARARGS = 0x80
    ACC_TRANSIENT = 0x80
    ACC_NATIVE = 0x100
    ACC_INTERFACE = 0x200
    ACC_ABSTRACT = 0x400
    ACC_STRICT = 0x800
    ACC_SYNTHETIC = 0x1000
    ACC_ANNOTATION = 0x2000
    ACC_ENUM = 0x4000
    ACC_MODULE = 0x8000


# Several bits mean different things on classes, fields and methods.
_shared_flag_names = {
    0x1: "ACC_PUBLIC",
    0x2: "ACC_PRIVATE",
    0x4: "ACC_PROTECTED",
    0x8: "ACC_STATIC",
    0x10: "ACC_FINAL",
    0x100: "ACC_NATIVE",
    0x200: "ACC_INTERFACE",
    0x400: "ACC_ABSTRACT",
    0x800: "ACC_STRICT",
    0x1000: "ACC_SYNTHETIC",
    0x2000: "ACC_ANNOTATION",
    0x4000: "ACC_ENUM",
    0x8000: "ACC_MODULE",
}

flag_names = {
    "class": {**_shared_flag_names, 0x20: "ACC_SUPER"},
    "field": {
        **_shared_flag_names,
        0x40: "ACC_VOLATILE",
        0x80: "ACC_TRANSIENT",
    },
    "method": {
        **_shared_flag_names,
        0x20: "ACC_SYNCHRONIZED",
        0x40: "ACC_BRIDGE",
        0x80: "ACC_VARARGS",
    },
}


def format_flags(flags, kind):
    """ Render a set of access flags as in javap, for example
    'ACC_PUBLIC, ACC_STATIC'. """
    names = flag_names[kind]
    return ", ".join(names[int(flag)] for flag in sorted(flags))


class ReferenceKind(enum.IntEnum):
    """ Kinds of method handles. """

    REF_getField = 1
    REF_getStatic = 2
    REF_putField = 3
    REF_putStatic = 4
    REF_invokeVirtual = 5
    REF_invokeStatic = 6
    REF_invokeSpecial = 7
    REF_newInvokeSpecial = 8
    REF_invokeInterface = 9


class NewArrayType(enum.IntEnum):
    """ Element types of the newarray instruction. """

    boolean = 4
    char = 5
    float = 6
    double = 7
    byte = 8
    short = 9
    int = 10
    long = 11
