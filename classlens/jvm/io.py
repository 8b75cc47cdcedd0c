""" Reading of class files and jar files.

The class file layout is described in chapter 4 of the JVM documentation:

https://docs.oracle.com/javase/specs/jvms/se21/html/jvms-4.html
"""

import io
import logging
import zipfile
from ..common import ClassFormatError, BadMagic, UnsupportedTag
from ..common import InvalidConstantPoolIndex
from ..format.io import ByteCursor
from .nodes import ClassFile, Constant, ConstantPool, display_name
from .nodes import Field, Method, Attribute
from .nodes import CodeAttribute, ExceptionHandler
from .enums import ConstantTag, AccessFlag, ReferenceKind
from .descriptor import parse_field_descriptor, parse_method_descriptor


logger = logging.getLogger("jvm.io")
MAGIC = ClassFile.magic.to_bytes(4, "big")


def read_jar(filename, verbose=False):
    """ Take a stroll through a java jar file.

    Yields (entry name, class file) for each class in the jar.
    """
    logger.info("Reading jar: %s", filename)
    with zipfile.ZipFile(filename) as f:
        if "META-INF/MANIFEST.MF" in f.namelist():
            with f.open("META-INF/MANIFEST.MF") as manifest_file:
                read_manifest(io.TextIOWrapper(manifest_file, "utf8"))

        for name in f.namelist():
            if name.endswith(".class"):
                logger.debug("Loading %s", name)
                yield name, read_class_file(f.read(name), verbose=verbose)


def read_manifest(f):
    """ Read a jarfile manifest. """
    logger.debug("Reading manifest")
    properties = {}
    key = None
    for line in f:
        line = line.rstrip("\r\n")
        if line.startswith(" ") and key:
            # Continuation of the previous value:
            properties[key] += line[1:]
        elif line.strip():
            key, value = map(str.strip, line.split(":", 1))
            if key in properties:
                logger.warning("Duplicate key in manifest file: %s", key)
            properties[key] = value
    logger.debug("Read manifest: %s", properties)
    return properties


class JavaFileReader(ByteCursor):
    """ Java class file reader.
    """

    def __init__(self, data, constant_pool=None, offset=0, verbose=False):
        super().__init__(data, offset=offset)
        self.constant_pool = constant_pool
        self.verbose = verbose

    def error(self, msg):
        raise ClassFormatError(msg, offset=self.offset + self.pos)

    def read_class_file(self):
        """ Read a class file. """
        head = self.data[:4]
        if not MAGIC.startswith(head):
            raise BadMagic(
                "Incorrect magic {}, no CAFEBABE, no java class!".format(
                    head.hex().upper()
                ),
                offset=0,
            )
        magic = self.read_u32()
        logger.debug("Read magic header value 0x%X", magic)

        minor_version = self.read_u16()
        major_version = self.read_u16()
        logger.debug("Version %s.%s", major_version, minor_version)
        self.constant_pool = self.read_constant_pool()
        access_flags = self.read_flags()
        logger.debug("Access flags: %s", access_flags)
        this_class = display_name(
            self.constant_pool.get_class_name(self.read_u16())
        )
        super_class_index = self.read_u16()
        if super_class_index:
            super_class = display_name(
                self.constant_pool.get_class_name(super_class_index)
            )
        else:
            super_class = None
        logger.debug("Class %s extends %s", this_class, super_class)

        interfaces = self.read_interfaces()
        fields = self.read_fields()
        methods = self.read_methods()

        attributes = self.read_attributes()
        if not self.at_end:
            self.error(
                "{} extra bytes at the end of the class file".format(
                    self.remaining
                )
            )

        class_file = ClassFile(
            major_version=major_version,
            minor_version=minor_version,
            constant_pool=self.constant_pool,
            access_flags=access_flags,
            this_class=this_class,
            super_class=super_class,
            interfaces=interfaces,
            fields=fields,
            methods=methods,
            attributes=attributes,
        )
        return class_file

    def read_constant_pool(self):
        """ Read the constant pool. """
        constant_pool_count = self.read_u16()
        constant_pool = ConstantPool()
        skip_next = False
        for idx in range(1, constant_pool_count):
            if skip_next:
                const_info = None
                skip_next = False
            else:
                const_info, skip_next = self.read_constant_pool_info()
                if self.verbose:
                    logger.debug("constant #%s: %s", idx, const_info)
            constant_pool.append(const_info)
        if skip_next:
            raise InvalidConstantPoolIndex(
                "Last constant takes two slots, but the pool has only one left"
            )
        check_constant_pool(constant_pool)
        logger.debug("Read constant pool with %s items", len(constant_pool))
        return constant_pool

    def read_constant_pool_info(self):
        """ Read a single tag from the constant pool. """
        tag_offset = self.offset + self.pos
        tag_value = self.read_u8()
        try:
            tag = ConstantTag(tag_value)
        except ValueError:
            raise UnsupportedTag(
                "Unsupported constant pool tag {}".format(tag_value),
                offset=tag_offset,
            ) from None
        skip_next = False
        if tag in (
            ConstantTag.Class,
            ConstantTag.String,
            ConstantTag.MethodType,
            ConstantTag.Module,
            ConstantTag.Package,
        ):
            value = self.read_u16()
        elif tag in (
            ConstantTag.FieldRef,
            ConstantTag.MethodRef,
            ConstantTag.InterfaceMethodRef,
        ):
            class_index = self.read_u16()
            name_and_type_index = self.read_u16()
            value = (class_index, name_and_type_index)
        elif tag == ConstantTag.Utf8:  # Utf8 modified text.
            length = self.read_u16()
            data = self.read_data(length)
            try:
                value = decode_modified_utf8(data)
            except UnicodeDecodeError as ex:
                raise ClassFormatError(
                    "Invalid modified utf-8 string: {}".format(ex),
                    offset=tag_offset,
                ) from None
        elif tag == ConstantTag.Long:
            value = self.read_i64()
            skip_next = True
        elif tag == ConstantTag.Double:
            value = self.read_f64()
            skip_next = True
        elif tag == ConstantTag.Integer:
            value = self.read_i32()
        elif tag == ConstantTag.Float:
            value = self.read_f32()
        elif tag == ConstantTag.NameAndType:
            name_index = self.read_u16()
            descriptor_index = self.read_u16()
            value = (name_index, descriptor_index)
        elif tag in (ConstantTag.Dynamic, ConstantTag.InvokeDynamic):
            bootstrap_method_attr_index = self.read_u16()
            name_and_type_index = self.read_u16()
            value = (bootstrap_method_attr_index, name_and_type_index)
        else:
            assert tag == ConstantTag.MethodHandle, tag
            reference_kind = self.read_u8()
            reference_index = self.read_u16()
            if reference_kind not in set(ReferenceKind):
                raise ClassFormatError(
                    "Invalid method handle kind {}".format(reference_kind),
                    offset=tag_offset,
                )
            value = (reference_kind, reference_index)
        info = Constant(tag, value)
        return info, skip_next

    def read_flags(self):
        """ Process flag field. """
        flag_value = self.read_u16()
        flags = set()
        for bit in range(16):
            mask = 1 << bit
            if flag_value & mask:
                flags.add(AccessFlag(mask))
        return flags

    def read_interfaces(self):
        """ Read all interfaces from a class file. """
        interfaces_count = self.read_u16()
        interfaces = []
        for _ in range(interfaces_count):
            idx = self.read_u16()
            interfaces.append(
                display_name(self.constant_pool.get_class_name(idx))
            )
        logger.debug("Loaded interfaces: %s", interfaces)
        return interfaces

    def read_fields(self):
        """ Read the fields of a class file. """
        fields_count = self.read_u16()
        fields = []
        for _ in range(fields_count):
            field = self.read_field_info()
            fields.append(field)
        logger.debug("Loaded %s fields", len(fields))
        return fields

    def read_field_info(self):
        """ Read field info structure. """
        access_flags = self.read_flags()
        name = self.get_utf8(self.read_u16())
        descriptor = self.get_utf8(self.read_u16())
        field_type = parse_field_descriptor(descriptor)
        attributes = self.read_attributes()
        if any(attribute.name == "Code" for attribute in attributes):
            self.error("Field {} has a Code attribute".format(name))
        return Field(access_flags, name, descriptor, field_type, attributes)

    def read_methods(self):
        """ Read the methods from a classfile. """
        methods_count = self.read_u16()
        methods = []
        for _ in range(methods_count):
            method = self.read_method_info()
            methods.append(method)
        logger.debug("Loaded %s methods", len(methods))
        return methods

    def read_method_info(self):
        """ Read method info structure """
        access_flags = self.read_flags()
        name = self.get_utf8(self.read_u16())
        descriptor = self.get_utf8(self.read_u16())
        method_type = parse_method_descriptor(descriptor)
        attributes = self.read_attributes()
        code = None
        for attribute in attributes:
            if attribute.name == "Code":
                if code is not None:
                    self.error("Method {} has two Code attributes".format(name))
                code = load_code(
                    attribute.data,
                    self.constant_pool,
                    offset=attribute.offset,
                )
        return Method(
            access_flags,
            name,
            descriptor,
            method_type,
            attributes,
            code=code,
            constant_pool=self.constant_pool,
        )

    def read_attributes(self):
        """ Read a series of attributes. """
        attributes_count = self.read_u16()
        attributes = []
        for _ in range(attributes_count):
            attribute = self.read_attribute_info()
            attributes.append(attribute)
        return attributes

    def read_attribute_info(self):
        """ Read a single attribute. """
        attribute_name_index = self.read_u16()
        name = self.get_utf8(attribute_name_index)
        attribute_length = self.read_u32()
        data_offset = self.offset + self.pos
        info = self.read_data(attribute_length)
        return Attribute(name, info, offset=data_offset)

    def get_utf8(self, index):
        return self.constant_pool.get_utf8(index)


# Which kind of constant each index inside a constant refers to.
# None marks an index which is not a constant pool index.
_reference_kinds = {
    ConstantTag.Class: ((ConstantTag.Utf8,),),
    ConstantTag.String: ((ConstantTag.Utf8,),),
    ConstantTag.MethodType: ((ConstantTag.Utf8,),),
    ConstantTag.Module: ((ConstantTag.Utf8,),),
    ConstantTag.Package: ((ConstantTag.Utf8,),),
    ConstantTag.FieldRef: ((ConstantTag.Class,), (ConstantTag.NameAndType,)),
    ConstantTag.MethodRef: ((ConstantTag.Class,), (ConstantTag.NameAndType,)),
    ConstantTag.InterfaceMethodRef: (
        (ConstantTag.Class,),
        (ConstantTag.NameAndType,),
    ),
    ConstantTag.NameAndType: ((ConstantTag.Utf8,), (ConstantTag.Utf8,)),
    ConstantTag.MethodHandle: (
        None,
        (
            ConstantTag.FieldRef,
            ConstantTag.MethodRef,
            ConstantTag.InterfaceMethodRef,
        ),
    ),
    ConstantTag.Dynamic: (None, (ConstantTag.NameAndType,)),
    ConstantTag.InvokeDynamic: (None, (ConstantTag.NameAndType,)),
}


def check_constant_pool(constant_pool):
    """ Check that references between constants point to the right kind
    of constant. """
    for index, constant in constant_pool:
        if constant.tag not in _reference_kinds:
            continue
        values = constant.value
        if not isinstance(values, tuple):
            values = (values,)
        for value, tags in zip(values, _reference_kinds[constant.tag]):
            if tags is None:
                continue
            try:
                constant_pool.get(value, *tags)
            except InvalidConstantPoolIndex as ex:
                raise InvalidConstantPoolIndex(
                    "Constant #{} ({}): {}".format(
                        index, constant.tag.name, ex.msg
                    )
                ) from None


def decode_modified_utf8(data):
    """ Decode the modified utf-8 used in class files.

    Zero is encoded as C0 80 and characters outside the basic plane as
    two encoded surrogates.
    """
    data = data.replace(b"\xc0\x80", b"\x00")
    text = data.decode("utf8", errors="surrogatepass")
    # Join surrogate pairs into single characters:
    return text.encode("utf-16-le", "surrogatepass").decode(
        "utf-16-le", "surrogatepass"
    )


def read_class_file(f, verbose=False):
    """ Read a class file from bytes or from a binary file object.
    """
    if hasattr(f, "read"):
        logger.debug("Reading classfile %s", getattr(f, "name", f))
        data = f.read()
    else:
        data = f
    reader = JavaFileReader(data, verbose=verbose)
    return reader.read_class_file()


def load_code(data, constant_pool, offset=0):
    """ Decode the contents of a Code attribute. """
    reader = JavaFileReader(data, constant_pool=constant_pool, offset=offset)
    max_stack = reader.read_u16()
    max_locals = reader.read_u16()
    code_length = reader.read_u32()
    code = reader.read_data(code_length)
    exception_table_length = reader.read_u16()
    exception_table = []
    for _ in range(exception_table_length):
        start_pc = reader.read_u16()
        end_pc = reader.read_u16()
        handler_pc = reader.read_u16()
        catch_type_index = reader.read_u16()
        if catch_type_index:
            catch_type = constant_pool.get_class_name(catch_type_index)
        else:
            catch_type = None
        exception_table.append(
            ExceptionHandler(
                start_pc, end_pc, handler_pc, catch_type_index, catch_type
            )
        )
    attributes = reader.read_attributes()
    if not reader.at_end:
        reader.error(
            "Code attribute has {} bytes too many".format(reader.remaining)
        )
    return CodeAttribute(
        max_stack, max_locals, code, exception_table, attributes
    )
