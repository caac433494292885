"""
module-info.class 版本提取

解析 Java 模块描述符（class 文件格式），读取 Module 属性中声明的模块版本。
这是尽力而为的来源：任何解析失败都视为没有版本。
"""

import struct
from typing import Dict, Optional

from loguru import logger

CLASS_MAGIC = 0xCAFEBABE
ACC_MODULE = 0x8000
# Java 9 起才有模块描述符
MIN_MAJOR_VERSION = 53

CONSTANT_UTF8 = 1
CONSTANT_CLASS = 7
# tag -> 常量体长度（Utf8 为变长，单独处理）
CONSTANT_SIZES = {
    3: 4,  # Integer
    4: 4,  # Float
    5: 8,  # Long
    6: 8,  # Double
    7: 2,  # Class
    8: 2,  # String
    9: 4,  # Fieldref
    10: 4,  # Methodref
    11: 4,  # InterfaceMethodref
    12: 4,  # NameAndType
    15: 3,  # MethodHandle
    16: 2,  # MethodType
    17: 4,  # Dynamic
    18: 4,  # InvokeDynamic
    19: 2,  # Module
    20: 2,  # Package
}
# Long / Double 占两个常量池槽位
WIDE_CONSTANTS = (5, 6)


class DescriptorError(Exception):
    """模块描述符格式错误"""


class ClassReader:
    """按大端序顺序读取 class 文件"""

    def __init__(self, data: bytes):
        self.data = data
        self.pos = 0

    def read(self, size: int) -> bytes:
        end = self.pos + size
        if end > len(self.data):
            raise DescriptorError("模块描述符被截断")
        chunk = self.data[self.pos : end]
        self.pos = end
        return chunk

    def u2(self) -> int:
        return struct.unpack(">H", self.read(2))[0]

    def u4(self) -> int:
        return struct.unpack(">I", self.read(4))[0]

    def skip(self, size: int) -> None:
        self.read(size)

    def skip_attributes(self) -> None:
        for _ in range(self.u2()):
            self.skip(2)
            self.skip(self.u4())

    def skip_members(self) -> None:
        """跳过 fields 或 methods 表"""
        for _ in range(self.u2()):
            self.skip(6)
            self.skip_attributes()


def decode_modified_utf8(raw: bytes) -> str:
    """
    解码 JVM 的 modified UTF-8

    空字符编码为 C0 80，增补字符以两个三字节代理项编码。
    """
    try:
        text = raw.replace(b"\xc0\x80", b"\x00").decode("utf-8", "surrogatepass")
        return text.encode("utf-16", "surrogatepass").decode("utf-16")
    except UnicodeError as e:
        raise DescriptorError(f"无效的 modified UTF-8: {e}")


def read_constant_pool(reader: ClassReader) -> Dict[int, tuple]:
    """读取常量池，只保留 Utf8 和 Class 常量"""
    pool: Dict[int, tuple] = {}
    count = reader.u2()
    index = 1
    while index < count:
        tag = reader.read(1)[0]
        if tag == CONSTANT_UTF8:
            pool[index] = (tag, decode_modified_utf8(reader.read(reader.u2())))
        elif tag == CONSTANT_CLASS:
            pool[index] = (tag, reader.u2())
        elif tag in CONSTANT_SIZES:
            reader.skip(CONSTANT_SIZES[tag])
        else:
            raise DescriptorError(f"未知的常量池标签 {tag}")
        index += 2 if tag in WIDE_CONSTANTS else 1
    return pool


def utf8_at(pool: Dict[int, tuple], index: int) -> str:
    entry = pool.get(index)
    if entry is None or entry[0] != CONSTANT_UTF8:
        raise DescriptorError(f"常量池 #{index} 不是 Utf8")
    return entry[1]


def read_module_version(data: bytes) -> Optional[str]:
    """
    解析模块描述符并返回声明的版本

    Raises:
        DescriptorError: 不是合法的 module-info.class
    """
    reader = ClassReader(data)
    if reader.u4() != CLASS_MAGIC:
        raise DescriptorError("不是 class 文件")
    reader.skip(2)  # minor_version
    if reader.u2() < MIN_MAJOR_VERSION:
        raise DescriptorError("class 文件版本过低，不支持模块")

    pool = read_constant_pool(reader)

    if not reader.u2() & ACC_MODULE:
        raise DescriptorError("缺少 ACC_MODULE 标志")
    this_class = pool.get(reader.u2())
    if this_class is None or this_class[0] != CONSTANT_CLASS:
        raise DescriptorError("this_class 无效")
    if utf8_at(pool, this_class[1]) != "module-info":
        raise DescriptorError("this_class 不是 module-info")
    if reader.u2() != 0:
        raise DescriptorError("模块描述符不应有父类")

    reader.skip(2 * reader.u2())  # interfaces
    reader.skip_members()  # fields
    reader.skip_members()  # methods

    for _ in range(reader.u2()):
        name = utf8_at(pool, reader.u2())
        length = reader.u4()
        if name != "Module":
            reader.skip(length)
            continue
        body = ClassReader(reader.read(length))
        body.skip(4)  # module_name_index, module_flags
        version_index = body.u2()
        if version_index == 0:
            return None
        return utf8_at(pool, version_index) or None

    raise DescriptorError("缺少 Module 属性")


def version_from_module(data: bytes) -> Optional[str]:
    """从 module-info.class 读取模块版本，解析失败时返回 None"""
    try:
        return read_module_version(data)
    except DescriptorError as e:
        logger.debug(f"忽略无效的 module-info.class: {e}")
        return None
