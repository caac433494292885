"""
压缩包扫描

顺序遍历 jar 的条目索引，只读取已知的元数据文件，其余条目不解压。
"""

import shutil
import tempfile
import zipfile
import zlib
from typing import BinaryIO

from loguru import logger

from modversion.exceptions import ArchiveError
from modversion.models import EntryName, ExtractedEntries


def spool(stream: BinaryIO) -> BinaryIO:
    """把不可随机访问的流复制到临时文件"""
    spooled = tempfile.TemporaryFile()
    shutil.copyfileobj(stream, spooled)
    spooled.seek(0)
    return spooled

def _seekable(stream: BinaryIO) -> bool:
    try:
        return stream.seekable()
    except (AttributeError, ValueError):
        return False

def scan_archive(stream: BinaryIO) -> ExtractedEntries:
    """
    提取 jar 中的元数据文件

    Args:
        stream: jar 文件的二进制流，无论成功与否都会被关闭

    Returns:
        元数据文件名到原始字节的映射，缺失的文件不出现在结果中

    Raises:
        ArchiveError: 读取失败或不是有效的 zip 文件
    """
    entries: ExtractedEntries = {}
    try:
        source = stream if _seekable(stream) else spool(stream)
        try:
            with zipfile.ZipFile(source) as archive:
                for info in archive.infolist():
                    if info.is_dir():
                        continue
                    name = EntryName.lookup(info.filename)
                    if name is None or name in entries:
                        continue
                    entries[name] = archive.read(info)
                    logger.debug(f"[扫描] 读取 {name.value} ({info.file_size} 字节)")
                    # 文件名在 jar 中唯一，找齐即可停止
                    if len(entries) == len(EntryName):
                        break
        finally:
            if source is not stream:
                source.close()
    except (
        OSError,
        EOFError,
        NotImplementedError,
        zipfile.BadZipFile,
        zipfile.LargeZipFile,
        zlib.error,
    ) as e:
        raise ArchiveError(f"无法读取压缩包: {e}", context={"error": str(e)})
    finally:
        stream.close()
    return entries
