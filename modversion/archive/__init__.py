"""
ModVersion 压缩包层

负责从 jar 中提取元数据文件。
"""

from modversion.archive.scanner import scan_archive, spool

__all__ = [
    "scan_archive",
    "spool",
]
