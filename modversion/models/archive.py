"""
压缩包数据模型

定义远程模组文件引用、缓存键以及需要提取的元数据文件名。
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional

from modversion.exceptions import ConfigValidationError


class EntryName(str, Enum):
    """jar 中可能携带版本信息的元数据文件"""

    MODS_TOML = "META-INF/mods.toml"
    MCMOD_INFO = "mcmod.info"
    MANIFEST = "META-INF/MANIFEST.MF"
    MODULE_INFO = "module-info.class"

    @classmethod
    def lookup(cls, name: str) -> Optional["EntryName"]:
        """按压缩包内路径查找，去掉一个前导 '/'"""
        if name.startswith("/"):
            name = name[1:]
        try:
            return cls(name)
        except ValueError:
            return None


# 每次解析构建一次，用完即丢
ExtractedEntries = Dict[EntryName, bytes]


@dataclass(frozen=True)
class ArchiveReference:
    """
    CurseForge 上的一个模组文件。

    project_id 和 file_id 决定下载地址，name 只用于日志和展示。
    """

    project_id: int
    file_id: int
    name: str = ""

    @property
    def display_name(self) -> str:
        return self.name or f"{self.project_id}/{self.file_id}"

    @classmethod
    def from_dict(cls, data: dict) -> "ArchiveReference":
        """从配置项构建，兼容 project/projectId 与 file/fileId 两种写法"""
        if not isinstance(data, dict):
            raise ConfigValidationError(
                "files 中的每一项必须是表", context={"entry": repr(data)}
            )
        project_id = data.get("project", data.get("projectId"))
        file_id = data.get("file", data.get("fileId"))
        for key, value in (("project", project_id), ("file", file_id)):
            if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
                raise ConfigValidationError(
                    f"'{key}' 必须是正整数",
                    context={"entry": data, "field": key},
                )
        name = data.get("name", "")
        if not isinstance(name, str):
            raise ConfigValidationError(
                "'name' 必须是字符串", context={"entry": data, "field": "name"}
            )
        return cls(project_id=project_id, file_id=file_id, name=name)

    def __str__(self) -> str:
        return f"'{self.display_name}' (项目 {self.project_id}, 文件 {self.file_id})"


@dataclass(frozen=True)
class FileKey:
    """版本缓存键"""

    project_id: int
    file_id: int

    @classmethod
    def of(cls, file: ArchiveReference) -> "FileKey":
        return cls(project_id=file.project_id, file_id=file.file_id)

    @classmethod
    def parse(cls, text: str) -> "FileKey":
        """解析 "project/file" 形式的字符串"""
        project, sep, file = text.partition("/")
        if not sep:
            raise ValueError(f"无效的缓存键: {text!r}")
        return cls(project_id=int(project), file_id=int(file))

    def __str__(self) -> str:
        return f"{self.project_id}/{self.file_id}"
