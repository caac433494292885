"""
ModVersion 统一异常体系

提供分层的异常结构，支持错误代码、上下文信息和 JSON 序列化。
"""

from typing import Any, Dict, Optional


class ModVersionError(Exception):
    """ModVersion 基础异常类"""

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self._get_default_code()
        self.context = context or {}

    def _get_default_code(self) -> str:
        """获取默认错误代码"""
        return "E000"

    def to_dict(self) -> Dict[str, Any]:
        """将异常转换为字典格式"""
        return {
            "error": True,
            "code": self.code,
            "message": self.message,
            "context": self.context,
            "type": self.__class__.__name__,
        }

    def __str__(self) -> str:
        if self.code:
            return f"[{self.code}] {self.message}"
        return self.message


class ConfigError(ModVersionError):
    """配置相关错误"""

    def _get_default_code(self) -> str:
        return "E100"


class ConfigParseError(ConfigError):
    """配置解析错误"""

    def _get_default_code(self) -> str:
        return "E101"


class ConfigValidationError(ConfigError):
    """配置验证错误"""

    def _get_default_code(self) -> str:
        return "E102"


class DownloadError(ModVersionError):
    """下载相关错误"""

    def _get_default_code(self) -> str:
        return "E300"


class DownloadNetworkError(DownloadError):
    """下载网络错误"""

    def _get_default_code(self) -> str:
        return "E301"


class ArchiveError(ModVersionError):
    """压缩包读取错误（I/O 失败或格式损坏）"""

    def _get_default_code(self) -> str:
        return "E400"


class MetadataError(ModVersionError):
    """
    主元数据结构错误

    mods.toml / mcmod.info 中模组数量为零或多于一个、根节点类型不对等情况。
    """

    def _get_default_code(self) -> str:
        return "E500"


class VersionNotFoundError(ModVersionError):
    """所有元数据文件都没有给出版本"""

    def _get_default_code(self) -> str:
        return "E600"


__all__ = [
    # 基础异常
    "ModVersionError",
    # 配置异常
    "ConfigError",
    "ConfigParseError",
    "ConfigValidationError",
    # 下载异常
    "DownloadError",
    "DownloadNetworkError",
    # 解析异常
    "ArchiveError",
    "MetadataError",
    "VersionNotFoundError",
]
