"""
配置模型

批量检查用的配置文件结构。
"""

from dataclasses import dataclass, field
from typing import List, Optional

from modversion.exceptions import ConfigValidationError
from modversion.models.archive import ArchiveReference

CURSE_MAVEN_URL = "https://www.cursemaven.com/curse/maven"


def _positive_int(data: dict, key: str, default: int, allow_zero: bool = False) -> int:
    value = data.get(key, default)
    minimum = 0 if allow_zero else 1
    if isinstance(value, bool) or not isinstance(value, int) or value < minimum:
        raise ConfigValidationError(
            f"'{key}' 必须是{'非负' if allow_zero else '正'}整数",
            context={"field": key, "value": value},
        )
    return value


def _positive_number(data: dict, key: str, default: float) -> float:
    value = data.get(key, default)
    if isinstance(value, bool) or not isinstance(value, (int, float)) or value < 0:
        raise ConfigValidationError(
            f"'{key}' 必须是非负数", context={"field": key, "value": value}
        )
    return float(value)


@dataclass
class CheckerConfig:
    """版本检查配置"""

    files: List[ArchiveReference] = field(default_factory=list)
    cache: Optional[str] = None
    max_concurrent: int = 4
    max_retries: int = 2
    retry_delay: float = 1.0
    timeout: float = 60.0
    base_url: str = CURSE_MAVEN_URL

    @classmethod
    def from_dict(cls, data: dict) -> "CheckerConfig":
        """从配置字典创建"""
        if not isinstance(data, dict):
            raise ConfigValidationError("配置文件的根节点必须是表")

        files = data.get("files", [])
        if not isinstance(files, list):
            raise ConfigValidationError("'files' 必须是列表")

        cache = data.get("cache")
        if cache is not None and not isinstance(cache, str):
            raise ConfigValidationError("'cache' 必须是文件路径")

        base_url = data.get("base_url", CURSE_MAVEN_URL)
        if not isinstance(base_url, str) or not base_url:
            raise ConfigValidationError("'base_url' 必须是非空字符串")

        return cls(
            files=[ArchiveReference.from_dict(entry) for entry in files],
            cache=cache,
            max_concurrent=_positive_int(data, "max_concurrent", 4),
            max_retries=_positive_int(data, "max_retries", 2, allow_zero=True),
            retry_delay=_positive_number(data, "retry_delay", 1.0),
            timeout=_positive_number(data, "timeout", 60.0),
            base_url=base_url.rstrip("/"),
        )
