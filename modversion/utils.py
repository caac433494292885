import json
from pathlib import Path

import toml
import yaml

from modversion.exceptions import ConfigParseError


def load_config(config_path: str) -> dict:
    """按扩展名加载 toml / json / yaml 配置文件"""
    path = Path(config_path)
    suffix = path.suffix.lower()

    try:
        if suffix == ".toml":
            return toml.load(config_path)
        elif suffix == ".json":
            return json.loads(path.read_text(encoding="utf-8"))
        elif suffix in (".yaml", ".yml"):
            return yaml.safe_load(path.read_text(encoding="utf-8"))
    except (OSError, ValueError, toml.TomlDecodeError, yaml.YAMLError) as e:
        raise ConfigParseError(
            f"无法解析配置文件: {e}", context={"path": config_path}
        )

    raise ConfigParseError(
        f"不支持的配置文件格式: {suffix}", context={"path": config_path}
    )


def decode_text(data: bytes) -> str:
    """
    按 UTF-8 解码元数据文件，兼容 BOM，统一换行符为 '\\n'
    """
    text = data.decode("utf-8-sig", errors="replace")
    return text.replace("\r\n", "\n").replace("\r", "\n")
