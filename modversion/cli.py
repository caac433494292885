"""
CLI 模块

命令行接口实现。
"""

import asyncio
import json
import sys
from typing import Optional

import click
from loguru import logger

from modversion import __version__
from modversion.archive import scan_archive
from modversion.exceptions import MetadataError, ModVersionError
from modversion.extractors import EXTRACTORS
from modversion.logger import setup_logger
from modversion.models import CURSE_MAVEN_URL, ArchiveReference, CheckerConfig
from modversion.services import UpdateChecker
from modversion.utils import load_config


async def resolve_async(
    file: ArchiveReference, cache_path: Optional[str], base_url: str
) -> Optional[str]:
    """解析单个文件"""
    config = CheckerConfig(files=[file], cache=cache_path, base_url=base_url)
    async with UpdateChecker(config) as checker:
        results = await checker.run()
    return results[file]


async def check_async(config: CheckerConfig) -> dict:
    """批量解析配置中的文件"""
    async with UpdateChecker(config) as checker:
        return await checker.run()


@click.group()
@click.option("--debug", is_flag=True, help="启用调试模式")
@click.version_option(version=__version__)
def main(debug: bool):
    """ModVersion - 从 CurseForge 模组文件中解析版本号"""
    setup_logger(level="DEBUG" if debug else None)


@main.command()
@click.argument("project_id", type=click.IntRange(min=1))
@click.argument("file_id", type=click.IntRange(min=1))
@click.option("--name", default="", help="文件名（仅用于日志）")
@click.option(
    "--cache", "cache_path", type=click.Path(dir_okay=False), help="JSON 缓存文件"
)
@click.option(
    "--base-url", default=CURSE_MAVEN_URL, show_default=True, help="Maven 镜像地址"
)
def resolve(
    project_id: int,
    file_id: int,
    name: str,
    cache_path: Optional[str],
    base_url: str,
):
    """解析单个模组文件的版本"""
    file = ArchiveReference(project_id=project_id, file_id=file_id, name=name)
    version = asyncio.run(resolve_async(file, cache_path, base_url.rstrip("/")))
    if version is None:
        click.echo("未找到版本", err=True)
        sys.exit(1)
    click.echo(version)


@main.command()
@click.argument(
    "config", type=click.Path(exists=True, dir_okay=False), default="modversion.toml"
)
@click.option("--json", "as_json", is_flag=True, help="以 JSON 格式输出")
def check(config: str, as_json: bool):
    """按配置文件批量解析版本"""
    try:
        checker_config = CheckerConfig.from_dict(load_config(config))
    except ModVersionError as e:
        logger.error(f"配置错误: {e}")
        raise click.ClickException(str(e))

    if not checker_config.files:
        logger.warning("配置中没有任何文件")

    results = asyncio.run(check_async(checker_config))

    if as_json:
        click.echo(
            json.dumps(
                {file.display_name: version for file, version in results.items()},
                indent=2,
                ensure_ascii=False,
            )
        )
        return

    for file, version in results.items():
        click.echo(f"{file.display_name}: {version or '未找到版本'}")


@main.command()
@click.argument("jar", type=click.Path(exists=True, dir_okay=False))
def inspect(jar: str):
    """检查本地 jar 中的元数据文件和各格式的解析结果"""
    try:
        entries = scan_archive(open(jar, "rb"))
    except ModVersionError as e:
        raise click.ClickException(str(e))

    if not entries:
        click.echo("没有找到任何元数据文件")
        return

    for name, extractor in EXTRACTORS:
        data = entries.get(name)
        if data is None:
            click.echo(f"{name.value}: -")
            continue
        try:
            version = extractor(data)
        except MetadataError as e:
            click.echo(f"{name.value}: 错误 {e}")
            continue
        click.echo(f"{name.value}: {version if version is not None else '无版本'}")


if __name__ == "__main__":
    main()
