"""命令行入口

负责初始化日志、加载配置、创建令牌网关，执行命令并把结果或错误输出到终端。
这是唯一会把异常转换为退出码的地方。
"""

import asyncio
import json
import sys
from typing import Any, Callable, Dict, List, Optional

from loguru import logger

from .args import parse_args
from .client import (
    ApiError,
    ConfigurationError,
    DiscordCLIError,
    DiscordClient,
    LocalTokenGate,
    load_token_specs,
)
from .config import Config, get_config
from .dispatcher import dispatch
from .renders import format_output
from .shared import has_flag

GateFactory = Callable[[Config], Any]

LOG_FORMAT = (
    "<g>{time:MM-DD HH:mm:ss}</g> "
    "[<lvl>{level}</lvl>] "
    "<c><u>{name}</u></c> | "
    "{message}"
)


def configure_logging(level: str) -> None:
    """日志输出到 stderr，保证 stdout 只包含命令结果"""
    logger.remove()
    logger.add(sys.stderr, level=level, diagnose=False, format=LOG_FORMAT)


def build_local_gate(config: Config) -> LocalTokenGate:
    """创建本地令牌网关"""
    return LocalTokenGate(load_token_specs(getattr(config, "permissions_file", None)))


def error_envelope(error: DiscordCLIError) -> Dict[str, Any]:
    """JSON 错误输出（缺失的字段不出现）"""
    envelope: Dict[str, Any] = {"error": error.message}
    if isinstance(error, ApiError):
        if error.status is not None:
            envelope["status"] = error.status
        if error.data is not None:
            envelope["data"] = error.data
    return envelope


def report_error(error: DiscordCLIError, json_output: bool) -> None:
    """把错误输出到 stderr"""
    if json_output:
        print(
            json.dumps(error_envelope(error), indent=2, ensure_ascii=False),
            file=sys.stderr,
        )
        return

    print(f"❌ Error: {error.message}", file=sys.stderr)
    if isinstance(error, ApiError):
        if error.status:
            print(f"   Status: {error.status}", file=sys.stderr)
        if isinstance(error.data, (dict, list)):
            print(
                f"   Details: {json.dumps(error.data, indent=2, ensure_ascii=False)}",
                file=sys.stderr,
            )
    if error.hint:
        print(error.hint, file=sys.stderr)
    if isinstance(error, ConfigurationError) and error.remediation:
        print("", file=sys.stderr)
        print(error.remediation, file=sys.stderr)


def main(
    argv: Optional[List[str]] = None,
    config: Optional[Config] = None,
    gate_factory: Optional[GateFactory] = None,
) -> int:
    """执行 CLI

    Args:
        argv: 参数列表，默认 sys.argv[1:]
        config: 配置对象，默认从环境变量读取
        gate_factory: 根据配置创建令牌网关，默认使用本地令牌网关

    Returns:
        进程退出码：成功 0，任何错误 1
    """
    parsed = parse_args(sys.argv[1:] if argv is None else argv)
    config = config or get_config()

    verbose = has_flag(parsed.options, "verbose", "v")
    configure_logging("DEBUG" if verbose else getattr(config, "log_level", "ERROR"))

    json_output = has_flag(parsed.options, "json")
    make_gate = gate_factory or build_local_gate

    def client_factory() -> DiscordClient:
        return DiscordClient(make_gate(config), config)

    try:
        output = asyncio.run(dispatch(parsed, client_factory))
    except DiscordCLIError as e:
        logger.debug(f"Command failed: {type(e).__name__}: {e.message}")
        report_error(e, json_output)
        return 1

    if output.text is not None:
        print(output.text)
    else:
        print(
            format_output(
                output.data,
                json_output=json_output,
                summary=has_flag(parsed.options, "summary"),
            )
        )
    return 0


def run() -> None:
    """console script 入口"""
    sys.exit(main())


__all__ = ["main", "run", "configure_logging", "report_error"]
