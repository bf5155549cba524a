"""帮助命令模块"""

from ..shared import (
    COMMAND_REGISTRY,
    CommandContext,
    CommandOutput,
    PROGRAM_NAME,
    register_command,
)

USAGE_COLUMN = 25

OPTION_LINES = [
    ("-c=<id>, --channel <id>", "Discord channel ID"),
    ("--tts", "Enable text-to-speech"),
    ("--no-silent", "Send as normal notification"),
    ("--summary", "Human-readable summary"),
    ("--json", "Raw JSON output"),
    ("-v, --verbose", "Debug logging to stderr"),
]

EMBED_OPTION_LINES = [
    ("-t=<text>, --title <text>", "Embed title"),
    ("-d=<text>, --description <text>", "Embed description"),
    ("--color <hex>", "Embed color, e.g. 5865F2"),
    ("--url <url>", "Title link"),
    ("--footer <text>", "Footer text"),
    ("--thumbnail <url>", "Thumbnail image"),
    ("--image <url>", "Main image"),
    ("--author <name>", "Author name (--author-url, --author-icon)"),
    ("-m=<text>, --message <text>", "Plain text sent with the embed or file"),
]

MESSAGES_OPTION_LINES = [
    ("--limit <n>", "Number of messages (default 50)"),
    ("--before <id>", "Messages before this message ID"),
    ("--after <id>", "Messages after this message ID"),
]


def _column(left: str, right: str) -> str:
    # 左列过长时另起一行对齐
    if len(left) >= USAGE_COLUMN - 1:
        return f"  {left}\n  {' ' * USAGE_COLUMN}{right}"
    return f"  {left.ljust(USAGE_COLUMN)}{right}"


def build_usage() -> str:
    """聚合各命令注册的帮助信息"""
    lines = [
        "Discord CLI - Send messages and interact with Discord channels",
        "",
        f"Usage: {PROGRAM_NAME} <command> [options]",
        "",
        "Commands:",
    ]
    for meta in COMMAND_REGISTRY:
        lines.append(_column(meta["usage"], meta["description"]))

    lines += ["", "Options:"]
    lines += [_column(left, right) for left, right in OPTION_LINES]
    lines += ["", "Embed options:"]
    lines += [_column(left, right) for left, right in EMBED_OPTION_LINES]
    lines += ["", "Messages options:"]
    lines += [_column(left, right) for left, right in MESSAGES_OPTION_LINES]

    lines += [
        "",
        "Examples:",
        f'  {PROGRAM_NAME} send "Hello world" --channel 123456789',
        f'  {PROGRAM_NAME} embed --title "Alert" --description "System status" '
        "--channel 123456789",
        f"  {PROGRAM_NAME} messages --channel 123456789 --limit 10 --summary",
        f"  {PROGRAM_NAME} dm 123456789  # Create DM with user ID",
        f"  {PROGRAM_NAME} channels --summary  # List servers/channels",
    ]
    return "\n".join(lines)


async def handle_help(ctx: CommandContext) -> CommandOutput:
    """输出帮助信息（不发起网络请求）"""
    return CommandOutput(text=build_usage())


register_command(
    name="help",
    usage="help",
    description="Show this help",
    handler=handle_help,
)
