from __future__ import annotations

import json
from datetime import datetime

import pytest

from discord_cli.renders import (
    GuildChannels,
    ShapeKind,
    classify_shape,
    format_output,
    render_channels_overview,
    render_summary,
)
from discord_cli.renders.summary import format_timestamp


def _local(ts: str) -> str:
    return datetime.fromisoformat(ts).astimezone().strftime("%Y-%m-%d %H:%M:%S")


@pytest.mark.parametrize(
    "data, kind",
    [
        ([], ShapeKind.EMPTY_LIST),
        ([{"content": "hi"}], ShapeKind.MESSAGE_LIST),
        ([{"content": None, "name": "x", "id": "1"}], ShapeKind.MESSAGE_LIST),
        ([{"name": "Guild", "id": "1"}], ShapeKind.GUILD_LIST),
        ([{"id": "1", "type": 0}], ShapeKind.CHANNEL_LIST),
        ([{"foo": 1}], ShapeKind.GENERIC_LIST),
        (["a", "b"], ShapeKind.GENERIC_LIST),
        ({"username": "Bot", "id": "9", "type": 1}, ShapeKind.USER),
        ({"name": "general", "type": 0, "id": "1"}, ShapeKind.CHANNEL),
        ({"id": "1", "type": 1}, ShapeKind.DM_CHANNEL),
        ({"id": "1"}, ShapeKind.GENERIC_OBJECT),
        ({"ok": True}, ShapeKind.UNKNOWN),
        ("text", ShapeKind.UNKNOWN),
        (None, ShapeKind.UNKNOWN),
    ],
)
def test_classify_shape(data, kind) -> None:
    assert classify_shape(data) is kind


def test_user_wins_over_generic_id() -> None:
    assert render_summary({"username": "Bot", "discriminator": "0001", "id": "9"}) == (
        "User: Bot#0001 (ID: 9)"
    )


def test_empty_list() -> None:
    assert render_summary([]) == "No results found"


def test_messages_keep_order_and_truncate() -> None:
    t1 = "2024-03-01T10:00:00+00:00"
    t2 = "2024-03-01T11:30:00.123000+00:00"
    long_text = "x" * 150
    messages = [
        {"content": long_text, "timestamp": t1, "author": {"username": "alice"}},
        {"content": "short", "timestamp": t2, "author": {"username": "bob"}},
    ]

    lines = render_summary(messages).split("\n")

    assert lines == [
        f"[{_local(t1)}] alice: {'x' * 100}",
        f"[{_local(t2)}] bob: short",
    ]


def test_message_fallbacks() -> None:
    messages = [
        {"content": "", "timestamp": "2024-03-01T10:00:00Z"},
        {"content": None, "timestamp": "garbage", "author": {}},
    ]

    lines = render_summary(messages).split("\n")

    assert lines[0] == f"[{_local('2024-03-01T10:00:00+00:00')}] Unknown: (empty)"
    assert lines[1] == "[Invalid Date] Unknown: (empty)"


def test_format_timestamp_invalid_values() -> None:
    assert format_timestamp(None) == "Invalid Date"
    assert format_timestamp("") == "Invalid Date"
    assert format_timestamp("yesterday") == "Invalid Date"


def test_guild_list_marks_owner() -> None:
    guilds = [
        {"id": "1", "name": "Home", "owner": True},
        {"id": "2", "name": "Work", "owner": False},
    ]
    assert render_summary(guilds) == "🏠 Home (ID: 1) [Owner]\n🏠 Work (ID: 2)"


def test_channel_list_labels() -> None:
    channels = [
        {"id": "2", "type": 1},
        {"id": "1", "type": 0, "name": "general"},
        {"id": "3", "type": 7, "name": "odd"},
        {"id": "4", "type": 15, "name": "ideas"},
        {"id": "5", "type": 99, "name": "future"},
    ]

    assert render_summary(channels).split("\n") == [
        "💬 DM (ID: 2, Type: DM)",
        "📄 #general (ID: 1, Type: Text)",
        "📄 #odd (ID: 3, Type: Type 7)",
        "📄 #ideas (ID: 4, Type: Forum)",
        "📄 #future (ID: 5, Type: Type 99)",
    ]


def test_named_channel_first_renders_as_guild_list() -> None:
    channels = [{"id": "1", "type": 0, "name": "general"}, {"id": "2", "type": 1}]

    assert classify_shape(channels) is ShapeKind.GUILD_LIST
    assert render_summary(channels).split("\n")[0] == "🏠 general (ID: 1)"


def test_mixed_list_renders_non_objects_as_json() -> None:
    lines = render_summary([{"content": "a", "author": {"username": "alice"}}, "x", 3]).split("\n")

    assert lines[0].endswith("] alice: a")
    assert lines[1:] == ['"x"', "3"]
    assert render_summary([{"name": "Home", "id": "1"}, None]) == "🏠 Home (ID: 1)\nnull"


def test_generic_list_uses_separator() -> None:
    items = [{"a": 1}, {"b": 2}]
    assert render_summary(items) == '{\n  "a": 1\n}\n---\n{\n  "b": 2\n}'


def test_channel_object() -> None:
    assert render_summary({"id": "1", "name": "news", "type": 5}) == (
        "Channel: #news (Announcement, ID: 1)"
    )
    assert render_summary({"id": "2", "name": "thread", "type": 11}) == (
        "Channel: #thread (Type 11, ID: 2)"
    )


def test_dm_channel_object() -> None:
    dm = {"id": "77", "type": 1, "recipients": [{"username": "alice", "discriminator": "1234"}]}
    assert render_summary(dm) == "💬 DM Channel with alice#1234 (ID: 77)"
    assert render_summary({"id": "78", "type": 1, "recipients": []}) == (
        "💬 DM Channel with Unknown User (ID: 78)"
    )


def test_generic_object_and_fallback() -> None:
    assert render_summary({"id": "1001", "content": "sent"}) == "✅ Success (ID: 1001)"
    assert render_summary({"ok": True}) == '{\n  "ok": true\n}'


@pytest.mark.parametrize(
    "data",
    [
        {"id": "1", "nested": {"b": [1, 2, None], "a": "é"}},
        [1, "two", {"three": 3.5}],
        "plain",
        None,
        [],
    ],
)
def test_json_output_round_trips(data) -> None:
    assert json.loads(format_output(data, json_output=True)) == data


def test_json_is_default_and_wins_over_summary() -> None:
    data = {"username": "Bot", "discriminator": "0001", "id": "9"}
    expected = json.dumps(data, indent=2, ensure_ascii=False)
    assert format_output(data) == expected
    assert format_output(data, json_output=True, summary=True) == expected
    assert format_output(data, summary=True) == "User: Bot#0001 (ID: 9)"


def test_json_output_keeps_key_order_and_unicode() -> None:
    out = format_output({"z": 1, "a": "🏠"})
    assert out == '{\n  "z": 1,\n  "a": "🏠"\n}'


def test_channels_overview() -> None:
    many = [{"id": str(i), "name": f"c{i}", "type": 0} for i in range(7)]
    entries = [
        GuildChannels(
            guild={"id": "1", "name": "Alpha"},
            channels=[{"id": "v", "name": "voice", "type": 2}, {"id": "n", "name": "news", "type": 5}],
        ),
        GuildChannels(guild={"id": "2", "name": "Beta"}, error="Missing Access"),
        GuildChannels(guild={"id": "3", "name": "Gamma"}, channels=many),
    ]

    assert render_channels_overview(entries).split("\n") == [
        "Accessible Servers/Channels:",
        "",
        "🏠 Alpha (ID: 1)",
        "   📄 #news (ID: n)",
        "",
        "🏠 Beta (ID: 2)",
        "   (Cannot access channels: Missing Access)",
        "",
        "🏠 Gamma (ID: 3)",
        "   📄 #c0 (ID: 0)",
        "   📄 #c1 (ID: 1)",
        "   📄 #c2 (ID: 2)",
        "   📄 #c3 (ID: 3)",
        "   📄 #c4 (ID: 4)",
        "   ... and 2 more channels",
        "",
    ]
