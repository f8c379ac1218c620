from __future__ import annotations

from datetime import datetime

import pytest

from y2logs.core.models import Entry, Level, Location, Pid
from y2logs.core.parser import ParseError, parse, parse_location

DT = datetime(2022, 8, 25, 14, 28, 44)


def test_parse_y2log() -> None:
    text = (
        "2022-08-25 14:28:44 <1> localhost.localdomain(12375) [libstorage] "
        "SystemCmd.cc(addLine):569 Adding Line 14...\n"
        "Done\n"
        "2022-08-25 14:28:44 <0> localhost.localdomain(12375) [libstorage] "
        "CmdParted.cc(parse):139 device:/dev/nvme0n1"
    )
    entries = parse(text)

    assert entries == [
        Entry(
            datetime=DT,
            level=Level.INFO,
            hostname="localhost.localdomain",
            pid=Pid(12375),
            component="libstorage",
            location=Location(file="SystemCmd.cc", method="addLine", line=569),
            message="Adding Line 14...\nDone",
        ),
        Entry(
            datetime=DT,
            level=Level.DEBUG,
            hostname="localhost.localdomain",
            pid=Pid(12375),
            component="libstorage",
            location=Location(file="CmdParted.cc", method="parse", line=139),
            message="device:/dev/nvme0n1",
        ),
    ]


def test_parse_single_line() -> None:
    (entry,) = parse(
        "2022-08-25 14:28:44 <1> localhost.localdomain(12375) [libstorage] "
        "SystemCmd.cc(addLine):569 Adding Line 14..."
    )
    assert entry.message == "Adding Line 14..."
    assert entry.location == Location(file="SystemCmd.cc", method="addLine", line=569)


def test_continuation_lines_join_message() -> None:
    text = (
        "2022-08-25 14:28:44 <1> host(100) [comp] file.cc(m):5 first line\n"
        "continuation line\n"
        "2022-08-25 14:28:45 <0> host(100) [comp] file.cc(m):6 next entry"
    )
    entries = parse(text)

    assert len(entries) == 2
    assert entries[0].message == "first line\ncontinuation line"
    assert entries[1].message == "next entry"
    assert entries[1].datetime == datetime(2022, 8, 25, 14, 28, 45)


def test_continuation_keeps_blank_and_indented_lines() -> None:
    text = (
        "2022-08-25 14:28:44 <1> host(100) [comp] file.cc cmd output:\n"
        "  NAME   SIZE\n"
        "\n"
        "  sda    10G\n"
        "2022-08-25 14:28:45 <1> host(100) [comp] file.cc done\n"
    )
    entries = parse(text)

    assert [e.message for e in entries] == [
        "cmd output:\n  NAME   SIZE\n\n  sda    10G",
        "done",
    ]


def test_continuation_starting_with_digits_and_hyphen_starts_new_record() -> None:
    text = (
        "2022-08-25 14:28:44 <1> host(100) [comp] file.cc output:\n"
        "12-34 looks like a record\n"
    )
    with pytest.raises(ParseError):
        parse(text)


def test_trailing_newline_is_not_part_of_message() -> None:
    (entry,) = parse("2022-08-25 14:28:44 <1> host(1) [c] f.rb hello\n")
    assert entry.message == "hello"


def test_trailing_blank_lines_stay_in_message() -> None:
    (entry,) = parse("2022-08-25 14:28:44 <1> host(1) [c] f.rb hello\n\n")
    assert entry.message == "hello\n"


def test_small_year_renders_fixed_width() -> None:
    (entry,) = parse("0999-01-01 00:00:00 <1> h(1) [c] f.rb hi")
    assert entry.datetime == datetime(999, 1, 1)
    assert str(entry) == "0999-01-01 00:00:00 <1> h(1) [c] f.rb hi"


def test_crlf_line_endings() -> None:
    text = (
        "2022-08-25 14:28:44 <1> host(1) [c] f.rb first\r\n"
        "more\r\n"
        "2022-08-25 14:28:45 <1> host(1) [c] f.rb second\r\n"
    )
    entries = parse(text)
    assert [e.message for e in entries] == ["first\nmore", "second"]


def test_empty_message() -> None:
    (entry,) = parse("2022-08-25 14:28:44 <1> host(1) [c] f.rb ")
    assert entry.message == ""


def test_empty_input() -> None:
    assert parse("") == []


def test_out_of_table_severity_is_unknown() -> None:
    (entry,) = parse("2022-08-25 14:28:44 <9> host(1) [c] f.rb msg")
    assert entry.level == Level.UNKNOWN


def test_non_numeric_severity_fails() -> None:
    with pytest.raises(ParseError):
        parse("2022-08-25 14:28:44 <x> host(1) [c] f.rb msg")


def test_component_characters() -> None:
    (entry,) = parse("2022-08-25 14:28:44 <1> host-1.lan(1) [ui-ncurses_x+y:z] f.rb msg")
    assert entry.hostname == "host-1.lan"
    assert entry.component == "ui-ncurses_x+y:z"


@pytest.mark.parametrize(
    "text",
    [
        "not a log line",
        "2022-08-25T14:28:44 <1> host(1) [c] f.rb msg",
        "2022-08-25 14:28:44 <1> host (1) [c] f.rb msg",
        "2022-08-25 14:28:44 <1> host(abc) [c] f.rb msg",
        "2022-08-25 14:28:44 <1> host(1) c f.rb msg",
        "2022-08-25 14:28:44 <1> host(1) [c]  msg",
        "2022-08-25 14:28:44 <1> host(1) [c] f.rb",
        "2022-13-25 14:28:44 <1> host(1) [c] f.rb msg",
    ],
)
def test_malformed_records_fail(text: str) -> None:
    with pytest.raises(ParseError):
        parse(text)


def test_no_partial_result_on_failure() -> None:
    text = (
        "2022-08-25 14:28:44 <1> host(1) [c] f.rb ok\n"
        "2022-08-25 14:28:45 <1> host(1) broken\n"
    )
    with pytest.raises(ParseError) as exc_info:
        parse(text)

    err = exc_info.value
    assert err.line_no == 2
    assert err.offset > 0
    assert "line 2" in str(err)


def test_complete_location() -> None:
    location = parse_location("y2storage/storage_manager.rb(probe_performed):471")
    assert location == Location(
        file="y2storage/storage_manager.rb", method="probe_performed", line=471
    )


def test_simple_location() -> None:
    assert parse_location("YaPI") == Location(file="YaPI")


def test_location_with_method() -> None:
    assert parse_location("modules/Stage.rb(Set)") == Location(
        file="modules/Stage.rb", method="Set"
    )


def test_location_with_line() -> None:
    assert parse_location("modules/Stage.rb:79") == Location(file="modules/Stage.rb", line=79)


def test_location_trailing_garbage_fails() -> None:
    with pytest.raises(ParseError):
        parse_location("mod.rb:x")
