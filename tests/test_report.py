"""Tests for :mod:`report`."""

import pathlib
import sys

sys.path.append(str(pathlib.Path(__file__).resolve().parents[1]))

from fdgroups import DescriptorGroup
from fdtarget import FileType, TargetIdentity
from report import ReportRow, format_row, render, summarize


def test_summarize():
    groups = [
        DescriptorGroup(TargetIdentity("/var/log/app.log", FileType.REGULAR), [1, 2]),
        DescriptorGroup(TargetIdentity("pipe:[77]", FileType.FIFO), [3]),
    ]

    assert summarize(groups) == [
        ReportRow("/var/log/app.log (regular)", 2, [1, 2]),
        ReportRow("pipe:[77] (fifo)", 1, [3]),
    ]


def test_format_row_short_list():
    line = format_row(ReportRow("/dev/null (character)", 3, [0, 1, 2]))

    assert line == "/dev/null (character)".ljust(40) + " [  3] 0, 1, 2"


def test_format_row_truncates_to_last_numbers():
    row = ReportRow("socket:[1] (socket)", 10, list(range(10, 20)))

    line = format_row(row)

    assert line.endswith("[ 10] ..., 13, 14, 15, 16, 17, 18, 19")


def test_format_row_exactly_max_numbers_is_not_truncated():
    row = ReportRow("x (regular)", 7, list(range(7)))

    assert format_row(row, width=0) == "x (regular) [  7] 0, 1, 2, 3, 4, 5, 6"


def test_format_row_long_label_is_not_cut():
    label = "/a/very/long/path/that/is/longer/than/forty/characters (regular)"

    assert format_row(ReportRow(label, 1, [4])) == f"{label} [  1] 4"


def test_render_custom_limits():
    groups = [DescriptorGroup(TargetIdentity("/f", FileType.REGULAR), [5, 6, 7])]

    assert render(groups, max_numbers=2, width=10) == ["/f (regular) [  3] ..., 6, 7"]
