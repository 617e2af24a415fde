import math

import pytest

from codestats_readme.chart import BAR, build_chart, display_width, pad_to_width, render_bars
from codestats_readme.errors import ChartError


def bar_len(line):
    return line.count(BAR)


def test_render_bars_scales_longest_to_width():
    out = render_bars({"ts": 220, "go": 110}, width=20)
    lines = out.splitlines()
    assert bar_len(lines[0]) == 20
    assert bar_len(lines[1]) == 10
    assert out.endswith("\n")


def test_render_bars_line_format():
    out = render_bars({"Python": 50, "Go": 25}, width=4)
    assert out == (
        "  Python | ████ | 50\n"
        "      Go | ██   | 25\n"
    )


def test_render_bars_keeps_insertion_order():
    out = render_bars({"small": 1, "big": 100, "mid": 50}, width=10)
    labels = [line.split("|")[0].strip() for line in out.splitlines()]
    assert labels == ["small", "big", "mid"]


def test_render_bars_accepts_pairs_with_repeated_labels():
    out = render_bars([("Python", 30), ("Python", 10)], width=9)
    lines = out.splitlines()
    assert len(lines) == 2
    assert bar_len(lines[0]) == 9 and bar_len(lines[1]) == 3


def test_render_bars_empty():
    assert render_bars({}) == ""
    assert render_bars([]) == ""


def test_render_bars_zero_entry_gets_empty_bar():
    lines = render_bars({"TypeScript": 100, "JavaScript": 0}, width=8).splitlines()
    assert bar_len(lines[1]) == 0
    assert lines[1].endswith("| 0")


@pytest.mark.parametrize("data, width", [
    ({"a": 0, "b": 0}, 10),
    ({"a": -1}, 10),
    ({"a": math.inf}, 10),
    ({"a": "5"}, 10),
    ({"a": 5}, 0),
])
def test_render_bars_rejects_unscalable_input(data, width):
    with pytest.raises(ChartError):
        render_bars(data, width=width)


def test_float_values_are_printed_compactly():
    out = render_bars({"a": 10.0, "b": 2.5}, width=4)
    assert "| 10\n" in out
    assert "| 2.5\n" in out


def test_wide_labels_are_aligned_by_display_width():
    assert display_width("日本語") == 6
    assert pad_to_width("Go", 6, align="right") == "    Go"
    assert pad_to_width("日本語", 4) == "日本語"
    out = render_bars({"日本語": 10, "Go": 5}, width=2)
    first, second = out.splitlines()
    assert display_width(first[:first.index("|")]) == display_width(second[:second.index("|")])


def test_build_chart_top_six_only():
    entries = [(k, {"xps": v}) for k, v in
               dict(js=100, ts=220, py=50, go=120, rs=90, rb=80, php=70, java=30).items()]
    chart = build_chart(entries, 20)
    labels = [line.split("|")[0].strip() for line in chart.splitlines()]
    assert labels == ["ts", "go", "js", "rs", "rb", "php"]
    assert "java" not in chart


def test_build_chart_full_payload(payload):
    chart = build_chart(list(payload["languages"].items()), 42)
    lines = chart.splitlines()
    assert len(lines) == 6
    assert "Markdown" in lines[0] and bar_len(lines[0]) == 42
    for line in lines:
        assert BAR in line


def test_build_chart_no_valid_languages():
    assert build_chart([]) == ""
    assert build_chart([("a", {"xps": -5}), ("b", {"xps": "x"}), ("c", None)]) == ""


def test_build_chart_swallows_render_failure(caplog):
    # every valid metric is zero, so there is nothing to scale against
    assert build_chart([("JavaScript", {"xps": 0}), ("Python", {"xps": 0})]) == ""
    assert "Chart generation failed" in caplog.text


def test_build_chart_bad_width_gives_empty_chart():
    assert build_chart([("Go", {"xps": 3})], width=0) == ""


def test_huge_finite_values_still_scale():
    chart = build_chart([("Go", {"xps": 1e307}), ("Py", {"xps": 5e306})], 42)
    lines = chart.splitlines()
    assert bar_len(lines[0]) == 42
    assert bar_len(lines[1]) == 21


def test_render_bars_rejects_int_beyond_float_range():
    with pytest.raises(ChartError):
        render_bars({"Go": 10 ** 400}, width=10)
