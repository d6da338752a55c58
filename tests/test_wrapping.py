from recipe_render_core.core.wrapping import (
    Word,
    WrapOptions,
    display_width,
    split_after_comma,
    split_whitespace,
    wrap,
    write_wrapped,
)
from recipe_render_core.core.sinks import ListSink


def test_short_text_is_a_single_line_with_indent():
    text = "Mix the flour with the water"
    assert wrap(text, WrapOptions(80, initial_indent="  ")) == ["  " + text]


def test_empty_text_produces_no_lines():
    assert wrap("", WrapOptions(80)) == []

    sink = ListSink()
    write_wrapped(sink, "", WrapOptions(80))
    assert sink.lines == []


def test_lines_never_exceed_width():
    text = " ".join(["tomato"] * 40)
    lines = wrap(text, WrapOptions(30, initial_indent=" 1. ", subsequent_indent="    "))

    assert len(lines) > 1
    assert all(display_width(line) <= 30 for line in lines)
    assert lines[0].startswith(" 1. tomato")
    assert all(line.startswith("    tomato") for line in lines[1:])
    assert " ".join(line.strip() for line in lines).replace("1. ", "", 1) == text


def test_trailing_space_is_dropped_at_breaks():
    lines = wrap("aaa bbb ccc", WrapOptions(7))
    assert lines == ["aaa bbb", "ccc"]


def test_embedded_newlines_start_new_lines():
    lines = wrap("a\nb", WrapOptions(80, initial_indent="> ", subsequent_indent=".."))
    assert lines == ["> a", "..b"]


def test_long_words_are_broken():
    assert wrap("abcdefghij", WrapOptions(4)) == ["abcd", "efgh", "ij"]


def test_ansi_sequences_have_no_width():
    painted = "\x1b[32mhello\x1b[0m world"
    assert display_width(painted) == len("hello world")
    assert wrap(painted, WrapOptions(11)) == [painted]


def test_wide_glyphs_count_as_two_cells():
    assert display_width("🍝") == 2


def test_split_whitespace_keeps_trailing_whitespace_per_word():
    assert split_whitespace("a  b") == [Word("a", "  "), Word("b", "")]


def test_split_after_comma_only_breaks_after_separator():
    words = split_after_comma("[salt, black pepper: 1 tsp]")
    assert words == [Word("[salt,", " "), Word("black pepper: 1 tsp]", "")]


def test_legend_entries_are_never_split_internally():
    text = "[aaa bbb, ccc ddd, eee fff]"

    by_comma = wrap(text, WrapOptions(14, word_separator=split_after_comma))
    assert by_comma == ["[aaa bbb,", "ccc ddd,", "eee fff]"]

    by_space = wrap(text, WrapOptions(14))
    assert by_space[0] == "[aaa bbb, ccc"


def test_write_wrapped_sends_each_line_to_sink():
    sink = ListSink()
    write_wrapped(sink, "one two three", WrapOptions(8))
    assert sink.lines == ["one two", "three"]
