from __future__ import annotations

from qtri.core.ansi import (
    TAG_BOLD,
    TAG_CODE,
    TAG_HEADER2,
    TAG_HEADER3,
    TAG_HIDDEN,
    TAG_ITALIC,
    StyleRange,
    decode_ansi,
)


class TestDecodeAnsi:
    def test_plain_text_passes_through(self) -> None:
        decoded = decode_ansi("Array#flatten\n\n  Returns a new array.\n")
        assert decoded.plain == "Array#flatten\n\n  Returns a new array.\n"
        assert decoded.ranges == ()

    def test_bold_run(self) -> None:
        decoded = decode_ansi("\x1b[1mHello\x1b[0mWorld")
        assert decoded.plain == "HelloWorld"
        assert decoded.ranges == (StyleRange(0, 5, TAG_BOLD),)

    def test_short_reset_is_accepted(self) -> None:
        decoded = decode_ansi("a \x1b[36mputs\x1b[m b")
        assert decoded.plain == "a puts b"
        assert decoded.ranges == (StyleRange(2, 4, TAG_CODE),)

    def test_offsets_follow_earlier_removals(self) -> None:
        raw = "\x1b[4;32mArray\x1b[0m < \x1b[32mObject\x1b[0m and \x1b[33memph\x1b[0m"
        decoded = decode_ansi(raw)
        assert decoded.plain == "Array < Object and emph"
        assert decoded.ranges == (
            StyleRange(0, 5, TAG_HEADER2),
            StyleRange(8, 6, TAG_HEADER3),
            StyleRange(19, 4, TAG_ITALIC),
        )
        for item in decoded.ranges:
            assert decoded.plain[item.start:item.end] in {"Array", "Object", "emph"}

    def test_unknown_parameters_are_stripped_without_style(self) -> None:
        decoded = decode_ansi("x\x1b[35mmagenta\x1b[0my")
        assert decoded.plain == "xmagentay"
        assert decoded.ranges == ()

    def test_empty_run_adds_no_range(self) -> None:
        decoded = decode_ansi("a\x1b[1m\x1b[0mb")
        assert decoded.plain == "ab"
        assert decoded.ranges == ()

    def test_unpaired_sequences_are_hidden(self) -> None:
        decoded = decode_ansi("\x1b[1mopen only")
        assert decoded.plain == "\x1b[1mopen only"
        assert decoded.ranges == (StyleRange(0, 4, TAG_HIDDEN),)

    def test_opener_without_closer_is_hidden_next_to_styled_run(self) -> None:
        decoded = decode_ansi("a\x1b[1mb\x1b[36mc\x1b[0m")
        assert decoded.plain == "a\x1b[1mbc"
        assert decoded.ranges == (
            StyleRange(6, 1, TAG_CODE),
            StyleRange(1, 4, TAG_HIDDEN),
        )
        assert decoded.plain[6] == "c"

    def test_none_and_empty_input(self) -> None:
        assert decode_ansi("").plain == ""
        assert decode_ansi(None).ranges == ()  # type: ignore[arg-type]
