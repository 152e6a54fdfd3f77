import pytest

from ustring.buffer import Buffer, ErrorCode, scan
from ustring.buffer.charset import is_blank, is_digit, is_letter


def make_buffer(text: str) -> Buffer:
    buffer = Buffer.new(text)
    assert buffer is not None
    return buffer


def test_contains() -> None:
    buffer = make_buffer("Pull & Bear")

    assert buffer.contains("Bear")
    assert buffer.contains("&")
    assert buffer.contains("Pull & Bear")
    assert buffer.contains("")
    assert not buffer.contains("bear")
    assert not buffer.contains("Pull & Bears")
    assert not buffer.contains(None)
    assert "ll & B" in buffer


def test_contains_handles_partial_matches() -> None:
    assert make_buffer("abcabd").contains("abd")
    assert make_buffer("aab").contains("ab")
    assert not make_buffer("abcabc").contains("abd")
    assert not make_buffer("ab").contains("b ")


def test_contains_on_empty_buffer() -> None:
    empty = make_buffer("")

    assert empty.contains("")
    assert not empty.contains("a")


def test_contains_fn() -> None:
    assert make_buffer("abc1").contains_fn(is_digit)
    assert not make_buffer("abc").contains_fn(is_digit)
    assert not make_buffer("").contains_fn(is_letter)
    assert not make_buffer("abc").contains_fn(None)


def test_starts_and_ends_with() -> None:
    buffer = make_buffer("One Two Three")

    assert buffer.starts_with("One")
    assert buffer.starts_with("")
    assert not buffer.starts_with("Two")
    assert buffer.ends_with("Three")
    assert buffer.ends_with("")
    assert not buffer.ends_with("Two")
    assert not buffer.starts_with("One Two Three and more")
    assert not buffer.ends_with(None)

    empty = make_buffer("")
    assert empty.starts_with("")
    assert empty.ends_with("")
    assert not empty.starts_with("a")


def test_trim_whitespace() -> None:
    buffer = make_buffer("\n   foo bar\v  ")
    assert buffer.trim() is ErrorCode.OK
    assert buffer.as_bytes() == b"foo bar"

    blank = make_buffer(" \t\r\n\v ")
    blank.trim()
    assert blank.is_empty()

    untouched = make_buffer("foo")
    untouched.trim()
    assert untouched.as_bytes() == b"foo"

    trailing = make_buffer("foo  ")
    trailing.trim()
    assert trailing.as_bytes() == b"foo"


def test_trim_leaves_form_feed() -> None:
    buffer = make_buffer("\fabc ")
    buffer.trim()
    assert buffer.as_bytes() == b"\fabc"


def test_trim_is_idempotent() -> None:
    buffer = make_buffer("\t  some  text \n")
    buffer.trim()
    once = buffer.as_bytes()
    buffer.trim()
    assert buffer.as_bytes() == once


def test_trim_matches_removes_every_occurrence() -> None:
    buffer = make_buffer("and Pull and Push and")
    assert buffer.trim_matches("and") is ErrorCode.OK
    assert buffer.as_bytes() == b" Pull  Push "

    greedy = make_buffer("aaaaa")
    greedy.trim_matches("aa")
    assert greedy.as_bytes() == b"a"

    missing = make_buffer("abc")
    missing.trim_matches("x")
    assert missing.as_bytes() == b"abc"


def test_trim_matches_with_itself() -> None:
    buffer = make_buffer("echo")
    buffer.trim_matches(buffer)
    assert buffer.is_empty()


def test_trim_matches_fn() -> None:
    buffer = make_buffer("a1b22c333")
    assert buffer.trim_matches_fn(is_digit) is ErrorCode.OK
    assert buffer.as_bytes() == b"abc"

    spaced = make_buffer(" a b ")
    spaced.trim_matches_fn(is_blank)
    assert spaced.as_bytes() == b"ab"


def test_trim_start_and_end_remove_single_occurrence() -> None:
    start = make_buffer("foofoobar")
    assert start.trim_start_matches("foo") is ErrorCode.OK
    assert start.as_bytes() == b"foobar"

    end = make_buffer("barfoofoo")
    assert end.trim_end_matches("foo") is ErrorCode.OK
    assert end.as_bytes() == b"barfoo"

    whole = make_buffer("foo")
    whole.trim_start_matches("foo")
    assert whole.is_empty()

    no_match = make_buffer("barfoo")
    no_match.trim_start_matches("foo")
    assert no_match.as_bytes() == b"barfoo"


def test_trim_start_and_end_fn_remove_runs() -> None:
    start = make_buffer("123abc456")
    start.trim_start_matches_fn(is_digit)
    assert start.as_bytes() == b"abc456"

    end = make_buffer("123abc456")
    end.trim_end_matches_fn(is_digit)
    assert end.as_bytes() == b"123abc"

    digits = make_buffer("2024")
    digits.trim_end_matches_fn(is_digit)
    assert digits.is_empty()


def test_replace() -> None:
    buffer = make_buffer("Pull and Push")
    assert buffer.replace("and", "") is ErrorCode.OK
    assert buffer.as_bytes() == b"Pull  Push"

    dashes = make_buffer("a-b-c")
    dashes.replace("-", "--")
    assert dashes.as_bytes() == b"a--b--c"

    shorter = make_buffer("one two one")
    shorter.replace("one", "1")
    assert shorter.as_bytes() == b"1 two 1"

    absent = make_buffer("x.y")
    absent.replace(".", None)
    assert absent.as_bytes() == b"xy"


def test_replace_escapes_operators() -> None:
    expr_a = make_buffer("int x = 0 \ny = 0 \n( x != 0 ) || ( y != 0 ) \n")
    expr_b = make_buffer("y = y * 78 \ny > 90 \n")

    expr_a.replace(">", "\\>")
    expr_a.replace("|", "\\|")
    expr_b.replace(">", "\\>")
    expr_b.replace("|", "\\|")

    assert expr_a.as_bytes() == b"int x = 0 \ny = 0 \n( x != 0 ) \\|\\| ( y != 0 ) \n"
    assert expr_b.as_bytes() == b"y = y * 78 \ny \\> 90 \n"


def test_replace_grows_capacity() -> None:
    buffer = make_buffer("x" * 20)
    buffer.replace("x", "yy")

    assert buffer.as_bytes() == b"y" * 40
    assert buffer.capacity == 64
    assert buffer._data is not None and buffer._data[40] == 0


def test_replace_normalizes_replacement() -> None:
    buffer = make_buffer("a_b")
    buffer.replace("_", b"\xe2\x80\x94")
    assert buffer.as_bytes() == b"a???b"


def test_replace_removes_pattern_when_replacement_lacks_it() -> None:
    buffer = make_buffer("abababa")
    buffer.replace("aba", "c")
    assert buffer.as_bytes() == b"cbc"
    assert not buffer.contains("aba")


def test_case_conversion() -> None:
    buffer = make_buffer("AbCd 1-z")

    assert buffer.to_lowercase() is ErrorCode.OK
    assert buffer.as_bytes() == b"abcd 1-z"
    assert buffer.to_uppercase() is ErrorCode.OK
    assert buffer.as_bytes() == b"ABCD 1-Z"

    marks = make_buffer("@[`{")
    marks.to_uppercase()
    marks.to_lowercase()
    assert marks.as_bytes() == b"@[`{"


@pytest.mark.parametrize(
    "operation",
    [
        lambda b: scan.trim_matches(b, None),
        lambda b: scan.trim_start_matches(b, None),
        lambda b: scan.trim_end_matches(b, None),
        lambda b: scan.trim_matches_fn(b, None),
        lambda b: scan.trim_start_matches_fn(b, None),
        lambda b: scan.trim_end_matches_fn(b, None),
        lambda b: scan.replace(b, None, "x"),
    ],
)
def test_absent_pattern_is_a_noop(operation) -> None:
    buffer = make_buffer("keep me")
    assert operation(buffer) is ErrorCode.NULLPTR
    assert buffer.as_bytes() == b"keep me"


@pytest.mark.parametrize(
    "operation",
    [
        lambda b: scan.trim_matches(b, ""),
        lambda b: scan.trim_start_matches(b, ""),
        lambda b: scan.trim_end_matches(b, ""),
        lambda b: scan.replace(b, "", "x"),
        lambda b: scan.trim_matches(b, "keep me please"),
        lambda b: scan.trim_start_matches(b, "keep me please"),
        lambda b: scan.trim_end_matches(b, "please keep me"),
        lambda b: scan.replace(b, "keep me please", "x"),
    ],
)
def test_empty_or_oversized_pattern_is_a_noop(operation) -> None:
    buffer = make_buffer("keep me")
    assert operation(buffer) is ErrorCode.OK
    assert buffer.as_bytes() == b"keep me"


def test_absent_buffer_degrades_silently() -> None:
    assert not scan.contains(None, "a")
    assert not scan.contains_fn(None, is_digit)
    assert not scan.starts_with(None, "")
    assert not scan.ends_with(None, "")
    assert scan.trim(None) is ErrorCode.NULLPTR
    assert scan.trim_matches(None, "a") is ErrorCode.NULLPTR
    assert scan.replace(None, "a", "b") is ErrorCode.NULLPTR
    assert scan.to_lowercase(None) is ErrorCode.NULLPTR

    dropped = make_buffer("abc")
    dropped.drop()
    assert not dropped.contains("a")
    assert dropped.trim() is ErrorCode.NULLPTR
    assert dropped.to_uppercase() is ErrorCode.NULLPTR


def test_capacity_invariant_holds_across_operations() -> None:
    buffer = make_buffer("  Mixed Case text  ")
    steps = [
        lambda: buffer.append(buffer),
        lambda: buffer.trim(),
        lambda: buffer.replace("e", "eee"),
        lambda: buffer.trim_matches("ee"),
        lambda: buffer.to_uppercase(),
        lambda: buffer.trim_end_matches_fn(is_letter),
        lambda: buffer.shrink_to_fit(),
        lambda: buffer.append("tail"),
    ]
    for step in steps:
        step()
        assert len(buffer) < buffer.capacity
        assert buffer._data is not None and buffer._data[len(buffer)] == 0
