from __future__ import annotations

from kilo_engine.buffer import Cursor, RowStore
from kilo_engine.input import Key, KeyEvent
from kilo_engine.screen import Viewport
from kilo_engine.search import BACKWARD, FORWARD, SearchSession

ARROW_RIGHT = KeyEvent.named(Key.RIGHT)
ARROW_LEFT = KeyEvent.named(Key.LEFT)
ARROW_DOWN = KeyEvent.named(Key.DOWN)


def make_session(*lines: bytes, cx: int = 0, cy: int = 0) -> SearchSession:
    store = RowStore.from_lines(lines)
    return SearchSession(store, Cursor(cx, cy), Viewport(rows=10, cols=40))


def typed(char: str) -> KeyEvent:
    return KeyEvent.literal(ord(char))


def test_typing_restarts_from_top() -> None:
    session = make_session(b"foo", b"bar", b"foobar")

    hit = session.on_key(b"foo", typed("o"))

    assert hit is not None and hit.row == 0
    assert session.cursor.as_tuple() == (0, 0)


def test_forward_steps_wrap_around() -> None:
    session = make_session(b"foo", b"bar", b"foobar")
    session.on_key(b"foo", typed("o"))

    visited = [session.on_key(b"foo", ARROW_RIGHT).row for _ in range(3)]

    assert visited == [2, 0, 2]


def test_backward_steps_wrap_around() -> None:
    session = make_session(b"foo", b"bar", b"foobar")
    session.on_key(b"foo", typed("o"))

    hit = session.on_key(b"foo", ARROW_LEFT)

    assert session.direction == BACKWARD
    assert hit is not None and hit.row == 2
    assert session.on_key(b"foo", KeyEvent.named(Key.UP)).row == 0


def test_arrow_without_previous_match_searches_forward() -> None:
    session = make_session(b"x", b"needle", b"needle")

    hit = session.on_key(b"needle", ARROW_LEFT)

    assert hit is not None and hit.row == 1
    assert session.direction == FORWARD


def test_hit_maps_rendered_column_to_cursor() -> None:
    session = make_session(b"\tneedle")

    hit = session.on_key(b"needle", typed("e"))

    assert hit is not None
    assert (hit.rx, hit.cx) == (8, 1)
    assert session.cursor.as_tuple() == (1, 0)


def test_hit_forces_viewport_to_top_on_next_scroll() -> None:
    session = make_session(*[b"line"] * 5, b"target")

    session.on_key(b"target", typed("t"))

    assert session.viewport.row_offset == session.store.row_count
    session.viewport.follow(session.cursor.cy, 0)
    assert session.viewport.row_offset == 5


def test_no_match_keeps_cursor() -> None:
    session = make_session(b"abc", b"def", cx=2, cy=1)

    assert session.on_key(b"zzz", typed("z")) is None
    assert session.cursor.as_tuple() == (2, 1)
    assert session.last_match is None


def test_empty_query_does_not_move() -> None:
    session = make_session(b"abc", cx=1)

    assert session.on_key(b"", KeyEvent.named(Key.BACKSPACE)) is None
    assert session.cursor.as_tuple() == (1, 0)


def test_single_matching_row_is_found_again() -> None:
    session = make_session(b"a", b"hit", b"b")
    session.on_key(b"hit", typed("t"))

    assert session.on_key(b"hit", ARROW_DOWN).row == 1


def test_abort_restores_cursor_and_offsets() -> None:
    store = RowStore.from_lines([b"one", b"two", b"three"])
    viewport = Viewport(rows=10, cols=40, col_offset=3)
    session = SearchSession(store, Cursor(1, 0), viewport)
    session.on_key(b"thr", typed("r"))
    assert session.cursor.cy == 2

    session.on_key(b"thr", KeyEvent.named(Key.ESCAPE))
    session.finish(None)

    assert session.cursor.as_tuple() == (1, 0)
    assert session.viewport.snapshot() == (0, 3)


def test_commit_keeps_match() -> None:
    session = make_session(b"one", b"two", b"three")
    session.on_key(b"two", typed("o"))

    session.finish(b"two")

    assert session.cursor.as_tuple() == (0, 1)
    assert session.last_match is None
