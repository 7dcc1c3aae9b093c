from __future__ import annotations

from canvasplay.ui.game_over import GameOverScreen, _wrap


def test_draw_replaces_canvas_content(surface) -> None:
    screen = GameOverScreen(surface, message="YOU ARE DEAD", hint=None)
    screen(3)
    assert screen.sessions == [3]
    assert surface.calls[:4] == [
        ("begin_path",),
        ("rect", 0, 0, 600, 600),
        ("set_fill_color", "white"),
        ("fill",),
    ]
    texts = [c[3] for c in surface.calls if c[0] == "fill_text"]
    assert texts == ["YOU ARE DEAD"]


def test_hint_is_drawn_when_given(surface) -> None:
    screen = GameOverScreen(surface, message="DEAD", hint="press 1 to play again")
    screen(1)
    texts = [c[3] for c in surface.calls if c[0] == "fill_text"]
    assert texts == ["DEAD", "press 1 to play again"]


def test_long_message_wraps(make_surface) -> None:
    s = make_surface(200, 200)
    msg = "YOU ARE DEAD YOU SHOULD NOT HAVE CRASHED INTO THAT"
    GameOverScreen(s, message=msg, hint=None, font_px=20)(1)
    lines = [c[3] for c in s.calls if c[0] == "fill_text"]
    assert len(lines) > 1
    assert " ".join(lines) == msg


def test_wrap() -> None:
    assert _wrap("a bb ccc dddd", 6) == ["a bb", "ccc", "dddd"]
    assert _wrap("", 10) == []
    assert _wrap("toolongword", 3) == ["toolongword"]
