"""Session controller behaviour: tab cycling, submit, clear, scrolling, resize."""

from __future__ import annotations

import pytest

from tabconsole.events import (
    Edit,
    MouseScroll,
    Navigate,
    NextTab,
    Paste,
    Quit,
    Resize,
    ScrollLeft,
    ScrollRight,
    Submit,
)
from tabconsole.preferences import DisplayPreferences
from tabconsole.session import (
    Effect,
    EmptyTabListError,
    Initializing,
    Ready,
    SessionController,
    append_block,
)
from tabconsole.widgets.scroll_surface import NavKey


# ── Construction ────────────────────────────────────────────────────


class TestConstruction:
    def test_empty_tab_list_rejected(self, recorder):
        with pytest.raises(EmptyTabListError):
            SessionController([], recorder)

    def test_empty_tab_list_error_is_value_error(self):
        assert issubclass(EmptyTabListError, ValueError)

    def test_initial_state(self, session):
        assert session.active == 0
        assert [tab.name for tab in session.tabs] == ["A", "B"]
        assert [tab.index for tab in session.tabs] == [0, 1]
        assert all(tab.buffer == "" for tab in session.tabs)
        assert isinstance(session.phase, Initializing)
        assert session.ready is False
        assert session.surfaces == ()
        assert session.active_surface is None

    def test_input_starts_focused_and_empty(self, session):
        assert session.input.focused is True
        assert session.input.value == ""

    def test_display_preferences_reach_input(self, recorder):
        display = DisplayPreferences(prompt="$ ", placeholder="cmd")
        session = SessionController(["A"], recorder, display=display)
        assert session.input.prompt == "$ "
        assert session.input.placeholder == "cmd"


# ── Tab cycling ─────────────────────────────────────────────────────


class TestNextTab:
    @pytest.mark.parametrize("count", [1, 2, 3, 5])
    def test_cycles_back_after_n_presses(self, recorder, count):
        session = SessionController([f"T{i}" for i in range(count)], recorder)
        seen = []
        for _ in range(count):
            seen.append(session.active)
            session.handle(NextTab())
        assert session.active == 0
        assert seen == list(range(count))

    def test_next_tab_before_ready(self, session):
        assert session.handle(NextTab()) is Effect.RENDER
        assert session.active == 1

    def test_next_tab_keeps_input_focused(self, ready_session):
        ready_session.input.blur()
        ready_session.handle(NextTab())
        assert ready_session.input.focused is True

    def test_next_tab_resyncs_surface_content(self, ready_session):
        ready_session.tabs[1].buffer = "written elsewhere\n"
        ready_session.handle(NextTab())
        assert ready_session.active_surface.content == "written elsewhere\n"


# ── Submit ──────────────────────────────────────────────────────────


class TestSubmit:
    def test_scenario_two_tabs(self, submit, make_executor):
        stub = make_executor(output="echo:hello")
        session = SessionController(["A", "B"], stub)
        session.handle(Resize(80, 24))

        submit(session, "hello")
        assert session.buffer(0) == "echo:hello\n"

        session.handle(NextTab())
        assert session.active == 1
        assert session.buffer(0) == "echo:hello\n"

        submit(session, "clear")
        assert session.buffer(1) == ""
        assert stub.calls == [("A", "hello")]

    def test_calls_executor_once_with_active_tab(self, ready_session, recorder, submit):
        ready_session.handle(NextTab())
        submit(ready_session, "status")
        assert recorder.calls == [("B", "status")]

    def test_appends_one_block_and_leaves_other_tabs(self, ready_session, submit):
        submit(ready_session, "one")
        submit(ready_session, "two")
        assert ready_session.buffer(0) == "echo:one\necho:two\n"
        assert ready_session.buffer(1) == ""

    def test_failure_follows_output(self, submit, make_executor):
        stub = make_executor(output="result", failure=RuntimeError("boom"))
        session = SessionController(["A"], stub)
        submit(session, "explode")
        assert session.buffer(0) == "resultboom\n"

    def test_string_failure(self, submit, make_executor):
        stub = make_executor(output="partial ", failure="timed out")
        session = SessionController(["A"], stub)
        submit(session, "wait")
        assert session.buffer(0) == "partial timed out\n"

    def test_raising_executor_reported_inline(self, ready_session, submit):
        def explode(tab, command):
            raise OSError("disk gone")

        ready_session.execute = explode
        assert submit(ready_session, "save") is Effect.RENDER
        assert ready_session.buffer(0) == "disk gone\n"
        assert ready_session.input.value == ""

    def test_empty_input_does_nothing(self, ready_session, recorder):
        ready_session.handle(Submit())
        assert recorder.calls == []
        assert ready_session.buffer(0) == ""

    def test_blurred_input_does_nothing(self, ready_session, recorder):
        ready_session.input.set_value("ls")
        ready_session.input.blur()
        ready_session.handle(Submit())
        assert recorder.calls == []
        assert ready_session.input.value == "ls"

    def test_input_reset_and_focused_after_submit(self, ready_session, submit):
        submit(ready_session, "ls")
        assert ready_session.input.value == ""
        assert ready_session.input.focused is True

    def test_scrolls_to_bottom(self, recorder, submit):
        recorder.output = "\n".join(f"line {i}" for i in range(50))
        session = SessionController(["A"], recorder)
        session.handle(Resize(80, 24))
        submit(session, "many")
        surface = session.active_surface
        assert surface.at_bottom
        assert surface.y_offset == surface.max_y_offset > 0

    def test_submit_before_ready_seeds_surface(self, session, submit):
        submit(session, "early")
        assert session.buffer(0) == "echo:early\n"
        session.handle(Resize(80, 24))
        assert session.surfaces[0].content == "echo:early\n"


class TestAppendBlock:
    def test_empty_buffer(self):
        assert append_block("", "out") == "out\n"

    def test_adds_separator_when_missing(self):
        assert append_block("abc", "out") == "abc\nout\n"

    def test_no_blank_line_when_newline_present(self):
        assert append_block("abc\n", "out") == "abc\nout\n"

    def test_failure_before_trailing_newline(self):
        assert append_block("", "out", ValueError("bad")) == "outbad\n"


# ── Clear ───────────────────────────────────────────────────────────


class TestClear:
    def test_clear_empties_buffer_and_resets_scroll(self, recorder, submit):
        recorder.output = "\n".join(str(i) for i in range(100))
        session = SessionController(["A"], recorder)
        session.handle(Resize(80, 24))
        submit(session, "fill")
        assert session.active_surface.y_offset > 0

        recorder.calls.clear()
        submit(session, "clear")
        assert session.buffer(0) == ""
        assert session.active_surface.content == ""
        assert session.active_surface.y_offset == 0
        assert recorder.calls == []

    def test_clear_only_touches_active_tab(self, ready_session, submit):
        submit(ready_session, "keep")
        ready_session.handle(NextTab())
        submit(ready_session, "drop")
        submit(ready_session, "clear")
        assert ready_session.buffer(0) == "echo:keep\n"
        assert ready_session.buffer(1) == ""

    def test_clear_before_ready(self, session, recorder, submit):
        session.tabs[0].buffer = "old\n"
        submit(session, "clear")
        assert session.buffer(0) == ""
        assert recorder.calls == []

    def test_clear_resets_input(self, ready_session, submit):
        submit(ready_session, "clear")
        assert ready_session.input.value == ""
        assert ready_session.input.focused is True


# ── Scrolling ───────────────────────────────────────────────────────


class TestHorizontalScroll:
    @pytest.fixture
    def wide(self, recorder, submit):
        recorder.output = "x" * 100
        session = SessionController(["A", "B"], recorder)
        session.handle(Resize(80, 24))
        submit(session, "wide")
        return session

    def test_scroll_right_by_step(self, wide):
        wide.handle(ScrollRight())
        assert wide.active_surface.x_offset == 5

    def test_scroll_right_clamped(self, wide):
        for _ in range(20):
            wide.handle(ScrollRight())
        surface = wide.active_surface
        assert surface.x_offset == 100 - surface.width

    def test_scroll_left_never_negative(self, wide):
        wide.handle(ScrollRight())
        for _ in range(5):
            wide.handle(ScrollLeft())
        assert wide.active_surface.x_offset == 0

    def test_offsets_independent_per_tab(self, wide):
        wide.handle(ScrollRight())
        wide.handle(ScrollRight())
        wide.handle(NextTab())
        assert wide.active_surface.x_offset == 0
        wide.handle(ScrollRight())
        wide.handle(NextTab())
        assert wide.active_surface.x_offset == 10
        assert wide.surfaces[1].x_offset == 0

    def test_does_not_touch_input(self, wide):
        wide.input.set_value("abc")
        wide.handle(ScrollRight())
        assert wide.input.value == "abc"
        assert wide.input.cursor == 3

    def test_before_ready_is_noop(self, session):
        assert session.handle(ScrollRight()) is Effect.RENDER
        assert session.handle(ScrollLeft()) is Effect.RENDER

    def test_custom_step(self, recorder, submit):
        recorder.output = "y" * 200
        session = SessionController(
            ["A"], recorder, display=DisplayPreferences(horizontal_step=12)
        )
        session.handle(Resize(80, 24))
        submit(session, "wide")
        session.handle(ScrollRight())
        assert session.active_surface.x_offset == 12


class TestNavigation:
    def test_arrows_scroll_surface_not_input(self, recorder, submit):
        recorder.output = "\n".join(str(i) for i in range(40)) + "-" * 120
        session = SessionController(["A"], recorder)
        session.handle(Resize(80, 24))
        submit(session, "fill")
        session.input.set_value("typed")
        surface = session.active_surface

        session.handle(Navigate(NavKey.UP))
        assert surface.y_offset == surface.max_y_offset - 1
        session.handle(Navigate(NavKey.RIGHT))
        assert surface.x_offset == 1
        session.handle(Navigate(NavKey.LEFT))
        assert session.input.cursor == 5
        assert session.input.value == "typed"

    def test_navigation_before_ready_ignored(self, session):
        session.input.set_value("abc")
        assert session.handle(Navigate(NavKey.LEFT)) is Effect.RENDER
        assert session.input.cursor == 3

    def test_page_keys(self, recorder, submit):
        recorder.output = "\n".join(str(i) for i in range(100))
        session = SessionController(["A"], recorder)
        session.handle(Resize(80, 24))
        submit(session, "fill")
        surface = session.active_surface
        bottom = surface.y_offset
        session.handle(Navigate(NavKey.PAGE_UP))
        assert surface.y_offset == bottom - surface.height

    def test_mouse_scroll(self, recorder, submit):
        recorder.output = "\n".join(str(i) for i in range(100))
        session = SessionController(["A"], recorder)
        session.handle(Resize(80, 24))
        submit(session, "fill")
        surface = session.active_surface
        bottom = surface.y_offset
        session.handle(MouseScroll(-3))
        assert surface.y_offset == bottom - 3


class TestEdit:
    def test_edit_reaches_input_before_ready(self, session):
        session.handle(Edit("a", "a"))
        session.handle(Edit("b", "b"))
        assert session.input.value == "ab"

    def test_edit_does_not_scroll(self, ready_session):
        ready_session.handle(Edit("j", "j"))
        assert ready_session.active_surface.y_offset == 0
        assert ready_session.input.value == "j"


class TestPaste:
    def test_paste_reaches_input(self, session):
        session.handle(Edit("a", "a"))
        assert session.handle(Paste("bc\n")) is Effect.RENDER
        assert session.input.value == "abc"

    def test_multi_line_paste_submits_as_one_command(self, ready_session, recorder):
        ready_session.handle(Paste("git status\ngit diff"))
        ready_session.handle(Submit())
        assert recorder.calls == [("A", "git status git diff")]

    def test_paste_does_not_scroll(self, ready_session):
        ready_session.handle(Paste("x" * 200))
        assert ready_session.active_surface.x_offset == 0
        assert ready_session.input.value == "x" * 200


# ── Resize ──────────────────────────────────────────────────────────


class TestResize:
    def test_first_resize_creates_one_surface_per_tab(self, session):
        session.handle(Resize(80, 24))
        assert session.ready is True
        assert isinstance(session.phase, Ready)
        assert len(session.surfaces) == 2
        assert session.surfaces[0] is not session.surfaces[1]

    def test_first_resize_sizes_surfaces_and_input(self, session):
        session.handle(Resize(80, 24))
        for surface in session.surfaces:
            assert (surface.width, surface.height) == (72, 14)
        assert session.input.width == 72
        assert (session.width, session.height) == (80, 24)

    def test_later_resize_keeps_surfaces_and_active_tab(self, ready_session):
        ready_session.handle(NextTab())
        before = ready_session.surfaces
        ready_session.handle(Resize(120, 40))
        assert ready_session.surfaces == before
        assert all(a is b for a, b in zip(ready_session.surfaces, before))
        assert ready_session.active == 1
        assert (ready_session.active_surface.width, ready_session.active_surface.height) == (112, 30)

    def test_resize_reflows_content(self, ready_session, submit):
        submit(ready_session, "x" * 90)
        surface = ready_session.active_surface
        for _ in range(10):
            ready_session.handle(ScrollRight())
        assert surface.x_offset > 0
        ready_session.handle(Resize(200, 24))
        assert surface.x_offset == 0
        assert surface.content == ready_session.buffer(0)

    def test_tiny_terminal_clamps_to_zero(self, ready_session):
        ready_session.handle(Resize(3, 2))
        assert ready_session.input.width == 0
        assert ready_session.active_surface.width == 0
        assert ready_session.active_surface.height == 0


# ── Quit ────────────────────────────────────────────────────────────


class TestQuit:
    def test_quit_returns_quit_effect(self, ready_session):
        assert ready_session.handle(Quit()) is Effect.QUIT
        assert ready_session.quit_requested is True

    def test_no_mutation_after_quit(self, ready_session, recorder):
        ready_session.handle(Quit())
        assert ready_session.handle(NextTab()) is Effect.QUIT
        assert ready_session.active == 0
        ready_session.input.set_value("ls")
        ready_session.handle(Submit())
        assert recorder.calls == []

    def test_unknown_event_rejected(self, ready_session):
        with pytest.raises(TypeError):
            ready_session.handle(object())


# ── Rendering ───────────────────────────────────────────────────────


class TestRender:
    def test_loading_placeholder_before_ready(self, session):
        frame = session.render().plain
        assert "Loading..." in frame
        assert "Active:" not in frame

    def test_status_text_before_ready(self, session):
        assert session.status_text() == "Initializing..."

    def test_status_text_when_ready(self, ready_session):
        ready_session.handle(NextTab())
        assert ready_session.status_text().startswith("Active: B | Total: 2")

    def test_frame_fills_terminal(self, ready_session):
        from rich.cells import cell_len

        lines = ready_session.render().plain.split("\n")
        assert len(lines) == 24
        assert all(cell_len(line) == 80 for line in lines)

    def test_frame_sections_in_order(self, ready_session, submit):
        submit(ready_session, "hello")
        lines = ready_session.render().plain.split("\n")
        assert "Active: A | Total: 2" in lines[1]
        assert " A " in lines[2] and " B " in lines[2]
        assert lines[3].strip().startswith("╭")
        assert "echo:hello" in lines[4]
        assert lines[18].strip().startswith("╰")
        assert "> " in lines[20]
        assert lines[22].strip().startswith("Use Tab to switch")

    def test_render_shows_only_active_tab(self, ready_session, submit):
        submit(ready_session, "alpha")
        ready_session.handle(NextTab())
        submit(ready_session, "beta")
        frame = ready_session.render().plain
        assert "echo:beta" in frame
        assert "echo:alpha" not in frame

    def test_render_is_pure(self, ready_session, submit):
        submit(ready_session, "hello")
        surface = ready_session.active_surface
        state = (ready_session.active, surface.y_offset, surface.x_offset, ready_session.input.value)
        first = ready_session.render().plain
        second = ready_session.render().plain
        assert first == second
        assert state == (ready_session.active, surface.y_offset, surface.x_offset, ready_session.input.value)

    def test_active_and_inactive_tabs_styled_apart(self, ready_session):
        from tabconsole.theme import get_theme

        theme = get_theme("dark")
        frame = ready_session.render(theme)
        styles = {str(span.style) for span in frame.spans}
        assert theme.active_tab in styles
        assert theme.inactive_tab in styles

    def test_colour_output_rendered_without_escape_bytes(self, ready_session, make_executor):
        ready_session.execute = make_executor(output="\x1b[31mred\x1b[0m done")
        ready_session.input.set_value("ls")
        ready_session.handle(Submit())
        frame = ready_session.render()
        assert "\x1b" not in frame.plain
        row = frame.plain.split("\n")[4]
        assert "red done" in row
        start = frame.plain.index("red done")
        assert any(
            span.start <= start < span.end and getattr(span.style, "color", None) is not None
            for span in frame.spans
        )
