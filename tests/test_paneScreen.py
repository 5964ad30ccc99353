import pytest
from prompt_toolkit.input import create_pipe_input
from prompt_toolkit.key_binding import KeyPress
from prompt_toolkit.keys import Keys
from prompt_toolkit.output import DummyOutput

from sqlpane.controlLoop import InputMode, KeyCode, KeyEvent
from sqlpane.paneScreen import PaneScreen, pastedKeyEvents, scrollbarFragments, translateKey
from sqlpane.scrollState import ScrollState


@pytest.mark.parametrize('key, code', [
    (Keys.ControlM, KeyCode.ENTER),
    (Keys.ControlH, KeyCode.BACKSPACE),
    (Keys.Left, KeyCode.LEFT),
    (Keys.Right, KeyCode.RIGHT),
    (Keys.Up, KeyCode.UP),
    (Keys.Down, KeyCode.DOWN),
    (Keys.Escape, KeyCode.ESC),
    (Keys.Home, KeyCode.OTHER),
    (Keys.Tab, KeyCode.OTHER),
])
def test_translate_special_keys(key, code):
    assert translateKey(KeyPress(key)) == KeyEvent(code)


@pytest.mark.parametrize('key, code, modifiers', [
    (Keys.ControlC, KeyCode.OTHER, {'ctrl'}),
    (Keys.ControlLeft, KeyCode.LEFT, {'ctrl'}),
    (Keys.ShiftDown, KeyCode.DOWN, {'shift'}),
    (Keys.ControlShiftRight, KeyCode.RIGHT, {'ctrl', 'shift'}),
    (Keys.BackTab, KeyCode.OTHER, {'shift'}),
])
def test_translate_modified_keys(key, code, modifiers):
    assert translateKey(KeyPress(key)) == KeyEvent(code, modifiers=frozenset(modifiers))


def test_translate_printable_keys():
    assert translateKey(KeyPress('a')) == KeyEvent.forChar('a')
    assert translateKey(KeyPress('日')) == KeyEvent.forChar('日')
    assert translateKey(KeyPress('\x00')) == KeyEvent(KeyCode.OTHER)


def test_pasted_text_becomes_characters():
    events = pastedKeyEvents('SELECT\n1')
    assert ''.join(e.char for e in events) == 'SELECT1'


def test_scrollbar_fragments():
    scroll = ScrollState(viewportHeight=4)
    scroll.setContentLength(20)
    text = ''.join(t for _, t in scrollbarFragments(scroll, 6))
    assert text.splitlines() == ['↑', '█', '║', '║', '║', '↓']

    for _ in range(19):
        scroll.scrollDown()
    text = ''.join(t for _, t in scrollbarFragments(scroll, 6))
    assert text.splitlines() == ['↑', '║', '║', '║', '█', '↓']

    # Past the end the thumb stays on the last track row
    for _ in range(10):
        scroll.scrollDown()
    text = ''.join(t for _, t in scrollbarFragments(scroll, 6))
    assert text.splitlines()[-2] == '█'


def test_scrollbar_too_small():
    assert scrollbarFragments(ScrollState(), 0) == []
    assert len(scrollbarFragments(ScrollState(), 1)) == 1


def test_fragments_follow_control_loop(loop):
    with create_pipe_input() as inp:
        screen = PaneScreen(loop, input=inp, output=DummyOutput())
        loop.dispatch(KeyEvent.forChar('e'))
        for c in 'SELEC 1':
            loop.dispatch(KeyEvent.forChar(c))
        loop.dispatch(KeyEvent(KeyCode.ENTER))
        screen._beforeRender(screen.application)

        rows = screen.application.output.get_size().rows
        assert screen.screen.scrollState.viewportHeight == rows - 5

        inputFragments = screen._inputFragments()
        assert inputFragments[0] == ('fg:yellow', 'SELEC 1')
        assert inputFragments[1] == ('[SetCursorPosition]', '')

        resultFragments = screen._resultFragments()
        assert resultFragments[0][0] == 'class:error'
        assert 'syntax error' in ''.join(t for _, t in resultFragments)


def test_application_quits_on_q(loop):
    with create_pipe_input() as inp:
        inp.send_text('q')
        screen = PaneScreen(loop, input=inp, output=DummyOutput())
        assert screen.run() == 0
        assert loop.state.inputMode == InputMode.NORMAL


def test_application_edits_and_submits(loop):
    with create_pipe_input() as inp:
        inp.send_text('eSELECT 4\r')
        screen = PaneScreen(loop, input=inp, output=DummyOutput())

        @screen.application.key_bindings.add('c-q')
        def _(event):
            event.app.exit(result=0)

        inp.send_text('\x11')
        assert screen.run() == 0
    assert loop.state.inputBuffer.text == ''
    assert list(loop.state.resultSet.rows()) == [(4,)]


def test_pasted_q_quits_in_normal_mode(loop):
    with create_pipe_input() as inp:
        inp.send_text('\x1b[200~xqe\x1b[201~')
        screen = PaneScreen(loop, input=inp, output=DummyOutput())
        assert screen.run() == 0
    # Nothing after the q was dispatched
    assert loop.state.inputMode == InputMode.NORMAL


def test_pasted_q_is_text_while_editing(loop):
    with create_pipe_input() as inp:
        inp.send_text('e\x1b[200~SELECT 1 AS q\x1b[201~')
        screen = PaneScreen(loop, input=inp, output=DummyOutput())

        @screen.application.key_bindings.add('c-q')
        def _(event):
            event.app.exit(result=0)

        inp.send_text('\x11')
        assert screen.run() == 0
    assert loop.state.inputBuffer.text == 'SELECT 1 AS q'
