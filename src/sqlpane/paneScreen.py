"""
The full-screen terminal front end: a fixed-height SQL box above a
scrollable result box with a vertical scrollbar on its right.

prompt_toolkit's Application owns the terminal for the duration of run():
raw mode, the alternate screen and mouse capture are switched on when it
starts and restored on every way out of it, exceptions included.
"""
from prompt_toolkit.application import Application
from prompt_toolkit.filters import Condition
from prompt_toolkit.key_binding import KeyBindings
from prompt_toolkit.keys import Keys
from prompt_toolkit.layout import HSplit, Layout, VSplit, Window
from prompt_toolkit.layout.controls import FormattedTextControl
from prompt_toolkit.styles import Style
from prompt_toolkit.widgets import Frame

from sqlpane.controlLoop import InputMode, KeyCode, KeyEvent
from sqlpane.errorManager import TerminalIOError

# One line of text plus the frame's top and bottom border
INPUT_HEIGHT = 3
FRAME_BORDER_HEIGHT = 2

SCROLL_BEGIN_SYMBOL = '↑'
SCROLL_END_SYMBOL = '↓'
SCROLL_TRACK_SYMBOL = '║'
SCROLL_THUMB_SYMBOL = '█'

keyCodeMap = {
    Keys.ControlM: KeyCode.ENTER,
    Keys.ControlJ: KeyCode.ENTER,
    Keys.ControlH: KeyCode.BACKSPACE,
    Keys.Left: KeyCode.LEFT,
    Keys.Right: KeyCode.RIGHT,
    Keys.Up: KeyCode.UP,
    Keys.Down: KeyCode.DOWN,
    Keys.Escape: KeyCode.ESC,
    # Tab arrives as c-i; the terminal cannot tell the two apart
    Keys.Tab: KeyCode.OTHER,
}

# Arrow keys keep their code when held with a modifier
arrowCodeMap = {
    'left': KeyCode.LEFT,
    'right': KeyCode.RIGHT,
    'up': KeyCode.UP,
    'down': KeyCode.DOWN,
}

modifierPrefixes = {
    'c-': 'ctrl',
    's-': 'shift',
}

paneStyle = Style.from_dict({
    'frame.label': 'bold',
    'error': 'fg:ansired bold',
    'scrollbar': 'fg:ansibrightblack',
    'scrollbar.thumb': 'fg:ansiwhite',
})


def translateKey(keyPress):
    '''
    Converts a prompt_toolkit KeyPress into a KeyEvent. prompt_toolkit only
    reports presses, so every event is a PRESS. Printable characters arrive
    as one-character strings; everything else is a Keys member, whose name
    carries the modifiers as prefixes ("c-left", "c-s-left", "s-tab").
    '''
    keyPressed = keyPress.key
    if isinstance(keyPressed, Keys):
        if keyPressed in keyCodeMap:
            return KeyEvent(keyCodeMap[keyPressed])
        name = keyPressed.value
        modifiers = set()
        while name[:2] in modifierPrefixes:
            modifiers.add(modifierPrefixes[name[:2]])
            name = name[2:]
        return KeyEvent(arrowCodeMap.get(name, KeyCode.OTHER), modifiers=frozenset(modifiers))
    if len(keyPressed) == 1 and keyPressed.isprintable():
        return KeyEvent.forChar(keyPressed)
    return KeyEvent(KeyCode.OTHER)


def pastedKeyEvents(data):
    # Pasted text is typed one character at a time; line breaks are dropped
    # since the SQL box holds a single line.
    return [KeyEvent.forChar(c) for c in data if c.isprintable()]


def scrollbarFragments(scrollState, height):
    '''
    The scrollbar column for a result box of the given total height: the
    arrows take the first and last rows, the track the rows in between.
    '''
    if height <= 0:
        return []
    if height < 2:
        return [('class:scrollbar', SCROLL_BEGIN_SYMBOL)]

    trackLength = height - 2
    thumb = scrollState.thumbPosition(trackLength)
    fragments = [('class:scrollbar', SCROLL_BEGIN_SYMBOL + '\n')]
    for row in range(trackLength):
        if row == thumb:
            fragments.append(('class:scrollbar.thumb', SCROLL_THUMB_SYMBOL + '\n'))
        else:
            fragments.append(('class:scrollbar', SCROLL_TRACK_SYMBOL + '\n'))
    fragments.append(('class:scrollbar', SCROLL_END_SYMBOL))
    return fragments


class PaneScreen:

    def __init__(self, controlLoop, editingStyle='fg:yellow', input=None, output=None):
        self.controlLoop = controlLoop
        self.editingStyle = editingStyle
        self.screen = controlLoop.render(0)
        self.application = self._createApp(input, output)

    def _isEditing(self):
        return self.controlLoop.state.inputMode == InputMode.EDITING

    def _viewportHeight(self, app):
        rows = app.output.get_size().rows
        return max(rows - INPUT_HEIGHT - FRAME_BORDER_HEIGHT, 0)

    def _beforeRender(self, app):
        self.screen = self.controlLoop.render(self._viewportHeight(app))

    def _inputFragments(self):
        screen = self.screen
        style = self.editingStyle if screen.inputMode == InputMode.EDITING else ''
        idx = screen.cursorPosition
        return [
            (style, screen.inputText[:idx]),
            ('[SetCursorPosition]', ''),
            (style, screen.inputText[idx:]),
            ]

    def _resultFragments(self):
        screen = self.screen
        messageLineCount = len(screen.message.splitlines()) if screen.message else 0
        fragments = []
        for i, line in enumerate(screen.visibleLines, start=screen.scrollState.offset):
            if fragments:
                fragments.append(('', '\n'))
            fragments.append(('class:error' if i < messageLineCount else '', line))
        return fragments

    def _scrollbarFragments(self):
        scroll = self.screen.scrollState
        return scrollbarFragments(scroll, scroll.viewportHeight + FRAME_BORDER_HEIGHT)

    def _getKeyBindings(self):
        kb = KeyBindings()

        @kb.add(Keys.BracketedPaste)
        def _(event):
            # A pasted q in NORMAL mode quits just like a typed one
            for keyEvent in pastedKeyEvents(event.data):
                if not self.controlLoop.dispatch(keyEvent):
                    event.app.exit(result=0)
                    break

        @kb.add(Keys.Any)
        def _(event):
            keyEvent = translateKey(event.key_sequence[0])
            if not self.controlLoop.dispatch(keyEvent):
                event.app.exit(result=0)

        return kb

    def _createApp(self, input=None, output=None):
        inputWindow = Window(
            FormattedTextControl(self._inputFragments, focusable=True),
            height=1,
            always_hide_cursor=Condition(lambda: not self._isEditing()))
        resultWindow = Window(FormattedTextControl(self._resultFragments), wrap_lines=False)
        scrollbarWindow = Window(FormattedTextControl(self._scrollbarFragments), width=1)

        body = HSplit([
            Frame(inputWindow, title='SQL'),
            VSplit([Frame(resultWindow, title='Result'), scrollbarWindow]),
            ])

        application = Application(
            layout=Layout(body, focused_element=inputWindow),
            key_bindings=self._getKeyBindings(),
            before_render=self._beforeRender,
            mouse_support=True,
            style=paneStyle,
            full_screen=True,
            input=input,
            output=output)
        # Esc is also the prefix of every escape sequence; wait less for it
        application.ttimeoutlen = 0.1
        return application

    def run(self):
        try:
            return self.application.run()
        except (OSError, EOFError) as e:
            raise TerminalIOError(e)
