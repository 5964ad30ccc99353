from dataclasses import dataclass, field
from enum import Enum
from typing import FrozenSet, List, Optional

from sqlpane.errorManager import EngineError, RenderError
from sqlpane.inputBuffer import InputBuffer
from sqlpane.resultRenderer import RenderedTable, ResultRenderer
from sqlpane.resultSet import ResultSet
from sqlpane.scrollState import ScrollState

class InputMode(Enum):
    NORMAL = 0
    EDITING = 1

class KeyCode(Enum):
    CHAR = 0
    ENTER = 1
    BACKSPACE = 2
    LEFT = 3
    RIGHT = 4
    UP = 5
    DOWN = 6
    ESC = 7
    OTHER = 8

class KeyKind(Enum):
    PRESS = 0
    REPEAT = 1
    RELEASE = 2

@dataclass(frozen=True)
class KeyEvent:
    code: KeyCode
    char: Optional[str] = None
    modifiers: FrozenSet[str] = frozenset()
    kind: KeyKind = KeyKind.PRESS

    @classmethod
    def forChar(cls, char, kind=KeyKind.PRESS):
        return cls(KeyCode.CHAR, char, kind=kind)

@dataclass
class AppState:
    '''
    Everything the session knows. Owned by one ControlLoop and changed
    only by its handlers.
    '''
    inputBuffer: InputBuffer = field(default_factory=InputBuffer)
    inputMode: InputMode = InputMode.NORMAL
    resultSet: ResultSet = field(default_factory=ResultSet)
    scrollState: ScrollState = field(default_factory=ScrollState)
    message: Optional[str] = None

@dataclass
class Screen:
    '''
    One frame's worth of data for the terminal layer to draw.
    '''
    inputText: str
    cursorPosition: int
    inputMode: InputMode
    table: RenderedTable
    resultLines: List[str]
    visibleLines: List[str]
    scrollState: ScrollState
    message: Optional[str] = None


class ControlLoop:
    '''
    Routes each key event to the input buffer, the query executor or the
    scroll state depending on the input mode, then re-renders.

    NORMAL mode: e edits, q quits, Up/Down scroll the result.
    EDITING mode: printable keys, Backspace, Left/Right edit the SQL text;
    Enter submits it; Esc returns to NORMAL. Only key presses count while
    editing.
    '''

    def __init__(self, executor, renderer=None, state=None):
        self.executor = executor
        self.renderer = renderer or ResultRenderer()
        self.state = state or AppState()

    def dispatch(self, event):
        '''
        Processes one event. Returns False when the session should end.
        '''
        state = self.state
        if state.inputMode == InputMode.NORMAL:
            return self._dispatchNormal(event)
        if event.kind != KeyKind.PRESS:
            return True
        return self._dispatchEditing(event)

    def _dispatchNormal(self, event):
        state = self.state
        if event.code == KeyCode.CHAR:
            if event.char == 'e':
                state.inputMode = InputMode.EDITING
            elif event.char == 'q':
                return False
        elif event.code == KeyCode.DOWN:
            state.scrollState.scrollDown()
        elif event.code == KeyCode.UP:
            state.scrollState.scrollUp()
        return True

    def _dispatchEditing(self, event):
        state = self.state
        buffer = state.inputBuffer
        if event.code == KeyCode.ENTER:
            self.submit()
        elif event.code == KeyCode.CHAR and event.char:
            buffer.insert(event.char)
        elif event.code == KeyCode.BACKSPACE:
            buffer.deleteBeforeCursor()
        elif event.code == KeyCode.LEFT:
            buffer.moveLeft()
        elif event.code == KeyCode.RIGHT:
            buffer.moveRight()
        elif event.code == KeyCode.ESC:
            state.inputMode = InputMode.NORMAL
        return True

    def submit(self):
        '''
        Runs the buffer text. The new result replaces the old one only if it
        both ran and renders; otherwise the error is kept as the inline
        message and buffer and result stay exactly as they were.
        '''
        state = self.state
        try:
            resultSet = self.executor.execute(state.inputBuffer.snapshot())
            self.renderer.render(resultSet)
        except (EngineError, RenderError) as e:
            state.message = e.message
            return False

        state.resultSet = resultSet
        state.message = None
        state.inputBuffer.clear()
        return True

    def render(self, viewportHeight=None):
        '''
        Recomputes the table from the current result and recalibrates the
        scroll state's content length from the result text's line count.
        '''
        state = self.state
        scroll = state.scrollState
        if viewportHeight is not None:
            scroll.viewportHeight = viewportHeight

        try:
            table = self.renderer.render(state.resultSet)
        except RenderError as e:
            table = RenderedTable()
            state.message = e.message

        resultLines = table.text.splitlines()
        if state.message:
            resultLines = state.message.splitlines() + [''] + resultLines
        scroll.setContentLength(len(resultLines))

        return Screen(
            inputText=state.inputBuffer.snapshot(),
            cursorPosition=state.inputBuffer.cursorPosition,
            inputMode=state.inputMode,
            table=table,
            resultLines=resultLines,
            visibleLines=scroll.visibleSlice(resultLines),
            scrollState=scroll,
            message=state.message)

    def run(self, terminal):
        '''
        The generic loop: draw, block for one event, process it, repeat.
        The terminal object provides draw(screen), readEvent() and
        viewportHeight(); acquiring and releasing it is the caller's job.
        '''
        while True:
            terminal.draw(self.render(terminal.viewportHeight()))
            event = terminal.readEvent()
            if event is None:
                continue
            if not self.dispatch(event):
                return 0
