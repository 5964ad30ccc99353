# The cursor moves in jumps of this many code points, on typing and
# deleting as well as on Left/Right.
CURSOR_STEP = 10

class InputBuffer():
    '''
    The SQL text under composition and the cursor offset into it.
    Offsets count code points (Python str indices), never encoded bytes,
    so multi-byte text edits the same way as ASCII.
    '''

    def __init__(self, text=''):
        self.text = text
        self.cursorPosition = 0

    def __len__(self):
        return len(self.text)

    def clampCursor(self, newCursorPosition):
        return min(max(newCursorPosition, 0), len(self.text))

    def moveLeft(self):
        self.cursorPosition = self.clampCursor(self.cursorPosition - CURSOR_STEP)

    def moveRight(self):
        self.cursorPosition = self.clampCursor(self.cursorPosition + CURSOR_STEP)

    def insert(self, char):
        curpos = self.cursorPosition
        self.text = '{}{}{}'.format(self.text[:curpos], char, self.text[curpos:])
        self.moveRight()

    def deleteBeforeCursor(self):
        curpos = self.cursorPosition
        if curpos == 0:
            return
        self.text = '{}{}'.format(self.text[:curpos-1], self.text[curpos:])
        self.moveLeft()

    def clear(self):
        self.text = ''
        self.cursorPosition = 0

    def snapshot(self):
        return self.text
