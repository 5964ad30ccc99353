from sqlpane.inputBuffer import CURSOR_STEP, InputBuffer


def test_insert_into_empty_buffer_one_at_a_time():
    buf = InputBuffer()
    positions = []
    for c in 'abcde':
        buf.insert(c)
        positions.append(buf.cursorPosition)
    assert buf.text == 'abcde'
    # The 10-step jump is clamped to the text length after each insert
    assert positions == [1, 2, 3, 4, 5]


def test_insert_jumps_cursor_by_fixed_step():
    buf = InputBuffer('x' * 30)
    buf.insert('a')
    assert buf.text == 'a' + 'x' * 30
    assert buf.cursorPosition == CURSOR_STEP == 10
    buf.insert('b')
    assert buf.text[10] == 'b'
    assert buf.cursorPosition == 20


def test_move_left_and_right_clamp():
    buf = InputBuffer('y' * 25)
    buf.moveRight()
    assert buf.cursorPosition == 10
    buf.moveRight()
    buf.moveRight()
    assert buf.cursorPosition == 25
    buf.moveLeft()
    assert buf.cursorPosition == 15
    buf.moveLeft()
    buf.moveLeft()
    assert buf.cursorPosition == 0


def test_moves_on_empty_buffer_keep_cursor_at_zero():
    buf = InputBuffer()
    buf.moveRight()
    assert buf.cursorPosition == 0
    buf.moveLeft()
    assert buf.cursorPosition == 0


def test_delete_at_cursor_zero_is_noop():
    buf = InputBuffer('abc')
    buf.deleteBeforeCursor()
    assert buf.text == 'abc'
    assert buf.cursorPosition == 0

    empty = InputBuffer()
    empty.deleteBeforeCursor()
    assert empty.text == ''
    assert empty.cursorPosition == 0


def test_delete_removes_char_before_cursor_and_jumps_left():
    buf = InputBuffer('0123456789abcdefghijklmno')
    buf.cursorPosition = 15
    buf.deleteBeforeCursor()
    assert buf.text == '0123456789abcdfghijklmno'
    assert buf.cursorPosition == 5


def test_single_character_buffer():
    buf = InputBuffer()
    buf.insert('z')
    assert (buf.text, buf.cursorPosition) == ('z', 1)
    buf.deleteBeforeCursor()
    assert (buf.text, buf.cursorPosition) == ('', 0)


def test_insert_then_delete_at_end_restores_text():
    buf = InputBuffer('SELECT 1')
    buf.cursorPosition = len(buf.text)
    buf.insert(';')
    assert buf.text == 'SELECT 1;'
    assert buf.cursorPosition == 9
    buf.deleteBeforeCursor()
    assert buf.text == 'SELECT 1'
    assert buf.cursorPosition == 0


def test_multibyte_text_uses_code_point_offsets():
    buf = InputBuffer()
    for c in 'é日本🦆':
        buf.insert(c)
    assert buf.text == 'é日本🦆'
    assert buf.cursorPosition == 4
    buf.deleteBeforeCursor()
    assert buf.text == 'é日本'
    assert buf.cursorPosition == 0


def test_cursor_invariant_over_mixed_operations():
    buf = InputBuffer()
    ops = [lambda: buf.insert('q'), buf.moveLeft, buf.deleteBeforeCursor,
           buf.moveRight, lambda: buf.insert('ß')]
    for i in range(200):
        ops[(i * 7) % len(ops)]()
        assert 0 <= buf.cursorPosition <= len(buf.text)


def test_clear_and_snapshot():
    buf = InputBuffer('SELECT 42')
    buf.moveRight()
    assert buf.snapshot() == 'SELECT 42'
    assert buf.cursorPosition == 9
    buf.clear()
    assert buf.snapshot() == ''
    assert buf.cursorPosition == 0
