import pytest

from boxengine.input import InputKey, InputState, KeyState, next_key_state


@pytest.mark.parametrize(
    "current, is_down, expected",
    [
        (KeyState.UNPRESSED, True, KeyState.PRESSED),
        (KeyState.PRESSED, True, KeyState.HELD),
        (KeyState.HELD, True, KeyState.HELD),
        (KeyState.UNPRESSED, False, KeyState.UNPRESSED),
        (KeyState.PRESSED, False, KeyState.UNPRESSED),
        (KeyState.HELD, False, KeyState.UNPRESSED),
    ],
)
def test_next_key_state(current, is_down, expected):
    assert next_key_state(current, is_down) == expected


BINDS = {
    InputKey.LEFT: 10,
    InputKey.RIGHT: 11,
    InputKey.UP: 12,
    InputKey.DOWN: 13,
    InputKey.ESCAPE: 14,
}


def test_initial_state_is_unpressed():
    state = InputState()
    assert all(state.get(key) == KeyState.UNPRESSED for key in InputKey)


def test_update_press_then_hold_then_release():
    state = InputState()
    down = {11}
    state.update(BINDS, lambda code: code in down)
    assert state.right == KeyState.PRESSED
    assert state.left == KeyState.UNPRESSED

    state.update(BINDS, lambda code: code in down)
    assert state.get(InputKey.RIGHT) == KeyState.HELD

    down.clear()
    state.update(BINDS, lambda code: code in down)
    assert state.get(InputKey.RIGHT) == KeyState.UNPRESSED


def test_update_uses_bindings():
    state = InputState()
    state.update(BINDS, lambda code: code == 14)
    assert state.escape == KeyState.PRESSED
    assert state.up == KeyState.UNPRESSED


def test_unbound_key_stays_unpressed():
    state = InputState()
    state.update({InputKey.UP: 5}, lambda code: True)
    assert state.up == KeyState.PRESSED
    assert state.down == KeyState.UNPRESSED


def test_get_matches_attributes():
    state = InputState(left=KeyState.HELD, down=KeyState.PRESSED)
    assert state.get(InputKey.LEFT) == state.left
    assert state.get(InputKey.DOWN) == state.down