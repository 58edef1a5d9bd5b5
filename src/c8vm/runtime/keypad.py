import logging as lg
from enum import Enum, auto

from c8vm.common.hwconf import KEYS


class KeyWait(Enum):
    NOT_WAITING = auto()
    WAITING = auto()
    KEY_RECEIVED = auto()


class Keypad:
    ''' Sixteen key hex keypad.

    Besides the plain key states it runs the state machine behind the
    blocking "wait for key" instruction: the first press that arrives
    while WAITING is captured and handed out by the next wait_for_key().
    Releases never touch the wait state.
    '''

    keys: list[bool]
    state: KeyWait
    received: int

    def __init__(self):
        self.reset()

    def reset(self):
        self.keys = [False] * KEYS
        self.state = KeyWait.NOT_WAITING
        self.received = 0

    def press(self, key: int):
        if not 0 <= key < KEYS:
            lg.warning(f'Ignoring press of unknown key {key}')
            return

        self.keys[key] = True

        if self.state == KeyWait.WAITING:
            self.state = KeyWait.KEY_RECEIVED
            self.received = key

    def release(self, key: int):
        if not 0 <= key < KEYS:
            lg.warning(f'Ignoring release of unknown key {key}')
            return

        self.keys[key] = False

    def is_pressed(self, key: int) -> bool:
        return 0 <= key < KEYS and self.keys[key]

    def wait_for_key(self) -> int | None:
        ''' Returns the captured key, or None while the caller has to keep waiting '''
        if self.state == KeyWait.KEY_RECEIVED:
            self.state = KeyWait.NOT_WAITING
            return self.received

        self.state = KeyWait.WAITING
        return None

    @property
    def waiting(self) -> bool:
        return self.state == KeyWait.WAITING
