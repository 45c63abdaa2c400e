""" The 16 key hex keypad.

    Computers which originally used CHIP-8 had this layout:

        1 2 3 C
        4 5 6 D
        7 8 9 E
        A 0 B F

    The input front end maps host keys to these codes and updates the keypad. The
    interpreter only reads it.
"""

KEY_COUNT = 0x10

class KeypadException(Exception):
    pass

class Keypad(object):
    def __init__(self):
        self._keys = [False] * KEY_COUNT

    def _check_key(self,key):
        if key < 0 or key >= KEY_COUNT:
            raise KeypadException('Key 0x%x is not on the keypad' % key)

    def press(self,key):
        self[key] = True

    def release(self,key):
        self[key] = False

    def clear(self):
        self._keys = [False] * KEY_COUNT

    def is_pressed(self,key):
        """ Return True if key is held. Codes that aren't on the keypad are never pressed """
        if key < 0 or key >= KEY_COUNT:
            return False
        return self._keys[key]

    def pressed_keys(self):
        """ Return the set of key codes currently held """
        return set(key for key,pressed in enumerate(self._keys) if pressed)

    def __len__(self):
        return KEY_COUNT

    def __getitem__(self,key):
        return self.is_pressed(key)

    def __setitem__(self,key,pressed):
        self._check_key(key)
        self._keys[key] = bool(pressed)
