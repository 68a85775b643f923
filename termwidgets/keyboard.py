"""Keyboard and mouse-wheel input parsed from curtsies-style tokens."""

import re
from typing import Optional
from dataclasses import dataclass
from enum import Enum


class KeyType(Enum):
    """Types of input events."""
    REGULAR = "regular"
    ALT = "alt"
    CTRL = "ctrl"
    SPECIAL = "special"
    SHIFT_SPECIAL = "shift_special"  # Shift + arrow keys, etc.
    MOUSE = "mouse"  # Wheel scrolling; value is 'scroll_up' or 'scroll_down'


@dataclass
class KeyEvent:
    """Represents a parsed input event."""
    key_type: KeyType
    value: str  # The base key (e.g., 'a', 'left', 'backspace', 'scroll_up')
    raw: str  # The raw token from the input source
    is_alt: bool = False
    is_ctrl: bool = False
    is_shift: bool = False
    is_sequence: bool = False
    code: Optional[int] = None


SPECIAL_KEYS = {
    'left', 'right', 'up', 'down', 'home', 'end', 'enter', 'backspace', 'delete',
    'page_up', 'page_down', 'insert',
    'f1', 'f2', 'f3', 'f4', 'f5', 'f6', 'f7', 'f8', 'f9', 'f10', 'f11', 'f12',
}

# xterm SGR mouse report: ESC [ < button ; column ; row (M=press, m=release)
_SGR_MOUSE = re.compile(r'^\x1b\[<(\d+);(\d+);(\d+)([Mm])$')
_WHEEL_BUTTONS = {64: 'scroll_up', 65: 'scroll_down'}


class KeyboardHandler:
    """Turns tokens from the terminal interface into KeyEvents."""

    def __init__(self, terminal_interface):
        """Initialize with a terminal interface."""
        self.terminal = terminal_interface

    def get_key_event(self, timeout: Optional[float] = None) -> Optional[KeyEvent]:
        """Get the next event, or None if nothing arrived before the timeout."""
        key = self.terminal.get_key(timeout)
        if not key:
            return None
        return self.parse_key(key)

    def parse_key(self, key) -> KeyEvent:
        """Parse a curtsies token (or raw string) into a KeyEvent.

        Args:
            key: Token such as '<LEFT>', '<Ctrl-x>', 'a', or a raw
                SGR mouse report.

        Returns:
            Parsed KeyEvent
        """
        key_str = str(key)

        mouse = self._parse_mouse(key_str)
        if mouse is not None:
            return mouse

        # Curtsies-style key names like '<LEFT>', '<Ctrl-x>', '<Alt-left>'
        if key_str.startswith('<') and key_str.endswith('>') and len(key_str) > 2:
            name = key_str[1:-1]
            lower = name.lower()
            # Support both '-' and '+' as modifier separators (e.g., '<Esc+u>')
            lower = lower.replace('+', '-')
            parts = lower.split('-') if '-' in lower else [lower]
            mods = set()
            base = parts[-1]
            if len(parts) > 1:
                mods = set(parts[:-1])
            if 'meta' in mods:
                mods.add('alt')
            # Treat 'esc' as alt modifier when combined with another key
            if 'esc' in mods:
                mods.add('alt')
            if base in ('pageup', 'page_up'):
                base = 'page_up'
            elif base in ('pagedown', 'page_down'):
                base = 'page_down'

            if base in ('space', 'spacebar', 'spc') and not mods:
                return KeyEvent(key_type=KeyType.REGULAR, value=' ', raw=' ')
            if base == 'tab' and not mods:
                return KeyEvent(key_type=KeyType.REGULAR, value='\t', raw='\t')
            if 'ctrl' in mods and len(base) == 1:
                # Ctrl-J / Ctrl-M are what terminals send for Enter
                if base in ('j', 'm'):
                    return KeyEvent(key_type=KeyType.SPECIAL, value='enter', raw=key_str, is_sequence=True)
                return KeyEvent(key_type=KeyType.CTRL, value=base, raw=key_str, is_ctrl=True)
            if 'alt' in mods:
                if base in SPECIAL_KEYS or len(base) == 1:
                    return KeyEvent(key_type=KeyType.ALT, value=base, raw=key_str, is_alt=True)
            if 'shift' in mods and base in SPECIAL_KEYS:
                return KeyEvent(key_type=KeyType.SHIFT_SPECIAL, value=base, raw=key_str,
                                is_shift=True, is_sequence=True)
            if base in SPECIAL_KEYS:
                return KeyEvent(key_type=KeyType.SPECIAL, value=base, raw=key_str, is_sequence=True)
            if base in ('esc', 'escape'):
                return KeyEvent(key_type=KeyType.SPECIAL, value='escape', raw='\x1b')
            # Unknown token
            return KeyEvent(key_type=KeyType.SPECIAL, value=base, raw=key_str, is_sequence=True)

        # Single-byte ASCII control chars (Ctrl-<letter>)
        if len(key_str) == 1:
            o = ord(key_str)
            if o in (8, 127):
                return KeyEvent(key_type=KeyType.SPECIAL, value='backspace', raw=key_str)
            if o == 9:
                return KeyEvent(key_type=KeyType.REGULAR, value='\t', raw=key_str)
            if 1 <= o <= 26:  # Ctrl-A .. Ctrl-Z (exclude ESC=27)
                ch = chr(ord('a') + o - 1)
                if ch in ('j', 'm'):
                    return KeyEvent(key_type=KeyType.SPECIAL, value='enter', raw=key_str)
                return KeyEvent(key_type=KeyType.CTRL, value=ch, raw=key_str, is_ctrl=True)

        if key_str == '\x1b':
            return KeyEvent(key_type=KeyType.SPECIAL, value='escape', raw='\x1b')

        return KeyEvent(
            key_type=KeyType.REGULAR,
            value=key_str,
            raw=key_str,
            is_sequence=False
        )

    @staticmethod
    def _parse_mouse(key_str: str) -> Optional[KeyEvent]:
        """Recognize wheel events in an SGR mouse report; other buttons are ignored."""
        m = _SGR_MOUSE.match(key_str)
        if not m:
            return None
        button = int(m.group(1))
        value = _WHEEL_BUTTONS.get(button & ~0b11100)  # strip shift/meta/ctrl bits
        if value is None:
            return KeyEvent(key_type=KeyType.MOUSE, value='other', raw=key_str,
                            is_sequence=True, code=button)
        return KeyEvent(key_type=KeyType.MOUSE, value=value, raw=key_str,
                        is_sequence=True, code=button)
