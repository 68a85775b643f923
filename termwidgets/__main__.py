"""termwidgets CLI entry point.

Allows running demos via `python -m termwidgets <demo>` and provides the
console script defined in `pyproject.toml`.
"""

from __future__ import annotations

import logging
import sys
from .version import get_version_string

USAGE = "usage: termwidgets [--version] [--keytest] [--log-file PATH] <demo>"


def _escape_bytes(s: str) -> str:
    """Return a printable representation of raw key string."""
    return s.encode('unicode_escape').decode('ascii')


def run_keyboard_test() -> None:
    """Print parsed key and mouse events until ESC is pressed."""
    import termios
    from .terminal import TerminalInterface
    from .keyboard import KeyboardHandler, KeyEvent, KeyType

    print("Keyboard test mode: press keys or scroll to see parsed events.")
    print("Quit with ESC.")

    term = TerminalInterface()
    term.setup()

    old_settings = None
    try:
        old_settings = termios.tcgetattr(sys.stdin)
        new_settings = list(old_settings)
        new_settings[0] &= ~(termios.IXON | termios.IXOFF)
        new_settings[3] &= ~(termios.ISIG | termios.IEXTEN)
        termios.tcsetattr(sys.stdin, termios.TCSANOW, new_settings)
    except (termios.error, AttributeError, OSError) as e:
        # Keyboard test should keep running even if termios tweaks fail
        logging.getLogger(__name__).debug(f"Leaving terminal flags unchanged: {e}")

    kb = KeyboardHandler(term)

    try:
        while True:
            ev: KeyEvent | None = kb.get_key_event(timeout=None)
            if not ev:
                continue
            if ev.key_type == KeyType.SPECIAL and ev.value == 'escape':
                print("Exiting keyboard test.\r")
                break
            raw = _escape_bytes(ev.raw)
            parts = [f"type={ev.key_type.value}", f"value={ev.value}", f"raw='{raw}'"]
            flags = []
            if ev.is_alt:
                flags.append('alt')
            if ev.is_ctrl:
                flags.append('ctrl')
            if ev.is_shift:
                flags.append('shift')
            if ev.is_sequence:
                flags.append('seq')
            if flags:
                parts.append(f"flags={'+'.join(flags)}")
            if ev.code is not None:
                parts.append(f"code={ev.code}")
            print(' '.join(parts) + '\r')
    finally:
        if old_settings is not None:
            try:
                termios.tcsetattr(sys.stdin, termios.TCSANOW, old_settings)
            except (termios.error, OSError):
                # Best-effort restore of terminal settings
                pass
        term.cleanup()


def parse_args(args: list[str]) -> dict:
    """Small hand parser: flags first, then one demo name.

    Raises:
        SystemExit: On unknown flags or a missing/unknown demo.
    """
    from .demos import DEMOS

    options = {'version': False, 'keytest': False, 'log_file': None, 'demo': None}
    args = list(args)
    while args:
        arg = args.pop(0)
        if arg in ("--version", "-V"):
            options['version'] = True
        elif arg in ('--keytest', '--keyboard-test'):
            options['keytest'] = True
        elif arg == '--log-file':
            if not args:
                raise SystemExit(f"--log-file needs a path\n{USAGE}")
            options['log_file'] = args.pop(0)
        elif arg.startswith('-'):
            raise SystemExit(f"unknown option {arg}\n{USAGE}")
        elif options['demo'] is None:
            options['demo'] = arg
        else:
            raise SystemExit(f"unexpected argument {arg}\n{USAGE}")

    if options['version'] or options['keytest']:
        return options
    if options['demo'] is None:
        raise SystemExit(f"{USAGE}\ndemos: {', '.join(DEMOS)}")
    if options['demo'] not in DEMOS:
        raise SystemExit(f"unknown demo {options['demo']!r}; choose one of: {', '.join(DEMOS)}")
    return options


def main() -> None:
    options = parse_args(sys.argv[1:])
    if options['version']:
        print(get_version_string())
        return
    if options['log_file']:
        # The screen belongs to the widgets, so logs only ever go to a file
        logging.basicConfig(filename=options['log_file'], level=logging.DEBUG,
                            format="%(asctime)s %(name)s %(levelname)s %(message)s")
    if options['keytest']:
        run_keyboard_test()
        return

    # Lazy import to avoid importing UI deps for --version
    from .app import run_widget
    from .config import get_settings
    from .demos import DEMOS

    controller = DEMOS[options['demo']](get_settings())
    result = run_widget(controller, x=5, y=5)
    if controller.cancelled:
        print("Cancelled.")
    else:
        print(f"Result: {result!r}")


if __name__ == "__main__":  # pragma: no cover
    main()
