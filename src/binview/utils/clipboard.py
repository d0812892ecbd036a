"""
System and terminal clipboard support.

The terminal channel uses the OSC 52 "set clipboard" sequence, wrapped in a
DCS pass-through envelope when running under tmux or GNU screen.
"""

import base64
import logging
import os
import sys
from typing import BinaryIO, Final, Mapping, Optional

import pyperclip

from ..core.errors import ClipboardError
from .hex_utils import HexFormat, bytes_to_hex, hex_to_bytes

logger = logging.getLogger(__name__)

ESC: Final[bytes] = b'\x1b'
BEL: Final[bytes] = b'\x07'
OSC52_PREFIX: Final[bytes] = ESC + b']52;c;'
DCS: Final[bytes] = ESC + b'P'
ST: Final[bytes] = ESC + b'\\'
TMUX_PASSTHROUGH: Final[bytes] = DCS + b'tmux;'


def is_tmux(env: Optional[Mapping[str, str]] = None) -> bool:
    """Check whether we run inside a tmux session."""

    env = os.environ if env is None else env
    return 'TMUX' in env


def is_screen(env: Optional[Mapping[str, str]] = None) -> bool:
    """Check whether we run inside a GNU screen session."""

    env = os.environ if env is None else env
    return 'STY' in env


def build_osc52_sequence(data: bytes) -> bytes:
    """Build ESC ] 52 ; c ; <base64> BEL; BEL is the more widely supported terminator."""

    return OSC52_PREFIX + base64.b64encode(data) + BEL


def wrap_for_tmux(sequence: bytes) -> bytes:
    """Wrap a sequence in tmux's DCS pass-through, doubling every ESC inside it."""

    return TMUX_PASSTHROUGH + sequence.replace(ESC, ESC + ESC) + ST


def wrap_for_screen(sequence: bytes) -> bytes:
    """Wrap a sequence in a plain DCS envelope for GNU screen."""

    return DCS + sequence + ST


def frame_for_terminal(data: bytes, env: Optional[Mapping[str, str]] = None) -> bytes:
    """
    Build the clipboard escape sequence for the current terminal.

    Args:
        data (bytes): Payload to place on the clipboard
        env (Mapping): Environment to inspect, defaults to os.environ

    Returns:
        bytes: OSC 52 sequence, wrapped for tmux or screen when detected
    """

    sequence = build_osc52_sequence(data)

    if is_tmux(env):
        return wrap_for_tmux(sequence)
    if is_screen(env):
        return wrap_for_screen(sequence)

    return sequence


def copy_to_terminal(data: bytes, stream: Optional[BinaryIO] = None,
                     env: Optional[Mapping[str, str]] = None) -> None:
    """Write the clipboard escape sequence to stdout and flush it immediately."""

    stream = stream if stream is not None else sys.stdout.buffer
    sequence = frame_for_terminal(data, env)

    try:
        stream.write(sequence)
        stream.flush()
    except OSError as e:
        raise ClipboardError(str(e), e) from e


def copy_text_to_terminal(text: str, stream: Optional[BinaryIO] = None) -> None:
    copy_to_terminal(text.encode('utf-8'), stream)


def copy_hex_to_terminal(data: bytes, fmt: HexFormat = HexFormat.SPACED,
                         stream: Optional[BinaryIO] = None) -> None:
    copy_to_terminal(bytes_to_hex(data, fmt).encode('ascii'), stream)


def copy_text(text: str) -> None:
    """Put text on the system clipboard."""

    try:
        pyperclip.copy(text)
    except pyperclip.PyperclipException as e:
        raise ClipboardError(str(e), e) from e


def paste_text() -> str:
    """Read text from the system clipboard."""

    try:
        return pyperclip.paste()
    except pyperclip.PyperclipException as e:
        raise ClipboardError(str(e), e) from e


def copy_hex(data: bytes, fmt: HexFormat = HexFormat.SPACED) -> None:
    copy_text(bytes_to_hex(data, fmt))


def paste_hex() -> bytes:
    """Read hex text from the system clipboard and parse it into bytes."""

    return hex_to_bytes(paste_text())


def _copy_to_all(text: str, stream: Optional[BinaryIO]) -> None:
    primary_error: Optional[ClipboardError] = None
    try:
        copy_text(text)
    except ClipboardError as e:
        primary_error = e

    try:
        copy_text_to_terminal(text, stream)
    except ClipboardError as e:
        logger.warning("Terminal clipboard copy failed: %s", e)

    if primary_error is not None:
        raise primary_error

    logger.info("Copied %d characters to the clipboard", len(text))


def copy_text_to_all(text: str, stream: Optional[BinaryIO] = None) -> None:
    """
    Copy text to the system clipboard and, best effort, the terminal clipboard.

    Only a system clipboard failure is raised; a terminal failure is logged.
    """

    _copy_to_all(text, stream)


def copy_hex_to_all(data: bytes, fmt: HexFormat = HexFormat.SPACED,
                    stream: Optional[BinaryIO] = None) -> None:
    """Copy bytes as hex text to the system and terminal clipboards."""

    _copy_to_all(bytes_to_hex(data, fmt), stream)
