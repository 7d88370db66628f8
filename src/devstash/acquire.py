"""Input acquisition for DevStash.

Content comes from exactly one source, in this order:

1. An explicit file path
2. An editor session on a temporary file (compose mode)
3. Piped standard input
"""

import logging
import os
import shlex
import subprocess
import sys
import tempfile
from pathlib import Path
from typing import Optional, TextIO

from .errors import (
    ERR_EMPTY_INPUT,
    ERR_SNIPPET_IS_EMPTY,
    EditorError,
    EmptyInputError,
    InputReadError,
)

logger = logging.getLogger(__name__)

DEFAULT_EDITOR = "vim"
TEMP_FILE_PREFIX = "devstash-"
TEMP_FILE_SUFFIX = ".md"


def resolve_editor(editor: Optional[str] = None) -> list[str]:
    """Return the editor command as an argv list.

    Uses ``editor`` if given, then $EDITOR, then vim. The value is split
    shell-style so commands like ``code --wait`` work.
    """
    command = editor or os.environ.get("EDITOR") or DEFAULT_EDITOR
    argv = shlex.split(command)
    return argv or [DEFAULT_EDITOR]


def _decode(raw: bytes) -> str:
    # Invalid UTF-8 becomes U+FFFD rather than failing the capture
    return raw.decode("utf-8", errors="replace")


def read_file(file_path: Path) -> str:
    """Read content from an explicit file path.

    Raises:
        InputReadError: If the file is missing or unreadable
    """
    logger.debug(f"Reading input from file {file_path}")
    try:
        return _decode(file_path.read_bytes())
    except FileNotFoundError:
        raise InputReadError(f"File not found: {file_path}")
    except OSError as e:
        raise InputReadError(f"Error reading file {file_path}: {e}")


def compose_in_editor(editor: Optional[str] = None) -> str:
    """Open an editor on a fresh temp file and return what was saved.

    The temp file is removed on every exit path. A failure to remove it
    is logged, not raised.

    Raises:
        EditorError: If the editor cannot be started or exits non-zero
        InputReadError: If the temp file cannot be read back
    """
    fd, temp_name = tempfile.mkstemp(prefix=TEMP_FILE_PREFIX, suffix=TEMP_FILE_SUFFIX)
    os.close(fd)
    temp_path = Path(temp_name)

    try:
        argv = resolve_editor(editor) + [str(temp_path)]
        logger.debug(f"Launching editor: {argv}")
        try:
            subprocess.run(argv, check=True)
        except FileNotFoundError:
            raise EditorError(f"Error opening editor: '{argv[0]}' not found")
        except subprocess.CalledProcessError as e:
            raise EditorError(f"Error opening editor: {argv[0]} exited with status {e.returncode}")

        try:
            return _decode(temp_path.read_bytes())
        except OSError as e:
            raise InputReadError(f"Error reading snippet from temp file: {e}")
    finally:
        try:
            temp_path.unlink(missing_ok=True)
        except OSError as e:
            logger.warning(f"Could not remove temp file {temp_path}: {e}")


def read_stdin(stream: Optional[TextIO] = None) -> Optional[str]:
    """Read piped input until EOF.

    Returns None without reading when the stream is an interactive
    terminal, so the caller can print usage guidance instead of blocking.
    Text streams with an underlying binary buffer are read as bytes and
    decoded leniently.
    """
    stream = stream if stream is not None else sys.stdin
    if stream is None or stream.isatty():
        logger.debug("stdin is a terminal, nothing piped")
        return None

    logger.debug("Reading input from stdin")
    try:
        buffer = getattr(stream, "buffer", None)
        if buffer is not None:
            return _decode(buffer.read())
        return stream.read()
    except OSError as e:
        raise InputReadError(f"Error reading from stdin: {e}")


def acquire_content(
    file_path: Optional[Path] = None,
    compose: bool = False,
    stdin: Optional[TextIO] = None,
    editor: Optional[str] = None,
) -> Optional[str]:
    """Acquire snippet content from the highest-priority source.

    Args:
        file_path: Read this file if given
        compose: Otherwise open an editor if True
        stdin: Otherwise read this stream (default: sys.stdin)
        editor: Editor command override for compose mode

    Returns:
        The content as read, or None when stdin is a terminal

    Raises:
        InputError: If the source cannot be read or the content is blank
    """
    empty_message = ERR_EMPTY_INPUT
    if file_path is not None:
        content = read_file(Path(file_path))
    elif compose:
        content = compose_in_editor(editor)
        empty_message = ERR_SNIPPET_IS_EMPTY
    else:
        content = read_stdin(stdin)
        if content is None:
            return None

    if not content.strip():
        raise EmptyInputError(empty_message)

    return content
