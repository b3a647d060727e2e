"""Local stand-in for the ProGuard CLI used by backend integration tests.

Echoes every argument on stdout, alternating LF, CR LF and CR line endings,
then reports a warning on stderr without a trailing newline.
"""

from __future__ import annotations

import os
import sys

_LINE_ENDINGS = (b"\n", b"\r\n", b"\r")


def main(argv: list[str] | None = None) -> int:
    """Echo arguments and exit with ``PROGUARD_RUNNER_ECHO_EXIT_CODE`` (default 0)."""

    arguments = sys.argv[1:] if argv is None else argv
    stdout = sys.stdout.buffer
    stdout.write(b"ProGuard, version echo\n")
    for index, argument in enumerate(arguments):
        stdout.write(argument.encode("utf-8") + _LINE_ENDINGS[index % len(_LINE_ENDINGS)])
        stdout.flush()
    sys.stderr.buffer.write(f"Warning: {len(arguments)} arguments".encode())
    sys.stderr.buffer.flush()
    return int(os.getenv("PROGUARD_RUNNER_ECHO_EXIT_CODE", "0"))


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
