"""|command sources backed by a subprocess stdout pipe."""

import logging
import subprocess

from .base import CommandStartError, RawSource

logger = logging.getLogger(__name__)


def open_process_source(command: str) -> RawSource:
    """Spawn `command` and read its standard output.

    Arguments are split on whitespace only; quoting is not supported.
    Closing the source closes the pipe but does not wait for the child.
    """
    args = command.split()
    if not args:
        raise CommandStartError(f"empty command: |{command}")
    try:
        proc = subprocess.Popen(args, stdout=subprocess.PIPE)
    except OSError as e:
        raise CommandStartError(f"could not start |{command}: {e}") from e
    logger.debug("started %s (pid %d)", args[0], proc.pid)

    def _close():
        proc.stdout.close()
        proc.poll()  # reap the child if it already exited

    return RawSource(proc.stdout, name=f"|{command}", must_close=True, closer=_close)
