"""CLI implementation for fastopen."""

import json
import logging
import shutil
import sys
from typing import Optional

import typer

from . import ropen, wopen
from .core import config
from .core.model import NoContentError
from .io.http_sync import close_global_session

app = typer.Typer(add_completion=False, help="Concatenate files, URLs and command output, transparently (de)compressed.")

logger = logging.getLogger(__name__)


def _copy(sources: list[str], output: str, buffer_size: int) -> list[str]:
    """Copy the decoded bytes of every source into `output`; return error messages."""
    errors = []
    with wopen(output, buffer_size=buffer_size) as out:
        for src in sources:
            try:
                with ropen(src, buffer_size=buffer_size) as rdr:
                    shutil.copyfileobj(rdr, out, buffer_size)
            except NoContentError:
                logger.debug("%s is empty, skipping", src)
            except Exception as e:
                errors.append(f"{src}: {e}")
    return errors


def _info(sources: list[str]) -> list[str]:
    """Print one JSON line per source with its detected format."""
    errors = []
    for src in sources:
        try:
            with ropen(src) as rdr:
                obj = {"source": src, "success": True, "format": rdr.format.value, "empty": False}
        except NoContentError:
            obj = {"source": src, "success": True, "format": None, "empty": True}
        except Exception as e:
            errors.append(f"{src}: {e}")
            obj = {"source": src, "success": False, "error": str(e)}
        typer.echo(json.dumps(obj))
    return errors


@app.command()
def main(
    files: list[str] = typer.Argument(None, help="Files, URLs, '|command args' or '-' for stdin"),
    output: str = typer.Option("-", "-o", "--output", help="Write to PATH instead of stdout; .gz/.xz/.zst compress"),
    info: bool = typer.Option(False, "--info", help="Report the detected compression of each input as JSON lines"),
    buffer_size: Optional[str] = typer.Option(None, "--buffer-size", help="Buffer size, e.g. 64Ki or 1M"),
    verbose: bool = typer.Option(False, "-v", "--verbose", help="Log debug messages to stderr"),
):
    """Read one or many inputs and write their decoded contents to one output."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG, stream=sys.stderr)

    sources = list(files) if files else []
    if not sources:
        typer.echo("No input files given.", err=True)
        raise typer.Exit(code=1)

    try:
        size = config.parse_quantity(buffer_size) if buffer_size else config.get_buffer_size()
        if size <= 0:
            raise ValueError(f"must be positive, got {size}")
    except ValueError as e:
        typer.echo(f"Invalid --buffer-size: {e}", err=True)
        raise typer.Exit(code=2)

    try:
        if info:
            errors = _info(sources)
        else:
            errors = _copy(sources, output, size)
    finally:
        close_global_session()

    for msg in errors:
        typer.echo(msg, err=True)

    # exit code
    if errors:
        raise typer.Exit(code=1)


if __name__ == "__main__":
    app()
