"""Reading module dependency edge lists into a graph.

An edge list has one ``<module> <dependency>`` pair per line, which is the
format ``go mod graph`` prints. The graph can be read from that command or
from a file holding its saved output.
"""

import logging
import shutil
import subprocess
import sys
import tempfile
from collections.abc import Iterable, Sequence
from pathlib import Path

from .graph import Graph

logger = logging.getLogger(__name__)

DEFAULT_COMMAND = ("go", "mod", "graph")


class SourceError(Exception):
    """Base class for failures while reading a dependency graph."""


class EdgeListParseError(SourceError):
    """A line of the edge list is not a ``<module> <dependency>`` pair."""

    def __init__(self, line_number: int, line: str):
        self.line_number = line_number
        self.line = line
        super().__init__(f"parsing line {line_number}: {line!r}")


class DependencySourceError(SourceError):
    """The command producing the edge list could not be run or failed."""


def parse_edge_list(lines: Iterable[str], graph: Graph[str] | None = None) -> Graph[str]:
    """Add every edge of an edge list to a graph.

    Each line is split at its first run of whitespace into module and
    dependency. Blank lines are skipped.

    Args:
        lines: Edge list lines, with or without trailing newlines
        graph: Graph to add edges to (default: a new empty graph)

    Returns:
        The graph holding the parsed edges

    Raises:
        EdgeListParseError: If a non-blank line has no separator
    """
    if graph is None:
        graph = Graph()

    for line_number, raw_line in enumerate(lines, start=1):
        line = raw_line.rstrip("\r\n")
        if not line.strip():
            continue

        parts = line.strip().split(None, 1)
        if len(parts) != 2:
            raise EdgeListParseError(line_number, line)

        module, dependency = parts
        graph.add(module, dependency)

    return graph


def read_dependency_graph(
    command: Sequence[str] = DEFAULT_COMMAND,
    cwd: str | Path | None = None,
) -> Graph[str]:
    """Run a command that prints an edge list and parse its output.

    Edges are parsed from stdout as the command prints them. Stderr is
    spooled to a temporary file and only read when the command fails.

    Args:
        command: Executable and arguments (default: ``go mod graph``)
        cwd: Working directory for the command

    Returns:
        Graph of the printed dependency edges

    Raises:
        DependencySourceError: If the executable cannot be found or started,
            prints output that is not UTF-8, or exits with a non-zero status
        EdgeListParseError: If the output contains a malformed line
    """
    if not command:
        raise DependencySourceError("empty dependency command")

    executable = shutil.which(command[0])
    if executable is None:
        raise DependencySourceError(f"looking for {command[0]}: executable file not found in PATH")

    display = " ".join(command)
    logger.debug(f"Running {display}")

    with tempfile.TemporaryFile() as stderr_file:
        try:
            process = subprocess.Popen(
                [executable, *command[1:]],
                stdout=subprocess.PIPE,
                stderr=stderr_file,
                cwd=cwd,
                text=True,
                encoding="utf-8",
            )
        except OSError as e:
            raise DependencySourceError(f"starting {display}: {e}") from e

        with process:
            try:
                graph = parse_edge_list(process.stdout)
            except UnicodeDecodeError as e:
                process.kill()
                raise DependencySourceError(f"decoding output of {display}: {e}") from e
            except EdgeListParseError:
                process.kill()
                raise
            returncode = process.wait()

        if returncode != 0:
            stderr_file.seek(0)
            stderr = stderr_file.read().decode("utf-8", errors="replace").strip()
            message = f"{display} exited with status {returncode}"
            if stderr:
                message += f": {stderr}"
            raise DependencySourceError(message)

    return graph


def read_edge_list_file(path: str | Path) -> Graph[str]:
    """Parse an edge list from a file, or from stdin when path is ``-``.

    Raises:
        DependencySourceError: If the file cannot be read or is not UTF-8
        EdgeListParseError: If the file contains a malformed line
    """
    try:
        if str(path) == "-":
            return parse_edge_list(sys.stdin)
        with open(path, encoding="utf-8") as f:
            return parse_edge_list(f)
    except UnicodeDecodeError as e:
        raise DependencySourceError(f"decoding {path}: {e}") from e
    except OSError as e:
        raise DependencySourceError(f"reading {path}: {e}") from e
