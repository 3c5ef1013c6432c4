"""Line-by-line streaming of subprocess output.

``stream_command`` runs a command and yields its output as discrete events:
any number of ``OutputLine`` followed by exactly one ``CommandCompleted`` or
``CommandFailed``.  stdout and stderr are read concurrently by two tasks in
a task group that share one queue; the end-of-stream marker is queued only
once the group has exited and the process has been reaped, so no line can
arrive after the terminal event.
"""

import asyncio
import contextlib
import logging
from collections.abc import AsyncIterator
from dataclasses import dataclass

logger = logging.getLogger(__name__)

# Terraform provider download progress can produce very long lines.
_LINE_LIMIT = 1024 * 1024


@dataclass(frozen=True)
class OutputLine:
    line: str
    is_err: bool = False


@dataclass(frozen=True)
class CommandCompleted:
    command: str
    exit_code: int
    output: str


@dataclass(frozen=True)
class CommandFailed:
    """A command that could not be started or exited non-zero."""

    command: str
    error: str
    output: str


CommandEvent = OutputLine | CommandCompleted | CommandFailed


async def stream_command(
    command: str, args: list[str], cwd: str | None = None
) -> AsyncIterator[CommandEvent]:
    """Run *command* with *args* in *cwd* and yield its output events.

    Closing the iterator before the terminal event kills the process.
    """
    cmdline = " ".join([command, *args])
    logger.info("Running %s (cwd=%s)", cmdline, cwd or ".")
    try:
        process = await asyncio.create_subprocess_exec(
            command,
            *args,
            cwd=cwd or None,
            stdin=asyncio.subprocess.DEVNULL,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
            limit=_LINE_LIMIT,
        )
    except OSError as exc:
        logger.error("Failed to start %s: %s", cmdline, exc)
        yield CommandFailed(command=cmdline, error=str(exc), output="Failed to start command")
        return

    queue: asyncio.Queue[OutputLine | None] = asyncio.Queue()

    async def produce() -> None:
        try:
            async with asyncio.TaskGroup() as tg:
                tg.create_task(_pump(process.stdout, False, queue))
                tg.create_task(_pump(process.stderr, True, queue))
            await process.wait()
        finally:
            queue.put_nowait(None)

    producer = asyncio.create_task(produce())
    lines: list[str] = []
    drained = False
    try:
        while True:
            event = await queue.get()
            if event is None:
                drained = True
                break
            lines.append(event.line)
            yield event
    finally:
        if not drained:
            with contextlib.suppress(ProcessLookupError):
                process.kill()
            producer.cancel()
            await asyncio.wait([producer])
            await process.wait()

    output = "\n".join(lines)
    try:
        await producer
    except Exception as exc:
        error = _read_error(exc)
        logger.error("Reading output of %s failed: %s", cmdline, error)
        if process.returncode is None:
            with contextlib.suppress(ProcessLookupError):
                process.kill()
        await process.wait()
        yield CommandFailed(command=cmdline, error=error, output=output)
        return

    exit_code = process.returncode
    if exit_code != 0:
        logger.info("%s exited with status %s", cmdline, exit_code)
        yield CommandFailed(command=cmdline, error=f"exit status {exit_code}", output=output)
        return
    logger.info("%s completed", cmdline)
    yield CommandCompleted(command=cmdline, exit_code=0, output=output)


async def _pump(
    stream: asyncio.StreamReader | None,
    is_err: bool,
    queue: "asyncio.Queue[OutputLine | None]",
) -> None:
    if stream is None:
        return
    async for raw in stream:
        line = raw.decode(errors="replace").rstrip("\r\n")
        await queue.put(OutputLine(line=line, is_err=is_err))


def _read_error(exc: Exception) -> str:
    """Describe the first failure raised by the output readers."""
    while isinstance(exc, ExceptionGroup) and exc.exceptions:
        exc = exc.exceptions[0]
    if isinstance(exc, ValueError):
        # StreamReader refuses lines that do not fit in its buffer.
        return f"output line longer than {_LINE_LIMIT} bytes"
    return str(exc)
