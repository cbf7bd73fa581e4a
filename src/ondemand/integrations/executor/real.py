"""Real command executor using asyncio subprocesses."""

import asyncio
from collections.abc import AsyncIterator, Sequence
from pathlib import Path

from ondemand.errors import SpawnError
from ondemand.integrations.executor.abc import Executor, format_command
from ondemand.models.process import OutputLine, ProcessExit, StreamName

# Sentinel marking the end of one output stream on the shared queue
_STREAM_DONE = object()

# Bytes requested per pipe read; lines longer than this are reassembled
READ_CHUNK_SIZE = 64 * 1024


class RealExecutor(Executor):
    """Production implementation using asyncio.create_subprocess_exec."""

    async def execute_streaming(
        self,
        command: Sequence[str],
        cwd: Path | None = None,
    ) -> AsyncIterator[OutputLine | ProcessExit]:
        """Spawn the command and yield lines from both pipes as they arrive.

        Implementation details:
        - stdout and stderr are drained concurrently by two reader tasks
          feeding one queue, so neither pipe can fill up and stall the child
        - Pipes are read in fixed-size chunks and split on newlines, so
          arbitrarily long lines are delivered whole
        - Lines are decoded as UTF-8 with replacement and stripped of line
          endings
        - An exception in a reader task is raised to the consumer
        - If the consumer stops early or is cancelled the child is killed
        """
        try:
            process = await asyncio.create_subprocess_exec(
                *[str(arg) for arg in command],
                cwd=cwd,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except FileNotFoundError as e:
            raise SpawnError(format_command(command), f"command not found ({e})") from e
        except PermissionError as e:
            raise SpawnError(format_command(command), f"permission denied ({e})") from e
        except OSError as e:
            raise SpawnError(format_command(command), str(e)) from e

        queue: asyncio.Queue[OutputLine | object] = asyncio.Queue()

        async def emit(raw: bytes, name: StreamName) -> None:
            text = raw.decode("utf-8", errors="replace").rstrip("\r")
            await queue.put(OutputLine(stream=name, text=text))

        async def pump(stream: asyncio.StreamReader | None, name: StreamName) -> None:
            try:
                if stream is None:
                    return
                pending = b""
                while True:
                    chunk = await stream.read(READ_CHUNK_SIZE)
                    if not chunk:
                        break
                    *lines, pending = (pending + chunk).split(b"\n")
                    for raw in lines:
                        await emit(raw, name)
                if pending:
                    await emit(pending, name)
            finally:
                await queue.put(_STREAM_DONE)

        readers = [
            asyncio.create_task(pump(process.stdout, "stdout")),
            asyncio.create_task(pump(process.stderr, "stderr")),
        ]

        try:
            open_streams = len(readers)
            while open_streams > 0:
                item = await queue.get()
                if item is _STREAM_DONE:
                    open_streams -= 1
                    continue
                assert isinstance(item, OutputLine)
                yield item

            # Surfaces a reader failure instead of reporting truncated output
            await asyncio.gather(*readers)
            exit_code = await process.wait()
            yield ProcessExit(exit_code=exit_code)
        finally:
            if process.returncode is None:
                process.kill()
                await process.wait()
            for reader in readers:
                reader.cancel()
