from __future__ import annotations

import logging
import subprocess
import sys
import threading
from typing import IO, Any, Callable, Iterable, Literal, Optional, Sequence

logger = logging.getLogger(__name__)


def _pump(
    stream: IO[str] | None,
    buffer: list[str] | None,
    writer: IO[str] | None,
    prefix: str = "",
) -> None:
    if stream is None:
        return
    for line in iter(stream.readline, ""):
        if buffer is not None:
            buffer.append(line)
        if writer is not None:
            writer.write(f"{prefix}{line}")
            writer.flush()
    stream.close()


def run_logged(
    cmd: Iterable[str],
    *,
    check: bool = True,
    echo: Literal["always", "on_error", "never"] = "always",
    **kwargs: Any,
) -> subprocess.CompletedProcess[str]:
    """
    Run a subprocess, streaming stdout/stderr live while still capturing them.
    If the process fails and echo="on_error", buffered output is replayed.
    """
    cmd_list: Sequence[str] = list(cmd)

    proc = subprocess.Popen(
        cmd_list,
        stdout=subprocess.PIPE,
        stderr=subprocess.PIPE,
        text=True,
        **kwargs,
    )

    stdout_buf: list[str] = []
    stderr_buf: list[str] = []
    live = echo == "always"

    threads = [
        threading.Thread(
            target=_pump,
            args=(proc.stdout, stdout_buf, sys.stdout if live else None),
            daemon=True,
        ),
        threading.Thread(
            target=_pump,
            args=(proc.stderr, stderr_buf, sys.stderr if live else None),
            daemon=True,
        ),
    ]
    for thread in threads:
        thread.start()

    returncode = proc.wait()
    for thread in threads:
        thread.join()

    if echo == "on_error" and returncode != 0:
        if stdout_buf:
            sys.stdout.writelines(stdout_buf)
            sys.stdout.flush()
        if stderr_buf:
            sys.stderr.writelines(stderr_buf)
            sys.stderr.flush()

    stdout_joined = "".join(stdout_buf)
    stderr_joined = "".join(stderr_buf)

    completed = subprocess.CompletedProcess(
        cmd_list,
        returncode,
        stdout=stdout_joined,
        stderr=stderr_joined,
    )

    if check and returncode != 0:
        raise subprocess.CalledProcessError(
            returncode, cmd_list, output=stdout_joined, stderr=stderr_joined
        )
    return completed


class BackgroundProcess:
    """
    A child process that runs while the caller carries on.

    Output is relayed line by line to the parent's streams, prefixed with
    ``label``. When the child exits, ``on_exit`` receives its return code.
    Waiting is optional.
    """

    def __init__(
        self,
        cmd: Iterable[str],
        *,
        label: str,
        on_exit: Optional[Callable[[int], None]] = None,
        **kwargs: Any,
    ) -> None:
        self.args: list[str] = list(cmd)
        self.label = label
        self._on_exit = on_exit
        self._returncode: Optional[int] = None
        self._done = threading.Event()

        logger.debug(f"Spawning {label}: {' '.join(self.args)}")
        self._proc = subprocess.Popen(
            self.args,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            text=True,
            **kwargs,
        )
        self._readers = [
            threading.Thread(
                target=_pump,
                args=(self._proc.stdout, None, sys.stdout, f"{label}: "),
                daemon=True,
            ),
            threading.Thread(
                target=_pump,
                args=(self._proc.stderr, None, sys.stderr, f"{label} error: "),
                daemon=True,
            ),
        ]
        for reader in self._readers:
            reader.start()

        self._watcher = threading.Thread(target=self._watch, name=f"{label}-watcher")
        self._watcher.start()

    @property
    def returncode(self) -> Optional[int]:
        return self._returncode

    def done(self) -> bool:
        return self._done.is_set()

    def wait(self, timeout: Optional[float] = None) -> Optional[int]:
        """Block until the child exits (or timeout). Returns its exit code."""
        self._done.wait(timeout)
        return self._returncode

    def _watch(self) -> None:
        returncode = self._proc.wait()
        for reader in self._readers:
            reader.join()
        self._returncode = returncode
        try:
            if self._on_exit is not None:
                self._on_exit(returncode)
        finally:
            self._done.set()
