"""
System-near helper functions. Only import things from the standard library here; this
way these helpers can be used also for utility scripts.
"""

import codecs
import contextlib
import os
import shlex
import signal
import subprocess
from typing import IO, Generator

CHUNK_SIZE = 1024


class ProcessGenerator:
    """
    Class that wraps a process return value and a generator that yields the combined
    output of a process chunk by chunk.

    Attributes
    ----------
    returncode : int
        Process return code.
    generator : Generator
        Generator that yields the output of the process chunk by chunk.

    Yields
    ------
    str
        Output of the process.
    """

    returncode: int
    """Process return code. -1 until the generator has been exhausted or closed."""

    generator: Generator
    """Generator that yields the output of the process chunk by chunk."""

    def __init__(self):
        self.returncode = -1

    def __iter__(self):
        self.value = yield from self.generator

    def close(self):
        self.generator.close()


def split_command(command: str) -> list[str]:
    """
    Split a command line into argv tokens using POSIX shell rules, so that quoted
    arguments with spaces stay together.

    Raises
    ------
    ValueError
        If the quoting is unbalanced.
    """
    return shlex.split(command)


def subprocess_combined(
    cmd,
    shell: bool = False,
    encoding: str = "utf-8",
    chunk_size: int = CHUNK_SIZE,
    timeout: int = 10,
    **kwargs,
) -> ProcessGenerator:
    """
    Wrapper around subprocess.Popen that merges stderr into stdout and returns a
    generator that yields the combined output as soon as it is available.

    Parameters
    ----------
    cmd :
        Passed directly to subprocess.Popen; see its documentation for details.
    shell : bool, optional
        Run cmd through the shell, by default False.
    encoding : str, optional
        Encoding to use when decoding the output, by default "utf-8". Undecodable bytes
        are replaced.
    chunk_size : int, optional
        Maximum number of bytes to read per chunk.
    timeout : int, optional
        Timeout to use when waiting for the child process to exit after the generator
        was closed early, by default 10 seconds.

    Returns
    -------
    ProcessGenerator
        Generator that yields the output of the child process. After the generator is
        exhausted, the returncode attribute of the generator will be set to the exit
        code of the child process.

    Raises
    ------
    OSError
        Raised immediately if the process can't be spawned, e.g. FileNotFoundError if
        the executable doesn't exist.
    """

    generator = ProcessGenerator()

    # Spawned here rather than in the iterator so that spawn errors surface right away
    p = subprocess.Popen(
        cmd, stdout=subprocess.PIPE, stderr=subprocess.STDOUT, shell=shell, **kwargs
    )

    def subprocess_iterator():
        assert p.stdout is not None
        decoder = codecs.getincrementaldecoder(encoding)(errors="replace")
        exhausted = False
        try:
            while chunk := p.stdout.read1(chunk_size):
                if text := decoder.decode(chunk):
                    yield text
            if text := decoder.decode(b"", final=True):
                yield text
            exhausted = True
        finally:
            p.stdout.close()
            if not exhausted and p.poll() is None:
                p.send_signal(signal.SIGINT)
                try:
                    p.wait(timeout)
                except subprocess.TimeoutExpired:
                    p.terminate()
                    try:
                        p.wait(timeout)
                    except subprocess.TimeoutExpired:
                        p.kill()
                        raise
            p.wait()
            generator.returncode = p.returncode

    generator.generator = subprocess_iterator()
    return generator


class ExitCode(int):
    """
    An int with a customised __bool__ method that considers 0 to be truthy. This is
    useful for working with subprocess return codes.
    """

    def __bool__(self):
        return self == 0


def call(cmd: str, encoding: str = "utf-8", **kwargs) -> ExitCode:
    """
    Convenience wrapper around subprocess_combined; the command to be executed is given
    as a string that will be split. Output will be printed as it arrives.

    Returns
    -------
    ExitCode
        The exit code from the subprocess. ExitCode is a subclass of int that can be
        used as a boolean; subprocess success (0) is considered truthy.

    Raises
    ------
    See split_command and subprocess_combined.
    """
    proc = subprocess_combined(split_command(cmd), encoding=encoding, **kwargs)
    with contextlib.closing(proc):
        for chunk in proc:
            print(chunk, end="", flush=True)
    return ExitCode(proc.returncode)


@contextlib.contextmanager
def unbuffered_output(stream: IO[str]):
    """
    Put a text stream in write-through mode for the duration of the block. The previous
    mode is restored on exit, also when the block raises. Streams that can't be
    reconfigured are left alone.
    """
    previous = getattr(stream, "write_through", None)
    reconfigure = getattr(stream, "reconfigure", None)
    can_reconfigure = previous is not None and reconfigure is not None

    if can_reconfigure:
        reconfigure(write_through=True)
    try:
        yield
    finally:
        if can_reconfigure:
            reconfigure(write_through=previous)


@contextlib.contextmanager
def change_dir(dir: str | os.PathLike | None):
    old_dir = os.getcwd()
    try:
        if dir is not None:
            os.chdir(dir)
        yield
    finally:
        os.chdir(old_dir)
