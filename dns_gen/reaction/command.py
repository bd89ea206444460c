import asyncio
import time

from ..errors import CommandError
from ..logger import logger

SHELL = "/bin/sh"


async def run_command(command: str, debug: bool = False) -> bytes:
    """
    run command through the shell and wait for it to finish
    :return: combined stdout and stderr
    :raises CommandError: if the command exits with a non-zero status
    :raises OSError: if the shell could not be started
    """
    start = time.monotonic()
    if debug:
        logger.debug(f"running command [{command}]...")

    process = await asyncio.create_subprocess_exec(
        SHELL,
        "-c",
        command,
        stdout=asyncio.subprocess.PIPE,
        stderr=asyncio.subprocess.STDOUT,
    )
    output, _ = await process.communicate()

    logger.info(f"ran command [{command}] in {time.monotonic() - start:.3f}s.")
    if process.returncode != 0:
        logger.error(
            f"command [{command}] failed with output: {output.decode(errors='replace')}"
        )
        raise CommandError(command, process.returncode, output)
    if debug:
        logger.debug(f"output: {output.decode(errors='replace')}")
    return output
