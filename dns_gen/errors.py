class DnsGenError(Exception):
    """
    base class for every error raised by dns-gen
    """


class ConfigError(DnsGenError):
    """
    startup validation failed, the process should exit with status 1
    """


class ResolutionError(DnsGenError):
    def __init__(self, hostname: str, cause: BaseException | str) -> None:
        self.hostname = hostname
        self.cause = cause
        super().__init__(f"error resolving {hostname}: {cause}")


class TemporaryResolutionError(ResolutionError):
    """
    the resolver reported a transient condition, retry on the next poll
    """


class RenderError(DnsGenError):
    def __init__(self, template: str, cause: BaseException) -> None:
        self.template = template
        self.cause = cause
        super().__init__(f"failed to render template [{template}]: {cause}")


class OutputWriteError(DnsGenError):
    # stage is one of: create, write, stat, chmod, chown, read, rename
    def __init__(self, stage: str, cause: BaseException) -> None:
        self.stage = stage
        self.cause = cause
        super().__init__(f"error during {stage} of output file: {cause}")


class CommandError(DnsGenError):
    def __init__(self, command: str, returncode: int | None, output: bytes) -> None:
        self.command = command
        self.returncode = returncode
        self.output = output
        super().__init__(f"command [{command}] exited with status {returncode}")
