"""
Errors raised while updating the Go toolchain, and the exit codes they map to
"""

EXIT_OK = 0
EXIT_NO_VERSIONS = 1
EXIT_BAD_OUTPUT_FILE = 2
EXIT_FAILURE = 3
EXIT_INTERRUPTED = 130


class UpdateError(Exception):
    """Base class for every failure that aborts an update run"""


class FetchError(UpdateError):
    """The version catalog could not be retrieved"""


class ParseError(UpdateError):
    """The version catalog did not have the expected shape"""


class InvalidSelection(UpdateError):
    """The operator picked a version that is not in the catalog"""


class DownloadError(UpdateError):
    """The release archive could not be transferred"""


class WriteError(UpdateError):
    """A local file could not be created, written or removed"""


class ConfigurationError(UpdateError):
    """A setting (strategy, platform, field name) is not usable"""


class ProcessExecutionError(UpdateError):
    """An external command (tar, mv, rm) failed"""

    def __init__(self, command, args, returncode=None, stderr=''):
        self.command = command
        self.args_list = list(args)
        self.returncode = returncode
        self.stderr = stderr
        cmdline = ' '.join([command] + self.args_list)
        if returncode is None:
            msg = f'failed to execute {command}: {stderr}'
        else:
            msg = f'failed to execute {command} ({cmdline}): exit status {returncode}'
            if stderr:
                msg += f': {stderr}'
        super().__init__(msg)
