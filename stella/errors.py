"""Exceptions raised by the catalog tools. Scripts turn these into exit code 1."""


class StellaError(Exception):
    """Base class for all fatal catalog-tool errors."""


class DownloadFailed(StellaError):
    """A single download attempt failed (bad status, too small, network)."""


class SourceExhausted(StellaError):
    """Every candidate download source failed."""

    def __init__(self, attempts: list[tuple[str, str]]):
        self.attempts = attempts
        super().__init__(f"All {len(attempts)} download sources failed")


class CorruptArtifact(StellaError):
    """The downloaded archive could not be decompressed."""


class MissingInputFile(StellaError):
    """An artifact expected from an earlier step does not exist."""


class TargetPatternNotFound(StellaError):
    """The splicer could not find the array literal to replace."""
