"""Pipeline-level failures.

Row and record defects never raise; they are logged and skipped. These
exceptions are for conditions where a whole unit of work has nothing usable.
"""


class PipelineError(Exception):
    """Base class for pipeline-level failures."""


class NoRecordsError(PipelineError):
    """No fixtures or results were found for a team."""

    def __init__(self, team_name: str):
        super().__init__(f"No fixtures or results found for {team_name}")
        self.team_name = team_name


class RecordFileError(PipelineError):
    """An intermediate record file could not be decoded."""


class TeamsFileError(PipelineError):
    """The teams file is missing or unusable."""


class ConfigurationError(PipelineError):
    """Required configuration is missing or invalid."""
