# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

"""
Configuration system for arrayify.

This module defines dataclasses representing all configurable aspects of arrayify,
including environment variables, exit codes, batch planning, submission defaults,
record parsing rules, scheduler options, and presentation settings.

The `Config` class loads user configuration from a TOML file (if available)
and provides a globally accessible `CFG` instance.
"""

import os
import tomllib
from dataclasses import dataclass, field, fields, is_dataclass
from pathlib import Path
from typing import Any, Self


@dataclass
class EnvironmentVariables:
    """Environment variable names used by arrayify."""

    # Enables arrayify debug mode.
    debug_mode: str = "ARRAYIFY_DEBUG"
    # Name of the batch system to use.
    batch_system: str = "ARRAYIFY_BATCH_SYSTEM"
    # Path to the arrayify config file.
    config: str = "ARRAYIFY_CONFIG"
    # Array index of the current element on LSF.
    lsf_array_index: str = "LSB_JOBINDEX"
    # Array index of the current element on Slurm.
    slurm_array_index: str = "SLURM_ARRAY_TASK_ID"


@dataclass
class DateFormats:
    """Date and time format strings."""

    # Standard date format used by arrayify.
    standard: str = "%Y-%m-%d %H:%M:%S"
    # Date format embedded in the name of the commands file.
    commands_file: str = "%Y-%m-%d-%H-%M-%S"


@dataclass
class ExitCodes:
    """Exit codes used for various errors."""

    # Default error code for failures of arrayify commands.
    default: int = 1
    # Returned when the job source is missing, empty or malformed.
    invalid_input: int = 2
    # Returned when the command template references an undefined field.
    unknown_placeholder: int = 3
    # Returned when an explicit batch size is out of range.
    invalid_batch_size: int = 4
    # Returned when the batch system rejects or garbles a submission.
    submission_failed: int = 5
    # Returned when the batch system does not know the requested job.
    job_not_found: int = 6
    # Returned on an unexpected or unhandled error.
    unexpected_error: int = 99


@dataclass
class BatchSettings:
    """Settings for planning the number of concurrently running array elements."""

    # Percentage of the array allowed to run at once when no batch size is given.
    default_percent: int = 20


@dataclass
class SubmissionSettings:
    """Default values for job array submission."""

    # Prefix of the job array name.
    job_prefix: str = "arrayify"
    # Suffix appended to the prefix to form the job array name.
    array_suffix: str = "_job_array"
    # Directory for scheduler logs and the commands file.
    log_dir: str = "logs"
    # Number of threads requested per array element.
    threads: int = 1
    # Prefix of the commands file written into the log directory.
    commands_file_prefix: str = "arrayify-"
    # Suffix of the commands file written into the log directory.
    commands_file_suffix: str = ".log"


@dataclass
class RecordSettings:
    """Settings for reading job records."""

    # Skip CSV rows with a wrong number of columns instead of aborting.
    skip_malformed_rows: bool = True
    # Field names used for records derived from a directory of paired files.
    id_field: str = "ID"
    read1_field: str = "R1"
    read2_field: str = "R2"


@dataclass
class LSFOptions:
    """Options associated with IBM Spectrum LSF."""

    # Queue used when none is requested.
    default_queue: str = "normal"
    # Pattern for stdout files of array elements (%J = job id, %I = array index).
    stdout_pattern: str = "job_%J_%I.out"
    # Pattern for stderr files of array elements.
    stderr_pattern: str = "job_%J_%I.err"


@dataclass
class SlurmOptions:
    """Options associated with Slurm."""

    # Pattern for stdout files of array elements (%A = job id, %a = array index).
    stdout_pattern: str = "job_%A_%a.out"
    # Pattern for stderr files of array elements.
    stderr_pattern: str = "job_%A_%a.err"


@dataclass
class ExitReasons:
    """Human-readable explanations of exit codes of failed array elements."""

    reasons: dict[int, str] = field(
        default_factory=lambda: {
            2: "killed",
            130: "memory error",
            137: "killed (out of memory)",
            143: "timeout",
        }
    )
    # Explanation used for exit codes without a known reason.
    unknown: str = "unknown error"


@dataclass
class StatusPanelSettings:
    """Settings for the job array status panel."""

    # Maximal width of the status panel.
    max_width: int | None = None
    # Minimal width of the status panel.
    min_width: int | None = 60
    # Style of the border lines.
    border_style: str = "white"
    # Style of the title.
    title_style: str = "white bold"
    # Style used for keys in the panel.
    key_style: str = "default bold"
    # Style used for values in the panel.
    value_style: str = "white"
    # Style used for notes in the panel.
    notes_style: str = "grey50"
    # Maximal number of failed elements listed individually.
    max_failed_listed: int = 20


@dataclass
class StateColors:
    """Color scheme for JobState display."""

    # Style used for pending jobs.
    pending: str = "bright_magenta"
    # Style used for running jobs.
    running: str = "bright_blue"
    # Style used for finished jobs.
    done: str = "bright_green"
    # Style used for failed jobs.
    failed: str = "bright_red"
    # Style used for jobs in an unknown state.
    unknown: str = "grey70"


@dataclass
class Config:
    """Main configuration for arrayify."""

    env_vars: EnvironmentVariables = field(default_factory=EnvironmentVariables)
    date_formats: DateFormats = field(default_factory=DateFormats)
    exit_codes: ExitCodes = field(default_factory=ExitCodes)
    batch: BatchSettings = field(default_factory=BatchSettings)
    submission: SubmissionSettings = field(default_factory=SubmissionSettings)
    records: RecordSettings = field(default_factory=RecordSettings)
    lsf_options: LSFOptions = field(default_factory=LSFOptions)
    slurm_options: SlurmOptions = field(default_factory=SlurmOptions)
    exit_reasons: ExitReasons = field(default_factory=ExitReasons)
    status_panel: StatusPanelSettings = field(default_factory=StatusPanelSettings)
    state_colors: StateColors = field(default_factory=StateColors)

    # Name of the arrayify binary.
    binary_name: str = "arrayify"

    @classmethod
    def load(cls, config_path: Path | None = None) -> Self:
        """
        Load the configuration from a TOML file.

        Values missing from the file keep their defaults. Without a file,
        the default configuration is returned.

        Args:
            config_path (Path | None): Path to the config file.
                If None, the standard locations are searched.

        Returns:
            Config: The loaded configuration.

        Raises:
            ValueError: If the config file cannot be read or parsed.
        """
        path = config_path or cls._get_config_path()
        if path is None or not path.is_file():
            return cls()

        try:
            data = tomllib.loads(path.read_text(encoding="utf-8"))
            return _dict_to_dataclass(cls, data)
        except (OSError, UnicodeDecodeError, tomllib.TOMLDecodeError, TypeError) as e:
            raise ValueError(f"Could not read arrayify config '{path}': {e}.") from e

    @staticmethod
    def _get_config_path() -> Path | None:
        """
        Return the first existing config file, or None.

        Searched in this order: the file named by the config environment variable,
        `arrayify_config.toml` in the working directory, and `arrayify/config.toml`
        in the XDG config home.
        """
        candidates = []
        if explicit := os.environ.get(EnvironmentVariables.config):
            candidates.append(Path(explicit))

        xdg_home = os.environ.get("XDG_CONFIG_HOME") or Path.home() / ".config"
        candidates += [
            Path.cwd() / "arrayify_config.toml",
            Path(xdg_home) / "arrayify" / "config.toml",
        ]

        return next((path for path in candidates if path.is_file()), None)


def _dict_to_dataclass(cls, data: dict[str, Any]):
    """
    Build a (possibly nested) dataclass from a dictionary.

    Keys without a matching field are ignored. Non-dataclass types return the data unchanged.
    """
    if not is_dataclass(cls):
        return data

    values = {}
    for f in fields(cls):
        if f.name not in data:
            continue

        value = data[f.name]
        nested = is_dataclass(f.type) and isinstance(value, dict)
        values[f.name] = _dict_to_dataclass(f.type, value) if nested else value

    return cls(**values)


# Global configuration for arrayify.
CFG = Config.load()
