# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

"""
Configuration system for vh.

This module defines dataclasses representing all configurable aspects of vh,
including VASP file names, INCAR tags and their flag values, environment
variables, run defaults, presentation settings and scheduler commands.

The `Config` class loads user configuration from a TOML file (if available)
and provides a globally accessible `CFG` instance.
"""

import os
import tomllib
from dataclasses import dataclass, field, fields, is_dataclass
from pathlib import Path
from typing import Any, Self


@dataclass
class FileNames:
    """Names of the files vh reads, copies and writes."""

    # Initial structure.
    poscar: str = "POSCAR"
    # Final (relaxed) structure written by VASP.
    contcar: str = "CONTCAR"
    # Main VASP configuration file.
    incar: str = "INCAR"
    # K-point specification.
    kpoints: str = "KPOINTS"
    # Pseudopotentials with per-species valence.
    potcar: str = "POTCAR"
    # Script passed to the scheduler's submit command.
    job_script: str = "job.vasp6"
    # Charge density of a previous run.
    chgcar: str = "CHGCAR"
    # Wavefunctions of a previous run.
    wavecar: str = "WAVECAR"
    # Output log of a previous run.
    outcar: str = "OUTCAR"
    # Run log written to the working directory.
    log_file: str = "helper.log"

    @property
    def required_inputs(self) -> list[str]:
        """Inputs (besides the structure) that every job needs."""
        return [self.incar, self.kpoints, self.potcar, self.job_script]


@dataclass
class IncarTags:
    """INCAR tags inspected or edited by vh and their meaningful values."""

    # Total number of electrons.
    nelect: str = "NELECT"
    # Charge density initialization.
    icharg: str = "ICHARG"
    # Wavefunction initialization.
    istart: str = "ISTART"
    # Spin polarization.
    ispin: str = "ISPIN"
    # ICHARG value requesting the density to be read from CHGCAR.
    icharg_read: int = 1
    # ICHARG value used when no usable CHGCAR is available.
    icharg_fallback: int = 2
    # ISTART values requesting a restart from WAVECAR.
    istart_restart: list[int] = field(default_factory=lambda: [1, 2, 3])
    # ISPIN value for spin-polarized calculations.
    ispin_polarized: int = 2
    # Number of decimals used when writing NELECT.
    nelect_decimals: int = 6


@dataclass
class EnvironmentVariables:
    """Environment variable names used by vh."""

    # Enables vh debug mode.
    debug_mode: str = "VH_DEBUG"
    # Name of the batch system to submit to.
    batch_system: str = "VH_BATCH_SYSTEM"
    # Path to a vh configuration file.
    config: str = "VH_CONFIG"


@dataclass
class RunDefaults:
    """Default values of run settings."""

    # Charges created from neutral references.
    charges: list[int] = field(default_factory=lambda: [-2, -1, 1, 2])
    # Submission strictness level.
    safety: int = 1
    # Charge suffix identifying neutral reference directories.
    neutral_charge: int = 0


@dataclass
class SummaryPresenterSettings:
    """Settings for the end-of-run summary panel."""

    # Maximal width of the summary panel.
    max_width: int | None = None
    # Minimal width of the summary panel.
    min_width: int | None = 60
    # Style of the border lines.
    border_style: str = "white"
    # Style of the title.
    title_style: str = "white bold"
    # Style used for section headers.
    headers_style: str = "default bold"
    # Style used for regular values.
    main_style: str = "white"
    # Style used for notes.
    notes_style: str = "grey50"
    # Style used for submitted jobs.
    submitted_style: str = "bright_green"
    # Style used for unsafe jobs.
    unsafe_style: str = "bright_red"
    # Style used for jobs prepared but not submitted.
    prepared_style: str = "bright_yellow"


@dataclass
class BatchCommands:
    """Submit commands of the supported batch systems."""

    # PBS Pro.
    pbs: str = "qsub"
    # Slurm.
    slurm: str = "sbatch"


@dataclass
class DateFormats:
    """Date and time format strings."""

    # Standard date format used by vh.
    standard: str = "%Y-%m-%d %H:%M:%S"


@dataclass
class ExitCodes:
    """Exit codes used for various errors."""

    # Default error code for failures of vh commands.
    default: int = 1
    # Returned on an unexpected or unhandled error.
    unexpected_error: int = 99


@dataclass
class Config:
    """Main configuration for vh."""

    files: FileNames = field(default_factory=FileNames)
    tags: IncarTags = field(default_factory=IncarTags)
    env_vars: EnvironmentVariables = field(default_factory=EnvironmentVariables)
    defaults: RunDefaults = field(default_factory=RunDefaults)
    summary_presenter: SummaryPresenterSettings = field(
        default_factory=SummaryPresenterSettings
    )
    batch_commands: BatchCommands = field(default_factory=BatchCommands)
    date_formats: DateFormats = field(default_factory=DateFormats)
    exit_codes: ExitCodes = field(default_factory=ExitCodes)

    @classmethod
    def load(cls, config_path: Path | None = None) -> Self:
        """
        Load configuration from TOML file or use defaults.

        Args:
            config_path: Explicit path to config file. If None, searches standard locations.

        Returns:
            Config instance with loaded or default values.
        """
        if config_path is None:
            config_path = Config._get_config_path()

        try:
            if config_path and config_path.exists():
                with config_path.open("rb") as f:
                    config_data = tomllib.load(f)
                return _dict_to_dataclass(cls, config_data)
        except Exception as e:
            raise ValueError(f"Could not read vh config '{config_path}': {e}.")

        # no config found - use defaults
        return cls()

    @staticmethod
    def _get_config_path() -> Path | None:
        """
        Search for config file in standard locations (XDG compliant).
        Returns the first existing config file, or None.
        """
        config_locations: list[Path | None] = [
            # 1. Explicit environment variable (highest priority)
            Path(env_path)
            if (env_path := os.getenv(EnvironmentVariables().config))
            else None,
            # 2. Current working directory
            Path.cwd() / "vh_config.toml",
            # 3. XDG config home
            Path(os.getenv("XDG_CONFIG_HOME", Path.home() / ".config"))
            / "vh"
            / "config.toml",
        ]

        for path in config_locations:
            if path and path.is_file():
                return path

        return None


def _dict_to_dataclass(cls, data: dict[str, Any]):
    """
    Recursively convert a dictionary to a dataclass instance.
    Handles nested dataclasses properly.
    """
    if not is_dataclass(cls):
        return data

    field_values = {}
    for field_info in fields(cls):
        field_name = field_info.name
        field_type = field_info.type

        if field_name in data:
            value = data[field_name]
            if is_dataclass(field_type) and isinstance(value, dict):
                field_values[field_name] = _dict_to_dataclass(field_type, value)
            else:
                field_values[field_name] = value

    return cls(**field_values)


# Global configuration for vh.
CFG = Config.load()
