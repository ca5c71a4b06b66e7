# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

import shutil
import subprocess
from abc import ABC
from pathlib import Path

from vh_lib.core.error import VHError
from vh_lib.core.logger import get_logger

logger = get_logger(__name__)


class BatchInterface(ABC):
    """
    Abstract base class for batch system integrations.

    vh only hands prepared job directories over to the scheduler. Concrete
    batch system classes provide the submit command; everything after
    submission is owned by the batch system.

    All functions should raise VHError when encountering an error.
    """

    @staticmethod
    def envName() -> str:
        """
        Return the name of the batch system environment.

        Returns:
            str: The batch system name.
        """
        raise NotImplementedError(
            "envName method is not implemented for this batch system implementation"
        )

    @classmethod
    def submitCommand(cls) -> str:
        """
        Return the command used to submit a job script.

        Returns:
            str: Name of the submit executable, e.g. 'qsub'.
        """
        raise NotImplementedError(
            "submitCommand method is not implemented for this batch system implementation"
        )

    @classmethod
    def isAvailable(cls) -> bool:
        """
        Determine whether the batch system is available on the current host.

        Returns:
            bool: True if the submit command can be found, otherwise False.
        """
        return shutil.which(cls.submitCommand()) is not None

    @classmethod
    def jobSubmit(cls, job_dir: Path, script: str) -> str:
        """
        Submit a job script located in a job directory.

        The submit command is executed inside the job directory with the name
        of the script as its only argument.

        Args:
            job_dir (Path): Directory of the job to submit.
            script (str): Name of the script inside the job directory.

        Returns:
            str: Output of the submit command, typically the job ID.

        Raises:
            VHError: If the job submission fails.
        """
        command = [cls.submitCommand(), script]
        logger.debug(f"Running '{' '.join(command)}' in '{job_dir}'.")

        try:
            result = subprocess.run(
                command,
                cwd=job_dir,
                text=True,
                check=False,
                capture_output=True,
                errors="replace",
            )
        except OSError as e:
            raise VHError(f"Failed to submit '{job_dir / script}': {e}.") from e

        if result.returncode != 0:
            raise VHError(
                f"Failed to submit '{job_dir / script}': {result.stderr.strip()}."
            )

        return result.stdout.strip()
