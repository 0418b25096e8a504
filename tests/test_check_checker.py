# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

from unittest.mock import MagicMock

import pytest

from arrayify_lib.check.checker import Checker
from arrayify_lib.core.error import InvalidInputError, JobNotFoundError
from arrayify_lib.properties.states import JobState
from arrayify_lib.properties.status import ElementStatus, JobStatus


def test_checker_strips_job_id():
    batch_system = MagicMock()

    checker = Checker(batch_system, "  12345\n")

    assert checker._job_id == "12345"
    assert checker._batch_system is batch_system


@pytest.mark.parametrize("job_id", ["", "   ", None])
def test_checker_empty_job_id(job_id):
    batch_system = MagicMock()

    with pytest.raises(InvalidInputError, match="must not be empty"):
        Checker(batch_system, job_id)

    batch_system.getArrayStatus.assert_not_called()


def test_checker_check():
    status = JobStatus(
        "12345", [ElementStatus("a[1]", JobState.RUNNING, "RUN")], "a[1] RUN -"
    )
    batch_system = MagicMock()
    batch_system.getArrayStatus.return_value = status

    assert Checker(batch_system, "12345").check() is status
    batch_system.getArrayStatus.assert_called_once_with("12345")


def test_checker_check_propagates_not_found():
    batch_system = MagicMock()
    batch_system.getArrayStatus.side_effect = JobNotFoundError("999")

    with pytest.raises(JobNotFoundError):
        Checker(batch_system, "999").check()
