# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from arrayify_lib.batch.slurm import Slurm
from arrayify_lib.batch.slurm.common import (
    expand_array_name,
    parse_job_id,
    parse_sacct_output,
)
from arrayify_lib.core.error import (
    ArrayifyError,
    JobNotFoundError,
    SubmissionFailedError,
)
from arrayify_lib.properties.array import JobArraySpec
from arrayify_lib.properties.resources import Resources
from arrayify_lib.properties.states import JobState


@pytest.fixture
def spec():
    return JobArraySpec(
        name="rnaseq_job_array",
        commands=tuple(f"echo {i}" for i in range(1, 6)),
        limit=1,
        resources=Resources(),
        log_dir=Path("/scratch/logs"),
        commands_file=Path("/scratch/logs/arrayify-2025-01-01-00-00-00.log"),
    )


def _completed(returncode=0, stdout="", stderr=""):
    return MagicMock(returncode=returncode, stdout=stdout, stderr=stderr)


def test_slurm_env_name():
    assert Slurm.envName() == "Slurm"


@pytest.mark.parametrize("path,expected", [("/usr/bin/sbatch", True), (None, False)])
def test_slurm_is_available(path, expected):
    with patch(
        "arrayify_lib.batch.slurm.slurm.shutil.which", return_value=path
    ) as mock_which:
        assert Slurm.isAvailable() is expected

    mock_which.assert_called_once_with("sbatch")


def test_slurm_translate_submit_defaults(spec):
    command, script = Slurm.translateSubmit(spec)

    assert command == [
        "sbatch",
        "--job-name=rnaseq_job_array",
        "--array=1-5%1",
        "--cpus-per-task=1",
        "--output=/scratch/logs/job_%A_%a.out",
        "--error=/scratch/logs/job_%A_%a.err",
        "--parsable",
    ]
    assert '"${SLURM_ARRAY_TASK_ID}p"' in script
    assert "/scratch/logs/arrayify-2025-01-01-00-00-00.log" in script


def test_slurm_translate_submit_resources(spec):
    spec = JobArraySpec(
        spec.name,
        spec.commands,
        3,
        Resources(threads=4, memory=2000, queue="gpu"),
        spec.log_dir,
        spec.commands_file,
    )

    command, _ = Slurm.translateSubmit(spec)

    assert "--array=1-5%3" in command
    assert "--cpus-per-task=4" in command
    assert "--partition=gpu" in command
    assert "--mem=2000" in command


def test_slurm_job_submit_success(spec):
    with patch(
        "arrayify_lib.batch.slurm.slurm.subprocess.run",
        return_value=_completed(stdout="778899\n"),
    ) as mock_run:
        result = Slurm.jobSubmit(spec)

    assert result.job_id == "778899"
    assert mock_run.call_args.kwargs["input"].startswith("#!/bin/bash")


def test_slurm_job_submit_failure(spec):
    with (
        patch(
            "arrayify_lib.batch.slurm.slurm.subprocess.run",
            return_value=_completed(1, "", "sbatch: error: invalid partition specified"),
        ),
        pytest.raises(SubmissionFailedError, match="invalid partition"),
    ):
        Slurm.jobSubmit(spec)


def test_slurm_job_submit_missing_identifier(spec):
    with (
        patch(
            "arrayify_lib.batch.slurm.slurm.subprocess.run",
            return_value=_completed(stdout="Submitted something\n"),
        ),
        pytest.raises(SubmissionFailedError, match="job identifier"),
    ):
        Slurm.jobSubmit(spec)


@pytest.mark.parametrize(
    "output,expected",
    [
        ("12345\n", "12345"),
        ("12345;cluster\n", "12345"),
        ("sbatch: warning: x\n678\n", "678"),
        ("Submitted batch job 12\n", None),
        ("", None),
    ],
)
def test_parse_job_id(output, expected):
    assert parse_job_id(output) == expected


def test_parse_sacct_output():
    text = (
        "100_1|COMPLETED|0:0\n"
        "100_2|FAILED|1:0\n"
        "100_3|CANCELLED by 1000|0:15\n"
        "100_4|OUT_OF_MEMORY|137:0\n"
        "100_[5]|PENDING|0:0\n"
        "100_6|RUNNING|0:0\n"
        "100_7|WEIRD|0:0\n"
        "incomplete line\n"
    )

    elements = parse_sacct_output(text)

    assert [e.state for e in elements] == [
        JobState.DONE,
        JobState.FAILED,
        JobState.FAILED,
        JobState.FAILED,
        JobState.PENDING,
        JobState.RUNNING,
        JobState.UNKNOWN,
    ]
    assert [e.exit_code for e in elements] == [0, 1, 0, 137, 0, 0, 0]
    assert elements[2].raw_state == "CANCELLED by 1000"
    assert elements[4].name == "100_5"


@pytest.mark.parametrize(
    "name, expected",
    [
        ("123_4", ["123_4"]),
        ("123", ["123"]),
        ("123_[7]", ["123_7"]),
        ("123_[2-4]", ["123_2", "123_3", "123_4"]),
        ("123_[2-6%2]", ["123_2", "123_3", "123_4", "123_5", "123_6"]),
        ("123_[1,3,5-7]", ["123_1", "123_3", "123_5", "123_6", "123_7"]),
        ("123_[1-7:3]", ["123_1", "123_4", "123_7"]),
        ("123_[5-2]", ["123_[5-2]"]),
        ("123_[a-b]", ["123_[a-b]"]),
    ],
)
def test_expand_array_name(name, expected):
    assert expand_array_name(name) == expected


def test_parse_sacct_output_expands_collapsed_pending_elements():
    text = "123_1|RUNNING|0:0\n123_[2-10%2]|PENDING|0:0\n"

    elements = parse_sacct_output(text)

    assert len(elements) == 10
    assert [e.name for e in elements[:3]] == ["123_1", "123_2", "123_3"]
    assert elements[-1].name == "123_10"
    assert all(e.state == JobState.PENDING for e in elements[1:])
    assert all(e.raw_state == "PENDING" for e in elements[1:])


def test_slurm_get_array_status_counts_collapsed_pending_elements():
    stdout = "123_1|RUNNING|0:0\n123_[2-10%2]|PENDING|0:0\n123_[11,12]|PENDING|0:0\n"

    with patch(
        "arrayify_lib.batch.slurm.slurm.subprocess.run",
        return_value=_completed(stdout=stdout),
    ):
        status = Slurm.getArrayStatus("123")

    counts = status.counts()
    assert counts[JobState.RUNNING] == 1
    assert counts[JobState.PENDING] == 11
    assert status.state == JobState.RUNNING


def test_slurm_get_array_status():
    stdout = "100_1|COMPLETED|0:0\n100_2|COMPLETED|0:0\n"

    with patch(
        "arrayify_lib.batch.slurm.slurm.subprocess.run",
        return_value=_completed(stdout=stdout),
    ) as mock_run:
        status = Slurm.getArrayStatus("100")

    argv = mock_run.call_args.args[0]
    assert argv[:3] == ["sacct", "-j", "100"]
    assert "--format=JobID,State,ExitCode" in argv
    assert status.state == JobState.DONE
    assert len(status.elements) == 2


def test_slurm_get_array_status_invalid_id():
    with (
        patch(
            "arrayify_lib.batch.slurm.slurm.subprocess.run",
            return_value=_completed(1, "", "sacct: error: Invalid job id specified"),
        ),
        pytest.raises(JobNotFoundError),
    ):
        Slurm.getArrayStatus("abc")


def test_slurm_get_array_status_empty_output():
    with (
        patch(
            "arrayify_lib.batch.slurm.slurm.subprocess.run",
            return_value=_completed(0, "", ""),
        ),
        pytest.raises(JobNotFoundError),
    ):
        Slurm.getArrayStatus("424242")


def test_slurm_get_array_status_other_failure():
    with (
        patch(
            "arrayify_lib.batch.slurm.slurm.subprocess.run",
            return_value=_completed(1, "", "slurm_persist_conn_open: failed"),
        ),
        pytest.raises(ArrayifyError, match="Could not retrieve information"),
    ):
        Slurm.getArrayStatus("100")
