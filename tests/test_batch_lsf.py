# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from arrayify_lib.batch.lsf import LSF
from arrayify_lib.batch.lsf.common import parse_bjobs_output, parse_job_id
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
        name="arrayify_job_array",
        commands=("echo s1 a.fq b.fq", "echo s2 c.fq d.fq"),
        limit=1,
        resources=Resources(),
        log_dir=Path("/work/logs"),
        commands_file=Path("/work/logs/arrayify-2025-01-01-00-00-00.log"),
    )


def _completed(returncode=0, stdout="", stderr=""):
    return MagicMock(returncode=returncode, stdout=stdout, stderr=stderr)


def test_lsf_env_name():
    assert LSF.envName() == "LSF"
    assert str(LSF) == "LSF"


@pytest.mark.parametrize("path,expected", [("/usr/bin/bsub", True), (None, False)])
def test_lsf_is_available(path, expected):
    with patch("arrayify_lib.batch.lsf.lsf.shutil.which", return_value=path) as mock_which:
        assert LSF.isAvailable() is expected

    mock_which.assert_called_once_with("bsub")


def test_lsf_translate_submit_defaults(spec):
    command, script = LSF.translateSubmit(spec)

    assert command == [
        "bsub",
        "-J",
        "arrayify_job_array[1-2]%1",
        "-q",
        "normal",
        "-n",
        "1",
        "-o",
        "/work/logs/job_%J_%I.out",
        "-e",
        "/work/logs/job_%J_%I.err",
    ]
    assert script == (
        "#!/bin/bash\n"
        "\n"
        'COMMAND=$(sed -n "${LSB_JOBINDEX}p" /work/logs/arrayify-2025-01-01-00-00-00.log)\n'
        'eval "$COMMAND"\n'
    )


def test_lsf_translate_submit_resources(spec):
    spec = JobArraySpec(
        spec.name,
        spec.commands,
        2,
        Resources(threads=8, memory=4000, queue="long"),
        spec.log_dir,
        spec.commands_file,
    )

    command, _ = LSF.translateSubmit(spec)

    assert command[command.index("-J") + 1] == "arrayify_job_array[1-2]%2"
    assert command[command.index("-q") + 1] == "long"
    assert command[command.index("-n") + 1] == "8"
    assert command[command.index("-M") + 1] == "4000"
    assert command[command.index("-R") + 1] == "select[mem>4000] rusage[mem=4000]"


def test_lsf_translate_submit_quotes_commands_file(spec):
    spec = JobArraySpec(
        spec.name,
        spec.commands,
        spec.limit,
        spec.resources,
        Path("/my logs"),
        Path("/my logs/arrayify-x.log"),
    )

    _, script = LSF.translateSubmit(spec)

    assert "'/my logs/arrayify-x.log'" in script


def test_lsf_job_submit_success(spec):
    output = "Job <98765> is submitted to queue <normal>.\n"

    with patch(
        "arrayify_lib.batch.lsf.lsf.subprocess.run", return_value=_completed(stdout=output)
    ) as mock_run:
        result = LSF.jobSubmit(spec)

    assert result.job_id == "98765"
    assert result.stdout == output

    command, script = LSF.translateSubmit(spec)
    mock_run.assert_called_once()
    assert mock_run.call_args.args[0] == command
    assert mock_run.call_args.kwargs["input"] == script


def test_lsf_job_submit_nonzero_exit(spec):
    with (
        patch(
            "arrayify_lib.batch.lsf.lsf.subprocess.run",
            return_value=_completed(255, "", "Bad resource requirement syntax."),
        ),
        pytest.raises(SubmissionFailedError) as exc_info,
    ):
        LSF.jobSubmit(spec)

    assert "exit code 255" in str(exc_info.value)
    assert "Bad resource requirement syntax." in str(exc_info.value)
    assert exc_info.value.stderr == "Bad resource requirement syntax."


def test_lsf_job_submit_missing_identifier(spec):
    with (
        patch(
            "arrayify_lib.batch.lsf.lsf.subprocess.run",
            return_value=_completed(stdout="Something unexpected happened."),
        ),
        pytest.raises(SubmissionFailedError, match="job identifier"),
    ):
        LSF.jobSubmit(spec)


def test_lsf_job_submit_command_missing(spec):
    with (
        patch(
            "arrayify_lib.batch.lsf.lsf.subprocess.run",
            side_effect=FileNotFoundError("bsub"),
        ),
        pytest.raises(SubmissionFailedError, match="Could not run 'bsub'"),
    ):
        LSF.jobSubmit(spec)


@pytest.mark.parametrize(
    "output,expected",
    [
        ("Job <123> is submitted to queue <normal>.", "123"),
        ("Warning: something\nJob <42> is submitted to default queue <q>.\n", "42"),
        ("Job submitted", None),
        ("", None),
    ],
)
def test_parse_job_id(output, expected):
    assert parse_job_id(output) == expected


def test_parse_bjobs_output():
    text = (
        "arrayify_job_array[1] DONE -\n"
        "arrayify_job_array[2] EXIT 137\n"
        "arrayify_job_array[3] RUN -\n"
        "arrayify_job_array[4] PEND -\n"
        "my array[5] ZOMBI 1\n"
        "\n"
        "garbage\n"
    )

    elements = parse_bjobs_output(text)

    assert [e.name for e in elements] == [
        "arrayify_job_array[1]",
        "arrayify_job_array[2]",
        "arrayify_job_array[3]",
        "arrayify_job_array[4]",
        "my array[5]",
    ]
    assert [e.state for e in elements] == [
        JobState.DONE,
        JobState.FAILED,
        JobState.RUNNING,
        JobState.PENDING,
        JobState.UNKNOWN,
    ]
    assert [e.exit_code for e in elements] == [None, 137, None, None, 1]
    assert elements[1].raw_state == "EXIT"


def test_lsf_get_array_status():
    stdout = "a[1] DONE -\na[2] EXIT 130\n"

    with patch(
        "arrayify_lib.batch.lsf.lsf.subprocess.run",
        return_value=_completed(stdout=stdout),
    ) as mock_run:
        status = LSF.getArrayStatus("555")

    assert mock_run.call_args.args[0] == [
        "bjobs",
        "-noheader",
        "-o",
        "job_name stat exit_code",
        "555",
    ]
    assert status.job_id == "555"
    assert status.raw == stdout
    assert status.state == JobState.FAILED
    assert status.failed()[0].reason == "memory error"


@pytest.mark.parametrize(
    "stdout,stderr",
    [
        ("", "Job <555> is not found\n"),
        ("Job <555> is not found\n", ""),
        ("", "555: Illegal job ID.\n"),
    ],
)
def test_lsf_get_array_status_not_found(stdout, stderr):
    with (
        patch(
            "arrayify_lib.batch.lsf.lsf.subprocess.run",
            return_value=_completed(255, stdout, stderr),
        ),
        pytest.raises(JobNotFoundError, match="555"),
    ):
        LSF.getArrayStatus("555")


def test_lsf_get_array_status_other_failure():
    with (
        patch(
            "arrayify_lib.batch.lsf.lsf.subprocess.run",
            return_value=_completed(255, "", "LSF is down. Please wait ..."),
        ),
        pytest.raises(ArrayifyError, match="Could not retrieve information"),
    ):
        LSF.getArrayStatus("555")


def test_lsf_get_array_status_command_missing():
    with (
        patch(
            "arrayify_lib.batch.lsf.lsf.subprocess.run",
            side_effect=FileNotFoundError("bjobs"),
        ),
        pytest.raises(ArrayifyError, match="Could not run 'bjobs'"),
    ):
        LSF.getArrayStatus("555")
