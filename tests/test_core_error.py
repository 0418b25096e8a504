# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

import pytest

from arrayify_lib.core.config import CFG
from arrayify_lib.core.error import (
    ArrayifyError,
    InvalidBatchSizeError,
    InvalidInputError,
    JobNotFoundError,
    SubmissionFailedError,
    UnknownPlaceholderError,
)


@pytest.mark.parametrize(
    "error_cls,kind,exit_code",
    [
        (ArrayifyError, "Error", CFG.exit_codes.default),
        (InvalidInputError, "InvalidInput", CFG.exit_codes.invalid_input),
        (UnknownPlaceholderError, "UnknownPlaceholder", CFG.exit_codes.unknown_placeholder),
        (InvalidBatchSizeError, "InvalidBatchSize", CFG.exit_codes.invalid_batch_size),
        (SubmissionFailedError, "SubmissionFailed", CFG.exit_codes.submission_failed),
        (JobNotFoundError, "JobNotFound", CFG.exit_codes.job_not_found),
    ],
)
def test_error_kinds_and_exit_codes(error_cls, kind, exit_code):
    assert issubclass(error_cls, ArrayifyError)
    assert error_cls.kind == kind
    assert error_cls.exit_code == exit_code


def test_exit_codes_are_distinct():
    codes = [
        CFG.exit_codes.default,
        CFG.exit_codes.invalid_input,
        CFG.exit_codes.unknown_placeholder,
        CFG.exit_codes.invalid_batch_size,
        CFG.exit_codes.submission_failed,
        CFG.exit_codes.job_not_found,
        CFG.exit_codes.unexpected_error,
    ]

    assert len(set(codes)) == len(codes)
    assert 0 not in codes


def test_unknown_placeholder_error_message():
    error = UnknownPlaceholderError(["sample", "lane"], ("ID", "R1"))

    assert error.names == ["sample", "lane"]
    assert str(error) == (
        "Command template references undefined placeholder(s): '{sample}', '{lane}'. "
        "Available fields: ID, R1."
    )


def test_unknown_placeholder_error_without_fields():
    assert "Available" not in str(UnknownPlaceholderError(["x"]))


def test_submission_failed_error_includes_output():
    error = SubmissionFailedError("Failed.", "out text\n", "err text\n")

    assert str(error) == "Failed.\nstdout: out text\nstderr: err text"
    assert error.stdout == "out text\n"


def test_submission_failed_error_skips_empty_output():
    assert str(SubmissionFailedError("Failed.", "", "  ")) == "Failed."


def test_job_not_found_error():
    error = JobNotFoundError("42")

    assert error.job_id == "42"
    assert str(error) == "Job '42' was not found by the batch system."
