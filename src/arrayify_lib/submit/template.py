# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

import re
from collections.abc import Iterable

from arrayify_lib.core.error import InvalidInputError, UnknownPlaceholderError
from arrayify_lib.core.logger import get_logger
from arrayify_lib.records.interface import JobRecord, RecordSet

logger = get_logger(__name__)

# `{{TEXT}}` is an escape producing a literal `{TEXT}`.
# Any other `{TEXT}` not preceded by `$` is a candidate placeholder.
BRACE_TOKEN = re.compile(r"\{\{(?P<escaped>[^{}]*)\}\}|(?<!\$)\{(?P<name>[^{}\n]*)\}")

# Words separated by single spaces, without quotes, commas or `$`.
FIELD_NAME = re.compile(r"[^\s{},$'\"]+(?: [^\s{},$'\"]+)*")


def is_field_name(text: str) -> bool:
    """
    Check whether the content of a brace token names a record field.

    Empty braces, brace expansions (`{a,b}`, `{1..5}`, `{a..z}`), purely numeric
    tokens (`{2}`) and shell or awk code (`{print $1}`) are not field names.
    Header names containing spaces or starting with a digit (`{sample name}`,
    `{1st}`) are.
    """
    return (
        FIELD_NAME.fullmatch(text) is not None
        and ".." not in text
        and re.search(r"[A-Za-z_]", text) is not None
    )


def _find_placeholders(template: str) -> tuple[str, ...]:
    names = (m["name"] for m in BRACE_TOKEN.finditer(template) if m["name"] is not None)
    # ordered and unique
    return tuple(dict.fromkeys(name for name in names if is_field_name(name)))


class CommandTemplate:
    """
    Command with `{NAME}` placeholders substituted by the fields of job records.

    Values are substituted verbatim, without any shell escaping.
    Write `{{TEXT}}` to get a literal `{TEXT}` that would otherwise be read
    as a placeholder, e.g. an awk block such as `{{print x}}`.
    """

    def __init__(self, template: str):
        """
        Initialize the template.

        Args:
            template (str): The command template.

        Raises:
            InvalidInputError: If the template is empty.
        """
        if not template or not template.strip():
            raise InvalidInputError("Command template is empty.")

        self._template = template
        self._placeholders = _find_placeholders(template)

    @property
    def template(self) -> str:
        """The raw command template."""
        return self._template

    @property
    def placeholders(self) -> tuple[str, ...]:
        """Names of all placeholders in the order of their first appearance."""
        return self._placeholders

    def validate(self, fields: Iterable[str]) -> None:
        """
        Check that every placeholder refers to one of the provided fields.

        Args:
            fields (Iterable[str]): Field names shared by all records.

        Raises:
            UnknownPlaceholderError: If some placeholders have no matching field.
        """
        fields = tuple(fields)
        if missing := [p for p in self._placeholders if p not in fields]:
            raise UnknownPlaceholderError(missing, fields)

        if unused := [f for f in fields if f not in self._placeholders]:
            logger.debug(f"Fields not used by the command template: {', '.join(unused)}.")

    def expand(self, record: JobRecord) -> str:
        """
        Substitute all placeholders with the values of a record.

        Args:
            record (JobRecord): The record providing the values.

        Returns:
            str: The expanded command.

        Raises:
            UnknownPlaceholderError: If the record lacks a referenced field.
        """
        if missing := [p for p in self._placeholders if p not in record]:
            raise UnknownPlaceholderError(missing, tuple(record))

        return BRACE_TOKEN.sub(lambda m: self._substitute(m, record), self._template)

    def expandAll(self, record_set: RecordSet) -> list[str]:
        """
        Expand the template for every record of a record set.

        The placeholders are validated against the fields of the set once,
        before any command is expanded.

        Args:
            record_set (RecordSet): The records to expand.

        Returns:
            list[str]: One command per record, in record order.

        Raises:
            UnknownPlaceholderError: If some placeholders have no matching field.
        """
        self.validate(record_set.fields)
        return [self.expand(record) for record in record_set.records]

    @staticmethod
    def _substitute(match: re.Match[str], record: JobRecord) -> str:
        if (escaped := match["escaped"]) is not None:
            return f"{{{escaped}}}"

        name = match["name"]
        return record[name] if is_field_name(name) else match[0]
