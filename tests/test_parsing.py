from __future__ import annotations

from decimal import Decimal

import pytest

from pydelivery.exceptions import InvalidInputError
from pydelivery.parsing import EXPECTED_FORMAT, is_quit_command, validate_line


@pytest.mark.parametrize(
    ("line", "postal_code", "weight"),
    [
        ("0 00000", "00000", Decimal("0")),
        ("0.000 12345", "12345", Decimal("0")),
        (".5 12345", "12345", Decimal("0.5")),
        ("3 00001", "00001", Decimal("3")),
        ("5.123 54321", "54321", Decimal("5.123")),
        ("5. 54321", "54321", Decimal("5")),
    ],
)
def test_valid_lines_are_parsed(line: str, postal_code: str, weight: Decimal) -> None:
    record = validate_line(line)
    assert record.postal_code == postal_code
    assert record.weight == weight


@pytest.mark.parametrize(
    "line",
    [
        "abc 12345",
        "1.2345 12345",
        "1.5 1234",
        "1.5 123456",
        "",
        "1.5  12345",
        "-1 12345",
        "1,5 12345",
        "1.5 12345\n",
        " 12345",
        ". 12345",
        "quit",
    ],
)
def test_invalid_lines_are_rejected(line: str) -> None:
    with pytest.raises(InvalidInputError) as excinfo:
        validate_line(line)
    assert excinfo.value.line == line
    assert excinfo.value.expected_format == EXPECTED_FORMAT


def test_rejection_message_describes_expected_format() -> None:
    with pytest.raises(InvalidInputError) as excinfo:
        validate_line("abc 12345")
    message = str(excinfo.value)
    assert message.startswith("Wrong input. Please use this format:")
    assert EXPECTED_FORMAT in message


def test_non_ascii_digits_are_rejected() -> None:
    # Arabic-Indic digits satisfy \d without the ASCII flag.
    with pytest.raises(InvalidInputError):
        validate_line("1 ١٢٣٤٥")


def test_postal_code_keeps_leading_zeros() -> None:
    assert validate_line("1 00042").postal_code == "00042"


@pytest.mark.parametrize("line", ["quit", "QUIT", "Quit", "qUiT"])
def test_quit_command_is_case_insensitive(line: str) -> None:
    assert is_quit_command(line)


@pytest.mark.parametrize("line", ["quit ", " quit", "exit", "", "quitquit"])
def test_quit_command_requires_exact_match(line: str) -> None:
    assert not is_quit_command(line)
