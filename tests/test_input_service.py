import io

import pytest

from services.input_service import InputClosedError, Prompter


def prompter_for(text: str) -> tuple[Prompter, io.StringIO]:
    out = io.StringIO()
    return Prompter(io.StringIO(text), out), out


def test_read_int_reprompts_until_positive() -> None:
    prompter, out = prompter_for("abc\n-3\n0\n12x\n5\n")
    assert prompter.read_int("Qty: ") == 5

    output = out.getvalue()
    assert output.count("Qty: ") == 5
    assert output.count("Invalid input. Please enter a number.") == 2
    assert output.count("Please enter a positive number.") == 2


def test_read_int_menu_mode_accepts_any_integer() -> None:
    prompter, out = prompter_for("\n\n-2\n")
    assert prompter.read_int("> ", positive=False) == -2
    assert "Invalid input" not in out.getvalue()


def test_read_positive_float() -> None:
    prompter, out = prompter_for("cheap\n0\n-1.5\nnan\ninf\n2.50\n")
    assert prompter.read_positive_float("Price: ") == 2.5
    assert out.getvalue().count("Please enter a positive number.") == 2
    assert out.getvalue().count("Invalid input. Please enter a number.") == 3


def test_read_string_rejects_empty_and_separator() -> None:
    prompter, out = prompter_for("\na|b\nPen\n")
    assert prompter.read_string("Name: ", 50) == "Pen"
    assert "Input cannot be empty. Name: " in out.getvalue()
    assert "Input cannot contain '|'. Name: " in out.getvalue()


def test_read_string_keeps_inner_whitespace() -> None:
    prompter, _ = prompter_for("  Blue pen \n")
    assert prompter.read_string("Name: ", 50) == "  Blue pen "


def test_read_string_truncates_to_buffer() -> None:
    prompter, _ = prompter_for("ABCDEFGHIJKLMNOP\nnext\n")
    assert prompter.read_string("Code: ", 10) == "ABCDEFGHI"
    # the rest of the long line is not carried into the next read
    assert prompter.read_string("Code: ", 10) == "next"


@pytest.mark.parametrize("answer, expected", [
    ("1", True), ("y", True), ("YES", True), ("0", False), ("n", False), ("No", False),
])
def test_confirm(answer: str, expected: bool) -> None:
    prompter, _ = prompter_for(answer + "\n")
    assert prompter.confirm("Sure? ") is expected


def test_confirm_reprompts_on_other_answers() -> None:
    prompter, out = prompter_for("maybe\n2\ny\n")
    assert prompter.confirm("Sure? ") is True
    assert out.getvalue().count("Sure? ") == 3


def test_end_of_input_raises() -> None:
    prompter, _ = prompter_for("abc\n")
    with pytest.raises(InputClosedError):
        prompter.read_int("Qty: ")


def test_pause_consumes_one_line() -> None:
    prompter, _ = prompter_for("\n7\n")
    prompter.pause()
    assert prompter.read_int("> ", positive=False) == 7


@pytest.mark.parametrize("text", ["1_0", "5 ", "٣", "0x10", "3.0"])
def test_read_int_accepts_plain_digits_only(text: str) -> None:
    prompter, out = prompter_for(f"{text}\n7\n")
    assert prompter.read_int("Qty: ") == 7
    assert "Invalid input. Please enter a number." in out.getvalue()


@pytest.mark.parametrize("text", ["2_5", "2.5 ", "1e999", "0x1p3", "+"])
def test_read_positive_float_accepts_plain_decimals_only(text: str) -> None:
    prompter, out = prompter_for(f"{text}\n1.25\n")
    assert prompter.read_positive_float("Price: ") == 1.25
    assert "Invalid input. Please enter a number." in out.getvalue()


@pytest.mark.parametrize("text, expected", [(" 5", 5.0), ("+2.", 2.0), (".5", 0.5), ("1e2", 100.0)])
def test_read_positive_float_decimal_forms(text: str, expected: float) -> None:
    prompter, _ = prompter_for(f"{text}\n")
    assert prompter.read_positive_float("Price: ") == expected
