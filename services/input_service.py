# services/input_service.py
"""
input_service.py

Validated, line-based reading of user input for the terminal controller.

Every reader:
- writes its prompt (and any error message) to the output stream
- consumes exactly one line per attempt
- re-prompts until the line is acceptable, without limit

Malformed input never reaches the caller. The only exception that escapes
is InputClosedError, raised when the input stream is exhausted.
"""

from __future__ import annotations

import logging
import math
import re
import sys
from typing import TextIO

from config import FIELD_SEPARATOR

logger = logging.getLogger("cartbill.input")

YES_ANSWERS = {"1", "y", "yes"}
NO_ANSWERS = {"0", "n", "no"}

# Plain ASCII base-10 numbers only: no digit separators, no trailing blanks.
INT_PATTERN = re.compile(r"[ \t]*[+-]?[0-9]+")
FLOAT_PATTERN = re.compile(r"[ \t]*[+-]?([0-9]+\.?[0-9]*|\.[0-9]+)([eE][+-]?[0-9]+)?")


class InputClosedError(EOFError):
    """The input stream ended while a value was still expected."""


class Prompter:
    def __init__(self, stdin: TextIO | None = None, stdout: TextIO | None = None):
        self.stdin = stdin if stdin is not None else sys.stdin
        self.stdout = stdout if stdout is not None else sys.stdout

    def write(self, text: str = "", end: str = "\n") -> None:
        self.stdout.write(text + end)
        self.stdout.flush()

    def _read_line(self, prompt: str) -> str:
        if prompt:
            self.write(prompt, end="")
        line = self.stdin.readline()
        if line == "":
            raise InputClosedError("Input stream closed.")
        # only the line terminator is stripped, other whitespace is kept
        return line.rstrip("\r\n")

    def read_int(self, prompt: str, positive: bool = True) -> int:
        # positive=False is the menu mode: any integer is accepted
        # and a blank line re-prompts silently.
        while True:
            text = self._read_line(prompt)
            if text == "" and not positive:
                continue
            if not INT_PATTERN.fullmatch(text):
                self.write("Invalid input. Please enter a number.")
                continue
            value = int(text)
            if positive and value <= 0:
                self.write("Please enter a positive number.")
                continue
            return value

    def read_positive_float(self, prompt: str) -> float:
        while True:
            text = self._read_line(prompt)
            if not FLOAT_PATTERN.fullmatch(text):
                self.write("Invalid input. Please enter a number.")
                continue
            value = float(text)
            if math.isinf(value):
                self.write("Invalid input. Please enter a number.")
                continue
            if value <= 0.0:
                self.write("Please enter a positive number.")
                continue
            return value

    def read_string(self, prompt: str, max_len: int) -> str:
        """
        Read a non-empty string of at most max_len - 1 characters.
        Longer input is truncated silently. The field separator is refused
        because it would break the cart file format.
        """
        message = prompt
        while True:
            text = self._read_line(message)
            if text == "":
                message = f"Input cannot be empty. {prompt}"
                continue
            if FIELD_SEPARATOR in text:
                message = f"Input cannot contain '{FIELD_SEPARATOR}'. {prompt}"
                continue
            if len(text) > max_len - 1:
                logger.info(f"input truncated to {max_len - 1} characters")
                text = text[:max_len - 1]
            return text

    def confirm(self, prompt: str) -> bool:
        while True:
            answer = self._read_line(prompt).strip().lower()
            if answer in YES_ANSWERS:
                return True
            if answer in NO_ANSWERS:
                return False
            self.write("Please answer 1 (yes) or 0 (no).")

    def pause(self, prompt: str = "\nPress Enter to continue...") -> None:
        self._read_line(prompt)
