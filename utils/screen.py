# utils/screen.py
import os
import subprocess

from services.input_service import Prompter

# Presentation hook run between menu actions. It has no effect on the cart.


class NullScreen:
    # Used by tests and non-interactive sessions.

    def pause(self) -> None:
        pass

    def clear(self) -> None:
        pass


class TerminalScreen(NullScreen):
    def __init__(self, prompter: Prompter):
        self.prompter = prompter

    def pause(self) -> None:
        self.prompter.pause()

    def clear(self) -> None:
        command = "cls" if os.name == "nt" else "clear"
        subprocess.run(command, shell=True, check=False)
