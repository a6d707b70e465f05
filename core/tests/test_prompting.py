"""Tests for the console prompter."""

import os
import unittest

from core.prompting import ConsolePrompter


class _Script:
    def __init__(self, *answers):
        self.answers = list(answers)
        self.prompts = []
        self.printed = []

    def input(self, prompt):
        self.prompts.append(prompt)
        if not self.answers:
            raise EOFError
        return self.answers.pop(0)

    def output(self, text):
        self.printed.append(text)

    def prompter(self):
        return ConsolePrompter(input_fn=self.input, output_fn=self.output)


class TestAskChoice(unittest.TestCase):
    OPTIONS = ["ProjectMapping", "FullCodeExtract"]

    def test_menu_and_selection(self):
        script = _Script("2")
        choice = script.prompter().ask_choice("Select a Task", "Choose.", self.OPTIONS, "ProjectMapping")

        self.assertEqual(choice, "FullCodeExtract")
        self.assertIn(" 1. ProjectMapping", script.printed)
        self.assertIn(" 2. FullCodeExtract", script.printed)
        self.assertEqual(script.prompts, ["Enter number [default: ProjectMapping]: "])

    def test_empty_input_returns_default(self):
        script = _Script("")
        self.assertEqual(script.prompter().ask_choice("t", "d", self.OPTIONS, "FullCodeExtract"), "FullCodeExtract")

    def test_invalid_input_returns_default(self):
        for answer in ("abc", "0", "3", "-1"):
            script = _Script(answer)
            choice = script.prompter().ask_choice("t", "d", self.OPTIONS, "ProjectMapping")
            self.assertEqual(choice, "ProjectMapping", answer)
            self.assertIn("Invalid input; using default.", script.printed)

    def test_eof_returns_default(self):
        script = _Script()
        self.assertEqual(script.prompter().ask_choice("t", "d", self.OPTIONS, "ProjectMapping"), "ProjectMapping")


class TestAskPath(unittest.TestCase):
    def test_default_made_absolute(self):
        script = _Script("")
        self.assertEqual(script.prompter().ask_path("Path", "relative/dir"), os.path.abspath("relative/dir"))
        self.assertEqual(script.prompts, ["Path [default: relative/dir]: "])

    def test_answer_trimmed(self):
        script = _Script("  /tmp/x  ")
        self.assertEqual(script.prompter().ask_path("Path", "/default"), os.path.abspath("/tmp/x"))


class TestAskYesNo(unittest.TestCase):
    def test_answers(self):
        for answer, expected in [("y", True), ("YES", True), ("true", True), ("n", False), ("No", False), ("false", False)]:
            self.assertEqual(_Script(answer).prompter().ask_yes_no("Q?", default_yes=not expected), expected, answer)

    def test_defaults(self):
        self.assertTrue(_Script("").prompter().ask_yes_no("Q?", default_yes=True))
        self.assertFalse(_Script("").prompter().ask_yes_no("Q?", default_yes=False))
        self.assertFalse(_Script("maybe").prompter().ask_yes_no("Q?", default_yes=False))

    def test_prompt_shows_default(self):
        script = _Script("")
        script.prompter().ask_yes_no("Also extract class comments?", default_yes=True)
        self.assertEqual(script.prompts, ["Also extract class comments? (y/n) [default: Y]: "])


if __name__ == "__main__":
    unittest.main()
