"""Tests for the command-line and interactive entry points."""

import contextlib
import io
import logging
import os
import tempfile
import unittest
from pathlib import Path
from unittest import mock

import run_code_dump
import run_insight
import run_mapping
from core.prompting import ConsolePrompter
from core.settings import InsightSettings, PathsSettings


class _CliTestCase(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self._tmp.cleanup)
        self.root = os.path.join(self._tmp.name, "src", "Darwin.Domain")
        self.out = os.path.join(self._tmp.name, "out")
        os.makedirs(self.root)
        Path(self.root, "Order.cs").write_text(
            "/// <summary>Order.</summary>\npublic class Order { public void Pay() { } }\n",
            encoding="utf-8",
        )
        self.config = os.path.join(self._tmp.name, "missing.yml")

        root_logger = logging.getLogger()
        saved = (root_logger.level, list(root_logger.handlers))

        def restore() -> None:
            for handler in list(root_logger.handlers):
                if handler not in saved[1]:
                    root_logger.removeHandler(handler)
            root_logger.setLevel(saved[0])

        self.addCleanup(restore)
        env = mock.patch.dict(os.environ, {"STRICT_CONFIG_VALIDATION": "", "INSIGHT_OUTPUT_ROOT": ""})
        env.start()
        self.addCleanup(env.stop)

    def _run(self, main, argv):
        stdout = io.StringIO()
        with contextlib.redirect_stdout(stdout):
            main(argv)
        return stdout.getvalue().strip()


class TestRunMapping(_CliTestCase):
    def test_writes_mapping(self):
        path = self._run(
            run_mapping.main,
            ["--root", self.root, "--output-root", self.out, "--config", self.config, "--member-comments"],
        )
        self.assertTrue(os.path.isfile(path))
        self.assertIn('"summaryComment": "Order."', Path(path).read_text(encoding="utf-8"))

    def test_missing_root_exits_1(self):
        with self.assertRaises(SystemExit) as ctx:
            self._run(run_mapping.main, ["--root", os.path.join(self._tmp.name, "nope"), "--config", self.config])
        self.assertEqual(ctx.exception.code, 1)

    def test_strict_config_missing_exits_1(self):
        with self.assertRaises(SystemExit) as ctx:
            self._run(run_mapping.main, ["--root", self.root, "--config", self.config, "--strict-config"])
        self.assertEqual(ctx.exception.code, 1)

    def test_parse_error_exits_1_and_lenient_succeeds(self):
        Path(self.root, "Broken.cs").write_text("class Broken { void M( }", encoding="utf-8")
        with self.assertRaises(SystemExit) as ctx:
            self._run(run_mapping.main, ["--root", self.root, "--output-root", self.out, "--config", self.config])
        self.assertEqual(ctx.exception.code, 1)
        self.assertFalse(os.path.exists(self.out))

        path = self._run(
            run_mapping.main,
            ["--root", self.root, "--output-root", self.out, "--config", self.config, "--lenient"],
        )
        self.assertTrue(os.path.isfile(path))

    def test_unexpected_error_exits_2(self):
        with mock.patch("mapping.aggregator.run_project_mapping", side_effect=RuntimeError("boom")):
            with self.assertRaises(SystemExit) as ctx:
                self._run(run_mapping.main, ["--root", self.root, "--config", self.config])
        self.assertEqual(ctx.exception.code, 2)


class TestRunCodeDump(_CliTestCase):
    def test_writes_dump_named_after_path(self):
        path = self._run(
            run_code_dump.main,
            ["--root", self.root, "--output-root", self.out, "--config", self.config],
        )
        self.assertEqual(os.path.basename(path), "Darwin.Domain.txt")
        self.assertIn("public class Order", Path(path).read_text(encoding="utf-8"))


class TestRunInsight(_CliTestCase):
    def _prompter(self, *answers):
        queue = list(answers)
        return ConsolePrompter(input_fn=lambda prompt: queue.pop(0) if queue else "", output_fn=lambda text: None)

    def test_project_mapping_with_defaults(self):
        settings = InsightSettings(paths=PathsSettings(solution_root=self.root, output_root=self.out))
        path = run_insight.run_interactive(self._prompter("", "", "", ""), settings)

        self.assertRegex(os.path.basename(path), r"^ProjectMapping_\d{8}\.json$")
        text = Path(path).read_text(encoding="utf-8")
        self.assertIn('"summaryComment": "Order."', text)
        self.assertIn('"signature": "public void Pay()"', text)

    def test_full_code_extract(self):
        settings = InsightSettings(paths=PathsSettings(domain_root=self.root, output_root=self.out))
        path = run_insight.run_interactive(self._prompter("2", "", "n"), settings)

        self.assertEqual(os.path.basename(path), "Darwin.Domain.txt")
        self.assertIn("Include subfolders: False", Path(path).read_text(encoding="utf-8"))


if __name__ == "__main__":
    unittest.main()
