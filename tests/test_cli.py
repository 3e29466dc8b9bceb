"""CLI argument, input parsing, and exit status tests.

Verifies how ``lazypick.cli.main`` turns lines into candidates, merges flags
with persisted preferences, and reports the picker outcome.
"""

from __future__ import annotations

import contextlib
import io
import json
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from lazypick import cli
from lazypick.errors import InputReadError
from lazypick.picker.types import Cancelled, Candidate, Confirmed, ConfirmedMany


class CliTestCase(unittest.TestCase):
    def setUp(self) -> None:
        tmp = tempfile.TemporaryDirectory()
        self.addCleanup(tmp.cleanup)
        self.tmp = Path(tmp.name)
        self.config_path = self.tmp / "config.json"
        patcher = mock.patch("lazypick.config.CONFIG_PATH", self.config_path)
        patcher.start()
        self.addCleanup(patcher.stop)

    def run_main(self, argv: list[str], stdin_text: str = "edit file\nopen browser\n", outcome=None):
        stdout = io.StringIO()
        with mock.patch("lazypick.cli.pick", return_value=outcome or Cancelled()) as pick_mock:
            code = cli.main(argv, stdin=io.StringIO(stdin_text), stdout=stdout)
        return code, stdout.getvalue(), pick_mock


class ParseCandidatesTests(unittest.TestCase):
    def test_blank_lines_are_skipped_but_keep_numbering(self) -> None:
        candidates = cli.parse_candidates(["alpha\n", "   \n", "beta\r\n"])

        self.assertEqual([(c.id, c.text) for c in candidates], [("0", "alpha"), ("2", "beta")])

    def test_delimiter_splits_text_and_description(self) -> None:
        candidates = cli.parse_candidates(["deploy | push to prod", "plain", "a|b|c"], "|")

        self.assertEqual(
            [(c.text, c.description) for c in candidates],
            [("deploy", "push to prod"), ("plain", ""), ("a", "b|c")],
        )


class MainExitStatusTests(CliTestCase):
    def test_confirmed_choice_prints_text(self) -> None:
        code, printed, pick_mock = self.run_main([], outcome=Confirmed(Candidate(id="1", text="open browser")))

        self.assertEqual(code, cli.EXIT_OK)
        self.assertEqual(printed, "open browser\n")
        candidates = pick_mock.call_args.args[0]
        self.assertEqual([c.text for c in candidates], ["edit file", "open browser"])
        self.assertEqual(pick_mock.call_args.kwargs["key_timeout_ms"], 30_000)

    def test_print_id_and_multiple_choices(self) -> None:
        chosen = ConfirmedMany((Candidate(id="0", text="edit file"), Candidate(id="1", text="open browser")))

        code, printed, _pick = self.run_main(["--multi", "--print-id"], outcome=chosen)

        self.assertEqual(code, cli.EXIT_OK)
        self.assertEqual(printed, "0\n1\n")

    def test_cancel_exits_one(self) -> None:
        code, printed, _pick = self.run_main([])

        self.assertEqual(code, cli.EXIT_CANCELLED)
        self.assertEqual(printed, "")

    def test_no_candidates_exits_one_without_picking(self) -> None:
        code, _printed, pick_mock = self.run_main([], stdin_text="\n\n")

        self.assertEqual(code, cli.EXIT_CANCELLED)
        pick_mock.assert_not_called()

    def test_input_failure_exits_two(self) -> None:
        stdout = io.StringIO()
        with mock.patch("lazypick.cli.pick", side_effect=InputReadError("failed to read input: closed")):
            with contextlib.redirect_stderr(io.StringIO()) as err:
                code = cli.main([], stdin=io.StringIO("a\n"), stdout=stdout)

        self.assertEqual(code, cli.EXIT_INPUT_ERROR)
        self.assertIn("failed to read input", err.getvalue())

    def test_unreadable_file_exits_two(self) -> None:
        with contextlib.redirect_stderr(io.StringIO()):
            code, _printed, pick_mock = self.run_main([str(self.tmp / "missing.txt")])

        self.assertEqual(code, cli.EXIT_INPUT_ERROR)
        pick_mock.assert_not_called()

    def test_reads_candidates_from_file(self) -> None:
        source = self.tmp / "items.txt"
        source.write_text("one\ntwo\n", encoding="utf-8")

        _code, _printed, pick_mock = self.run_main([str(source)], stdin_text="")

        self.assertEqual([c.text for c in pick_mock.call_args.args[0]], ["one", "two"])

    def test_invalid_flag_values_are_rejected_by_parser(self) -> None:
        for argv in (["--max-items", "0"], ["--min-score", "1.5"], ["--layout", "grid"]):
            with self.subTest(argv=argv):
                with contextlib.redirect_stderr(io.StringIO()):
                    with self.assertRaises(SystemExit) as caught:
                        cli.build_parser().parse_args(argv)
                self.assertEqual(caught.exception.code, 2)


class ConfigMergeTests(CliTestCase):
    def test_flags_reach_picker_config(self) -> None:
        _code, _printed, pick_mock = self.run_main(
            ["--multi", "--no-vim", "--title", "Targets", "--timeout", "5", "--no-color", "--delimiter", ":"]
        )

        config = pick_mock.call_args.args[1]
        self.assertTrue(config.multi_select)
        self.assertFalse(config.vim_mode)
        self.assertEqual(config.title, "Targets")
        self.assertTrue(config.search_descriptions)
        self.assertEqual(pick_mock.call_args.kwargs, {"key_timeout_ms": 5000, "no_color": True})

    def test_flags_override_persisted_preferences(self) -> None:
        self.config_path.write_text(json.dumps({"theme": "ocean", "max_items": 4, "layout": "compact"}))

        _code, _printed, pick_mock = self.run_main(["--max-items", "9"])

        config = pick_mock.call_args.args[1]
        self.assertEqual((config.theme, config.max_items, config.layout), ("ocean", 9, "compact"))
        self.assertFalse(config.search_descriptions)

    def test_save_defaults_persists_flags(self) -> None:
        self.run_main(["--save-defaults", "--theme", "ocean", "--accessible"])

        self.assertEqual(json.loads(self.config_path.read_text()), {"theme": "ocean", "accessibility": True})

    def test_save_defaults_with_bad_theme_exits_two(self) -> None:
        with contextlib.redirect_stderr(io.StringIO()) as err:
            code, _printed, pick_mock = self.run_main(["--save-defaults", "--theme", "sparkly"])

        self.assertEqual(code, cli.EXIT_INPUT_ERROR)
        self.assertIn("sparkly", err.getvalue())
        pick_mock.assert_not_called()


if __name__ == "__main__":
    unittest.main()
