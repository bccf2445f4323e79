import logging
import os
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from stencilgen.cli.argument_parser import parse_args
from stencilgen.config.config_loader import ConfigLoader
from stencilgen.core.exceptions import ExitCode, Fatal
from stencilgen.core.utils import U

LOGGER = logging.getLogger("tests.config")

DESCRIPTOR = """configurations:
  - sources: [A]
    templates: [T]
    output: O1
  - sources: [B]
    templates: [T]
    output: O2
  - sources: [C]
    templates: [T]
    output: O3
"""


class TestConfigLoader(unittest.TestCase):
    def test_no_descriptor_falls_back_to_flags(self):
        with tempfile.TemporaryDirectory() as td:
            args = parse_args(["--config", td, "--sources", "A", "--templates", "B"])
            with self.assertLogs(LOGGER, level="INFO") as cm:
                confs = ConfigLoader(LOGGER, args).resolve(args.config, {})
            self.assertEqual(len(confs), 1)
            self.assertEqual(confs[0].sources.include, [Path("A")])
            self.assertEqual(confs[0].templates.include, [Path("B")])
            self.assertEqual(confs[0].output, Path("."))
            self.assertTrue(any("Using command line arguments" in m for m in cm.output))

    def test_descriptor_in_directory_resolves_relative_to_it(self):
        with tempfile.TemporaryDirectory() as td, tempfile.TemporaryDirectory() as elsewhere:
            root = Path(td).resolve()
            (root / ".stencilgen.yml").write_text(DESCRIPTOR, encoding="utf-8")
            args = parse_args(["--config", str(root)])
            old = os.getcwd()
            os.chdir(elsewhere)
            try:
                confs = ConfigLoader(LOGGER, args).resolve(args.config, {})
            finally:
                os.chdir(old)
            self.assertEqual(len(confs), 3)
            self.assertEqual([c.sources.include for c in confs], [[root / "A"], [root / "B"], [root / "C"]])
            self.assertEqual(confs[2].output, root / "O3")

    def test_descriptor_file_path_uses_parent_as_base(self):
        with tempfile.TemporaryDirectory() as td:
            root = Path(td).resolve()
            cfg = root / "custom.yml"
            cfg.write_text("sources: [Src]\ntemplates: [Tpl]\noutput: Out\n", encoding="utf-8")
            args = parse_args(["--config", str(cfg)])
            confs = ConfigLoader(LOGGER, args).resolve(args.config, {})
            self.assertEqual(confs[0].sources.include, [root / "Src"])

    def test_flags_are_ignored_with_warning_when_descriptor_exists(self):
        with tempfile.TemporaryDirectory() as td:
            root = Path(td).resolve()
            (root / ".stencilgen.yml").write_text(DESCRIPTOR, encoding="utf-8")
            plain = ConfigLoader(LOGGER, parse_args(["--config", str(root)])).resolve(str(root), {})
            noisy_args = parse_args([
                "--config", str(root), "--sources", "X", "--templates", "Y",
                "--output", "Z", "--force-parse", "gen", "--args", "k=v",
            ])
            with self.assertLogs(LOGGER, level="WARNING") as cm:
                noisy = ConfigLoader(LOGGER, noisy_args).resolve(str(root), {})
            self.assertEqual(plain, noisy)
            self.assertTrue(any("Ignoring the parameters" in m for m in cm.output))

    def test_environment_is_passed_through(self):
        with tempfile.TemporaryDirectory() as td:
            root = Path(td).resolve()
            (root / ".stencilgen.yml").write_text("sources: [${SRC}]\ntemplates: [T]\noutput: O\n", encoding="utf-8")
            confs = ConfigLoader(LOGGER, parse_args(["--config", str(root)])).resolve(str(root), {"SRC": "Generated/In"})
            self.assertEqual(confs[0].sources.include, [root / "Generated/In"])

    def test_missing_config_file_falls_back_to_flags(self):
        with tempfile.TemporaryDirectory() as td:
            missing = Path(td) / "x.yml"
            args = parse_args(["--config", str(missing), "--sources", "A", "--templates", "B"])
            confs = ConfigLoader(LOGGER, args).resolve(args.config, {})
            self.assertEqual(len(confs), 1)
            self.assertEqual(confs[0].sources.include, [Path("A")])

    @unittest.skipUnless(hasattr(os, "mkfifo"), "needs mkfifo")
    def test_config_that_is_not_file_or_directory_is_invalid_path(self):
        with tempfile.TemporaryDirectory() as td:
            fifo = Path(td) / "pipe.yml"
            os.mkfifo(fifo)
            args = parse_args(["--config", str(fifo), "--sources", "A", "--templates", "B"])
            with self.assertLogs(LOGGER, level="ERROR"):
                with self.assertRaises(Fatal) as cm:
                    ConfigLoader(LOGGER, args).resolve(args.config, {})
            self.assertEqual(cm.exception.code, ExitCode.INVALID_PATH)

    def test_unreadable_config_is_invalid_path(self):
        with tempfile.TemporaryDirectory() as td:
            cfg = Path(td) / "custom.yml"
            cfg.write_text("sources: [Src]\ntemplates: [Tpl]\noutput: Out\n", encoding="utf-8")
            args = parse_args(["--config", str(cfg)])
            with mock.patch.object(U, "is_readable", return_value=False):
                with self.assertLogs(LOGGER, level="ERROR"):
                    with self.assertRaises(Fatal) as cm:
                        ConfigLoader(LOGGER, args).resolve(args.config, {})
            self.assertEqual(cm.exception.code, ExitCode.INVALID_PATH)

    def test_malformed_descriptor_is_invalid_config(self):
        with tempfile.TemporaryDirectory() as td:
            root = Path(td)
            (root / ".stencilgen.yml").write_text("sources: [oops\n", encoding="utf-8")
            with self.assertLogs(LOGGER, level="ERROR"):
                with self.assertRaises(Fatal) as cm:
                    ConfigLoader(LOGGER, parse_args(["--config", str(root)])).resolve(str(root), {})
            self.assertEqual(cm.exception.code, ExitCode.INVALID_CONFIG)


if __name__ == "__main__":
    unittest.main()
