import os
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from stencilgen.config.annotations import parse_annotation_line
from stencilgen.config.parameter_source import ParameterSource


class TestAnnotationLine(unittest.TestCase):
    def test_key_value_pairs(self):
        self.assertEqual(parse_annotation_line("name=Foo, module = Bar"), {"name": "Foo", "module": "Bar"})

    def test_bare_key_is_true(self):
        self.assertEqual(parse_annotation_line("public"), {"public": "true"})

    def test_repeated_keys_collect_in_order(self):
        self.assertEqual(parse_annotation_line("tag=a,tag=b,tag=c"), {"tag": ["a", "b", "c"]})

    def test_quotes_are_stripped(self):
        self.assertEqual(parse_annotation_line("greeting=\"hi there\",x='y'"), {"greeting": "hi there", "x": "y"})

    def test_garbage_never_raises(self):
        self.assertEqual(parse_annotation_line(""), {})
        self.assertEqual(parse_annotation_line(",,=nokey, ,"), {})
        self.assertEqual(parse_annotation_line("a=b=c"), {"a": "b=c"})


class TestParameterSource(unittest.TestCase):
    def test_flags_become_one_configuration(self):
        conf = ParameterSource.build_from_flags(
            source_include=["A"],
            source_exclude=["A/Vendor"],
            template_include=["B"],
            template_exclude=[],
            output="",
            force_parse=["generated"],
            raw_args=["name=Foo", "flag"],
        )
        self.assertEqual(conf.sources.include, [Path("A")])
        self.assertEqual(conf.sources.exclude, [Path("A/Vendor")])
        self.assertEqual(conf.templates.include, [Path("B")])
        self.assertEqual(conf.output, Path("."))
        self.assertEqual(conf.force_parse, ["generated"])
        self.assertEqual(conf.args, {"name": "Foo", "flag": "true"})

    def test_args_fragments_are_joined_before_parsing(self):
        conf = ParameterSource.build_from_flags(raw_args=["tag=a", "tag=b"])
        self.assertEqual(conf.args, {"tag": ["a", "b"]})

    def test_no_flags_means_empty_paths(self):
        conf = ParameterSource.build_from_flags()
        self.assertTrue(conf.sources.is_empty)
        self.assertTrue(conf.templates.is_empty)
        self.assertEqual(conf.output, Path("."))

    def test_explicit_output_kept(self):
        conf = ParameterSource.build_from_flags(output="out/Generated.swift")
        self.assertEqual(conf.output, Path("out/Generated.swift"))

    def test_home_is_expanded(self):
        with tempfile.TemporaryDirectory() as td:
            with mock.patch.dict(os.environ, {"HOME": td}):
                conf = ParameterSource.build_from_flags(source_include=["~/Src"], output="~/Out")
            self.assertEqual(conf.sources.include, [Path(td) / "Src"])
            self.assertEqual(conf.output, Path(td) / "Out")


if __name__ == "__main__":
    unittest.main()
