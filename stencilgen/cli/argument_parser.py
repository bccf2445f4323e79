from __future__ import annotations
import argparse

from ..core.logger import c
from .. import __version__
from .help_texts import EXIT_CODES_TEXT, YAML_EXAMPLE


class CLI:
    @staticmethod
    def build_parser() -> argparse.ArgumentParser:
        epilog = (
            c("Descriptor example:\n", "cyan", ["bold"]) +
            c(YAML_EXAMPLE, "cyan") +
            "\n" +
            c(EXIT_CODES_TEXT, "cyan")
        )
        p = argparse.ArgumentParser(
            prog="stencilgen",
            description=c("stencilgen: template-driven code generation", "green", ["bold"]),
            formatter_class=argparse.RawDescriptionHelpFormatter,
            epilog=epilog,
        )
        p.add_argument("--version", action="version", version=__version__)
        p.add_argument("-w", "--watch", action="store_true", help="Watch template for changes and regenerate as needed.")
        p.add_argument("--disableCache", dest="disable_cache", action="store_true", help="Stops using cache.")
        p.add_argument("-v", "--verbose", action="store_true", help="Turn on verbose logging, this causes to log everything we can.")
        p.add_argument("--logAST", dest="log_ast", action="store_true", help="Log AST messages.")
        p.add_argument("--logBenchmarks", dest="log_benchmarks", action="store_true", help="Log time benchmark info.")
        p.add_argument("-q", "--quiet", action="store_true", help="Turn off any logging, only emit errors.")
        p.add_argument("-p", "--prune", action="store_true", help="Remove empty generated files.")
        p.add_argument("--sources", action="append", default=[], metavar="PATH", help="Path to source files. File or Directory (repeatable).")
        p.add_argument("--exclude-sources", dest="exclude_sources", action="append", default=[], metavar="PATH",
                       help="Path to source files to exclude. File or Directory (repeatable).")
        p.add_argument("--templates", action="append", default=[], metavar="PATH", help="Path to templates. File or Directory (repeatable).")
        p.add_argument("--exclude-templates", dest="exclude_templates", action="append", default=[], metavar="PATH",
                       help="Path to templates to exclude. File or Directory (repeatable).")
        p.add_argument("--output", default="", metavar="PATH", help="Path to output. File or Directory. Default is current path.")
        p.add_argument("--config", default=".", metavar="PATH", help="Path to config file. File or Directory. Default is current path.")
        p.add_argument("--force-parse", dest="force_parse", action="append", default=[], metavar="EXT",
                       help="File extensions that will be parsed even if they were generated (repeatable).")
        p.add_argument("--args", action="append", default=[], metavar="KEY=VALUE", help="Custom values to pass to templates (repeatable).")
        p.add_argument("--ejsPath", dest="ejs_path", default="", metavar="PATH", help="Path to EJS file for JavaScript templates.")
        p.add_argument("--log-file", dest="log_file", default=None, help="Write logs to file.")
        p.add_argument("--dump-config", dest="dump_config", action="store_true",
                       help="Print the resolved configurations as JSON and exit.")
        return p


def parse_args(argv=None) -> argparse.Namespace:
    return CLI.build_parser().parse_args(argv)
