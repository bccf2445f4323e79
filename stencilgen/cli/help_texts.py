from __future__ import annotations

YAML_EXAMPLE = r"""# stencilgen descriptor (.stencilgen.yml)
#
# Run from the directory holding it:
# stencilgen
# or point at it (file or containing directory):
# stencilgen --config path/to/project
#
# When a descriptor is found, --sources/--templates/--output/--force-parse/--args
# are IGNORED (a warning is logged). Relative paths resolve against the
# descriptor's own directory, not the current directory.
#
# ${NAME} is replaced with the environment variable NAME before parsing.
#
# Single job:
sources:
  - Sources
templates:
  - Templates
output: Generated
force-parse:
  - generated
args:
  module: ${MODULE_NAME}
#
# Several jobs, processed in order (first failure stops the run):
# configurations:
#   - sources:
#       include: [App/Sources]
#       exclude: [App/Sources/Vendor]
#     templates: [Templates/App]
#     output: App/Generated
#   - sources: [Kit/Sources]
#     templates: [Templates/Kit]
#     output:
#       path: Kit/Generated
#     cacheBasePath: .cache
"""

EXIT_CODES_TEXT = r"""Exit codes:
  0  success
  1  invalid path (unreadable input, unwritable output)
  2  invalid configuration (no sources/templates, malformed descriptor)
  3  generation failed
"""
