"""Version information for reelrules."""

# Semantic versioning: MAJOR.MINOR.PATCH
# MAJOR: Breaking changes to the stored rule format or API
# MINOR: New fields, operators or entity kinds, backward compatible
# PATCH: Bug fixes, backward compatible

__version__ = "0.3.0"
__version_info__ = tuple(int(x) for x in __version__.split("."))

# Version history:
# 0.3.0 - Personal sections and materialization
#         - section_item schema and criteria-object compatibility shim
#         - Materialize workflow (ordered IDs, manual IDs, enabled gate)
#         - Rule validation endpoint for the rule builder
# 0.2.0 - Single selection path for preview and save
#         - Rules compiled once per request, pool consumed lazily
#         - Bare-array and wrapped-object stored shapes normalized
# 0.1.0 - Initial release
#         - Channel and media field registries
#         - String, numeric, boolean and enum operators
