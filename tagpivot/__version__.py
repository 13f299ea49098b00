"""Version information for TagPivot."""

# Semantic versioning: MAJOR.MINOR.PATCH
# MAJOR: Breaking changes to the stored data layout (bumps STORE_VERSION)
# MINOR: New metrics or commands, backward compatible
# PATCH: Bug fixes, backward compatible

__version__ = "0.1.0"
__version_info__ = tuple(int(x) for x in __version__.split("."))

# Version history:
# 0.1.0 - Initial release
#         - Append-only event store with retention, cap and repeat-visit dedupe
#         - Adaptive window selection and temperature (TV distance)
#         - Co-occurrence graph polarization with active/counter poles
#         - Bridges and counterpoint rankings
#         - Rolling baselines with z-score states and sparklines
#         - `tagpivot` CLI
