# dumpmask/version.py
# Version constants. Single authoritative definition.
# Referenced by pyproject.toml (via __init__), the CLI --version flag and
# report_serializer.py for format stamping.

TOOL_VERSION: str = "1.0.0"

# JSON mismatch report layout. Bump on any change to the serialized keys.
REPORT_FORMAT_VERSION: str = "1.0.0"
