"""tunnel-bootstrap: expose a local CI service through a cloudflared quick tunnel."""

import tomllib
from pathlib import Path

try:
    # Development mode: read the version straight from pyproject.toml
    pyproject_path = Path(__file__).parent.parent.parent / "pyproject.toml"
    with open(pyproject_path, "rb") as f:
        data = tomllib.load(f)
    __version__ = data["project"]["version"]
except Exception:
    # Installed (non-editable): fall back to package metadata
    try:
        from importlib.metadata import version

        __version__ = version("tunnel-bootstrap")
    except Exception:
        __version__ = "0.0.0-dev"
