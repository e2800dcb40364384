"""Top-level package for the Worksheet Toolkit.

Provides subpackages:
- worksheet_toolkit.core – block models and record validation
- worksheet_toolkit.builder – layout engine, pagination and export adapters
- worksheet_toolkit.cli – command line export trigger
"""

def _get_version() -> str:
    """Get version from importlib.metadata (installed) or pyproject.toml (dev)."""
    from importlib.metadata import PackageNotFoundError, version as pkg_version
    from pathlib import Path

    try:
        return pkg_version("worksheet_toolkit")
    except PackageNotFoundError:
        pass

    # In dev mode, read directly from pyproject.toml
    pyproject = Path(__file__).resolve().parent.parent.parent / "pyproject.toml"
    if pyproject.exists():
        for line in pyproject.read_text(encoding="utf-8").splitlines():
            if line.strip().startswith("version"):
                # Parse: version = "0.3.1"
                return line.split("=")[1].strip().strip('"').strip("'")

    return "0.0.0"

__version__ = _get_version()
__all__: list[str] = ["__version__"]
