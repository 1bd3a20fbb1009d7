from importlib.metadata import version

import pydehaze


def test_version_available():
    """Verify that the version is available and not 'unknown'."""
    assert pydehaze.__version__ != "unknown"
    # It should match the installed version
    assert pydehaze.__version__ == version("pydehaze")


def test_version_format():
    """Verify that the version string has a major.minor format."""
    v = pydehaze.__version__
    parts = v.split(".")
    assert len(parts) >= 2
    assert parts[0].isdigit()
