"""Checks on the project metadata shipped with the package."""

from __future__ import annotations

import re
from pathlib import Path

ROOT = Path(__file__).resolve().parent.parent


class TestProjectMetadata:
    def test_readme_is_the_user_readme(self) -> None:
        pyproject = (ROOT / "pyproject.toml").read_text()
        match = re.search(r'^readme = "([^"]+)"$', pyproject, re.MULTILINE)
        assert match is not None
        assert match.group(1) == "README.md"
        assert "vaultguard vault" in (ROOT / match.group(1)).read_text()
