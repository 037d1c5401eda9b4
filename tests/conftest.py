import os
import tempfile
from pathlib import Path
from unittest.mock import patch

import pytest


@pytest.fixture(scope="session", autouse=True)
def isolate_user_config():
    """Keep the user's real configuration and token out of the test run.

    The config directory is redirected to an empty temporary directory and
    ``GITHUB_TOKEN`` is removed for the duration of the session. Tests that
    need a config file patch ``_get_config_directory`` themselves.
    """
    with tempfile.TemporaryDirectory(prefix="changelog_craft_home_") as tmp:
        with patch(
            "changelog_craft.config.loader._get_config_directory",
            return_value=Path(tmp),
        ):
            with patch.dict(os.environ):
                os.environ.pop("GITHUB_TOKEN", None)
                yield
