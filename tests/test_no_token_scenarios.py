import os
from unittest.mock import patch

import pytest

from config import get_github_token
from errors import ConfigError, StageError
from main import main, run
from server import _export_stargazers_impl


@pytest.fixture
def clean_env():
    """Fixture to ensure no GitHub token is in the environment."""
    with patch.dict(os.environ, {}, clear=True):
        yield


def test_get_github_token_prefers_explicit_token(clean_env):
    os.environ["GH_TOKEN"] = "from-env"

    assert get_github_token("explicit") == "explicit"
    assert get_github_token() == "from-env"


def test_get_github_token_falls_back_to_github_token(clean_env):
    os.environ["GITHUB_TOKEN"] = "fallback"

    assert get_github_token() == "fallback"


@pytest.mark.parametrize("value", [None, "", "   ", "None"])
def test_get_github_token_rejects_missing_values(clean_env, value):
    with pytest.raises(ConfigError):
        get_github_token(value)


@patch("github_client.requests.post")
def test_run_without_token_fails_before_network(mock_post, clean_env, tmp_path):
    with pytest.raises(StageError) as excinfo:
        run("octo", "hello", path=tmp_path / "out.csv")

    assert excinfo.value.stage == "configuration"
    assert "GH_TOKEN" in str(excinfo.value)
    mock_post.assert_not_called()


@patch("github_client.requests.post")
def test_main_without_token_exits_nonzero(mock_post, clean_env, tmp_path):
    assert main(["octo", "hello", "-p", str(tmp_path / "out.csv")]) == 1
    mock_post.assert_not_called()


@patch("github_client.requests.post")
def test_export_tool_without_token_returns_error_message(mock_post, clean_env):
    msg = _export_stargazers_impl("octo", "hello")

    assert msg.startswith("Error in export_stargazers: configuration:")
    mock_post.assert_not_called()
