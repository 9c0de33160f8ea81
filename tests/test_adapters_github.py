"""Unit tests for GitHub adapter (mocked API)."""

from unittest.mock import Mock, patch

import pytest

from ticketgate.adapters.base import GitPlatformError
from ticketgate.adapters.github import GitHubAdapter


@pytest.fixture
def adapter() -> GitHubAdapter:
    return GitHubAdapter(token="test-token", api_url="https://api.github.com")


def test_headers(adapter: GitHubAdapter) -> None:
    assert adapter._session.headers["Authorization"] == "Bearer test-token"
    assert adapter._session.headers["Accept"] == "application/vnd.github.v3+json"


def test_update_pr_body_sends_patch(adapter: GitHubAdapter) -> None:
    """update_pr_body PATCHes the pull with a JSON body field."""
    mock_resp = Mock()
    mock_resp.status_code = 200
    mock_resp.json.return_value = {"number": 7}

    with patch.object(adapter._session, "request", return_value=mock_resp) as req:
        adapter.update_pr_body("owner/repo", 7, "new body")

    req.assert_called_once()
    call_args = req.call_args
    assert call_args[0][0] == "PATCH"
    assert call_args[0][1] == "https://api.github.com/repos/owner/repo/pulls/7"
    assert call_args[1]["json"] == {"body": "new body"}
    assert call_args[1]["timeout"] == 30
    assert "params" not in call_args[1]


def test_update_pr_body_api_error_raises(adapter: GitHubAdapter) -> None:
    mock_resp = Mock()
    mock_resp.status_code = 403
    mock_resp.text = "Forbidden"
    mock_resp.json.return_value = {"message": "Resource not accessible by integration"}

    with patch.object(adapter._session, "request", return_value=mock_resp):
        with pytest.raises(GitPlatformError) as exc_info:
            adapter.update_pr_body("owner/repo", 7, "body")
    assert "403" in str(exc_info.value)
    assert "Resource not accessible" in str(exc_info.value)


def test_update_pr_body_error_without_json(adapter: GitHubAdapter) -> None:
    mock_resp = Mock()
    mock_resp.status_code = 502
    mock_resp.text = "Bad Gateway"
    mock_resp.json.side_effect = ValueError("no json")

    with patch.object(adapter._session, "request", return_value=mock_resp):
        with pytest.raises(GitPlatformError) as exc_info:
            adapter.update_pr_body("owner/repo", 7, "body")
    assert str(exc_info.value) == "502: Bad Gateway"


def test_custom_api_url_trailing_slash() -> None:
    adapter = GitHubAdapter(token="t", api_url="https://ghe.example.com/api/v3/")
    mock_resp = Mock()
    mock_resp.status_code = 200
    with patch.object(adapter._session, "request", return_value=mock_resp) as req:
        adapter.update_pr_body("o/r", 1, "b")
    assert req.call_args[0][1] == "https://ghe.example.com/api/v3/repos/o/r/pulls/1"
