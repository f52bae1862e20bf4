"""Shared fixtures: canned GitHub payloads, a routed fake requests session and a fake OpenAI client."""
import json
from types import SimpleNamespace
from typing import Any, Dict, Optional
from unittest.mock import MagicMock

import pytest

from config import GITHUB_API_BASE, Settings
from github_client import GitHubClient

DATA_SCIENCE_README = """# Hi, Ben octocat

I build small tools and like open source.

## 🛠️ Tech Stack

#### Data Science
![Pandas](https://img.shields.io/badge/Pandas-150458?style=for-the-badge&logo=pandas&logoColor=white)

#### Tools
![Git](https://img.shields.io/badge/Git-F05032?style=for-the-badge&logo=git&logoColor=white)
"""


def make_response(status: int = 200, payload: Any = None, text: Optional[str] = None) -> MagicMock:
    resp = MagicMock()
    resp.status_code = status
    resp.json.return_value = payload
    resp.text = text if text is not None else json.dumps(payload)
    return resp


def routed_session(routes: Dict[str, MagicMock]) -> MagicMock:
    """A requests.Session stand-in answering GET by API path."""
    session = MagicMock()

    def get(url, **kwargs):
        path = url[len(GITHUB_API_BASE):]
        if path not in routes:
            raise AssertionError(f"unexpected GitHub call: {path}")
        return routes[path]

    session.get.side_effect = get
    return session


def fake_openai(content: Optional[str]) -> MagicMock:
    client = MagicMock()
    message = SimpleNamespace(content=content)
    client.chat.completions.create.return_value = SimpleNamespace(choices=[SimpleNamespace(message=message)])
    return client


def repo_payload(name: str, stars: int = 0, language: Optional[str] = None, **extra: Any) -> Dict[str, Any]:
    payload = {
        "name": name,
        "description": extra.pop("description", None),
        "language": language,
        "stargazers_count": stars,
        "forks_count": extra.pop("forks", 0),
        "topics": extra.pop("topics", []),
        "html_url": f"https://github.com/octocat/{name}",
    }
    payload.update(extra)
    return payload


@pytest.fixture
def octocat_user() -> Dict[str, Any]:
    return {
        "login": "octocat",
        "name": None,
        "bio": None,
        "location": None,
        "company": "@github",
        "blog": "",
        "twitter_username": None,
        "avatar_url": "https://avatars.githubusercontent.com/u/583231",
        "public_repos": 8,
        "followers": 100,
        "following": 9,
        "created_at": "2011-01-25T18:44:36Z",
    }


@pytest.fixture
def octocat_repos() -> list:
    return [
        repo_payload("Hello-World", stars=2500, language="Python", description="My first repository"),
        repo_payload("octocat.github.io", stars=300, language=None),
    ]


@pytest.fixture
def octocat_session(octocat_user, octocat_repos) -> MagicMock:
    return routed_session(
        {
            "/users/octocat": make_response(200, octocat_user),
            "/users/octocat/repos": make_response(200, octocat_repos),
        }
    )


@pytest.fixture
def settings() -> Settings:
    return Settings(llm_api_key="test-key")


@pytest.fixture
def github_client(octocat_session) -> GitHubClient:
    return GitHubClient(session=octocat_session)
