"""
GitHub REST client for the README generator.

- parse_profile_url / parse_repo_url turn free-form input into a username
  or an owner/repo pair; unparseable input gives None, never an exception.
- GitHubClient.fetch_user_profile pulls the profile plus the 30 most
  recently updated repositories and derives language frequencies, the top
  10 languages and the top 10 repositories by stars.
- GitHubClient.fetch_repo_contents pulls a repository's root listing and
  its package.json / requirements.txt / README when present.

Requests are made once: no retry, no backoff.
"""

from __future__ import annotations

import base64
import binascii
import logging
import re
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

import requests

from config import GITHUB_API_BASE
from errors import GitHubAPIError, ValidationError

logger = logging.getLogger(__name__)

REPOS_PER_REQUEST = 30
TOP_REPOSITORIES = 10
TOP_LANGUAGES = 10

_SCHEME_RE = re.compile(r"^https?://")

PROFILE_PATTERNS = (
    re.compile(r"^github\.com/([^/]+)$"),
    re.compile(r"^github\.com/([^/]+)/?$"),
    re.compile(r"^([^/]+)$"),
)

REPO_PATTERNS = (
    re.compile(r"^github\.com/([^/]+)/([^/]+)"),
    re.compile(r"^([^/]+)\.github\.io/([^/]+)"),
    re.compile(r"^([^/]+)/([^/]+)$"),
)


# -----------------------------
# Data model
# -----------------------------
@dataclass(frozen=True)
class UserProfile:
    login: str
    avatar_url: str = ""
    name: Optional[str] = None
    bio: Optional[str] = None
    location: Optional[str] = None
    company: Optional[str] = None
    blog: Optional[str] = None
    twitter_username: Optional[str] = None
    public_repos: int = 0
    followers: int = 0
    following: int = 0
    created_at: str = ""


@dataclass(frozen=True)
class RepositorySummary:
    name: str
    html_url: str = ""
    description: Optional[str] = None
    language: Optional[str] = None
    stargazers_count: int = 0
    forks_count: int = 0
    topics: Tuple[str, ...] = ()


@dataclass(frozen=True)
class UserProfileData:
    profile: UserProfile
    repositories: List[RepositorySummary]
    languages: Dict[str, int]
    top_languages: List[str]


@dataclass(frozen=True)
class RepoInfo:
    owner: str
    repo: str


@dataclass(frozen=True)
class FileTreeEntry:
    name: str
    path: str
    type: str
    size: Optional[int] = None


@dataclass(frozen=True)
class RepoContents:
    file_tree: List[FileTreeEntry] = field(default_factory=list)
    package_json: Optional[str] = None
    requirements_txt: Optional[str] = None
    readme: Optional[str] = None
    description: Optional[str] = None
    language: Optional[str] = None
    topics: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "fileTree": [
                {"name": e.name, "path": e.path, "type": e.type, "size": e.size} for e in self.file_tree
            ],
            "packageJson": self.package_json,
            "requirementsTxt": self.requirements_txt,
            "readme": self.readme,
            "description": self.description,
            "language": self.language,
            "topics": list(self.topics),
        }


# -----------------------------
# URL parsing
# -----------------------------
def _clean_url(url: Any) -> Optional[str]:
    if not isinstance(url, str):
        return None
    cleaned = _SCHEME_RE.sub("", url.strip())
    if cleaned.endswith("/"):
        cleaned = cleaned[:-1]
    return cleaned


def parse_profile_url(url: Any) -> Optional[str]:
    """Extract a username from `github.com/<user>`, `github.com/<user>/` or `<user>`."""
    cleaned = _clean_url(url)
    if not cleaned:
        return None
    for pattern in PROFILE_PATTERNS:
        m = pattern.match(cleaned)
        if m and m.group(1):
            return m.group(1)
    return None


def parse_repo_url(url: Any) -> Optional[RepoInfo]:
    cleaned = _clean_url(url)
    if not cleaned:
        return None
    for pattern in REPO_PATTERNS:
        m = pattern.match(cleaned)
        if m:
            return RepoInfo(owner=m.group(1), repo=re.sub(r"\.git$", "", m.group(2)))
    return None


# -----------------------------
# Derivations
# -----------------------------
def count_languages(repos: List[RepositorySummary]) -> Dict[str, int]:
    """Primary language -> number of repositories; repos without one are skipped."""
    counts: Dict[str, int] = {}
    for r in repos:
        if r.language:
            counts[r.language] = counts.get(r.language, 0) + 1
    return counts


def top_languages(counts: Dict[str, int], limit: int = TOP_LANGUAGES) -> List[str]:
    # sorted() is stable, so equal counts keep first-seen order
    ranked = sorted(counts.items(), key=lambda kv: kv[1], reverse=True)[:limit]
    return [lang for lang, _ in ranked]


def top_repositories(repos: List[RepositorySummary], limit: int = TOP_REPOSITORIES) -> List[RepositorySummary]:
    return sorted(repos, key=lambda r: r.stargazers_count, reverse=True)[:limit]


def _profile_from_api(user: Dict[str, Any]) -> UserProfile:
    return UserProfile(
        login=user.get("login") or "",
        avatar_url=user.get("avatar_url") or "",
        name=user.get("name") or None,
        bio=user.get("bio") or None,
        location=user.get("location") or None,
        company=user.get("company") or None,
        blog=user.get("blog") or None,
        twitter_username=user.get("twitter_username") or None,
        public_repos=int(user.get("public_repos") or 0),
        followers=int(user.get("followers") or 0),
        following=int(user.get("following") or 0),
        created_at=user.get("created_at") or "",
    )


def _repository_from_api(repo: Dict[str, Any]) -> RepositorySummary:
    return RepositorySummary(
        name=repo.get("name") or "",
        html_url=repo.get("html_url") or "",
        description=repo.get("description") or None,
        language=repo.get("language") or None,
        stargazers_count=int(repo.get("stargazers_count") or 0),
        forks_count=int(repo.get("forks_count") or 0),
        topics=tuple(repo.get("topics") or ()),
    )


def _decode_content(payload: Any) -> Optional[str]:
    if not isinstance(payload, dict) or not payload.get("content"):
        return None
    return base64.b64decode(payload["content"]).decode("utf-8")


# -----------------------------
# Client
# -----------------------------
class GitHubClient:
    def __init__(
        self,
        token: Optional[str] = None,
        *,
        api_base: str = GITHUB_API_BASE,
        api_version: str = "2022-11-28",
        session: Optional[requests.Session] = None,
        timeout: int = 20,
    ) -> None:
        self.token = token
        self.api_base = api_base.rstrip("/")
        self.api_version = api_version
        self.session = session or requests.Session()
        self.timeout = timeout

    @property
    def token_configured(self) -> bool:
        return bool(self.token)

    def _headers(self) -> Dict[str, str]:
        h = {
            "Accept": "application/vnd.github+json",
            "User-Agent": "profile-readme-generator",
            "X-GitHub-Api-Version": self.api_version,
        }
        if self.token:
            h["Authorization"] = f"Bearer {self.token}"
        return h

    def _request_json(self, path: str, *, params: Optional[dict] = None) -> Any:
        url = f"{self.api_base}{path}"
        try:
            resp = self.session.get(url, headers=self._headers(), params=params, timeout=self.timeout)
        except requests.RequestException as e:
            logger.warning("GitHub request to %s failed: %s", path, e)
            raise GitHubAPIError(f"GitHub REST request failed: {e}") from e

        if resp.status_code >= 400:
            logger.warning("GitHub REST %s returned %s", path, resp.status_code)
            raise GitHubAPIError(f"GitHub REST error {resp.status_code}: {resp.text[:600]}", resp.status_code)

        return resp.json()

    def fetch_user_profile(self, profile_url: str) -> UserProfileData:
        username = parse_profile_url(profile_url)
        if not username:
            raise ValidationError("Invalid profile URL")

        user = self._request_json(f"/users/{username}")
        raw_repos = self._request_json(
            f"/users/{username}/repos",
            params={"sort": "updated", "per_page": REPOS_PER_REQUEST, "type": "all"},
        )
        if not isinstance(raw_repos, list):
            raw_repos = []

        repos = [_repository_from_api(r) for r in raw_repos]
        languages = count_languages(repos)
        logger.info("Fetched %s with %d repositories, %d languages", username, len(repos), len(languages))

        return UserProfileData(
            profile=_profile_from_api(user),
            repositories=top_repositories(repos),
            languages=languages,
            top_languages=top_languages(languages),
        )

    def _fetch_optional_file(self, owner: str, repo: str, path: str) -> Optional[str]:
        try:
            return _decode_content(self._request_json(f"/repos/{owner}/{repo}/contents/{path}"))
        except (GitHubAPIError, binascii.Error, UnicodeDecodeError) as e:
            logger.info("Skipping %s in %s/%s: %s", path, owner, repo, e)
            return None

    def fetch_repo_contents(self, repo_url: str) -> RepoContents:
        info = parse_repo_url(repo_url)
        if not info:
            raise ValidationError("Invalid repository URL")

        owner, repo = info.owner, info.repo
        meta = self._request_json(f"/repos/{owner}/{repo}")
        listing = self._request_json(f"/repos/{owner}/{repo}/contents")
        if not isinstance(listing, list):
            raise GitHubAPIError("Expected directory contents")

        tree = [
            FileTreeEntry(name=item.get("name", ""), path=item.get("path", ""), type=item.get("type", ""), size=item.get("size"))
            for item in listing
        ]
        files = {e.name: e for e in tree if e.type == "file"}

        package_json = None
        if "package.json" in files:
            package_json = self._fetch_optional_file(owner, repo, "package.json")

        requirements_txt = None
        if "requirements.txt" in files:
            requirements_txt = self._fetch_optional_file(owner, repo, "requirements.txt")

        readme = None
        readme_entry = next((e for e in tree if "readme" in e.name.lower()), None)
        if readme_entry is not None and readme_entry.type == "file":
            readme = self._fetch_optional_file(owner, repo, readme_entry.path)

        return RepoContents(
            file_tree=tree,
            package_json=package_json,
            requirements_txt=requirements_txt,
            readme=readme,
            description=meta.get("description") or None,
            language=meta.get("language") or None,
            topics=list(meta.get("topics") or []),
        )
