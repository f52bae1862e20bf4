"""
GitHub Profile README Generator (Flask)

What it does:
- Accepts a GitHub profile URL (or bare username)
- Fetches the public profile and the 30 most recently updated repositories via the GitHub REST API
- Builds a prompt from the profile, top languages and top repositories
- Asks an OpenAI-compatible chat model (Groq by default) for a personal profile README
- Cleans the markdown up (animation cards, HTML wrappers, blank lines, greeting name, language badges)

Setup:
  pip install -e .

Run:
  export GROQ_API_KEY="gsk_..."          # required (OPENAI_API_KEY also accepted)
  export GITHUB_TOKEN="github_pat_..."   # optional, higher rate limits
  python app.py
  open http://localhost:5000

Endpoints:
  GET  /                              -> renders templates/index.html (if present), else fallback page
  POST /api/generate                  -> JSON { "profileUrl": "..." } -> { "readme": "..." }
  GET  /api/repo-contents?repoUrl=    -> root file tree + package.json / requirements.txt / README
  GET  /healthz
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from flask import Flask, current_app, jsonify, render_template, request
from jinja2 import TemplateNotFound

from completion import CompletionClient
from config import Settings, configure_logging
from errors import GitHubAPIError, ProfileNotFoundError, ReadmeGeneratorError, ValidationError
from github_client import GitHubClient
from readme_prompt import build_context, build_system_prompt
from sanitizer import sanitize

logger = logging.getLogger(__name__)

PROFILE_FETCH_FAILED = "Failed to fetch GitHub profile data. Please check the profile URL."
GENERIC_ERROR = "An error occurred while generating the README"


# -----------------------------
# Pipeline
# -----------------------------
def generate_readme(profile_url: str, github: GitHubClient, completion: CompletionClient) -> str:
    """Profile fetch -> prompt -> completion -> sanitize."""
    completion.ensure_configured()

    try:
        data = github.fetch_user_profile(profile_url)
    except GitHubAPIError as e:
        # No upstream status means the request never got an answer.
        if e.not_found or e.upstream_status is None:
            raise ProfileNotFoundError(PROFILE_FETCH_FAILED) from e
        raise
    if not data:
        raise ProfileNotFoundError("Failed to fetch user profile")

    system_prompt = build_system_prompt(data.profile)
    context = build_context(data)
    raw = completion.complete(system_prompt, context)
    logger.info("Generated %d chars for %s", len(raw), data.profile.login)
    return sanitize(raw, data.top_languages)


# -----------------------------
# App factory
# -----------------------------
def create_app(
    settings: Optional[Settings] = None,
    *,
    github: Optional[GitHubClient] = None,
    completion: Optional[CompletionClient] = None,
) -> Flask:
    settings = settings or Settings.from_env()
    configure_logging(settings.log_level)

    app = Flask(__name__)
    app.extensions["readme_settings"] = settings
    app.extensions["github_client"] = github or GitHubClient(
        settings.github_token,
        api_base=settings.github_api_base,
        api_version=settings.github_api_version,
    )
    app.extensions["completion_client"] = completion or CompletionClient.from_settings(settings)

    register_routes(app)
    return app


def _github() -> GitHubClient:
    return current_app.extensions["github_client"]


def _completion() -> CompletionClient:
    return current_app.extensions["completion_client"]


def _get_field(name: str) -> str:
    if request.method == "GET":
        return (request.args.get(name) or "").strip()
    payload: Any = request.get_json(silent=True)
    if not isinstance(payload, dict):
        payload = {}
    value = payload.get(name)
    return value.strip() if isinstance(value, str) else ""


# -----------------------------
# Flask routes
# -----------------------------
def register_routes(app: Flask) -> None:
    @app.errorhandler(ReadmeGeneratorError)
    def handle_generator_error(e: ReadmeGeneratorError):
        return jsonify({"error": e.message}), e.status_code

    @app.route("/", methods=["GET"])
    def home():
        try:
            return render_template("index.html")
        except TemplateNotFound:
            return (
                """
                <!doctype html>
                <html>
                <head><meta charset="utf-8"><title>Profile README Generator</title></head>
                <body style="font-family: system-ui, -apple-system, Segoe UI, Roboto, sans-serif; padding: 24px;">
                  <h2>Profile README Generator API is running</h2>
                  <p>Try: <code>POST /api/generate {"profileUrl": "octocat"}</code></p>
                  <p>Add a template at <code>templates/index.html</code> to build the UI.</p>
                </body>
                </html>
                """,
                200,
                {"Content-Type": "text/html; charset=utf-8"},
            )

    @app.route("/api/generate", methods=["POST"])
    def api_generate():
        profile_url = _get_field("profileUrl")
        if not profile_url:
            return jsonify({"error": "GitHub profile URL is required"}), 400

        try:
            readme = generate_readme(profile_url, _github(), _completion())
        except ReadmeGeneratorError:
            raise
        except Exception:
            logger.exception("Error generating README for %r", profile_url)
            return jsonify({"error": GENERIC_ERROR}), 500
        return jsonify({"readme": readme})

    @app.route("/api/repo-contents", methods=["GET"])
    def api_repo_contents():
        repo_url = _get_field("repoUrl")
        if not repo_url:
            raise ValidationError("GitHub repository URL is required")
        return jsonify(_github().fetch_repo_contents(repo_url).to_dict())

    @app.route("/healthz", methods=["GET"])
    def healthz():
        settings: Settings = current_app.extensions["readme_settings"]
        return jsonify(
            {
                "ok": True,
                "github_token_configured": _github().token_configured,
                "llm_configured": _completion().configured,
                "model": settings.llm_model,
            }
        )


if __name__ == "__main__":
    _settings = Settings.from_env()
    create_app(_settings).run(host="0.0.0.0", port=_settings.port, debug=True)
