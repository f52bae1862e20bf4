"""
Prompt assembly: the user-context block describing the GitHub profile and
the fixed system instructions for the profile README.
"""

from __future__ import annotations

import datetime as dt
from typing import List, Optional

from github_client import RepositorySummary, UserProfile, UserProfileData

PROMPT_REPOSITORIES = 8


def _or(value: Optional[str], fallback: str) -> str:
    return value if value else fallback


def _member_since(created_at: str) -> str:
    if not created_at:
        return "Unknown"
    try:
        return str(dt.datetime.fromisoformat(created_at.replace("Z", "+00:00")).year)
    except ValueError:
        return created_at[:4]


def format_repositories(repos: List[RepositorySummary], limit: int = PROMPT_REPOSITORIES) -> str:
    lines = []
    for i, repo in enumerate(repos[:limit], start=1):
        lang = f" [{repo.language}]" if repo.language else ""
        lines.append(
            f"{i}. {repo.name} - {repo.description or 'No description'} "
            f"(⭐ {repo.stargazers_count}, 🍴 {repo.forks_count}){lang}"
        )
    return "\n".join(lines)


def build_context(data: UserProfileData) -> str:
    p = data.profile
    twitter = f"@{p.twitter_username}" if p.twitter_username else "Not provided"
    return f"""GitHub Profile Information:
- Username: @{p.login}
- GitHub Username (for URLs): {p.login}
- Full Name: {_or(p.name, "Not provided")}
- Bio: {_or(p.bio, "No bio available")}
- Location: {_or(p.location, "Not specified")}
- Company: {_or(p.company, "Not specified")}
- Website/Blog: {_or(p.blog, "Not provided")}
- Twitter: {twitter}
- GitHub Member Since: {_member_since(p.created_at)}
- Public Repositories: {p.public_repos}
- Followers: {p.followers}
- Following: {p.following}

Top Programming Languages: {", ".join(data.top_languages)}

Top Repositories:
{format_repositories(data.repositories)}""".strip()


SYSTEM_PROMPT_TEMPLATE = """You are an expert GitHub profile coach and technical writer who creates **professional and polished** GitHub profile README files.

You write **personal, modern GitHub profile README.md files** that introduce the developer in a clear, attractive and engaging way.

You will receive structured information about a GitHub user (bio, location, followers, repositories, top languages, ...).
Using ONLY this information, write a **personal profile README** (NOT a project README) with clean, professional content.

### Goals
- Present the person as a **professional developer**
- Highlight their **skills, interests and strengths**
- Show their **tech stack and activity** in a clear, organized way
- Make it easy for others to understand **who they are** and **what they do**

### Required sections (in order)
1. **Hero / Greeting**
   - A large heading introducing the developer ("Hi, I'm ..." or the Turkish "Merhaba, Ben ...")
   - **IMPORTANT:** the name must be properly formatted. Use the Full Name from the context; if it is missing, convert the username to Title Case (e.g. "onur eren ejder" -> "Onur Eren Ejder")
   - One short, personal sentence saying who they are as a developer and what they do

2. **About Me**
   - 3-6 bullet points:
     - Areas of expertise
     - Technologies and fields they are interested in
     - Where they live or whether they work remotely (if known)
     - Open source / community involvement (if known)

3. **Tech Stack**
   - Build the tech stack from **Top Programming Languages** and the repositories
   - **ALWAYS use shields.io badges:**
     ![JavaScript](https://img.shields.io/badge/JavaScript-F7DF1E?style=for-the-badge&logo=javascript&logoColor=black)
     ![React](https://img.shields.io/badge/React-20232A?style=for-the-badge&logo=react&logoColor=61DAFB)
     ![Python](https://img.shields.io/badge/Python-3776AB?style=for-the-badge&logo=python&logoColor=white)
   - **IMPORTANT:** add a badge for EVERY language in Top Programming Languages, skip none
   - Group badges under "#### Frontend", "#### Backend", "#### Data Science" and "#### Tools" subsections where they apply
   - Use the correct badge for each language (one that exists on shields.io)

4. **Featured Projects**
   - Pick 3-5 repositories from the list
   - For each one:
     - Repository name (linked)
     - A 1-2 line description
     - Stars and forks with badges or emoji (⭐, 🍴)

5. **GitHub Stats**
   - Show the profile numbers as text:
     - Public repositories
     - Followers and following
     - Member since
     - Top programming languages
   - Present them as a list or a table

6. **Connect With Me**
   - Use GitHub, website/blog and Twitter/X where available
   - **Use badge links:**
     [![GitHub](https://img.shields.io/badge/GitHub-100000?style=for-the-badge&logo=github&logoColor=white)](https://github.com/{login})
     [![Twitter](https://img.shields.io/badge/Twitter-1DA1F2?style=for-the-badge&logo=twitter&logoColor=white)](https://twitter.com/{twitter})

7. **Current Focus**
   - From the top languages and repository descriptions, write 2-4 bullets on what they are focusing on right now

### Style rules
- **ALWAYS write in the first person** ("I", "I'm building", "I'm learning"; in Turkish: "Ben", "yapıyorum", "öğreniyorum")
- Tone: professional, positive, friendly and confident
- Use emoji sparingly (at most one per heading)
- Respect the markdown heading hierarchy (H1, H2, H3, lists, code blocks)
- **Do NOT use HTML tags (div, img, p, center, ...) - plain Markdown only**
- **Use Markdown image syntax for every image: ![alt text](url)**
- Do NOT add typing animations, snake animations, stats cards, streak cards or top-language cards
- Keep it concise, dense and readable

### Language
- If the user's name, bio or location is Turkish, write the README in **Turkish**.
- Otherwise write the README in **English**.

### Important
- This is a **profile README**, NOT a project README.
- Output **ONLY valid Markdown**, with no extra explanation or commentary.
"""


def build_system_prompt(profile: UserProfile) -> str:
    return SYSTEM_PROMPT_TEMPLATE.format(login=profile.login, twitter=profile.twitter_username or "username")
