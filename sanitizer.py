"""
Post-processing for generated profile READMEs.

The completion text goes through an ordered list of named steps, each a
pure str -> str function. Order matters: later steps clean up what earlier
ones leave behind (e.g. blank lines left where HTML wrappers were removed).
Every step is idempotent on its own output, and sanitize() repeats the
whole pass until the text stops changing, so sanitize(sanitize(x)) ==
sanitize(x).
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Callable, List, NamedTuple, Sequence, Tuple

Step = Callable[[str], str]

# -----------------------------
# 1. Animation / stats-card references
# -----------------------------
ANIMATION_LABELS = ("Typing SVG", "GitHub Stats", "GitHub Streak", "Top Languages", "Snake animation")

_ANIMATION_IMAGE_RES = tuple(
    re.compile(r"!\[" + re.escape(label) + r"\]\([^)]+\)", re.IGNORECASE) for label in ANIMATION_LABELS
)
_ANIMATION_LABEL_RES = tuple(re.compile(re.escape(label), re.IGNORECASE) for label in ANIMATION_LABELS)


def remove_animation_references(text: str) -> str:
    # Images first, so the label pass never leaves a dangling "![](...)".
    # Removing a label can splice a new one together; loop until none match.
    while True:
        removed = 0
        for pattern in _ANIMATION_IMAGE_RES + _ANIMATION_LABEL_RES:
            text, n = pattern.subn("", text)
            removed += n
        if not removed:
            return text


# -----------------------------
# 2. / 5. Blank lines
# -----------------------------
_BLANK_RUN_RE = re.compile(r"\n{3,}")


def collapse_blank_lines(text: str) -> str:
    return _BLANK_RUN_RE.sub("\n\n", text)


def recollapse_blank_lines(text: str) -> str:
    """Second collapse, for runs produced by strip_html_wrappers."""
    return _BLANK_RUN_RE.sub("\n\n", text)


# -----------------------------
# 3. Greeting heading
# -----------------------------
_GREETING_RE = re.compile(
    r"^# (Merhaba|Hi|Hello),[ \t]*Ben[ \t]+([^\W\d_]+(?:[ \t]+[^\W\d_]+)*)[ \t]*(?:🌟)?[ \t]*$",
    re.IGNORECASE | re.MULTILINE,
)


def _title_word(word: str) -> str:
    return word[:1].upper() + word[1:].lower()


def normalize_greeting_heading(text: str) -> str:
    """`# Merhaba, Ben onur eren ejder` -> `# Merhaba, Ben Onur Eren Ejder 🌟`"""

    def repl(m: "re.Match[str]") -> str:
        name = " ".join(_title_word(w) for w in m.group(2).split())
        return f"# {m.group(1)}, Ben {name} 🌟"

    return _GREETING_RE.sub(repl, text)


# -----------------------------
# 4. HTML wrappers
# -----------------------------
_OPEN_WRAPPER_RE = re.compile(r"<(?:div|p|center)\b[^>]*>\s*", re.IGNORECASE)
_CLOSE_WRAPPER_RE = re.compile(r"\s*</(?:div|p|center)\s*>", re.IGNORECASE)


def strip_html_wrappers(text: str) -> str:
    # Removing one tag can splice another together ("<<div>div>"); every
    # substitution shortens the text, so looping terminates.
    while True:
        text, opened = _OPEN_WRAPPER_RE.subn("", text)
        text, closed = _CLOSE_WRAPPER_RE.subn("\n\n", text)
        if not opened and not closed:
            return text


# -----------------------------
# 6. Adjacent images
# -----------------------------
_IMAGE = r"!\[[^\]]+\]\([^)]+\)"
_ADJACENT_IMAGES_RE = re.compile(rf"({_IMAGE})\s*\n\s*(?={_IMAGE})")


def join_adjacent_images(text: str) -> str:
    """Put images separated by blank lines on consecutive lines instead."""
    return _ADJACENT_IMAGES_RE.sub(r"\1\n", text)


# -----------------------------
# 7. Language badges
# -----------------------------
@dataclass(frozen=True)
class BadgeRule:
    language: str
    subsection: str
    label: str
    marker: str
    badge: str

    def matches(self, top_languages: Sequence[str]) -> bool:
        return any(self.language in lang.lower() for lang in top_languages)

    def present_in(self, text: str) -> bool:
        return self.label in text and self.marker in text


PYTHON_BADGE = "![Python](https://img.shields.io/badge/Python-3776AB?style=for-the-badge&logo=python&logoColor=white)"
JUPYTER_BADGE = "![Jupyter](https://img.shields.io/badge/Jupyter-F37626?style=for-the-badge&logo=jupyter&logoColor=white)"

BADGE_RULES: Tuple[BadgeRule, ...] = (
    BadgeRule("python", "Data Science", "Python", "3776AB", PYTHON_BADGE),
    BadgeRule("jupyter notebook", "Data Science", "Jupyter", "F37626", JUPYTER_BADGE),
)

_NEXT_HEADING_RE = re.compile(r"^#{1,6}[ \t]", re.MULTILINE)
_BLANK_LINE_RE = re.compile(r"\n[ \t]*\n")


def _subsection_re(subsection: str) -> "re.Pattern[str]":
    return re.compile(r"^####[ \t]+[^\n]*?" + re.escape(subsection) + r"[^\n]*", re.MULTILINE)


def _insert_after_first_paragraph(section: str, badge: str) -> str:
    m = _BLANK_LINE_RE.search(section)
    if m:
        head, tail = section[: m.start()].rstrip(), section[m.start():]
    else:
        head = section.rstrip()
        tail = section[len(head):]
    return f"{head}\n{badge}{tail}"


def add_badge_to_subsections(text: str, rule: BadgeRule) -> str:
    headings = list(_subsection_re(rule.subsection).finditer(text))
    # Back to front so earlier offsets stay valid.
    for heading in reversed(headings):
        nxt = _NEXT_HEADING_RE.search(text, heading.end())
        end = nxt.start() if nxt else len(text)
        section = text[heading.start():end]
        if rule.present_in(section):
            continue
        text = text[: heading.start()] + _insert_after_first_paragraph(section, rule.badge) + text[end:]
    return text


def ensure_language_badges(top_languages: Sequence[str], rules: Sequence[BadgeRule] = BADGE_RULES) -> Step:
    """Build the badge step for one request's top languages.

    Only documents that already have a matching `#### <subsection>` heading
    get the badge; nothing is added when the heading is missing.
    """
    langs = list(top_languages)

    def step(text: str) -> str:
        for rule in rules:
            if rule.matches(langs) and not rule.present_in(text):
                text = add_badge_to_subsections(text, rule)
        return text

    return step


# -----------------------------
# Pipeline
# -----------------------------
class SanitizeStep(NamedTuple):
    name: str
    func: Step


def build_steps(top_languages: Sequence[str] = ()) -> List[SanitizeStep]:
    return [
        SanitizeStep("remove_animation_references", remove_animation_references),
        SanitizeStep("collapse_blank_lines", collapse_blank_lines),
        SanitizeStep("normalize_greeting_heading", normalize_greeting_heading),
        SanitizeStep("strip_html_wrappers", strip_html_wrappers),
        SanitizeStep("recollapse_blank_lines", recollapse_blank_lines),
        SanitizeStep("join_adjacent_images", join_adjacent_images),
        SanitizeStep("ensure_language_badges", ensure_language_badges(top_languages)),
    ]


def run_steps(text: str, steps: Sequence[SanitizeStep]) -> str:
    for step in steps:
        text = step.func(text)
    return text


def sanitize(text: str, top_languages: Sequence[str] = ()) -> str:
    # Only the greeting and badge steps ever grow the text, and each does so
    # once per heading, so this reaches a fixed point.
    steps = build_steps(top_languages)
    while True:
        cleaned = run_steps(text, steps)
        if cleaned == text:
            return text
        text = cleaned
