"""Tests for the README post-processing steps."""
import pytest

from conftest import DATA_SCIENCE_README
from sanitizer import (
    PYTHON_BADGE,
    build_steps,
    collapse_blank_lines,
    ensure_language_badges,
    join_adjacent_images,
    normalize_greeting_heading,
    recollapse_blank_lines,
    remove_animation_references,
    sanitize,
    strip_html_wrappers,
)

MESSY_README = """<div align="center">

# Merhaba, Ben onur eren ejder

![Typing SVG](https://readme-typing-svg.herokuapp.com?lines=Hello)

</div>



## 🛠️ Tech Stack

#### Data Science
![Pandas](https://img.shields.io/badge/Pandas-150458?style=for-the-badge)

![NumPy](https://img.shields.io/badge/NumPy-013243?style=for-the-badge)

#### Frontend
![React](https://img.shields.io/badge/React-20232A?style=for-the-badge)

## 📊 GitHub Stats

![GitHub Stats](https://github-readme-stats.vercel.app/api?username=onur)
![GitHub Streak](https://streak-stats.demolab.com?user=onur)
![Top Languages](https://github-readme-stats.vercel.app/api/top-langs?username=onur)

<p align="center"><center>![Snake animation](https://github.com/onur/snake.svg)</center></p>
<div>GitHub <div>Stats</div></div>
"""

SAMPLES = [
    "",
    "plain text",
    MESSY_README,
    DATA_SCIENCE_README,
    "<div align=center># Hi, Ben jane doe</div>\n\n\n\nbye",
    "![A](a)\n\n![B](b)\n\n\n![C](c)   \n\n#### Data Science",
    "<<div>div>hi",
    "<" * 7 + "div>" * 7 + "body",
    "x </p</p>>\n\n\n\n<<center>center>y",
]


class TestRemoveAnimationReferences:
    def test_removes_images_and_labels(self):
        text = "Intro\n![Typing SVG](https://x.test/svg?a=1)\n## GitHub Stats\nEnd"
        result = remove_animation_references(text)

        assert result == "Intro\n\n## \nEnd"

    def test_is_case_insensitive(self):
        result = remove_animation_references("![github streak](https://s.test) and SNAKE ANIMATION")
        assert result == " and "

    def test_labels_spliced_together_are_removed(self):
        assert remove_animation_references("GitHub StGitHub Statsats!") == "!"


class TestBlankLines:
    def test_collapses_three_or_more_newlines(self):
        assert collapse_blank_lines("a\n\n\n\n\nb\n\n\nc") == "a\n\nb\n\nc"

    def test_single_blank_line_kept(self):
        assert collapse_blank_lines("a\n\nb") == "a\n\nb"

    def test_recollapse(self):
        assert recollapse_blank_lines("a\n\n\n\nb") == "a\n\nb"


class TestGreetingHeading:
    def test_title_cases_name_and_adds_marker(self):
        result = normalize_greeting_heading("# Merhaba, Ben onur eren ejder\nText")
        assert result == "# Merhaba, Ben Onur Eren Ejder 🌟\nText"

    def test_existing_marker_not_duplicated(self):
        assert normalize_greeting_heading("# Hi, Ben jane DOE 🌟") == "# Hi, Ben Jane Doe 🌟"

    def test_other_headings_untouched(self):
        text = "# Hi, I'm Jane\n## Hello, Ben there"
        assert normalize_greeting_heading(text) == text

    def test_does_not_cross_lines(self):
        result = normalize_greeting_heading("# Hello, Ben ali\n\nsome paragraph")
        assert result == "# Hello, Ben Ali 🌟\n\nsome paragraph"


class TestStripHtmlWrappers:
    def test_keeps_wrapped_markdown(self):
        result = strip_html_wrappers('<div align="center">\n\n![A](https://a.test)\n\n</div>\nNext')

        assert "<div" not in result and "</div>" not in result
        assert result.startswith("![A](https://a.test)\n\n")
        assert result.endswith("Next")

    def test_paragraph_and_center_tags(self):
        result = strip_html_wrappers('<p align="center"><center>hi</center></p>')
        assert result == "hi\n\n\n\n"

    def test_pre_blocks_untouched(self):
        text = "<pre>code</pre>"
        assert strip_html_wrappers(text) == text

    def test_spliced_tags_removed_in_one_call(self):
        assert strip_html_wrappers("<<div>div>hi") == "hi"
        assert strip_html_wrappers("<" * 7 + "div>" * 7 + "body") == "body"

    def test_deeply_spliced_tags_sanitized_in_one_run(self):
        once = sanitize("<" * 7 + "div>" * 7 + "body")
        assert once == "body"
        assert sanitize(once) == once


class TestJoinAdjacentImages:
    def test_chain_of_images_on_consecutive_lines(self):
        assert join_adjacent_images("![A](a)\n\n![B](b)\n \n![C](c)") == "![A](a)\n![B](b)\n![C](c)"

    def test_same_line_images_untouched(self):
        text = "![A](a) ![B](b)"
        assert join_adjacent_images(text) == text

    def test_text_between_images_untouched(self):
        text = "![A](a)\n\ntext\n\n![B](b)"
        assert join_adjacent_images(text) == text


class TestEnsureLanguageBadges:
    def test_injects_python_badge_after_first_paragraph(self):
        result = ensure_language_badges(["Python", "Go"])(DATA_SCIENCE_README)

        section = result.split("#### Data Science", 1)[1].split("#### Tools", 1)[0]
        assert PYTHON_BADGE in section
        assert "logo=pandas&logoColor=white)\n" + PYTHON_BADGE + "\n\n" in result

    def test_case_insensitive_language_match(self):
        assert "Python-3776AB" in ensure_language_badges(["python"])(DATA_SCIENCE_README)

    def test_no_python_no_change(self):
        assert ensure_language_badges(["Go"])(DATA_SCIENCE_README) == DATA_SCIENCE_README

    def test_existing_badge_no_change(self):
        text = DATA_SCIENCE_README + "\n" + PYTHON_BADGE + "\n"
        assert ensure_language_badges(["Python"])(text) == text

    def test_missing_subsection_no_change(self):
        text = "## Tech Stack\n\n#### Backend\n![Go](https://img.shields.io/badge/Go-00ADD8)\n"
        assert ensure_language_badges(["Python"])(text) == text

    def test_subsection_at_end_of_document(self):
        result = ensure_language_badges(["Python"])("#### Data Science")
        assert result == "#### Data Science\n" + PYTHON_BADGE

    def test_jupyter_badge(self):
        result = ensure_language_badges(["Jupyter Notebook"])(DATA_SCIENCE_README)
        assert "Jupyter-F37626" in result


class TestPipeline:
    def test_messy_readme(self):
        result = sanitize(MESSY_README, ["Python", "JavaScript"])

        assert result.startswith("# Merhaba, Ben Onur Eren Ejder 🌟")
        for label in ("Typing SVG", "GitHub Stats", "GitHub Streak", "Top Languages", "Snake animation"):
            assert label.lower() not in result.lower()
        assert "<div" not in result and "<p" not in result and "<center" not in result
        assert "\n\n\n" not in result
        assert "![Pandas](https://img.shields.io/badge/Pandas-150458?style=for-the-badge)\n![NumPy]" in result
        assert "Python-3776AB" in result

    def test_steps_are_named_and_ordered(self):
        names = [s.name for s in build_steps()]
        assert names == [
            "remove_animation_references",
            "collapse_blank_lines",
            "normalize_greeting_heading",
            "strip_html_wrappers",
            "recollapse_blank_lines",
            "join_adjacent_images",
            "ensure_language_badges",
        ]

    @pytest.mark.parametrize("text", SAMPLES)
    def test_each_step_is_idempotent(self, text):
        for step in build_steps(["Python", "Jupyter Notebook"]):
            once = step.func(text)
            assert step.func(once) == once, step.name

    @pytest.mark.parametrize("text", SAMPLES)
    def test_sanitize_is_idempotent(self, text):
        once = sanitize(text, ["Python"])
        assert sanitize(once, ["Python"]) == once
