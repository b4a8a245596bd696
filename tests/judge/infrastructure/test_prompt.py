"""Tests for prompt template loading and rendering."""

from pathlib import Path

import pytest

from ai_judge.judge.infrastructure.errors import PromptTemplateError
from ai_judge.judge.infrastructure.prompt import (
    DEFAULT_TEMPLATE,
    load_template,
    render_template,
)

_VARIABLES = {"systemPrompt": "S", "question": "Q", "answer": "A"}


def _write(tmp_path: Path, source: str) -> Path:
    path = tmp_path / "prompt.md"
    path.write_text(source, encoding="utf-8")
    return path


# ---------------------------------------------------------------------------
# render_template
# ---------------------------------------------------------------------------


class TestRenderTemplate:
    def test_replaces_every_placeholder(self, tmp_path: Path) -> None:
        template = load_template(
            _write(tmp_path, "{{systemPrompt}} | {{question}} | {{answer}}")
        )

        assert render_template(template, _VARIABLES) == "S | Q | A"

    def test_repeated_placeholder_is_replaced_everywhere(self, tmp_path: Path) -> None:
        template = load_template(_write(tmp_path, "{{answer}}-{{answer}}"))

        assert render_template(template, _VARIABLES) == "A-A"

    def test_values_are_not_expanded_again(self, tmp_path: Path) -> None:
        template = load_template(_write(tmp_path, "{{answer}}"))

        rendered = render_template(
            template, {**_VARIABLES, "answer": "{{question}}"}
        )

        assert rendered == "{{question}}"

    def test_builtin_template_keeps_json_example_braces(self) -> None:
        rendered = render_template(load_template(None), _VARIABLES)

        assert '"verdict": "pass" | "fail" | "inconclusive"' in rendered
        assert "## Question\nQ\n" in rendered
        assert "{{" not in rendered


# ---------------------------------------------------------------------------
# load_template
# ---------------------------------------------------------------------------


class TestLoadTemplate:
    def test_builtin_template_has_all_placeholders(self) -> None:
        for name in ("{{systemPrompt}}", "{{question}}", "{{answer}}"):
            assert name in DEFAULT_TEMPLATE

    def test_reads_file(self, tmp_path: Path) -> None:
        template = load_template(_write(tmp_path, "custom {{answer}}"))

        assert render_template(template, _VARIABLES) == "custom A"

    def test_unknown_variable_is_rejected(self, tmp_path: Path) -> None:
        path = _write(tmp_path, "{{other}} {{answer}}")

        with pytest.raises(PromptTemplateError, match="unknown variable\\(s\\) other"):
            load_template(path)

    def test_syntax_error_is_rejected(self, tmp_path: Path) -> None:
        path = _write(tmp_path, "{{answer")

        with pytest.raises(PromptTemplateError) as exc_info:
            load_template(path)

        assert exc_info.value.origin == str(path)
        assert exc_info.value.retriable is False

    def test_missing_file_raises_os_error(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            load_template(tmp_path / "absent.md")
