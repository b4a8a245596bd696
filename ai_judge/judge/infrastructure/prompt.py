"""Evaluation prompt template, compiled and rendered with Jinja."""

from pathlib import Path

import jinja2
from jinja2 import meta

from ai_judge.judge.infrastructure.errors import PromptTemplateError

DEFAULT_TEMPLATE = """\
# AI Judge Evaluation

## Judge Instructions
{{systemPrompt}}

## Question
{{question}}

## User's Answer
{{answer}}

## Task
Evaluate the answer according to the judge instructions above and provide:

1. **Verdict**: "pass", "fail", or "inconclusive"
2. **Reasoning**: Brief explanation (1-2 sentences)

Return your evaluation as JSON:
```json
{
  "verdict": "pass" | "fail" | "inconclusive",
  "reasoning": "Your explanation here"
}
```"""

PLACEHOLDERS = frozenset({"systemPrompt", "question", "answer"})

_env = jinja2.Environment(
    autoescape=False,
    keep_trailing_newline=True,
    undefined=jinja2.StrictUndefined,
)


def load_template(path: Path | None) -> jinja2.Template:
    """Compile the template stored at path, or the built-in one when path is None.

    Raises:
        PromptTemplateError: if the template does not parse or references a
            variable other than systemPrompt, question and answer.
    """
    source = DEFAULT_TEMPLATE if path is None else path.read_text(encoding="utf-8")
    origin = "built-in template" if path is None else str(path)
    try:
        unknown = meta.find_undeclared_variables(_env.parse(source)) - PLACEHOLDERS
    except jinja2.TemplateSyntaxError as exc:
        raise PromptTemplateError(origin=origin, reason=str(exc)) from exc
    if unknown:
        raise PromptTemplateError(
            origin=origin,
            reason=f"unknown variable(s) {', '.join(sorted(unknown))}",
        )
    return _env.from_string(source)


def render_template(template: jinja2.Template, variables: dict[str, str]) -> str:
    return template.render(**variables)
