"""YAML roster loader — reads judges and assignments and checks their references."""

from pathlib import Path
from typing import Any

from pydantic import ValidationError

from ai_judge.config.infrastructure.errors import ConfigValidationError
from ai_judge.config.infrastructure.yaml_loader import load_yaml_document
from ai_judge.judge.domain.roster import JudgeRoster


def load_roster(path: Path) -> JudgeRoster:
    """
    Load and validate a JudgeRoster from a YAML file.

    Raises:
        ConfigLoadError: if the file is missing or is not valid YAML.
        MissingEnvVarsError: if any ${ENV_VAR} references are unset.
        ConfigValidationError: if the schema is violated, judge ids repeat, or
            assignments reference unknown judges (all problems listed).
    """
    document = load_yaml_document(path=path)
    roster = _build_roster(document=document)
    _check_references(roster=roster)
    return roster


def _build_roster(document: Any) -> JudgeRoster:
    if not isinstance(document, dict):
        raise ConfigValidationError("roster document must be a mapping")
    try:
        return JudgeRoster.model_validate(document)
    except ValidationError as exc:
        raise ConfigValidationError(str(exc)) from exc


def _check_references(roster: JudgeRoster) -> None:
    problems: list[str] = []
    seen: set[str] = set()
    for judge in roster.judges:
        if judge.id in seen:
            problems.append(f"duplicate judge id '{judge.id}'")
        seen.add(judge.id)

    for assignment in roster.assignments:
        for judge_id in assignment.judge_ids:
            if judge_id not in seen:
                problems.append(
                    f"assignment for question '{assignment.question_id}' in queue"
                    f" '{assignment.queue_id}' references unknown judge '{judge_id}'"
                )

    if problems:
        raise ConfigValidationError("; ".join(problems))
