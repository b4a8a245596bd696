"""CLI entrypoint for ai-judge — typer app with `validate` and `run` commands."""

import asyncio
import json
import sys
from datetime import datetime
from pathlib import Path

import structlog
import typer

from ai_judge.config.infrastructure.observer import StructlogConfigObserver
from ai_judge.config.infrastructure.yaml_loader import YamlConfigLoader
from ai_judge.core.errors import AiJudgeError
from ai_judge.evaluation.application.runner import EvaluationRunner
from ai_judge.evaluation.domain.evaluation import Evaluation
from ai_judge.evaluation.domain.observer import EvaluationObserver
from ai_judge.evaluation.domain.run import EvaluationRun
from ai_judge.evaluation.domain.statistics import Statistics, statistics_by_judge
from ai_judge.evaluation.infrastructure.composite_observer import (
    CompositeEvaluationObserver,
)
from ai_judge.evaluation.infrastructure.observer import StructlogEvaluationObserver
from ai_judge.evaluation.infrastructure.progress_observer import (
    ProgressEvaluationObserver,
)
from ai_judge.judge.application.roster import apply_roster
from ai_judge.judge.infrastructure.litellm import LiteLLMScoringOracle
from ai_judge.judge.infrastructure.observer import StructlogOracleObserver
from ai_judge.judge.infrastructure.roster_loader import load_roster
from ai_judge.storage.infrastructure.memory import InMemoryStore
from ai_judge.submission.application.ingestor import SubmissionIngestor
from ai_judge.submission.infrastructure.json_parser import SubmissionParser
from ai_judge.submission.infrastructure.observer import StructlogSubmissionObserver

app = typer.Typer(add_completion=False)


def _configure_structlog(log_format: str) -> None:
    """Configure structlog based on the requested format."""
    if log_format == "console":
        renderer: structlog.types.Processor = structlog.dev.ConsoleRenderer()
    elif log_format == "json":
        renderer = structlog.processors.JSONRenderer()
    else:
        typer.echo(f"Invalid log format: {log_format!r}. Must be 'console' or 'json'.")
        raise typer.Exit(code=1)

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(0),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
    )


def _format_stats(stats: Statistics) -> str:
    return (
        f"{stats.total_evaluations} evaluations  "
        f"pass {stats.pass_count}  fail {stats.fail_count}  "
        f"inconclusive {stats.inconclusive_count}  "
        f"pass rate {stats.pass_rate:.1f}%"
    )


def _print_summary(runs: list[EvaluationRun], evaluations: list[Evaluation]) -> None:
    typer.echo("")
    for run in runs:
        typer.echo(
            f"{run.queue_id}: {run.status.value}  "
            f"{run.completed_evaluations} completed, "
            f"{run.failed_evaluations} failed of {run.total_evaluations}"
        )
    for judge_id, stats in statistics_by_judge(evaluations).items():
        typer.echo(f"  {judge_id:<24} {_format_stats(stats)}")


def _write_outputs(
    output_dir: Path, runs: list[EvaluationRun], evaluations: list[Evaluation]
) -> Path:
    """Write runs and evaluations as one camelCase JSON document. Returns its path."""
    stamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    path = output_dir / f"evaluations_{stamp}.json"
    document = {
        "runs": [run.model_dump(mode="json", by_alias=True) for run in runs],
        "evaluations": [
            evaluation.model_dump(mode="json", by_alias=True)
            for evaluation in evaluations
        ],
    }
    path.write_text(json.dumps(document, indent=2), encoding="utf-8")
    return path


@app.command()
def validate(
    submissions_path: Path = typer.Argument(..., help="Path to submissions JSON"),
) -> None:
    """Check a submissions file without storing or evaluating anything."""
    _configure_structlog(log_format="console")
    parser = SubmissionParser(observer=StructlogSubmissionObserver())
    try:
        batch = parser.parse_and_normalize(submissions_path.read_bytes())
    except OSError as exc:
        typer.echo(f"Cannot read {submissions_path}: {exc}")
        raise typer.Exit(code=1) from exc
    except AiJudgeError as exc:
        typer.echo(str(exc))
        raise typer.Exit(code=1) from exc

    typer.echo(
        f"{len(batch.submissions)} submissions across {len(batch.queues)} queues"
    )
    for queue in batch.queues:
        typer.echo(f"  {queue.source_id}: {queue.submission_count} submissions")


async def _run_all(
    submissions_path: Path,
    roster_path: Path,
    config_path: Path | None,
    observer: EvaluationObserver,
) -> tuple[list[EvaluationRun], list[Evaluation]]:
    config = YamlConfigLoader(observer=StructlogConfigObserver()).load(path=config_path)
    roster = load_roster(path=roster_path)

    store = InMemoryStore()
    ingestor = SubmissionIngestor(
        parser=SubmissionParser(observer=StructlogSubmissionObserver()),
        store=store,
        config=config.ingestion,
        observer=StructlogSubmissionObserver(),
    )
    batch = await ingestor.ingest_file(path=submissions_path)
    apply_roster(store=store, roster=roster, batch=batch)

    runner = EvaluationRunner(
        store=store,
        oracle=LiteLLMScoringOracle(
            config=config.oracle, observer=StructlogOracleObserver()
        ),
        config=config.execution,
        observer=observer,
    )
    runs = [await runner.run_evaluations(queue_id=queue.id) for queue in batch.queues]
    return runs, store.get_evaluations()


@app.command()
def run(
    submissions_path: Path = typer.Argument(..., help="Path to submissions JSON"),
    roster_path: Path = typer.Option(
        ..., "--roster", "-r", help="Path to judge roster YAML"
    ),
    config_path: Path | None = typer.Option(
        None, "--config", "-c", help="Path to ai-judge config YAML"
    ),
    output_dir: Path = typer.Option(
        Path("./results"),
        "--output-dir",
        "-o",
        help="Directory for output files",
    ),
    log_format: str = typer.Option(
        "console",
        "--log-format",
        help="Log format: 'console' or 'json'",
    ),
) -> None:
    """Ingest submissions, assign the roster's judges and evaluate every queue."""
    _configure_structlog(log_format=log_format)

    observers: list[EvaluationObserver] = [StructlogEvaluationObserver()]
    if log_format != "json":
        observers.append(ProgressEvaluationObserver())
    observer = CompositeEvaluationObserver(observers=observers)

    try:
        runs, evaluations = asyncio.run(
            _run_all(
                submissions_path=submissions_path,
                roster_path=roster_path,
                config_path=config_path,
                observer=observer,
            )
        )
        output_dir.mkdir(parents=True, exist_ok=True)
        output_path = _write_outputs(
            output_dir=output_dir, runs=runs, evaluations=evaluations
        )
    except KeyboardInterrupt:
        typer.echo("Evaluation interrupted.")
        sys.exit(1)
    except AiJudgeError as exc:
        typer.echo(str(exc))
        sys.exit(1)
    except OSError as exc:
        typer.echo(f"I/O error: {exc}")
        sys.exit(1)

    _print_summary(runs=runs, evaluations=evaluations)
    typer.echo(f"\nResults written to {output_path}")


if __name__ == "__main__":
    app()
