"""ProgressEvaluationObserver — renders a Rich progress bar per evaluation run to stderr."""

from __future__ import annotations

from rich.console import Console
from rich.progress import (
    Progress,
    ProgressColumn,
    Task,
    TaskID,
    TextColumn,
    TimeElapsedColumn,
    TimeRemainingColumn,
)
from rich.text import Text


class _CountsColumn(ProgressColumn):
    """Renders passed-or-failed counts as ok+failed/total."""

    def render(self, task: Task) -> Text:
        ok = int(task.fields.get("ok", 0))
        failed = int(task.fields.get("failed", 0))
        total = int(task.total or 0)
        return Text.assemble(
            (str(ok), "bright_green"),
            ("+", "dim white"),
            (str(failed), "red"),
            ("/", "dim white"),
            (str(total), "default"),
        )


class _ThreeSegmentBarColumn(ProgressColumn):
    """ProgressColumn that renders three segments: done, in-flight, remaining."""

    def __init__(self, bar_width: int = 40) -> None:
        super().__init__()
        self.bar_width = bar_width

    def render(self, task: Task) -> Text:
        bar_width = self.bar_width or 40
        total = task.total or 0
        if total > 0:
            done_cells = int(task.completed / total * bar_width)
            inflight = int(task.fields.get("inflight", 0))
            inflight_cells = min(
                int(inflight / total * bar_width),
                bar_width - done_cells,
            )
        else:
            done_cells = bar_width
            inflight_cells = 0
        remaining_cells = bar_width - done_cells - inflight_cells

        result = Text()
        result.append("█" * done_cells, style="bright_green")
        result.append("▒" * inflight_cells, style="grey50")
        result.append("░" * remaining_cells, style="dim white")
        return result


def _make_progress(console: Console) -> Progress:
    return Progress(
        TextColumn("{task.description}"),
        _ThreeSegmentBarColumn(bar_width=40),
        _CountsColumn(),
        TimeElapsedColumn(),
        TextColumn("eta"),
        TimeRemainingColumn(),
        console=console,
        refresh_per_second=10,
        transient=False,
    )


class ProgressEvaluationObserver:
    """Renders one Rich progress row per run on stderr.

    The row is created when the task list is known (``tasks_expanded``) and
    stopped on ``run_completed`` or ``run_failed``; every other event only
    moves counters. Pass ``disabled=True`` to keep the counters without any
    terminal output (useful in tests).

    Does NOT inherit from EvaluationObserver (structural typing via Protocol).
    """

    def __init__(self, disabled: bool = False) -> None:
        self._disabled = disabled
        self._progress: Progress | None = None
        self._task_ids: dict[str, TaskID] = {}
        self._queue_ids: dict[str, str] = {}
        self.ok: dict[str, int] = {}
        self.failed: dict[str, int] = {}
        self.inflight: dict[str, int] = {}
        self.total: dict[str, int] = {}

    def _update(self, run_id: str) -> None:
        if self._progress is None or run_id not in self._task_ids:
            return
        self._progress.update(
            self._task_ids[run_id],
            completed=self.ok[run_id] + self.failed[run_id],
            ok=self.ok[run_id],
            failed=self.failed[run_id],
            inflight=self.inflight[run_id],
        )

    def _finish(self, run_id: str) -> None:
        self._task_ids.pop(run_id, None)
        if self._progress is not None and not self._task_ids:
            self._progress.stop()
            self._progress = None

    def run_started(self, run_id: str, queue_id: str, max_concurrent: int) -> None:
        self._queue_ids[run_id] = queue_id
        self.ok[run_id] = 0
        self.failed[run_id] = 0
        self.inflight[run_id] = 0
        self.total[run_id] = 0

    def tasks_expanded(self, run_id: str, queue_id: str, total_tasks: int) -> None:
        self.total[run_id] = total_tasks
        if self._disabled:
            return
        if self._progress is None:
            self._progress = _make_progress(console=Console(stderr=True))
            self._progress.start()
        self._task_ids[run_id] = self._progress.add_task(
            description=f"[cyan]{queue_id}[/cyan]",
            total=float(total_tasks),
            ok=0,
            failed=0,
            inflight=0,
        )

    def assignment_skipped(
        self,
        queue_id: str,
        submission_id: str,
        question_id: str,
        judge_id: str,
        reason: str,
    ) -> None:
        pass

    def task_started(
        self, run_id: str, submission_id: str, question_id: str, judge_id: str
    ) -> None:
        if run_id in self.inflight:
            self.inflight[run_id] += 1
        self._update(run_id=run_id)

    def task_completed(
        self,
        run_id: str,
        submission_id: str,
        question_id: str,
        judge_id: str,
        verdict: str,
        execution_time_ms: int,
    ) -> None:
        pass

    def task_failed(
        self,
        run_id: str,
        submission_id: str,
        question_id: str,
        judge_id: str,
        reason: str,
    ) -> None:
        pass

    def task_retry(
        self,
        run_id: str,
        submission_id: str,
        question_id: str,
        judge_id: str,
        attempt: int,
        reason: str,
        backoff_seconds: float,
    ) -> None:
        pass

    def evaluation_persist_failed(
        self, run_id: str, evaluation_id: str, reason: str
    ) -> None:
        pass

    def run_progress(
        self, run_id: str, completed: int, failed: int, total: int, percent: int
    ) -> None:
        if run_id not in self.ok:
            return
        self.ok[run_id] = completed
        self.failed[run_id] = failed
        self.inflight[run_id] = max(0, self.inflight[run_id] - 1)
        self._update(run_id=run_id)

    def run_completed(
        self,
        run_id: str,
        total: int,
        completed: int,
        failed: int,
        elapsed_seconds: float,
    ) -> None:
        self._finish(run_id=run_id)

    def run_cancel_requested(self, run_id: str) -> None:
        pass

    def run_failed(self, run_id: str, reason: str) -> None:
        self._finish(run_id=run_id)

    def run_failure_not_persisted(self, run_id: str, reason: str) -> None:
        pass
