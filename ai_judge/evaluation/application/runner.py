"""EvaluationRunner — orchestrates expansion, execution and tracking for a queue."""

import asyncio

from ai_judge.config.domain.execution import ExecutionConfig
from ai_judge.core.errors import AiJudgeError
from ai_judge.evaluation.application.executor import EvaluationExecutor
from ai_judge.evaluation.application.expander import TaskExpander
from ai_judge.evaluation.application.tracker import ProgressCallback, RunTracker
from ai_judge.evaluation.domain.filter import EvaluationFilter
from ai_judge.evaluation.domain.observer import EvaluationObserver
from ai_judge.evaluation.domain.run import EvaluationRun
from ai_judge.evaluation.domain.statistics import Statistics, compute_statistics
from ai_judge.evaluation.domain.task import EvaluationTask
from ai_judge.judge.domain.oracle import ScoringOracle
from ai_judge.storage.domain.store import Store


class EvaluationRunner:
    """Runs every evaluation task of a queue and keeps the run record current.

    The runner is free of infrastructure dependencies: it receives the store
    and the oracle as ports so that fakes can be swapped in for testing
    without touching the orchestration logic.

    Tasks run concurrently, at most ``max_concurrent`` at a time. A failing
    task never stops the batch; only errors outside the per-task boundary
    (for example the store rejecting run metadata) fail the run.
    """

    def __init__(
        self,
        store: Store,
        oracle: ScoringOracle,
        config: ExecutionConfig,
        observer: EvaluationObserver,
    ) -> None:
        self._store = store
        self._oracle = oracle
        self._config = config
        self._observer = observer
        self._expander = TaskExpander(store=store, observer=observer)
        self._cancelled = asyncio.Event()
        self._active_run_id: str | None = None

    def cancel(self) -> None:
        """Stop dispatching new tasks of the active run; in-flight tasks finish and persist.

        The run then ends as failed with fewer processed tasks than its total.
        Calling this while no run is active does nothing, so it never cancels
        a run that starts later.
        """
        if self._active_run_id is None:
            return
        self._cancelled.set()
        self._observer.run_cancel_requested(run_id=self._active_run_id)

    async def run_evaluations(
        self,
        queue_id: str,
        on_progress: ProgressCallback | None = None,
    ) -> EvaluationRun:
        """Execute every task for queue_id and return the terminal run record.

        Raises whatever orchestration-level error stopped the run, after the
        run has been marked failed. A cancelled run is returned, not raised.
        """
        tracker = RunTracker(
            store=self._store, observer=self._observer, on_progress=on_progress
        )
        run = tracker.start(queue_id=queue_id)
        self._active_run_id = run.id
        self._observer.run_started(
            run_id=run.id,
            queue_id=queue_id,
            max_concurrent=self._config.max_concurrent,
        )

        try:
            tasks = self._expander.expand(queue_id=queue_id)
            self._observer.tasks_expanded(
                run_id=run.id, queue_id=queue_id, total_tasks=len(tasks)
            )
            tracker.set_total(total=len(tasks))
            if tasks:
                await self._execute_all(run_id=run.id, tasks=tasks, tracker=tracker)

            processed = tracker.run.processed
            if self._cancelled.is_set() and processed < len(tasks):
                return tracker.fail(
                    reason=f"cancelled after {processed} of {len(tasks)} tasks"
                )
            return tracker.complete()
        except asyncio.CancelledError:
            tracker.fail(reason="run interrupted")
            raise
        except Exception as exc:
            # Per-task failures never get here, only run-level store errors or a
            # broken tracker. A TaskGroup wraps them; surface the first one.
            error = _first_error(exc)
            tracker.fail(reason=_describe(error))
            if error is exc:
                raise
            raise error from exc
        finally:
            self._active_run_id = None
            self._cancelled.clear()

    async def _execute_all(
        self, run_id: str, tasks: list[EvaluationTask], tracker: RunTracker
    ) -> None:
        executor = EvaluationExecutor(
            run_id=run_id,
            oracle=self._oracle,
            store=self._store,
            config=self._config,
            observer=self._observer,
        )
        sem = asyncio.Semaphore(self._config.max_concurrent)
        async with asyncio.TaskGroup() as tg:
            for task in tasks:
                tg.create_task(
                    self._run_one(sem=sem, executor=executor, task=task, tracker=tracker)
                )

    async def _run_one(
        self,
        sem: asyncio.Semaphore,
        executor: EvaluationExecutor,
        task: EvaluationTask,
        tracker: RunTracker,
    ) -> None:
        """Execute one task once a slot is free, unless the run was cancelled meanwhile.

        The slot is held for the whole task, retries and backoff included, so
        at most ``max_concurrent`` tasks are ever talking to the oracle.
        """
        async with sem:
            if self._cancelled.is_set():
                return
            evaluation = await executor.execute(task)
        await tracker.record(succeeded=not evaluation.failed)

    def get_statistics(
        self,
        queue_id: str | None = None,
        filters: EvaluationFilter | None = None,
    ) -> Statistics:
        """Aggregate stored evaluations, optionally for one queue and a filter."""
        if queue_id is None:
            evaluations = self._store.get_evaluations(filters)
        else:
            wanted = {e.id for e in self._store.get_evaluations(filters)}
            evaluations = [
                e for e in self._store.get_evaluations_by_queue(queue_id) if e.id in wanted
            ]
        return compute_statistics(evaluations)


def _first_error(exc: BaseException) -> BaseException:
    while isinstance(exc, BaseExceptionGroup) and exc.exceptions:
        exc = exc.exceptions[0]
    return exc


def _describe(error: BaseException) -> str:
    if isinstance(error, AiJudgeError):
        return str(error)
    return f"{type(error).__name__}: {error}"
