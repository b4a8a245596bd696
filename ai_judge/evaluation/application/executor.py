"""EvaluationExecutor — scores one task against the oracle and records the outcome."""

import asyncio
import time
import uuid
from datetime import UTC, datetime

from pydantic import ValidationError

from ai_judge.config.domain.execution import ExecutionConfig
from ai_judge.core.errors import AiJudgeError
from ai_judge.evaluation.domain.evaluation import Evaluation
from ai_judge.evaluation.domain.observer import EvaluationObserver
from ai_judge.evaluation.domain.task import EvaluationTask
from ai_judge.judge.domain.oracle import ScoringOracle
from ai_judge.judge.domain.verdict import OracleVerdict, Verdict
from ai_judge.judge.infrastructure.errors import (
    OracleInvocationError,
    OracleMalformedResponseError,
    OracleTimeoutError,
)
from ai_judge.storage.domain.store import Store
from ai_judge.storage.infrastructure.errors import StoreWriteError
from ai_judge.submission.domain.submission import Answer

MISSING_ANSWER_TEXT = "No answer provided"
FAILED_REASONING = "Evaluation failed due to an error"


def format_answer(answer: Answer | None) -> str:
    """Render an answer as the labelled lines the judge prompt expects."""
    if answer is None:
        return f"Answer: {MISSING_ANSWER_TEXT}"
    lines: list[str] = []
    if answer.choice:
        lines.append(f"Choice: {answer.choice}")
    if answer.reasoning:
        lines.append(f"Reasoning: {answer.reasoning}")
    if answer.text:
        lines.append(f"Answer: {answer.text}")
    if answer.choices:
        lines.append(f"Choices: {', '.join(answer.choices)}")
    return "\n".join(lines)


class EvaluationExecutor:
    """Runs single tasks for one evaluation run.

    One instance is constructed per run. The run id is injected at
    construction so that observer events carry full context without
    polluting the execute() signature.

    execute() does not raise for oracle or per-task store failures: every
    such outcome comes back as an Evaluation whose ``error`` is set.
    """

    def __init__(
        self,
        run_id: str,
        oracle: ScoringOracle,
        store: Store,
        config: ExecutionConfig,
        observer: EvaluationObserver,
    ) -> None:
        self._run_id = run_id
        self._oracle = oracle
        self._store = store
        self._config = config
        self._observer = observer

    async def execute(self, task: EvaluationTask) -> Evaluation:
        """Score task with retry and backoff, persist the result, and return it."""
        self._observer.task_started(
            run_id=self._run_id,
            submission_id=task.submission.id,
            question_id=task.question_id,
            judge_id=task.judge_id,
        )
        formatted_answer = format_answer(task.submission.answer_for(task.question_id))

        start = time.monotonic()
        try:
            result = await self._score(task=task, formatted_answer=formatted_answer)
        except AiJudgeError as exc:
            evaluation = _failed_evaluation(
                task=task, reason=str(exc), execution_time=_elapsed_ms(start)
            )
        else:
            evaluation = Evaluation(
                id=str(uuid.uuid4()),
                submission_id=task.submission.id,
                question_id=task.question_id,
                judge_id=task.judge_id,
                verdict=result.verdict,
                reasoning=result.reasoning,
                execution_time=_elapsed_ms(start),
                created_at=datetime.now(UTC),
            )

        evaluation = self._persist(evaluation=evaluation, task=task)

        if evaluation.error is not None:
            self._observer.task_failed(
                run_id=self._run_id,
                submission_id=task.submission.id,
                question_id=task.question_id,
                judge_id=task.judge_id,
                reason=evaluation.error,
            )
        else:
            self._observer.task_completed(
                run_id=self._run_id,
                submission_id=task.submission.id,
                question_id=task.question_id,
                judge_id=task.judge_id,
                verdict=evaluation.verdict.value,
                execution_time_ms=evaluation.execution_time or 0,
            )
        return evaluation

    def _persist(self, evaluation: Evaluation, task: EvaluationTask) -> Evaluation:
        """Write the evaluation; on a store error return the unsaved failure record."""
        try:
            self._store.create_evaluation(evaluation)
        except StoreWriteError as exc:
            self._observer.evaluation_persist_failed(
                run_id=self._run_id,
                evaluation_id=evaluation.id,
                reason=str(exc),
            )
            return _failed_evaluation(
                task=task,
                reason=str(exc),
                execution_time=evaluation.execution_time,
                evaluation_id=evaluation.id,
            )
        return evaluation

    async def _score(self, task: EvaluationTask, formatted_answer: str) -> OracleVerdict:
        """Call the oracle until it yields a valid verdict or attempts run out.

        The sleep between attempts grows by ``backoff_multiplier`` each time.
        Non-retriable errors are raised immediately.
        """
        retry_cfg = self._config.retry
        backoff = retry_cfg.initial_backoff_seconds
        attempt = 1
        while True:
            try:
                return await self._attempt(task=task, formatted_answer=formatted_answer)
            except AiJudgeError as exc:
                if not exc.retriable or attempt >= retry_cfg.max_attempts:
                    raise
                self._observer.task_retry(
                    run_id=self._run_id,
                    submission_id=task.submission.id,
                    question_id=task.question_id,
                    judge_id=task.judge_id,
                    attempt=attempt,
                    reason=str(exc),
                    backoff_seconds=backoff,
                )
            await asyncio.sleep(backoff)
            backoff *= retry_cfg.backoff_multiplier
            attempt += 1

    async def _attempt(
        self, task: EvaluationTask, formatted_answer: str
    ) -> OracleVerdict:
        timeout = self._config.attempt_timeout_seconds
        try:
            async with asyncio.timeout(timeout):
                raw = await self._oracle.evaluate(
                    system_prompt=task.judge.system_prompt,
                    question_text=task.question.data.question_text,
                    formatted_answer=formatted_answer,
                    model_name=task.judge.model_name,
                )
        except TimeoutError as exc:
            raise OracleTimeoutError(timeout_seconds=timeout) from exc
        except AiJudgeError:
            raise
        except Exception as exc:
            raise OracleInvocationError(reason=str(exc) or type(exc).__name__) from exc

        try:
            return OracleVerdict.model_validate(raw)
        except ValidationError as exc:
            raise OracleMalformedResponseError(reason=_describe(exc)) from exc


def _failed_evaluation(
    task: EvaluationTask,
    reason: str,
    execution_time: int | None,
    evaluation_id: str | None = None,
) -> Evaluation:
    return Evaluation(
        id=evaluation_id or str(uuid.uuid4()),
        submission_id=task.submission.id,
        question_id=task.question_id,
        judge_id=task.judge_id,
        verdict=Verdict.INCONCLUSIVE,
        reasoning=FAILED_REASONING,
        execution_time=execution_time,
        error=reason,
        created_at=datetime.now(UTC),
    )


def _elapsed_ms(start: float) -> int:
    return int((time.monotonic() - start) * 1000)


def _describe(exc: ValidationError) -> str:
    return "; ".join(
        f"{'.'.join(str(part) for part in error['loc']) or 'response'}: {error['msg']}"
        for error in exc.errors()
    )
