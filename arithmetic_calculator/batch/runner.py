"""Evaluate a batch of arithmetic expressions using worker processes."""
from multiprocessing import Pipe, Process, cpu_count
from multiprocessing.connection import Connection, wait
from pathlib import Path
from typing import Dict, List, Optional, TextIO, Tuple

from pydantic import BaseModel, Field

from arithmetic_calculator.batch.worker import WorkerProcess
from arithmetic_calculator.common.logger import logger
from arithmetic_calculator.common.operations import OperationResult


ActiveWorker = Tuple[Process, Connection]


class BatchRunner(BaseModel):
    """
    Evaluate many expressions, one worker process per expression.

    Features:
        - Spawns one worker process per expression.
        - Writes results immediately to disk as soon as a worker finishes.
        - Ensures each worker is joined immediately after finishing.
        - Keeps at most ``max_workers`` workers alive (CPU count by default).
    """

    output_file: Path = Field(..., description="Path to write computation results")
    max_workers: Optional[int] = Field(
        default=None, ge=1, description="Maximum number of simultaneous workers, CPU count if unset"
    )

    def _worker_limit(self, expression_count: int) -> int:
        """Return how many workers may run at once for this batch."""
        limit: int = self.max_workers or cpu_count()
        return max(1, min(limit, expression_count))

    def _spawn_worker(self, expr: str, line_number: int) -> ActiveWorker:
        """
        Spawn a WorkerProcess for the given expression and return process and pipe.

        :param str expr: Arithmetic expression
        :param int line_number: Line number of expression in input

        :return: Tuple of (Process, parent connection)
        :rtype: Tuple[Process, Connection]
        """
        parent_conn, child_conn = Pipe(duplex=False)
        worker = WorkerProcess(conn=child_conn, expression=expr, line_number=line_number)
        process = Process(target=worker.run)
        process.start()
        # The parent keeps only its own end so EOF is seen if the child dies
        child_conn.close()
        return process, parent_conn

    def _collect_finished_workers(
        self,
        active_workers: List[ActiveWorker],
        f_out: TextIO,
        results: Dict[int, OperationResult],
    ) -> None:
        """
        Collect results from all finished workers and write them to the output file.

        Blocks until at least one worker has sent its payload. Finished workers are
        removed from ``active_workers`` and their results stored in ``results`` by line.

        :param list active_workers: List of tuples (Process, Connection)
        :param TextIO f_out: Open file handle for writing results
        :param dict results: Results collected so far, keyed by line number
        """
        wait([pipe_conn for _, pipe_conn in active_workers])

        # Iterate in reverse to safely remove finished workers while iterating
        for i in reversed(range(len(active_workers))):
            proc, pipe_conn = active_workers[i]
            if not pipe_conn.poll():
                continue

            try:
                payload = pipe_conn.recv()
            except EOFError:
                payload = None
            pipe_conn.close()
            proc.join()
            active_workers.pop(i)

            if payload is None:
                logger.error(f"⚙️❌ Worker exited with code {proc.exitcode} without sending a result")
                continue

            line_number: int = payload.pop("line")
            outcome = OperationResult(**payload)
            results[line_number] = outcome

            f_out.write(outcome.format_line() + "\n")
            f_out.flush()

    def _terminate_workers(self, active_workers: List[ActiveWorker]) -> None:
        """
        Terminate and join workers still alive after the batch was interrupted.

        :param list active_workers: List of tuples (Process, Connection), emptied on return
        """
        if active_workers:
            logger.warning(f"⚙️❌ Terminating {len(active_workers)} unfinished workers")
        while active_workers:
            proc, pipe_conn = active_workers.pop()
            if proc.is_alive():
                proc.terminate()
            proc.join()
            pipe_conn.close()

    def run(self, expressions: List[str]) -> List[OperationResult]:
        """
        Evaluate every expression and write one result line per expression.

        Steps:
            1. Open the output file.
            2. Spawn a worker per expression, waiting while the worker limit is reached.
            3. Write each result as soon as its worker finishes.
            4. Wait for the remaining workers.

        :param List[str] expressions: Non-empty expressions, in input order

        :return: Results ordered by input line
        :rtype: List[OperationResult]
        """
        max_workers: int = self._worker_limit(len(expressions))
        logger.info(f"⚙️ Evaluating {len(expressions)} expressions with up to {max_workers} workers")

        active_workers: List[ActiveWorker] = []
        results: Dict[int, OperationResult] = {}

        try:
            with self.output_file.open("w", encoding="utf-8") as f_out:
                for line_number, expr in enumerate(expressions, start=1):
                    # Wait until a worker slot is available
                    while len(active_workers) >= max_workers:
                        self._collect_finished_workers(active_workers, f_out, results)

                    active_workers.append(self._spawn_worker(expr, line_number))

                # Collect remaining active workers
                while active_workers:
                    self._collect_finished_workers(active_workers, f_out, results)
        finally:
            self._terminate_workers(active_workers)

        logger.info(f"💾 Results written to {self.output_file}")
        return [results[line] for line in sorted(results)]
