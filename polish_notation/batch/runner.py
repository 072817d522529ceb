"""Evaluate many prefix expressions concurrently using worker processes."""
from multiprocessing import Pipe, Process, cpu_count
from multiprocessing.connection import Connection, wait
from pathlib import Path
from typing import Any, Dict, List, Optional, TextIO, Tuple

from pydantic import BaseModel, ConfigDict, Field

from polish_notation.batch.worker import WorkerProcess
from polish_notation.common.logger import logger


class BatchRunner(BaseModel):
    """
    Evaluate a list of prefix expressions, one worker process per expression.

    Features:
        - Writes each result to disk as soon as its worker finishes.
        - Joins each worker immediately after collecting its payload.
        - Keeps at most ``max_workers`` workers alive (CPU core count by default).
    """

    model_config = ConfigDict(frozen=True)

    output_file: Path = Field(..., description="Path to write evaluation results")
    strict: bool = Field(default=False, description="Evaluate expressions in strict mode")
    max_workers: Optional[int] = Field(default=None, ge=1, description="Upper bound on simultaneous workers")

    def _spawn_worker(self, expr: str, line_number: int) -> Tuple[Process, Connection]:
        """
        Spawn a WorkerProcess for the given expression and return process and pipe.

        :param str expr: Prefix expression
        :param int line_number: Line number of expression in input

        :return: Tuple of (Process, parent_pipe)
        :rtype: Tuple[Process, Connection]
        """
        parent_conn, child_conn = Pipe(duplex=False)
        worker = WorkerProcess(conn=child_conn, expression=expr, line_number=line_number, strict=self.strict)
        process = Process(target=worker.run)
        process.start()
        # The child holds its own copy of the sending end
        child_conn.close()
        return process, parent_conn

    @staticmethod
    def format_payload(payload: Dict[str, Any]) -> str:
        """
        Render a worker payload as one output line.

        :param dict payload: Payload sent by a worker

        :return: ``"<expr> = <result>"`` or ``"<expr> -> ERROR: <message>"``
        :rtype: str
        """
        if "result" in payload:
            return f"{payload['expression']} = {payload['result']}"
        return f"{payload['expression']} -> ERROR: {payload['error']}"

    def _collect_finished_workers(
        self,
        active_workers: List[Tuple[Process, Connection]],
        f_out: TextIO,
        collected: List[Dict[str, Any]],
    ) -> None:
        """
        Collect payloads from all workers that have sent one and write them to the output file.

        Collected workers are removed from active_workers.

        :param list active_workers: List of tuples (Process, Connection)
        :param file f_out: Open file handle for writing results
        :param list collected: Payloads collected so far, appended in place
        """
        # Iterate in reverse to safely remove finished workers while iterating
        for i in reversed(range(len(active_workers))):
            proc, pipe_conn = active_workers[i]
            # A worker may block on send() until its payload is read, so poll before is_alive()
            if not pipe_conn.poll() and proc.is_alive():
                continue
            try:
                payload = pipe_conn.recv()
            except EOFError:
                proc.join()
                payload = {
                    "line": None,
                    "expression": "<unknown>",
                    "error": f"Worker exited with code {proc.exitcode} without a result",
                }
            pipe_conn.close()
            proc.join()
            active_workers.pop(i)

            f_out.write(self.format_payload(payload) + "\n")
            f_out.flush()
            collected.append(payload)

    def _wait_and_collect(
        self,
        active_workers: List[Tuple[Process, Connection]],
        f_out: TextIO,
        collected: List[Dict[str, Any]],
    ) -> None:
        """Block until at least one worker pipe is readable, then collect finished workers."""
        # A pipe becomes readable on a payload or on EOF when its worker dies
        wait([pipe_conn for _, pipe_conn in active_workers])
        self._collect_finished_workers(active_workers, f_out, collected)

    def run(self, expressions: List[str]) -> List[Dict[str, Any]]:
        """
        Evaluate all expressions and write one line per expression to the output file.

        :param List[str] expressions: Prefix expressions, line numbers start at 1

        :return: Worker payloads ordered by line number
        :rtype: List[Dict[str, Any]]
        """
        collected: List[Dict[str, Any]] = []
        max_workers: int = max(1, min(self.max_workers or cpu_count(), len(expressions)))
        active_workers: List[Tuple[Process, Connection]] = []

        logger.info(f"🚀 Evaluating {len(expressions)} expressions with up to {max_workers} workers")

        with self.output_file.open("w", encoding="utf-8") as f_out:
            for line_number, expr in enumerate(expressions, start=1):
                # Wait until a worker slot is available
                while len(active_workers) >= max_workers:
                    self._wait_and_collect(active_workers, f_out, collected)

                active_workers.append(self._spawn_worker(expr, line_number))

            while active_workers:
                self._wait_and_collect(active_workers, f_out, collected)

        logger.info(f"💾 Results written to {self.output_file}")
        return sorted(collected, key=lambda payload: payload["line"] or 0)
