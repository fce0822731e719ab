from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Tuple

import requests
from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_exponential

from .exceptions import ScoreReportError

logger = logging.getLogger(__name__)

# Seconds; the report blocks the game loop for at most this long per attempt
DEFAULT_TIMEOUT = 2.0


class NullScoreSink:
    """Drops every report. Default when no endpoint is configured."""

    def report(self, final_score: int, game_id: int) -> None:
        logger.debug("NullScoreSink.report(%d, %d) (no-op)", final_score, game_id)


class LoggingScoreSink:
    """Logs reports and keeps them in memory; handy for headless runs."""

    def __init__(self) -> None:
        self.reports: List[Tuple[int, int]] = []

    def report(self, final_score: int, game_id: int) -> None:
        self.reports.append((final_score, game_id))
        logger.info("Final score %d reported for game %d", final_score, game_id)


class HttpScoreSink:
    """POSTs the final score as JSON to a scoring endpoint.

    Best effort: failures are logged and dropped, never raised to the caller.
    ``attempts`` > 1 enables bounded retries with exponential backoff; the
    default of 1 sends exactly once.

    The POST is synchronous. It runs inside the frame that ends the session,
    so that frame can stall for up to ``timeout`` seconds per attempt plus the
    backoff between attempts. Keep both small for interactive hosts.
    """

    def __init__(
        self,
        url: str,
        *,
        attempts: int = 1,
        timeout: float = DEFAULT_TIMEOUT,
        session: Optional[requests.Session] = None,
    ) -> None:
        if not url:
            raise ValueError("Score endpoint URL is required")
        if attempts < 1:
            raise ValueError("attempts must be at least 1")
        self.url = url
        self.attempts = attempts
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update({"User-Agent": "catchfall-score-reporter"})

    def _post(self, payload: Dict[str, Any]) -> requests.Response:
        try:
            resp = self.session.post(self.url, json=payload, timeout=self.timeout)
        except requests.RequestException as exc:
            raise ScoreReportError(f"Score endpoint unreachable: {exc}") from exc
        if resp.status_code >= 400:
            raise ScoreReportError(f"Score endpoint error {resp.status_code}: {resp.text}")
        return resp

    def report(self, final_score: int, game_id: int) -> None:
        payload = {"score": int(final_score), "game": int(game_id)}
        send = retry(
            wait=wait_exponential(multiplier=0.5, min=0.5, max=4),
            stop=stop_after_attempt(self.attempts),
            retry=retry_if_exception_type(ScoreReportError),
            reraise=True,
        )(self._post)
        try:
            send(payload)
            logger.info("Reported final score %d for game %d", final_score, game_id)
        except ScoreReportError as exc:
            logger.warning("Dropping score report %s: %s", payload, exc)


def build_score_sink(url: Optional[str], attempts: int = 1):
    """Pick a sink for the configured endpoint (or lack of one)."""
    if url:
        return HttpScoreSink(url, attempts=attempts)
    return LoggingScoreSink()
