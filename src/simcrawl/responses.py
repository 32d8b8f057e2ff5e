"""
HTTP-style response mapping for crawl outcomes.

The crawler does not own a transport. Whatever serves it (a web framework,
a queue worker, the CLI) turns a CrawlOutcome into a status code and JSON
body with to_response(), so that "no match" and "failed" stay distinct all
the way to the caller.
"""
from dataclasses import dataclass
from typing import Any

from .constants import (
    NO_MATCH_MESSAGE,
    NO_MATCH_MESSAGE_VN,
    TIMED_OUT_MESSAGE,
)
from .errors import FailureReason
from .models import CrawlOutcome, OutcomeKind

STATUS_BY_REASON = {
    FailureReason.INVALID_INPUT: 400,
    FailureReason.SESSION_UNAVAILABLE: 503,
    FailureReason.NAVIGATION_ERROR: 500,
    FailureReason.INTERACTION_ERROR: 500,
    FailureReason.EXTRACTION_FAILURE: 500,
    FailureReason.INTERNAL_ERROR: 500,
}


@dataclass
class CrawlResponse:
    """Status code and JSON-ready body for one outcome."""
    status_code: int
    body: dict[str, Any]

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300


def to_response(outcome: CrawlOutcome) -> CrawlResponse:
    """
    Map an outcome to the boundary contract.

    - MATCHES   -> 200 with the ordered records
    - NO_MATCH  -> 404 with an explicit no-match message
    - TIMED_OUT -> 504
    - FAILED    -> 400 for invalid input, 503 when no session is available,
                   500 otherwise
    """
    if outcome.kind is OutcomeKind.MATCHES:
        data = [record.to_dict() for record in outcome.records]
        return CrawlResponse(200, {"success": True, "data": data, "length": len(data)})

    if outcome.kind is OutcomeKind.NO_MATCH:
        return CrawlResponse(404, {
            "success": True,
            "data": None,
            "message": NO_MATCH_MESSAGE,
            "message_vn": NO_MATCH_MESSAGE_VN,
        })

    if outcome.kind is OutcomeKind.TIMED_OUT:
        return CrawlResponse(504, {
            "success": False,
            "error": "timed_out",
            "message": TIMED_OUT_MESSAGE,
        })

    body: dict[str, Any] = {
        "success": False,
        "error": outcome.reason.value if outcome.reason else FailureReason.INTERNAL_ERROR.value,
        "message": outcome.detail,
    }
    if outcome.detail_vn:
        body["message_vn"] = outcome.detail_vn

    return CrawlResponse(STATUS_BY_REASON.get(outcome.reason, 500), body)
