"""Deduplication of repeated accepted attempts at the same problem."""

from collections.abc import Iterable

from loguru import logger

from domain.models import CandidateSubmission


def select_best(candidates: Iterable[CandidateSubmission]) -> list[CandidateSubmission]:
    """
    Keep the fastest detailed submission per problem.

    Candidates are grouped by ``(platform, problem_key)``. Within a group the
    lowest ``metric`` wins and ties keep the first one encountered. Candidates
    without a metric were never detailed; a group made only of those is
    dropped. Groups are returned in order of first appearance.
    """
    best: dict[tuple, CandidateSubmission | None] = {}

    for candidate in candidates:
        key = candidate.group_key
        current = best.setdefault(key, None)

        if candidate.metric is None:
            continue
        if current is None or candidate.metric < current.metric:
            best[key] = candidate

    selected = [candidate for candidate in best.values() if candidate is not None]

    dropped = len(best) - len(selected)
    if dropped:
        logger.warning(f"Dropped {dropped} problem(s) without any detailed submission")

    return selected
