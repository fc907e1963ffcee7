"""Leaderboard — best score per user, ranked.

Invariants:
    - One entry per userName: its best record (higher score, then lower timeSpent)
    - Ties that are equal on both keys keep the first record seen
    - Ranking: score descending, timeSpent ascending; rank is 1-based position
    - Pure: input records are not modified

Design Decisions:
    - Dict keyed by userName keeps first-seen order, so sorted() stays stable
      for full ties
"""

from exambank.core.domain_types import DEFAULT_LEADERBOARD_SIZE, ScoreRecord


def _is_better(candidate: ScoreRecord, best: ScoreRecord) -> bool:
    if candidate["score"] != best["score"]:
        return candidate["score"] > best["score"]
    return candidate["timeSpent"] < best["timeSpent"]


def best_per_user(records: list[ScoreRecord]) -> list[ScoreRecord]:
    best: dict[str, ScoreRecord] = {}
    for record in records:
        current = best.get(record["userName"])
        if current is None or _is_better(record, current):
            best[record["userName"]] = record
    return list(best.values())


def build_leaderboard(
    records: list[ScoreRecord], top_n: int = DEFAULT_LEADERBOARD_SIZE,
) -> list[dict]:
    """Top top_n users with rank, userName, score, timeSpent."""
    ranked = sorted(
        best_per_user(records),
        key=lambda r: (-r["score"], r["timeSpent"]),
    )
    return [
        {
            "rank": position,
            "userName": entry["userName"],
            "score": entry["score"],
            "timeSpent": entry["timeSpent"],
        }
        for position, entry in enumerate(ranked[:top_n], start=1)
    ]
