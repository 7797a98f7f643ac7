"""
Score checker results against the guide labels (binary: has_issues or not).

Snippets the guide text marks as bad (❌, "Wrong", "Avoid", ...) should be
flagged; snippets marked good should come back clean.
"""
from __future__ import annotations

from dataclasses import dataclass

from guides.runner import SnippetResult


@dataclass
class BinaryMetrics:
    """Binary classification metrics (accessible vs has_issues)."""
    accuracy: float
    tp: int
    tn: int
    fp: int
    fn: int
    total: int
    unlabeled: int  # snippets with no bad/good label; not scored


def score_binary(results: list[SnippetResult]) -> BinaryMetrics:
    """Compare checker verdicts to guide labels. Unlabeled snippets are skipped."""
    tp = tn = fp = fn = unlabeled = 0
    for r in results:
        if r.verdict not in ("bad", "good"):
            unlabeled += 1
            continue
        pred = r.has_issues
        gt = r.verdict == "bad"
        if pred and gt:
            tp += 1
        elif not pred and not gt:
            tn += 1
        elif pred and not gt:
            fp += 1
        else:
            fn += 1
    total = tp + tn + fp + fn
    accuracy = (tp + tn) / total if total else 0.0
    return BinaryMetrics(
        accuracy=accuracy,
        tp=tp, tn=tn, fp=fp, fn=fn,
        total=total,
        unlabeled=unlabeled,
    )


def f1_binary(metrics: BinaryMetrics) -> float:
    """F1 for the positive class (has_issues)."""
    p = metrics.tp / (metrics.tp + metrics.fp) if (metrics.tp + metrics.fp) > 0 else 0.0
    r = metrics.tp / (metrics.tp + metrics.fn) if (metrics.tp + metrics.fn) > 0 else 0.0
    return 2 * p * r / (p + r) if (p + r) > 0 else 0.0
