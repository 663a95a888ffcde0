from __future__ import annotations

from ..models.processing_result import BatchResult

"""SUMMARY line rendering.

Format:
SUMMARY documents={n} recognized={r} students={s} matched={m} not_found={f}
writes={w} elapsed_sec={e}
"""


def _format_seconds(seconds: float) -> str:
    if seconds == 0:
        return "0"
    if seconds == int(seconds):
        return str(int(seconds))
    if seconds < 0.01:
        # avoid scientific notation for very small values
        return f"{seconds:.6f}".rstrip("0").rstrip(".")
    return f"{seconds:.2f}"


def render_summary_line(result: BatchResult) -> str:
    """Render the SUMMARY line for a batch.

    Examples:
        >>> from datetime import datetime, timezone
        >>> t = datetime(2024, 1, 1, tzinfo=timezone.utc)
        >>> result = BatchResult(
        ...     documents=2, recognized_documents=2, total_students=30,
        ...     total_matched=28, total_not_found=2, total_writes=27,
        ...     start_time=t, end_time=t, elapsed_seconds=1.5,
        ... )
        >>> render_summary_line(result)
        'SUMMARY documents=2 recognized=2 students=30 matched=28 not_found=2 writes=27 elapsed_sec=1.50'
    """
    return (
        f"SUMMARY documents={result.documents} "
        f"recognized={result.recognized_documents} "
        f"students={result.total_students} "
        f"matched={result.total_matched} "
        f"not_found={result.total_not_found} "
        f"writes={result.total_writes} "
        f"elapsed_sec={_format_seconds(result.elapsed_seconds)}"
    )
