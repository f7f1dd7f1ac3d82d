"""Confidence Scoring Stage.

The conversion score is the share of the document's whole tabular row
volume that became instruction items. The denominator counts rows of every
table, not only classified ones, so documents padded with unrelated tables
score lower.
"""

from wiextract.models import Document


def compute_score(item_count: int, total_rows: int) -> int:
    """Percentage of rows extracted as items.

    Args:
        item_count: Number of extracted instruction items.
        total_rows: Row count across all tables of the document.

    Returns:
        Non-negative integer percentage, 0 when there are no rows.
    """
    if total_rows <= 0 or item_count <= 0:
        return 0
    return int(round(100.0 * item_count / total_rows))


def score_document(document: Document, item_count: int) -> int:
    """Score a document given its extracted item count."""
    return compute_score(item_count, document.total_row_count)
