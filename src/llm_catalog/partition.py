"""
partition.py — Split raw records into included / ignored and derive metadata.

Pure functions over already-decoded records; no I/O happens here.
"""

from __future__ import annotations

import logging
from typing import Callable, Dict, Iterable, List, Sequence, Tuple, TypeVar

from llm_catalog.models import IgnoreReason, InputModality, ListModelsResult, ModelMetadata

logger = logging.getLogger(__name__)

T = TypeVar("T")


def partition(
    items: Sequence[T],
    classify: Callable[[T], Sequence[IgnoreReason]],
    extract_id: Callable[[T], str],
) -> Tuple[List[str], Dict[str, List[IgnoreReason]]]:
    """Return (included ids in input order, id -> reasons for the rest)."""
    included: List[str] = []
    ignored: Dict[str, List[IgnoreReason]] = {}
    for item in items:
        mid = extract_id(item)
        reasons = list(classify(item))
        if reasons:
            ignored[mid] = reasons
            logger.debug("Ignoring %s: %s", mid, ", ".join(r.value for r in reasons))
        else:
            included.append(mid)
    return included, ignored


def extract_metadata_map(
    items: Sequence[T],
    extract_id: Callable[[T], str],
    extract_modalities: Callable[[T], Iterable[InputModality]],
) -> Dict[str, ModelMetadata]:
    """One metadata entry per record, included or not."""
    return {
        extract_id(item): ModelMetadata.from_modalities(extract_modalities(item))
        for item in items
    }


def build_result(
    items: Sequence[T],
    classify: Callable[[T], Sequence[IgnoreReason]],
    extract_id: Callable[[T], str],
    extract_modalities: Callable[[T], Iterable[InputModality]],
) -> ListModelsResult:
    included, ignored = partition(items, classify, extract_id)
    return ListModelsResult(
        included=included,
        ignored=ignored,
        metadata=extract_metadata_map(items, extract_id, extract_modalities),
    )
