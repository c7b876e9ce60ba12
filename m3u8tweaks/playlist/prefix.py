"""Common root detection for playlist first entries.

The resolver looks for the longest prefix shared by every candidate path. When
candidates already disagree on their first character, the ones that differ
from the baseline (the first remaining candidate) are set aside as excluded
and the search repeats on the survivors. The baseline choice makes the result
order-sensitive: with three or more groups at position 0 the first
candidate's group always wins.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import List, Sequence, Set, Tuple
import logging

from ..errors import PrefixNotFound

logger = logging.getLogger(__name__)

STREAM_SCHEMES = ("http://", "https://")


def is_stream_entry(path: str) -> bool:
    """Return True for remote HTTP(S) stream entries."""
    return path.startswith(STREAM_SCHEMES)


def _shared_length(candidates: Sequence[str], indices: Sequence[int]) -> int:
    baseline = candidates[indices[0]]
    i = 0
    while i < len(baseline):
        ch = baseline[i]
        if any(i >= len(candidates[j]) or candidates[j][i] != ch for j in indices):
            break
        i += 1
    return i


def resolve_prefix(candidates: Sequence[str]) -> Tuple[str, Set[int]]:
    """Find the longest common prefix, excluding candidates that diverge early.

    Args:
        candidates: Candidate paths, in a stable order (the first one is the
            initial baseline).

    Returns:
        (prefix, excluded) where excluded holds indices into ``candidates``.
        An empty prefix means resolution failed.

    Example:
        >>> resolve_prefix(["C:\\\\Lib\\\\x.mp3", "D:\\\\y.mp3", "C:\\\\Lib\\\\z.mp3"])
        ('C:\\\\Lib\\\\', {1})
    """
    excluded: Set[int] = set()
    remaining: List[int] = list(range(len(candidates)))

    while True:
        if not remaining:
            return "", excluded
        baseline = candidates[remaining[0]]
        if len(remaining) == 1 or not baseline:
            return baseline, excluded

        shared = _shared_length(candidates, remaining)
        if shared > 0:
            return baseline[:shared], excluded

        survivors = []
        for idx in remaining:
            if candidates[idx][:1] == baseline[0]:
                survivors.append(idx)
            else:
                excluded.add(idx)
        logger.debug(f"Prefix diverged at first character; excluding {len(remaining) - len(survivors)} candidate(s)")
        remaining = survivors


@dataclass
class RootResolution:
    """Outcome of establishing the acting root for a run."""
    root: str
    excluded: Set[int] = field(default_factory=set)
    streams: Set[int] = field(default_factory=set)
    detected: bool = True


def _local_indices(candidates: Sequence[str]) -> Tuple[List[int], Set[int]]:
    streams = {i for i, c in enumerate(candidates) if is_stream_entry(c)}
    local = [i for i, c in enumerate(candidates) if c and i not in streams]
    return local, streams


def detect_root(candidates: Sequence[str]) -> RootResolution:
    """Auto-detect the root over all local (non-stream, non-empty) candidates.

    Raises:
        PrefixNotFound: when no non-empty prefix remains.
    """
    local, streams = _local_indices(candidates)
    if streams:
        logger.info(f"Found {len(streams)} playlist(s) with an http stream entry, ignoring these for common prefix.")

    prefix, local_excluded = resolve_prefix([candidates[i] for i in local])
    if not prefix:
        logger.debug(f"Candidates without common prefix: {list(candidates)}")
        raise PrefixNotFound("Could not find a common prefix!")

    excluded = {local[i] for i in local_excluded}
    return RootResolution(root=prefix, excluded=excluded, streams=streams, detected=True)


def exclusions_for_root(candidates: Sequence[str], root: str) -> RootResolution:
    """Apply an operator-supplied root and exclude local candidates not under it.

    Stream entries are never excluded and never count as a match.

    Raises:
        PrefixNotFound: when the root is empty or no local candidate starts with it.
    """
    if not root:
        raise PrefixNotFound("Given root is empty.")
    local, streams = _local_indices(candidates)
    excluded = {i for i in local if not candidates[i].startswith(root)}
    if len(excluded) == len(local):
        logger.debug(f"Candidates checked against root: {list(candidates)}")
        raise PrefixNotFound(f"Common prefix '{root}' is not available")
    return RootResolution(root=root, excluded=excluded, streams=streams, detected=False)


__all__ = [
    "resolve_prefix",
    "is_stream_entry",
    "detect_root",
    "exclusions_for_root",
    "RootResolution",
    "STREAM_SCHEMES",
]
