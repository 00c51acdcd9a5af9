"""Splitting of element ranges into parallel shards."""

from __future__ import annotations

import os
from typing import List, Optional, Sequence, Tuple

import numpy as np

# Numerical experiments suggest about this many elements per shard.
ELEMENTS_PER_SHARD = 185


class PartitionMap:
    """Divides ``max_index`` items into ``parallel_degree`` contiguous buckets.

    Bucket sizes differ by at most one item; the extra items go to the
    first buckets.
    """

    def __init__(self, parallel_degree: int, max_index: int):
        if parallel_degree < 1:
            raise ValueError(f"parallel degree must be at least 1, got {parallel_degree}")
        if max_index < 0:
            raise ValueError(f"max index must not be negative, got {max_index}")
        self.parallel_degree = parallel_degree
        self.max_index = max_index
        self.partitions: List[Tuple[int, int]] = [self.split(n) for n in range(parallel_degree)]

    def __repr__(self) -> str:
        return f"PartitionMap(parallel_degree={self.parallel_degree}, max_index={self.max_index})"

    def split(self, thread_num: int) -> Tuple[int, int]:
        """Return the half-open range ``(start, end)`` of bucket ``thread_num``."""
        npart, remainder = divmod(self.max_index, self.parallel_degree)
        start_add, end_add = 0, 0
        if remainder:
            if thread_num + 1 > remainder:
                start_add, end_add = remainder, 0
            else:
                start_add, end_add = thread_num, 1
        start = thread_num * npart + start_add
        return start, start + npart + end_add

    def _bucket_with_try_count(self, index: int) -> Tuple[int, int, int, int]:
        if not 0 <= index < self.max_index:
            raise IndexError(f"index {index} outside partitioned range [0, {self.max_index})")
        bucket_num = int(self.parallel_degree * index / self.max_index)
        tries = 0
        while True:
            lo, hi = self.partitions[bucket_num]
            if lo <= index < hi:
                return tries, bucket_num, lo, hi
            bucket_num += -1 if lo > index else 1
            if bucket_num < 0 or bucket_num == self.parallel_degree:
                raise IndexError(f"index {index} not found in any bucket")
            tries += 1

    def bucket(self, index: int) -> Tuple[int, int, int]:
        """Return ``(bucket_num, start, end)`` of the bucket holding ``index``."""
        _, bucket_num, lo, hi = self._bucket_with_try_count(index)
        return bucket_num, lo, hi

    def bucket_range(self, bucket_num: int) -> Tuple[int, int]:
        return self.partitions[bucket_num]

    def bucket_dimension(self, bucket_num: Optional[int]) -> int:
        """Number of items in a bucket; ``None`` means the whole unsharded range."""
        if bucket_num is None:
            return self.max_index
        lo, hi = self.partitions[bucket_num]
        return hi - lo

    def local_k(self, global_k: int) -> Tuple[int, int, int]:
        """Return ``(local index, bucket size, bucket number)`` for a global index."""
        bucket_num, lo, hi = self.bucket(global_k)
        return global_k - lo, hi - lo, bucket_num

    def global_k(self, k_local: int, bucket_num: Optional[int]) -> int:
        """Map a bucket-local index back to the global index."""
        if bucket_num is None:
            return k_local
        return self.partitions[bucket_num][0] + k_local


def parallel_degree_for(proc_limit: int, kmax: int, cpu_count: Optional[int] = None) -> int:
    """Choose the number of shards for ``kmax`` elements."""
    if proc_limit:
        degree = proc_limit
    else:
        if cpu_count is None:
            cpu_count = os.cpu_count() or 1
        degree = max(cpu_count, kmax // ELEMENTS_PER_SHARD)
    if degree > kmax:
        degree = 1
    return degree


def _check_width(partitions: PartitionMap, width: int) -> None:
    if width != partitions.max_index:
        raise ValueError(f"matrix spans {width} elements, partition map covers {partitions.max_index}")


def shard_by_k(partitions: PartitionMap, matrix) -> List[np.ndarray]:
    """Split a (points x K) matrix into per-bucket column blocks."""
    matrix = np.asarray(matrix, dtype=float)
    if matrix.ndim != 2:
        raise ValueError("matrix must be two dimensional")
    _check_width(partitions, matrix.shape[1])
    return [matrix[:, lo:hi].copy() for lo, hi in partitions.partitions]


def shard_by_k_transpose(partitions: PartitionMap, matrix) -> List[np.ndarray]:
    """Split a (K x items) matrix into per-bucket row blocks."""
    matrix = np.asarray(matrix, dtype=float)
    if matrix.ndim != 2:
        raise ValueError("matrix must be two dimensional")
    _check_width(partitions, matrix.shape[0])
    return [matrix[lo:hi, :].copy() for lo, hi in partitions.partitions]


def recombine_shards_k(partitions: PartitionMap, shards: Sequence) -> np.ndarray:
    """Join per-bucket column blocks back into one (points x K) matrix."""
    if len(shards) != partitions.parallel_degree:
        raise ValueError(f"expected {partitions.parallel_degree} shards, got {len(shards)}")
    blocks = [np.asarray(s, dtype=float) for s in shards]
    rows = blocks[0].shape[0]
    for num, block in enumerate(blocks):
        if block.ndim != 2 or block.shape[0] != rows:
            raise ValueError(f"shard {num} has shape {block.shape}, expected {rows} rows")
        if block.shape[1] != partitions.bucket_dimension(num):
            raise ValueError(
                f"shard {num} has {block.shape[1]} columns, expected {partitions.bucket_dimension(num)}"
            )
    return np.hstack(blocks)