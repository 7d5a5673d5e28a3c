"""
GPA reduction engine.

Sums quality points and credit hours with a divide-and-conquer reduction:
a range is split in halves until it is shorter than the threshold, each
leaf range is summed on a worker thread, and the halves are added back
together once both are done.
"""

import logging
from concurrent.futures import Executor, Future, ThreadPoolExecutor
from decimal import Decimal, ROUND_HALF_UP
from typing import Dict, Mapping, Optional, Sequence, Tuple, Union

from .enums import GPAStatus

logger = logging.getLogger(__name__)

DEFAULT_THRESHOLD = 3

LETTER_GRADES: Dict[str, float] = {
    "A": 4.0,
    "B+": 3.5,
    "B": 3.0,
    "C+": 2.5,
    "C": 2.0,
    "D+": 1.5,
    "D": 1.0,
    "F": 0.0,
}


def convert_grade(letter_grade: str) -> float:
    """Numeric value of a letter grade; unknown letters count as 0.0."""
    value = LETTER_GRADES.get(letter_grade)
    if value is None:
        logger.warning("Unrecognized letter grade %r recorded as 0.0", letter_grade)
        return 0.0
    return value


def round_half_up(value: float, places: int = 2) -> float:
    quantum = Decimal(1).scaleb(-places)
    return float(Decimal(repr(value)).quantize(quantum, rounding=ROUND_HALF_UP))


def _sum_range(values: Sequence[float], low: int, high: int) -> float:
    total = 0.0
    for i in range(low, high):
        total += values[i]
    return total


_Node = Union[Future, Tuple['_Node', '_Node']]


def _fork(executor: Executor, values: Sequence[float], low: int, high: int, threshold: int) -> _Node:
    if high - low < threshold:
        return executor.submit(_sum_range, values, low, high)
    mid = (low + high) // 2
    return (_fork(executor, values, low, mid, threshold),
            _fork(executor, values, mid, high, threshold))


def _join(node: _Node) -> float:
    if isinstance(node, tuple):
        left, right = node
        return _join(right) + _join(left)
    return node.result()


def parallel_sum(values: Sequence[float], threshold: int = DEFAULT_THRESHOLD,
                 executor: Optional[Executor] = None) -> float:
    """Sum ``values`` with the divide-and-conquer reduction.

    Leaf tasks never wait on other tasks, so a bounded pool cannot deadlock.
    Without an ``executor`` a pool is created and shut down for this call.
    """
    if threshold < 1:
        raise ValueError("threshold must be at least 1")
    values = tuple(values)
    if not values:
        return 0.0
    if executor is not None:
        return _join(_fork(executor, values, 0, len(values), threshold))
    with ThreadPoolExecutor(thread_name_prefix="gpa-sum") as pool:
        return _join(_fork(pool, values, 0, len(values), threshold))


def classify_gpa(gpa: float) -> GPAStatus:
    """Map a GPA to its status; thresholds are checked top-down."""
    status = GPAStatus.NORMAL
    if gpa >= 3.90:
        status = GPAStatus.HIGHEST_HONORS
    elif gpa >= 3.50:
        status = GPAStatus.DEANS_LIST
    elif gpa >= 3.00:
        status = GPAStatus.HONORS
    elif gpa < 3.00:
        status = GPAStatus.NORMAL
    elif gpa < 1.75:
        # Unreachable: every GPA below 1.75 already matched the branch above.
        status = GPAStatus.PROBATION
    return status


class GPACalculator:
    """Credit-weighted GPA over a completed-course map."""
    
    def __init__(self, threshold: int = DEFAULT_THRESHOLD, executor: Optional[Executor] = None):
        self._threshold = threshold
        self._executor = executor
    
    @property
    def threshold(self) -> int:
        return self._threshold
    
    def calculate(self, completed_courses_grades: Mapping['Course', float]) -> float:
        """GPA rounded to two decimals; 0.0 when no credit hours were completed."""
        snapshot = list(completed_courses_grades.items())
        points = [grade * course.credit_hours for course, grade in snapshot]
        credits = [float(course.credit_hours) for course, _ in snapshot]
        
        total_points = parallel_sum(points, self._threshold, self._executor)
        total_credits = parallel_sum(credits, self._threshold, self._executor)
        if total_credits == 0:
            return 0.0
        return round_half_up(total_points / total_credits, 2)
