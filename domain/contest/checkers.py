"""Output checkers - decide whether a solution's output is right for one test case.

A checker is called as `checker(test_input, actual, expected)` and returns a
bool. Problems name their checker in `Problem.checker`; `exact` is the default.
"""

from typing import Any, Callable, Dict

Checker = Callable[[Any, Any, Any], bool]


def results_match(actual: Any, expected: Any) -> bool:
    """Deep structural equality on JSON values. `True` never equals `1`."""
    if isinstance(actual, bool) or isinstance(expected, bool):
        return isinstance(actual, bool) and isinstance(expected, bool) and actual == expected
    if isinstance(actual, (int, float)) and isinstance(expected, (int, float)):
        return actual == expected
    if isinstance(actual, list) and isinstance(expected, list):
        return len(actual) == len(expected) and all(results_match(a, e) for a, e in zip(actual, expected))
    if isinstance(actual, dict) and isinstance(expected, dict):
        return actual.keys() == expected.keys() and all(results_match(actual[k], expected[k]) for k in expected)
    return type(actual) is type(expected) and actual == expected


def exact(test_input: Any, actual: Any, expected: Any) -> bool:
    return results_match(actual, expected)


def _is_index(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def two_sum_indices(test_input: Any, actual: Any, expected: Any) -> bool:
    """Any two distinct in-range indices whose values add up to the target, in either order.

    An empty expected output means the case has no answer; then only `[]` passes.
    """
    if not expected:
        return results_match(actual, expected)
    if not isinstance(test_input, dict) or not isinstance(actual, list) or len(actual) != 2:
        return False

    nums, target = test_input.get("nums"), test_input.get("target")
    if not isinstance(nums, list):
        return False
    i, j = actual
    if not (_is_index(i) and _is_index(j)) or i == j:
        return False
    if not (0 <= i < len(nums) and 0 <= j < len(nums)):
        return False
    return nums[i] + nums[j] == target


CHECKERS: Dict[str, Checker] = {
    "exact": exact,
    "two_sum": two_sum_indices,
}


def get_checker(name: str) -> Checker:
    try:
        return CHECKERS[name or "exact"]
    except KeyError:
        raise ValueError(f"Unknown output checker: {name}")


__all__ = ["Checker", "CHECKERS", "results_match", "exact", "two_sum_indices", "get_checker"]
