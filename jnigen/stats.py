"""Pure functions for computing statistics over parsed method lists."""

from __future__ import annotations

from collections import Counter

from jnigen.ir import Method
from jnigen.policy import PolicyTables


def count_classifications(methods: list[Method], policy: PolicyTables) -> dict[str, int]:
    """Return how many methods fall into each generation category.

    Args:
        methods: Parsed methods.
        policy: Suppression policy deciding emission.

    Returns:
        A dict with the keys ``total``, ``unsupported``, ``array_region``,
        ``value_array_call``, ``c_emitted`` and ``host_emitted``, in that order.
    """
    counts: Counter[str] = Counter()
    for method in methods:
        if method.is_unsupported:
            counts["unsupported"] += 1
            continue
        counts["array_region"] += method.is_array_region
        counts["value_array_call"] += method.is_value_array_call
        counts["c_emitted"] += policy.emits_c(method.name)
        counts["host_emitted"] += policy.emits_host(method.name)
    keys = ("unsupported", "array_region", "value_array_call", "c_emitted", "host_emitted")
    return {"total": len(methods), **{k: counts[k] for k in keys}}
