"""Shared guardrails for ranking parameters and personalization weights."""

from __future__ import annotations

import math
from typing import Iterable, Mapping

from linkrank.errors import InvalidParameterError
from linkrank.models import NodeId, RankConfig

MIN_DAMPING_FACTOR = 0.0
MAX_DAMPING_FACTOR = 1.0
MAX_WORKERS = 64


def _require_number(name: str, value: object) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise InvalidParameterError(name, value, "expected a number")
    number = float(value)
    if not math.isfinite(number):
        raise InvalidParameterError(name, value, "must be finite")
    return number


def _require_int(name: str, value: object) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidParameterError(name, value, "expected an integer")
    return value


def check_damping_factor(value: object) -> float:
    damping = _require_number("damping_factor", value)
    if not MIN_DAMPING_FACTOR < damping < MAX_DAMPING_FACTOR:
        raise InvalidParameterError("damping_factor", value, "must lie in the open interval (0, 1)")
    return damping


def check_max_iterations(value: object) -> int:
    iterations = _require_int("max_iterations", value)
    if iterations < 1:
        raise InvalidParameterError("max_iterations", value, "at least one iteration is required")
    return iterations


def check_convergence_threshold(value: object) -> float:
    threshold = _require_number("convergence_threshold", value)
    if threshold <= 0.0:
        raise InvalidParameterError("convergence_threshold", value, "must be positive")
    return threshold


def check_total_mass(value: object) -> float:
    mass = _require_number("total_mass", value)
    if mass <= 0.0:
        raise InvalidParameterError("total_mass", value, "must be positive")
    return mass


def check_workers(value: object) -> int:
    workers = _require_int("workers", value)
    if not 1 <= workers <= MAX_WORKERS:
        raise InvalidParameterError("workers", value, f"must lie in [1, {MAX_WORKERS}]")
    return workers


def check_flag(name: str, value: object) -> bool:
    if not isinstance(value, bool):
        raise InvalidParameterError(name, value, "expected a boolean")
    return value


def validate_config(config: RankConfig) -> RankConfig:
    check_damping_factor(config.damping_factor)
    check_max_iterations(config.max_iterations)
    check_convergence_threshold(config.convergence_threshold)
    check_total_mass(config.total_mass)
    check_workers(config.workers)
    check_flag("early_stop", config.early_stop)
    check_flag("renormalize", config.renormalize)
    check_flag("ignore_self_loops", config.ignore_self_loops)
    if config.personalization is not None and not isinstance(config.personalization, Mapping):
        raise InvalidParameterError("personalization", config.personalization, "expected a mapping")
    return config


def normalize_personalization(
    weights: Mapping[NodeId, float],
    nodes: Iterable[NodeId],
) -> dict[NodeId, float]:
    """Scale teleport weights to sum to one, keyed by every node of the graph.

    Nodes absent from ``weights`` receive zero. Keys that are not graph nodes,
    negative weights and an all-zero vector are rejected.
    """
    node_list = list(nodes)
    known = set(node_list)
    unknown = [node for node in weights if node not in known]
    if unknown:
        raise InvalidParameterError("personalization", unknown[:5], "keys are not nodes of the graph")
    total = 0.0
    for node, raw in weights.items():
        weight = _require_number(f"personalization[{node!r}]", raw)
        if weight < 0.0:
            raise InvalidParameterError(f"personalization[{node!r}]", raw, "must not be negative")
        total += weight
    if total <= 0.0:
        raise InvalidParameterError("personalization", dict(weights), "weights must have a positive sum")
    return {node: float(weights.get(node, 0.0)) / total for node in node_list}
