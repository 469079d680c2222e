from .core import (
    ConstructionInvariantViolation,
    Instance,
    InvalidInstance,
    InvalidTour,
    TSPError,
    euclidean_cost_matrix,
    instance_from_matrix,
    instance_from_points,
    tour_length,
)
from .io import read_instance, read_points, write_points
from .solution import emit_solution, format_tour, validate_tour
from .constructor import build_initial_tour
from .two_opt import TwoOptConfig, two_opt_long_edge_first, two_opt_to_fixpoint
from .orchestrator import HeuristicResult, solve, solve_file
from .generator import GeneratorConfig, generate_dataset, generate_points

__all__ = [
    "TSPError",
    "InvalidInstance",
    "InvalidTour",
    "ConstructionInvariantViolation",
    "Instance",
    "euclidean_cost_matrix",
    "instance_from_matrix",
    "instance_from_points",
    "tour_length",
    "read_instance",
    "read_points",
    "write_points",
    "validate_tour",
    "format_tour",
    "emit_solution",
    "build_initial_tour",
    "TwoOptConfig",
    "two_opt_long_edge_first",
    "two_opt_to_fixpoint",
    "HeuristicResult",
    "solve",
    "solve_file",
    "GeneratorConfig",
    "generate_points",
    "generate_dataset",
]
