"""CLI module for evaluating submissions."""

from skillmatch.cli.runner import load_submission_file, run_evaluate, run_validate

__all__ = ["load_submission_file", "run_evaluate", "run_validate"]
