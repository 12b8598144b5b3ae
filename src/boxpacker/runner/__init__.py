"""Experiment runner and rectangle datasets."""

from .dataset import generate_rectangles, load_rectangles
from .experiment import ExperimentRunner, main

__all__ = ["ExperimentRunner", "generate_rectangles", "load_rectangles", "main"]
