"""Module containing the schemas for the take package."""

from take.schemas.take import TakeOptions, TakeResult

__all__ = ["TakeOptions", "TakeResult"]
