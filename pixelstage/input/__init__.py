"""Pointer and keyboard state aggregation."""

from pixelstage.input.aggregator import Button, Buttons, InputAggregator

__all__ = ["Button", "Buttons", "InputAggregator"]
