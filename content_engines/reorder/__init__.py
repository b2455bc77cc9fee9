"""Reorder engine."""

from content_engines.reorder.engine import is_dense, move_element, renumber, reorder_by_ids, same_arrangement

__all__ = ["is_dense", "move_element", "renumber", "reorder_by_ids", "same_arrangement"]
