"""Field validation engine for card elements."""

from content_engines.element_validation.service import is_valid, prepare_payload, validate

__all__ = ["is_valid", "prepare_payload", "validate"]
