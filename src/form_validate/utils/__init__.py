"""Utility helpers for form-validate."""

from form_validate.utils.text import pluralize, start_case

__all__ = ["pluralize", "start_case"]
