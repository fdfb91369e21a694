"""Exceptions raised at the language-model client boundary."""
from __future__ import annotations


class OrchestrationError(Exception):
    """Base class for failures while producing an agent reply."""


class MissingCredentialError(OrchestrationError):
    """No credential was configured for the requested model."""

    def __init__(self, model_name: str) -> None:
        super().__init__(f"No credential configured for model '{model_name}'")
        self.model_name = model_name


class MalformedResponseError(OrchestrationError):
    """The backend answered with a payload missing the expected fields."""
