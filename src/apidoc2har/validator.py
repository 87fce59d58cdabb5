"""Structural validation is provided by an external collaborator.

Any object with a `verify(document) -> list` method can be handed to the
Converter; a non-empty list of errors stops the conversion.
"""

from typing import Protocol


class Validator(Protocol):
    def verify(self, document: dict) -> list: ...
