#!/usr/bin/env python3
"""
Lichen exceptions.

All Lichen exceptions inherit from LichenError for easy catching. They are
raised while a model is being constructed; binding resolution itself never
raises for an unfireable transition.
"""


class LichenError(Exception):
    """Base exception for all Lichen errors."""


class ModelError(LichenError):
    """Error in the structure of a Petri net model."""


class UnknownElementError(ModelError, KeyError):
    """A place, transition, arc or data class id could not be resolved."""


class InvalidArcError(ModelError, ValueError):
    """An arc does not connect a place with a transition."""


class InvalidInscriptionError(ModelError, ValueError):
    """An arc inscription references data classes inconsistently."""
