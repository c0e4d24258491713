"""measure

Measurement collaborator: bundle, minify and compress a file set and report
byte counts.

This package deliberately knows nothing about Size Limit configuration. The
``budget`` package builds :class:`MeasureOptions` and consumes
:class:`SizeReport`; any object satisfying :class:`Measurer` can stand in for
the default :class:`BundlerMeasurer`.
"""

from __future__ import annotations

from measure.bundler import BundlerMeasurer
from measure.types import MeasureError, MeasureOptions, Measurer, SizeReport

__all__ = [
    "BundlerMeasurer",
    "MeasureError",
    "MeasureOptions",
    "Measurer",
    "SizeReport",
]
