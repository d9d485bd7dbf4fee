"""Diagnostics package.

- diagnostics.validate_reference: optional (requires the ephemeris extra and an SPK kernel)
"""

__all__ = ["validate_reference"]
