"""FIR Boundary Converter.

Converts Flight Information Region boundaries between GeoJSON and the
line-oriented ``.dat`` format used by radar clients, validates boundary
data for structural defects and repairs them.
"""

__version__ = "0.1.0"
