"""Core utilities and shared infrastructure.

- config: Configuration loading and validation
- constants: Coordinate bounds, file extensions, property names
- exceptions: Converter exception hierarchy
- geometry: Ring closure, degeneracy and orientation helpers
"""
