"""
Core modules for the image operations engine.

- raster: RasterBuffer, the in-memory image
- operations: the closed set of operation variants
- pipeline: ordered operation sequences and their execution
- engine: public entry point
- script_parser: text scripts to pipelines
- image: conversions between Pillow/NumPy/bytes and RasterBuffer
"""
