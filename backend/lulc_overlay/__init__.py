"""LULC overlay service — region boundaries masked onto Sentinel land-cover rasters."""

__version__ = "0.1.0"
