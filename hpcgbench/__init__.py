"""Geometry, vectors, sparse and ELL matrices, norm checks, timing, YAML reports and run parameters for the HPCG benchmark."""

__version__ = "0.8.9"