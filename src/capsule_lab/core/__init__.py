"""Core primitives shared by the analytics and build-search layers."""

from capsule_lab.core.rng import BuildRNG

__all__ = ["BuildRNG"]
