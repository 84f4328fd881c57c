"""Quadtree edge analysis for camera-guided maze navigation."""
