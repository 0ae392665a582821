"""
Shared constants, exceptions, and helper utilities.

Centralizes canvas geometry, physics tuning, landmark indices, the error
hierarchy, and small stateless helpers used across the roboarm_sim package.
"""
