#!/usr/bin/env python3
"""
Sleep Metrics Engine.

Derives sleep-quality metrics from pre-classified sleep stage intervals and
auxiliary physiological samples.
"""

__version__ = "0.1.0"
__author__ = "Sleep Research Team"
__description__ = "Deterministic sleep metrics derivation from stage intervals and sensor samples"
