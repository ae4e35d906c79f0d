#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Version information for Tubelist: list a YouTube channel's uploads, filtered into shorts or long videos.
"""

__version__ = "1.0.0"
__author__ = "Tubelist contributors"
