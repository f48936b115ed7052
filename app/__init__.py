# -*- coding: utf-8 -*-
"""
Registration Change Application Core Module
"""

from .config import Config

__all__ = ["Config"]
