# -*- coding: utf-8 -*-
"""Point third-party AI coding tools at your own provider account."""

__version__ = "0.1.0"
