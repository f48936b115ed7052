# -*- coding: utf-8 -*-
"""Translation catalogs."""
