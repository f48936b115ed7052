# -*- coding: utf-8 -*-
"""
Wizard services: step paths, step validation, financial calculations,
request assembly and derived display values.
"""
