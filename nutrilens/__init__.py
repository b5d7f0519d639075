# -*- coding: utf-8 -*-
"""NutriLens backend: AI food analysis and daily nutrition tracking."""
