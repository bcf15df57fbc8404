# stc_utils/__init__.py
"""
Text, date, logging and dataset helpers.
"""
