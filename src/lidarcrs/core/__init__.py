"""
Core functionality: CRS extraction, errors, configuration and logging.
"""
