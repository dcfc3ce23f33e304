"""
Adapters for point-cloud reading libraries.
"""
