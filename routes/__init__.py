"""
HTTP routes for the caption editor
"""
