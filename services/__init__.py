"""
Caption editor services
Caption store, WebVTT formatting and editing sessions
"""
