"""
Stock Photography Metadata Generation Package

This package sends local images to an AI service, cleans and scores the
returned stock metadata (title, description, keywords) and writes it back
into the image files as embedded metadata tags.
"""

__version__ = "1.0.0"
