"""
contentshape - display drivers and shape factory for content parts.

Example:
    >>> from contentshape.display import part_alternates
    >>> part_alternates("BodyPart", "BlogPost", "Summary", "BodyPart")
    ['BodyPart_Summary', 'BodyPart__BlogPost', 'BodyPart_Summary__BlogPost']
"""

__version__ = "0.1.0"

__all__ = ["__version__"]
