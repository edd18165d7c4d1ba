# blackduck_report/__init__.py
"""
Black Duck security report package
"""

from .api import BlackDuckAPI, RestConfiguration

__all__ = ['BlackDuckAPI', 'RestConfiguration']
