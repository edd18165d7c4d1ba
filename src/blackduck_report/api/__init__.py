# blackduck_report/api/__init__.py

from .blackduck_api import BlackDuckAPI
from .helpers.api_base import RestConfiguration

__all__ = ['BlackDuckAPI', 'RestConfiguration']
