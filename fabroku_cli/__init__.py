"""Fabroku CLI - deploy tool for the Fabroku platform"""

__version__ = "0.1.4"
