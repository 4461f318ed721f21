"""Fabroku CLI commands"""
