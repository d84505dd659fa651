"""
PDF analysis subsystem: upload form, taxonomy API and content filtering API.
"""

from .factory import create_pdf_analysis_module

__all__ = ["create_pdf_analysis_module"]
