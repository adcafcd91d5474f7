"""
Capture_Ops - Capture Document Operations Package

A typed client toolkit for a remote capture-document service. This package
provides thin wrappers for folder, document, page and field operations,
service-side validation, catalog lookups and the classic capture sample
workflows, plus an in-memory backend for tests and offline examples.
"""

__version__ = "0.1.0"
__author__ = "RhythmX"
