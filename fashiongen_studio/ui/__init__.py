"""Gradio user interface"""

from .app import create_app, launch_app

__all__ = ["create_app", "launch_app"]
