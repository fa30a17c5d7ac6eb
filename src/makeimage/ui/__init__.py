"""Gradio web UI for makeimage."""
