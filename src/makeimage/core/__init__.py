"""
Core modules for makeimage.

This package contains the core logic for:
- Settings (configuration reader)
- Image generation requests
- Dual-request coordination
- Prompt vocabulary
"""
