"""uv integration."""

from pyangler.uv.client import is_uv_installed, run_uv_async
from pyangler.uv.publish import build_and_publish

__all__ = ["build_and_publish", "is_uv_installed", "run_uv_async"]
