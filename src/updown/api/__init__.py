"""HTTP surface for the resolver."""

from updown.api.app import create_app

__all__ = ["create_app"]
