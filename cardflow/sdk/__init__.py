"""SDK for calling a cardflow API server."""

from cardflow.sdk.client import CardflowClient

__all__ = ["CardflowClient"]
