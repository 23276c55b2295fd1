"""Controllers module - Application-level controllers for coordinating business logic."""

from controllers.app_controller import AppController

__all__ = ["AppController"]
