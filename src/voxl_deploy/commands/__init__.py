"""Command handlers, one function per CLI token.

Every handler takes a Toolkit and returns None; failures propagate as
OrchestratorError subclasses.
"""
