"""Editor controller and its run states."""

from .editor import EditorController, EditorState

__all__ = ["EditorController", "EditorState"]
